import random
from typing import Iterator, List, Optional, Tuple

from maze_runner.core.cell import Cell, CellType
from maze_runner.algo.base import Generator


class SolvableGenerator(Generator):
    """
    Recursive backtracker that carves corridors out of a solid grid.

    A neighbor is opened only if the three cells forming the wall in front of
    the mover are still walls. The cell reached at the deepest recursion level
    becomes the goal, so it is always connected to the start.
    """

    # up, down, left, right as (d_row, d_col)
    DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.max_depth = 0
        self.goal_location: Optional[Tuple[int, int]] = None

    def run(self) -> Iterator[Cell]:
        rng = random.Random(self.seed)
        maze = self.maze

        # At least 2 cells away from every border
        start_row = rng.randrange(2, maze.rows - 2)
        start_col = rng.randrange(2, maze.columns - 2)
        maze.set_type(start_row, start_col, CellType.START)

        # Explicit call stack, 100x100 grids go far past the interpreter's recursion limit.
        # Frame: [row, col, depth, shuffled directions, next direction index]
        stack: List[list] = []
        yield self._open(stack, start_row, start_col, 0, rng)

        while stack:
            frame = stack[-1]
            row, col, depth, order, i = frame

            # Base case: border cells never recurse further
            if i >= len(order) or maze.is_border(row, col):
                stack.pop()
                continue

            frame[4] += 1
            d_row, d_col = order[i]
            if self._wall_in_front(row, col, d_row, d_col):
                yield self._open(stack, row + d_row, col + d_col, depth, rng)

        goal_row, goal_col = self.goal_location
        yield maze.set_type(goal_row, goal_col, CellType.GOAL)

    def _open(self, stack: list, row: int, col: int, depth: int, rng: random.Random) -> Cell:
        depth += 1
        if depth > self.max_depth:
            self.max_depth = depth
            self.goal_location = (row, col)

        cell = self.maze.get_cell(row, col)
        if cell.type is not CellType.START:
            cell = self.maze.set_type(row, col, CellType.OPEN)
        self.step_count += 1

        order = list(self.DIRECTIONS)
        rng.shuffle(order)
        stack.append([row, col, depth, order, 0])
        return cell

    def _wall_in_front(self, row: int, col: int, d_row: int, d_col: int) -> bool:
        cells = self.maze.cells
        if d_row:
            r = row + d_row
            front = (cells[r][col - 1], cells[r][col], cells[r][col + 1])
        else:
            c = col + d_col
            front = (cells[row - 1][c], cells[row][c], cells[row + 1][c])
        return all(cell.type is CellType.WALL for cell in front)
