import random
from typing import Iterator

from maze_runner.core.cell import Cell, CellType
from maze_runner.algo.base import Generator


class RandomGenerator(Generator):
    """
    Every interior cell independently becomes a wall with probability
    config.wall_probability. Border cells stay walls. No path is guaranteed.
    """

    def run(self) -> Iterator[Cell]:
        rng = random.Random(self.seed)
        maze = self.maze
        p = self.config.wall_probability

        for r in range(maze.rows):
            for c in range(maze.columns):
                if maze.is_border(r, c):
                    cell = maze.set_type(r, c, CellType.WALL)
                elif rng.random() < p:
                    cell = maze.set_type(r, c, CellType.WALL)
                else:
                    cell = maze.set_type(r, c, CellType.OPEN)
                self.step_count += 1
                yield cell

        start_row = rng.randint(1, maze.rows - 2)
        start_col = rng.randint(1, maze.columns - 2)
        yield maze.set_type(start_row, start_col, CellType.START)

        # Only the row is re-rolled; the goal may share the start's column
        goal_row = rng.randint(1, maze.rows - 2)
        while goal_row == start_row:
            goal_row = rng.randint(1, maze.rows - 2)
        goal_col = rng.randint(1, maze.columns - 2)
        yield maze.set_type(goal_row, goal_col, CellType.GOAL)
