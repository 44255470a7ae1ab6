from typing import Iterator, List, Optional

from maze_runner.core.cell import Cell, CellType


class Maze:
    """
    Rectangular grid of cells indexed by (row, column).

    A background generator is the only writer while it runs; renderers may read
    concurrently and can observe a half-carved grid. Solvers must wait until
    generation has signalled completion.
    """

    # Neighbor check order used by the solvers: up, down, left, right
    DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))

    __slots__ = ('rows', 'columns', 'cells', 'start_cell', 'goal_cell')

    def __init__(self, rows: int, columns: int):
        if rows <= 0 or columns <= 0:
            raise ValueError(f"Maze dimensions must be positive, got {rows}x{columns}")
        self.rows = rows
        self.columns = columns
        # Everything starts as a wall; generators carve from there
        self.cells: List[List[Cell]] = [
            [Cell(CellType.WALL, (c, r)) for c in range(columns)]
            for r in range(rows)
        ]
        self.start_cell: Optional[Cell] = None
        self.goal_cell: Optional[Cell] = None

    def in_bounds(self, row: int, column: int) -> bool:
        return 0 <= row < self.rows and 0 <= column < self.columns

    def get_cell(self, row: int, column: int) -> Cell:
        if self.in_bounds(row, column):
            return self.cells[row][column]
        raise IndexError(f"Cell (row={row}, column={column}) out of bounds")

    def is_border(self, row: int, column: int) -> bool:
        return row == 0 or column == 0 or row == self.rows - 1 or column == self.columns - 1

    def set_type(self, row: int, column: int, cell_type: CellType) -> Cell:
        """
        Changes the type of the cell at (row, column) and keeps the start/goal
        back-references current. Solver marks on the cell are reset.
        """
        cell = self.get_cell(row, column)
        if cell is self.start_cell and cell_type is not CellType.START:
            self.start_cell = None
        if cell is self.goal_cell and cell_type is not CellType.GOAL:
            self.goal_cell = None

        cell.type = cell_type
        cell.reset()

        if cell_type is CellType.START:
            self.start_cell = cell
        elif cell_type is CellType.GOAL:
            self.goal_cell = cell
        return cell

    def neighbors(self, cell: Cell) -> Iterator[Cell]:
        """Yields in-bounds neighbors of `cell` in up, down, left, right order. Walls included."""
        for dr, dc in self.DIRECTIONS:
            r, c = cell.row + dr, cell.column + dc
            if 0 <= r < self.rows and 0 <= c < self.columns:
                yield self.cells[r][c]

    def clear(self):
        """Forget every solver mark (status and visit order). Types are untouched."""
        for cell in self:
            cell.reset()

    def count(self, cell_type: CellType) -> int:
        return sum(1 for cell in self if cell.type is cell_type)

    def explored_count(self) -> int:
        return sum(1 for cell in self if cell.is_explored())

    def to_lines(self) -> List[str]:
        return ["".join(cell.symbol for cell in row) for row in self.cells]

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def __str__(self):
        return "".join(line + "\n" for line in self.to_lines())

    def __repr__(self):
        return f"Maze({self.rows}x{self.columns}, start={self.start_cell and self.start_cell.coordinates}, " \
               f"goal={self.goal_cell and self.goal_cell.coordinates})"
