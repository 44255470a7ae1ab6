from enum import Enum
from typing import Tuple

from maze_runner.core.errors import ParseError


class CellType(Enum):
    WALL = "#"
    OPEN = "."
    START = "S"
    GOAL = "G"

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_symbol(cls, char: str, line: int = None) -> "CellType":
        for cell_type in cls:
            if cell_type.value == char:
                return cell_type
        raise ParseError(f"unknown square type specified: {char!r}", line)


class CellStatus(Enum):
    UNEXPLORED = 0
    EXPLORED = 1


class Cell:
    """
    One square of the maze.
    Coordinates are (column, row), i.e. (x, y), and never change.
    visit_order is 0 until a solver explores the cell.
    """
    __slots__ = ('type', 'status', 'coordinates', 'visit_order')

    def __init__(self, cell_type: CellType, coordinates: Tuple[int, int]):
        self.type = cell_type
        self.coordinates = coordinates
        self.status = CellStatus.UNEXPLORED
        self.visit_order = 0

    @property
    def column(self) -> int:
        return self.coordinates[0]

    @property
    def row(self) -> int:
        return self.coordinates[1]

    @property
    def symbol(self) -> str:
        return self.type.symbol

    def is_wall(self) -> bool:
        return self.type is CellType.WALL

    def is_explored(self) -> bool:
        return self.status is CellStatus.EXPLORED

    def reset(self):
        self.status = CellStatus.UNEXPLORED
        self.visit_order = 0

    def __str__(self):
        return self.symbol

    def __repr__(self):
        return f"Cell({self.type.name}, {self.coordinates}, {self.status.name}, order={self.visit_order})"
