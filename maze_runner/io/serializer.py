import logging
from typing import List

from maze_runner.core.cell import CellType
from maze_runner.core.errors import ParseError
from maze_runner.core.maze import Maze

logger = logging.getLogger(__name__)


class MazeSerializer:
    """
    Plain text maze format:
    - header line: "<columns> <rows>"
    - then one line per row, one character per cell: '#' wall, '.' open, 'S' start, 'G' goal
    Solver marks (status, visit order) are not stored.
    """

    @staticmethod
    def dumps(maze: Maze) -> str:
        return f"{maze.columns} {maze.rows}\n" + str(maze)

    @staticmethod
    def loads(text: str) -> Maze:
        lines = text.splitlines()
        if not lines or not lines[0].strip():
            raise ParseError("missing header, should start with columns and rows specification", 1)

        tokens = lines[0].split()
        if len(tokens) != 2:
            raise ParseError(
                f"should start with columns and rows specification, got {len(tokens)} tokens", 1)
        columns = MazeSerializer._parse_dimension(tokens[0], "columns")
        rows = MazeSerializer._parse_dimension(tokens[1], "rows")

        body: List[str] = [line.strip() for line in lines[1:]]
        # Blank lines after the last row are tolerated
        while body and not body[-1]:
            body.pop()
        if len(body) != rows:
            raise ParseError(f"header declares {rows} rows but {len(body)} rows were found")

        # Row lengths are checked before any cell is allocated
        for r, line in enumerate(body):
            if len(line) != columns:
                raise ParseError(
                    f"header declares {columns} columns but row has {len(line)} characters", r + 2)

        # Build into a fresh maze; nothing is handed out unless every check passes
        maze = Maze(rows, columns)
        for r, line in enumerate(body):
            line_no = r + 2
            for c, char in enumerate(line):
                cell_type = CellType.from_symbol(char, line_no)
                if cell_type is CellType.START and maze.start_cell is not None:
                    raise ParseError("more than one starting location specified", line_no)
                if cell_type is CellType.GOAL and maze.goal_cell is not None:
                    raise ParseError("more than one goal location specified", line_no)
                maze.set_type(r, c, cell_type)

        if maze.start_cell is None:
            raise ParseError("no starting location specified")
        if maze.goal_cell is None:
            raise ParseError("no goal location specified")
        return maze

    @staticmethod
    def _parse_dimension(token: str, name: str) -> int:
        # int() alone would also accept signs and underscores
        if not (token.isascii() and token.isdigit()):
            raise ParseError(f"expecting number of {name}, got {token!r}", 1)
        value = int(token)
        if value <= 0:
            raise ParseError(f"number of {name} must be positive, got {value}", 1)
        return value

    @staticmethod
    def save(maze: Maze, filepath: str):
        with open(filepath, "w", encoding="utf-8", newline="\n") as f:
            f.write(MazeSerializer.dumps(maze))
        logger.info(f"Saved {maze.columns}x{maze.rows} maze to {filepath}")

    @staticmethod
    def load(filepath: str) -> Maze:
        with open(filepath, "rb") as f:
            data = f.read()
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"cannot parse file {filepath} - file is not valid text ({e.reason} at byte {e.start})") from e
        try:
            maze = MazeSerializer.loads(text)
        except ParseError as e:
            err = ParseError(f"cannot parse file {filepath} - {e}")
            err.line = e.line
            raise err from e
        logger.info(f"Loaded {maze.columns}x{maze.rows} maze from {filepath}")
        return maze
