import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from threading import Event
from typing import Optional

from maze_runner.core.cell import Cell, CellStatus, CellType
from maze_runner.core.config import MazeConfig, DEFAULT_CONFIG
from maze_runner.core.errors import ConfigurationError
from maze_runner.core.maze import Maze

logger = logging.getLogger(__name__)


class SolverStatus(Enum):
    UNSOLVED = "unsolved"
    SOLVED = "solved"
    NO_SOLUTION = "no_solution"


class SolverType(Enum):
    DEPTH_FIRST = "dfs"
    BREADTH_FIRST = "bfs"

    @classmethod
    def from_name(cls, name: str) -> "SolverType":
        key = name.strip().lower().replace("_", "-")
        aliases = {
            "dfs": cls.DEPTH_FIRST, "stack": cls.DEPTH_FIRST, "depth-first": cls.DEPTH_FIRST,
            "bfs": cls.BREADTH_FIRST, "queue": cls.BREADTH_FIRST, "breadth-first": cls.BREADTH_FIRST,
        }
        if key not in aliases:
            raise ConfigurationError(f"Unknown solver type {name!r}, expected one of {sorted(aliases)}")
        return aliases[key]


@dataclass
class SolverState:
    status: SolverStatus = SolverStatus.UNSOLVED
    visited_count: int = 0


class StackFrontier:
    """LIFO. The top stays on the stack until the solver decides to expand it."""
    POP_ON_VISIT = False

    def __init__(self):
        self._items = []

    def push(self, cell: Cell):
        self._items.append(cell)

    def peek(self) -> Cell:
        return self._items[-1]

    def pop(self) -> Cell:
        return self._items.pop()

    def __len__(self):
        return len(self._items)


class QueueFrontier:
    """FIFO. The head is dequeued as soon as it is visited."""
    POP_ON_VISIT = True

    def __init__(self):
        self._items = deque()

    def push(self, cell: Cell):
        self._items.append(cell)

    def peek(self) -> Cell:
        return self._items[0]

    def pop(self) -> Cell:
        return self._items.popleft()

    def __len__(self):
        return len(self._items)


class Solver:
    """
    Cell-by-cell maze search. The frontier object decides the visiting order,
    everything else (status, counting, neighbor expansion) is shared.

    Only one thread may drive step()/solve() at a time; SolveRunner enforces that
    for background solving.
    """

    def __init__(self, maze: Optional[Maze], frontier, config: MazeConfig = DEFAULT_CONFIG):
        if maze is None:
            raise ConfigurationError("Cannot create a solver based on a null maze")
        if maze.start_cell is None:
            raise ConfigurationError("Cannot create a solver for a maze without a start cell")
        self.maze = maze
        self.frontier = frontier
        self.config = config
        self.state = SolverState()
        self.frontier.push(maze.start_cell)

    @property
    def status(self) -> SolverStatus:
        return self.state.status

    @property
    def visited_count(self) -> int:
        return self.state.visited_count

    def is_finished(self) -> bool:
        return self.state.status is not SolverStatus.UNSOLVED

    def step(self) -> bool:
        """
        Advances the search by one frontier element.
        Returns True iff the goal has been reached (now or on an earlier call).
        """
        state = self.state
        if state.status is not SolverStatus.UNSOLVED:
            return state.status is SolverStatus.SOLVED

        if not self.frontier:
            state.status = SolverStatus.NO_SOLUTION
            logger.debug(f"Frontier empty after {state.visited_count} cells")
            return False

        cell = self.frontier.peek()

        # Duplicates pushed before their first visit are dropped here, uncounted
        if cell.type is CellType.WALL or cell.status is CellStatus.EXPLORED:
            self.frontier.pop()
            return False

        if self.frontier.POP_ON_VISIT:
            self.frontier.pop()

        cell.status = CellStatus.EXPLORED
        state.visited_count += 1
        cell.visit_order = state.visited_count

        if cell.type is CellType.GOAL:
            state.status = SolverStatus.SOLVED
            logger.debug(f"Goal {cell.coordinates} reached after {state.visited_count} cells")
            return True

        if not self.frontier.POP_ON_VISIT:
            self.frontier.pop()

        for neighbor in self.maze.neighbors(cell):
            if neighbor.type is not CellType.WALL and neighbor.status is CellStatus.UNEXPLORED:
                self.frontier.push(neighbor)
        return False

    def solve(self, cancel: Event = None, delay: float = None) -> SolverStatus:
        """
        Steps until the status is terminal, pausing `delay` seconds (default:
        config.drawing_speed) between steps. Setting `cancel` stops the loop
        between two steps, never inside one, so calling solve() or step()
        again resumes where it left off.
        """
        if cancel is None:
            cancel = Event()
        if delay is None:
            delay = self.config.drawing_speed

        while self.state.status is SolverStatus.UNSOLVED:
            if cancel.is_set():
                break
            self.step()
            if self.state.status is not SolverStatus.UNSOLVED:
                break
            if cancel.wait(delay):
                break
        return self.state.status

    def describe(self) -> str:
        n = self.state.visited_count
        if self.state.status is SolverStatus.SOLVED:
            return f"Maze Solved! Found goal after visiting {n} cells"
        if self.state.status is SolverStatus.NO_SOLUTION:
            return f"Maze is impossible to solve! Tried visiting {n} cells"
        return f"Solving... So far we have visited {n} cells"


class StackSolver(Solver):
    """Depth-first search."""
    def __init__(self, maze: Optional[Maze], config: MazeConfig = DEFAULT_CONFIG):
        super().__init__(maze, StackFrontier(), config)


class QueueSolver(Solver):
    """Breadth-first search. Goal is detected when dequeued, not when discovered."""
    def __init__(self, maze: Optional[Maze], config: MazeConfig = DEFAULT_CONFIG):
        super().__init__(maze, QueueFrontier(), config)


def create_solver(maze: Optional[Maze], solver_type=SolverType.DEPTH_FIRST,
                  config: MazeConfig = DEFAULT_CONFIG) -> Solver:
    if isinstance(solver_type, str):
        solver_type = SolverType.from_name(solver_type)
    if solver_type is SolverType.DEPTH_FIRST:
        return StackSolver(maze, config)
    if solver_type is SolverType.BREADTH_FIRST:
        return QueueSolver(maze, config)
    raise ConfigurationError(f"Unsupported solver type {solver_type!r}")
