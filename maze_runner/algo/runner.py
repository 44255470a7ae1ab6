import logging
import threading
from typing import Callable, Optional

from maze_runner.algo.solvers import Solver, SolverStatus

logger = logging.getLogger(__name__)


class SolveRunner:
    """
    Runs Solver.solve() on a background thread with play/pause semantics.

    At most one solve thread is alive per runner: play() cancels and joins the
    previous run before starting a new one, and pause() returns only once the
    thread has stopped after a completed step.
    """

    def __init__(self, solver: Solver, on_finish: Optional[Callable[[Solver], None]] = None):
        self.solver = solver
        self.on_finish = on_finish
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._cancel: Optional[threading.Event] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def play(self):
        with self._lock:
            self._stop()
            self._cancel = threading.Event()
            self._thread = threading.Thread(
                target=self._run, args=(self._cancel,), name="maze-solver", daemon=True)
            self._thread.start()

    def pause(self):
        with self._lock:
            self._stop()
        logger.info(f"Paused: {self.solver.describe()}")

    def step(self) -> bool:
        """Manual single step. Ignored while a background run is active."""
        if self.is_running:
            logger.warning("Step ignored, solver is already running")
            return self.solver.status is SolverStatus.SOLVED
        return self.solver.step()

    def wait(self, timeout: float = None) -> bool:
        """Blocks until the current run ends. Returns False on timeout."""
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def _stop(self):
        if self._thread is not None:
            self._cancel.set()
            self._thread.join()
            self._thread = None

    def _run(self, cancel: threading.Event):
        name = type(self.solver).__name__
        logger.info(f"{name}: solving from {self.solver.maze.start_cell.coordinates}...")
        status = self.solver.solve(cancel)
        if status is SolverStatus.UNSOLVED:
            logger.info(f"{name}: stopped after {self.solver.visited_count} cells")
        else:
            logger.info(f"{name}: {self.solver.describe()}")
        if self.on_finish:
            self.on_finish(self.solver)
