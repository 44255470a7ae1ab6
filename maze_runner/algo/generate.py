import logging
import threading
from typing import Callable, Optional

from maze_runner.core.config import MazeConfig, DEFAULT_CONFIG
from maze_runner.core.maze import Maze
from maze_runner.algo.base import Generator
from maze_runner.algo.dfs import SolvableGenerator
from maze_runner.algo.random_fill import RandomGenerator

logger = logging.getLogger(__name__)


class GenerationTask:
    """
    Handle to a maze being generated on a background thread.

    `maze` is available immediately and is mutated cell by cell, so a renderer
    can draw it while the task runs. Nothing else should read it until `done`.
    """

    def __init__(self, generator: Generator, delay: float = 0.0,
                 on_complete: Optional[Callable[["GenerationTask"], None]] = None):
        self.generator = generator
        self.maze = generator.maze
        self.delay = delay
        self.on_complete = on_complete
        self._finished = threading.Event()
        self._cancel = threading.Event()
        self._error: Optional[BaseException] = None
        self._stopped_early = False
        self._thread = threading.Thread(target=self._run, name="maze-generator", daemon=True)

    def start(self) -> "GenerationTask":
        self._thread.start()
        return self

    def _run(self):
        name = type(self.generator).__name__
        logger.info(f"{name}: generating {self.maze.rows}x{self.maze.columns} maze...")
        try:
            for _ in self.generator.run():
                # One pause per cell touched; a set cancel flag ends the pause early
                if self._cancel.wait(self.delay):
                    logger.info(f"{name}: cancelled after {self.generator.step_count} cells")
                    self._stopped_early = True
                    break
            else:
                logger.info(f"{name}: done, {self.generator.step_count} cells carved")
        except Exception as e:
            logger.exception(f"{name}: generation failed")
            self._error = e
        finally:
            self._finished.set()
            if self.on_complete:
                self.on_complete(self)

    @property
    def done(self) -> bool:
        return self._finished.is_set()

    @property
    def cancelled(self) -> bool:
        """True once the task has stopped before carving the whole maze."""
        return self._stopped_early

    def cancel(self):
        self._cancel.set()

    def wait(self, timeout: float = None) -> bool:
        """Blocks until generation finishes. Returns False on timeout."""
        return self._finished.wait(timeout)

    def join(self, timeout: float = None):
        self._thread.join(timeout)

    def result(self, timeout: float = None) -> Maze:
        if not self.wait(timeout):
            raise TimeoutError("maze generation still running")
        if self._error is not None:
            raise self._error
        if self.cancelled:
            raise RuntimeError("maze generation was cancelled")
        return self.maze


def create_generator(maze: Maze, ensure_solvable: bool = True, seed: int = None,
                     config: MazeConfig = DEFAULT_CONFIG) -> Generator:
    if ensure_solvable:
        return SolvableGenerator(maze, seed=seed, config=config)
    return RandomGenerator(maze, seed=seed, config=config)


def generate(rows: int, columns: int, ensure_solvable: bool = True, seed: int = None,
             config: MazeConfig = DEFAULT_CONFIG,
             on_complete: Optional[Callable[[GenerationTask], None]] = None) -> GenerationTask:
    """
    Validates the dimensions, then carves a new maze on a background thread.
    Raises ConfigurationError synchronously, before any thread is started.
    """
    config.validate_dimensions(rows, columns)
    maze = Maze(rows, columns)
    generator = create_generator(maze, ensure_solvable, seed, config)
    return GenerationTask(generator, delay=config.drawing_speed, on_complete=on_complete).start()
