from abc import ABC, abstractmethod
from typing import Iterator

from maze_runner.core.cell import Cell
from maze_runner.core.config import MazeConfig, DEFAULT_CONFIG
from maze_runner.core.maze import Maze


class Generator(ABC):
    def __init__(self, maze: Maze, seed: int = None, config: MazeConfig = DEFAULT_CONFIG):
        self.maze = maze
        self.seed = seed
        self.config = config
        self.step_count = 0

    @abstractmethod
    def run(self) -> Iterator[Cell]:
        """
        Yields every cell right after it has been written.
        The actual modifications happen in-place on self.maze, so whoever drives
        the iterator can pause or redraw between two mutations.
        """
        pass

    def run_all(self) -> Maze:
        """Helper to run the generator to completion without pauses."""
        for _ in self.run():
            pass
        return self.maze
