import logging
from typing import Optional

import numpy as np
import pygame

from maze_runner.core.cell import CellStatus, CellType
from maze_runner.core.maze import Maze
from maze_runner.algo.generate import GenerationTask
from maze_runner.algo.runner import SolveRunner
from maze_runner.algo.solvers import SolverStatus, SolverType, StackSolver, create_solver
from maze_runner.core.config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

COLOR_BG = (255, 255, 255)
COLOR_WALL = (0, 0, 0)
COLOR_OPEN = (255, 255, 255)
COLOR_EXPLORED = (128, 128, 128)
COLOR_START = (255, 255, 0)
COLOR_GOAL = (0, 128, 0)
COLOR_TEXT = (0, 0, 0)
COLOR_HUD = (40, 40, 40)


def color_array(maze: Maze) -> np.ndarray:
    """
    RGB image of the maze, one pixel per cell, shaped (columns, rows, 3) the way
    pygame.surfarray expects. Safe to call while a generator is still writing;
    the picture is then simply a snapshot of a half-built maze.
    """
    pixels = np.empty((maze.columns, maze.rows, 3), dtype=np.uint8)
    for row in maze.cells:
        for cell in row:
            if cell.type is CellType.WALL:
                color = COLOR_WALL
            elif cell.type is CellType.START:
                color = COLOR_START
            elif cell.type is CellType.GOAL:
                color = COLOR_GOAL
            elif cell.status is CellStatus.EXPLORED:
                color = COLOR_EXPLORED
            else:
                color = COLOR_OPEN
            pixels[cell.column, cell.row] = color
    return pixels


class Renderer:
    HUD_HEIGHT = 60

    def __init__(self, maze: Maze, generation: Optional[GenerationTask] = None,
                 runner: Optional[SolveRunner] = None, width=800, height=600, record=False):
        self.maze = maze
        self.generation = generation
        self.runner = runner
        self.screen_width = width
        self.screen_height = height

        self.cell_w = 1.0
        self.cell_h = 1.0

        from maze_runner.viz.recorder import VideoRecorder
        self.recorder = VideoRecorder(active=record)

        self.font = None
        self.small_font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.message = ""

        # Solver attached as soon as generation completes, None to only watch
        self.solver_type = "dfs"
        self.config = DEFAULT_CONFIG

    def fit_to_screen(self):
        """Stretch the maze over the whole window minus the status bar."""
        self.cell_w = self.screen_width / self.maze.columns
        self.cell_h = (self.screen_height - self.HUD_HEIGHT) / self.maze.rows
        self.small_font = None

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Maze Runner - {self.maze.columns}x{self.maze.rows}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h
                self.fit_to_screen()

            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_ESCAPE, pygame.K_q):
                    self.running = False
                elif not self.generation_finished():
                    # No solving until the maze is complete
                    continue
                elif self.runner is None:
                    continue
                elif event.key == pygame.K_SPACE:
                    if self.runner.is_running:
                        self.runner.pause()
                        self.message = "Paused! " + self.runner.solver.describe()
                    else:
                        self.runner.play()
                elif event.key in (pygame.K_RIGHT, pygame.K_s):
                    self.runner.step()
                    self.message = self.runner.solver.describe()
                elif event.key == pygame.K_c:
                    self.clear()
                elif event.key == pygame.K_TAB:
                    self.switch_solver()

    def clear(self):
        """Stop solving, wipe solver marks and start over with a fresh solver of the same kind."""
        solver = self.runner.solver
        self.runner.pause()
        self.maze.clear()
        self.runner = SolveRunner(type(solver)(self.maze, solver.config))
        self.message = "Maze cleared"

    def switch_solver(self):
        """Swap depth-first and breadth-first. The maze is cleared first, same as clear()."""
        solver = self.runner.solver
        if isinstance(solver, StackSolver):
            self.solver_type = SolverType.BREADTH_FIRST.value
        else:
            self.solver_type = SolverType.DEPTH_FIRST.value
        self.runner.pause()
        self.maze.clear()
        self.runner = SolveRunner(create_solver(self.maze, self.solver_type, solver.config))
        self.message = f"Switched to {self.solver_type.upper()}, maze cleared"
        logger.info(f"Switched solver to {self.solver_type}")

    def attach_solver(self):
        if self.runner is None and self.solver_type and self.generation_finished():
            if self.generation is not None and self.generation.cancelled:
                return
            self.runner = SolveRunner(create_solver(self.maze, self.solver_type, self.config))
            logger.info(f"Attached {self.solver_type} solver")

    def generation_finished(self) -> bool:
        return self.generation is None or self.generation.done

    def draw_maze(self):
        self.surface.fill(COLOR_BG)
        cells = pygame.surfarray.make_surface(color_array(self.maze))
        area = (self.screen_width, self.screen_height - self.HUD_HEIGHT)
        self.surface.blit(pygame.transform.scale(cells, area), (0, 0))

        # Visit order numbers only fit on reasonably large cells
        if min(self.cell_w, self.cell_h) >= 18:
            if self.small_font is None:
                self.small_font = pygame.font.SysFont("Consolas", int(min(self.cell_w, self.cell_h) * 0.5))
            for cell in self.maze:
                if cell.visit_order > 0:
                    lbl = self.small_font.render(str(cell.visit_order), True, COLOR_TEXT)
                    cx = cell.column * self.cell_w + self.cell_w / 2
                    cy = cell.row * self.cell_h + self.cell_h / 2
                    self.surface.blit(lbl, lbl.get_rect(center=(cx, cy)))

    def draw_hud(self):
        top = self.screen_height - self.HUD_HEIGHT
        pygame.draw.rect(self.surface, COLOR_HUD, (0, top, self.screen_width, self.HUD_HEIGHT))

        if not self.generation_finished():
            status = "Generating maze..."
        elif self.runner is None:
            status = "Maze generated!"
        elif self.runner.is_running:
            status = self.runner.solver.describe()
        elif self.runner.solver.status is not SolverStatus.UNSOLVED:
            status = self.runner.solver.describe()
        else:
            status = self.message or "SPACE: play/pause   S: step   C: clear   TAB: dfs/bfs   Q: quit"

        info = [
            status,
            f"FPS: {int(self.clock.get_fps())}   Size: {self.maze.columns}x{self.maze.rows}"
            + ("   REC" if self.recorder.active else ""),
        ]
        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, top + 8 + i * 22))

    def run_loop(self):
        while self.running:
            self.handle_input()
            self.attach_solver()
            self.draw_maze()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(60)

        if self.runner is not None and self.runner.is_running:
            self.runner.pause()
        if self.generation is not None and not self.generation.done:
            self.generation.cancel()
        self.recorder.stop()
        pygame.quit()
