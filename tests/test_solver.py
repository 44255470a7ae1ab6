import unittest
import sys
import os
import threading
from collections import deque

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_runner.core.cell import CellStatus
from maze_runner.core.errors import ConfigurationError
from maze_runner.core.maze import Maze
from maze_runner.algo.dfs import SolvableGenerator
from maze_runner.algo.random_fill import RandomGenerator
from maze_runner.algo.solvers import (
    QueueSolver, SolverStatus, SolverType, StackSolver, create_solver,
)
from maze_runner.io.serializer import MazeSerializer

SMALL = "3 2\nS.#\n#.G\n"

# Goal cut off by a full wall row; the six cells above it are reachable
BLOCKED = "3 4\nS..\n...\n###\n..G\n"

OPEN_ROOM = """5 5
#####
#S..#
#...#
#..G#
#####
"""


def hop_distances(maze, origin):
    dist = {origin: 0}
    queue = deque([origin])
    while queue:
        cell = queue.popleft()
        for n in maze.neighbors(cell):
            if not n.is_wall() and n not in dist:
                dist[n] = dist[cell] + 1
                queue.append(n)
    return dist


class CancelAfter(threading.Event):
    """Cancel flag that trips itself on the n-th pause between steps."""
    def __init__(self, n):
        super().__init__()
        self.n = n

    def wait(self, timeout=None):
        self.n -= 1
        if self.n <= 0:
            self.set()
        return self.is_set()


class TestSolvers(unittest.TestCase):
    def test_bfs_small(self):
        maze = MazeSerializer.loads(SMALL)
        bfs = QueueSolver(maze)
        results = [bfs.step() for _ in range(4)]
        self.assertEqual(results, [False, False, False, True])
        self.assertEqual(bfs.status, SolverStatus.SOLVED)
        self.assertEqual(bfs.visited_count, 4)
        self.assertEqual(maze.goal_cell.visit_order, 4)

    def test_dfs_small(self):
        maze = MazeSerializer.loads(SMALL)
        dfs = StackSolver(maze)
        self.assertEqual(dfs.solve(delay=0), SolverStatus.SOLVED)
        self.assertEqual(dfs.visited_count, 4)
        # Visit orders follow the single corridor
        orders = [maze.get_cell(0, 0), maze.get_cell(0, 1), maze.get_cell(1, 1), maze.get_cell(1, 2)]
        self.assertEqual([c.visit_order for c in orders], [1, 2, 3, 4])

    def test_walls_never_visited(self):
        maze = MazeSerializer.loads(SMALL)
        StackSolver(maze).solve(delay=0)
        for cell in maze:
            if cell.is_wall():
                self.assertEqual(cell.status, CellStatus.UNEXPLORED)
                self.assertEqual(cell.visit_order, 0)

    def test_no_solution(self):
        for cls in (StackSolver, QueueSolver):
            maze = MazeSerializer.loads(BLOCKED)
            solver = cls(maze)
            self.assertEqual(solver.solve(delay=0), SolverStatus.NO_SOLUTION)
            self.assertEqual(solver.visited_count, 6)
            self.assertEqual(maze.explored_count(), 6)
            self.assertEqual(len(solver.frontier), 0)
            self.assertEqual(maze.goal_cell.status, CellStatus.UNEXPLORED)

    def test_duplicates_counted_once(self):
        maze = MazeSerializer.loads(BLOCKED)
        solver = QueueSolver(maze)
        steps = 0
        while not solver.step() and solver.status is SolverStatus.UNSOLVED:
            steps += 1
        # Some steps only dropped stale duplicates
        self.assertGreater(steps, 6)
        orders = sorted(c.visit_order for c in maze if c.visit_order)
        self.assertEqual(orders, [1, 2, 3, 4, 5, 6])

    def test_bfs_level_order(self):
        maze = MazeSerializer.loads(OPEN_ROOM)
        bfs = QueueSolver(maze)
        bfs.solve(delay=0)
        self.assertEqual(bfs.status, SolverStatus.SOLVED)

        dist = hop_distances(maze, maze.start_cell)
        goal_dist = dist[maze.goal_cell]
        self.assertEqual(goal_dist, 4)
        for cell, d in dist.items():
            if d < goal_dist:
                self.assertEqual(cell.status, CellStatus.EXPLORED)
                self.assertLess(cell.visit_order, maze.goal_cell.visit_order)
        self.assertEqual(bfs.visited_count, 9)

        # Visit orders never decrease with distance
        explored = sorted((c for c in dist if c.visit_order), key=lambda c: c.visit_order)
        depths = [dist[c] for c in explored]
        self.assertEqual(depths, sorted(depths))

    def test_dfs_goal_stays_on_stack(self):
        maze = MazeSerializer.loads(SMALL)
        dfs = StackSolver(maze)
        dfs.solve(delay=0)
        self.assertIs(dfs.frontier.peek(), maze.goal_cell)

    def test_terminal_idempotence(self):
        for text, expected in [(SMALL, True), (BLOCKED, False)]:
            for cls in (StackSolver, QueueSolver):
                maze = MazeSerializer.loads(text)
                solver = cls(maze)
                solver.solve(delay=0)
                status = solver.status
                count = solver.visited_count
                frontier = len(solver.frontier)
                snapshot = [(c.status, c.visit_order) for c in maze]

                for _ in range(3):
                    self.assertEqual(solver.step(), expected)
                self.assertEqual(solver.solve(delay=0), status)

                self.assertEqual(solver.visited_count, count)
                self.assertEqual(len(solver.frontier), frontier)
                self.assertEqual([(c.status, c.visit_order) for c in maze], snapshot)

    def test_step_and_solve_agree(self):
        for seed in range(5):
            text = MazeSerializer.dumps(SolvableGenerator(Maze(20, 20), seed=seed).run_all())
            for solver_type in SolverType:
                maze_a = MazeSerializer.loads(text)
                stepped = create_solver(maze_a, solver_type)
                while stepped.status is SolverStatus.UNSOLVED:
                    stepped.step()

                maze_b = MazeSerializer.loads(text)
                solved = create_solver(maze_b, solver_type)
                # Mix single steps and solve()
                for _ in range(5):
                    solved.step()
                solved.solve(delay=0)

                self.assertEqual(stepped.status, SolverStatus.SOLVED)
                self.assertEqual(stepped.visited_count, solved.visited_count)
                self.assertEqual([c.visit_order for c in maze_a], [c.visit_order for c in maze_b])

    def test_visited_count_matches_explored_cells(self):
        for seed in range(5):
            maze = RandomGenerator(Maze(20, 20), seed=seed).run_all()
            for solver_type in SolverType:
                maze.clear()
                solver = create_solver(maze, solver_type)
                solver.solve(delay=0)
                self.assertNotEqual(solver.status, SolverStatus.UNSOLVED)
                self.assertEqual(solver.visited_count, maze.explored_count())

    def test_unreachable_goal_explores_component(self):
        maze = RandomGenerator(Maze(30, 30), seed=4).run_all()
        component = hop_distances(maze, maze.start_cell)
        solver = QueueSolver(maze)
        solver.solve(delay=0)
        if maze.goal_cell in component:
            self.assertEqual(solver.status, SolverStatus.SOLVED)
        else:
            self.assertEqual(solver.status, SolverStatus.NO_SOLUTION)
            self.assertEqual(solver.visited_count, len(component))

    def test_cancel_between_steps(self):
        maze = MazeSerializer.loads(SMALL)
        bfs = QueueSolver(maze)
        status = bfs.solve(cancel=CancelAfter(3), delay=0)
        self.assertEqual(status, SolverStatus.UNSOLVED)
        self.assertEqual(bfs.visited_count, 3)

        # Resume where it stopped
        self.assertTrue(bfs.step())
        self.assertEqual(bfs.visited_count, 4)

    def test_cancel_before_start(self):
        maze = MazeSerializer.loads(SMALL)
        dfs = StackSolver(maze)
        cancel = threading.Event()
        cancel.set()
        self.assertEqual(dfs.solve(cancel=cancel, delay=0), SolverStatus.UNSOLVED)
        self.assertEqual(dfs.visited_count, 0)
        self.assertEqual(len(dfs.frontier), 1)

    def test_null_maze(self):
        with self.assertRaises(ConfigurationError):
            StackSolver(None)
        with self.assertRaises(ConfigurationError):
            create_solver(None, "bfs")

    def test_maze_without_start(self):
        with self.assertRaises(ConfigurationError):
            QueueSolver(Maze(3, 3))

    def test_solver_types(self):
        maze = MazeSerializer.loads(SMALL)
        self.assertIsInstance(create_solver(maze, "dfs"), StackSolver)
        self.assertIsInstance(create_solver(maze, "breadth-first"), QueueSolver)
        self.assertIsInstance(create_solver(maze, SolverType.BREADTH_FIRST), QueueSolver)
        with self.assertRaises(ConfigurationError):
            create_solver(maze, "astar")

    def test_describe(self):
        maze = MazeSerializer.loads(SMALL)
        solver = QueueSolver(maze)
        self.assertIn("visited 0 cells", solver.describe())
        solver.solve(delay=0)
        self.assertEqual(solver.describe(), "Maze Solved! Found goal after visiting 4 cells")

        solver = QueueSolver(MazeSerializer.loads(BLOCKED))
        solver.solve(delay=0)
        self.assertEqual(solver.describe(), "Maze is impossible to solve! Tried visiting 6 cells")

    def test_start_adjacent_to_goal(self):
        maze = MazeSerializer.loads("2 1\nSG\n")
        for cls in (StackSolver, QueueSolver):
            maze.clear()
            solver = cls(maze)
            self.assertFalse(solver.step())
            self.assertTrue(solver.step())
            self.assertEqual(solver.visited_count, 2)


if __name__ == '__main__':
    unittest.main()
