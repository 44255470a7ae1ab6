import sys
import os
import time
import argparse
from statistics import mean

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_runner.core.maze import Maze
from maze_runner.algo.generate import create_generator
from maze_runner.algo.solvers import SolverStatus, SolverType, create_solver


def run_benchmark():
    parser = argparse.ArgumentParser(description="DFS vs BFS on generated mazes")
    parser.add_argument("--rows", type=int, default=100, help="Maze rows")
    parser.add_argument("--columns", type=int, default=100, help="Maze columns")
    parser.add_argument("--runs", type=int, default=20, help="Mazes per generation mode")
    parser.add_argument("--seed", type=int, default=0, help="First seed")
    args = parser.parse_args()

    print(f"=== MAZE SOLVER BENCHMARK ===")
    print(f"Size: {args.rows}x{args.columns} | Runs: {args.runs}")
    print("-" * 70)
    print(f"{'MODE':<10} | {'SOLVER':<14} | {'SOLVED':<7} | {'AVG VISITED':<12} | {'AVG TIME (ms)':<12}")
    print("-" * 70)

    for ensure_solvable, mode in ((True, "solvable"), (False, "random")):
        results = {t: [] for t in SolverType}
        for seed in range(args.seed, args.seed + args.runs):
            maze = create_generator(Maze(args.rows, args.columns), ensure_solvable, seed).run_all()

            for solver_type in SolverType:
                maze.clear()
                solver = create_solver(maze, solver_type)
                t0 = time.perf_counter()
                # Drive step() directly, solve() would add the animation delay
                while solver.status is SolverStatus.UNSOLVED:
                    solver.step()
                elapsed = (time.perf_counter() - t0) * 1000
                results[solver_type].append((solver.status, solver.visited_count, elapsed))

        for solver_type, rows in results.items():
            solved = sum(1 for status, _, _ in rows if status is SolverStatus.SOLVED)
            visited = mean(v for _, v, _ in rows)
            ms = mean(t for _, _, t in rows)
            print(f"{mode:<10} | {solver_type.name:<14} | {solved:<7} | {visited:<12.1f} | {ms:<12.2f}")


if __name__ == "__main__":
    run_benchmark()
