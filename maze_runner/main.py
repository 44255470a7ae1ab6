import argparse
import dataclasses
import logging
import os
import sys

# Ensure project root is in path so we can import 'maze_runner' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_runner.core.config import DEFAULT_CONFIG, MazeConfig
from maze_runner.core.errors import ConfigurationError, ParseError

logger = logging.getLogger("maze_runner")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Runner: generate grid mazes and watch them get solved")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--speed", type=float, default=None,
                        help="Seconds to pause per animated cell (default: 0 headless, "
                             f"{DEFAULT_CONFIG.drawing_speed} visual)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--rows", type=int, default=DEFAULT_CONFIG.default_rows, help="Number of rows")
    gen_parser.add_argument("--columns", type=int, default=DEFAULT_CONFIG.default_columns, help="Number of columns")
    gen_parser.add_argument("--no-solution-guarantee", action="store_true",
                            help="Fill cells at random instead of carving a solvable maze")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--out", type=str, help="Output file path (optional)")
    gen_parser.add_argument("--visual", action="store_true", help="Show the maze being carved")
    gen_parser.add_argument("--algo", type=str, default="dfs", choices=["dfs", "bfs"],
                            help="With --visual: solver to attach once the maze is ready (TAB switches)")

    solve_parser = subparsers.add_parser("solve", help="Solve an existing maze")
    solve_parser.add_argument("input_file", help="Path to maze file")
    solve_parser.add_argument("--algo", type=str, default="dfs", choices=["dfs", "bfs"], help="Solver algorithm")
    solve_parser.add_argument("--steps", type=int, default=None,
                              help="Take at most N single steps instead of solving to completion")
    solve_parser.add_argument("--visual", action="store_true", help="Show visualization")
    solve_parser.add_argument("--record", action="store_true", help="Record video of the visualization")

    show_parser = subparsers.add_parser("show", help="Print a maze file")
    show_parser.add_argument("input_file", help="Path to maze file")

    return parser


def make_config(args, visual: bool) -> MazeConfig:
    speed = args.speed
    if speed is None:
        speed = DEFAULT_CONFIG.drawing_speed if visual else 0.0
    return dataclasses.replace(DEFAULT_CONFIG, drawing_speed=speed)


def print_maze(maze, solver=None):
    # Explored open cells are shown as 'o' on the console only; files keep the plain format
    for row in maze.cells:
        print("".join("o" if c.is_explored() and c.symbol == "." else c.symbol for c in row))
    if solver is not None:
        print(solver.describe())


def cmd_generate(args) -> int:
    from maze_runner.algo.generate import generate

    config = make_config(args, args.visual)
    ensure_solvable = not args.no_solution_guarantee
    logger.info(f"Generating {args.rows}x{args.columns} maze (solvable={ensure_solvable})...")
    task = generate(args.rows, args.columns, ensure_solvable, seed=args.seed, config=config)

    if args.visual:
        from maze_runner.viz.renderer import Renderer
        renderer = Renderer(task.maze, generation=task)
        renderer.init_window()
        renderer.solver_type = args.algo
        renderer.config = config
        renderer.run_loop()
        task.wait()
        if task.cancelled:
            logger.info("Window closed before the maze was finished")
            return 0

    maze = task.result()
    logger.info("Maze generated!")

    if args.out:
        from maze_runner.io.serializer import MazeSerializer
        MazeSerializer.save(maze, args.out)
    elif not args.visual:
        print_maze(maze)
    return 0


def cmd_solve(args) -> int:
    from maze_runner.io.serializer import MazeSerializer
    from maze_runner.algo.runner import SolveRunner
    from maze_runner.algo.solvers import create_solver

    config = make_config(args, args.visual or args.record)
    maze = MazeSerializer.load(args.input_file)
    solver = create_solver(maze, args.algo, config)
    runner = SolveRunner(solver)
    logger.info(f"Solving with {args.algo.upper()} from {maze.start_cell.coordinates}...")

    if args.visual or args.record:
        from maze_runner.viz.renderer import Renderer
        renderer = Renderer(maze, runner=runner, record=args.record)
        if args.record:
            from maze_runner.viz.recorder import default_output_file
            base_name = os.path.splitext(os.path.basename(args.input_file))[0]
            renderer.recorder.output_file = default_output_file(f"solve_{base_name}_{args.algo}")
            logger.info(f"Recording video to {renderer.recorder.output_file}")
        renderer.init_window()
        runner.play()
        renderer.run_loop()
    elif args.steps is not None:
        for _ in range(args.steps):
            if solver.is_finished():
                break
            runner.step()
            logger.debug(solver.describe())
    else:
        runner.play()
        runner.wait()

    print_maze(maze, solver)
    return 0


def cmd_show(args) -> int:
    from maze_runner.io.serializer import MazeSerializer
    maze = MazeSerializer.load(args.input_file)
    print(MazeSerializer.dumps(maze), end="")
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")
    commands = {"generate": cmd_generate, "solve": cmd_solve, "show": cmd_show}
    try:
        return commands[args.command](args)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
    except ParseError as e:
        logger.error(f"Could not load maze: {e}")
    except OSError as e:
        logger.error(f"File error: {e}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
