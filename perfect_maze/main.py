import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'perfect_maze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from perfect_maze.core.config import ALGORITHMS, MazeConfig
from perfect_maze.core.events import ProgressEvent


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def add_generation_args(parser: argparse.ArgumentParser):
    defaults = MazeConfig()
    parser.add_argument("--width", type=int, default=defaults.width, help="Maze width in cells")
    parser.add_argument("--height", type=int, default=defaults.height, help="Maze height in cells")
    parser.add_argument("--cell-size", type=int, default=defaults.cell_size, help="Cell size in pixels")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--algo", type=str, default=defaults.algo, choices=ALGORITHMS, help="Generation algorithm")


def config_from_args(args) -> MazeConfig:
    return MazeConfig(width=args.width, height=args.height, cell_size=args.cell_size,
                      algo=args.algo, seed=args.seed).validate()


def run_headless(maze, logger) -> bool:
    handle = maze.generate()
    for event in handle.stream_events():
        if isinstance(event, ProgressEvent):
            print(f"\rProgress: {event.percent:3d}%", end="")
    print()

    result = handle.events.completed
    if not result.success:
        logger.error(f"Generation failed: {result.error}")
        return False
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(description="Perfect maze generator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    add_generation_args(gen_parser)
    gen_parser.add_argument("--visual", action="store_true", help="Show visualization")
    gen_parser.add_argument("--out", type=str, help="Write the maze as an image (e.g. maze.png)")

    # Stats Command
    stats_parser = subparsers.add_parser("stats", help="Generate a maze and print its structure")
    add_generation_args(stats_parser)

    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("perfect_maze")

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    from perfect_maze.core.structure import MazeStructure
    maze = MazeStructure(config)
    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        if args.visual:
            logger.info("Visual mode enabled - Opening window...")
            from perfect_maze.viz.renderer import Renderer
            renderer = Renderer(maze, maze.generate())
            renderer.init_window()
            renderer.run_loop()
            ok = renderer.handle.wait().success
        else:
            ok = run_headless(maze, logger)

        if not ok:
            return 1

        origin, terminus = maze.origin(), maze.terminus()
        logger.info(f"Origin: {origin.coordinates}")
        if terminus is not None:
            logger.info(f"Terminus: {terminus.coordinates} (distance {maze.distance(terminus)})")

        if args.out:
            from perfect_maze.viz.raster import rasterize, save_image
            logger.info(f"Saving maze image to {args.out}...")
            save_image(rasterize(maze), args.out)
            logger.info("Save complete.")

    elif args.command == "stats":
        if not run_headless(maze, logger):
            return 1

        from perfect_maze.core.complexity import MazeAnalyzer
        stats = MazeAnalyzer.calculate_stats(maze.grid)
        stats["perfect"] = MazeAnalyzer.is_perfect(maze.grid)

        print(f"\n{'METRIC':<20} | {'VALUE':<10}")
        print("-" * 33)
        for key, value in stats.items():
            if isinstance(value, float):
                value = f"{value:.2f}"
            print(f"{key:<20} | {value!s:<10}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
