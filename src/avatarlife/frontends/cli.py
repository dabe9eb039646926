"""Command-line interface for the two-color avatar board."""

import argparse
import logging
import sys
import time
from typing import Optional, Tuple

from ..core.board import Board
from ..core.game import AvatarLife
from ..core.patterns import Pattern, PatternLibrary, random_soup

logger = logging.getLogger(__name__)


class CLIAvatarLife:
    """Command-line interface for running avatar board simulations."""

    def __init__(self) -> None:
        self.pattern_library = PatternLibrary()

    def build_pattern(
        self,
        pattern: Optional[str] = None,
        random_size: Optional[Tuple[int, int]] = None,
        population_rate: float = 0.3,
        seed: Optional[int] = None,
    ) -> Pattern:
        """Pick the seed pattern for a run.

        Args:
            pattern: Name of a library pattern
            random_size: (width, height) of a random soup, used instead of
                ``pattern`` when given
            population_rate: Fill rate of the random soup
            seed: Random seed for the soup

        Returns:
            Pattern to seed; falls back to the avatar for unknown names
        """
        if random_size is not None:
            return random_soup(random_size[0], random_size[1], population_rate, seed)

        name = pattern or "Avatar"
        loaded = self.pattern_library.get_pattern(name)
        if loaded is None:
            print(f"Warning: Pattern '{name}' not found, using Avatar")
            logger.warning(f"Unknown pattern {name!r}")
            loaded = self.pattern_library.get_pattern("Avatar")
        return loaded

    def run_simulation(
        self,
        max_generations: int,
        pattern: Optional[str] = None,
        pattern_x: int = 0,
        pattern_y: int = 0,
        random_size: Optional[Tuple[int, int]] = None,
        population_rate: float = 0.3,
        seed: Optional[int] = None,
        verbose: bool = False,
        show_grid: bool = False,
        frames: bool = False,
        frame_delay: float = 0.0,
        check_consistency: bool = False,
        generations: Optional[int] = None,
    ) -> Tuple[int, str, dict]:
        """Run a simulation.

        Args:
            max_generations: Maximum generations to run
            pattern: Optional pattern name to load
            pattern_x: X offset for pattern placement
            pattern_y: Y offset for pattern placement
            random_size: Seed a random soup of this size instead of a pattern
            population_rate: Fill rate of the random soup
            seed: Random seed for the soup
            verbose: Print progress updates
            show_grid: Show initial and final boards
            frames: Print the board after every generation
            frame_delay: Seconds to sleep between printed frames
            check_consistency: Verify neighbour counts after every step
            generations: Run exactly this many generations, ignoring cycles
                and extinction; overrides ``max_generations``

        Returns:
            Tuple of (final_generation, finish_reason, statistics)
        """
        seed_pattern = self.build_pattern(pattern, random_size, population_rate, seed)
        game = AvatarLife(check_consistency=check_consistency)
        game.seed(seed_pattern, pattern_x, pattern_y)

        if verbose:
            print(f"Loading pattern '{seed_pattern.name}' at ({pattern_x}, {pattern_y})")

        initial_population = game.population
        if verbose:
            print(f"Initial population: {initial_population} cells")

        if show_grid or frames:
            print("\nInitial board:")
            print(self._format_board(game.board))

        start_time = time.time()

        if generations is not None:
            if frames:
                self._run_with_frames(game, generations, frame_delay, stop_when_stable=False)
            else:
                game.run(generations)
            final_generation, reason = game.generation, "generations"
        elif frames:
            final_generation, reason = self._run_with_frames(game, max_generations, frame_delay)
        else:
            final_generation, reason = game.run_until_stable(max_generations)

        duration = time.time() - start_time

        stats = game.get_statistics()
        stats["duration_seconds"] = duration
        stats["initial_population"] = initial_population
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0

        if show_grid:
            print(f"\nFinal board (generation {final_generation}):")
            print(self._format_board(game.board))

        return final_generation, reason, stats

    def _run_with_frames(
        self, game: AvatarLife, max_generations: int, frame_delay: float, stop_when_stable: bool = True
    ) -> Tuple[int, str]:
        """Step one generation at a time, printing each board."""
        for _ in range(max_generations):
            game.step()
            print(f"\nGeneration {game.generation}:")
            print(self._format_board(game.board))
            if frame_delay > 0:
                time.sleep(frame_delay)

            reason = game.stop_reason() if stop_when_stable else None
            if reason:
                return game.generation, reason

        return game.generation, "max_generations"

    def _format_board(self, board: Board, max_size: int = 80) -> str:
        """Format a board for display, truncating if too large.

        Args:
            board: Board to format
            max_size: Maximum dimension to display

        Returns:
            Formatted board string
        """
        bbox = board.get_bounding_box()
        if bbox is None:
            return "(empty)"

        width = bbox[2] - bbox[0] + 1
        height = bbox[3] - bbox[1] + 1
        if width > max_size or height > max_size:
            return f"Board too large to display ({width}x{height})"

        return str(board)

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")
        for category, patterns in categories.items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                if pattern:
                    size = pattern.get_size()
                    print(
                        f"  {pattern_name}: {size[0]}x{size[1]}, "
                        f"{len(pattern.white_cells)} white / {len(pattern.black_cells)} black cells"
                    )
                    if pattern.description:
                        print(f"    {pattern.description}")


def parse_size(value: str) -> Tuple[int, int]:
    """Parse a ``WIDTHxHEIGHT`` argument.

    Raises:
        argparse.ArgumentTypeError: If the value is malformed
    """
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got '{value}'")
    return (width, height)


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run the two-color avatar Game of Life from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Evolve the avatar, printing every generation
  avatarlife --frames --max-generations 50

  # Run a glider with the initial and final boards
  avatarlife --pattern Glider --show-grid -m 40

  # Random 30x20 two-color soup with 25% fill
  avatarlife --random 30x20 -p 0.25 --seed 7 --verbose

  # Exactly 12 generations, even past a cycle
  avatarlife --pattern Blinker --generations 12

  # List available patterns
  avatarlife --list-patterns
        """,
    )

    # Pattern configuration
    parser.add_argument(
        "--pattern",
        type=str,
        default="Avatar",
        help="Pattern to seed (default: Avatar)",
    )

    parser.add_argument(
        "--pattern-x",
        type=int,
        default=0,
        help="X offset for pattern placement (default: 0)",
    )

    parser.add_argument(
        "--pattern-y",
        type=int,
        default=0,
        help="Y offset for pattern placement (default: 0)",
    )

    parser.add_argument(
        "--random",
        type=parse_size,
        metavar="WxH",
        help="Seed a random two-color soup of this size instead of a pattern",
    )

    parser.add_argument(
        "-p",
        "--population",
        type=float,
        default=0.3,
        help="Fill rate 0.0-1.0 for --random (default: 0.3)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible soups",
    )

    # Simulation configuration
    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        default=1000,
        help="Maximum generations to simulate (default: 1000)",
    )

    parser.add_argument(
        "--generations",
        type=int,
        metavar="N",
        help="Run exactly N generations without stopping on cycles or extinction",
    )

    parser.add_argument(
        "--check-consistency",
        action="store_true",
        help="Recount neighbours after every generation and fail on drift",
    )

    # Output configuration
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "-g",
        "--show-grid",
        action="store_true",
        help="Display initial and final boards",
    )

    parser.add_argument(
        "-f",
        "--frames",
        action="store_true",
        help="Display the board after every generation",
    )

    parser.add_argument(
        "--frame-delay",
        type=float,
        default=0.0,
        help="Seconds to pause between frames (default: 0)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    return parser


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the simulation finish reason for display.

    Args:
        reason: Finish reason from AvatarLife.run_until_stable
        stats: Statistics dictionary

    Returns:
        Formatted reason string
    """
    if reason == "extinction":
        return "Extinction - all cells died"
    elif reason == "cycle":
        cycle_len = stats.get("cycle_length", 0)
        cycle_start = stats.get("cycle_start_generation", 0)
        return f"Cycle detected - length {cycle_len}, started at generation {cycle_start}"
    elif reason == "max_generations":
        return f"Maximum generations reached ({stats.get('generation', 0)})"
    elif reason == "generations":
        return f"Ran {stats.get('generation', 0)} generations"
    else:
        return f"Unknown reason: {reason}"


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        reason: Finish reason
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation completed after {final_generation} generations")
    print(f"Finish reason: {format_finish_reason(reason, stats)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  White / black: {stats['white_population']} / {stats['black_population']}")
        print(f"  Tracked cells: {stats['tracked_cells']}")
        print(f"  Population change rate: {stats['population_change_rate']:.2f}")
        if "duration_seconds" in stats:
            print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
            print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")

        if stats["bounding_box"]:
            bbox = stats["bounding_box"]
            bbox_size = stats["bounding_box_size"]
            print(f"  Bounding box: ({bbox[0]}, {bbox[1]}) to ({bbox[2]}, {bbox[3]}) [{bbox_size[0]}x{bbox_size[1]}]")
    else:
        print(
            "Population: {} -> {}, "
            "Duration: {:.3f}s, "
            "Speed: {:.0f} gen/s".format(
                stats["initial_population"],
                stats["population"],
                stats.get("duration_seconds", 0),
                stats.get("generations_per_second", 0),
            )
        )


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.max_generations <= 0:
        errors.append("Max generations must be positive")

    generations = getattr(args, "generations", None)
    if generations is not None and generations <= 0:
        errors.append("Generations must be positive")

    if not 0.0 <= args.population <= 1.0:
        errors.append("Population rate must be between 0.0 and 1.0")

    if args.random is not None and (args.random[0] <= 0 or args.random[1] <= 0):
        errors.append("Random soup size must be positive")

    if args.frame_delay < 0:
        errors.append("Frame delay must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[list] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if not args.list_patterns and not validate_args(args):
        return 1

    try:
        cli = CLIAvatarLife()

        if args.list_patterns:
            cli.list_patterns()
            return 0

        final_generation, reason, stats = cli.run_simulation(
            max_generations=args.max_generations,
            pattern=args.pattern,
            pattern_x=args.pattern_x,
            pattern_y=args.pattern_y,
            random_size=args.random,
            population_rate=args.population,
            seed=args.seed,
            verbose=args.verbose,
            show_grid=args.show_grid,
            frames=args.frames,
            frame_delay=args.frame_delay,
            check_consistency=args.check_consistency,
            generations=args.generations,
        )

        print_results(final_generation, reason, stats, args.verbose)
        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
