"""
Print the optimal Tower of Hanoi solution for a given number of rings.

Example:
    python hanoi.py 3
    python hanoi.py 20 --quiet --progress
    python hanoi.py 4 --verify --plot graphs/hanoi_4.png
"""

import argparse
import os
import re
import sys
from typing import List, Optional

from tqdm import tqdm

from config import HanoiConfig
from traversal import InputError, TraversalError, expected_move_count, solve

NOTHING_TO_SOLVE = "There's nothing to solve with just a solid plate with 3 fixed sticks."


def parse_ring_count(text: str, max_rings: int) -> int:
    """Parse a ring count given on the command line. Raises InputError."""
    if text is None or not re.fullmatch(r"[0-9]+", text.strip()):
        raise InputError("Level must be a positive integer.")

    num_rings = int(text.strip())
    if num_rings > max_rings:
        raise InputError(f"Level must be a positive integer no greater than {max_rings}.")
    return num_rings


def build_parser(config: HanoiConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve the Tower of Hanoi iteratively and narrate every ring movement."
    )
    parser.add_argument(
        "rings",
        help=f"Number of rings (0 <= rings <= {config.max_rings})",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the final pegs and the total number of steps",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar over the 2^N - 1 moves",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help=f"Check the solution is a shortest path in the state space (rings <= {config.verify_max_rings})",
    )
    parser.add_argument(
        "--plot",
        default=None,
        metavar="PATH",
        help=f"Save a Sierpinski plot of the solution path to PATH (rings <= {config.plot_max_rings})",
    )
    parser.add_argument(
        "--plot-default",
        action="store_true",
        help=f"Save the plot to {config.output_dir}/hanoi_<rings>.png",
    )
    return parser


def print_report(result) -> None:
    print()
    for name, sizes in result.final_pegs:
        print(f"Rings on pillar {name} (top to bottom): {' '.join(str(s) for s in sizes)}")
    print()
    print(f"Total steps: {result.move_count}")


def main(argv: Optional[List[str]] = None) -> int:
    try:
        config = HanoiConfig.from_env()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    parser = build_parser(config)
    args = parser.parse_args(argv)

    try:
        num_rings = parse_ring_count(args.rings, config.max_rings)
    except InputError as e:
        parser.error(str(e))

    if num_rings == 0:
        print(NOTHING_TO_SOLVE)
        return 0

    if args.plot is not None and args.plot_default:
        parser.error("--plot and --plot-default are mutually exclusive")
    if args.plot_default:
        args.plot = os.path.join(config.output_dir, f"hanoi_{num_rings}.png")

    if args.verify and num_rings > config.verify_max_rings:
        parser.error(f"--verify supports at most {config.verify_max_rings} rings")
    if args.plot is not None and num_rings > config.plot_max_rings:
        parser.error(f"--plot supports at most {config.plot_max_rings} rings")

    write = tqdm.write if args.progress else print
    progress = tqdm(
        total=expected_move_count(num_rings),
        unit="move",
        disable=not args.progress,
    )

    def on_move(event):
        if not args.quiet:
            write(str(event))
        progress.update(1)

    try:
        result = solve(
            num_rings,
            peg_names=config.peg_names,
            on_move=on_move,
            collect=args.verify or args.plot is not None,
        )
    except TraversalError as e:
        print(str(e), file=sys.stderr)
        return 1
    finally:
        progress.close()

    print_report(result)

    if args.verify or args.plot is not None:
        # networkx/matplotlib are only needed here
        from state_space_graph import draw_solution, verify_optimal

        if args.verify:
            summary = verify_optimal(result.moves, num_rings, config.peg_names)
            print(
                f"Optimal: {summary['is_optimal']} "
                f"({summary['num_moves']} moves, shortest path {summary['optimal_length']})"
            )
            if not summary["is_optimal"]:
                return 1

        if args.plot is not None:
            draw_solution(result.moves, num_rings, args.plot, config.peg_names)
            print(f"Saved {args.plot}")

    return 0


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
