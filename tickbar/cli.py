"""Command-line interface for tickbar."""

import argparse
import logging
import sys

import tracerite

from tickbar.config import ProgressConfig
from tickbar.fields import parse_fields
from tickbar.progress import ProgressBar
from tickbar.utils import parse_count
from tickbar.workload import SHAPES, Workload

tracerite.load()

__all__ = ["main"]

DEFAULT_FIELDS = "all,bar,elapsed"


def build_config(args) -> ProgressConfig:
    """Collect progress bar settings from parsed arguments."""
    return ProgressConfig(
        window_size=args.window,
        speed_buckets=args.buckets,
        interval_ms=args.interval,
        bar_width=args.width,
        plot_height=args.height,
    )


def _main():
    """Internal main function that may raise exceptions."""
    parser = argparse.ArgumentParser(
        description="Show a progress bar for a demo workload running on another thread"
    )
    parser.add_argument(
        "-n",
        "--target",
        help="Target tick count (e.g. 60000, 60k)",
        type=str,
        default="60k",
    )
    parser.add_argument(
        "-f",
        "--fields",
        help=f"Comma separated display fields (default: {DEFAULT_FIELDS})",
        type=str,
        default=DEFAULT_FIELDS,
    )
    parser.add_argument(
        "-i",
        "--interval",
        help="Sampling interval in milliseconds (default: 100)",
        type=float,
        default=100,
    )
    parser.add_argument("-w", "--width", help="Bar width in cells", type=int, default=50)
    parser.add_argument(
        "--window", help="Samples in the rate estimation window", type=int, default=20
    )
    parser.add_argument("--buckets", help="Columns in the speed sparkline", type=int, default=20)
    parser.add_argument("--height", help="Rows in the speed sparkline", type=int, default=15)
    parser.add_argument("--steps", help="Workload steps", type=int, default=10_000)
    parser.add_argument(
        "--delay", help="Workload delay per step in seconds", type=float, default=0.0005
    )
    parser.add_argument(
        "--shape",
        help="Workload progress curve",
        choices=SHAPES,
        default="sqrt",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Quiet mode: no summary line after completion",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose mode: debug logging and render timing",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(message)s")

    target = parse_count(args.target)
    fields = parse_fields(args.fields)
    config = build_config(args)

    workload = Workload(target, steps=args.steps, step_delay=args.delay, shape=args.shape)
    progress = ProgressBar(workload.state, fields, config)

    workload.start()
    try:
        result = progress.run()
    finally:
        workload.join()
    if not args.quiet:
        result.print_summary(sys.stdout, verbose=args.verbose)


def main():
    """Main entry point for the CLI with exception handling."""
    try:
        _main()
    except (KeyboardInterrupt, BrokenPipeError):
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
