"""
growbuf Command-Line Interface (CLI)

Drives a GrowableBuffer from the command line via subcommands:
- demo: create a buffer, append/set/remove, printing contents and
  length/capacity/address after every step
- bench: time the buffer operations at doubling input sizes and write a CSV

Usage examples:
    python -m growbuf.cli demo
    python -m growbuf.cli demo --initial-capacity 0 --values 5 6 7 --set-index 0 --set-value 1
    python -m growbuf.cli --verbose demo --remove-front 2
    python -m growbuf.cli bench --path report.csv --base-input 100 --steps 8
"""

import argparse
import logging
import sys

from .benchmark import run_benchmarks
from .datastructures import GrowableBuffer, GrowableBufferError
from .display import print_buffer

logger = logging.getLogger("growbuf.cli")


def _non_negative_int(text):
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def _positive_int(text):
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


# -------------------------------------------------------------------
# Command handlers
# -------------------------------------------------------------------

def cmd_demo(args):
    """Run the illustrative create/append/set/remove sequence."""
    try:
        buf = GrowableBuffer(args.initial_capacity)
    except GrowableBufferError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    try:
        print_buffer(buf)

        for v in args.values:
            buf.append(v)
            print_buffer(buf)

        if args.set_index is not None:
            buf.set(args.set_index, args.set_value)
            print_buffer(buf)

        for _ in range(args.remove_back):
            buf.remove_back()
            print_buffer(buf)

        for _ in range(args.remove_front):
            buf.remove_front()
            print_buffer(buf)
    except (GrowableBufferError, OverflowError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        logger.debug("demo finished after %d reallocations", buf.reallocations)
        buf.release()
    return 0


def cmd_bench(args):
    """Benchmark buffer operations and save the results as CSV."""
    rows = run_benchmarks(
        args.path,
        base_input=args.base_input,
        steps=args.steps,
        iterations=args.iterations,
    )
    print(f"Benchmark completed. {len(rows)} rows saved to {args.path}")
    return 0


# -------------------------------------------------------------------
# CLI parser setup
# -------------------------------------------------------------------
def build_parser():
    """Build the argparse command-line parser with subcommands."""
    p = argparse.ArgumentParser(prog="python -m growbuf.cli", description="Growable buffer driver")
    p.add_argument("--verbose", action="store_true", help="Log reallocation events")
    sub = p.add_subparsers(dest="cmd", required=True)

    # --- illustrative sequence ---
    s = sub.add_parser("demo", help="Run the append/set/remove walkthrough")
    s.add_argument("--initial-capacity", type=_non_negative_int, default=2)
    s.add_argument("--values", type=int, nargs="*", default=[10, 20, 30])
    s.add_argument("--set-index", type=int, default=1)
    s.add_argument("--set-value", type=int, default=15)
    s.add_argument("--no-set", dest="set_index", action="store_const", const=None,
                   help="Skip the set step")
    s.add_argument("--remove-back", type=_non_negative_int, default=1)
    s.add_argument("--remove-front", type=_non_negative_int, default=0)
    s.set_defaults(func=cmd_demo)

    # --- benchmarks ---
    s = sub.add_parser("bench", help="Benchmark operations and write a CSV report")
    s.add_argument("--path", required=True)
    s.add_argument("--base-input", type=_positive_int, default=100)
    s.add_argument("--steps", type=_positive_int, default=8)
    s.add_argument("--iterations", type=_positive_int, default=5)
    s.set_defaults(func=cmd_bench)

    return p


# -------------------------------------------------------------------
# Entry point
# -------------------------------------------------------------------
def main(argv=None):
    """CLI entry point when invoked via `python -m growbuf.cli`."""
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
