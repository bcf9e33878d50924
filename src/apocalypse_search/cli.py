"""Command-line interface for apocalypse_search."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from apocalypse_search.errors import CheckpointCorruptError, InvalidParameterError

logger = logging.getLogger("apocalypse_search.cli")


def _print_summary(result) -> None:
    summary = result.summary().to_dict()
    print(f"Non-match mean: {summary['mean']:.2f}, std: {summary['std']:.2f}, "
          f"total: {summary['total']}")
    print("Outlier values from average matches:")
    for outlier in summary["outliers"]:
        print(f" {outlier['pattern']}: {outlier['deviation']}")


def _make_progress(enabled: bool, total, universe_size: int):
    if not enabled:
        return None
    from apocalypse_search.utils.progress import TqdmProgress
    return TqdmProgress(total=total, universe_size=universe_size)


def cmd_sweep(args: argparse.Namespace) -> int:
    """Sweep every pattern against the powers p^n."""
    from apocalypse_search.config import SearchParameters
    from apocalypse_search.search.sweep import (
        power_sweep,
        power_checkpoint_filename,
        power_results_filename,
    )
    from apocalypse_search.utils.checkpoint import (
        METHOD_POWER,
        CheckpointStore,
        PeriodicCheckpointer,
        load_checkpoint,
    )

    initial_counts = None
    if args.restart:
        checkpoint = load_checkpoint(args.restart)
        if checkpoint.method != METHOD_POWER:
            raise CheckpointCorruptError(f"{args.restart} is a {checkpoint.method} checkpoint, not a power sweep")
        params = checkpoint.resume_parameters(stop=args.stop, safety=args.safety)
        origin = checkpoint.start
        initial_counts = checkpoint.results
        logger.info("Using power=%d base=%d seq_len=%d from checkpoint",
                    params.power, params.base, params.seq_len)
    else:
        params = SearchParameters(
            power=args.power,
            base=args.base,
            seq_len=args.seq_length,
            start=args.start,
            stop=args.stop,
            safety=args.safety,
        )
        origin = params.start
    logger.debug("Run parameters: %s", params.to_dict())

    results_dir = Path(args.results_dir)
    checkpointer = None
    if args.save > 0:
        store = CheckpointStore(results_dir / power_checkpoint_filename(params, origin))
        checkpointer = PeriodicCheckpointer(store, params, args.save, origin=origin)

    total = None if params.mode == "safety" else params.stop - params.start + 1
    progress = _make_progress(args.progress, total, params.base ** params.seq_len)
    try:
        result = power_sweep(
            params,
            initial_counts=initial_counts,
            origin=origin,
            progress=progress,
            checkpointer=checkpointer,
        )
    finally:
        if progress is not None:
            progress.close()

    print(f"Searched n={params.start}..{result.last_index}, "
          f"last non-matching power was {result.last_any_absent}")
    _print_summary(result)

    output = Path(args.output) if args.output else results_dir / power_results_filename(
        params, result.start, result.last_index)
    CheckpointStore(output).save(result.counts, params, result.last_index, origin=result.start)
    print(f"Saved to {output}")

    if args.plot:
        from apocalypse_search.visualization.plots import plot_non_match_deviations
        plot_non_match_deviations(result.summary(), args.plot, params.base, params.seq_len, params.power)
        print(f"Plot saved to {args.plot}")

    return 0


def cmd_random(args: argparse.Namespace) -> int:
    """Sweep every pattern against uniformly random numbers."""
    from apocalypse_search.config import RandomParameters
    from apocalypse_search.search.sweep import random_sweep, random_results_filename
    from apocalypse_search.utils.checkpoint import (
        METHOD_RANDOM,
        CheckpointStore,
        PeriodicCheckpointer,
        load_checkpoint,
    )

    initial_counts = None
    if args.restart:
        checkpoint = load_checkpoint(args.restart)
        if checkpoint.method != METHOD_RANDOM:
            raise CheckpointCorruptError(f"{args.restart} is a {checkpoint.method} checkpoint, not a random sweep")
        params = checkpoint.resume_parameters(stop=args.stop)
        origin = checkpoint.start
        initial_counts = checkpoint.results
    else:
        params = RandomParameters(
            base=args.base,
            seq_len=args.seq_length,
            length=args.length,
            stop=args.stop,
            seed=args.seed,
        )
        origin = params.start
    logger.debug("Run parameters: %s", params.to_dict())

    output = Path(args.output) if args.output else Path(args.results_dir) / random_results_filename(params)
    store = CheckpointStore(output)
    checkpointer = None
    if args.save > 0:
        checkpointer = PeriodicCheckpointer(store, params, args.save, origin=origin)

    progress = _make_progress(args.progress, params.stop - params.start + 1, params.base ** params.seq_len)
    try:
        result = random_sweep(
            params,
            initial_counts=initial_counts,
            origin=origin,
            progress=progress,
            checkpointer=checkpointer,
        )
    finally:
        if progress is not None:
            progress.close()

    print(f"Checked samples {params.start}..{result.last_index} "
          f"({params.length}-digit numbers, seed {params.seed})")
    _print_summary(result)

    store.save(result.counts, params, result.last_index, origin=result.start)
    print(f"Saved to {output}")

    if args.plot:
        from apocalypse_search.visualization.plots import plot_non_match_deviations
        plot_non_match_deviations(result.summary(), args.plot, params.base, params.seq_len)
        print(f"Plot saved to {args.plot}")

    return 0


def cmd_limit(args: argparse.Namespace) -> int:
    """Find the last power without a given sequence."""
    from apocalypse_search.search.limit import limit_search

    result = limit_search(
        sequence=args.sequence,
        stop=args.stop,
        start=args.start,
        base=args.base,
        power=args.power,
    )

    print(f"Searched to n={result.last_index}, "
          f"last non-apocalypse n was n={result.last_non_apocalypse}")

    if args.plot:
        from apocalypse_search.visualization.plots import plot_apocalypse_density
        plot_apocalypse_density(result.apocalypse_n, args.plot, args.sequence,
                                power=args.power, bin_width=args.bin_width)
        print(f"Plot saved to {args.plot}")

    return 0


def cmd_spiral(args: argparse.Namespace) -> int:
    """Plot a fractal spiral."""
    from apocalypse_search.visualization.fractal import parse_constant, plot_spiral

    s = parse_constant(args.constant)
    print(f"Generating fractal spiral: s={args.constant} ({s}), nmax={args.nmax}")
    plot_spiral(s, args.nmax, args.output, label=args.constant)
    print(f"Saved to {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search for digit sequences in powers and random numbers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--info", action="store_true", help="Print info level log messages")
    parser.add_argument("--debug", action="store_true", help="Print debug level log messages")
    parser.add_argument("--log-file", default=None, help="Also write a debug log to this file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sweep_parser = subparsers.add_parser("sweep", help="Sweep all sequences over p^n")
    sweep_parser.add_argument("--power", type=int, default=2, help="Base power, p, to use")
    sweep_parser.add_argument("--base", type=int, default=10,
                              help="Number base in which to express the result of p^n")
    sweep_parser.add_argument("--seq-length", type=int, default=3, help="Sequence length to search for")
    sweep_parser.add_argument("--start", type=int, default=1,
                              help="Value of n where p^n is the first power searched")
    sweep_parser.add_argument("--stop", type=int, default=None,
                              help="Value of n where p^n is the final power searched")
    sweep_parser.add_argument("--safety", type=int, default=None,
                              help="Instead of --stop, halt after this many powers in a row contain every sequence")
    sweep_parser.add_argument("--save", type=float, default=0,
                              help="Save intermediate results every N minutes (0 disables)")
    sweep_parser.add_argument("--restart", default=None, help="Resume from this checkpoint file")
    sweep_parser.add_argument("--results-dir", default="results", help="Directory for result files")
    sweep_parser.add_argument("--output", "-o", default=None, help="Final results file")
    sweep_parser.add_argument("--plot", default=None, help="Save plot of deviations from the mean")
    sweep_parser.add_argument("--progress", action="store_true", help="Show a progress bar")

    random_parser = subparsers.add_parser("random", help="Sweep all sequences over random numbers")
    random_parser.add_argument("--base", type=int, default=10, help="Number base of the random numbers")
    random_parser.add_argument("--seq-length", type=int, default=3, help="Sequence length to search for")
    random_parser.add_argument("--length", type=int, default=100,
                               help="Digit length of random numbers to generate")
    random_parser.add_argument("--stop", type=int, default=100_000,
                               help="Stop after this many random numbers have been checked")
    random_parser.add_argument("--seed", type=int, default=123456789, help="Random number seed")
    random_parser.add_argument("--save", type=float, default=10,
                               help="Save intermediate results every N minutes (0 disables)")
    random_parser.add_argument("--restart", default=None, help="Resume from this checkpoint file")
    random_parser.add_argument("--results-dir", default="results", help="Directory for result files")
    random_parser.add_argument("--output", "-o", default=None, help="Results file")
    random_parser.add_argument("--plot", default=None, help="Save plot of deviations from the mean")
    random_parser.add_argument("--progress", action="store_true", help="Show a progress bar")

    limit_parser = subparsers.add_parser("limit", help="Find the limit for one sequence")
    limit_parser.add_argument("--sequence", default="666", help="Apocalypse sequence to search for")
    limit_parser.add_argument("--stop", type=int, default=10_000,
                              help="After this many consecutive hits the sequence is deemed complete")
    limit_parser.add_argument("--start", type=int, default=1,
                              help="Value of n where p^n is the first power searched")
    limit_parser.add_argument("--base", type=int, default=10, help="Number base in which to express the result")
    limit_parser.add_argument("--power", type=int, default=2, help="Power to use for generating numbers (p^n)")
    limit_parser.add_argument("--plot", default=None, help="Save plot of apocalyptic density")
    limit_parser.add_argument("--bin-width", type=int, default=0, help="Width of bins for histogram plot")

    spiral_parser = subparsers.add_parser("spiral", help="Plot a fractal spiral")
    spiral_parser.add_argument("--constant", "-s", required=True,
                               help="Constant controlling the spiral angle (pi, e, phi or a number)")
    spiral_parser.add_argument("--nmax", "-n", type=int, default=10_000, help="Number of iterations")
    spiral_parser.add_argument("output", nargs="?", default="spiral.png", help="Output file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    from apocalypse_search.utils.log import level_from_flags, setup_logger

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logger(level_from_flags(args.info, args.debug),
                 Path(args.log_file) if args.log_file else None)

    commands = {
        "sweep": cmd_sweep,
        "random": cmd_random,
        "limit": cmd_limit,
        "spiral": cmd_spiral,
    }

    try:
        return commands[args.command](args)
    except (InvalidParameterError, CheckpointCorruptError) as e:
        logger.error("Error: %s", e)
        return 2
    except FileNotFoundError as e:
        logger.error("File not found: %s", e.filename)
        return 2


if __name__ == "__main__":
    sys.exit(main())
