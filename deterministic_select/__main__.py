"""
CLI entry point for deterministic select.

Parses arguments, validates config, wires the harness and prints results.
"""

import argparse
import sys
from argparse import Namespace
from collections.abc import Sequence
from typing import TypedDict

from prettytable import PrettyTable

from .exceptions import ConfigurationError, SelectionError
from .harness import BenchConfig, Harness, all_ok
from .logging_config import setup_logging, get_logger
from .models import PartitionScheme, ScalingResult, TrialResult


class CLIArgs(TypedDict):
    """Typed representation of parsed CLI arguments."""
    size: int
    seed: int
    ranks: list[int] | None
    partition: str
    scaling: list[int]
    debug: bool
    log_level: str
    log_file: str | None


def parse_args(argv: Sequence[str] | None = None) -> Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Deterministic Select - median-of-medians order statistics"
    )

    _ = parser.add_argument(
        "--size",
        type=int,
        default=20_000,
        help="Number of random elements to select from (default: 20000)"
    )
    _ = parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for the generated input (default: 42)"
    )
    _ = parser.add_argument(
        "--ranks",
        type=int,
        nargs="+",
        help="Zero-based ranks to select (default: min, quartiles, median, max)"
    )
    _ = parser.add_argument(
        "--partition",
        choices=[scheme.value for scheme in PartitionScheme],
        default=PartitionScheme.LOMUTO.value,
        help="Partitioning scheme (default: lomuto)"
    )
    _ = parser.add_argument(
        "--scaling",
        type=int,
        nargs="*",
        default=[],
        help="Input sizes for a comparison-growth run, e.g. --scaling 1000 5000 10000"
    )
    _ = parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set logging level (default: INFO)"
    )
    _ = parser.add_argument(
        "--log-file",
        default="deterministic_select.log",
        help="Rotating log file path (default: deterministic_select.log)"
    )
    _ = parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Log to stderr only"
    )

    return parser.parse_args(argv)


def args_to_typed(ns: Namespace) -> CLIArgs:
    """Convert argparse Namespace to typed CLIArgs."""
    return CLIArgs(
        size=ns.size,
        seed=ns.seed,
        ranks=ns.ranks,
        partition=ns.partition,
        scaling=ns.scaling,
        debug=ns.debug,
        log_level=ns.log_level,
        log_file=None if ns.no_log_file else ns.log_file,
    )


def wire_components(args: CLIArgs) -> Harness:
    """Build the harness from CLI arguments. Raises ConfigurationError on bad values."""
    logger = get_logger("wire_components")

    config = BenchConfig(
        size=args["size"],
        seed=args["seed"],
        ranks=args["ranks"],
        partition=PartitionScheme(args["partition"]),
        sizes=args["scaling"],
    )
    logger.info(f"Configuration: size={config.size}, seed={config.seed}, partition={config.partition.value}")
    return Harness(config)


def results_table(results: Sequence[TrialResult]) -> PrettyTable:
    """Render trial results, one row per rank."""
    table = PrettyTable()
    table.field_names = ["k", "OK", "Time (ms)", "Comparisons", "Swaps", "Depth"]
    for column in ("k", "Time (ms)", "Comparisons", "Swaps", "Depth"):
        table.align[column] = "r"

    for result in results:
        table.add_row([
            result.k,
            "yes" if result.ok else "NO",
            f"{result.metrics.elapsed_ms:.3f}",
            result.metrics.comparisons,
            result.metrics.swaps,
            result.metrics.max_recursion_depth,
        ])
    return table


def scaling_table(rows: Sequence[ScalingResult]) -> PrettyTable:
    """Render comparison growth, one row per input size."""
    table = PrettyTable()
    table.field_names = ["n", "Comparisons", "Comparisons/n", "Swaps", "Depth", "Time (ms)"]
    table.align = "r"

    for row in rows:
        table.add_row([
            row.size,
            row.comparisons,
            f"{row.comparisons_per_element:.2f}",
            row.swaps,
            row.max_recursion_depth,
            f"{row.elapsed_ms:.3f}",
        ])
    return table


def main(argv: Sequence[str] | None = None) -> None:
    """Main CLI entry point."""
    args = args_to_typed(parse_args(argv))
    setup_logging(level=args["log_level"], debug=args["debug"], log_file=args["log_file"])
    logger = get_logger("main")

    try:
        harness = wire_components(args)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"Error: {e}")
        sys.exit(1)

    print("Deterministic Select - median-of-medians")
    print("=" * 60)
    print(f"Size: {harness.config.size}")
    print(f"Seed: {harness.config.seed}")
    print(f"Partition: {harness.config.partition.value}")
    print("=" * 60)

    try:
        results = harness.run()
        print(results_table(results))

        if harness.config.sizes:
            print("\nComparison growth:")
            print(scaling_table(harness.scaling()))
    except SelectionError as e:
        logger.error(f"Selection failed: {e}")
        print(f"Error: {e}")
        sys.exit(1)

    if not all_ok(results):
        logger.error("At least one selection disagreed with the sorting oracle")
        print("\nFAILED: results disagree with the sorting oracle")
        sys.exit(1)

    logger.info("All selections matched the sorting oracle")
    print("\nAll selections matched the sorting oracle")


if __name__ == "__main__":
    main()
