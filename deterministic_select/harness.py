"""
Verification and benchmark harness for selectors.

Builds seeded random inputs, runs the selector under test for several ranks
and checks every answer against a full-sort oracle.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from loguru import Logger

from .exceptions import ConfigurationError
from .interfaces import Selector
from .logging_config import get_logger
from .models import Metrics, PartitionScheme, ScalingResult, TrialResult
from .selectors import MedianOfMediansSelector, SortingSelector

INT32_RANGE = (-(2**31), 2**31 - 1)


def default_ranks(size: int) -> list[int]:
    """Min, quartiles, median and max of a sequence of the given size."""
    candidates = [0, size // 4, size // 2, 3 * size // 4, size - 1]
    return list(dict.fromkeys(candidates))


@dataclass
class BenchConfig:
    """Configuration for a harness run."""

    size: int = 20_000  # elements in the random input
    seed: int = 42
    ranks: list[int] | None = None  # None = min, quartiles, median, max
    value_range: tuple[int, int] = INT32_RANGE  # inclusive bounds of generated values
    partition: PartitionScheme = PartitionScheme.LOMUTO
    sizes: list[int] = field(default_factory=list)  # sizes for the scaling pass

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.size <= 0:
            raise ConfigurationError(f"size must be positive, got {self.size}")
        low, high = self.value_range
        if low >= high:
            raise ConfigurationError(f"value_range must satisfy low < high, got {self.value_range}")
        if self.ranks is not None:
            if not self.ranks:
                raise ConfigurationError("ranks must not be empty")
            bad = [k for k in self.ranks if not (0 <= k < self.size)]
            if bad:
                raise ConfigurationError(f"ranks out of range for size {self.size}: {bad}")
        bad_sizes = [n for n in self.sizes if n <= 0]
        if bad_sizes:
            raise ConfigurationError(f"scaling sizes must be positive, got {bad_sizes}")

    def resolved_ranks(self) -> list[int]:
        return list(self.ranks) if self.ranks is not None else default_ranks(self.size)


class Harness:
    """Runs a selector against the sorting oracle and collects metrics."""

    def __init__(
        self,
        config: BenchConfig,
        selector: Selector | None = None,
        oracle: Selector | None = None,
    ):
        """Initialize harness.

        Args:
            config: Run configuration
            selector: Selector under test (default: median-of-medians with config.partition)
            oracle: Selector providing expected values (default: SortingSelector)
        """
        self.config: BenchConfig = config
        self.selector: Selector = selector or MedianOfMediansSelector(config.partition)
        self.oracle: Selector = oracle or SortingSelector()
        self.logger: Logger = get_logger("harness")

    def generate_input(self, size: int) -> list[int]:
        """Seeded random integers in config.value_range."""
        low, high = self.config.value_range
        rng = np.random.default_rng(self.config.seed)
        return rng.integers(low, high, size=size, endpoint=True).tolist()

    def run(self) -> list[TrialResult]:
        """Select every configured rank from one random input and check it."""
        values = self.generate_input(self.config.size)
        ranks = self.config.resolved_ranks()
        self.logger.info(f"Running {len(ranks)} selections on {len(values)} elements (seed={self.config.seed})")

        results: list[TrialResult] = []
        for k in ranks:
            metrics = Metrics()
            actual = self.selector.select(values, k, metrics)
            expected = self.oracle.select(values, k)
            result = TrialResult(k=k, expected=expected, actual=actual, metrics=metrics)
            if result.ok:
                self.logger.debug(f"k={k} ok: {metrics}")
            else:
                self.logger.error(f"k={k} mismatch: expected {expected}, got {actual}")
            results.append(result)

        failures = sum(1 for r in results if not r.ok)
        self.logger.info(f"Completed {len(results)} selections, {failures} mismatches")
        return results

    def scaling(self, sizes: Sequence[int] | None = None, rank: float = 0.5) -> list[ScalingResult]:
        """
        Record comparison counts for growing input sizes.

        Args:
            sizes: Input sizes to try (default: config.sizes)
            rank: Relative rank in [0, 1] selected at each size

        Returns:
            One ScalingResult per size, in the given order
        """
        if not (0.0 <= rank <= 1.0):
            raise ConfigurationError(f"rank must be within [0, 1], got {rank}")
        sizes = list(sizes) if sizes is not None else list(self.config.sizes)
        if any(n <= 0 for n in sizes):
            raise ConfigurationError(f"scaling sizes must be positive, got {sizes}")

        rows: list[ScalingResult] = []
        for size in sizes:
            values = self.generate_input(size)
            k = min(int(rank * size), size - 1)
            metrics = Metrics()
            _ = self.selector.select(values, k, metrics)
            row = ScalingResult(
                size=size,
                k=k,
                comparisons=metrics.comparisons,
                swaps=metrics.swaps,
                max_recursion_depth=metrics.max_recursion_depth,
                elapsed_ms=metrics.elapsed_ms,
            )
            self.logger.info(f"n={size}: {row.comparisons_per_element:.2f} comparisons per element")
            rows.append(row)
        return rows


def all_ok(results: Sequence[TrialResult]) -> bool:
    return all(r.ok for r in results)
