"""
Core dataclasses for the deterministic select package.

Defines the Metrics sink, validated selection requests and harness records.
"""

import numbers
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import TypedDict

from .exceptions import InvalidArgument


class MetricsSnapshot(TypedDict):
    """TypedDict for a frozen copy of Metrics counters."""
    comparisons: int
    swaps: int
    allocations: int
    max_recursion_depth: int
    elapsed_nanos: int


class PartitionScheme(str, Enum):
    """How a range is split around the pivot value."""

    LOMUTO = "lomuto"
    THREE_WAY = "three-way"


@dataclass
class Metrics:
    """
    Mutable counters filled in by one selection call.

    Owned by the caller and passed by reference into every step. Values are
    purely observational and never influence the result.
    """

    comparisons: int = 0
    swaps: int = 0
    allocations: int = 0
    recursion_depth: int = 0
    max_recursion_depth: int = 0
    elapsed_nanos: int = 0

    def on_enter(self) -> None:
        self.recursion_depth += 1
        if self.recursion_depth > self.max_recursion_depth:
            self.max_recursion_depth = self.recursion_depth

    def on_exit(self) -> None:
        self.recursion_depth -= 1

    @contextmanager
    def descend(self) -> Iterator[None]:
        """Track one nested recursive call for the duration of the block."""
        self.on_enter()
        try:
            yield
        finally:
            self.on_exit()

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_nanos / 1e6

    def reset(self) -> None:
        """Zero every counter so the instance can be reused for another call."""
        self.comparisons = 0
        self.swaps = 0
        self.allocations = 0
        self.recursion_depth = 0
        self.max_recursion_depth = 0
        self.elapsed_nanos = 0

    def snapshot(self) -> MetricsSnapshot:
        return MetricsSnapshot(
            comparisons=self.comparisons,
            swaps=self.swaps,
            allocations=self.allocations,
            max_recursion_depth=self.max_recursion_depth,
            elapsed_nanos=self.elapsed_nanos,
        )

    def __str__(self) -> str:
        return (
            f"Metrics{{comparisons={self.comparisons}, swaps={self.swaps}, "
            f"allocations={self.allocations}, maxRecursionDepth={self.max_recursion_depth}, "
            f"elapsedNanos={self.elapsed_nanos}}}"
        )


@dataclass
class SelectionRequest:
    """A sequence and the zero-based rank to select from it."""

    values: Sequence[int]
    k: int

    def __post_init__(self) -> None:
        """Validate request before any work is done."""
        if len(self.values) == 0:
            raise InvalidArgument("empty input")
        if isinstance(self.k, bool) or not isinstance(self.k, numbers.Integral):
            raise InvalidArgument("rank out of range")
        if not (0 <= self.k < len(self.values)):
            raise InvalidArgument("rank out of range")

    @property
    def size(self) -> int:
        return len(self.values)


@dataclass
class TrialResult:
    """Outcome of one harness call compared against the oracle."""

    k: int
    expected: int
    actual: int
    metrics: Metrics = field(default_factory=Metrics)

    @property
    def ok(self) -> bool:
        return self.expected == self.actual


@dataclass
class ScalingResult:
    """Comparison growth figures for one input size."""

    size: int
    k: int
    comparisons: int
    swaps: int
    max_recursion_depth: int
    elapsed_ms: float

    @property
    def comparisons_per_element(self) -> float:
        return self.comparisons / self.size
