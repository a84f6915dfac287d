"""
Deterministic Select - worst-case linear order statistics

Computes the k-th smallest element of an unordered integer sequence with the
median-of-medians algorithm, recording comparisons, swaps, recursion depth
and timing for each call.
"""

from collections.abc import Sequence

from .exceptions import ConfigurationError, InvalidArgument, SelectionError
from .models import Metrics, PartitionScheme, ScalingResult, SelectionRequest, TrialResult
from .interfaces import Selector
from .selectors import MedianOfMediansSelector, SortingSelector
from .harness import BenchConfig, Harness

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "InvalidArgument",
    "SelectionError",
    "Metrics",
    "PartitionScheme",
    "ScalingResult",
    "SelectionRequest",
    "TrialResult",
    "Selector",
    "MedianOfMediansSelector",
    "SortingSelector",
    "BenchConfig",
    "Harness",
    "select",
]


def select(values: Sequence[int], k: int, metrics: Metrics | None = None) -> int:
    """Return the k-th smallest (zero-based) element of values using median-of-medians."""
    return MedianOfMediansSelector().select(values, k, metrics)
