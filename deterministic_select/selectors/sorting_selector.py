"""
Sorting selector implementation.

Full-sort lookup used as the expected-value oracle by the harness.
"""

import time
from collections.abc import Sequence

from typing_extensions import override

from ..interfaces import Selector
from ..models import Metrics, SelectionRequest


class SortingSelector(Selector):
    """Oracle selector - sorts a copy and indexes it. O(n log n)."""

    @override
    def select(self, values: Sequence[int], k: int, metrics: Metrics | None = None) -> int:
        """Return sorted(values)[k]; only allocations and time are recorded."""
        request = SelectionRequest(values, k)
        if metrics is None:
            metrics = Metrics()

        started = time.perf_counter_ns()
        ordered = sorted(request.values)
        metrics.allocations += 1
        result = ordered[request.k]
        metrics.elapsed_nanos = time.perf_counter_ns() - started
        return result
