"""
Abstract base classes defining the interfaces for deterministic select.

All interfaces are synchronous; one call runs to completion on the calling thread.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from .models import Metrics


class Selector(ABC):
    """Interface for selecting an order statistic from a sequence."""

    @abstractmethod
    def select(self, values: Sequence[int], k: int, metrics: Metrics | None = None) -> int:
        """
        Return the element at zero-based rank k of sorted(values).

        Must not mutate values. Raises InvalidArgument before any work
        (and before touching metrics) if values is empty or k is out of range.

        Args:
            values: Non-empty sequence of integers
            k: Target rank, 0 <= k < len(values)
            metrics: Optional statistics sink updated during the call

        Returns:
            The selected value
        """
        pass
