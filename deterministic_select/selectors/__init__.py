"""
Selector implementations.

Provides implementations of the Selector interface for picking the k-th
smallest element of a sequence.

Available implementations:
- MedianOfMediansSelector: Worst-case linear deterministic selection
- SortingSelector: Full-sort lookup, used as the correctness oracle
"""

from .median_of_medians import MedianOfMediansSelector
from .sorting_selector import SortingSelector

__all__ = ["MedianOfMediansSelector", "SortingSelector"]
