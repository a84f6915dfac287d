"""
Median-of-medians selector implementation.

Worst-case linear k-th smallest selection. All steps work in place on one
private working list using inclusive (low, high) bounds; nested
median-of-medians calls reuse that same list.
"""

import time
from collections.abc import Sequence

from typing_extensions import override

from ..interfaces import Selector
from ..logging_config import get_logger
from ..models import Metrics, PartitionScheme, SelectionRequest

GROUP_SIZE = 5

# Module-level logger
logger = get_logger("median_of_medians")


def swap(buffer: list[int], i: int, j: int, metrics: Metrics) -> None:
    """Exchange two slots. Exchanging a slot with itself is not counted."""
    if i == j:
        return
    buffer[i], buffer[j] = buffer[j], buffer[i]
    metrics.swaps += 1


def insertion_sort(buffer: list[int], low: int, high: int, metrics: Metrics) -> None:
    """Stable insertion sort of buffer[low..high]. Shifts are not swaps."""
    for i in range(low + 1, high + 1):
        key = buffer[i]
        j = i - 1
        while j >= low:
            metrics.comparisons += 1
            if buffer[j] <= key:
                break
            buffer[j + 1] = buffer[j]
            j -= 1
        buffer[j + 1] = key


def partition_around_value(
    buffer: list[int], low: int, high: int, pivot: int, metrics: Metrics
) -> int:
    """
    Lomuto partition of buffer[low..high] around a pivot value.

    The pivot is given by value because its position moves while group
    medians are compacted. Elements equal to the pivot end up on the high side.

    Returns:
        Final index p of the pivot: [low, p) < pivot, (p, high] >= pivot
    """
    pivot_idx = low
    while pivot_idx <= high:
        metrics.comparisons += 1
        if buffer[pivot_idx] == pivot:
            break
        pivot_idx += 1
    else:
        raise ValueError(f"pivot value {pivot} not found in range [{low}, {high}]")
    swap(buffer, pivot_idx, high, metrics)

    store = low
    for i in range(low, high):
        metrics.comparisons += 1
        if buffer[i] < pivot:
            swap(buffer, store, i, metrics)
            store += 1
    swap(buffer, store, high, metrics)
    return store


def partition_three_way(
    buffer: list[int], low: int, high: int, pivot: int, metrics: Metrics
) -> tuple[int, int]:
    """
    Dutch-flag partition of buffer[low..high] around a pivot value.

    Returns:
        (lt, gt) such that [low, lt) < pivot, [lt, gt] == pivot, (gt, high] > pivot
    """
    lt, i, gt = low, low, high
    while i <= gt:
        value = buffer[i]
        metrics.comparisons += 1
        if value < pivot:
            swap(buffer, lt, i, metrics)
            lt += 1
            i += 1
            continue
        metrics.comparisons += 1
        if value > pivot:
            swap(buffer, i, gt, metrics)
            gt -= 1
        else:
            i += 1
    return lt, gt


def collect_equal(
    buffer: list[int], low: int, high: int, pivot: int, metrics: Metrics
) -> int:
    """
    Move values equal to pivot in buffer[low..high] to the front of the range.

    Only called on a range already known to hold values >= pivot.

    Returns:
        Index of the last pivot-equal value, or low - 1 if there is none
    """
    store = low
    for i in range(low, high + 1):
        metrics.comparisons += 1
        if buffer[i] == pivot:
            swap(buffer, store, i, metrics)
            store += 1
    return store - 1


def median_of_medians(
    buffer: list[int],
    low: int,
    high: int,
    metrics: Metrics,
    scheme: PartitionScheme = PartitionScheme.LOMUTO,
) -> int:
    """
    Return a pivot value between the 30th and 70th percentile of the range.

    Each group of five is sorted and its median swapped to the front of the
    range, so the medians end up packed in [low, write) without extra storage.
    """
    n = high - low + 1
    if n <= GROUP_SIZE:
        insertion_sort(buffer, low, high, metrics)
        return buffer[low + n // 2]

    write = low
    for group_low in range(low, high + 1, GROUP_SIZE):
        group_high = min(group_low + GROUP_SIZE - 1, high)
        insertion_sort(buffer, group_low, group_high, metrics)
        median_idx = group_low + (group_high - group_low) // 2
        swap(buffer, write, median_idx, metrics)
        write += 1

    mid = low + (write - low - 1) // 2
    with metrics.descend():
        return select_in_place(buffer, low, write - 1, mid, metrics, scheme)


def select_in_place(
    buffer: list[int],
    low: int,
    high: int,
    k: int,
    metrics: Metrics,
    scheme: PartitionScheme = PartitionScheme.LOMUTO,
) -> int:
    """
    Narrow [low, high] towards absolute rank k until it is found.

    The descent always follows the side holding k. That side is solved by a
    tracked recursive call when it is no larger than the other side, otherwise
    the loop carries on with narrowed bounds.

    Lomuto leaves copies of the pivot on the high side. When the pivot is the
    range minimum and k lies above it, those copies are gathered next to it in
    one pass so the range cannot shrink by a single element per round.
    """
    while True:
        if low == high:
            return buffer[low]

        pivot = median_of_medians(buffer, low, high, metrics, scheme)
        if scheme is PartitionScheme.THREE_WAY:
            lt, gt = partition_three_way(buffer, low, high, pivot, metrics)
        else:
            lt = gt = partition_around_value(buffer, low, high, pivot, metrics)
            # Pivot is the range minimum, so (lt, high] holds only values >= pivot
            if lt == low and k > lt:
                gt = collect_equal(buffer, lt + 1, high, pivot, metrics)

        if lt <= k <= gt:
            return buffer[k]

        left_size = lt - low
        right_size = high - gt

        if k < lt:
            if left_size <= right_size:
                with metrics.descend():
                    return select_in_place(buffer, low, lt - 1, k, metrics, scheme)
            high = lt - 1
        else:
            if right_size <= left_size:
                with metrics.descend():
                    return select_in_place(buffer, gt + 1, high, k, metrics, scheme)
            low = gt + 1


class MedianOfMediansSelector(Selector):
    """Deterministic selector with a worst-case linear bound."""

    def __init__(self, scheme: PartitionScheme = PartitionScheme.LOMUTO):
        """Initialize median-of-medians selector.

        Args:
            scheme: Partitioning used by the descent. LOMUTO is the two-way
                    split with duplicates on the high side; THREE_WAY groups
                    pivot duplicates during the split and reports different
                    swap counts.
        """
        self.scheme = scheme

    @override
    def select(self, values: Sequence[int], k: int, metrics: Metrics | None = None) -> int:
        """Return sorted(values)[k] without mutating values."""
        request = SelectionRequest(values, k)
        if metrics is None:
            metrics = Metrics()

        working = list(request.values)
        metrics.allocations += 1

        started = time.perf_counter_ns()
        result = select_in_place(working, 0, len(working) - 1, request.k, metrics, self.scheme)
        metrics.elapsed_nanos = time.perf_counter_ns() - started

        logger.debug(f"Selected rank {request.k} of {request.size} ({self.scheme.value}): {metrics}")
        return result
