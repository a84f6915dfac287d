"""
Tests for core dataclasses.

Focus on Metrics bookkeeping and SelectionRequest validation.
"""

import numpy as np
import pytest

from deterministic_select.exceptions import InvalidArgument
from deterministic_select.models import Metrics, ScalingResult, SelectionRequest, TrialResult


class TestMetrics:
    """Test Metrics counters and helpers."""

    def test_descend_tracks_current_and_max_depth(self) -> None:
        # Arrange
        metrics = Metrics()

        # Act
        with metrics.descend():
            with metrics.descend():
                assert metrics.recursion_depth == 2
            assert metrics.recursion_depth == 1

        # Assert
        assert metrics.recursion_depth == 0
        assert metrics.max_recursion_depth == 2

    def test_descend_unwinds_on_exception(self) -> None:
        metrics = Metrics()

        with pytest.raises(RuntimeError):
            with metrics.descend():
                raise RuntimeError("boom")

        assert metrics.recursion_depth == 0
        assert metrics.max_recursion_depth == 1

    def test_snapshot_and_str(self) -> None:
        metrics = Metrics(comparisons=10, swaps=3, allocations=1, max_recursion_depth=2, elapsed_nanos=1_500_000)

        snapshot = metrics.snapshot()

        assert snapshot == {
            "comparisons": 10,
            "swaps": 3,
            "allocations": 1,
            "max_recursion_depth": 2,
            "elapsed_nanos": 1_500_000,
        }
        assert metrics.elapsed_ms == 1.5
        assert str(metrics) == (
            "Metrics{comparisons=10, swaps=3, allocations=1, maxRecursionDepth=2, elapsedNanos=1500000}"
        )


class TestSelectionRequest:
    """Validation performed before any selection work."""

    def test_valid_request(self) -> None:
        request = SelectionRequest([3, 1, 2], 2)

        assert request.size == 3

    def test_numpy_rank_is_accepted(self) -> None:
        request = SelectionRequest(np.array([3, 1, 2]), np.int64(1))

        assert request.size == 3

    @pytest.mark.parametrize(
        "values,k,message",
        [
            ([], 0, "empty input"),
            ([5], -1, "rank out of range"),
            ([5], 1, "rank out of range"),
            ([5], True, "rank out of range"),
            ([5], "0", "rank out of range"),
        ],
    )
    def test_invalid_requests(self, values: list[int], k: object, message: str) -> None:
        with pytest.raises(InvalidArgument, match=message):
            _ = SelectionRequest(values, k)  # type: ignore[arg-type]


class TestResults:
    """Harness record helpers."""

    def test_trial_result_ok(self) -> None:
        assert TrialResult(k=0, expected=1, actual=1).ok
        assert not TrialResult(k=0, expected=1, actual=2).ok

    def test_scaling_comparisons_per_element(self) -> None:
        row = ScalingResult(size=1000, k=500, comparisons=12_000, swaps=0, max_recursion_depth=3, elapsed_ms=1.0)

        assert row.comparisons_per_element == 12.0
