"""
Tests for the verification harness.

End-to-end runs with real selectors on seeded random input.
"""

import pytest

from deterministic_select.exceptions import ConfigurationError
from deterministic_select.harness import BenchConfig, Harness, all_ok, default_ranks
from deterministic_select.interfaces import Selector
from deterministic_select.models import Metrics, PartitionScheme


class OffByOneSelector(Selector):
    """Deliberately wrong selector to exercise mismatch reporting."""

    def select(self, values, k, metrics=None) -> int:
        return sorted(values)[k] + 1


class TestBenchConfig:
    """Configuration validation."""

    def test_default_ranks(self) -> None:
        assert default_ranks(20_000) == [0, 5000, 10_000, 15_000, 19_999]

    def test_default_ranks_deduplicated_for_tiny_sizes(self) -> None:
        assert default_ranks(1) == [0]
        assert default_ranks(2) == [0, 1]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"size": 0},
            {"size": 10, "ranks": []},
            {"size": 10, "ranks": [10]},
            {"size": 10, "value_range": (5, 5)},
            {"size": 10, "sizes": [100, 0]},
        ],
    )
    def test_invalid_config_raises(self, kwargs: dict) -> None:
        with pytest.raises(ConfigurationError):
            _ = BenchConfig(**kwargs)


class TestHarness:
    """Harness runs against the sorting oracle."""

    @pytest.mark.parametrize("scheme", list(PartitionScheme))
    def test_run_matches_oracle(self, scheme: PartitionScheme) -> None:
        # Arrange
        harness = Harness(BenchConfig(size=3000, seed=1, partition=scheme))

        # Act
        results = harness.run()

        # Assert
        assert [r.k for r in results] == default_ranks(3000)
        assert all_ok(results)
        for result in results:
            assert result.metrics.allocations == 1
            assert result.metrics.recursion_depth == 0

    def test_generated_input_is_reproducible(self) -> None:
        config = BenchConfig(size=100, seed=7, value_range=(0, 9))

        first = Harness(config).generate_input(100)
        second = Harness(config).generate_input(100)

        assert first == second
        assert all(isinstance(v, int) and 0 <= v <= 9 for v in first)

    def test_duplicate_heavy_input(self) -> None:
        config = BenchConfig(
            size=2000, seed=3, value_range=(0, 3), ranks=[0, 999, 1999], partition=PartitionScheme.THREE_WAY
        )
        harness = Harness(config)

        assert all_ok(harness.run())

    def test_mismatch_is_reported(self) -> None:
        harness = Harness(BenchConfig(size=50, ranks=[10]), selector=OffByOneSelector())

        results = harness.run()

        assert not all_ok(results)
        assert results[0].actual == results[0].expected + 1

    def test_scaling_comparisons_stay_linear(self) -> None:
        # Arrange
        harness = Harness(BenchConfig(size=10, seed=42))

        # Act
        rows = harness.scaling([1000, 5000, 10_000])

        # Assert
        assert [row.size for row in rows] == [1000, 5000, 10_000]
        assert [row.k for row in rows] == [500, 2500, 5000]
        ratios = [row.comparisons_per_element for row in rows]
        assert max(ratios) < 40, f"comparisons per element too high: {ratios}"
        assert ratios[-1] < 2 * ratios[0]

    def test_scaling_rejects_bad_rank(self) -> None:
        with pytest.raises(ConfigurationError):
            Harness(BenchConfig(size=10)).scaling([100], rank=1.5)

    def test_scaling_top_rank_is_clamped(self) -> None:
        rows = Harness(BenchConfig(size=10)).scaling([7], rank=1.0)

        assert rows[0].k == 6


def test_custom_oracle_is_used() -> None:
    """Any Selector can stand in as the oracle."""

    class ZeroOracle(Selector):
        def select(self, values, k, metrics: Metrics | None = None) -> int:
            return 0

    harness = Harness(BenchConfig(size=20, ranks=[0], value_range=(1, 5)), oracle=ZeroOracle())

    assert not all_ok(harness.run())
