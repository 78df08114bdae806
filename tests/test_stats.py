"""Property-based tests for the statistics aggregator.

**Feature: trade-bias-detector**
"""

import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradebias.engine.stats import compute_stats
from tradebias.models import RealizedPnL

amounts = st.floats(min_value=0.0, max_value=100000.0, allow_nan=False, allow_infinity=False)


class TestStatsDefaults:
    """
    **Feature: trade-bias-detector, Property 5: Zero Defaults**

    *For any* empty event list, every metric is zero.
    """

    def test_no_events(self):
        stats = compute_stats(RealizedPnL(), total_trades=0)

        assert stats.total_trades == 0
        assert stats.win_rate == 0.0
        assert stats.avg_profit == 0.0
        assert stats.avg_loss == 0.0
        assert stats.profit_factor == 0.0

    def test_total_trades_is_passed_through(self):
        stats = compute_stats(RealizedPnL(), total_trades=7)

        assert stats.total_trades == 7

    def test_profit_factor_zero_without_losses(self):
        stats = compute_stats(RealizedPnL(profits=[50.0]), total_trades=2)

        assert stats.avg_profit == 50.0
        assert stats.avg_loss == 0.0
        assert stats.win_rate == 100.0
        assert stats.profit_factor == 0.0

    def test_profit_factor_zero_with_only_breakeven_losses(self):
        stats = compute_stats(RealizedPnL(profits=[10.0], losses=[0.0]), total_trades=4)

        assert stats.avg_loss == 0.0
        assert stats.profit_factor == 0.0


class TestStatsValues:
    """
    **Feature: trade-bias-detector, Property 6: Aggregate Accuracy**

    *For any* profits and losses, averages are means and the profit factor
    is total profits over total losses.
    """

    def test_losses_only(self):
        stats = compute_stats(RealizedPnL(losses=[25.0, 10.0]), total_trades=3)

        assert stats.avg_loss == 17.5
        assert stats.avg_profit == 0.0
        assert stats.win_rate == 0.0
        assert stats.profit_factor == 0.0

    def test_mixed_events(self):
        stats = compute_stats(
            RealizedPnL(profits=[30.0, 10.0], losses=[5.0, 10.0, 5.0]),
            total_trades=10,
        )

        assert stats.avg_profit == 20.0
        assert stats.avg_loss == pytest.approx(20.0 / 3)
        assert stats.win_rate == 40.0
        assert stats.profit_factor == pytest.approx(2.0)

    def test_win_rate_rounded_to_one_decimal(self):
        stats = compute_stats(RealizedPnL(profits=[1.0], losses=[1.0, 1.0]), total_trades=3)

        assert stats.win_rate == 33.3

    @given(
        profits=st.lists(amounts.filter(lambda x: x > 0), max_size=30),
        losses=st.lists(st.one_of(st.just(0.0), amounts.filter(lambda x: x >= 0.01)), max_size=30),
    )
    @settings(max_examples=100)
    def test_bounds(self, profits, losses):
        """Win rate stays within [0, 100] and averages are non-negative."""
        stats = compute_stats(RealizedPnL(profits=profits, losses=losses), total_trades=0)

        assert 0 <= stats.win_rate <= 100
        assert stats.avg_profit >= 0
        assert stats.avg_loss >= 0
        assert stats.profit_factor >= 0
        assert math.isfinite(stats.profit_factor)

    @given(
        profits=st.lists(amounts.filter(lambda x: x > 0), max_size=30),
        losses=st.lists(amounts.filter(lambda x: x >= 0.01), min_size=1, max_size=30),
    )
    @settings(max_examples=100)
    def test_profit_factor_is_ratio_of_totals(self, profits, losses):
        stats = compute_stats(RealizedPnL(profits=profits, losses=losses), total_trades=0)

        assert stats.profit_factor == pytest.approx(sum(profits) / sum(losses), rel=1e-9, abs=1e-12)
