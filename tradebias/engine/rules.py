"""Heuristic behavioral bias rules.

Each rule inspects the trade log, the realized P&L and the summary stats
and either returns one BiasInsight or None. Rules are independent and run
in a fixed order; several can fire for the same log.
"""

import logging
from collections import Counter
from typing import Callable, Optional

from pydantic import BaseModel, Field

from tradebias.models import BiasInsight, RealizedPnL, Trade, TradeStats

logger = logging.getLogger(__name__)


class BiasThresholds(BaseModel):
    """Named constants used by the bias rules."""

    loss_aversion_ratio: float = Field(default=1.5, gt=0, description="avg loss / avg profit trigger")
    loss_aversion_metric_scale: float = Field(default=50.0, description="Metric multiplier for the loss ratio")
    overtrading_trades_per_symbol: float = Field(default=8.0, description="Trades per symbol trigger")
    overtrading_metric_scale: float = Field(default=10.0, description="Metric multiplier for trades per symbol")
    recency_window_divisor: int = Field(default=3, gt=0, description="Recent window is the last 1/N of trades")
    recency_concentration_pct: float = Field(default=40.0, description="Recent share trigger (%)")
    confirmation_concentration_pct: float = Field(default=25.0, description="Top symbol share trigger (%)")
    strategy_min_win_rate: float = Field(default=40.0, description="Win rate floor (%)")
    metric_cap: float = Field(default=100.0, description="Upper bound for scaled metrics")

    model_config = {"frozen": True}


DEFAULT_THRESHOLDS = BiasThresholds()


class RuleContext:
    """Inputs shared by every rule for one analysis run."""

    def __init__(
        self,
        trades: list[Trade],
        realized: RealizedPnL,
        stats: TradeStats,
        thresholds: BiasThresholds,
    ):
        self.trades = trades
        self.realized = realized
        self.stats = stats
        self.thresholds = thresholds
        self.symbol_counts = Counter(trade.symbol for trade in trades)

    @property
    def total_trades(self) -> int:
        return len(self.trades)


def check_loss_aversion(ctx: RuleContext) -> Optional[BiasInsight]:
    """Average loss much larger than average profit.

    Needs at least one profit: with no profits the loss ratio is undefined
    and the rule stays silent.
    """
    t = ctx.thresholds
    avg_profit = ctx.stats.avg_profit
    avg_loss = ctx.stats.avg_loss

    if avg_profit <= 0 or avg_loss <= avg_profit * t.loss_aversion_ratio:
        return None

    return BiasInsight(
        type="Loss Aversion Bias",
        severity="high",
        description=(
            "Your average loss is significantly higher than your average profit, "
            "suggesting you may be holding onto losing positions too long."
        ),
        recommendation=(
            "Implement strict stop-loss rules and stick to them. "
            "Cut losses quickly and let winners run."
        ),
        metric=min(avg_loss / avg_profit * t.loss_aversion_metric_scale, t.metric_cap),
    )


def check_overtrading(ctx: RuleContext) -> Optional[BiasInsight]:
    """Many trades per distinct symbol."""
    t = ctx.thresholds
    if not ctx.symbol_counts:
        return None

    trades_per_symbol = ctx.total_trades / len(ctx.symbol_counts)
    if trades_per_symbol <= t.overtrading_trades_per_symbol:
        return None

    return BiasInsight(
        type="Overtrading Bias",
        severity="medium",
        description=(
            f"High trade frequency detected ({trades_per_symbol:.1f} trades per symbol). "
            "This may indicate emotional trading or lack of strategy discipline."
        ),
        recommendation=(
            "Focus on quality over quantity. Wait for high-probability setups "
            "and avoid impulsive trades."
        ),
        metric=min(trades_per_symbol * t.overtrading_metric_scale, t.metric_cap),
    )


def recent_window(trades: list[Trade], divisor: int) -> list[Trade]:
    """Return the most recent 1/divisor of trades by date.

    The sort is stable, so trades sharing a timestamp keep file order.
    """
    size = len(trades) // divisor
    if size == 0:
        return []
    return sorted(trades, key=lambda trade: trade.date)[-size:]


def check_recency(ctx: RuleContext) -> Optional[BiasInsight]:
    """Trading concentrated in the most recent period."""
    t = ctx.thresholds
    if not ctx.trades:
        return None

    window = recent_window(ctx.trades, t.recency_window_divisor)
    concentration = len(window) / ctx.total_trades * 100
    if concentration <= t.recency_concentration_pct:
        return None

    return BiasInsight(
        type="Recency Bias",
        severity="medium",
        description=(
            "High concentration of trades in recent period may indicate "
            "reactive trading based on recent events."
        ),
        recommendation=(
            "Maintain consistent trading discipline. Avoid letting recent wins "
            "or losses dramatically change your strategy."
        ),
        metric=concentration,
    )


def check_confirmation(ctx: RuleContext) -> Optional[BiasInsight]:
    """One symbol dominating the log."""
    t = ctx.thresholds
    if not ctx.symbol_counts:
        return None

    concentration = max(ctx.symbol_counts.values()) / ctx.total_trades * 100
    if concentration <= t.confirmation_concentration_pct:
        return None

    return BiasInsight(
        type="Confirmation Bias",
        severity="low",
        description=(
            f"Heavy focus on certain symbols ({concentration:.1f}% concentration) "
            "may indicate bias toward familiar assets."
        ),
        recommendation=(
            "Diversify your analysis. Avoid tunnel vision on specific assets "
            "and explore opportunities across different sectors."
        ),
        metric=concentration,
    )


def check_strategy_effectiveness(ctx: RuleContext) -> Optional[BiasInsight]:
    """Low win rate. Fires even when nothing was matched."""
    win_rate = ctx.realized.win_rate
    if win_rate >= ctx.thresholds.strategy_min_win_rate:
        return None

    return BiasInsight(
        type="Strategy Effectiveness",
        severity="high",
        description=(
            f"Win rate of {win_rate:.1f}% is below optimal levels, "
            "indicating potential strategy issues."
        ),
        recommendation=(
            "Review your entry and exit criteria. Consider paper trading to "
            "refine your strategy before risking more capital."
        ),
        metric=100 - win_rate,
    )


RULES: list[Callable[[RuleContext], Optional[BiasInsight]]] = [
    check_loss_aversion,
    check_overtrading,
    check_recency,
    check_confirmation,
    check_strategy_effectiveness,
]


def detect_biases(
    trades: list[Trade],
    realized: RealizedPnL,
    stats: TradeStats,
    thresholds: BiasThresholds = DEFAULT_THRESHOLDS,
) -> list[BiasInsight]:
    """Run every rule and collect the insights that fire, in rule order."""
    ctx = RuleContext(trades, realized, stats, thresholds)
    insights = []

    for rule in RULES:
        insight = rule(ctx)
        if insight is not None:
            logger.debug("%s fired (metric=%.1f)", insight.type, insight.metric)
            insights.append(insight)

    return insights
