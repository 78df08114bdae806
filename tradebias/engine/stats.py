"""Summary statistics over realized P&L events."""

from tradebias.models import RealizedPnL, TradeStats


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def compute_stats(realized: RealizedPnL, total_trades: int) -> TradeStats:
    """Reduce realized P&L events to summary statistics.

    Args:
        realized: Profit and loss events from the position replay.
        total_trades: Count of all input trades, matched or not.

    Returns:
        TradeStats with every metric defaulting to 0 when undefined.
    """
    avg_profit = _mean(realized.profits)
    avg_loss = _mean(realized.losses)

    if avg_loss > 0:
        profit_factor = (avg_profit * len(realized.profits)) / (avg_loss * len(realized.losses))
    else:
        profit_factor = 0.0

    return TradeStats(
        total_trades=total_trades,
        win_rate=round(realized.win_rate, 1),
        avg_profit=avg_profit,
        avg_loss=avg_loss,
        profit_factor=profit_factor,
    )
