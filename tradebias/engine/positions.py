"""Average-cost position replay.

Rebuilds realized profit and loss from a flat trade log. Each symbol is
replayed independently in file order with a running open quantity and a
volume-weighted average entry price. Sells are matched against the open
quantity; whatever remains open at the end is dropped.
"""

import logging
from typing import Iterable, Optional

from tradebias.models import RealizedPnL, Trade

logger = logging.getLogger(__name__)


def group_by_symbol(trades: Iterable[Trade]) -> dict[str, list[Trade]]:
    """Group trades by symbol, keeping each symbol's trades in input order."""
    grouped: dict[str, list[Trade]] = {}
    for trade in trades:
        grouped.setdefault(trade.symbol, []).append(trade)
    return grouped


class PositionState:
    """Running position for one symbol during a replay."""

    def __init__(self) -> None:
        self.open_quantity = 0.0
        self.average_cost = 0.0

    def buy(self, quantity: float, price: float) -> None:
        """Add to the position and re-weight the average cost."""
        new_quantity = self.open_quantity + quantity
        # A flat result (zero-quantity buy, or covering an oversold
        # position exactly) leaves the average cost as it was.
        if new_quantity != 0:
            self.average_cost = (
                self.average_cost * self.open_quantity + price * quantity
            ) / new_quantity
        self.open_quantity = new_quantity

    def sell(self, quantity: float, price: float) -> Optional[float]:
        """Close against the open position.

        Returns:
            Realized P&L, or None when there is no long position to sell.
        """
        if self.open_quantity <= 0:
            return None

        pnl = (price - self.average_cost) * min(quantity, self.open_quantity)
        # Not clamped: selling more than is open leaves a negative quantity.
        self.open_quantity -= quantity
        return pnl


def replay_symbol(trades: Iterable[Trade]) -> list[float]:
    """Replay one symbol's trades and return its realized P&L events."""
    state = PositionState()
    events: list[float] = []

    for trade in trades:
        if trade.is_buy:
            state.buy(trade.quantity, trade.price)
        elif trade.is_sell:
            pnl = state.sell(trade.quantity, trade.price)
            if pnl is not None:
                events.append(pnl)

    return events


def reconstruct_pnl(trades: Iterable[Trade]) -> RealizedPnL:
    """Rebuild realized P&L events for a trade log.

    Break-even events (P&L of exactly zero) are counted as losses.

    Args:
        trades: Trades in file order.

    Returns:
        RealizedPnL with profits and absolute losses pooled across symbols.
    """
    profits: list[float] = []
    losses: list[float] = []

    for symbol, symbol_trades in group_by_symbol(trades).items():
        events = replay_symbol(symbol_trades)
        for pnl in events:
            if pnl > 0:
                profits.append(pnl)
            else:
                losses.append(abs(pnl))
        logger.debug("Replayed %s: %d trades, %d realized events", symbol, len(symbol_trades), len(events))

    return RealizedPnL(profits=profits, losses=losses)
