"""Realized P&L and TradeStats data models."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RealizedPnL(BaseModel):
    """Realized profit and loss events pooled across all symbols.

    Losses are stored as absolute values.
    """

    profits: list[float] = Field(default_factory=list, description="Positive P&L amounts")
    losses: list[float] = Field(default_factory=list, description="Absolute loss amounts")

    model_config = {"frozen": True}

    @property
    def event_count(self) -> int:
        return len(self.profits) + len(self.losses)

    @property
    def win_rate(self) -> float:
        """Unrounded percentage of events that were profits."""
        if not self.profits:
            return 0.0
        return len(self.profits) / self.event_count * 100


class TradeStats(BaseModel):
    """Summary performance metrics for one analysis run."""

    total_trades: int = Field(..., ge=0, description="Number of input trades")
    win_rate: float = Field(..., ge=0, le=100, description="Win rate percentage (1 decimal)")
    avg_profit: float = Field(..., description="Mean realized profit")
    avg_loss: float = Field(..., description="Mean realized loss (absolute)")
    profit_factor: float = Field(..., description="Total profits / total losses")

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
