"""AnalysisReport data model."""

from pydantic import BaseModel, Field

from tradebias.models.insight import BiasInsight
from tradebias.models.stats import TradeStats


class AnalysisReport(BaseModel):
    """Result of one analysis run: detected insights plus summary stats."""

    insights: list[BiasInsight] = Field(default_factory=list, description="Detected biases")
    stats: TradeStats = Field(..., description="Aggregate statistics")

    model_config = {"frozen": True}

    def to_dict(self) -> dict:
        """Serialize with the camelCase keys consumed by display code."""
        return self.model_dump(by_alias=True)
