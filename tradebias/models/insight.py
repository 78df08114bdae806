"""BiasInsight data model."""

from typing import Literal
from pydantic import BaseModel, Field

Severity = Literal["low", "medium", "high"]


class BiasInsight(BaseModel):
    """One flagged behavioral pattern."""

    type: str = Field(..., min_length=1, description="Rule name")
    severity: Severity = Field(..., description="Severity level")
    description: str = Field(..., description="Human-readable explanation")
    recommendation: str = Field(..., description="Suggested corrective action")
    metric: float = Field(..., description="Severity score, roughly 0-100")

    model_config = {"frozen": True}
