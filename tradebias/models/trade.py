"""Trade data model."""

from datetime import date as date_type, datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator

# Broker export formats accepted besides ISO-8601
DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%d-%b-%Y",
    "%d-%b-%Y %H:%M",
    "%d-%b-%Y %H:%M:%S",
)


def _naive_utc(value: datetime) -> datetime:
    # Aware and naive timestamps must sort together
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_trade_date(value: Any) -> datetime:
    """Parse a trade date into a datetime.

    Args:
        value: A datetime, date, or date string.

    Returns:
        Parsed datetime.

    Raises:
        ValueError: If the value cannot be interpreted as a date.
    """
    if isinstance(value, datetime):
        return _naive_utc(value)
    if isinstance(value, date_type):
        return datetime.combine(value, datetime.min.time())
    if not isinstance(value, str):
        raise ValueError(f"unsupported date value: {value!r}")

    text = value.strip()
    if not text:
        raise ValueError("date is empty")

    try:
        return _naive_utc(datetime.fromisoformat(text))
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    raise ValueError(f"unrecognized date format: {text!r}")


class Trade(BaseModel):
    """Represents one row of a trader's transaction log."""

    date: datetime = Field(..., description="Trade timestamp")
    symbol: str = Field(..., min_length=1, description="Instrument identifier")
    action: str = Field(..., description="Trade action (buy/sell, case-insensitive)")
    quantity: float = Field(..., ge=0, allow_inf_nan=False, description="Units traded")
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Price per unit")

    model_config = {"frozen": True}

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> datetime:
        return parse_trade_date(value)

    @field_validator("action", mode="before")
    @classmethod
    def _normalize_action(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @property
    def is_buy(self) -> bool:
        return self.action == "buy"

    @property
    def is_sell(self) -> bool:
        return self.action == "sell"
