"""Trade factories shared by the TradeBias tests."""

from datetime import datetime, timedelta

from hypothesis import strategies as st

from tradebias.models import Trade

BASE_DATE = datetime(2024, 1, 2, 9, 30)


def make_trade(
    action: str,
    quantity: float,
    price: float,
    symbol: str = "AAPL",
    day: int = 0,
) -> Trade:
    """Build a trade dated `day` days after BASE_DATE."""
    return Trade(
        date=BASE_DATE + timedelta(days=day),
        symbol=symbol,
        action=action,
        quantity=quantity,
        price=price,
    )


def trade_strategy(symbols: tuple[str, ...] = ("AAPL", "MSFT", "TSLA", "NVDA")):
    """Generate valid Trade objects with whole-unit quantities."""
    return st.builds(
        Trade,
        date=st.datetimes(
            min_value=datetime(2020, 1, 1),
            max_value=datetime(2025, 12, 31),
        ),
        symbol=st.sampled_from(symbols),
        action=st.sampled_from(["buy", "sell", "BUY", "Sell", "hold"]),
        quantity=st.integers(min_value=0, max_value=1000).map(float),
        price=st.floats(min_value=0.0, max_value=10000.0, allow_nan=False, allow_infinity=False),
    )
