"""Data models for TradeBias."""

from tradebias.models.trade import Trade
from tradebias.models.stats import RealizedPnL, TradeStats
from tradebias.models.insight import BiasInsight, Severity
from tradebias.models.report import AnalysisReport

__all__ = [
    "Trade",
    "RealizedPnL",
    "TradeStats",
    "BiasInsight",
    "Severity",
    "AnalysisReport",
]
