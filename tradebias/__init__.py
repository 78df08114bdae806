"""TradeBias - performance statistics and behavioral bias detection for trade logs."""

from tradebias.engine import BiasThresholds, DEFAULT_THRESHOLDS, analyze_trades
from tradebias.ingest import IngestResult, RowError, load_trades_csv, parse_rows
from tradebias.models import AnalysisReport, BiasInsight, Trade, TradeStats

__version__ = "0.1.0"

__all__ = [
    "analyze_trades",
    "BiasThresholds",
    "DEFAULT_THRESHOLDS",
    "load_trades_csv",
    "parse_rows",
    "IngestResult",
    "RowError",
    "AnalysisReport",
    "BiasInsight",
    "Trade",
    "TradeStats",
]
