"""Trade analysis engine: position replay, statistics and bias rules."""

from tradebias.engine.analyzer import analyze_trades
from tradebias.engine.positions import PositionState, reconstruct_pnl
from tradebias.engine.rules import DEFAULT_THRESHOLDS, BiasThresholds, detect_biases
from tradebias.engine.stats import compute_stats

__all__ = [
    "analyze_trades",
    "reconstruct_pnl",
    "PositionState",
    "compute_stats",
    "detect_biases",
    "BiasThresholds",
    "DEFAULT_THRESHOLDS",
]
