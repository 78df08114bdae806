"""Engine entry point: trades in, report out."""

import logging
from typing import Sequence

from tradebias.engine.positions import reconstruct_pnl
from tradebias.engine.rules import DEFAULT_THRESHOLDS, BiasThresholds, detect_biases
from tradebias.engine.stats import compute_stats
from tradebias.models import AnalysisReport, Trade

logger = logging.getLogger(__name__)


def analyze_trades(
    trades: Sequence[Trade],
    thresholds: BiasThresholds = DEFAULT_THRESHOLDS,
) -> AnalysisReport:
    """Analyze a trade log for performance and behavioral biases.

    Pure function of its inputs; the trades are not modified.

    Args:
        trades: Trades in file order.
        thresholds: Rule constants (defaults to the standard set).

    Returns:
        AnalysisReport with insights in rule order and summary stats.
    """
    trade_list = list(trades)

    realized = reconstruct_pnl(trade_list)
    stats = compute_stats(realized, total_trades=len(trade_list))
    insights = detect_biases(trade_list, realized, stats, thresholds)

    logger.info(
        "Analyzed %d trades: %d realized events, %d insights",
        stats.total_trades,
        realized.event_count,
        len(insights),
    )
    return AnalysisReport(insights=insights, stats=stats)
