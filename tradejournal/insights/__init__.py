"""Trade insights module."""

from tradejournal.insights.analyzer import analyze_trades, round_half_away
from tradejournal.insights.rules import (
    MINDSET_RULES,
    RECOMMENDATION_RULES,
    TAG_RULES,
    TradeMetrics,
    evaluate_rules,
)

__all__ = [
    "analyze_trades",
    "round_half_away",
    "MINDSET_RULES",
    "RECOMMENDATION_RULES",
    "TAG_RULES",
    "TradeMetrics",
    "evaluate_rules",
]
