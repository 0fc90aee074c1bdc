"""Data models for TradeJournal."""

from tradejournal.models.trade import Trade
from tradejournal.models.journal import Journal
from tradejournal.models.report import (
    AnalysisReport,
    Goals,
    ReasonCount,
    SessionStats,
)

__all__ = [
    "Trade",
    "Journal",
    "AnalysisReport",
    "Goals",
    "ReasonCount",
    "SessionStats",
]
