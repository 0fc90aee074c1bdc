"""TradeJournal - trade journaling and performance insights."""

__version__ = "0.1.0"
