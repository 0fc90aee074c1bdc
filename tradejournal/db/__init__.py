"""Journal persistence."""

from tradejournal.db.store import (
    DuplicateJournalError,
    JournalNotFoundError,
    JournalStore,
    StoreError,
    TradeNotFoundError,
)

__all__ = [
    "DuplicateJournalError",
    "JournalNotFoundError",
    "JournalStore",
    "StoreError",
    "TradeNotFoundError",
]
