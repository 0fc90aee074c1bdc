"""SQLite journal store for TradeJournal."""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from tradejournal.models import Journal, Trade
from tradejournal.models.trade import IMAGE_PREFIXES

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base class for journal store errors."""


class JournalNotFoundError(StoreError):
    """Raised when a journal ID does not exist."""


class TradeNotFoundError(StoreError):
    """Raised when a trade ID does not exist."""


class DuplicateJournalError(StoreError):
    """Raised when a journal name is already taken."""


TRADE_COLUMNS = (
    "id, journal_id, date, pair, direction, quality, reason, session, "
    "result, before_image_url, after_image_url"
)

# Fields an update may change
EDITABLE_FIELDS = (
    "date",
    "pair",
    "direction",
    "quality",
    "reason",
    "session",
    "result",
    "before_image_url",
    "after_image_url",
)


class JournalStore:
    """SQLite-based store of journals and their trades."""

    REQUIRED_TABLES = [
        "journals",
        "trades",
    ]

    def __init__(self, db_path: Path):
        """Initialize the journal store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS journals (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL UNIQUE,
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    journal_id INTEGER NOT NULL
                        REFERENCES journals(id) ON DELETE CASCADE,
                    date TEXT NOT NULL,
                    pair TEXT,
                    direction TEXT,
                    quality TEXT,
                    reason TEXT,
                    session TEXT,
                    result REAL NOT NULL,
                    before_image_url TEXT,
                    after_image_url TEXT
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Journals ====================

    def create_journal(self, name: str) -> Journal:
        """Create a new journal.

        Args:
            name: Journal name. Surrounding whitespace is removed.

        Returns:
            The created journal.

        Raises:
            ValueError: If the name is empty.
            DuplicateJournalError: If a journal with this name exists.
        """
        name = name.strip()
        if not name:
            raise ValueError("Journal name is required")

        created_at = datetime.now()
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    "INSERT INTO journals (name, created_at) VALUES (?, ?)",
                    (name, created_at.isoformat()),
                )
            except sqlite3.IntegrityError:
                raise DuplicateJournalError(
                    f"A journal named '{name}' already exists"
                ) from None
            conn.commit()
            journal_id = cursor.lastrowid
        finally:
            conn.close()

        logger.info("Created journal %s (%s)", journal_id, name)
        return Journal(id=journal_id, name=name, created_at=created_at)

    def get_journals(self) -> list[Journal]:
        """Get all journals, oldest first, with their trade counts."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT j.id, j.name, j.created_at, COUNT(t.id) AS trade_count
                FROM journals j
                LEFT JOIN trades t ON t.journal_id = j.id
                GROUP BY j.id
                ORDER BY j.created_at, j.id
            """)
            return [self._row_to_journal(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_journal(self, journal_id: int) -> Journal:
        """Get a single journal.

        Raises:
            JournalNotFoundError: If the journal does not exist.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT j.id, j.name, j.created_at, COUNT(t.id) AS trade_count
                FROM journals j
                LEFT JOIN trades t ON t.journal_id = j.id
                WHERE j.id = ?
                GROUP BY j.id
                """,
                (journal_id,),
            )
            row = cursor.fetchone()
        finally:
            conn.close()

        if row is None:
            raise JournalNotFoundError(f"Journal {journal_id} not found")
        return self._row_to_journal(row)

    def find_journal(self, name: str) -> Optional[Journal]:
        """Look up a journal by name."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT id FROM journals WHERE name = ?", (name.strip(),))
            row = cursor.fetchone()
        finally:
            conn.close()
        return self.get_journal(row["id"]) if row else None

    def delete_journal(self, journal_id: int) -> None:
        """Delete a journal and all of its trades.

        Raises:
            JournalNotFoundError: If the journal does not exist.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM journals WHERE id = ?", (journal_id,))
            conn.commit()
            deleted = cursor.rowcount
        finally:
            conn.close()

        if not deleted:
            raise JournalNotFoundError(f"Journal {journal_id} not found")
        logger.info("Deleted journal %s", journal_id)

    # ==================== Trades ====================

    def add_trade(self, journal_id: int, trade: Trade) -> Trade:
        """Add a trade to a journal.

        Args:
            journal_id: Owning journal.
            trade: Trade to store; its id and journal_id are ignored.

        Returns:
            The stored trade with its assigned IDs.

        Raises:
            JournalNotFoundError: If the journal does not exist.
        """
        self.get_journal(journal_id)

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO trades
                (journal_id, date, pair, direction, quality, reason, session,
                 result, before_image_url, after_image_url)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    journal_id,
                    trade.date.isoformat(),
                    trade.pair,
                    trade.direction,
                    trade.quality,
                    trade.reason,
                    trade.session,
                    trade.result,
                    trade.before_image_url,
                    trade.after_image_url,
                ),
            )
            conn.commit()
            trade_id = cursor.lastrowid
        finally:
            conn.close()

        logger.debug("Added trade %s to journal %s", trade_id, journal_id)
        return trade.model_copy(update={"id": trade_id, "journal_id": journal_id})

    def get_trade(self, trade_id: int) -> Trade:
        """Get a single trade.

        Raises:
            TradeNotFoundError: If the trade does not exist.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {TRADE_COLUMNS} FROM trades WHERE id = ?",
                (trade_id,),
            )
            row = cursor.fetchone()
        finally:
            conn.close()

        if row is None:
            raise TradeNotFoundError(f"Trade {trade_id} not found")
        return self._row_to_trade(row)

    def get_trades(self, journal_id: int) -> list[Trade]:
        """Get a journal's trades, oldest first.

        Raises:
            JournalNotFoundError: If the journal does not exist.
        """
        self.get_journal(journal_id)

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT {TRADE_COLUMNS}
                FROM trades
                WHERE journal_id = ?
                ORDER BY date, id
                """,
                (journal_id,),
            )
            return [self._row_to_trade(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def update_trade(self, trade_id: int, **changes: Any) -> Trade:
        """Update selected fields of a trade.

        Fields passed as None keep their stored value. The merged record is
        validated through the Trade model before it is written.

        Args:
            trade_id: Trade to update.
            **changes: New values for fields in EDITABLE_FIELDS.

        Returns:
            The updated trade.

        Raises:
            TradeNotFoundError: If the trade does not exist.
            ValueError: If an unknown field is given.
        """
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        current = self.get_trade(trade_id)
        updates = {k: v for k, v in changes.items() if v is not None}
        for field in ("before_image_url", "after_image_url"):
            # An invalid image reference keeps the stored one
            if field in updates and not str(updates[field]).startswith(IMAGE_PREFIXES):
                del updates[field]
        updated = Trade.model_validate({**current.model_dump(), **updates})

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE trades
                SET date = ?, pair = ?, direction = ?, quality = ?, reason = ?,
                    session = ?, result = ?, before_image_url = ?, after_image_url = ?
                WHERE id = ?
                """,
                (
                    updated.date.isoformat(),
                    updated.pair,
                    updated.direction,
                    updated.quality,
                    updated.reason,
                    updated.session,
                    updated.result,
                    updated.before_image_url,
                    updated.after_image_url,
                    trade_id,
                ),
            )
            conn.commit()
        finally:
            conn.close()

        logger.debug("Updated trade %s: %s", trade_id, sorted(updates))
        return updated

    def delete_trade(self, trade_id: int) -> None:
        """Delete a trade.

        Raises:
            TradeNotFoundError: If the trade does not exist.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades WHERE id = ?", (trade_id,))
            conn.commit()
            deleted = cursor.rowcount
        finally:
            conn.close()

        if not deleted:
            raise TradeNotFoundError(f"Trade {trade_id} not found")
        logger.debug("Deleted trade %s", trade_id)

    # ==================== Helpers ====================

    @staticmethod
    def _row_to_journal(row: sqlite3.Row) -> Journal:
        return Journal(
            id=row["id"],
            name=row["name"],
            created_at=datetime.fromisoformat(row["created_at"]),
            trade_count=row["trade_count"],
        )

    @staticmethod
    def _row_to_trade(row: sqlite3.Row) -> Trade:
        return Trade(
            id=row["id"],
            journal_id=row["journal_id"],
            date=datetime.fromisoformat(row["date"]),
            pair=row["pair"],
            direction=row["direction"],
            quality=row["quality"],
            reason=row["reason"],
            session=row["session"],
            result=row["result"],
            before_image_url=row["before_image_url"],
            after_image_url=row["after_image_url"],
        )
