"""Performance views over a journal's trades.

These back the performance page: equity curve, biggest winner/loser,
session table, setup-quality mix and daily buy/sell activity, plus the
monthly P&L calendar.
"""

import calendar
from datetime import date, datetime
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from tradejournal.insights.analyzer import (
    DEFAULT_SESSION,
    chronological,
    daily_totals,
    round_half_away,
    trade_day,
)
from tradejournal.models import SessionStats, Trade

BASE_SESSIONS = ["London", "New York", "Asian"]
SETUP_GRADES = ["A+", "A", "B", "C"]


class EquityPoint(BaseModel):
    """Cumulative P&L after a trade."""

    index: int = Field(..., ge=1, description="1-based trade number")
    date: datetime = Field(..., description="Trade date")
    equity: float = Field(..., description="Cumulative result up to this trade")

    model_config = {"frozen": True}


class SessionPerformance(BaseModel):
    """One row of the session performance table."""

    session: str
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)
    win_rate: int = Field(default=0, ge=0, le=100, description="Whole-number win rate")

    model_config = {"frozen": True}


class SetupShare(BaseModel):
    """Share of trades taken on a given setup grade."""

    setup: str
    percentage: float = Field(default=0.0, ge=0, le=100)

    model_config = {"frozen": True}


class DirectionActivity(BaseModel):
    """Buy and sell counts for one calendar day."""

    day: date
    buys: int = Field(default=0, ge=0)
    sells: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


def equity_curve(trades: Sequence[Trade]) -> list[EquityPoint]:
    """Running total of results in chronological order."""
    points = []
    equity = 0.0
    for i, trade in enumerate(chronological(trades), start=1):
        equity += trade.result
        points.append(EquityPoint(index=i, date=trade.date, equity=round_half_away(equity, 2)))
    return points


def biggest_profit(trades: Sequence[Trade]) -> Optional[Trade]:
    """Largest winning trade, or None when nothing was won."""
    best = max(trades, key=lambda t: t.result, default=None)
    return best if best is not None and best.is_win else None


def biggest_loss(trades: Sequence[Trade]) -> Optional[Trade]:
    """Largest losing trade, or None when nothing was lost."""
    worst = min(trades, key=lambda t: t.result, default=None)
    return worst if worst is not None and worst.is_loss else None


def session_performance(trades: Sequence[Trade]) -> list[SessionPerformance]:
    """Session table rows.

    London, New York and Asian always appear (in that order), followed by
    any other session names in first-seen order.
    """
    counters = {name: {"wins": 0, "losses": 0, "total": 0} for name in BASE_SESSIONS}
    for trade in trades:
        stats = counters.setdefault(
            trade.session or DEFAULT_SESSION, {"wins": 0, "losses": 0, "total": 0}
        )
        stats["total"] += 1
        if trade.is_win:
            stats["wins"] += 1
        elif trade.is_loss:
            stats["losses"] += 1

    rows = []
    for name, stats in counters.items():
        win_rate = int(round_half_away(stats["wins"] / stats["total"] * 100, 0)) if stats["total"] else 0
        rows.append(SessionPerformance(session=name, win_rate=win_rate, **stats))
    return rows


def best_session(session_counts: dict[str, SessionStats]) -> Optional[tuple[str, float]]:
    """Session with the highest win ratio.

    Ties go to the session listed first.

    Returns:
        Tuple of (session name, win ratio 0-1), or None if there are no sessions.
    """
    best = None
    for name, stats in session_counts.items():
        ratio = stats.wins / stats.total if stats.total else 0.0
        if best is None or ratio > best[1]:
            best = (name, ratio)
    return best


def setup_distribution(trades: Sequence[Trade]) -> list[SetupShare]:
    """Percentage of trades per setup grade (A+, A, B, C).

    Grades are matched case-insensitively; other grades still count toward
    the total but get no row.
    """
    if not trades:
        return []

    grouped: dict[str, int] = {}
    for trade in trades:
        grade = ((trade.quality or "").strip() or "Unknown").upper()
        grouped[grade] = grouped.get(grade, 0) + 1

    total = len(trades)
    return [
        SetupShare(
            setup=grade,
            percentage=round_half_away(grouped.get(grade, 0) / total * 100, 1),
        )
        for grade in SETUP_GRADES
    ]


def direction_activity(trades: Sequence[Trade]) -> list[DirectionActivity]:
    """Buy/sell counts per calendar day, oldest day first."""
    grouped: dict[date, dict[str, int]] = {}
    for trade in trades:
        counts = grouped.setdefault(trade_day(trade.date), {"buys": 0, "sells": 0})
        if trade.direction == "Buy":
            counts["buys"] += 1
        elif trade.direction == "Sell":
            counts["sells"] += 1
    return [
        DirectionActivity(day=day, **counts)
        for day, counts in sorted(grouped.items())
    ]


class CalendarDay(BaseModel):
    """Net result and trade count for one day of the calendar."""

    day: date
    pnl: float = Field(default=0.0, description="Sum of results for the day")
    trades: int = Field(default=0, ge=0, description="Trades taken that day")

    model_config = {"frozen": True}


def monthly_calendar(
    trades: Sequence[Trade], year: int, month: int
) -> list[list[Optional[CalendarDay]]]:
    """Month grid of daily P&L, one row per week starting on Sunday.

    Cells outside the month are None.

    Raises:
        ValueError: If month is not 1-12.
    """
    totals = daily_totals(trades)
    counts: dict[date, int] = {}
    for trade in trades:
        day = trade_day(trade.date)
        counts[day] = counts.get(day, 0) + 1

    weeks = calendar.Calendar(firstweekday=calendar.SUNDAY).monthdatescalendar(year, month)
    return [
        [
            CalendarDay(
                day=day,
                pnl=round_half_away(totals.get(day, 0.0), 2),
                trades=counts.get(day, 0),
            )
            if day.month == month
            else None
            for day in week
        ]
        for week in weeks
    ]
