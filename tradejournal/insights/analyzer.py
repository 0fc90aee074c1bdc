"""Trade analytics aggregation.

Computes the insight report shown on the journal dashboard: win rate,
expectancy, daily extremes, streaks, reason and session breakdowns, and
the coaching messages derived from them.
"""

import logging
import math
from collections import defaultdict
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Sequence

from tradejournal.insights.rules import (
    MINDSET_RULES,
    RECOMMENDATION_RULES,
    TAG_RULES,
    TradeMetrics,
    evaluate_rules,
)
from tradejournal.models import (
    AnalysisReport,
    Goals,
    ReasonCount,
    SessionStats,
    Trade,
)

logger = logging.getLogger(__name__)

DEFAULT_SESSION = "London"
NO_REASON = "No reason"
TOP_REASONS_LIMIT = 8


def round_half_away(value: float, places: int) -> float:
    """Round to ``places`` decimals, halves away from zero.

    Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    exact = Decimal(repr(value))
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # Enough digits to hold every integer digit plus the decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + places + 2)
        return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))


def _mean(values: list[float]) -> float:
    # Running mean stays finite where sum() would overflow
    mean = 0.0
    for count, value in enumerate(values, start=1):
        mean += (value - mean) / count
    return mean


def _utc_offset(moment: datetime) -> timedelta:
    if moment.tzinfo is not None:
        return moment.utcoffset() or timedelta(0)
    try:
        return moment.astimezone().utcoffset() or timedelta(0)
    except (OverflowError, ValueError, OSError):
        # Outside the platform's local-time range; treat as UTC
        return timedelta(0)


def trade_day(moment: datetime) -> date:
    """Calendar date of a trade in local time."""
    if moment.tzinfo is not None:
        try:
            return moment.astimezone().date()
        except (OverflowError, ValueError, OSError):
            return moment.date()
    return moment.date()


def chronological(trades: Sequence[Trade]) -> list[Trade]:
    """Return a new list of trades sorted by date (stable).

    Naive dates are local time, so naive and aware dates can be mixed.
    """
    def instant(trade: Trade) -> timedelta:
        moment = trade.date
        return moment.replace(tzinfo=None) - datetime.min - _utc_offset(moment)

    return sorted(trades, key=instant)


def daily_totals(trades: Sequence[Trade]) -> dict[date, float]:
    """Sum of results per calendar day, in first-seen order."""
    totals: dict[date, float] = defaultdict(float)
    for trade in trades:
        totals[trade_day(trade.date)] += trade.result
    return dict(totals)


def longest_streaks(trades: Sequence[Trade]) -> tuple[int, int]:
    """Longest consecutive win and loss runs in chronological order.

    Breakeven trades neither extend nor break a run.

    Returns:
        Tuple of (longest_win_streak, longest_loss_streak).
    """
    longest_win = longest_loss = 0
    current_win = current_loss = 0

    for trade in chronological(trades):
        if trade.is_win:
            current_win += 1
            current_loss = 0
        elif trade.is_loss:
            current_loss += 1
            current_win = 0
        longest_win = max(longest_win, current_win)
        longest_loss = max(longest_loss, current_loss)

    return longest_win, longest_loss


def reason_frequency(trades: Sequence[Trade]) -> dict[str, int]:
    """Count trimmed reasons; trades without one count as "No reason"."""
    frequency: dict[str, int] = {}
    for trade in trades:
        reason = (trade.reason or NO_REASON).strip()
        if not reason:
            continue
        frequency[reason] = frequency.get(reason, 0) + 1
    return frequency


def top_reasons(frequency: dict[str, int], limit: int = TOP_REASONS_LIMIT) -> list[ReasonCount]:
    """Most frequent reasons; ties keep their encounter order."""
    ranked = sorted(frequency.items(), key=lambda item: item[1], reverse=True)
    return [ReasonCount(reason=reason, count=count) for reason, count in ranked[:limit]]


def session_breakdown(trades: Sequence[Trade]) -> dict[str, SessionStats]:
    """Win/loss/total counters per session (missing session -> London)."""
    counters: dict[str, dict[str, int]] = {}
    for trade in trades:
        name = trade.session or DEFAULT_SESSION
        stats = counters.setdefault(name, {"wins": 0, "losses": 0, "total": 0})
        stats["total"] += 1
        if trade.is_win:
            stats["wins"] += 1
        elif trade.is_loss:
            stats["losses"] += 1
    return {name: SessionStats(**stats) for name, stats in counters.items()}


def analyze_trades(trades: Sequence[Trade]) -> AnalysisReport:
    """Build the insight report for a list of trades.

    The input is never reordered or mutated; an empty list yields an
    all-zero report with no recommendations.

    Args:
        trades: Trades in any order.

    Returns:
        Freshly built AnalysisReport.
    """
    total = len(trades)
    win_results = [t.result for t in trades if t.is_win]
    loss_results = [t.result for t in trades if t.is_loss]
    wins = len(win_results)
    losses = len(loss_results)

    win_rate = (wins / total) * 100 if total else 0.0
    avg_win = _mean(win_results)
    avg_loss = _mean(loss_results)
    expectancy = (win_rate / 100) * avg_win + ((100 - win_rate) / 100) * avg_loss

    per_day = list(daily_totals(trades).values())
    max_daily_loss = min(per_day) if per_day else 0.0
    max_daily_profit = max(per_day) if per_day else 0.0

    longest_win_streak, longest_loss_streak = longest_streaks(trades)
    frequency = reason_frequency(trades)
    sessions = session_breakdown(trades)

    metrics = TradeMetrics(
        total=total,
        win_rate=win_rate,
        avg_win=avg_win,
        avg_loss=avg_loss,
        expectancy=expectancy,
        max_daily_loss=max_daily_loss,
        longest_loss_streak=longest_loss_streak,
        session_counts=sessions,
    )

    logger.debug(
        "Analyzed %d trades: %d wins, %d losses, %d trading days",
        total, wins, losses, len(per_day),
    )

    return AnalysisReport(
        total=total,
        wins=wins,
        losses=losses,
        win_rate=round_half_away(win_rate, 1),
        avg_win=round_half_away(avg_win, 2),
        avg_loss=round_half_away(avg_loss, 2),
        expectancy=round_half_away(expectancy, 2),
        max_daily_loss=round_half_away(max_daily_loss, 2),
        max_daily_profit=round_half_away(max_daily_profit, 2),
        longest_win_streak=longest_win_streak,
        longest_loss_streak=longest_loss_streak,
        top_reasons=top_reasons(frequency),
        reason_frequency=frequency,
        session_counts=sessions,
        recommendations=evaluate_rules(RECOMMENDATION_RULES, metrics),
        mindset=evaluate_rules(MINDSET_RULES, metrics),
        goals=Goals(
            current_win_rate=round_half_away(win_rate, 1),
            current_expectancy=round_half_away(expectancy, 1),
        ),
        tags=evaluate_rules(TAG_RULES, metrics),
    )
