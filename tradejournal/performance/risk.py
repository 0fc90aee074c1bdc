"""Daily risk monitor and goal progress."""

from datetime import date
from enum import Enum
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from tradejournal.insights.analyzer import daily_totals, round_half_away
from tradejournal.models import AnalysisReport, Trade

DEFAULT_DAILY_LOSS_GOAL = 200.0


class RiskLevel(str, Enum):
    """How close the day's P&L is to the maximum allowed loss."""

    SAFE = "safe"
    WARNING = "warning"
    BREACHED = "breached"


RISK_MESSAGES = {
    RiskLevel.BREACHED: "You've exceeded your risk limit. Stop trading for the day.",
    RiskLevel.SAFE: "You're within safe risk range. Keep executing with discipline.",
    RiskLevel.WARNING: "Watch out — you're nearing your daily max loss threshold.",
}


class RiskStatus(BaseModel):
    """Daily P&L measured against the daily loss goal."""

    day: date
    daily_pnl: float = Field(..., description="Sum of results for the day")
    goal: float = Field(..., gt=0, description="Maximum tolerated daily loss")
    risk_used: float = Field(..., ge=0, le=100, description="Percent of the goal used")
    level: RiskLevel

    model_config = {"frozen": True}

    @property
    def message(self) -> str:
        return RISK_MESSAGES[self.level]


def risk_status(
    trades: Sequence[Trade],
    goal: float = DEFAULT_DAILY_LOSS_GOAL,
    day: Optional[date] = None,
) -> RiskStatus:
    """Evaluate a day's P&L against the daily loss goal.

    Args:
        trades: Journal trades (any days).
        goal: Maximum daily loss, as a positive amount.
        day: Day to check. Defaults to today.

    Returns:
        RiskStatus for the day.

    Raises:
        ValueError: If goal is not positive.
    """
    if goal <= 0:
        raise ValueError(f"Daily loss goal must be positive, got {goal}")

    day = day or date.today()
    daily_pnl = daily_totals(trades).get(day, 0.0)
    risk_used = min(abs(daily_pnl) / goal * 100, 100.0)

    if daily_pnl <= -goal:
        level = RiskLevel.BREACHED
    elif daily_pnl >= 0:
        level = RiskLevel.SAFE
    else:
        level = RiskLevel.WARNING

    return RiskStatus(
        day=day,
        daily_pnl=round_half_away(daily_pnl, 2),
        goal=goal,
        risk_used=round_half_away(risk_used, 1),
        level=level,
    )


def goal_progress(report: AnalysisReport) -> float:
    """Progress toward the win-rate target, capped at 100 percent."""
    target = report.goals.win_rate_target
    if target <= 0:
        return 0.0
    return min(100.0, report.goals.current_win_rate / target * 100)
