"""Performance views and risk monitoring."""

from tradejournal.performance.metrics import (
    CalendarDay,
    DirectionActivity,
    EquityPoint,
    SessionPerformance,
    SetupShare,
    best_session,
    biggest_loss,
    biggest_profit,
    direction_activity,
    equity_curve,
    monthly_calendar,
    session_performance,
    setup_distribution,
)
from tradejournal.performance.risk import (
    RiskLevel,
    RiskStatus,
    goal_progress,
    risk_status,
)

__all__ = [
    "CalendarDay",
    "DirectionActivity",
    "EquityPoint",
    "SessionPerformance",
    "SetupShare",
    "best_session",
    "biggest_loss",
    "biggest_profit",
    "direction_activity",
    "equity_curve",
    "monthly_calendar",
    "session_performance",
    "setup_distribution",
    "RiskLevel",
    "RiskStatus",
    "goal_progress",
    "risk_status",
]
