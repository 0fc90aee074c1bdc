"""Analysis report data models."""

from pydantic import BaseModel, Field

WIN_RATE_TARGET = 60
EXPECTANCY_TARGET = 5


class ReasonCount(BaseModel):
    """How often a trade rationale occurs."""

    reason: str = Field(..., description="Trimmed reason text")
    count: int = Field(..., ge=1, description="Number of trades with this reason")

    model_config = {"frozen": True}


class SessionStats(BaseModel):
    """Win/loss counters for one trading session."""

    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class Goals(BaseModel):
    """Fixed performance targets paired with current values."""

    win_rate_target: float = Field(default=WIN_RATE_TARGET, description="Target win rate percentage")
    current_win_rate: float = Field(default=0.0, description="Current win rate percentage")
    expectancy_target: float = Field(default=EXPECTANCY_TARGET, description="Target expectancy per trade")
    current_expectancy: float = Field(default=0.0, description="Current expectancy per trade")

    model_config = {"frozen": True}


class AnalysisReport(BaseModel):
    """Summary statistics computed from a list of trades."""

    total: int = Field(default=0, ge=0, description="Number of trades")
    wins: int = Field(default=0, ge=0, description="Trades with a positive result")
    losses: int = Field(default=0, ge=0, description="Trades with a negative result")
    win_rate: float = Field(default=0.0, ge=0, le=100, description="Win rate percentage")
    avg_win: float = Field(default=0.0, description="Mean result of winning trades")
    avg_loss: float = Field(default=0.0, description="Mean result of losing trades")
    expectancy: float = Field(default=0.0, description="Probability-weighted result per trade")
    max_daily_loss: float = Field(default=0.0, description="Worst calendar-day total")
    max_daily_profit: float = Field(default=0.0, description="Best calendar-day total")
    longest_win_streak: int = Field(default=0, ge=0)
    longest_loss_streak: int = Field(default=0, ge=0)
    top_reasons: list[ReasonCount] = Field(default_factory=list)
    reason_frequency: dict[str, int] = Field(default_factory=dict)
    session_counts: dict[str, SessionStats] = Field(default_factory=dict)
    recommendations: list[str] = Field(default_factory=list)
    mindset: list[str] = Field(default_factory=list)
    goals: Goals = Field(default_factory=Goals)
    tags: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}
