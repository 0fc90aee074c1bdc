"""Heuristic coaching rules evaluated against raw trade metrics.

Each rule set is an ordered list of ``(predicate, message)`` pairs. Every
predicate is checked independently and each one that holds contributes its
message, in declaration order. Predicates see unrounded metrics.
"""

from typing import Callable

from pydantic import BaseModel, Field

from tradejournal.models.report import SessionStats


class TradeMetrics(BaseModel):
    """Unrounded metrics the rules are evaluated against."""

    total: int = Field(default=0, ge=0)
    win_rate: float = Field(default=0.0)
    avg_win: float = Field(default=0.0)
    avg_loss: float = Field(default=0.0)
    expectancy: float = Field(default=0.0)
    max_daily_loss: float = Field(default=0.0)
    longest_loss_streak: int = Field(default=0, ge=0)
    session_counts: dict[str, SessionStats] = Field(default_factory=dict)

    model_config = {"frozen": True}


Rule = tuple[Callable[[TradeMetrics], bool], str]


def _london_heavy(m: TradeMetrics) -> bool:
    # Only London vs Asian is compared; New York is not considered.
    london = m.session_counts.get("London")
    if london is None:
        return False
    asian = m.session_counts.get("Asian")
    return london.total > (asian.total if asian else 0) * 2


RECOMMENDATION_RULES: list[Rule] = [
    (
        lambda m: m.win_rate < 45,
        "Focus on A+ setups — reduce overtrading in uncertain markets.",
    ),
    (
        lambda m: m.avg_loss != 0 and abs(m.avg_loss) > m.avg_win * 1.5,
        "Losses are outweighing wins — consider reducing risk per trade.",
    ),
    (
        lambda m: m.max_daily_loss < -200,
        "You exceeded your daily loss threshold — pause trading and review journal.",
    ),
    (
        lambda m: m.longest_loss_streak >= 3,
        "Recent loss streak detected — trade smaller size or take a mental break.",
    ),
    (
        lambda m: m.expectancy > 10,
        "Great expectancy! Maintain discipline and log your best patterns.",
    ),
    (
        _london_heavy,
        "You're heavily trading London session — consider diversifying across sessions.",
    ),
]

MINDSET_RULES: list[Rule] = [
    (
        lambda m: m.win_rate >= 60,
        "Confidence zone: Stay patient and keep compounding your edge.",
    ),
    (
        lambda m: m.win_rate < 40,
        "Focus on emotional discipline — avoid revenge trading.",
    ),
    (
        lambda m: m.max_daily_loss < -300,
        "You're likely pushing boundaries. Remember: survival > hero trades.",
    ),
]

TAG_RULES: list[Rule] = [
    (lambda m: m.win_rate > 65, "Hot Streak"),
    (lambda m: m.expectancy > 0, "Profitable Strategy"),
    (lambda m: m.max_daily_loss > -100, "Controlled Risk"),
    (lambda m: m.longest_loss_streak == 0 and m.total > 3, "Precision Phase"),
]


def evaluate_rules(rules: list[Rule], metrics: TradeMetrics) -> list[str]:
    """Collect the messages of every rule whose predicate holds.

    Nothing fires for an empty trade list.

    Args:
        rules: Ordered (predicate, message) pairs.
        metrics: Raw metrics to test.

    Returns:
        Messages in rule declaration order.
    """
    if metrics.total == 0:
        return []
    return [message for predicate, message in rules if predicate(metrics)]
