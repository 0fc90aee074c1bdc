"""Tests for the trade analytics aggregator.

**Feature: trade-insights**
"""

import time
from datetime import date, datetime, timedelta, timezone

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.insights import analyze_trades, round_half_away
from tradejournal.insights.analyzer import (
    chronological,
    daily_totals,
    longest_streaks,
    reason_frequency,
    trade_day,
)
from tradejournal.models import AnalysisReport, ReasonCount, SessionStats, Trade


def make_trades(results: list[float], start: datetime = datetime(2024, 3, 1, 9, 0), **fields) -> list[Trade]:
    """Create one trade per result, one day apart."""
    return [
        Trade(date=start + timedelta(days=i), result=result, **fields)
        for i, result in enumerate(results)
    ]


def trade_strategy():
    """Generate valid Trade objects for testing."""
    return st.builds(
        Trade,
        date=st.datetimes(timezones=st.one_of(st.none(), st.just(timezone.utc))),
        result=st.one_of(
            st.just(0.0),
            st.floats(allow_nan=False, allow_infinity=False),
        ),
        session=st.sampled_from([None, "London", "New York", "Asian"]),
        reason=st.one_of(st.none(), st.sampled_from(["breakout", "news", " trend ", "  "])),
    )


class TestEmptyInput:
    """
    **Feature: trade-insights, Property 1: Empty input invariant**
    """

    def test_empty_input_is_all_zero(self):
        report = analyze_trades([])

        assert report.total == 0
        assert report.wins == 0
        assert report.losses == 0
        assert report.win_rate == 0
        assert report.avg_win == 0
        assert report.avg_loss == 0
        assert report.expectancy == 0
        assert report.max_daily_loss == 0
        assert report.max_daily_profit == 0
        assert report.longest_win_streak == 0
        assert report.longest_loss_streak == 0
        assert report.top_reasons == []
        assert report.reason_frequency == {}
        assert report.session_counts == {}
        assert report.recommendations == []
        assert report.mindset == []
        assert report.tags == []

    def test_empty_input_goals_keep_targets(self):
        goals = analyze_trades([]).goals

        assert goals.win_rate_target == 60
        assert goals.expectancy_target == 5
        assert goals.current_win_rate == 0
        assert goals.current_expectancy == 0


class TestDocumentedExamples:
    """
    **Feature: trade-insights, Properties 5-9: worked examples**
    """

    def test_streak_example(self):
        report = analyze_trades(make_trades([10, 5, -3, -2, -1, 7]))

        assert report.longest_win_streak == 2
        assert report.longest_loss_streak == 3

    def test_expectancy_example(self):
        report = analyze_trades(make_trades([100, 100, -50, -50, -50]))

        assert report.total == 5
        assert report.win_rate == 40.0
        assert report.avg_win == 100
        assert report.avg_loss == -50
        assert report.expectancy == pytest.approx(10, abs=0.01)

    def test_missing_session_counts_as_london(self):
        report = analyze_trades([Trade(date=datetime(2024, 1, 2), result=25)])

        assert report.session_counts == {"London": SessionStats(wins=1, losses=0, total=1)}

    def test_empty_session_string_counts_as_london(self):
        report = analyze_trades([Trade(date=datetime(2024, 1, 2), result=-5, session="")])

        assert report.session_counts["London"].losses == 1

    def test_top_reason_ordering(self):
        trades = [
            Trade(date=datetime(2024, 1, 1) + timedelta(hours=i), result=1, reason=reason)
            for i, reason in enumerate(["breakout", "breakout", "news", "breakout"])
        ]

        report = analyze_trades(trades)

        assert report.top_reasons[0] == ReasonCount(reason="breakout", count=3)
        assert report.top_reasons[1] == ReasonCount(reason="news", count=1)

    def test_daily_extremes_example(self):
        day1 = datetime(2024, 5, 6, 9, 0)
        day2 = datetime(2024, 5, 7, 9, 0)
        trades = [
            Trade(date=day1, result=-150),
            Trade(date=day2, result=30),
            Trade(date=day1 + timedelta(hours=3), result=-100),
            Trade(date=day2 + timedelta(hours=1), result=50),
        ]

        report = analyze_trades(trades)

        assert report.max_daily_loss == -250
        assert report.max_daily_profit == 80


class TestEdgeCases:
    """Edge cases around breakeven and one-sided datasets."""

    def test_all_wins_has_zero_avg_loss(self):
        report = analyze_trades(make_trades([10, 20, 30]))

        assert report.avg_loss == 0
        assert report.avg_win == 20
        assert report.win_rate == 100.0
        assert report.longest_loss_streak == 0

    def test_all_losses_has_zero_avg_win(self):
        report = analyze_trades(make_trades([-10, -30]))

        assert report.avg_win == 0
        assert report.avg_loss == -20
        assert report.win_rate == 0
        assert report.expectancy == -20

    def test_single_breakeven_trade(self):
        report = analyze_trades(make_trades([0]))

        assert report.total == 1
        assert report.wins == 0
        assert report.losses == 0
        assert report.avg_win == 0
        assert report.avg_loss == 0
        assert report.expectancy == 0
        assert report.longest_win_streak == 0
        assert report.longest_loss_streak == 0
        assert report.session_counts["London"] == SessionStats(wins=0, losses=0, total=1)

    def test_breakeven_does_not_break_streak(self):
        report = analyze_trades(make_trades([5, 0, 5, 0, 5, -1]))

        assert report.longest_win_streak == 3
        assert report.longest_loss_streak == 1

    def test_streaks_use_chronological_order(self):
        base = datetime(2024, 1, 1)
        # Listed newest first; chronologically: W, L, L, W
        trades = [
            Trade(date=base + timedelta(days=3), result=4),
            Trade(date=base + timedelta(days=2), result=-1),
            Trade(date=base + timedelta(days=1), result=-2),
            Trade(date=base, result=3),
        ]

        assert longest_streaks(trades) == (1, 2)

    def test_missing_reason_counts_as_placeholder(self):
        trades = make_trades([1, -1], reason=None)

        assert reason_frequency(trades) == {"No reason": 2}

    def test_blank_reason_is_not_counted(self):
        trades = make_trades([1], reason="   ") + make_trades([2], reason=" news ")

        assert reason_frequency(trades) == {"news": 1}

    def test_top_reasons_capped_at_eight(self):
        trades = [
            Trade(date=datetime(2024, 1, 1), result=1, reason=f"reason-{i}")
            for i in range(12)
        ]

        report = analyze_trades(trades)

        assert len(report.top_reasons) == 8
        assert [r.reason for r in report.top_reasons] == [f"reason-{i}" for i in range(8)]
        assert len(report.reason_frequency) == 12

    def test_mixed_naive_and_aware_dates(self):
        trades = [
            Trade(date=datetime(2024, 1, 1, 12, tzinfo=timezone.utc), result=5),
            Trade(date=datetime(2024, 1, 3, 12), result=-5),
        ]

        report = analyze_trades(trades)

        assert report.total == 2
        assert len(chronological(trades)) == 2

    def test_aware_dates_group_by_local_day(self):
        moment = datetime(2024, 6, 1, 23, 30, tzinfo=timezone.utc)

        assert trade_day(moment) == moment.astimezone().date()


class TestExtremeValues:
    """Huge results and dates at the ends of the datetime range."""

    @pytest.mark.parametrize("result", [1e27, -1e27, 1.7e308, -1.7e308])
    def test_huge_results_are_reported(self, result: float):
        report = analyze_trades([Trade(date=datetime(2024, 1, 1), result=result)])

        assert report.total == 1
        assert report.expectancy == result
        assert report.max_daily_profit == result

    def test_mean_of_huge_wins_stays_finite(self):
        report = analyze_trades(make_trades([1.7e308, 1.7e308, 1.7e308]))

        assert report.avg_win == 1.7e308
        assert report.expectancy == 1.7e308

    def test_overflowing_day_total(self):
        day = datetime(2024, 1, 1, 9)
        trades = [Trade(date=day, result=1.7e308), Trade(date=day + timedelta(hours=1), result=1.7e308)]

        report = analyze_trades(trades)

        assert report.max_daily_profit == float("inf")
        assert analyze_trades(trades) == report

    @pytest.mark.parametrize(
        "value,places,expected",
        [
            (1e27, 2, 1e27),
            (-123456789012345678901234567890.5, 1, -123456789012345678901234567890.5),
            (float("inf"), 2, float("inf")),
        ],
    )
    def test_rounding_large_and_infinite(self, value, places, expected):
        assert round_half_away(value, places) == expected

    def test_datetime_bounds(self):
        trades = [
            Trade(date=datetime.max, result=2),
            Trade(date=datetime.min, result=-3),
            Trade(date=datetime.min.replace(tzinfo=timezone.utc), result=5),
            Trade(date=datetime.max.replace(tzinfo=timezone.utc), result=-1),
        ]

        report = analyze_trades(trades)
        ordered = chronological(trades)

        assert report.total == 4
        assert {t.result for t in ordered[:2]} == {-3, 5}
        assert {t.result for t in ordered[2:]} == {2, -1}


@pytest.fixture
def new_york_time(monkeypatch):
    """Run with the local timezone set to America/New_York."""
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")
class TestLocalTimeOutOfRange:
    """Aware dates that cannot be converted to local time keep their own date."""

    def test_minimum_aware_date(self, new_york_time):
        moment = datetime.min.replace(tzinfo=timezone.utc)

        assert trade_day(moment) == date.min
        assert daily_totals([Trade(date=moment, result=7)]) == {date.min: 7}

    def test_analysis_at_minimum_dates(self, new_york_time):
        trades = [
            Trade(date=datetime.min.replace(tzinfo=timezone.utc), result=4),
            Trade(date=datetime.min, result=-2),
            Trade(date=datetime(2024, 1, 1), result=3),
        ]

        report = analyze_trades(trades)

        assert report.total == 3
        assert chronological(trades)[-1].result == 3


class TestRecommendationsInReport:
    """Recommendation, mindset and tag wiring."""

    def test_losing_streak_triggers_warnings(self):
        report = analyze_trades(make_trades([-100, -100, -100, 20]))

        assert "Recent loss streak detected — trade smaller size or take a mental break." in report.recommendations
        assert "Focus on A+ setups — reduce overtrading in uncertain markets." in report.recommendations
        assert "Losses are outweighing wins — consider reducing risk per trade." in report.recommendations
        assert report.mindset == ["Focus on emotional discipline — avoid revenge trading."]

    def test_recommendations_keep_rule_order(self):
        report = analyze_trades(make_trades([-350, -350, -350]))

        assert report.recommendations == [
            "Focus on A+ setups — reduce overtrading in uncertain markets.",
            "Losses are outweighing wins — consider reducing risk per trade.",
            "You exceeded your daily loss threshold — pause trading and review journal.",
            "Recent loss streak detected — trade smaller size or take a mental break.",
            "You're heavily trading London session — consider diversifying across sessions.",
        ]
        assert "You're likely pushing boundaries. Remember: survival > hero trades." in report.mindset

    def test_strong_journal_gets_positive_tags(self):
        trades = make_trades([50, 40, 30, 60], session="Asian")

        report = analyze_trades(trades)

        assert report.recommendations == [
            "Great expectancy! Maintain discipline and log your best patterns.",
        ]
        assert report.mindset == ["Confidence zone: Stay patient and keep compounding your edge."]
        assert report.tags == [
            "Hot Streak",
            "Profitable Strategy",
            "Controlled Risk",
            "Precision Phase",
        ]

    def test_goals_track_current_values(self):
        report = analyze_trades(make_trades([10, 10, -4]))

        assert report.goals.current_win_rate == 66.7
        assert report.goals.current_expectancy == pytest.approx(5.3, abs=0.05)


class TestRounding:
    """Half-away-from-zero rounding."""

    @pytest.mark.parametrize(
        "value,places,expected",
        [
            (2.675, 2, 2.68),
            (-0.125, 2, -0.13),
            (0.05, 1, 0.1),
            (-0.05, 1, -0.1),
            (66.66666, 1, 66.7),
            (0.0, 2, 0.0),
        ],
    )
    def test_round_half_away(self, value, places, expected):
        assert round_half_away(value, places) == expected

    def test_win_rate_rounded_to_one_decimal(self):
        report = analyze_trades(make_trades([1, -1, -1]))

        assert report.win_rate == 33.3


class TestReportProperties:
    """
    **Feature: trade-insights, Properties 2-4: invariants**

    *For any* list of trades the report stays consistent and the input
    is left untouched.
    """

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=40))
    @settings(max_examples=100)
    def test_count_consistency(self, trades: list[Trade]):
        report = analyze_trades(trades)

        assert report.total == len(trades)
        assert report.wins + report.losses <= report.total
        if all(t.result != 0 for t in trades):
            assert report.wins + report.losses == report.total

    @given(trades=st.lists(trade_strategy(), min_size=1, max_size=40))
    @settings(max_examples=100)
    def test_win_rate_bounds(self, trades: list[Trade]):
        report = analyze_trades(trades)

        assert 0 <= report.win_rate <= 100

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=40))
    @settings(max_examples=50)
    def test_idempotent_and_non_mutating(self, trades: list[Trade]):
        original = list(trades)

        first = analyze_trades(trades)
        second = analyze_trades(trades)

        assert first == second
        assert trades == original

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=40))
    @settings(max_examples=50)
    def test_streaks_bounded_by_counts(self, trades: list[Trade]):
        report = analyze_trades(trades)

        assert report.longest_win_streak <= report.wins
        assert report.longest_loss_streak <= report.losses

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=40))
    @settings(max_examples=50)
    def test_session_totals_sum_to_total(self, trades: list[Trade]):
        report = analyze_trades(trades)

        assert sum(s.total for s in report.session_counts.values()) == report.total

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=40))
    @settings(max_examples=50)
    def test_top_reasons_sorted_descending(self, trades: list[Trade]):
        report = analyze_trades(trades)
        counts = [r.count for r in report.top_reasons]

        assert len(counts) <= 8
        assert counts == sorted(counts, reverse=True)

    def test_report_is_frozen(self):
        report = analyze_trades(make_trades([1]))

        assert isinstance(report, AnalysisReport)
        with pytest.raises(Exception):
            report.total = 99
