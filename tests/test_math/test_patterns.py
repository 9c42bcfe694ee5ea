"""Tests for weekly training pattern analysis."""

from __future__ import annotations

from datetime import date, timedelta

from training_planner.math.patterns import (
    analyze_weekly_patterns,
    sunday_weekday,
    week_start,
    weekly_mileage_increase_pct,
)
from training_planner.models.fitness import WeeklyPatterns
from training_planner.models.run import Run

SUNDAY = date(2024, 1, 7)


def _week(sunday: date, long_km: float = 18.0) -> list[Run]:
    return [
        Run(sunday, long_km, long_km * 6),
        Run(sunday + timedelta(days=2), 8.0, 40.0),
        Run(sunday + timedelta(days=4), 8.0, 44.0),
    ]


class TestCalendarHelpers:
    def test_sunday_is_zero(self) -> None:
        assert sunday_weekday(SUNDAY) == 0
        assert sunday_weekday(SUNDAY + timedelta(days=6)) == 6

    def test_week_starts_on_sunday(self) -> None:
        assert week_start(SUNDAY + timedelta(days=3)) == SUNDAY
        assert week_start(SUNDAY) == SUNDAY


class TestWeeklyPatterns:
    def test_empty_history(self) -> None:
        assert analyze_weekly_patterns([]) == WeeklyPatterns()

    def test_regular_weeks(self) -> None:
        runs = [r for w in range(4) for r in _week(SUNDAY + timedelta(weeks=w))]
        patterns = analyze_weekly_patterns(runs)
        assert patterns.avg_weekly_mileage == 34
        assert patterns.max_weekly_mileage == 34
        assert patterns.avg_runs_per_week == 3.0
        assert patterns.optimal_days == (0, 2, 4)
        assert patterns.typical_long_run_day == 0
        assert patterns.consistency_score == 100

    def test_missed_week_lowers_consistency(self) -> None:
        runs = _week(SUNDAY) + _week(SUNDAY + timedelta(weeks=2))
        # 6 runs against 3 per week over 3 calendar weeks
        assert analyze_weekly_patterns(runs).consistency_score == 67

    def test_no_long_run_day_without_long_runs(self) -> None:
        runs = _week(SUNDAY, long_km=12.0)
        assert analyze_weekly_patterns(runs).typical_long_run_day is None

    def test_input_order_irrelevant(self) -> None:
        runs = [r for w in range(3) for r in _week(SUNDAY + timedelta(weeks=w))]
        assert analyze_weekly_patterns(runs) == analyze_weekly_patterns(list(reversed(runs)))


class TestMileageIncrease:
    def test_zero_without_history(self) -> None:
        assert weekly_mileage_increase_pct([], SUNDAY) == 0.0

    def test_steady_week_is_zero(self) -> None:
        runs = [r for w in range(4) for r in _week(SUNDAY + timedelta(weeks=w))]
        now = SUNDAY + timedelta(days=27)
        assert weekly_mileage_increase_pct(runs, now) == 0.0

    def test_bigger_week_is_positive(self) -> None:
        runs = [r for w in range(4) for r in _week(SUNDAY + timedelta(weeks=w))]
        now = SUNDAY + timedelta(days=27)
        runs.append(Run(now, 17.0, 100.0))
        assert weekly_mileage_increase_pct(runs, now) > 0
