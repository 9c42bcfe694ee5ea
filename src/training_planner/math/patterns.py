"""Weekly training pattern analysis over a run history.

Weeks start on Sunday and weekdays are numbered Sunday = 0 ... Saturday = 6,
matching TrainingPreferences.available_days.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, timedelta

import pandas as pd

from training_planner.models.enums import LONG_RUN_MIN_KM, RECOVERY_WINDOW_DAYS
from training_planner.models.fitness import WeeklyPatterns
from training_planner.models.run import Run


def sunday_weekday(d: date) -> int:
    """Weekday index with Sunday = 0."""
    return (d.weekday() + 1) % 7


def week_start(d: date) -> date:
    """The Sunday on or before ``d``."""
    return d - timedelta(days=sunday_weekday(d))


def _runs_frame(runs: Sequence[Run]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "week_start": [week_start(r.date) for r in runs],
            "weekday": [sunday_weekday(r.date) for r in runs],
            "distance_km": [r.distance_km for r in runs],
        }
    )


def analyze_weekly_patterns(runs: Sequence[Run]) -> WeeklyPatterns:
    """Summarize weekly volume, frequency and habitual training days.

    Args:
        runs: Run history in any order.

    Returns:
        WeeklyPatterns. ``optimal_days`` lists the most frequently used
        weekdays (as many as the rounded average runs per week), most
        frequent first. ``typical_long_run_day`` is None without any run
        over 15 km. Consistency compares the runs logged with the runs
        expected over every calendar week the history spans.
    """
    if not runs:
        return WeeklyPatterns()

    frame = _runs_frame(runs)
    weekly_distance = frame.groupby("week_start")["distance_km"].sum()
    active_weeks = len(weekly_distance)
    avg_runs_per_week = len(frame) / active_weeks

    day_frequency = frame["weekday"].value_counts().reindex(range(7), fill_value=0)
    ranked_days = sorted(range(7), key=lambda day: -day_frequency[day])
    optimal_days = tuple(ranked_days[: round(avg_runs_per_week)])

    long_runs = frame[frame["distance_km"] > LONG_RUN_MIN_KM]
    typical_long_run_day = None
    if not long_runs.empty:
        long_days = long_runs["weekday"].value_counts().reindex(range(7), fill_value=0)
        typical_long_run_day = int(long_days.idxmax())

    first_week = min(weekly_distance.index)
    last_week = max(weekly_distance.index)
    spanned_weeks = (last_week - first_week).days // 7 + 1
    expected_runs = avg_runs_per_week * spanned_weeks
    consistency = round(len(frame) / expected_runs * 100)

    return WeeklyPatterns(
        avg_weekly_mileage=round(float(weekly_distance.mean())),
        max_weekly_mileage=round(float(weekly_distance.max())),
        avg_runs_per_week=round(avg_runs_per_week, 1),
        consistency_score=min(100, consistency),
        optimal_days=optimal_days,
        typical_long_run_day=typical_long_run_day,
    )


def weekly_mileage_increase_pct(runs: Sequence[Run], now: date) -> float:
    """Percent change of the trailing 7-day distance versus the weekly average.

    Returns:
        Percentage (positive = more than usual); 0.0 without history.
    """
    average = analyze_weekly_patterns(runs).avg_weekly_mileage
    if average <= 0:
        return 0.0
    window_start = now - timedelta(days=RECOVERY_WINDOW_DAYS)
    recent = sum(r.distance_km for r in runs if r.date > window_start)
    return (recent - average) / average * 100
