"""Progress analysis over completed workouts.

Performance trend compares effort-normalized pace (minutes per km divided by
RPE / 10) between the older and the more recent half of the workouts. Lower
is better.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

import pandas as pd

from training_planner.math.assessment import calculate_fitness_metrics
from training_planner.math.patterns import analyze_weekly_patterns, week_start
from training_planner.math.training_load import calculate_training_load
from training_planner.models.enums import (
    ADAPTATION_THRESHOLD_PACE,
    DEFAULT_TRAINING_AGE_YEARS,
    PERFORMANCE_TREND_BAND_PCT,
    PERFORMANCE_TREND_MIN_WORKOUTS,
    LoadTrend,
    PerformanceTrend,
)
from training_planner.models.feedback import CompletedWorkout, ProgressAnalysis
from training_planner.models.fitness import FitnessAssessment, TrainingLoadState
from training_planner.models.plan import IntensityDistribution
from training_planner.models.run import Run
from training_planner.models.workout import PlannedWorkout

# RPE assumed when the athlete did not rate the session
DEFAULT_EFFORT = 5
VOLUME_TREND_BAND = 0.10


def to_runs(completed: Sequence[CompletedWorkout]) -> list[Run]:
    """Completed workouts as Runs for the fitness model."""
    runs = []
    for workout in completed:
        distance = workout.actual_distance_km or 0.0
        duration = workout.actual_duration_min or 0.0
        runs.append(
            Run(
                date=workout.date,
                distance_km=distance,
                duration_min=duration,
                avg_pace_min_per_km=duration / distance if distance and duration else None,
                avg_hr=workout.avg_hr,
                effort_level=workout.perceived_effort,
                notes=workout.notes,
            )
        )
    return runs


def completed_load(completed: Sequence[CompletedWorkout]) -> TrainingLoadState:
    """Training load of completed work at the reference threshold pace."""
    return calculate_training_load(to_runs(completed), ADAPTATION_THRESHOLD_PACE)


def adherence_rate(
    completed: Sequence[CompletedWorkout], planned: Sequence[PlannedWorkout], now: date
) -> float:
    """Completed workouts per planned workout already due; 1 when none are due."""
    due = sum(1 for w in planned if w.date <= now)
    if due == 0:
        return 1.0
    return len(completed) / due


def _relative_pace(workouts: Sequence[CompletedWorkout]) -> float:
    paces = [
        (w.actual_duration_min / w.actual_distance_km) / (w.perceived_effort / 10)
        for w in workouts
        if w.actual_distance_km and w.actual_duration_min and w.perceived_effort
    ]
    if not paces:
        return 0.0
    return sum(paces) / len(paces)


def performance_trend(completed: Sequence[CompletedWorkout]) -> PerformanceTrend:
    """Improving / declining when relative pace moves more than 2%."""
    if len(completed) < PERFORMANCE_TREND_MIN_WORKOUTS:
        return PerformanceTrend.STABLE
    ordered = sorted(completed, key=lambda w: w.date)
    midpoint = len(ordered) // 2
    older = _relative_pace(ordered[:midpoint])
    recent = _relative_pace(ordered[midpoint:])
    if older == 0:
        return PerformanceTrend.STABLE

    improvement = (older - recent) / older * 100
    if improvement > PERFORMANCE_TREND_BAND_PCT:
        return PerformanceTrend.IMPROVING
    if improvement < -PERFORMANCE_TREND_BAND_PCT:
        return PerformanceTrend.DECLINING
    return PerformanceTrend.STABLE


def weekly_volume(completed: Sequence[CompletedWorkout]) -> tuple[float, LoadTrend]:
    """Average weekly distance and its trend (first vs last third of weeks)."""
    rows = [(week_start(w.date), w.actual_distance_km) for w in completed if w.actual_distance_km]
    if not rows:
        return 0.0, LoadTrend.STABLE

    frame = pd.DataFrame(rows, columns=["week", "distance"])
    volumes = frame.groupby("week")["distance"].sum().sort_index().to_numpy()
    average = float(volumes.mean())

    trend = LoadTrend.STABLE
    if len(volumes) >= 3:
        third = len(volumes) // 3
        first_avg = float(volumes[:third].mean())
        last_avg = float(volumes[-third:].mean())
        if last_avg > first_avg * (1 + VOLUME_TREND_BAND):
            trend = LoadTrend.INCREASING
        elif last_avg < first_avg * (1 - VOLUME_TREND_BAND):
            trend = LoadTrend.DECREASING
    return average, trend


def effort_distribution(completed: Sequence[CompletedWorkout]) -> IntensityDistribution:
    """Percent of workouts by RPE: <=3 easy, <=6 moderate, <=8 hard, else very hard."""
    counts = [0, 0, 0, 0]
    for workout in completed:
        effort = workout.perceived_effort or DEFAULT_EFFORT
        if effort <= 3:
            counts[0] += 1
        elif effort <= 6:
            counts[1] += 1
        elif effort <= 8:
            counts[2] += 1
        else:
            counts[3] += 1
    total = sum(counts) or 1
    easy, moderate, hard, very_hard = (round(c / total * 100) for c in counts)
    return IntensityDistribution(easy=easy, moderate=moderate, hard=hard, very_hard=very_hard)


def analyze_progress(
    completed: Sequence[CompletedWorkout], planned: Sequence[PlannedWorkout], now: date
) -> ProgressAnalysis:
    """Adherence, trends, effort distribution and a fitness snapshot.

    Args:
        completed: Completed-workout reports in any order.
        planned: Planned workouts of the current plan.
        now: Reference date; workouts dated on or before it are due.
    """
    runs = to_runs(completed)
    metrics = calculate_fitness_metrics(runs, now)
    patterns = analyze_weekly_patterns(runs)
    average, trend = weekly_volume(completed)

    return ProgressAnalysis(
        adherence_rate=adherence_rate(completed, planned, now),
        completed=tuple(completed),
        total_workouts=len(planned),
        performance_trend=performance_trend(completed),
        weekly_volume_avg=average,
        volume_trend=trend,
        intensity_distribution=effort_distribution(completed),
        current_fitness=FitnessAssessment(
            vdot=metrics.vdot,
            weekly_mileage_km=float(patterns.avg_weekly_mileage),
            longest_recent_run_km=max((r.distance_km for r in runs), default=0.0),
            training_age_years=DEFAULT_TRAINING_AGE_YEARS,
        ),
        analyzed_on=now,
    )
