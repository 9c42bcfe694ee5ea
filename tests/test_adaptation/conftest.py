"""Fixtures shared by the adaptation tests."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable

import pytest

from training_planner.models.enums import WorkoutType
from training_planner.models.feedback import CompletedWorkout
from training_planner.models.plan import TrainingPlan
from training_planner.models.workout import PlannedWorkout

NOW = date(2024, 3, 10)


@pytest.fixture
def adaptable_plan(
    workout_factory: Callable[..., PlannedWorkout], plan_factory: Callable[..., TrainingPlan]
) -> TrainingPlan:
    """Two done workouts and five future ones, straddling NOW.

    ids: past (-2d threshold 88), today (vo2max 95), f1 (+1d easy 65), f2 (+2d vo2max 95),
    f3 (+4d tempo 78), f4 (+9d threshold 88), f5 (+10d recovery 50).
    """
    W = WorkoutType
    specs = [
        ("past", -2, W.THRESHOLD, 60, 88),
        ("today", 0, W.VO2MAX, 40, 95),
        ("f1", 1, W.EASY, 60, 65),
        ("f2", 2, W.VO2MAX, 40, 95),
        ("f3", 4, W.TEMPO, 50, 78),
        ("f4", 9, W.THRESHOLD, 60, 88),
        ("f5", 10, W.RECOVERY, 30, 50),
    ]
    return plan_factory(
        [
            workout_factory(wid, NOW + timedelta(days=offset), wtype, minutes=minutes, intensity=intensity)
            for wid, offset, wtype, minutes, intensity in specs
        ]
    )


@pytest.fixture
def spike_history(completed_factory: Callable[..., CompletedWorkout]) -> list[CompletedWorkout]:
    """Three weeks of short easy running, then a week of long threshold-paced runs up to NOW."""
    start = NOW - timedelta(days=27)
    easy = [completed_factory(start + timedelta(days=i), minutes=30, distance_km=5) for i in range(21)]
    hard = [completed_factory(start + timedelta(days=21 + i), minutes=90, distance_km=18) for i in range(7)]
    return easy + hard
