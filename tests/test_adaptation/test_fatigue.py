"""Tests for fatigue detection and upcoming-workout scaling."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable

import pytest

from training_planner.adaptation.fatigue import (
    acute_fatigue,
    detect_chronic_fatigue,
    detect_fatigue_and_adjust,
    detect_load_overload,
    estimate_session_tss,
    fatigue_level,
)
from training_planner.models.enums import ChronicFatiguePattern, FatigueLevel, WorkoutType, ZoneType
from training_planner.models.feedback import ChronicFatigue, CompletedWorkout, LoadOverload
from training_planner.models.workout import PlannedWorkout

NOW = date(2024, 3, 10)

CompletedFactory = Callable[..., CompletedWorkout]

NO_CHRONIC = ChronicFatigue(detected=False, days=0, pattern=ChronicFatiguePattern.NONE)
NO_OVERLOAD = LoadOverload(detected=False, consecutive_days=0, max_daily_tss=0.0)


def _struggling(completed_factory: CompletedFactory, days: list[int]) -> list[CompletedWorkout]:
    return [completed_factory(NOW - timedelta(days=d), effort=8, completion=0.8) for d in days]


class TestAcuteFatigue:
    def test_points(self, completed_factory: CompletedFactory) -> None:
        completed = [
            completed_factory(NOW - timedelta(days=1), effort=9, completion=0.8, notes="Very TIRED legs"),
            completed_factory(NOW - timedelta(days=3), effort=10, completion=0.5),
            completed_factory(NOW + timedelta(days=1), effort=10, completion=0.5),
        ]
        assert acute_fatigue(completed, NOW) == 43

    def test_easy_sessions_score_nothing(self, completed_factory: CompletedFactory) -> None:
        assert acute_fatigue([completed_factory(NOW, effort=7)], NOW) == 0

    def test_capped(self, completed_factory: CompletedFactory) -> None:
        completed = [
            completed_factory(NOW - timedelta(days=d), effort=10, completion=0.5, notes="fatigue")
            for d in range(3)
        ]
        assert acute_fatigue(completed, NOW) == 100


class TestChronicFatigue:
    def test_persistent(self, completed_factory: CompletedFactory) -> None:
        chronic = detect_chronic_fatigue(_struggling(completed_factory, [0, 1, 2, 3, 4]))
        assert chronic.days == 5
        assert chronic.pattern == ChronicFatiguePattern.PERSISTENT_UNDERPERFORMANCE

    def test_emerging(self, completed_factory: CompletedFactory) -> None:
        chronic = detect_chronic_fatigue(_struggling(completed_factory, [0, 1, 2]))
        assert chronic.detected
        assert chronic.pattern == ChronicFatiguePattern.EMERGING_FATIGUE

    def test_streak_resets(self, completed_factory: CompletedFactory) -> None:
        completed = _struggling(completed_factory, [0, 1, 3, 4])
        completed.append(completed_factory(NOW - timedelta(days=2), effort=8, completion=1.0))
        chronic = detect_chronic_fatigue(completed)
        assert chronic.days == 2
        assert not chronic.detected
        assert chronic.pattern == ChronicFatiguePattern.NONE


class TestLoadOverload:
    def test_session_tss(self, completed_factory: CompletedFactory) -> None:
        assert estimate_session_tss(completed_factory(NOW, minutes=60, effort=10)) == 100
        assert estimate_session_tss(completed_factory(NOW, minutes=60, effort=None)) == 25
        assert estimate_session_tss(completed_factory(NOW, minutes=None)) == 0

    def test_consecutive_days(self, completed_factory: CompletedFactory) -> None:
        completed = [completed_factory(NOW - timedelta(days=d), minutes=120, effort=10) for d in (0, 1)]
        overload = detect_load_overload(completed)
        assert overload.detected
        assert overload.consecutive_days == 2
        assert overload.max_daily_tss == 200

    def test_gap_breaks_run(self, completed_factory: CompletedFactory) -> None:
        completed = [completed_factory(NOW - timedelta(days=d), minutes=120, effort=10) for d in (0, 2)]
        overload = detect_load_overload(completed)
        assert not overload.detected
        assert overload.consecutive_days == 1

    def test_sessions_summed_per_day(self, completed_factory: CompletedFactory) -> None:
        completed = [completed_factory(NOW, minutes=60, effort=10) for _ in range(2)]
        assert detect_load_overload(completed).max_daily_tss == 200


class TestFatigueLevel:
    def test_severe_from_chronic(self) -> None:
        chronic = ChronicFatigue(True, 5, ChronicFatiguePattern.PERSISTENT_UNDERPERFORMANCE)
        assert fatigue_level(0, chronic, NO_OVERLOAD, 1.0) == FatigueLevel.SEVERE

    def test_severe_from_overload(self) -> None:
        overload = LoadOverload(True, 3, 200.0)
        assert fatigue_level(0, NO_CHRONIC, overload, 1.0) == FatigueLevel.SEVERE

    @pytest.mark.parametrize(
        ("acute", "ratio", "level"),
        [
            (71, 1.0, FatigueLevel.HIGH),
            (0, 1.6, FatigueLevel.HIGH),
            (51, 1.0, FatigueLevel.MODERATE),
            (0, 1.4, FatigueLevel.MODERATE),
            (50, 1.3, FatigueLevel.LOW),
        ],
    )
    def test_acute_and_ratio(self, acute: int, ratio: float, level: FatigueLevel) -> None:
        assert fatigue_level(acute, NO_CHRONIC, NO_OVERLOAD, ratio) == level


class TestDetectFatigueAndAdjust:
    @pytest.fixture
    def upcoming(self, workout_factory: Callable[..., PlannedWorkout]) -> list[PlannedWorkout]:
        return [
            workout_factory("done", NOW - timedelta(days=1), minutes=60, intensity=60),
            workout_factory("easy", NOW + timedelta(days=1), minutes=60, intensity=60),
            workout_factory("rec", NOW + timedelta(days=2), WorkoutType.RECOVERY, minutes=30, intensity=50),
        ]

    def test_low_fatigue_changes_nothing(self, upcoming: list[PlannedWorkout]) -> None:
        assessment = detect_fatigue_and_adjust([], upcoming, NOW)
        assert assessment.level == FatigueLevel.LOW
        assert assessment.adjusted_workouts == tuple(upcoming)
        assert assessment.warnings == ()

    def test_severe_fatigue_scales_future_work(
        self, completed_factory: CompletedFactory, upcoming: list[PlannedWorkout]
    ) -> None:
        completed = _struggling(completed_factory, [0, 1, 2, 3, 4])
        assessment = detect_fatigue_and_adjust(completed, upcoming, NOW)
        done, easy, recovery = assessment.adjusted_workouts

        assert assessment.level == FatigueLevel.SEVERE
        assert assessment.warnings == ("Severe fatigue detected - immediate rest recommended",)
        assert done == upcoming[0]
        assert recovery == upcoming[2]
        assert easy.name.endswith("(Adjusted for severe fatigue)")
        assert easy.target.duration_min == 30
        assert easy.target.distance_km == 5.0
        assert easy.target.intensity == 42
        assert [(s.duration_min, s.intensity) for s in easy.workout.segments] == [(30, 42)]
        assert easy.workout.segments[0].zone == ZoneType.RECOVERY
        assert easy.workout.estimated_tss == 9
        assert (easy.target.tss, easy.target.load) == (9, 9)
