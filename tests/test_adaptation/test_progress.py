"""Tests for progress analysis over completed workouts."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable

from training_planner.adaptation.progress import (
    adherence_rate,
    analyze_progress,
    completed_load,
    effort_distribution,
    performance_trend,
    to_runs,
    weekly_volume,
)
from training_planner.models.enums import LoadTrend, PerformanceTrend
from training_planner.models.feedback import CompletedWorkout
from training_planner.models.workout import PlannedWorkout

NOW = date(2024, 3, 10)

CompletedFactory = Callable[..., CompletedWorkout]


class TestToRuns:
    def test_pace_from_duration_and_distance(self, completed_factory: CompletedFactory) -> None:
        run = to_runs([completed_factory(NOW, minutes=40, distance_km=8)])[0]
        assert run.avg_pace_min_per_km == 5.0
        assert run.effort_level == 5

    def test_missing_distance(self, completed_factory: CompletedFactory) -> None:
        run = to_runs([completed_factory(NOW, distance_km=None)])[0]
        assert run.distance_km == 0.0
        assert run.avg_pace_min_per_km is None

    def test_unpaced_work_carries_no_load(self, completed_factory: CompletedFactory) -> None:
        completed = [completed_factory(NOW - timedelta(days=i), distance_km=None) for i in range(5)]
        assert completed_load(completed).ratio == 1.0


class TestAdherence:
    def test_only_due_workouts_count(
        self, completed_factory: CompletedFactory, workout_factory: Callable[..., PlannedWorkout]
    ) -> None:
        planned = [workout_factory(f"w{i}", NOW + timedelta(days=i - 3)) for i in range(6)]
        completed = [completed_factory(NOW - timedelta(days=i)) for i in range(3)]
        assert adherence_rate(completed, planned, NOW) == 0.75

    def test_nothing_due(self, workout_factory: Callable[..., PlannedWorkout]) -> None:
        assert adherence_rate([], [workout_factory("w", NOW + timedelta(days=1))], NOW) == 1.0


class TestPerformanceTrend:
    def _history(
        self, completed_factory: CompletedFactory, older: float, recent: float
    ) -> list[CompletedWorkout]:
        day = NOW - timedelta(days=10)
        return [
            completed_factory(day + timedelta(days=i), minutes=older if i < 3 else recent, distance_km=8)
            for i in range(6)
        ]

    def test_slower_at_same_effort_is_declining(self, completed_factory: CompletedFactory) -> None:
        assert performance_trend(self._history(completed_factory, 40, 44)) == PerformanceTrend.DECLINING

    def test_faster_at_same_effort_is_improving(self, completed_factory: CompletedFactory) -> None:
        assert performance_trend(self._history(completed_factory, 44, 40)) == PerformanceTrend.IMPROVING

    def test_small_change_is_stable(self, completed_factory: CompletedFactory) -> None:
        assert performance_trend(self._history(completed_factory, 40, 40.4)) == PerformanceTrend.STABLE

    def test_too_few_workouts(self, completed_factory: CompletedFactory) -> None:
        history = self._history(completed_factory, 40, 60)[:4]
        assert performance_trend(history) == PerformanceTrend.STABLE


class TestWeeklyVolume:
    def test_average_and_trend(self, completed_factory: CompletedFactory) -> None:
        completed = [
            completed_factory(NOW - timedelta(days=14), distance_km=20),
            completed_factory(NOW - timedelta(days=7), distance_km=30),
            completed_factory(NOW, distance_km=15),
            completed_factory(NOW + timedelta(days=1), distance_km=25),
        ]
        assert weekly_volume(completed) == (30.0, LoadTrend.INCREASING)

    def test_empty(self) -> None:
        assert weekly_volume([]) == (0.0, LoadTrend.STABLE)


class TestEffortDistribution:
    def test_buckets(self, completed_factory: CompletedFactory) -> None:
        completed = [completed_factory(NOW, effort=e) for e in (2, 5, 7, 9)]
        distribution = effort_distribution(completed)
        assert (distribution.easy, distribution.moderate, distribution.hard, distribution.very_hard) == (
            25,
            25,
            25,
            25,
        )

    def test_unrated_counts_as_moderate(self, completed_factory: CompletedFactory) -> None:
        assert effort_distribution([completed_factory(NOW, effort=None)]).moderate == 100


class TestAnalyzeProgress:
    def test_snapshot(
        self, completed_factory: CompletedFactory, workout_factory: Callable[..., PlannedWorkout]
    ) -> None:
        planned = [workout_factory(f"w{i}", NOW - timedelta(days=i)) for i in range(4)]
        completed = [
            completed_factory(NOW - timedelta(days=1), distance_km=12),
            completed_factory(NOW - timedelta(days=2), distance_km=6),
        ]
        progress = analyze_progress(completed, planned, NOW)

        assert progress.adherence_rate == 0.5
        assert progress.total_workouts == 4
        assert progress.completed == tuple(completed)
        assert progress.analyzed_on == NOW
        assert progress.current_fitness.longest_recent_run_km == 12
        assert progress.performance_trend == PerformanceTrend.STABLE

    def test_no_history(self) -> None:
        progress = analyze_progress([], [], NOW)
        assert progress.adherence_rate == 1.0
        assert progress.weekly_volume_avg == 0.0
        assert progress.current_fitness.vdot == 35
