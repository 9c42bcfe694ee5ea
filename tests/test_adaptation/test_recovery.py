"""Tests for recovery scoring and classification."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable

import pytest

from training_planner.adaptation.recovery import (
    assess_recovery_status,
    overall_recovery_score,
    recovery_recommendations,
    recovery_status,
)
from training_planner.models.enums import RecoveryStatus
from training_planner.models.feedback import CompletedWorkout, RecoveryMetrics

NOW = date(2024, 3, 10)


class TestOverallRecoveryScore:
    def test_empty_snapshot_is_baseline(self) -> None:
        assert overall_recovery_score(RecoveryMetrics()) == 70

    def test_good_markers_capped_at_100(self) -> None:
        metrics = RecoveryMetrics(sleep_quality=8, muscle_soreness=3, energy_level=7, hrv=65, resting_hr=45)
        assert overall_recovery_score(metrics) == 100

    def test_poor_markers(self) -> None:
        metrics = RecoveryMetrics(sleep_quality=3, muscle_soreness=8, energy_level=3, hrv=35, resting_hr=75)
        assert overall_recovery_score(metrics) == 22

    @pytest.mark.parametrize(("hrv", "score"), [(65, 80), (55, 75), (45, 70), (35, 60)])
    def test_hrv_bands(self, hrv: float, score: int) -> None:
        assert overall_recovery_score(RecoveryMetrics(hrv=hrv)) == score

    @pytest.mark.parametrize(("resting_hr", "score"), [(45, 80), (55, 75), (65, 70), (75, 60)])
    def test_resting_hr_bands(self, resting_hr: int, score: int) -> None:
        assert overall_recovery_score(RecoveryMetrics(resting_hr=resting_hr)) == score

    def test_floor_at_zero(self) -> None:
        metrics = RecoveryMetrics(sleep_quality=0, muscle_soreness=10, energy_level=0, hrv=20, resting_hr=90)
        assert overall_recovery_score(metrics) == 0


class TestRecoveryStatus:
    @pytest.mark.parametrize(
        ("score", "status"),
        [
            (80, RecoveryStatus.RECOVERED),
            (79, RecoveryStatus.ADEQUATE),
            (60, RecoveryStatus.ADEQUATE),
            (59, RecoveryStatus.FATIGUED),
            (40, RecoveryStatus.FATIGUED),
            (39, RecoveryStatus.OVERREACHED),
        ],
    )
    def test_bands(self, score: int, status: RecoveryStatus) -> None:
        assert recovery_status(score) == status

    def test_recommendations_follow_markers(self) -> None:
        metrics = RecoveryMetrics(sleep_quality=3, muscle_soreness=8, hrv=35)
        recommendations = recovery_recommendations(RecoveryStatus.OVERREACHED, metrics)
        assert recommendations[0] == "Take 2-3 days of complete rest"
        assert "Improve sleep hygiene - aim for consistent bedtime" in recommendations
        assert "Consider foam rolling and dynamic stretching" in recommendations
        assert "HRV is low - reduce stress and training load" in recommendations

    def test_recovered_needs_nothing(self) -> None:
        assert recovery_recommendations(RecoveryStatus.RECOVERED, None) == []


class TestAssessRecoveryStatus:
    def test_metrics_take_precedence(self, completed_factory: Callable[..., CompletedWorkout]) -> None:
        completed = [completed_factory(NOW - timedelta(days=i), effort=9) for i in range(5)]
        metrics = RecoveryMetrics(sleep_quality=9, energy_level=9)
        assessment = assess_recovery_status(completed, NOW, metrics)
        assert assessment.score == 100
        assert assessment.status == RecoveryStatus.RECOVERED

    def test_history_fallback(self, completed_factory: Callable[..., CompletedWorkout]) -> None:
        completed = [completed_factory(NOW - timedelta(days=i), effort=8) for i in range(3)]
        assessment = assess_recovery_status(completed, NOW)
        assert assessment.score == 55
        assert assessment.status == RecoveryStatus.FATIGUED
        assert assessment.recommendations[0] == "Reduce training intensity by 30%"

    def test_no_history(self) -> None:
        assessment = assess_recovery_status([], NOW)
        assert assessment.score == 70
        assert assessment.status == RecoveryStatus.ADEQUATE
        assert assessment.recommendations == ()
