"""Tests for fitness metrics, overall score and run-history assessment."""

from __future__ import annotations

from datetime import date

import pytest

from training_planner.cache import CalculationCache
from training_planner.math.assessment import (
    assess_fitness_from_runs,
    calculate_fitness_metrics,
    calculate_overall_score,
    default_fitness,
)
from training_planner.math.performance import calculate_vdot
from training_planner.models.run import Run

NOW = date(2024, 2, 4)


class TestOverallScore:
    def test_ceilings_give_100(self) -> None:
        assert calculate_overall_score(80, 100, 10, 100) == 100

    def test_values_above_ceiling_capped(self) -> None:
        assert calculate_overall_score(90, 150, 20, 100) == 100

    def test_missing_recovery_uses_default(self) -> None:
        # 20 + 7.5 + 2 + 11.25
        assert calculate_overall_score(40, 30, 1) == 41


class TestDefaultFitness:
    def test_conservative_defaults(self) -> None:
        fitness = default_fitness()
        assert fitness.vdot == 40
        assert fitness.weekly_mileage_km == 30.0
        assert fitness.overall_score == 41


class TestFitnessMetrics:
    def test_empty_history_defaults(self) -> None:
        metrics = calculate_fitness_metrics([], NOW)
        assert metrics.vdot == 35
        assert metrics.recovery_score >= 70
        assert metrics.training_load.ratio == 1.0
        assert metrics.critical_speed_kmh == 10.0
        assert metrics.running_economy == 200

    def test_threshold_follows_vdot(self, race_history: list[Run]) -> None:
        metrics = calculate_fitness_metrics(race_history, NOW)
        assert metrics.vdot == calculate_vdot(race_history)
        assert metrics.lactate_threshold_kmh == pytest.approx(metrics.vdot * 0.88 / 3.5)

    def test_injury_risk_in_range(self, race_history: list[Run]) -> None:
        metrics = calculate_fitness_metrics(race_history, NOW)
        assert 0 <= metrics.injury_risk <= 100


class TestAssessFromRuns:
    def test_empty_history(self) -> None:
        fitness = assess_fitness_from_runs([], NOW)
        assert fitness.vdot == 35
        assert fitness.weekly_mileage_km == 0.0
        assert fitness.longest_recent_run_km == 10.0
        assert fitness.recovery_rate == 70
        assert fitness.overall_score == 30

    def test_race_history(self, race_history: list[Run]) -> None:
        fitness = assess_fitness_from_runs(race_history, NOW)
        assert fitness.vdot > 35
        assert fitness.longest_recent_run_km == 18.0
        assert fitness.training_age_years == 1.0

    def test_cached_result_identical(self, race_history: list[Run]) -> None:
        cache = CalculationCache()
        first = assess_fitness_from_runs(race_history, NOW, cache=cache)
        second = assess_fitness_from_runs(race_history, NOW, cache=cache)
        assert first == second == assess_fitness_from_runs(race_history, NOW)
        assert cache.stats().hits == 1
