"""Fitness assessment: combines the performance, load and pattern models."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from training_planner.cache import CalculationCache
from training_planner.math.patterns import analyze_weekly_patterns, weekly_mileage_increase_pct
from training_planner.math.performance import (
    calculate_critical_speed,
    calculate_lactate_threshold,
    calculate_vdot,
    estimate_running_economy,
)
from training_planner.math.training_load import (
    calculate_injury_risk,
    calculate_recovery_score,
    calculate_training_load,
)
from training_planner.models.enums import (
    DEFAULT_LONGEST_RUN_KM,
    DEFAULT_RECOVERY_RATE,
    DEFAULT_TRAINING_AGE_YEARS,
    OVERALL_SCORE_AGE_CEILING,
    OVERALL_SCORE_MILEAGE_CEILING,
    OVERALL_SCORE_VDOT_CEILING,
    OVERALL_SCORE_WEIGHTS,
)
from training_planner.models.fitness import FitnessAssessment, FitnessMetrics
from training_planner.models.run import Run


def calculate_fitness_metrics(
    runs: Sequence[Run],
    now: date,
    resting_hr: int | None = None,
    hrv: float | None = None,
) -> FitnessMetrics:
    """Compute every fitness metric from a run history.

    TSS uses the threshold pace implied by the estimated VDOT.

    Args:
        runs: Run history in any order.
        now: Reference date for trailing-window metrics.
        resting_hr: Optional resting heart rate for the recovery score.
        hrv: Optional HRV for the recovery score.

    Returns:
        FitnessMetrics; defaults fill in wherever the history is too sparse.
    """
    vdot = calculate_vdot(runs)
    lactate_threshold = calculate_lactate_threshold(vdot)
    threshold_pace = 60 / lactate_threshold

    training_load = calculate_training_load(runs, threshold_pace)
    recovery_score = calculate_recovery_score(runs, now, resting_hr=resting_hr, hrv=hrv)
    injury_risk = calculate_injury_risk(
        training_load, weekly_mileage_increase_pct(runs, now), recovery_score
    )

    return FitnessMetrics(
        vdot=vdot,
        critical_speed_kmh=calculate_critical_speed(runs),
        running_economy=estimate_running_economy(runs),
        lactate_threshold_kmh=lactate_threshold,
        training_load=training_load,
        injury_risk=injury_risk,
        recovery_score=recovery_score,
    )


def calculate_overall_score(
    vdot: float,
    weekly_mileage_km: float,
    training_age_years: float,
    recovery_rate: float | None = None,
) -> int:
    """Weighted 0-100 fitness score: VDOT 40%, volume 25%, experience 20%, recovery 15%."""
    vdot_score = min(vdot / OVERALL_SCORE_VDOT_CEILING * 100, 100)
    volume_score = min(weekly_mileage_km / OVERALL_SCORE_MILEAGE_CEILING * 100, 100)
    experience_score = min(training_age_years / OVERALL_SCORE_AGE_CEILING * 100, 100)
    recovery_score = DEFAULT_RECOVERY_RATE if recovery_rate is None else recovery_rate
    return round(
        vdot_score * OVERALL_SCORE_WEIGHTS["vdot"]
        + volume_score * OVERALL_SCORE_WEIGHTS["volume"]
        + experience_score * OVERALL_SCORE_WEIGHTS["experience"]
        + recovery_score * OVERALL_SCORE_WEIGHTS["recovery"]
    )


def default_fitness() -> FitnessAssessment:
    """Conservative assessment for athletes without usable history."""
    assessment = FitnessAssessment()
    return FitnessAssessment(
        overall_score=calculate_overall_score(
            assessment.vdot, assessment.weekly_mileage_km, assessment.training_age_years
        )
    )


def assess_fitness_from_runs(
    runs: Sequence[Run],
    now: date,
    cache: CalculationCache | None = None,
) -> FitnessAssessment:
    """Build a FitnessAssessment from run history.

    Training age cannot be inferred from a run log and stays at one year.

    Args:
        runs: Run history in any order.
        now: Reference date for trailing-window metrics.
        cache: Optional cache keyed on the runs and reference date.

    Returns:
        The assessment, including its overall score.
    """
    if cache is not None:
        return cache.get_or_compute(
            "fitness-assessment", (tuple(runs), now), lambda: assess_fitness_from_runs(runs, now)
        )

    metrics = calculate_fitness_metrics(runs, now)
    patterns = analyze_weekly_patterns(runs)
    weekly_mileage = float(patterns.avg_weekly_mileage)
    longest = max((r.distance_km for r in runs), default=DEFAULT_LONGEST_RUN_KM)

    return FitnessAssessment(
        vdot=metrics.vdot,
        weekly_mileage_km=weekly_mileage,
        longest_recent_run_km=longest,
        training_age_years=DEFAULT_TRAINING_AGE_YEARS,
        critical_speed_kmh=metrics.critical_speed_kmh,
        running_economy=metrics.running_economy,
        lactate_threshold_kmh=metrics.lactate_threshold_kmh,
        recovery_rate=metrics.recovery_score,
        overall_score=calculate_overall_score(
            metrics.vdot, weekly_mileage, DEFAULT_TRAINING_AGE_YEARS, metrics.recovery_score
        ),
    )
