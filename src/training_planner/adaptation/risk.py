"""Overreaching risk: current injury risk plus a projection over the next week.

Reference:
    Gabbett (2016). The training-injury prevention paradox. Br J Sports Med
    50(5):273-280.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, timedelta

from training_planner.adaptation.progress import completed_load, to_runs
from training_planner.math.patterns import weekly_mileage_increase_pct
from training_planner.math.training_load import calculate_injury_risk, calculate_recovery_score
from training_planner.models.enums import (
    CHRONIC_FATIGUE_EFFORT,
    HIGH_RISK_ACWR,
    MIN_RECOVERY_SCORE,
    SAFE_ACWR_LOWER,
    SAFE_ACWR_UPPER,
    RiskLevel,
)
from training_planner.models.feedback import CompletedWorkout, OverreachingRisk
from training_planner.models.workout import PlannedWorkout

# Weekly TSS that moves the projected ratio by 1.0
PROJECTION_TSS_SCALE = 350
DEFAULT_PLANNED_TSS = 50

# (current risk floor, projected risk floor, level), checked in order
_RISK_LEVELS = (
    (80, 90, RiskLevel.CRITICAL),
    (60, 70, RiskLevel.HIGH),
    (40, 50, RiskLevel.MODERATE),
)


def project_risk(
    completed: Sequence[CompletedWorkout],
    planned: Sequence[PlannedWorkout],
    ratio: float,
    now: date,
) -> int:
    """Risk 0-100 if the coming week is run as planned."""
    horizon = now + timedelta(days=7)
    planned_tss = sum(
        w.workout.estimated_tss or DEFAULT_PLANNED_TSS for w in planned if now < w.date < horizon
    )
    projected_ratio = ratio + planned_tss / PROJECTION_TSS_SCALE

    risk = 0
    if projected_ratio > HIGH_RISK_ACWR:
        risk += 40
    elif projected_ratio > SAFE_ACWR_UPPER:
        risk += 25
    elif projected_ratio < SAFE_ACWR_LOWER:
        risk += 20

    recent_hard = sum(
        1
        for w in completed
        if now - timedelta(days=7) < w.date <= now
        and w.perceived_effort is not None
        and w.perceived_effort >= CHRONIC_FATIGUE_EFFORT
    )
    return min(100, risk + recent_hard * 10)


def risk_level(current: int, projected: int) -> RiskLevel:
    for current_floor, projected_floor, level in _RISK_LEVELS:
        if current >= current_floor or projected >= projected_floor:
            return level
    return RiskLevel.LOW


def mitigation_strategies(
    level: RiskLevel, ratio: float, weekly_increase_pct: float, recovery_score: int
) -> list[str]:
    strategies: list[str] = []
    if level >= RiskLevel.HIGH:
        strategies += [
            "Immediately reduce training volume by 30-40%",
            "Replace high-intensity workouts with easy recovery runs",
            "Schedule professional assessment if pain persists",
        ]
    if ratio > SAFE_ACWR_UPPER:
        strategies += [
            "Gradually reduce training load over 2 weeks",
            "Focus on maintaining fitness rather than building",
        ]
    if weekly_increase_pct > 10:
        strategies += [
            "Limit weekly mileage increases to 10%",
            "Add recovery weeks every 3-4 weeks",
        ]
    if recovery_score < MIN_RECOVERY_SCORE:
        strategies += [
            "Prioritize sleep and nutrition",
            "Consider cross-training activities",
            "Monitor morning heart rate variability",
        ]
    return strategies


def assess_overreaching_risk(
    completed: Sequence[CompletedWorkout],
    planned: Sequence[PlannedWorkout],
    now: date,
) -> OverreachingRisk:
    """Current and projected overreaching risk with mitigation advice.

    Args:
        completed: Completed-workout reports.
        planned: Planned workouts; those in the next 7 days drive the projection.
        now: Reference date.
    """
    runs = to_runs(completed)
    load = completed_load(completed)
    increase = weekly_mileage_increase_pct(runs, now)
    recovery = calculate_recovery_score(runs, now)
    current = calculate_injury_risk(load, increase, recovery)
    projected = project_risk(completed, planned, load.ratio, now)
    level = risk_level(current, projected)

    return OverreachingRisk(
        level=level,
        acute_chronic_ratio=load.ratio,
        weekly_load_increase_pct=increase,
        current_risk=current,
        projected_risk=projected,
        mitigation_strategies=tuple(mitigation_strategies(level, load.ratio, increase, recovery)),
    )
