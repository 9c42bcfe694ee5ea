"""Periodization math: phase allocation, volume progression, weekly patterns.

Phases always run base -> build -> peak -> taper (-> recovery). Week counts
come from fixed percentage tables per plan-length bucket, truncated rather
than redistributed.

References:
    Pfitzinger & Douglas (2009), Advanced Marathoning, 2nd ed.
    Bosquet et al. (2007), Effects of tapering on performance: a meta-analysis.
    Damsted et al. (2019), J Orthop Sports Phys Ther 49(4): weekly progression.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from training_planner.models.enums import (
    PROGRESSION_RATE_ADVANCED,
    PROGRESSION_RATE_BEGINNER,
    PROGRESSION_RATE_INTERMEDIATE,
    RECOVERY_PHASE_FACTOR,
    RECOVERY_WEEK_INTERVAL,
    TAPER_MIN_FACTOR,
    TAPER_WEEKLY_REDUCTION,
    TrainingPhase,
)


@dataclass(frozen=True)
class PhaseSpec:
    """Specification for a single training phase within the macrocycle."""

    phase: TrainingPhase
    start_week: int  # 1-indexed
    end_week: int  # inclusive
    duration_weeks: int


# (max plan weeks, {phase: share of total weeks}); the last bucket is open-ended
_PHASE_SHARES: tuple[tuple[float, dict[TrainingPhase, float]], ...] = (
    (8, {TrainingPhase.BASE: 0.4, TrainingPhase.BUILD: 0.4, TrainingPhase.TAPER: 0.2}),
    (
        16,
        {
            TrainingPhase.BASE: 0.35,
            TrainingPhase.BUILD: 0.35,
            TrainingPhase.PEAK: 0.2,
            TrainingPhase.TAPER: 0.1,
        },
    ),
    (
        math.inf,
        {
            TrainingPhase.BASE: 0.3,
            TrainingPhase.BUILD: 0.3,
            TrainingPhase.PEAK: 0.25,
            TrainingPhase.TAPER: 0.1,
            TrainingPhase.RECOVERY: 0.05,
        },
    ),
)

FOCUS_AREAS: dict[TrainingPhase, tuple[str, ...]] = {
    TrainingPhase.BASE: ("Aerobic capacity", "Running economy", "Injury prevention"),
    TrainingPhase.BUILD: ("Lactate threshold", "VO2max development", "Race pace familiarity"),
    TrainingPhase.PEAK: ("Race-specific fitness", "Speed endurance", "Mental preparation"),
    TrainingPhase.TAPER: ("Recovery", "Maintenance", "Race readiness"),
    TrainingPhase.RECOVERY: ("Active recovery", "Reflection", "Planning"),
}

RECOVERY_WEEK_PATTERN = "Easy-Recovery-Easy-Recovery-Rest-Easy-Recovery"

WEEKLY_PATTERNS: dict[TrainingPhase, tuple[str, ...]] = {
    TrainingPhase.BASE: (
        "Easy-Steady-Easy-Tempo-Rest-Long-Recovery",
        "Easy-Hills-Recovery-Steady-Rest-Long-Easy",
    ),
    TrainingPhase.BUILD: (
        "Easy-Intervals-Recovery-Tempo-Rest-Long-Recovery",
        "Easy-Threshold-Recovery-Hills-Rest-Progression-Recovery",
    ),
    TrainingPhase.PEAK: (
        "Easy-VO2max-Recovery-RacePace-Rest-Long-Recovery",
        "Easy-Speed-Recovery-Threshold-Rest-TimeTrial-Recovery",
    ),
    TrainingPhase.TAPER: (
        "Easy-Tempo-Recovery-Easy-Rest-MediumLong-Recovery",
        "Easy-Strides-Recovery-Easy-Rest-Easy-Rest",
    ),
    TrainingPhase.RECOVERY: ("Easy-Recovery-Rest-Easy-Rest-Easy-Recovery",),
}

REST_TOKEN = "Rest"


def allocate_phase_weeks(total_weeks: int) -> list[PhaseSpec]:
    """Split the plan into phases using the share table for its length.

    Args:
        total_weeks: Plan length in whole weeks.

    Returns:
        PhaseSpec list in chronological order. Phases that round down to
        zero weeks are omitted, so short plans may return fewer phases (or
        none for plans under three weeks).
    """
    if total_weeks <= 0:
        return []
    shares = next(table for limit, table in _PHASE_SHARES if total_weeks <= limit)

    phases: list[PhaseSpec] = []
    current_week = 1
    for phase, share in shares.items():
        weeks = math.floor(total_weeks * share)
        if weeks > 0:
            phases.append(
                PhaseSpec(
                    phase=phase,
                    start_week=current_week,
                    end_week=current_week + weeks - 1,
                    duration_weeks=weeks,
                )
            )
            current_week += weeks
    return phases


def progression_rate(training_age_years: float) -> float:
    """Weekly volume increase rate by experience level."""
    if training_age_years > 2:
        return PROGRESSION_RATE_ADVANCED
    if training_age_years > 1:
        return PROGRESSION_RATE_INTERMEDIATE
    return PROGRESSION_RATE_BEGINNER


def progression_factor(phase: TrainingPhase, week_in_phase: int, rate: float) -> float:
    """Multiplier on baseline weekly volume for a week of a phase.

    Base, build and peak ramp linearly from 1.0, 1.2 and 1.3; taper drops
    20% per week down to a 40% floor; the recovery phase holds at 60%.

    Args:
        phase: Current phase.
        week_in_phase: 0-indexed week within the phase.
        rate: Weekly progression rate from ``progression_rate``.
    """
    if phase == TrainingPhase.BASE:
        return 1 + week_in_phase * rate
    if phase == TrainingPhase.BUILD:
        return 1.2 + week_in_phase * rate * 0.8
    if phase == TrainingPhase.PEAK:
        return 1.3 + week_in_phase * rate * 0.5
    if phase == TrainingPhase.TAPER:
        return max(TAPER_MIN_FACTOR, 1.0 - week_in_phase * TAPER_WEEKLY_REDUCTION)
    return RECOVERY_PHASE_FACTOR


def is_recovery_week(week_in_phase: int) -> bool:
    """Every 4th week of a phase is a down week."""
    return (week_in_phase + 1) % RECOVERY_WEEK_INTERVAL == 0


def choose_weekly_pattern(phase: TrainingPhase, recovery_week: bool, rng: random.Random) -> str:
    """Pick the week's token sequence, e.g. ``"Easy-Tempo-Rest-Long"``."""
    if recovery_week:
        return RECOVERY_WEEK_PATTERN
    return rng.choice(WEEKLY_PATTERNS[phase])
