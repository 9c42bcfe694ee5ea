"""Derived fitness state: assessments, load state and weekly patterns."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from training_planner.models.enums import (
    DEFAULT_LONGEST_RUN_KM,
    DEFAULT_TRAINING_AGE_YEARS,
    DEFAULT_VDOT,
    DEFAULT_WEEKLY_MILEAGE_KM,
    LoadTrend,
)


@dataclass(frozen=True)
class FitnessAssessment:
    """Snapshot of an athlete's fitness used to seed plan generation.

    Recomputed whenever run history changes; owned by the plan config.
    """

    vdot: float = DEFAULT_VDOT
    weekly_mileage_km: float = DEFAULT_WEEKLY_MILEAGE_KM
    longest_recent_run_km: float = DEFAULT_LONGEST_RUN_KM
    training_age_years: float = DEFAULT_TRAINING_AGE_YEARS
    critical_speed_kmh: float | None = None
    running_economy: float | None = None
    lactate_threshold_kmh: float | None = None
    recovery_rate: float | None = None
    overall_score: int | None = None


@dataclass(frozen=True)
class LoadPoint:
    """Load state immediately after one run."""

    date: date
    tss: float
    acute: float
    chronic: float
    ratio: float


@dataclass(frozen=True)
class TrainingLoadState:
    """Acute/chronic training load summary.

    Attributes:
        acute: Rounded acute (7-day constant) load.
        chronic: Rounded chronic (28-day constant) load.
        ratio: Acute:chronic ratio rounded to 2 decimals; 1.0 when chronic is 0.
        trend: Acute load direction versus 7 runs earlier.
        recommendation: Human-readable guidance for the ratio band.
        history: Per-run load points in chronological order.
    """

    acute: float = 0.0
    chronic: float = 0.0
    ratio: float = 1.0
    trend: LoadTrend = LoadTrend.STABLE
    recommendation: str = ""
    history: tuple[LoadPoint, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class WeeklyPatterns:
    """Habitual weekly training structure extracted from run history."""

    avg_weekly_mileage: float = 0.0
    max_weekly_mileage: float = 0.0
    avg_runs_per_week: float = 0.0
    consistency_score: int = 0
    optimal_days: tuple[int, ...] = field(default_factory=tuple)  # Sunday = 0
    typical_long_run_day: int | None = None


@dataclass(frozen=True)
class FitnessMetrics:
    """Full set of metrics computed from a run history."""

    vdot: float
    critical_speed_kmh: float
    running_economy: float
    lactate_threshold_kmh: float
    training_load: TrainingLoadState
    injury_risk: int
    recovery_score: int
