"""Athlete feedback and the records the adaptation engine derives from it."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from training_planner.models.enums import (
    Adherence,
    ChronicFatiguePattern,
    FatigueLevel,
    LoadTrend,
    ModificationStatus,
    ModificationType,
    PerformanceTrend,
    Priority,
    RecoveryStatus,
    RiskLevel,
    WorkoutType,
)
from training_planner.models.fitness import FitnessAssessment
from training_planner.models.plan import IntensityDistribution, TrainingPlan
from training_planner.models.workout import PlannedWorkout


@dataclass(frozen=True)
class CompletedWorkout:
    """What the athlete actually did for a planned workout.

    Attributes:
        planned_workout_id: Id of the PlannedWorkout this reports on.
        date: Day the workout was done.
        actual_duration_min: Moving time in minutes.
        actual_distance_km: Distance covered.
        actual_pace_min_per_km: Average pace, if recorded.
        avg_hr: Average heart rate in BPM.
        max_hr: Maximum heart rate in BPM.
        completion_rate: Fraction of the planned work completed (0-1).
        adherence: none / partial / complete.
        perceived_effort: Session RPE on a 1-10 scale.
        notes: Free-text athlete notes.
    """

    planned_workout_id: str
    date: date
    actual_duration_min: float | None = None
    actual_distance_km: float | None = None
    actual_pace_min_per_km: float | None = None
    avg_hr: int | None = None
    max_hr: int | None = None
    completion_rate: float = 1.0
    adherence: Adherence = Adherence.COMPLETE
    perceived_effort: int | None = None
    notes: str = ""


@dataclass(frozen=True)
class RecoveryMetrics:
    """Daily readiness snapshot. Subjective scales run 1-10."""

    recovery_score: float | None = None
    sleep_quality: int | None = None
    sleep_duration_h: float | None = None
    stress_level: int | None = None
    muscle_soreness: int | None = None
    energy_level: int | None = None
    motivation: int | None = None
    resting_hr: int | None = None
    hrv: float | None = None
    injured: bool = False
    ill: bool = False


@dataclass(frozen=True)
class Modification:
    """An instruction to change the future part of a plan.

    Numeric fields left as None fall back to the applier's defaults.
    ``workout_ids`` restricts a substitution to specific workouts.
    """

    type: ModificationType
    reason: str
    priority: Priority
    volume_reduction_pct: float | None = None
    intensity_reduction_pct: float | None = None
    substitute_type: WorkoutType | None = None
    additional_recovery_days: int | None = None
    delay_days: int | None = None
    workout_ids: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ProgressAnalysis:
    """Summary of how training is going relative to the plan."""

    adherence_rate: float
    completed: tuple[CompletedWorkout, ...]
    total_workouts: int
    performance_trend: PerformanceTrend
    weekly_volume_avg: float
    volume_trend: LoadTrend
    intensity_distribution: IntensityDistribution
    current_fitness: FitnessAssessment
    analyzed_on: date


@dataclass(frozen=True)
class RecoveryAssessment:
    score: int
    status: RecoveryStatus
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class ChronicFatigue:
    """Longest streak of hard, under-completed workouts."""

    detected: bool
    days: int
    pattern: ChronicFatiguePattern


@dataclass(frozen=True)
class LoadOverload:
    """Longest run of consecutive days above the daily TSS ceiling."""

    detected: bool
    consecutive_days: int
    max_daily_tss: float


@dataclass(frozen=True)
class FatigueAssessment:
    level: FatigueLevel
    acute_fatigue: int
    chronic: ChronicFatigue
    overload: LoadOverload
    adjusted_workouts: tuple[PlannedWorkout, ...]
    warnings: tuple[str, ...]


@dataclass(frozen=True)
class OverreachingRisk:
    level: RiskLevel
    acute_chronic_ratio: float
    weekly_load_increase_pct: float
    current_risk: int
    projected_risk: int
    mitigation_strategies: tuple[str, ...]


@dataclass(frozen=True)
class ModificationOutcome:
    """What one modification did to the plan."""

    modification: Modification
    status: ModificationStatus
    affected_workout_ids: tuple[str, ...] = field(default_factory=tuple)
    note: str = ""


@dataclass(frozen=True)
class ModificationResult:
    plan: TrainingPlan
    outcomes: tuple[ModificationOutcome, ...]
    warnings: tuple[str, ...] = field(default_factory=tuple)
