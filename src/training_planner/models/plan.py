"""Training plan structures: configuration, blocks, microcycles, summary."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from training_planner.models.enums import (
    DEFAULT_AVAILABLE_DAYS,
    Methodology,
    RacePriority,
    TrainingPhase,
)
from training_planner.models.fitness import FitnessAssessment
from training_planner.models.workout import PlannedWorkout


@dataclass(frozen=True)
class TrainingPreferences:
    """Athlete scheduling preferences.

    Attributes:
        available_days: Weekdays the athlete can train (Sunday = 0 ... Saturday = 6).
        preferred_intensity: "low", "moderate" or "high".
        cross_training: Whether cross-training sessions are welcome.
        strength_training: Whether strength sessions are welcome.

    Plan generation reads only ``available_days``; the other fields are
    carried for callers and do not change the generated plan.
    """

    available_days: tuple[int, ...] = DEFAULT_AVAILABLE_DAYS
    preferred_intensity: str = "moderate"
    cross_training: bool = False
    strength_training: bool = False


@dataclass(frozen=True)
class TargetRace:
    """A race on the athlete's calendar."""

    name: str
    race_date: date
    distance_km: float
    priority: RacePriority = RacePriority.A


@dataclass(frozen=True)
class TrainingPlanConfig:
    """Root input of plan generation; immutable for a single pass.

    ``methodology`` accepts a Methodology member or its lowercase name;
    None generates an uncustomized plan.
    """

    name: str
    goal: str
    start_date: date
    target_date: date | None = None
    fitness: FitnessAssessment | None = None
    preferences: TrainingPreferences = field(default_factory=TrainingPreferences)
    methodology: Methodology | str | None = None
    target_races: tuple[TargetRace, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class IntensityDistribution:
    """Share of training (in percent) per intensity band."""

    easy: float
    moderate: float
    hard: float
    very_hard: float = 0.0


@dataclass(frozen=True)
class Microcycle:
    """One training week."""

    week_number: int  # 1-indexed across the whole plan
    start_date: date
    pattern: str
    workouts: tuple[PlannedWorkout, ...]
    total_load: float
    total_distance: float
    recovery_ratio: float


@dataclass(frozen=True)
class TrainingBlock:
    """A contiguous multi-week phase of the plan.

    ``end_date`` is inclusive; the next block starts the following day.
    """

    id: str
    phase: TrainingPhase
    start_date: date
    end_date: date
    weeks: int
    focus_areas: tuple[str, ...]
    microcycles: tuple[Microcycle, ...]


@dataclass(frozen=True)
class PhaseSummary:
    """Per-block statistics shown in the plan summary."""

    phase: TrainingPhase
    weeks: int
    focus: tuple[str, ...]
    volume_progression: tuple[float, ...]
    intensity_distribution: IntensityDistribution


@dataclass(frozen=True)
class PlanSummary:
    """Aggregate statistics over a whole plan."""

    total_weeks: int
    total_workouts: int
    total_distance: float
    total_time: float
    peak_weekly_distance: float
    average_weekly_distance: float
    key_workouts: int
    recovery_days: int
    phases: tuple[PhaseSummary, ...]


@dataclass(frozen=True)
class TrainingPlan:
    """Generated plan: config, dated blocks, flattened workouts and summary."""

    config: TrainingPlanConfig
    blocks: tuple[TrainingBlock, ...]
    workouts: tuple[PlannedWorkout, ...]
    summary: PlanSummary
