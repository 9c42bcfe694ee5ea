"""Workout structures: zones, segments, templates and planned workouts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from training_planner.models.enums import WorkoutType, ZoneType


@dataclass(frozen=True)
class TrainingZone:
    """A named training zone.

    In the fixed catalog the ranges are percentages (of max HR and of
    threshold pace). Personalized zones carry BPM and min/km instead.
    """

    zone: ZoneType
    name: str
    rpe: int
    hr_range: tuple[float, float]
    pace_range: tuple[float, float]
    description: str
    purpose: str


@dataclass(frozen=True)
class WorkoutSegment:
    """One contiguous piece of a workout at a single intensity.

    Attributes:
        duration_min: Segment duration in minutes.
        intensity: Effort on a 0-100 scale (88 ~ threshold).
        zone: Training zone the segment targets.
        description: Short instruction for the athlete.
        pace_target: Optional (fast, slow) pace in min/km.
        hr_target: Optional (low, high) heart rate in BPM.
    """

    duration_min: float
    intensity: float
    zone: ZoneType
    description: str
    pace_target: tuple[float, float] | None = None
    hr_target: tuple[int, int] | None = None


@dataclass(frozen=True)
class WorkoutTemplate:
    """A reusable workout: ordered segments plus load metadata."""

    type: WorkoutType
    primary_zone: ZoneType
    segments: tuple[WorkoutSegment, ...]
    adaptation_target: str
    estimated_tss: float
    recovery_hours: float

    @property
    def total_duration_min(self) -> float:
        return sum(s.duration_min for s in self.segments)

    @property
    def average_intensity(self) -> float:
        """Unweighted mean of segment intensities."""
        if not self.segments:
            return 0.0
        return sum(s.intensity for s in self.segments) / len(self.segments)


@dataclass(frozen=True)
class TargetMetrics:
    """Targets a planned workout asks the athlete to hit."""

    duration_min: float
    distance_km: float
    intensity: float
    tss: float
    load: float


@dataclass(frozen=True)
class PlannedWorkout:
    """A dated workout inside a plan."""

    id: str
    date: date
    type: WorkoutType
    name: str
    description: str
    target: TargetMetrics
    workout: WorkoutTemplate
