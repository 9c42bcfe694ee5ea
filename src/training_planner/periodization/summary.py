"""Plan and microcycle statistics."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from training_planner.models.enums import WorkoutType
from training_planner.models.plan import (
    IntensityDistribution,
    Microcycle,
    PhaseSummary,
    PlanSummary,
    TrainingBlock,
)
from training_planner.models.workout import PlannedWorkout

KEY_WORKOUT_TYPES = frozenset({WorkoutType.THRESHOLD, WorkoutType.VO2MAX, WorkoutType.RACE_PACE})
RECOVERY_RATIO_TYPES = frozenset({WorkoutType.RECOVERY, WorkoutType.EASY})

# Upper (exclusive) bounds of target intensity for the count-based breakdown
_EASY_BELOW = 75
_MODERATE_BELOW = 88
_HARD_BELOW = 95


def recovery_ratio(workouts: Sequence[PlannedWorkout]) -> float:
    """Share of recovery and easy workouts in a week."""
    if not workouts:
        return 0.0
    return sum(1 for w in workouts if w.type in RECOVERY_RATIO_TYPES) / len(workouts)


def refresh_microcycle(cycle: Microcycle, workouts: Sequence[PlannedWorkout]) -> Microcycle:
    """Microcycle holding ``workouts`` with its totals recomputed."""
    return replace(
        cycle,
        workouts=tuple(workouts),
        total_load=sum(w.workout.estimated_tss for w in workouts),
        total_distance=sum(w.target.distance_km for w in workouts),
        recovery_ratio=recovery_ratio(workouts),
    )


def count_intensity_distribution(workouts: Sequence[PlannedWorkout]) -> IntensityDistribution:
    """Percent of workouts per band, classified by target intensity."""
    total = len(workouts)
    if total == 0:
        return IntensityDistribution(easy=0, moderate=0, hard=0, very_hard=0)
    easy = moderate = hard = very_hard = 0
    for workout in workouts:
        intensity = workout.target.intensity
        if intensity < _EASY_BELOW:
            easy += 1
        elif intensity < _MODERATE_BELOW:
            moderate += 1
        elif intensity < _HARD_BELOW:
            hard += 1
        else:
            very_hard += 1
    return IntensityDistribution(
        easy=round(easy / total * 100),
        moderate=round(moderate / total * 100),
        hard=round(hard / total * 100),
        very_hard=round(very_hard / total * 100),
    )


def block_workouts(block: TrainingBlock) -> list[PlannedWorkout]:
    return [w for cycle in block.microcycles for w in cycle.workouts]


def build_summary(blocks: Sequence[TrainingBlock]) -> PlanSummary:
    """Aggregate totals, weekly distance extremes and per-phase breakdowns."""
    workouts = [w for block in blocks for w in block_workouts(block)]
    weekly_distances = [cycle.total_distance for block in blocks for cycle in block.microcycles]

    phases = tuple(
        PhaseSummary(
            phase=block.phase,
            weeks=block.weeks,
            focus=block.focus_areas,
            volume_progression=tuple(cycle.total_distance for cycle in block.microcycles),
            intensity_distribution=count_intensity_distribution(block_workouts(block)),
        )
        for block in blocks
    )

    return PlanSummary(
        total_weeks=sum(block.weeks for block in blocks),
        total_workouts=len(workouts),
        total_distance=sum(w.target.distance_km for w in workouts),
        total_time=sum(w.target.duration_min for w in workouts),
        peak_weekly_distance=max(weekly_distances, default=0.0),
        average_weekly_distance=(
            sum(weekly_distances) / len(weekly_distances) if weekly_distances else 0.0
        ),
        key_workouts=sum(1 for w in workouts if w.type in KEY_WORKOUT_TYPES),
        recovery_days=sum(1 for w in workouts if w.type == WorkoutType.RECOVERY),
        phases=phases,
    )
