"""Plan mutations, one per ModificationType.

Every applier touches only workouts dated after ``now`` and returns the new
plan with the ids of the workouts it changed or removed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import date, timedelta

from training_planner.math.zones import zone_type_for_intensity
from training_planner.models.enums import (
    INJURY_FREE_WINDOW_DAYS,
    INTENSITY_REDUCTION_MIN_INTENSITY,
    PARTIAL_PROTOCOL_RECOVERY_RUNS,
    RECOVERY_CONVERSION_MIN_INTENSITY,
    RECOVERY_RUN_DURATION_MIN,
    RECOVERY_RUN_INTENSITY,
    ModificationType,
    WorkoutType,
    ZoneType,
)
from training_planner.models.feedback import Modification
from training_planner.models.plan import TrainingPlan
from training_planner.models.workout import PlannedWorkout, WorkoutSegment
from training_planner.periodization.plan_ops import map_workouts, with_template
from training_planner.workout_catalog.substitutions import WORKOUT_NAMES, template_for_type
from training_planner.workout_catalog.templates import create_custom_workout

Applied = tuple[TrainingPlan, tuple[str, ...]]
Applier = Callable[[TrainingPlan, Modification, date], Applied]

DEFAULT_VOLUME_REDUCTION_PCT = 20
DEFAULT_INTENSITY_REDUCTION_PCT = 20
DEFAULT_RECOVERY_DAYS = 2
DEFAULT_DELAY_DAYS = 7
FULL_PROTOCOL_PCT = 100


def _apply(plan: TrainingPlan, selected: Callable[[PlannedWorkout], bool], change) -> Applied:
    """Map ``change`` over selected workouts, collecting the affected ids."""
    affected: list[str] = []

    def transform(workout: PlannedWorkout) -> PlannedWorkout | None:
        if not selected(workout):
            return workout
        affected.append(workout.id)
        return change(workout)

    return map_workouts(plan, transform), tuple(affected)


def reduce_volume(plan: TrainingPlan, modification: Modification, now: date) -> Applied:
    """Shorten every future workout by the reduction percentage."""
    factor = 1 - (modification.volume_reduction_pct or DEFAULT_VOLUME_REDUCTION_PCT) / 100

    def change(workout: PlannedWorkout) -> PlannedWorkout:
        template = replace(
            workout.workout,
            segments=tuple(
                replace(s, duration_min=s.duration_min * factor) for s in workout.workout.segments
            ),
        )
        updated = with_template(workout, template)
        return replace(
            updated, target=replace(updated.target, distance_km=round(workout.target.distance_km * factor, 1))
        )

    return _apply(plan, lambda w: w.date > now, change)


def reduce_intensity(plan: TrainingPlan, modification: Modification, now: date) -> Applied:
    """Scale hard segments (> 80) of future hard workouts down."""
    factor = 1 - (modification.intensity_reduction_pct or DEFAULT_INTENSITY_REDUCTION_PCT) / 100

    def soften(segment: WorkoutSegment) -> WorkoutSegment:
        if segment.intensity <= INTENSITY_REDUCTION_MIN_INTENSITY:
            return segment
        intensity = round(segment.intensity * factor)
        return replace(segment, intensity=intensity, zone=zone_type_for_intensity(intensity))

    def change(workout: PlannedWorkout) -> PlannedWorkout:
        segments = tuple(soften(s) for s in workout.workout.segments)
        return with_template(workout, replace(workout.workout, segments=segments))

    return _apply(
        plan,
        lambda w: w.date > now and w.target.intensity > INTENSITY_REDUCTION_MIN_INTENSITY,
        change,
    )


def _to_recovery_run(workout: PlannedWorkout) -> PlannedWorkout:
    segment = WorkoutSegment(
        duration_min=RECOVERY_RUN_DURATION_MIN,
        intensity=RECOVERY_RUN_INTENSITY,
        zone=ZoneType.RECOVERY,
        description="Very easy recovery pace",
    )
    template = create_custom_workout(
        WorkoutType.RECOVERY, RECOVERY_RUN_DURATION_MIN, RECOVERY_RUN_INTENSITY, segments=(segment,)
    )
    return with_template(
        workout,
        template,
        type=WorkoutType.RECOVERY,
        name="Recovery Run (Modified)",
        description="Easy recovery run - plan adjusted for fatigue",
    )


def _convert_next_hard(plan: TrainingPlan, count: int, now: date) -> Applied:
    upcoming = sorted(
        (
            w
            for w in plan.workouts
            if w.date > now and w.target.intensity > RECOVERY_CONVERSION_MIN_INTENSITY
        ),
        key=lambda w: w.date,
    )
    chosen = {w.id for w in upcoming[:count]}
    return _apply(plan, lambda w: w.id in chosen, _to_recovery_run)


def add_recovery(plan: TrainingPlan, modification: Modification, now: date) -> Applied:
    """Turn the next N harder (> 75) future workouts into 30-minute recovery runs."""
    return _convert_next_hard(plan, modification.additional_recovery_days or DEFAULT_RECOVERY_DAYS, now)


def substitute_workouts(plan: TrainingPlan, modification: Modification, now: date) -> Applied:
    """Swap the listed workouts (or every future one) for the substitute type."""
    new_type = modification.substitute_type or WorkoutType.EASY
    ids = set(modification.workout_ids)

    def change(workout: PlannedWorkout) -> PlannedWorkout:
        return with_template(
            workout,
            template_for_type(new_type, workout.target.duration_min),
            type=new_type,
            name=f"{WORKOUT_NAMES[new_type]} (Substituted)",
            description=f"Workout substituted: {modification.reason}",
        )

    return _apply(plan, lambda w: w.date > now and (not ids or w.id in ids), change)


def delay_progression(plan: TrainingPlan, modification: Modification, now: date) -> Applied:
    """Push every future workout back by the delay."""
    shift = timedelta(days=modification.delay_days or DEFAULT_DELAY_DAYS)
    return _apply(plan, lambda w: w.date > now, lambda w: replace(w, date=w.date + shift))


def injury_protocol(plan: TrainingPlan, modification: Modification, now: date) -> Applied:
    """Full protocol clears the next seven days; partial converts hard work to recovery."""
    severity = modification.volume_reduction_pct
    if severity is None or severity >= FULL_PROTOCOL_PCT:
        window_end = now + timedelta(days=INJURY_FREE_WINDOW_DAYS)
        return _apply(plan, lambda w: now < w.date <= window_end, lambda w: None)
    return _convert_next_hard(plan, PARTIAL_PROTOCOL_RECOVERY_RUNS, now)


APPLIERS: dict[ModificationType, Applier] = {
    ModificationType.REDUCE_VOLUME: reduce_volume,
    ModificationType.REDUCE_INTENSITY: reduce_intensity,
    ModificationType.ADD_RECOVERY: add_recovery,
    ModificationType.SUBSTITUTE_WORKOUT: substitute_workouts,
    ModificationType.DELAY_PROGRESSION: delay_progression,
    ModificationType.INJURY_PROTOCOL: injury_protocol,
}
