"""Replacement workouts when the planned session cannot be run as written."""

from __future__ import annotations

from dataclasses import replace

from training_planner.models.enums import SubstitutionReason, WorkoutType
from training_planner.models.workout import PlannedWorkout, WorkoutTemplate
from training_planner.workout_catalog.templates import WORKOUT_TEMPLATES

W = WorkoutType

SUBSTITUTIONS: dict[SubstitutionReason, dict[WorkoutType, WorkoutType]] = {
    SubstitutionReason.FATIGUE: {
        W.VO2MAX: W.TEMPO,
        W.THRESHOLD: W.STEADY,
        W.TEMPO: W.EASY,
        W.SPEED: W.EASY,
        W.HILL_REPEATS: W.EASY,
        W.LONG_RUN: W.EASY,
        W.PROGRESSION: W.STEADY,
        W.FARTLEK: W.EASY,
        W.RACE_PACE: W.STEADY,
        W.TIME_TRIAL: W.TEMPO,
        W.EASY: W.RECOVERY,
        W.STEADY: W.EASY,
        W.RECOVERY: W.RECOVERY,
        W.CROSS_TRAINING: W.RECOVERY,
        W.STRENGTH: W.RECOVERY,
    },
    SubstitutionReason.INJURY: {
        W.VO2MAX: W.CROSS_TRAINING,
        W.THRESHOLD: W.CROSS_TRAINING,
        W.TEMPO: W.CROSS_TRAINING,
        W.SPEED: W.RECOVERY,
        W.HILL_REPEATS: W.RECOVERY,
        W.LONG_RUN: W.CROSS_TRAINING,
        W.PROGRESSION: W.EASY,
        W.FARTLEK: W.EASY,
        W.RACE_PACE: W.EASY,
        W.TIME_TRIAL: W.EASY,
        W.EASY: W.RECOVERY,
        W.STEADY: W.RECOVERY,
        W.RECOVERY: W.RECOVERY,
        W.CROSS_TRAINING: W.CROSS_TRAINING,
        W.STRENGTH: W.RECOVERY,
    },
    SubstitutionReason.ILLNESS: {
        W.VO2MAX: W.RECOVERY,
        W.THRESHOLD: W.RECOVERY,
        W.TEMPO: W.EASY,
        W.SPEED: W.RECOVERY,
        W.HILL_REPEATS: W.RECOVERY,
        W.LONG_RUN: W.EASY,
        W.PROGRESSION: W.EASY,
        W.FARTLEK: W.RECOVERY,
        W.RACE_PACE: W.EASY,
        W.TIME_TRIAL: W.RECOVERY,
        W.EASY: W.RECOVERY,
        W.STEADY: W.RECOVERY,
        W.RECOVERY: W.RECOVERY,
        W.CROSS_TRAINING: W.RECOVERY,
        W.STRENGTH: W.RECOVERY,
    },
    SubstitutionReason.TIME_CONSTRAINT: {
        W.LONG_RUN: W.TEMPO,
        W.VO2MAX: W.FARTLEK,
        W.THRESHOLD: W.TEMPO,
        W.HILL_REPEATS: W.TEMPO,
        W.PROGRESSION: W.TEMPO,
        W.RACE_PACE: W.TEMPO,
        W.TIME_TRIAL: W.TEMPO,
    },
    SubstitutionReason.WEATHER: {
        W.SPEED: W.TEMPO,
        W.VO2MAX: W.THRESHOLD,
        W.HILL_REPEATS: W.TEMPO,
        W.THRESHOLD: W.TEMPO,
        W.TEMPO: W.STEADY,
        W.PROGRESSION: W.STEADY,
        W.FARTLEK: W.TEMPO,
        W.RACE_PACE: W.TEMPO,
        W.TIME_TRIAL: W.TEMPO,
    },
}

# Template standing in for each type when substituting
_TEMPLATE_FOR_TYPE: dict[WorkoutType, str] = {
    W.RECOVERY: "RECOVERY_JOG",
    W.EASY: "EASY_AEROBIC",
    W.STEADY: "EASY_AEROBIC",
    W.TEMPO: "TEMPO_CONTINUOUS",
    W.THRESHOLD: "LACTATE_THRESHOLD_2X20",
    W.VO2MAX: "VO2MAX_4X4",
    W.SPEED: "SPEED_200M_REPS",
    W.HILL_REPEATS: "HILL_REPEATS_6X2",
    W.FARTLEK: "FARTLEK_VARIED",
    W.PROGRESSION: "PROGRESSION_3_STAGE",
    W.LONG_RUN: "LONG_RUN",
    W.RACE_PACE: "TEMPO_CONTINUOUS",
    W.TIME_TRIAL: "THRESHOLD_PROGRESSION",
    W.CROSS_TRAINING: "EASY_AEROBIC",
    W.STRENGTH: "RECOVERY_JOG",
}

WORKOUT_NAMES: dict[WorkoutType, str] = {
    W.RECOVERY: "Recovery Run",
    W.EASY: "Easy Run",
    W.STEADY: "Steady State Run",
    W.TEMPO: "Tempo Run",
    W.THRESHOLD: "Threshold Workout",
    W.VO2MAX: "VO2max Intervals",
    W.SPEED: "Speed Work",
    W.HILL_REPEATS: "Hill Repeats",
    W.FARTLEK: "Fartlek Run",
    W.PROGRESSION: "Progression Run",
    W.LONG_RUN: "Long Run",
    W.RACE_PACE: "Race Pace Run",
    W.TIME_TRIAL: "Time Trial",
    W.CROSS_TRAINING: "Cross Training",
    W.STRENGTH: "Strength Training",
}

SHORT_SLOT_MIN = 45
LONG_TEMPLATE_MIN = 60


def template_for_type(workout_type: WorkoutType, target_duration_min: float) -> WorkoutTemplate:
    """Representative template for a type, shrunk to fit a short slot.

    Templates longer than an hour are scaled to ``target_duration_min`` when
    the slot is under 45 minutes.
    """
    template = WORKOUT_TEMPLATES[_TEMPLATE_FOR_TYPE.get(workout_type, "EASY_AEROBIC")]
    total = template.total_duration_min
    if target_duration_min < SHORT_SLOT_MIN and total > LONG_TEMPLATE_MIN:
        scale = target_duration_min / total
        template = replace(
            template,
            segments=tuple(replace(s, duration_min=round(s.duration_min * scale)) for s in template.segments),
        )
    return template


def create_smart_substitution(workout: PlannedWorkout, reason: SubstitutionReason) -> PlannedWorkout:
    """Swap a planned workout for a type suited to the reason.

    Types the reason does not list keep their own type. Date, id, duration
    and distance targets are kept.
    """
    new_type = SUBSTITUTIONS[reason].get(workout.type, workout.type)
    template = template_for_type(new_type, workout.target.duration_min)
    reason_name = reason.name.lower()
    return replace(
        workout,
        type=new_type,
        name=f"{WORKOUT_NAMES[new_type]} (Substituted due to {reason_name})",
        description=f"Original {workout.type.name.lower()} workout modified due to {reason_name}",
        workout=template,
        target=replace(
            workout.target,
            intensity=template.average_intensity,
            tss=template.estimated_tss,
            load=template.estimated_tss,
        ),
    )
