"""Predefined workout templates and custom single-segment workouts.

Each template is an ordered list of segments plus its estimated TSS and the
recovery time it calls for. Repeated interval blocks are expanded with
``_repeat`` so the segment list reads the way the session is run.
"""

from __future__ import annotations

from training_planner.math.zones import zone_type_for_intensity
from training_planner.models.enums import WorkoutType, ZoneType
from training_planner.models.workout import WorkoutSegment, WorkoutTemplate

Z = ZoneType


def _seg(duration: float, intensity: float, zone: ZoneType, description: str) -> WorkoutSegment:
    return WorkoutSegment(duration_min=duration, intensity=intensity, zone=zone, description=description)


def _repeat(
    reps: int, work: WorkoutSegment, rest: WorkoutSegment
) -> tuple[WorkoutSegment, ...]:
    """``reps`` work bouts separated by ``reps - 1`` recoveries."""
    segments: list[WorkoutSegment] = []
    for i in range(reps):
        segments.append(work)
        if i < reps - 1:
            segments.append(rest)
    return tuple(segments)


_COOL_DOWN = _seg(10, 60, Z.RECOVERY, "Cool-down")

WORKOUT_TEMPLATES: dict[str, WorkoutTemplate] = {
    "RECOVERY_JOG": WorkoutTemplate(
        type=WorkoutType.RECOVERY,
        primary_zone=Z.RECOVERY,
        segments=(_seg(30, 50, Z.RECOVERY, "Very easy jog, focus on form"),),
        adaptation_target="Active recovery and blood flow",
        estimated_tss=20,
        recovery_hours=8,
    ),
    "EASY_AEROBIC": WorkoutTemplate(
        type=WorkoutType.EASY,
        primary_zone=Z.EASY,
        segments=(_seg(60, 65, Z.EASY, "Conversational pace, nose breathing"),),
        adaptation_target="Aerobic base, fat oxidation, capillarization",
        estimated_tss=50,
        recovery_hours=12,
    ),
    "LONG_RUN": WorkoutTemplate(
        type=WorkoutType.LONG_RUN,
        primary_zone=Z.EASY,
        segments=(_seg(120, 65, Z.EASY, "Steady aerobic effort, maintain form"),),
        adaptation_target="Aerobic endurance, glycogen storage, mental resilience",
        estimated_tss=120,
        recovery_hours=24,
    ),
    "TEMPO_CONTINUOUS": WorkoutTemplate(
        type=WorkoutType.TEMPO,
        primary_zone=Z.TEMPO,
        segments=(
            _seg(10, 65, Z.EASY, "Warm-up"),
            _seg(30, 84, Z.TEMPO, "Steady tempo effort"),
            _COOL_DOWN,
        ),
        adaptation_target="Lactate clearance, aerobic power",
        estimated_tss=65,
        recovery_hours=24,
    ),
    "LACTATE_THRESHOLD_2X20": WorkoutTemplate(
        type=WorkoutType.THRESHOLD,
        primary_zone=Z.THRESHOLD,
        segments=(
            _seg(10, 65, Z.EASY, "Warm-up"),
            *_repeat(2, _seg(20, 88, Z.THRESHOLD, "Threshold pace"), _seg(5, 60, Z.RECOVERY, "Recovery")),
            _COOL_DOWN,
        ),
        adaptation_target="Lactate threshold improvement",
        estimated_tss=90,
        recovery_hours=36,
    ),
    "THRESHOLD_PROGRESSION": WorkoutTemplate(
        type=WorkoutType.THRESHOLD,
        primary_zone=Z.THRESHOLD,
        segments=(
            _seg(10, 65, Z.EASY, "Warm-up"),
            _seg(10, 80, Z.STEADY, "Build"),
            _seg(10, 85, Z.TEMPO, "Tempo"),
            _seg(10, 90, Z.THRESHOLD, "Threshold"),
            _COOL_DOWN,
        ),
        adaptation_target="Progressive lactate tolerance",
        estimated_tss=75,
        recovery_hours=24,
    ),
    "VO2MAX_4X4": WorkoutTemplate(
        type=WorkoutType.VO2MAX,
        primary_zone=Z.VO2_MAX,
        segments=(
            _seg(15, 65, Z.EASY, "Warm-up"),
            *_repeat(4, _seg(4, 95, Z.VO2_MAX, "VO2max interval"), _seg(3, 60, Z.RECOVERY, "Recovery")),
            _COOL_DOWN,
        ),
        adaptation_target="VO2max improvement, aerobic power",
        estimated_tss=100,
        recovery_hours=48,
    ),
    "VO2MAX_5X3": WorkoutTemplate(
        type=WorkoutType.VO2MAX,
        primary_zone=Z.VO2_MAX,
        segments=(
            _seg(15, 65, Z.EASY, "Warm-up"),
            *_repeat(5, _seg(3, 96, Z.VO2_MAX, "VO2max interval"), _seg(2, 60, Z.RECOVERY, "Recovery")),
            _COOL_DOWN,
        ),
        adaptation_target="VO2max and running economy",
        estimated_tss=95,
        recovery_hours=48,
    ),
    "SPEED_200M_REPS": WorkoutTemplate(
        type=WorkoutType.SPEED,
        primary_zone=Z.NEUROMUSCULAR,
        segments=(
            _seg(15, 65, Z.EASY, "Warm-up"),
            *_repeat(6, _seg(0.5, 98, Z.NEUROMUSCULAR, "200m rep"), _seg(2, 50, Z.RECOVERY, "Walk recovery")),
            _COOL_DOWN,
        ),
        adaptation_target="Neuromuscular power, running economy",
        estimated_tss=70,
        recovery_hours=36,
    ),
    "HILL_REPEATS_6X2": WorkoutTemplate(
        type=WorkoutType.HILL_REPEATS,
        primary_zone=Z.VO2_MAX,
        segments=(
            _seg(15, 65, Z.EASY, "Warm-up to hills"),
            *_repeat(6, _seg(2, 92, Z.VO2_MAX, "Hill repeat"), _seg(3, 50, Z.RECOVERY, "Jog down")),
            _COOL_DOWN,
        ),
        adaptation_target="Power, strength, VO2max",
        estimated_tss=85,
        recovery_hours=36,
    ),
    "FARTLEK_VARIED": WorkoutTemplate(
        type=WorkoutType.FARTLEK,
        primary_zone=Z.TEMPO,
        segments=(
            _seg(10, 65, Z.EASY, "Warm-up"),
            _seg(2, 90, Z.THRESHOLD, "Hard surge"),
            _seg(3, 65, Z.EASY, "Easy recovery"),
            _seg(1, 95, Z.VO2_MAX, "Sprint"),
            _seg(4, 65, Z.EASY, "Easy recovery"),
            _seg(3, 85, Z.TEMPO, "Tempo surge"),
            _seg(2, 65, Z.EASY, "Easy recovery"),
            _seg(0.5, 98, Z.NEUROMUSCULAR, "Sprint"),
            _seg(4.5, 65, Z.EASY, "Easy recovery"),
            _COOL_DOWN,
        ),
        adaptation_target="Speed variation, mental adaptation",
        estimated_tss=65,
        recovery_hours=24,
    ),
    "PROGRESSION_3_STAGE": WorkoutTemplate(
        type=WorkoutType.PROGRESSION,
        primary_zone=Z.TEMPO,
        segments=(
            _seg(20, 65, Z.EASY, "Easy start"),
            _seg(20, 78, Z.STEADY, "Steady pace"),
            _seg(20, 85, Z.TEMPO, "Tempo finish"),
            _seg(5, 60, Z.RECOVERY, "Cool-down"),
        ),
        adaptation_target="Pacing, fatigue resistance",
        estimated_tss=75,
        recovery_hours=24,
    ),
}

# Hours of recovery for a 60-minute session at intensity 80
_BASE_RECOVERY_HOURS: dict[WorkoutType, float] = {
    WorkoutType.RECOVERY: 8,
    WorkoutType.EASY: 12,
    WorkoutType.STEADY: 18,
    WorkoutType.TEMPO: 24,
    WorkoutType.THRESHOLD: 36,
    WorkoutType.VO2MAX: 48,
    WorkoutType.SPEED: 36,
    WorkoutType.HILL_REPEATS: 36,
    WorkoutType.FARTLEK: 24,
    WorkoutType.PROGRESSION: 24,
    WorkoutType.LONG_RUN: 24,
    WorkoutType.RACE_PACE: 36,
    WorkoutType.TIME_TRIAL: 48,
    WorkoutType.CROSS_TRAINING: 12,
    WorkoutType.STRENGTH: 24,
}


def get_template(key: str) -> WorkoutTemplate:
    """Look up a template by catalog key, e.g. ``"VO2MAX_4X4"``."""
    return WORKOUT_TEMPLATES[key]


def templates_for_type(workout_type: WorkoutType) -> list[str]:
    """Catalog keys of every template of the given type, in catalog order."""
    return [key for key, t in WORKOUT_TEMPLATES.items() if t.type == workout_type]


def segment_tss(duration_min: float, intensity: float) -> int:
    """Simplified TSS: duration × (intensity / 100)² × 100 / 60."""
    return round(duration_min * (intensity / 100) ** 2 * 100 / 60)


def estimate_recovery_hours(workout_type: WorkoutType, duration_min: float, intensity: float) -> int:
    base = _BASE_RECOVERY_HOURS.get(workout_type, 24)
    return round(base * (intensity / 80) * (duration_min / 60))


def create_custom_workout(
    workout_type: WorkoutType,
    duration_min: float,
    intensity: float,
    segments: tuple[WorkoutSegment, ...] | None = None,
) -> WorkoutTemplate:
    """Build a workout outside the catalog.

    Without explicit segments the workout is a single segment at
    ``intensity`` in the zone that intensity falls into.
    """
    zone = zone_type_for_intensity(intensity)
    type_name = workout_type.name.lower()
    if segments is None:
        segments = (_seg(duration_min, intensity, zone, f"Custom {type_name} workout"),)
    return WorkoutTemplate(
        type=workout_type,
        primary_zone=zone,
        segments=segments,
        adaptation_target=f"Custom {type_name} adaptations",
        estimated_tss=segment_tss(duration_min, intensity),
        recovery_hours=estimate_recovery_hours(workout_type, duration_min, intensity),
    )
