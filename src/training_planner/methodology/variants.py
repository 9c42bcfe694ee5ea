"""Coaching methodologies as data: one MethodologyVariant per Methodology.

A variant carries intensity-distribution targets, intensity multipliers and
a small selection-override function. All behavior that acts on a variant
lives in ``customization`` and ``distribution``.

References:
    Daniels (2014), Daniels' Running Formula 3rd ed.
    Lydiard & Gilmour (1962), Run to the Top.
    Pfitzinger & Douglas (2009), Advanced Marathoning, 2nd ed.
    Seiler (2010), Int J Sports Physiol Perform 5(3): intensity distribution.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from training_planner.exceptions import ConfigurationError
from training_planner.models.enums import Methodology, TrainingPhase, WorkoutType
from training_planner.models.plan import IntensityDistribution

P = TrainingPhase
W = WorkoutType

# (workout type, phase, 0-indexed week in phase) -> catalog key, or None for no override
WorkoutSelector = Callable[[WorkoutType, TrainingPhase, int], "str | None"]


def _no_override(workout_type: WorkoutType, phase: TrainingPhase, week_in_phase: int) -> str | None:
    return None


def _dist(easy: float, moderate: float, hard: float) -> IntensityDistribution:
    return IntensityDistribution(easy=easy, moderate=moderate, hard=hard)


@dataclass(frozen=True)
class MethodologyVariant:
    """Per-methodology tables consumed by customization and enforcement.

    Attributes:
        methodology: The Methodology this variant describes.
        name: Display name.
        phase_targets: Target minute distribution per phase.
        overall_target: Target minute distribution for the whole plan.
        emphasis: Intensity multiplier per workout type (1.0 when absent).
        phase_adjustment: Intensity multiplier per phase.
        weekly_progression: Per-week intensity increase within a phase.
        recovery_emphasis: Multiplier on recovery hours.
        default_intensity: Intensity of fallback workouts for types the
            catalog does not cover.
        focus_areas: Focus-area labels replacing the defaults per phase.
        selector: Catalog overrides for this methodology.
    """

    methodology: Methodology
    name: str
    phase_targets: Mapping[TrainingPhase, IntensityDistribution]
    overall_target: IntensityDistribution
    emphasis: Mapping[WorkoutType, float] = field(default_factory=dict)
    phase_adjustment: Mapping[TrainingPhase, float] = field(default_factory=dict)
    weekly_progression: Mapping[TrainingPhase, float] = field(default_factory=dict)
    recovery_emphasis: float = 1.0
    default_intensity: Mapping[WorkoutType, float] = field(default_factory=dict)
    focus_areas: Mapping[TrainingPhase, tuple[str, ...]] = field(default_factory=dict)
    selector: WorkoutSelector = _no_override


PHASE_INTENSITY_ADJUSTMENT: dict[TrainingPhase, float] = {
    P.BASE: 0.95,
    P.BUILD: 1.0,
    P.PEAK: 1.05,
    P.TAPER: 0.90,
    P.RECOVERY: 0.85,
}

DEFAULT_INTENSITY: dict[WorkoutType, float] = {
    W.RECOVERY: 50,
    W.EASY: 65,
    W.STEADY: 75,
    W.TEMPO: 84,
    W.THRESHOLD: 88,
    W.VO2MAX: 95,
    W.SPEED: 98,
    W.HILL_REPEATS: 92,
    W.FARTLEK: 80,
    W.PROGRESSION: 78,
    W.LONG_RUN: 65,
    W.RACE_PACE: 86,
    W.TIME_TRIAL: 95,
    W.CROSS_TRAINING: 60,
    W.STRENGTH: 60,
}

# Minutes of a fallback workout by type; 45 when absent
DEFAULT_DURATION_MIN: dict[WorkoutType, float] = {
    W.STEADY: 45,
    W.RACE_PACE: 50,
    W.TIME_TRIAL: 40,
    W.CROSS_TRAINING: 45,
    W.STRENGTH: 30,
}


def _daniels_selector(workout_type: WorkoutType, phase: TrainingPhase, week_in_phase: int) -> str | None:
    # Quality sessions rotate weekly between the two catalog variants
    if workout_type == W.THRESHOLD:
        return ("LACTATE_THRESHOLD_2X20", "THRESHOLD_PROGRESSION")[week_in_phase % 2]
    if workout_type == W.VO2MAX:
        return ("VO2MAX_4X4", "VO2MAX_5X3")[week_in_phase % 2]
    if workout_type == W.HILL_REPEATS and phase == P.PEAK:
        return "VO2MAX_5X3"
    return None


def _lydiard_selector(workout_type: WorkoutType, phase: TrainingPhase, week_in_phase: int) -> str | None:
    # No anaerobic intervals before the peak: hills stand in for them
    if workout_type in (W.VO2MAX, W.SPEED) and phase in (P.BASE, P.BUILD):
        return "HILL_REPEATS_6X2"
    if workout_type == W.THRESHOLD:
        return "TEMPO_CONTINUOUS" if phase == P.BASE else "THRESHOLD_PROGRESSION"
    if workout_type == W.EASY:
        return "EASY_AEROBIC"
    if workout_type == W.LONG_RUN:
        return "LONG_RUN"
    return None


def _pfitzinger_selector(workout_type: WorkoutType, phase: TrainingPhase, week_in_phase: int) -> str | None:
    if workout_type == W.THRESHOLD:
        return "LACTATE_THRESHOLD_2X20" if phase in (P.BUILD, P.PEAK) else "THRESHOLD_PROGRESSION"
    if workout_type == W.VO2MAX:
        return "VO2MAX_5X3" if phase == P.PEAK else "THRESHOLD_PROGRESSION"
    if workout_type == W.PROGRESSION:
        return "PROGRESSION_3_STAGE"
    return None


VARIANTS: dict[Methodology, MethodologyVariant] = {
    Methodology.DANIELS: MethodologyVariant(
        methodology=Methodology.DANIELS,
        name="Daniels",
        phase_targets={
            P.BASE: _dist(85, 10, 5),
            P.BUILD: _dist(80, 8, 12),
            P.PEAK: _dist(75, 10, 15),
            P.TAPER: _dist(85, 8, 7),
            P.RECOVERY: _dist(95, 5, 0),
        },
        overall_target=_dist(80, 8, 12),
        emphasis={W.THRESHOLD: 1.05, W.VO2MAX: 1.05, W.RECOVERY: 0.95},
        phase_adjustment=PHASE_INTENSITY_ADJUSTMENT,
        weekly_progression={P.BASE: 0.005, P.BUILD: 0.01, P.PEAK: 0.01},
        recovery_emphasis=1.0,
        default_intensity=DEFAULT_INTENSITY,
        selector=_daniels_selector,
    ),
    Methodology.LYDIARD: MethodologyVariant(
        methodology=Methodology.LYDIARD,
        name="Lydiard",
        phase_targets={
            P.BASE: _dist(95, 4, 1),
            P.BUILD: _dist(90, 8, 2),
            P.PEAK: _dist(85, 10, 5),
            P.TAPER: _dist(92, 5, 3),
            P.RECOVERY: _dist(98, 2, 0),
        },
        overall_target=_dist(90, 7, 3),
        emphasis={W.LONG_RUN: 1.05, W.HILL_REPEATS: 1.05, W.VO2MAX: 0.95, W.SPEED: 0.95, W.THRESHOLD: 0.95},
        phase_adjustment=PHASE_INTENSITY_ADJUSTMENT,
        weekly_progression={P.BASE: 0.01, P.BUILD: 0.016, P.PEAK: 0.02},
        recovery_emphasis=1.2,
        default_intensity={**DEFAULT_INTENSITY, W.STEADY: 72, W.RACE_PACE: 84},
        focus_areas={
            P.BASE: ("Aerobic conditioning", "Long steady running", "Hill strength"),
            P.BUILD: ("Hill resistance", "Anaerobic development", "Strength endurance"),
            P.PEAK: ("Speed sharpening", "Race coordination", "Time trials"),
            P.TAPER: ("Freshening", "Race readiness"),
        },
        selector=_lydiard_selector,
    ),
    Methodology.PFITZINGER: MethodologyVariant(
        methodology=Methodology.PFITZINGER,
        name="Pfitzinger",
        phase_targets={
            P.BASE: _dist(85, 12, 3),
            P.BUILD: _dist(75, 18, 7),
            P.PEAK: _dist(72, 18, 10),
            P.TAPER: _dist(80, 14, 6),
            P.RECOVERY: _dist(95, 5, 0),
        },
        overall_target=_dist(78, 15, 7),
        emphasis={W.THRESHOLD: 1.1, W.TEMPO: 1.05, W.LONG_RUN: 1.05, W.PROGRESSION: 1.05},
        phase_adjustment=PHASE_INTENSITY_ADJUSTMENT,
        weekly_progression={P.BASE: 0.005, P.BUILD: 0.015, P.PEAK: 0.015},
        recovery_emphasis=0.9,
        default_intensity={**DEFAULT_INTENSITY, W.RACE_PACE: 84},
        selector=_pfitzinger_selector,
    ),
    Methodology.CUSTOM: MethodologyVariant(
        methodology=Methodology.CUSTOM,
        name="Custom",
        phase_targets={
            P.BASE: _dist(80, 15, 5),
            P.BUILD: _dist(75, 15, 10),
            P.PEAK: _dist(70, 18, 12),
            P.TAPER: _dist(80, 12, 8),
            P.RECOVERY: _dist(95, 5, 0),
        },
        overall_target=_dist(75, 15, 10),
        phase_adjustment=PHASE_INTENSITY_ADJUSTMENT,
        weekly_progression={P.BASE: 0.005, P.BUILD: 0.01, P.PEAK: 0.01},
        default_intensity=DEFAULT_INTENSITY,
    ),
}


def get_variant(key: Methodology | str) -> MethodologyVariant:
    """Resolve a Methodology member or its case-insensitive name.

    Raises:
        ConfigurationError: If the key names no known methodology.
    """
    if isinstance(key, Methodology):
        return VARIANTS[key]
    try:
        return VARIANTS[Methodology[str(key).strip().upper()]]
    except KeyError:
        raise ConfigurationError(f"Unknown methodology: {key!r}", field="methodology") from None
