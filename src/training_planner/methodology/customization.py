"""Workout selection and intensity shaping for a methodology variant."""

from __future__ import annotations

import logging
from dataclasses import replace

from training_planner.math.zones import zone_type_for_intensity
from training_planner.methodology.variants import DEFAULT_DURATION_MIN, MethodologyVariant
from training_planner.models.enums import (
    CUSTOMIZED_INTENSITY_MAX,
    CUSTOMIZED_INTENSITY_MIN,
    TrainingPhase,
    WorkoutType,
)
from training_planner.models.workout import WorkoutTemplate
from training_planner.workout_catalog.templates import (
    create_custom_workout,
    get_template,
    templates_for_type,
)

logger = logging.getLogger(__name__)


def _clamp_intensity(value: float) -> int:
    return int(max(CUSTOMIZED_INTENSITY_MIN, min(CUSTOMIZED_INTENSITY_MAX, round(value))))


def select_workout(
    variant: MethodologyVariant,
    workout_type: WorkoutType,
    phase: TrainingPhase,
    week_in_phase: int,
) -> WorkoutTemplate:
    """Pick the template a methodology prescribes for a workout slot.

    The variant's selector wins; otherwise catalog templates of the type
    rotate by week. Types without a catalog template get a single-segment
    custom workout at the variant's default intensity for the phase.

    Args:
        variant: Methodology variant.
        workout_type: Type requested by the weekly pattern.
        phase: Phase of the week being planned.
        week_in_phase: 0-indexed week within the phase.

    Returns:
        An uncustomized template; pass it to ``customize_workout``.
    """
    override = variant.selector(workout_type, phase, week_in_phase)
    if override is not None:
        return get_template(override)

    candidates = templates_for_type(workout_type)
    if candidates:
        return get_template(candidates[week_in_phase % len(candidates)])

    intensity = round(
        variant.default_intensity.get(workout_type, 65) * variant.phase_adjustment.get(phase, 1.0)
    )
    duration = DEFAULT_DURATION_MIN.get(workout_type, 45)
    logger.debug(
        "No %s template for %s, using custom %s-min workout at %d",
        workout_type.name.lower(),
        variant.name,
        duration,
        intensity,
    )
    return create_custom_workout(workout_type, duration, intensity)


def customize_workout(
    variant: MethodologyVariant,
    template: WorkoutTemplate,
    phase: TrainingPhase,
    week_in_phase: int,
) -> WorkoutTemplate:
    """Scale a template's intensity, load and recovery to a methodology.

    Segment intensity = base × phase adjustment × type emphasis ×
    (1 + week × weekly progression), rounded and clamped to [40, 100]. The
    segment zone follows the new intensity. TSS scales by the emphasis,
    recovery hours by the variant's recovery emphasis.
    """
    emphasis = variant.emphasis.get(template.type, 1.0)
    multiplier = (
        variant.phase_adjustment.get(phase, 1.0)
        * emphasis
        * (1 + week_in_phase * variant.weekly_progression.get(phase, 0.0))
    )

    segments = []
    for segment in template.segments:
        intensity = _clamp_intensity(segment.intensity * multiplier)
        segments.append(replace(segment, intensity=intensity, zone=zone_type_for_intensity(intensity)))

    return replace(
        template,
        segments=tuple(segments),
        estimated_tss=round(template.estimated_tss * emphasis),
        recovery_hours=round(template.recovery_hours * variant.recovery_emphasis),
    )


def focus_areas_for(
    variant: MethodologyVariant | None, phase: TrainingPhase, default: tuple[str, ...]
) -> tuple[str, ...]:
    """Focus-area labels for a block, preferring the variant's override."""
    if variant is None:
        return default
    return variant.focus_areas.get(phase, default)
