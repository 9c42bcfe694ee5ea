"""Intensity-distribution validation and the bounded correction loop.

Distribution is measured in minutes: every segment of every workout falls
into the easy (<= 75), moderate (<= 85) or hard (> 85) band by intensity.
Each block is checked against its phase target and the whole plan against
the overall target, with a fixed tolerance of 5 percentage points.

Corrections are applied worst violation first. A correction pass is kept
only if it strictly lowers the violation count, and the number of passes is
capped at the number of violations first found, so the loop always stops.

Reference:
    Seiler (2010). What is best practice for training intensity and
    duration distribution in endurance athletes? Int J Sports Physiol
    Perform 5(3):276-291.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from training_planner.math.zones import zone_type_for_intensity
from training_planner.methodology.variants import MethodologyVariant
from training_planner.models.enums import (
    DISTRIBUTION_TOLERANCE_PCT,
    EASY_CONVERSION_INTENSITY,
    EASY_INTENSITY_MAX,
    HARD_REDUCTION_INTENSITY,
    HARD_REDUCTION_INTENSITY_CRITICAL,
    MODERATE_INTENSITY_MAX,
    QUALITY_MAX_PER_WEEK,
    QUALITY_MIN_DURATION_MIN,
    QUALITY_SEGMENT_INTENSITY,
    SEVERITY_BANDS,
    TrainingPhase,
    ViolationSeverity,
    ViolationType,
    WorkoutType,
    ZoneType,
)
from training_planner.models.methodology import (
    DistributionViolation,
    EnforcementResult,
    IntensityReport,
)
from training_planner.models.plan import IntensityDistribution, TrainingPlan
from training_planner.models.workout import PlannedWorkout, WorkoutSegment
from training_planner.periodization.plan_ops import map_workouts, with_template
from training_planner.periodization.summary import block_workouts

logger = logging.getLogger(__name__)

W = WorkoutType

# Changed only when a violation is critical
PROTECTED_TYPES = frozenset({W.RACE_PACE, W.TIME_TRIAL})
# Adjustable at any severity
FLEXIBLE_TYPES = frozenset(
    {W.RECOVERY, W.EASY, W.STEADY, W.LONG_RUN, W.PROGRESSION, W.FARTLEK, W.TEMPO}
)
QUALITY_HOST_TYPES = frozenset({W.EASY, W.LONG_RUN})

_SEVERITY_PENALTY = {
    ViolationSeverity.LOW: 2,
    ViolationSeverity.MEDIUM: 5,
    ViolationSeverity.HIGH: 10,
    ViolationSeverity.CRITICAL: 20,
}


def _band_minutes(workouts: Sequence[PlannedWorkout]) -> tuple[float, float, float]:
    easy = moderate = hard = 0.0
    for workout in workouts:
        for segment in workout.workout.segments:
            if segment.intensity <= EASY_INTENSITY_MAX:
                easy += segment.duration_min
            elif segment.intensity <= MODERATE_INTENSITY_MAX:
                moderate += segment.duration_min
            else:
                hard += segment.duration_min
    return easy, moderate, hard


def calculate_distribution(workouts: Sequence[PlannedWorkout]) -> IntensityDistribution:
    """Percent of workout minutes per band; all zeros for no minutes."""
    easy, moderate, hard = _band_minutes(workouts)
    total = easy + moderate + hard
    if total == 0:
        return IntensityDistribution(easy=0, moderate=0, hard=0)
    return IntensityDistribution(
        easy=round(easy / total * 100),
        moderate=round(moderate / total * 100),
        hard=round(hard / total * 100),
    )


def violation_severity(deviation: float) -> ViolationSeverity:
    """Bucket a deviation in percentage points: <=5 low, <=10 medium, <=15 high."""
    magnitude = abs(deviation)
    for upper, severity in SEVERITY_BANDS:
        if magnitude <= upper:
            return severity
    return ViolationSeverity.CRITICAL


def check_distribution(
    actual: IntensityDistribution,
    target: IntensityDistribution,
    phase: TrainingPhase | None = None,
    block_id: str | None = None,
) -> list[DistributionViolation]:
    """Violations of one distribution against its target."""
    violations: list[DistributionViolation] = []
    tolerance = DISTRIBUTION_TOLERANCE_PCT

    def _violation(kind: ViolationType, actual_pct: float, target_pct: float) -> DistributionViolation:
        deviation = abs(actual_pct - target_pct)
        return DistributionViolation(
            type=kind,
            severity=violation_severity(deviation),
            actual=actual_pct,
            target=target_pct,
            deviation=deviation,
            phase=phase,
            block_id=block_id,
        )

    if actual.easy < target.easy - tolerance:
        violations.append(_violation(ViolationType.INSUFFICIENT_EASY, actual.easy, target.easy))
    if actual.hard > target.hard + tolerance:
        violations.append(_violation(ViolationType.EXCESSIVE_HARD, actual.hard, target.hard))
    elif actual.hard < target.hard - tolerance:
        violations.append(_violation(ViolationType.INSUFFICIENT_HARD, actual.hard, target.hard))
    return violations


def validate_distribution(plan: TrainingPlan, variant: MethodologyVariant) -> list[DistributionViolation]:
    """Block-level violations in plan order, then whole-plan violations.

    Blocks without any workout minutes are not checked.
    """
    violations: list[DistributionViolation] = []
    for block in plan.blocks:
        workouts = block_workouts(block)
        if sum(_band_minutes(workouts)) == 0:
            continue
        target = variant.phase_targets.get(block.phase, variant.overall_target)
        violations.extend(
            check_distribution(calculate_distribution(workouts), target, block.phase, block.id)
        )

    if sum(_band_minutes(plan.workouts)) > 0:
        violations.extend(
            check_distribution(calculate_distribution(plan.workouts), variant.overall_target)
        )
    return violations


def should_adjust(workout: PlannedWorkout, violation: DistributionViolation) -> bool:
    if workout.type in PROTECTED_TYPES:
        return violation.severity == ViolationSeverity.CRITICAL
    if violation.severity >= ViolationSeverity.HIGH:
        return True
    return workout.type in FLEXIBLE_TYPES


def _scope_ids(plan: TrainingPlan, violation: DistributionViolation) -> set[str]:
    """Ids of the workouts a violation is about: its block, or the whole plan."""
    if violation.block_id is None:
        return {w.id for w in plan.workouts}
    return {
        w.id for block in plan.blocks if block.id == violation.block_id for w in block_workouts(block)
    }


def _with_segments(workout: PlannedWorkout, segments: Sequence[WorkoutSegment]) -> PlannedWorkout:
    template = replace(workout.workout, segments=tuple(segments))
    return with_template(workout, template)


def _convert_to_easier(workout: PlannedWorkout) -> PlannedWorkout:
    changed = False
    segments = []
    for segment in workout.workout.segments:
        if EASY_INTENSITY_MAX < segment.intensity <= MODERATE_INTENSITY_MAX:
            segment = replace(
                segment,
                intensity=EASY_CONVERSION_INTENSITY,
                zone=ZoneType.EASY,
                description=f"Easy {segment.description.lower()}",
            )
            changed = True
        segments.append(segment)
    return _with_segments(workout, segments) if changed else workout


def _reduce_intensity(workout: PlannedWorkout, severity: ViolationSeverity) -> PlannedWorkout:
    new_intensity = (
        HARD_REDUCTION_INTENSITY_CRITICAL
        if severity == ViolationSeverity.CRITICAL
        else HARD_REDUCTION_INTENSITY
    )
    changed = False
    segments = []
    for segment in workout.workout.segments:
        if segment.intensity > MODERATE_INTENSITY_MAX:
            segment = replace(
                segment,
                intensity=new_intensity,
                zone=zone_type_for_intensity(new_intensity),
                description=f"Reduced intensity {segment.description.lower()}",
            )
            changed = True
        segments.append(segment)
    return _with_segments(workout, segments) if changed else workout


def _can_host_quality(workout: PlannedWorkout) -> bool:
    template = workout.workout
    return (
        workout.type in QUALITY_HOST_TYPES
        and template.total_duration_min >= QUALITY_MIN_DURATION_MIN
        and all(s.intensity <= MODERATE_INTENSITY_MAX for s in template.segments)
    )


def _add_quality(workout: PlannedWorkout) -> PlannedWorkout:
    """Replace a steady easy run with easy / threshold / easy thirds (40/20/40)."""
    total = workout.workout.total_duration_min
    easy_intensity = workout.workout.segments[0].intensity if workout.workout.segments else 65
    opening = round(total * 0.4)
    quality = round(total * 0.2)
    segments = (
        WorkoutSegment(opening, easy_intensity, zone_type_for_intensity(easy_intensity), "Easy running"),
        WorkoutSegment(quality, QUALITY_SEGMENT_INTENSITY, ZoneType.THRESHOLD, "Threshold segment"),
        WorkoutSegment(
            total - opening - quality,
            easy_intensity,
            zone_type_for_intensity(easy_intensity),
            "Easy running",
        ),
    )
    return _with_segments(workout, segments)


def _quality_hosts(plan: TrainingPlan, scope: set[str]) -> set[str]:
    hosts: set[str] = set()
    for block in plan.blocks:
        if block.phase == TrainingPhase.BASE:
            continue
        for cycle in block.microcycles:
            eligible = [w.id for w in cycle.workouts if w.id in scope and _can_host_quality(w)]
            hosts.update(eligible[:QUALITY_MAX_PER_WEEK])
    return hosts


def fix_violation(plan: TrainingPlan, violation: DistributionViolation) -> TrainingPlan:
    """Apply the correction for one violation to the workouts it covers."""
    scope = _scope_ids(plan, violation)

    if violation.type == ViolationType.INSUFFICIENT_EASY:
        return map_workouts(
            plan,
            lambda w: _convert_to_easier(w) if w.id in scope and should_adjust(w, violation) else w,
        )

    if violation.type == ViolationType.EXCESSIVE_HARD:
        if violation.severity == ViolationSeverity.LOW:
            return plan
        return map_workouts(
            plan,
            lambda w: (
                _reduce_intensity(w, violation.severity)
                if w.id in scope and should_adjust(w, violation)
                else w
            ),
        )

    hosts = _quality_hosts(plan, scope)
    return map_workouts(plan, lambda w: _add_quality(w) if w.id in hosts else w)


def _correction_pass(plan: TrainingPlan, violations: Sequence[DistributionViolation]) -> TrainingPlan:
    ordered = sorted(violations, key=lambda v: v.severity, reverse=True)
    for violation in ordered:
        plan = fix_violation(plan, violation)
    return plan


def enforce_intensity_distribution(plan: TrainingPlan, variant: MethodologyVariant) -> EnforcementResult:
    """Correct a plan toward the variant's distribution targets.

    Args:
        plan: Plan to correct.
        variant: Methodology whose targets apply.

    Returns:
        EnforcementResult. The violation history is strictly decreasing;
        a compliant input plan comes back as the same object with zero
        iterations.
    """
    violations = validate_distribution(plan, variant)
    history = [len(violations)]
    if not violations:
        return EnforcementResult(plan=plan, iterations=0, violation_history=tuple(history))

    cap = max(1, len(violations))
    iterations = 0
    while violations and iterations < cap:
        iterations += 1
        candidate = _correction_pass(plan, violations)
        candidate_violations = validate_distribution(candidate, variant)
        logger.debug(
            "%s distribution pass %d: %d -> %d violations",
            variant.name,
            iterations,
            len(violations),
            len(candidate_violations),
        )
        if len(candidate_violations) >= len(violations):
            break
        plan, violations = candidate, candidate_violations
        history.append(len(violations))

    if violations and iterations >= cap:
        logger.warning(
            "%s distribution not converged after %d passes, %d violations remain",
            variant.name,
            iterations,
            len(violations),
        )

    return EnforcementResult(
        plan=plan,
        iterations=iterations,
        violation_history=tuple(history),
        remaining_violations=tuple(violations),
        converged=not violations,
    )


def compliance_score(violations: Sequence[DistributionViolation]) -> int:
    return max(0, 100 - sum(_SEVERITY_PENALTY[v.severity] for v in violations))


def _recommendations(
    overall: IntensityDistribution,
    target: IntensityDistribution,
    violations: Sequence[DistributionViolation],
) -> list[str]:
    recommendations: list[str] = []
    if overall.easy < target.easy - DISTRIBUTION_TOLERANCE_PCT:
        recommendations.append("Increase easy running volume to build aerobic base")
        recommendations.append("Convert some moderate workouts to easy runs")
    if overall.hard > target.hard + DISTRIBUTION_TOLERANCE_PCT:
        recommendations.append("Reduce high-intensity work to prevent overtraining")
        recommendations.append("Focus on quality over quantity for hard workouts")
    for violation in violations:
        if violation.severity >= ViolationSeverity.HIGH:
            phase = violation.phase.name.lower() if violation.phase is not None else "overall"
            recommendations.append(
                f"Critical: {violation.type.name.lower()} in {phase} phase - adjust immediately"
            )
    if not recommendations:
        recommendations.append("Intensity distribution looks good - maintain current balance")
    return recommendations


def generate_intensity_report(plan: TrainingPlan, variant: MethodologyVariant) -> IntensityReport:
    """Overall and per-block distributions with violations and advice.

    Block distributions are keyed ``"{phase}-{start date}"``.
    """
    overall = calculate_distribution(plan.workouts)
    phases = tuple(
        (
            f"{block.phase.name.lower()}-{block.start_date.isoformat()}",
            calculate_distribution(block_workouts(block)),
        )
        for block in plan.blocks
    )
    violations = validate_distribution(plan, variant)
    return IntensityReport(
        overall=overall,
        target=variant.overall_target,
        phases=phases,
        violations=tuple(violations),
        compliance_score=compliance_score(violations),
        recommendations=tuple(_recommendations(overall, variant.overall_target, violations)),
    )
