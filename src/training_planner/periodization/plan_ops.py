"""Structural edits on generated plans.

Plans are immutable; every edit returns a new TrainingPlan whose
microcycle totals, flattened workout list and summary stay consistent.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from training_planner.models.plan import TrainingBlock, TrainingPlan
from training_planner.models.workout import PlannedWorkout, WorkoutTemplate
from training_planner.periodization.summary import build_summary, refresh_microcycle

WorkoutTransform = Callable[[PlannedWorkout], "PlannedWorkout | None"]


def with_template(workout: PlannedWorkout, template: WorkoutTemplate, **changes) -> PlannedWorkout:
    """Swap a workout's template and refresh the targets derived from it.

    Duration, intensity, TSS and load follow the template; distance and any
    field passed in ``changes`` are kept or overridden as given.
    """
    target = replace(
        workout.target,
        duration_min=template.total_duration_min,
        intensity=template.average_intensity,
        tss=template.estimated_tss,
        load=template.estimated_tss,
    )
    return replace(workout, workout=template, target=target, **changes)


def map_workouts(plan: TrainingPlan, transform: WorkoutTransform) -> TrainingPlan:
    """Apply ``transform`` to every workout, rebuilding derived fields.

    ``transform`` returns the workout unchanged (same object), a
    replacement, or None to drop it. The input plan is returned as-is when
    no workout changed.
    """
    changed = False
    blocks: list[TrainingBlock] = []
    for block in plan.blocks:
        cycles = []
        for cycle in block.microcycles:
            kept = []
            for workout in cycle.workouts:
                new = transform(workout)
                if new is not workout:
                    changed = True
                if new is not None:
                    kept.append(new)
            cycles.append(refresh_microcycle(cycle, kept))
        blocks.append(replace(block, microcycles=tuple(cycles)))

    if not changed:
        return plan
    return replace(
        plan,
        blocks=tuple(blocks),
        workouts=tuple(w for block in blocks for cycle in block.microcycles for w in cycle.workouts),
        summary=build_summary(blocks),
    )
