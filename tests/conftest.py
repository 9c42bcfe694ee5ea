"""Shared test fixtures: run histories, plan configs, generated plans, workout factories."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, Sequence

import pytest

from training_planner.math.patterns import week_start
from training_planner.models.enums import TrainingPhase, WorkoutType
from training_planner.models.feedback import CompletedWorkout
from training_planner.models.plan import (
    Microcycle,
    TrainingBlock,
    TrainingPlan,
    TrainingPlanConfig,
)
from training_planner.models.run import Run
from training_planner.models.workout import PlannedWorkout, TargetMetrics, WorkoutSegment
from training_planner.periodization.generator import PlanGenerator
from training_planner.periodization.summary import build_summary, refresh_microcycle
from training_planner.workout_catalog.templates import create_custom_workout, get_template

PLAN_START = date(2024, 1, 7)  # Sunday
TODAY = date(2024, 3, 10)  # Sunday


@pytest.fixture
def plan_config() -> TrainingPlanConfig:
    """16-week marathon plan with default preferences and no methodology."""
    return TrainingPlanConfig(
        name="Spring Marathon",
        goal="Marathon",
        start_date=PLAN_START,
        target_date=PLAN_START + timedelta(weeks=16),
    )


@pytest.fixture
def plan(plan_config: TrainingPlanConfig) -> TrainingPlan:
    return PlanGenerator(plan_config, seed=7).generate()


@pytest.fixture
def race_history() -> list[Run]:
    """Four weeks of Sunday long runs, Tuesday intervals and Thursday easy runs, plus one 10K race."""
    runs: list[Run] = []
    for week in range(4):
        sunday = PLAN_START + timedelta(weeks=week)
        runs.append(Run(sunday, 18.0, 108.0, avg_pace_min_per_km=6.0, avg_hr=145, effort_level=5))
        runs.append(
            Run(sunday + timedelta(days=2), 8.0, 38.0, avg_pace_min_per_km=4.75, avg_hr=165, effort_level=7)
        )
        runs.append(
            Run(sunday + timedelta(days=4), 10.0, 58.0, avg_pace_min_per_km=5.8, avg_hr=140, effort_level=4)
        )
    runs.append(
        Run(
            PLAN_START + timedelta(days=27),
            10.0,
            42.0,
            avg_pace_min_per_km=4.2,
            effort_level=10,
            is_race=True,
        )
    )
    return runs


@pytest.fixture
def workout_factory() -> Callable[..., PlannedWorkout]:
    """Factory fixture for PlannedWorkouts.

    Usage:
        w = workout_factory("w1", day, WorkoutType.EASY, minutes=60, intensity=65)
        w = workout_factory("w2", day, template_key="VO2MAX_4X4")
        w = workout_factory("w3", day, WorkoutType.TEMPO, segments=[(20, 65), (30, 84)])
    """

    def factory(
        workout_id: str,
        day: date,
        workout_type: WorkoutType = WorkoutType.EASY,
        minutes: float = 60,
        intensity: float = 65,
        template_key: str | None = None,
        segments: Sequence[tuple[float, float]] | None = None,
        distance_km: float = 10.0,
    ) -> PlannedWorkout:
        if template_key is not None:
            template = get_template(template_key)
        elif segments is not None:
            from training_planner.math.zones import zone_type_for_intensity

            built = tuple(
                WorkoutSegment(m, i, zone_type_for_intensity(i), "Segment") for m, i in segments
            )
            template = create_custom_workout(
                workout_type, sum(m for m, _ in segments), intensity, segments=built
            )
        else:
            template = create_custom_workout(workout_type, minutes, intensity)
        return PlannedWorkout(
            id=workout_id,
            date=day,
            type=template.type,
            name=f"Test {template.type.name.lower()}",
            description="",
            target=TargetMetrics(
                duration_min=template.total_duration_min,
                distance_km=distance_km,
                intensity=template.average_intensity,
                tss=template.estimated_tss,
                load=template.estimated_tss,
            ),
            workout=template,
        )

    return factory


@pytest.fixture
def plan_factory(plan_config: TrainingPlanConfig) -> Callable[..., TrainingPlan]:
    """Factory fixture wrapping workouts in a single-block plan, one microcycle per week.

    Usage:
        p = plan_factory([w1, w2], phase=TrainingPhase.BUILD)
    """

    def factory(
        workouts: Sequence[PlannedWorkout], phase: TrainingPhase = TrainingPhase.BUILD
    ) -> TrainingPlan:
        by_week: dict[date, list[PlannedWorkout]] = {}
        for workout in sorted(workouts, key=lambda w: w.date):
            by_week.setdefault(week_start(workout.date), []).append(workout)

        cycles = []
        for number, (start, week_workouts) in enumerate(sorted(by_week.items()), start=1):
            empty = Microcycle(number, start, "test", (), 0.0, 0.0, 0.0)
            cycles.append(refresh_microcycle(empty, week_workouts))

        first = cycles[0].start_date if cycles else PLAN_START
        block = TrainingBlock(
            id="block-1",
            phase=phase,
            start_date=first,
            end_date=first + timedelta(days=len(cycles) * 7 - 1),
            weeks=len(cycles),
            focus_areas=(),
            microcycles=tuple(cycles),
        )
        return TrainingPlan(
            config=plan_config,
            blocks=(block,),
            workouts=tuple(w for cycle in cycles for w in cycle.workouts),
            summary=build_summary([block]),
        )

    return factory


@pytest.fixture
def completed_factory() -> Callable[..., CompletedWorkout]:
    """Factory fixture for CompletedWorkouts.

    Usage:
        c = completed_factory(day, effort=8, completion=0.8)
    """
    counter = iter(range(1, 10_000))

    def factory(
        day: date,
        minutes: float | None = 45.0,
        distance_km: float | None = 8.0,
        effort: int | None = 5,
        completion: float = 1.0,
        notes: str = "",
    ) -> CompletedWorkout:
        return CompletedWorkout(
            planned_workout_id=f"done-{next(counter)}",
            date=day,
            actual_duration_min=minutes,
            actual_distance_km=distance_km,
            completion_rate=completion,
            perceived_effort=effort,
            notes=notes,
        )

    return factory
