"""PlanGenerator: config + fitness -> dated blocks of weekly workouts.

Usage:
    generator = PlanGenerator(config)
    plan = generator.generate()

    plan = PlanGenerator.from_run_history(runs, "Half Marathon", race_day, now=today)
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from datetime import date, timedelta

from training_planner.cache import CalculationCache
from training_planner.config import SELECTION_SEED
from training_planner.exceptions import ConfigurationError
from training_planner.math.assessment import assess_fitness_from_runs, default_fitness
from training_planner.math.patterns import analyze_weekly_patterns, sunday_weekday
from training_planner.methodology.customization import (
    customize_workout,
    focus_areas_for,
    select_workout,
)
from training_planner.methodology.distribution import enforce_intensity_distribution
from training_planner.methodology.variants import MethodologyVariant, get_variant
from training_planner.models.enums import (
    DEFAULT_AVAILABLE_DAYS,
    DEFAULT_PLAN_WEEKS,
    Methodology,
    RECOVERY_WEEK_VOLUME_FRACTION,
    REFERENCE_THRESHOLD_INTENSITY,
    REFERENCE_THRESHOLD_PACE,
    RacePriority,
    TrainingPhase,
    WorkoutType,
)
from training_planner.models.fitness import FitnessAssessment
from training_planner.models.plan import (
    Microcycle,
    TrainingBlock,
    TrainingPlan,
    TrainingPlanConfig,
    TrainingPreferences,
)
from training_planner.models.run import Run
from training_planner.models.workout import PlannedWorkout, TargetMetrics, WorkoutTemplate
from training_planner.periodization.phases import (
    FOCUS_AREAS,
    REST_TOKEN,
    PhaseSpec,
    allocate_phase_weeks,
    choose_weekly_pattern,
    is_recovery_week,
    progression_factor,
    progression_rate,
)
from training_planner.periodization.summary import build_summary, refresh_microcycle
from training_planner.workout_catalog.templates import get_template

logger = logging.getLogger(__name__)

W = WorkoutType

# Pattern token -> catalog candidates for uncustomized plans
TOKEN_TEMPLATES: dict[str, tuple[str, ...]] = {
    "Easy": ("EASY_AEROBIC",),
    "Recovery": ("RECOVERY_JOG",),
    "Steady": ("EASY_AEROBIC",),
    "Tempo": ("TEMPO_CONTINUOUS",),
    "Threshold": ("LACTATE_THRESHOLD_2X20", "THRESHOLD_PROGRESSION"),
    "Intervals": ("VO2MAX_4X4", "VO2MAX_5X3"),
    "VO2max": ("VO2MAX_4X4", "VO2MAX_5X3"),
    "Hills": ("HILL_REPEATS_6X2",),
    "Long": ("LONG_RUN",),
    "Progression": ("PROGRESSION_3_STAGE",),
    "Speed": ("SPEED_200M_REPS",),
    "Strides": ("SPEED_200M_REPS",),
    "RacePace": ("TEMPO_CONTINUOUS",),
    "TimeTrial": ("THRESHOLD_PROGRESSION",),
    "MediumLong": ("EASY_AEROBIC",),
}

# Pattern token -> workout type requested from a methodology
TOKEN_TYPES: dict[str, WorkoutType] = {
    "Easy": W.EASY,
    "Recovery": W.RECOVERY,
    "Steady": W.STEADY,
    "Tempo": W.TEMPO,
    "Threshold": W.THRESHOLD,
    "Intervals": W.VO2MAX,
    "VO2max": W.VO2MAX,
    "Hills": W.HILL_REPEATS,
    "Long": W.LONG_RUN,
    "Progression": W.PROGRESSION,
    "Speed": W.SPEED,
    "Strides": W.SPEED,
    "RacePace": W.RACE_PACE,
    "TimeTrial": W.TIME_TRIAL,
    "MediumLong": W.EASY,
}

# When a week has more workouts than training days, these go first (last occurrence first)
DROP_ORDER = ("Recovery", "Easy", "Steady", "Strides")

WORKOUT_DISPLAY_NAMES: dict[WorkoutType, str] = {
    W.RECOVERY: "Recovery Run",
    W.EASY: "Easy Aerobic Run",
    W.STEADY: "Steady State Run",
    W.TEMPO: "Tempo Run",
    W.THRESHOLD: "Lactate Threshold Workout",
    W.VO2MAX: "VO2max Intervals",
    W.SPEED: "Speed Development",
    W.HILL_REPEATS: "Hill Repeats",
    W.FARTLEK: "Fartlek Run",
    W.PROGRESSION: "Progression Run",
    W.LONG_RUN: "Long Run",
    W.RACE_PACE: "Race Pace Practice",
    W.TIME_TRIAL: "Time Trial",
}


def fit_tokens(tokens: Sequence[str], slots: int) -> list[tuple[int, str]]:
    """Keep at most ``slots`` non-rest tokens, with their pattern index.

    Low-value tokens are dropped first (see DROP_ORDER), then tokens from
    the end of the week.
    """
    kept = [(i, t) for i, t in enumerate(tokens) if t != REST_TOKEN]
    for droppable in DROP_ORDER:
        while len(kept) > slots and any(t == droppable for _, t in kept):
            last = max(k for k, (_, t) in enumerate(kept) if t == droppable)
            del kept[last]
    return kept[: max(slots, 0)]


def training_days(week_start: date, available_days: Sequence[int]) -> list[date]:
    """Dates within the 7 days from ``week_start`` that fall on available weekdays."""
    days = (week_start + timedelta(days=offset) for offset in range(7))
    return [d for d in days if sunday_weekday(d) in available_days]


def estimate_distance(template: WorkoutTemplate, volume_remaining: float, workouts_left: int) -> float:
    """Distance target in km for a workout.

    Pace scales from 5:00/km at intensity 88; the estimate is capped at an
    even share of the volume still unassigned this week.
    """
    intensity = template.average_intensity
    if intensity <= 0 or workouts_left <= 0:
        return 0.0
    pace = REFERENCE_THRESHOLD_PACE / (intensity / REFERENCE_THRESHOLD_INTENSITY)
    estimate = template.total_duration_min / pace
    return max(0.0, round(min(estimate, volume_remaining / workouts_left), 1))


def describe_workout(template: WorkoutTemplate) -> str:
    parts = ", ".join(f"{s.duration_min:g}min {s.description}" for s in template.segments)
    return f"{template.adaptation_target}. Workout: {parts}"


def plan_end_date(config: TrainingPlanConfig) -> date:
    """Target date, else the last A race, else 16 weeks after the start."""
    if config.target_date is not None:
        return config.target_date
    a_races = [r.race_date for r in config.target_races if r.priority == RacePriority.A]
    if a_races:
        return max(a_races)
    return config.start_date + timedelta(weeks=DEFAULT_PLAN_WEEKS)


class PlanGenerator:
    """Builds a TrainingPlan from a TrainingPlanConfig.

    Args:
        config: Plan configuration.
        seed: Seed for pattern and template choices. Defaults to
            TRAINING_PLANNER_SEED, so equal inputs give equal plans.
        cache: Optional cache for finished plans.

    Raises:
        ConfigurationError: For an empty or out-of-range set of available
            days, or an unknown methodology.
    """

    def __init__(
        self,
        config: TrainingPlanConfig,
        seed: int | None = None,
        cache: CalculationCache | None = None,
    ) -> None:
        days = config.preferences.available_days
        if not days or any(not 0 <= d <= 6 for d in days):
            raise ConfigurationError(
                f"available_days must be a non-empty subset of 0..6, got {days!r}",
                field="preferences.available_days",
            )
        self.config = config
        self.seed = SELECTION_SEED if seed is None else seed
        self.cache = cache
        self.fitness: FitnessAssessment = config.fitness or default_fitness()
        self.variant: MethodologyVariant | None = (
            get_variant(config.methodology) if config.methodology is not None else None
        )

    @classmethod
    def from_run_history(
        cls,
        runs: Sequence[Run],
        goal: str,
        target_date: date,
        now: date,
        seed: int | None = None,
        cache: CalculationCache | None = None,
        methodology: Methodology | str | None = None,
    ) -> TrainingPlan:
        """Assess fitness from runs and generate a plan starting ``now``.

        Training days follow the athlete's habitual days, or the default
        set when the history shows none.
        """
        fitness = assess_fitness_from_runs(runs, now, cache=cache)
        patterns = analyze_weekly_patterns(runs)
        config = TrainingPlanConfig(
            name=f"{goal} Training Plan",
            goal=goal,
            start_date=now,
            target_date=target_date,
            fitness=fitness,
            preferences=TrainingPreferences(
                available_days=patterns.optimal_days or DEFAULT_AVAILABLE_DAYS
            ),
            methodology=methodology,
        )
        return cls(config, seed=seed, cache=cache).generate()

    def generate(self) -> TrainingPlan:
        """Generate the plan.

        Raises:
            ConfigurationError: If the plan spans less than one week or is
                too short to allocate any training block.
        """
        if self.cache is not None:
            return self.cache.get_or_compute("training-plan", (self.config, self.seed), self._build)
        return self._build()

    def _build(self) -> TrainingPlan:
        config = self.config
        end = plan_end_date(config)
        total_weeks = (end - config.start_date).days // 7
        if total_weeks <= 0:
            raise ConfigurationError(
                f"Plan must span at least one week, got {config.start_date} to {end}",
                field="target_date",
            )
        phases = allocate_phase_weeks(total_weeks)
        if not phases:
            raise ConfigurationError(
                f"{total_weeks} weeks is too short to allocate a training block", field="target_date"
            )

        logger.info(
            "Generating %s: %d weeks, %d blocks, methodology=%s",
            config.name,
            total_weeks,
            len(phases),
            self.variant.name if self.variant else "none",
        )

        rng = random.Random(self.seed)
        blocks = [self._build_block(n, spec, rng) for n, spec in enumerate(phases, start=1)]
        plan = TrainingPlan(
            config=config,
            blocks=tuple(blocks),
            workouts=tuple(w for block in blocks for cycle in block.microcycles for w in cycle.workouts),
            summary=build_summary(blocks),
        )

        if self.variant is not None:
            result = enforce_intensity_distribution(plan, self.variant)
            plan = result.plan

        logger.info(
            "Generated %s: %d workouts, %.1f km",
            config.name,
            plan.summary.total_workouts,
            plan.summary.total_distance,
        )
        return plan

    def _build_block(self, number: int, spec: PhaseSpec, rng: random.Random) -> TrainingBlock:
        start = self.config.start_date + timedelta(weeks=spec.start_week - 1)
        rate = progression_rate(self.fitness.training_age_years)
        base_volume = self.fitness.weekly_mileage_km

        cycles = []
        for week in range(spec.duration_weeks):
            recovery = is_recovery_week(week)
            volume = base_volume * progression_factor(spec.phase, week, rate)
            if recovery:
                volume *= RECOVERY_WEEK_VOLUME_FRACTION
            cycles.append(
                self._build_week(
                    phase=spec.phase,
                    week_in_phase=week,
                    plan_week=spec.start_week + week,
                    week_start=start + timedelta(weeks=week),
                    pattern=choose_weekly_pattern(spec.phase, recovery, rng),
                    volume=volume,
                    rng=rng,
                )
            )

        return TrainingBlock(
            id=f"block-{number}",
            phase=spec.phase,
            start_date=start,
            end_date=start + timedelta(days=spec.duration_weeks * 7 - 1),
            weeks=spec.duration_weeks,
            focus_areas=focus_areas_for(self.variant, spec.phase, FOCUS_AREAS[spec.phase]),
            microcycles=tuple(cycles),
        )

    def _select(
        self, token: str, phase: TrainingPhase, week_in_phase: int, rng: random.Random
    ) -> WorkoutTemplate:
        if self.variant is None:
            return get_template(rng.choice(TOKEN_TEMPLATES.get(token, ("EASY_AEROBIC",))))
        template = select_workout(self.variant, TOKEN_TYPES.get(token, W.EASY), phase, week_in_phase)
        return customize_workout(self.variant, template, phase, week_in_phase)

    def _build_week(
        self,
        phase: TrainingPhase,
        week_in_phase: int,
        plan_week: int,
        week_start: date,
        pattern: str,
        volume: float,
        rng: random.Random,
    ) -> Microcycle:
        days = training_days(week_start, self.config.preferences.available_days)
        tokens = fit_tokens(pattern.split("-"), len(days))

        workouts: list[PlannedWorkout] = []
        remaining = volume
        for slot, (index, token) in enumerate(tokens):
            template = self._select(token, phase, week_in_phase, rng)
            distance = estimate_distance(template, remaining, len(tokens) - slot)
            name = WORKOUT_DISPLAY_NAMES.get(template.type, "Training Run")
            workouts.append(
                PlannedWorkout(
                    id=f"workout-{plan_week}-{index + 1}",
                    date=days[slot],
                    type=template.type,
                    name=f"{phase.name.title()} Phase: {name}",
                    description=describe_workout(template),
                    target=TargetMetrics(
                        duration_min=template.total_duration_min,
                        distance_km=distance,
                        intensity=template.average_intensity,
                        tss=template.estimated_tss,
                        load=template.estimated_tss,
                    ),
                    workout=template,
                )
            )
            remaining -= distance

        empty = Microcycle(
            week_number=plan_week,
            start_date=week_start,
            pattern=pattern,
            workouts=(),
            total_load=0.0,
            total_distance=0.0,
            recovery_ratio=0.0,
        )
        return refresh_microcycle(empty, workouts)
