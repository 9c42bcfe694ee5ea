"""Tests for AdaptationEngine: rule evaluation and ordered application."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable

import pytest

from training_planner.adaptation.engine import AdaptationEngine
from training_planner.adaptation.registry import AdaptationRuleRegistry
from training_planner.models.enums import (
    FatigueLevel,
    ModificationStatus,
    ModificationType,
    Priority,
    RecoveryStatus,
    RiskLevel,
)
from training_planner.models.feedback import CompletedWorkout, Modification, RecoveryMetrics
from training_planner.models.plan import TrainingPlan
from training_planner.models.workout import PlannedWorkout

NOW = date(2024, 3, 10)


@pytest.fixture
def engine() -> AdaptationEngine:
    return AdaptationEngine()


class TestSuggestModifications:
    def test_quiet_progress_needs_nothing(self, engine: AdaptationEngine, plan: TrainingPlan) -> None:
        progress = engine.analyze_progress([], [], NOW)
        assert engine.suggest_modifications(plan, progress) == []
        assert not engine.needs_adaptation(progress)

    def test_injury(self, engine: AdaptationEngine, plan: TrainingPlan) -> None:
        progress = engine.analyze_progress([], [], NOW)
        recovery = RecoveryMetrics(injured=True)
        modifications = engine.suggest_modifications(plan, progress, recovery)

        assert [(m.type, m.volume_reduction_pct) for m in modifications] == [
            (ModificationType.INJURY_PROTOCOL, 100)
        ]
        assert engine.needs_adaptation(progress, recovery)

    def test_low_recovery(self, engine: AdaptationEngine, plan: TrainingPlan) -> None:
        progress = engine.analyze_progress([], [], NOW)
        recovery = RecoveryMetrics(sleep_quality=2, muscle_soreness=9, energy_level=2)
        modifications = engine.suggest_modifications(plan, progress, recovery)

        assert [m.type for m in modifications] == [ModificationType.ADD_RECOVERY]
        assert modifications[0].reason == "Low recovery score (30), indicating high fatigue"

    def test_low_adherence(
        self,
        engine: AdaptationEngine,
        plan: TrainingPlan,
        workout_factory: Callable[..., PlannedWorkout],
        completed_factory: Callable[..., CompletedWorkout],
    ) -> None:
        planned = [workout_factory(f"w{i}", NOW - timedelta(days=i)) for i in range(10)]
        completed = [completed_factory(NOW - timedelta(days=i), distance_km=None) for i in range(3)]
        progress = engine.analyze_progress(completed, planned, NOW)
        modifications = engine.suggest_modifications(plan, progress)

        assert [(m.type, m.reason) for m in modifications] == [
            (ModificationType.REDUCE_VOLUME, "Low adherence rate (30%)")
        ]
        assert engine.needs_adaptation(progress)

    def test_load_spike(
        self, engine: AdaptationEngine, plan: TrainingPlan, spike_history: list[CompletedWorkout]
    ) -> None:
        progress = engine.analyze_progress(spike_history, [], NOW)
        modifications = engine.suggest_modifications(plan, progress)

        assert [(m.type, m.volume_reduction_pct, m.priority) for m in modifications] == [
            (ModificationType.REDUCE_VOLUME, 30, Priority.HIGH)
        ]
        assert engine.needs_adaptation(progress)

    def test_empty_registry(self, plan: TrainingPlan) -> None:
        engine = AdaptationEngine(registry=AdaptationRuleRegistry())
        progress = engine.analyze_progress([], [], NOW)
        assert engine.suggest_modifications(plan, progress, RecoveryMetrics(injured=True)) == []


class TestApplyModifications:
    def test_priority_then_type_order(self, engine: AdaptationEngine, adaptable_plan: TrainingPlan) -> None:
        modifications = [
            Modification(ModificationType.DELAY_PROGRESSION, "slow down", Priority.MEDIUM, delay_days=7),
            Modification(ModificationType.REDUCE_VOLUME, "load", Priority.HIGH, volume_reduction_pct=30),
            Modification(
                ModificationType.INJURY_PROTOCOL, "injured", Priority.HIGH, volume_reduction_pct=100
            ),
        ]
        result = engine.apply_modifications(adaptable_plan, modifications, NOW)

        assert [(o.modification.type, o.status, o.affected_workout_ids) for o in result.outcomes] == [
            (ModificationType.INJURY_PROTOCOL, ModificationStatus.APPLIED, ("f1", "f2", "f3")),
            (ModificationType.REDUCE_VOLUME, ModificationStatus.APPLIED, ("f4", "f5")),
            (ModificationType.DELAY_PROGRESSION, ModificationStatus.APPLIED, ("f4", "f5")),
        ]
        assert result.warnings == ()

        workouts = {w.id: w for w in result.plan.workouts}
        original = {w.id: w for w in adaptable_plan.workouts}
        assert list(workouts) == ["past", "today", "f4", "f5"]
        assert workouts["f4"].date == original["f4"].date + timedelta(days=7)
        assert workouts["past"] == original["past"]
        assert workouts["today"] == original["today"]

    def test_order_independent_of_input(self, engine: AdaptationEngine, adaptable_plan: TrainingPlan) -> None:
        modifications = [
            Modification(ModificationType.ADD_RECOVERY, "tired", Priority.HIGH),
            Modification(ModificationType.REDUCE_INTENSITY, "load", Priority.MEDIUM),
            Modification(ModificationType.REDUCE_VOLUME, "load", Priority.HIGH),
        ]
        forward = engine.apply_modifications(adaptable_plan, modifications, NOW)
        backward = engine.apply_modifications(adaptable_plan, list(reversed(modifications)), NOW)
        assert forward == backward

    def test_no_op_is_reported(
        self,
        engine: AdaptationEngine,
        workout_factory: Callable[..., PlannedWorkout],
        plan_factory: Callable[..., TrainingPlan],
    ) -> None:
        plan = plan_factory([workout_factory("easy", NOW + timedelta(days=1))])
        modification = Modification(ModificationType.REDUCE_INTENSITY, "load", Priority.MEDIUM)
        result = engine.apply_modifications(plan, [modification], NOW)

        assert result.plan is plan
        assert result.outcomes[0].status == ModificationStatus.NO_OP
        assert result.outcomes[0].note == "reduce_intensity: no eligible future workouts"
        assert result.warnings == ("reduce_intensity: no eligible future workouts",)

    def test_nothing_to_apply(self, engine: AdaptationEngine, adaptable_plan: TrainingPlan) -> None:
        result = engine.apply_modifications(adaptable_plan, [], NOW)
        assert result.plan is adaptable_plan
        assert result.outcomes == ()


class TestAssessments:
    def test_delegated_assessments(self, engine: AdaptationEngine, adaptable_plan: TrainingPlan) -> None:
        assert engine.assess_recovery_status([], NOW).status == RecoveryStatus.ADEQUATE
        assert engine.detect_fatigue_and_adjust([], adaptable_plan.workouts, NOW).level == FatigueLevel.LOW
        assert engine.assess_overreaching_risk([], adaptable_plan.workouts, NOW).level == RiskLevel.LOW
