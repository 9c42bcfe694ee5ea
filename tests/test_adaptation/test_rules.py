"""Tests for the adaptation rules and their registry."""

from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from training_planner.adaptation.progress import analyze_progress
from training_planner.adaptation.registry import AdaptationRuleRegistry
from training_planner.adaptation.rules.base import AdaptationContext, AdaptationRule
from training_planner.adaptation.rules.load import ElevatedLoadRatioRule, HighLoadRatioRule
from training_planner.adaptation.rules.progress import DecliningPerformanceRule, LowAdherenceRule
from training_planner.adaptation.rules.recovery import InjuryIllnessRule, LowRecoveryRule
from training_planner.models.enums import ModificationType, PerformanceTrend, Priority, WorkoutType
from training_planner.models.feedback import Modification, RecoveryMetrics
from training_planner.models.fitness import TrainingLoadState
from training_planner.models.plan import TrainingPlan

NOW = date(2024, 3, 10)


@pytest.fixture
def context(plan: TrainingPlan) -> AdaptationContext:
    """A quiet context: no history, nothing due, ratio 1.0, no readiness report."""
    return AdaptationContext(
        plan=plan,
        progress=analyze_progress([], [], NOW),
        load=TrainingLoadState(ratio=1.0),
    )


class TestLoadRules:
    @pytest.mark.parametrize(("ratio", "fires"), [(1.5, False), (1.51, True), (2.4, True)])
    def test_high_ratio(self, context: AdaptationContext, ratio: float, fires: bool) -> None:
        modification = HighLoadRatioRule().evaluate(replace(context, load=TrainingLoadState(ratio=ratio)))
        assert (modification is not None) == fires
        if modification is not None:
            assert modification.type == ModificationType.REDUCE_VOLUME
            assert modification.volume_reduction_pct == 30
            assert modification.priority == Priority.HIGH

    @pytest.mark.parametrize(("ratio", "fires"), [(1.3, False), (1.31, True), (1.5, True), (1.51, False)])
    def test_elevated_ratio(self, context: AdaptationContext, ratio: float, fires: bool) -> None:
        modification = ElevatedLoadRatioRule().evaluate(replace(context, load=TrainingLoadState(ratio=ratio)))
        assert (modification is not None) == fires
        if modification is not None:
            assert modification.type == ModificationType.REDUCE_INTENSITY
            assert modification.intensity_reduction_pct == 20
            assert "1." in modification.reason


class TestRecoveryRules:
    def test_low_recovery_needs_a_score(self, context: AdaptationContext) -> None:
        assert not LowRecoveryRule().has_required_data(context)

    def test_low_recovery(self, context: AdaptationContext) -> None:
        modification = LowRecoveryRule().evaluate(replace(context, recovery_score=45))
        assert modification.type == ModificationType.ADD_RECOVERY
        assert modification.additional_recovery_days == 2
        assert modification.reason == "Low recovery score (45), indicating high fatigue"

    def test_adequate_recovery(self, context: AdaptationContext) -> None:
        assert LowRecoveryRule().evaluate(replace(context, recovery_score=60)) is None

    def test_injury_is_full_protocol(self, context: AdaptationContext) -> None:
        modification = InjuryIllnessRule().evaluate(replace(context, recovery=RecoveryMetrics(injured=True)))
        assert modification.type == ModificationType.INJURY_PROTOCOL
        assert modification.volume_reduction_pct == 100
        assert modification.substitute_type == WorkoutType.RECOVERY

    def test_illness_is_partial_protocol(self, context: AdaptationContext) -> None:
        modification = InjuryIllnessRule().evaluate(replace(context, recovery=RecoveryMetrics(ill=True)))
        assert modification.volume_reduction_pct == 50
        assert modification.reason == "Illness reported"

    def test_healthy(self, context: AdaptationContext) -> None:
        assert InjuryIllnessRule().evaluate(replace(context, recovery=RecoveryMetrics())) is None


class TestProgressRules:
    def test_low_adherence(self, context: AdaptationContext) -> None:
        progress = replace(context.progress, adherence_rate=0.5)
        modification = LowAdherenceRule().evaluate(replace(context, progress=progress))
        assert modification.type == ModificationType.REDUCE_VOLUME
        assert modification.volume_reduction_pct == 20
        assert modification.reason == "Low adherence rate (50%)"

    def test_adherence_at_threshold(self, context: AdaptationContext) -> None:
        progress = replace(context.progress, adherence_rate=0.7)
        assert LowAdherenceRule().evaluate(replace(context, progress=progress)) is None

    def test_declining_performance(self, context: AdaptationContext) -> None:
        progress = replace(context.progress, performance_trend=PerformanceTrend.DECLINING)
        modification = DecliningPerformanceRule().evaluate(replace(context, progress=progress))
        assert modification.type == ModificationType.DELAY_PROGRESSION
        assert modification.delay_days == 7

    def test_stable_performance(self, context: AdaptationContext) -> None:
        assert DecliningPerformanceRule().evaluate(context) is None


class TestRegistry:
    @pytest.fixture
    def registry(self) -> AdaptationRuleRegistry:
        registry = AdaptationRuleRegistry()
        registry.discover_rules()
        return registry

    def test_discovers_all_rules(self, registry: AdaptationRuleRegistry) -> None:
        assert sorted(registry.rule_ids) == [
            "declining_performance",
            "injury_illness",
            "load_ratio_elevated",
            "load_ratio_high",
            "low_adherence",
            "low_recovery",
        ]

    def test_ordered_by_priority_then_id(self, registry: AdaptationRuleRegistry) -> None:
        assert [r.rule_id for r in registry.get_all_rules()] == [
            "injury_illness",
            "load_ratio_high",
            "low_recovery",
            "declining_performance",
            "load_ratio_elevated",
            "low_adherence",
        ]

    def test_get(self, registry: AdaptationRuleRegistry) -> None:
        assert isinstance(registry.get("low_adherence"), LowAdherenceRule)
        assert registry.get("missing") is None

    def test_register_replaces_by_id(self, registry: AdaptationRuleRegistry) -> None:
        class AlwaysRest(AdaptationRule):
            rule_id = "low_adherence"
            version = "2.0.0"
            priority = Priority.LOW

            def evaluate(self, context: AdaptationContext) -> Modification | None:
                return None

        registry.register(AlwaysRest())
        assert len(registry.rule_ids) == 6
        assert registry.get("low_adherence").version == "2.0.0"
