"""AdaptationEngine: completed-workout feedback -> plan modifications.

Usage:
    engine = AdaptationEngine()
    progress = engine.analyze_progress(completed, plan.workouts, now=today)
    modifications = engine.suggest_modifications(plan, progress, recovery)
    result = engine.apply_modifications(plan, modifications, now=today)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from training_planner.adaptation import fatigue, progress as progress_analysis, recovery as readiness, risk
from training_planner.adaptation.appliers import APPLIERS
from training_planner.adaptation.registry import AdaptationRuleRegistry
from training_planner.adaptation.rules.base import AdaptationContext
from training_planner.models.enums import (
    MIN_ADHERENCE_RATE,
    MIN_RECOVERY_SCORE,
    SAFE_ACWR_LOWER,
    SAFE_ACWR_UPPER,
    ModificationStatus,
    PerformanceTrend,
)
from training_planner.models.feedback import (
    CompletedWorkout,
    FatigueAssessment,
    Modification,
    ModificationOutcome,
    ModificationResult,
    OverreachingRisk,
    ProgressAnalysis,
    RecoveryAssessment,
    RecoveryMetrics,
)
from training_planner.models.plan import TrainingPlan
from training_planner.models.workout import PlannedWorkout

logger = logging.getLogger(__name__)


class AdaptationEngine:
    """Evaluates adaptation rules and applies the modifications they emit.

    Args:
        registry: Rule registry. Defaults to one populated by auto-discovery.
    """

    def __init__(self, registry: AdaptationRuleRegistry | None = None) -> None:
        self.registry = registry or AdaptationRuleRegistry()
        if registry is None:
            self.registry.discover_rules()

    def analyze_progress(
        self,
        completed: Sequence[CompletedWorkout],
        planned: Sequence[PlannedWorkout],
        now: date,
    ) -> ProgressAnalysis:
        return progress_analysis.analyze_progress(completed, planned, now)

    def _context(
        self, plan: TrainingPlan, progress: ProgressAnalysis, recovery: RecoveryMetrics | None
    ) -> AdaptationContext:
        return AdaptationContext(
            plan=plan,
            progress=progress,
            load=progress_analysis.completed_load(progress.completed),
            recovery=recovery,
            recovery_score=readiness.overall_recovery_score(recovery) if recovery is not None else None,
        )

    def suggest_modifications(
        self,
        plan: TrainingPlan,
        progress: ProgressAnalysis,
        recovery: RecoveryMetrics | None = None,
    ) -> list[Modification]:
        """Run every rule against the current state.

        Rules are independent; each contributes at most one modification.
        """
        context = self._context(plan, progress, recovery)
        modifications: list[Modification] = []
        for rule in self.registry.get_all_rules():
            if not rule.has_required_data(context):
                continue
            modification = rule.evaluate(context)
            if modification is not None:
                logger.info(
                    "Rule %s suggests %s: %s", rule.rule_id, modification.type.name, modification.reason
                )
                modifications.append(modification)
        return modifications

    def apply_modifications(
        self,
        plan: TrainingPlan,
        modifications: Sequence[Modification],
        now: date,
    ) -> ModificationResult:
        """Apply modifications in priority order to the future part of a plan.

        Ties in priority are broken by modification type so the result does
        not depend on the input order. Workouts dated on or before ``now``
        are never touched.

        Returns:
            ModificationResult with one outcome per modification, in the
            order applied. Modifications that found nothing to change are
            recorded as NO_OP and reported in ``warnings``.
        """
        ordered = sorted(modifications, key=lambda m: (m.priority, m.type))
        outcomes: list[ModificationOutcome] = []
        warnings: list[str] = []
        for modification in ordered:
            plan, affected = APPLIERS[modification.type](plan, modification, now)
            if affected:
                outcomes.append(
                    ModificationOutcome(
                        modification, ModificationStatus.APPLIED, affected_workout_ids=affected
                    )
                )
                continue
            note = f"{modification.type.name.lower()}: no eligible future workouts"
            logger.debug("Modification skipped, %s", note)
            outcomes.append(ModificationOutcome(modification, ModificationStatus.NO_OP, note=note))
            warnings.append(note)
        return ModificationResult(plan=plan, outcomes=tuple(outcomes), warnings=tuple(warnings))

    def needs_adaptation(self, progress: ProgressAnalysis, recovery: RecoveryMetrics | None = None) -> bool:
        """True when any load, recovery, adherence or trend signal is out of range."""
        ratio = progress_analysis.completed_load(progress.completed).ratio
        if ratio > SAFE_ACWR_UPPER or ratio < SAFE_ACWR_LOWER:
            return True
        if recovery is not None:
            if readiness.overall_recovery_score(recovery) < MIN_RECOVERY_SCORE:
                return True
            if recovery.injured or recovery.ill:
                return True
        if progress.adherence_rate < MIN_ADHERENCE_RATE:
            return True
        return progress.performance_trend == PerformanceTrend.DECLINING

    def assess_recovery_status(
        self,
        completed: Sequence[CompletedWorkout],
        now: date,
        recovery: RecoveryMetrics | None = None,
    ) -> RecoveryAssessment:
        return readiness.assess_recovery_status(completed, now, recovery)

    def detect_fatigue_and_adjust(
        self,
        completed: Sequence[CompletedWorkout],
        upcoming: Sequence[PlannedWorkout],
        now: date,
    ) -> FatigueAssessment:
        return fatigue.detect_fatigue_and_adjust(completed, upcoming, now)

    def assess_overreaching_risk(
        self,
        completed: Sequence[CompletedWorkout],
        planned: Sequence[PlannedWorkout],
        now: date,
    ) -> OverreachingRisk:
        return risk.assess_overreaching_risk(completed, planned, now)
