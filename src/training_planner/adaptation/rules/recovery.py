"""Rules on the athlete's readiness report."""

from __future__ import annotations

from training_planner.adaptation.rules.base import AdaptationContext, AdaptationRule
from training_planner.models.enums import MIN_RECOVERY_SCORE, ModificationType, Priority, WorkoutType
from training_planner.models.feedback import Modification


class LowRecoveryRule(AdaptationRule):
    """Adds recovery days when the overall recovery score is below 60."""

    rule_id = "low_recovery"
    version = "1.0.0"
    priority = Priority.HIGH
    required_data = ["recovery_score"]

    def evaluate(self, context: AdaptationContext) -> Modification | None:
        score = context.recovery_score
        if score >= MIN_RECOVERY_SCORE:
            return None
        return Modification(
            type=ModificationType.ADD_RECOVERY,
            reason=f"Low recovery score ({score}), indicating high fatigue",
            priority=self.priority,
            additional_recovery_days=2,
            intensity_reduction_pct=30,
        )


class InjuryIllnessRule(AdaptationRule):
    """Starts the injury protocol: full rest when injured, half when ill."""

    rule_id = "injury_illness"
    version = "1.0.0"
    priority = Priority.HIGH
    required_data = ["recovery"]

    def evaluate(self, context: AdaptationContext) -> Modification | None:
        recovery = context.recovery
        if not (recovery.injured or recovery.ill):
            return None
        return Modification(
            type=ModificationType.INJURY_PROTOCOL,
            reason="Injury reported" if recovery.injured else "Illness reported",
            priority=self.priority,
            substitute_type=WorkoutType.RECOVERY,
            volume_reduction_pct=100 if recovery.injured else 50,
        )
