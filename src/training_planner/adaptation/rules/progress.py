"""Rules on adherence and performance trend."""

from __future__ import annotations

from training_planner.adaptation.rules.base import AdaptationContext, AdaptationRule
from training_planner.models.enums import (
    MIN_ADHERENCE_RATE,
    ModificationType,
    PerformanceTrend,
    Priority,
)
from training_planner.models.feedback import Modification


class LowAdherenceRule(AdaptationRule):
    """Scales the plan back when fewer than 70% of due workouts were done."""

    rule_id = "low_adherence"
    version = "1.0.0"
    priority = Priority.MEDIUM
    required_data = ["progress"]

    def evaluate(self, context: AdaptationContext) -> Modification | None:
        rate = context.progress.adherence_rate
        if rate >= MIN_ADHERENCE_RATE:
            return None
        return Modification(
            type=ModificationType.REDUCE_VOLUME,
            reason=f"Low adherence rate ({rate * 100:.0f}%)",
            priority=self.priority,
            volume_reduction_pct=20,
            delay_days=7,
        )


class DecliningPerformanceRule(AdaptationRule):
    """Holds progression back a week when effort-normalized pace is slipping."""

    rule_id = "declining_performance"
    version = "1.0.0"
    priority = Priority.MEDIUM
    required_data = ["progress"]

    def evaluate(self, context: AdaptationContext) -> Modification | None:
        if context.progress.performance_trend != PerformanceTrend.DECLINING:
            return None
        return Modification(
            type=ModificationType.DELAY_PROGRESSION,
            reason="Performance trend showing decline",
            priority=self.priority,
            delay_days=7,
            intensity_reduction_pct=15,
        )
