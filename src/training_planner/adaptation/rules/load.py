"""Rules on the acute:chronic workload ratio of completed training.

Reference:
    Gabbett (2016). The training-injury prevention paradox: should athletes
    be training smarter and harder? Br J Sports Med 50(5):273-280.

Thresholds:
    ratio > 1.5       -> reduce volume 30% (high)
    1.3 < ratio <= 1.5 -> reduce intensity 20% (medium)
"""

from __future__ import annotations

from training_planner.adaptation.rules.base import AdaptationContext, AdaptationRule
from training_planner.models.enums import HIGH_RISK_ACWR, SAFE_ACWR_UPPER, ModificationType, Priority
from training_planner.models.feedback import Modification


class HighLoadRatioRule(AdaptationRule):
    """Cuts volume when the workload ratio is in the injury danger zone."""

    rule_id = "load_ratio_high"
    version = "1.0.0"
    priority = Priority.HIGH
    required_data = ["load"]

    def evaluate(self, context: AdaptationContext) -> Modification | None:
        ratio = context.load.ratio
        if ratio <= HIGH_RISK_ACWR:
            return None
        return Modification(
            type=ModificationType.REDUCE_VOLUME,
            reason=f"Acute:Chronic workload ratio ({ratio:.2f}) exceeds safe threshold",
            priority=self.priority,
            volume_reduction_pct=30,
        )


class ElevatedLoadRatioRule(AdaptationRule):
    """Softens hard sessions when the workload ratio is elevated but not dangerous."""

    rule_id = "load_ratio_elevated"
    version = "1.0.0"
    priority = Priority.MEDIUM
    required_data = ["load"]

    def evaluate(self, context: AdaptationContext) -> Modification | None:
        ratio = context.load.ratio
        if not SAFE_ACWR_UPPER < ratio <= HIGH_RISK_ACWR:
            return None
        return Modification(
            type=ModificationType.REDUCE_INTENSITY,
            reason=f"Elevated training load (A:C ratio {ratio:.2f})",
            priority=self.priority,
            intensity_reduction_pct=20,
        )
