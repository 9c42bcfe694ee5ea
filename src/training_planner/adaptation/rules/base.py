"""Abstract base class for plan adaptation rules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from training_planner.models.enums import Priority
from training_planner.models.feedback import Modification, ProgressAnalysis, RecoveryMetrics
from training_planner.models.fitness import TrainingLoadState
from training_planner.models.plan import TrainingPlan


@dataclass(frozen=True)
class AdaptationContext:
    """Everything a rule may look at, computed once per suggestion pass.

    Attributes:
        plan: Plan being adapted.
        progress: Result of progress analysis.
        load: Training load of the completed workouts.
        recovery: Latest readiness snapshot, if reported.
        recovery_score: Overall score of ``recovery``, if reported.
    """

    plan: TrainingPlan
    progress: ProgressAnalysis
    load: TrainingLoadState
    recovery: RecoveryMetrics | None = None
    recovery_score: int | None = None


class AdaptationRule(ABC):
    """One signal compared against one threshold.

    Rules are discovered automatically by the AdaptationRuleRegistry and
    evaluated independently, so several may fire for the same context.

    Subclasses must define:
        rule_id: unique identifier (e.g. "load_ratio_high")
        version: semantic version string
        priority: Priority of the Modification the rule emits
        required_data: AdaptationContext field names that must not be None
        evaluate(): the rule's decision logic
    """

    rule_id: str
    version: str
    priority: Priority
    required_data: list[str] = []

    def has_required_data(self, context: AdaptationContext) -> bool:
        return all(getattr(context, name, None) is not None for name in self.required_data)

    @abstractmethod
    def evaluate(self, context: AdaptationContext) -> Modification | None:
        """Return a Modification if the rule fires, else None."""
        ...
