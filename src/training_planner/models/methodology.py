"""Result records of intensity-distribution validation and enforcement."""

from __future__ import annotations

from dataclasses import dataclass, field

from training_planner.models.enums import TrainingPhase, ViolationSeverity, ViolationType
from training_planner.models.plan import IntensityDistribution, TrainingPlan


@dataclass(frozen=True)
class DistributionViolation:
    """One intensity band outside its target by more than the tolerance.

    ``block_id`` and ``phase`` are None for the whole-plan check.
    """

    type: ViolationType
    severity: ViolationSeverity
    actual: float
    target: float
    deviation: float
    phase: TrainingPhase | None = None
    block_id: str | None = None


@dataclass(frozen=True)
class EnforcementResult:
    """Outcome of the intensity-distribution convergence loop.

    Attributes:
        plan: The corrected plan (the input object when already compliant).
        iterations: Correction passes attempted.
        violation_history: Violation count before the first pass and after
            every accepted pass; strictly decreasing.
        remaining_violations: Violations left in ``plan``.
        converged: True when no violations remain.
    """

    plan: TrainingPlan
    iterations: int
    violation_history: tuple[int, ...]
    remaining_violations: tuple[DistributionViolation, ...] = field(default_factory=tuple)
    converged: bool = True


@dataclass(frozen=True)
class IntensityReport:
    """Human-facing summary of how a plan meets its distribution targets."""

    overall: IntensityDistribution
    target: IntensityDistribution
    phases: tuple[tuple[str, IntensityDistribution], ...]
    violations: tuple[DistributionViolation, ...]
    compliance_score: int
    recommendations: tuple[str, ...]
