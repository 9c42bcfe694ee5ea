"""Data models for the training planner."""

from training_planner.models.enums import (
    Methodology,
    Priority,
    RacePriority,
    TrainingPhase,
    WorkoutType,
    ZoneType,
)
from training_planner.models.feedback import (
    CompletedWorkout,
    Modification,
    ModificationResult,
    ProgressAnalysis,
    RecoveryMetrics,
)
from training_planner.models.fitness import FitnessAssessment, FitnessMetrics, TrainingLoadState
from training_planner.models.methodology import DistributionViolation, EnforcementResult
from training_planner.models.plan import (
    IntensityDistribution,
    Microcycle,
    PlanSummary,
    TargetRace,
    TrainingBlock,
    TrainingPlan,
    TrainingPlanConfig,
    TrainingPreferences,
)
from training_planner.models.run import Run
from training_planner.models.workout import (
    PlannedWorkout,
    TargetMetrics,
    TrainingZone,
    WorkoutSegment,
    WorkoutTemplate,
)

__all__ = [
    "CompletedWorkout",
    "DistributionViolation",
    "EnforcementResult",
    "FitnessAssessment",
    "FitnessMetrics",
    "IntensityDistribution",
    "Methodology",
    "Microcycle",
    "Modification",
    "ModificationResult",
    "PlanSummary",
    "PlannedWorkout",
    "Priority",
    "ProgressAnalysis",
    "RacePriority",
    "RecoveryMetrics",
    "Run",
    "TargetMetrics",
    "TargetRace",
    "TrainingBlock",
    "TrainingLoadState",
    "TrainingPhase",
    "TrainingPlan",
    "TrainingPlanConfig",
    "TrainingPreferences",
    "TrainingZone",
    "WorkoutSegment",
    "WorkoutTemplate",
    "WorkoutType",
    "ZoneType",
]
