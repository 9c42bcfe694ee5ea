"""Custom exception hierarchy for the training planner."""

from __future__ import annotations


class TrainingPlannerError(Exception):
    """Base exception for all training_planner errors."""


class ConfigurationError(TrainingPlannerError):
    """A plan configuration cannot produce a plan.

    Raised for an unknown methodology key, an empty or out-of-range set of
    available training days, or a non-positive plan duration.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
