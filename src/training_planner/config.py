"""Environment-variable-based configuration for the training planner."""

from __future__ import annotations

import logging
import os

CACHE_MAX_SIZE: int = int(os.environ.get("TRAINING_PLANNER_CACHE_SIZE", "100"))
CACHE_MAX_AGE_S: float = float(os.environ.get("TRAINING_PLANNER_CACHE_TTL", "300"))
SELECTION_SEED: int = int(os.environ.get("TRAINING_PLANNER_SEED", "0"))
LOG_LEVEL: str = os.environ.get("TRAINING_PLANNER_LOG_LEVEL", "INFO")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install a root handler for applications embedding the planner.

    Library modules only create loggers; call this once from the
    application entry point.

    Args:
        level: Logging level name. Defaults to TRAINING_PLANNER_LOG_LEVEL.
    """
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT,
    )
