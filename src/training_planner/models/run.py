"""Historical run record, the raw input of the fitness model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Run:
    """A single completed run as imported from a watch or training log.

    Attributes:
        date: Calendar date of the run.
        distance_km: Distance covered in kilometres.
        duration_min: Moving time in minutes.
        avg_pace_min_per_km: Average pace, if recorded.
        avg_hr: Average heart rate in BPM, if recorded.
        elevation_m: Total elevation gain in metres.
        effort_level: Perceived effort on a 1-10 scale, if recorded.
        is_race: True for races and official time trials.
        notes: Free-text notes.
    """

    date: date
    distance_km: float
    duration_min: float
    avg_pace_min_per_km: float | None = None
    avg_hr: int | None = None
    elevation_m: float = 0.0
    effort_level: int | None = None
    is_race: bool = False
    notes: str = ""
