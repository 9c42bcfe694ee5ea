"""Fatigue detection and forward-looking workout scaling.

Three detectors feed the fatigue level:
    acute: effort, completion and notes over the last three days (0-100)
    chronic: longest streak of hard (RPE >= 8) under-completed (< 85%) sessions
    overload: longest run of calendar days above 150 estimated TSS

Reference:
    Meeusen et al. (2013). Prevention, diagnosis and treatment of the
    overtraining syndrome. Med Sci Sports Exerc 45(1):186-205.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import replace
from datetime import date, timedelta

from training_planner.adaptation.progress import DEFAULT_EFFORT, completed_load
from training_planner.math.zones import zone_type_for_intensity
from training_planner.models.enums import (
    ACUTE_FATIGUE_WINDOW_DAYS,
    CHRONIC_FATIGUE_COMPLETION,
    CHRONIC_FATIGUE_DAYS,
    CHRONIC_FATIGUE_EFFORT,
    CHRONIC_FATIGUE_EMERGING_DAYS,
    HIGH_RISK_ACWR,
    LOAD_OVERLOAD_DETECTION_DAYS,
    LOAD_OVERLOAD_SEVERE_DAYS,
    OVERREACHING_DAILY_TSS,
    SAFE_ACWR_UPPER,
    ChronicFatiguePattern,
    FatigueLevel,
    WorkoutType,
)
from training_planner.models.feedback import (
    ChronicFatigue,
    CompletedWorkout,
    FatigueAssessment,
    LoadOverload,
)
from training_planner.models.workout import PlannedWorkout
from training_planner.workout_catalog.templates import segment_tss

logger = logging.getLogger(__name__)

# (volume factor, intensity factor) applied to upcoming work
FATIGUE_FACTORS: dict[FatigueLevel, tuple[float, float]] = {
    FatigueLevel.LOW: (1.0, 1.0),
    FatigueLevel.MODERATE: (0.9, 0.95),
    FatigueLevel.HIGH: (0.7, 0.85),
    FatigueLevel.SEVERE: (0.5, 0.7),
}

FATIGUE_WARNINGS: dict[FatigueLevel, str] = {
    FatigueLevel.SEVERE: "Severe fatigue detected - immediate rest recommended",
    FatigueLevel.HIGH: "High fatigue levels - reduce training intensity",
    FatigueLevel.MODERATE: "Moderate fatigue - monitor closely",
}

_FATIGUE_WORDS = ("tired", "fatigue")


def acute_fatigue(completed: Sequence[CompletedWorkout], now: date) -> int:
    """Fatigue points from sessions in the last three days, capped at 100.

    +10 for completing under 90%, +2 x RPE for RPE >= 8, +15 when the notes
    mention being tired or fatigued.
    """
    window_start = now - timedelta(days=ACUTE_FATIGUE_WINDOW_DAYS)
    score = 0
    for workout in completed:
        if not window_start < workout.date <= now:
            continue
        if workout.completion_rate < 0.9:
            score += 10
        if workout.perceived_effort is not None and workout.perceived_effort >= CHRONIC_FATIGUE_EFFORT:
            score += workout.perceived_effort * 2
        notes = workout.notes.lower()
        if any(word in notes for word in _FATIGUE_WORDS):
            score += 15
    return min(100, score)


def detect_chronic_fatigue(completed: Sequence[CompletedWorkout]) -> ChronicFatigue:
    """Longest streak of consecutive hard, under-completed workouts."""
    streak = longest = 0
    for workout in sorted(completed, key=lambda w: w.date):
        struggling = (
            workout.perceived_effort is not None
            and workout.perceived_effort >= CHRONIC_FATIGUE_EFFORT
            and workout.completion_rate < CHRONIC_FATIGUE_COMPLETION
        )
        streak = streak + 1 if struggling else 0
        longest = max(longest, streak)

    if longest >= CHRONIC_FATIGUE_DAYS:
        pattern = ChronicFatiguePattern.PERSISTENT_UNDERPERFORMANCE
    elif longest >= CHRONIC_FATIGUE_EMERGING_DAYS:
        pattern = ChronicFatiguePattern.EMERGING_FATIGUE
    else:
        pattern = ChronicFatiguePattern.NONE
    return ChronicFatigue(
        detected=longest >= CHRONIC_FATIGUE_EMERGING_DAYS, days=longest, pattern=pattern
    )


def estimate_session_tss(workout: CompletedWorkout) -> int:
    """Duration x (RPE / 10)^2 x 100 / 60; unrated sessions count as RPE 5."""
    if not workout.actual_duration_min:
        return 0
    effort = (workout.perceived_effort or DEFAULT_EFFORT) / 10
    return round(workout.actual_duration_min * effort**2 * 100 / 60)


def detect_load_overload(completed: Sequence[CompletedWorkout]) -> LoadOverload:
    """Longest run of consecutive calendar days above the daily TSS ceiling."""
    daily: dict[date, int] = defaultdict(int)
    for workout in completed:
        daily[workout.date] += estimate_session_tss(workout)

    streak = longest = 0
    previous: date | None = None
    for day in sorted(daily):
        if daily[day] > OVERREACHING_DAILY_TSS:
            contiguous = previous is not None and day - previous == timedelta(days=1)
            streak = streak + 1 if contiguous else 1
            longest = max(longest, streak)
        else:
            streak = 0
        previous = day

    return LoadOverload(
        detected=longest >= LOAD_OVERLOAD_DETECTION_DAYS,
        consecutive_days=longest,
        max_daily_tss=float(max(daily.values(), default=0)),
    )


def fatigue_level(
    acute: int, chronic: ChronicFatigue, overload: LoadOverload, ratio: float
) -> FatigueLevel:
    if chronic.days >= CHRONIC_FATIGUE_DAYS or overload.consecutive_days >= LOAD_OVERLOAD_SEVERE_DAYS:
        return FatigueLevel.SEVERE
    if acute > 70 or ratio > HIGH_RISK_ACWR:
        return FatigueLevel.HIGH
    if acute > 50 or ratio > SAFE_ACWR_UPPER:
        return FatigueLevel.MODERATE
    return FatigueLevel.LOW


def scale_for_fatigue(workout: PlannedWorkout, level: FatigueLevel) -> PlannedWorkout:
    """Shorten and soften one workout for the given fatigue level."""
    volume, intensity = FATIGUE_FACTORS[level]
    segments = []
    for segment in workout.workout.segments:
        scaled = round(segment.intensity * intensity)
        segments.append(
            replace(
                segment,
                duration_min=round(segment.duration_min * volume),
                intensity=scaled,
                zone=zone_type_for_intensity(scaled),
            )
        )
    tss = sum(segment_tss(s.duration_min, s.intensity) for s in segments)
    return replace(
        workout,
        name=f"{workout.name} (Adjusted for {level.name.lower()} fatigue)",
        workout=replace(workout.workout, segments=tuple(segments), estimated_tss=tss),
        target=replace(
            workout.target,
            duration_min=round(workout.target.duration_min * volume),
            distance_km=round(workout.target.distance_km * volume, 1),
            intensity=round(workout.target.intensity * intensity),
            tss=tss,
            load=tss,
        ),
    )


def detect_fatigue_and_adjust(
    completed: Sequence[CompletedWorkout],
    upcoming: Sequence[PlannedWorkout],
    now: date,
) -> FatigueAssessment:
    """Grade fatigue and scale upcoming non-recovery workouts to match.

    Only workouts dated after ``now`` change; at low fatigue nothing does.

    Args:
        completed: Completed-workout reports.
        upcoming: Planned workouts to adjust.
        now: Reference date.

    Returns:
        FatigueAssessment with the adjusted workouts in input order.
    """
    acute = acute_fatigue(completed, now)
    chronic = detect_chronic_fatigue(completed)
    overload = detect_load_overload(completed)
    ratio = completed_load(completed).ratio
    level = fatigue_level(acute, chronic, overload, ratio)

    if level == FatigueLevel.LOW:
        adjusted = tuple(upcoming)
    else:
        adjusted = tuple(
            scale_for_fatigue(w, level) if w.date > now and w.type != WorkoutType.RECOVERY else w
            for w in upcoming
        )
        logger.info(
            "Fatigue %s (acute=%d, chronic streak=%d, overload days=%d, ratio=%.2f)",
            level.name.lower(),
            acute,
            chronic.days,
            overload.consecutive_days,
            ratio,
        )

    warning = FATIGUE_WARNINGS.get(level)
    return FatigueAssessment(
        level=level,
        acute_fatigue=acute,
        chronic=chronic,
        overload=overload,
        adjusted_workouts=adjusted,
        warnings=(warning,) if warning else (),
    )
