"""Recovery assessment from subjective readiness and physiological markers.

Reference:
    Plews et al. (2013). Training adaptation and heart rate variability in
    elite endurance athletes. Int J Sports Physiol Perform 8(6):688-694.
    Hooper & Mackinnon (1995). Monitoring overtraining in athletes.
    Sports Med 20(5):321-327 (sleep, soreness, fatigue self-ratings).
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from training_planner.adaptation.progress import to_runs
from training_planner.math.training_load import calculate_recovery_score
from training_planner.models.enums import RecoveryStatus
from training_planner.models.feedback import CompletedWorkout, RecoveryAssessment, RecoveryMetrics

_BASE_SCORE = 70
_SCALE_MIDPOINT = 5
_POINTS_PER_STEP = 4

# (exclusive lower bound, points) checked in order; HRV below 40 costs 10
_HRV_BONUS = ((60, 10), (50, 5))
_HRV_LOW = 40
# (exclusive upper bound, points) checked in order; resting HR above 70 costs 10
_RESTING_HR_BONUS = ((50, 10), (60, 5))
_RESTING_HR_HIGH = 70
_MARKER_PENALTY = 10

_STATUS_FLOORS = (
    (80, RecoveryStatus.RECOVERED),
    (60, RecoveryStatus.ADEQUATE),
    (40, RecoveryStatus.FATIGUED),
)


def overall_recovery_score(recovery: RecoveryMetrics) -> int:
    """Readiness score 0-100 from a RecoveryMetrics snapshot.

    Starts at 70. Sleep quality and energy add 4 points per step above 5
    (and subtract below); soreness does the reverse. HRV > 60 adds 10,
    > 50 adds 5, < 40 costs 10. Resting HR < 50 adds 10, < 60 adds 5,
    > 70 costs 10. Missing fields contribute nothing.
    """
    score = _BASE_SCORE
    if recovery.sleep_quality is not None:
        score += (recovery.sleep_quality - _SCALE_MIDPOINT) * _POINTS_PER_STEP
    if recovery.muscle_soreness is not None:
        score -= (recovery.muscle_soreness - _SCALE_MIDPOINT) * _POINTS_PER_STEP
    if recovery.energy_level is not None:
        score += (recovery.energy_level - _SCALE_MIDPOINT) * _POINTS_PER_STEP

    if recovery.hrv is not None:
        bonus = next((points for floor, points in _HRV_BONUS if recovery.hrv > floor), 0)
        if not bonus and recovery.hrv < _HRV_LOW:
            bonus = -_MARKER_PENALTY
        score += bonus

    if recovery.resting_hr is not None:
        bonus = next((points for ceiling, points in _RESTING_HR_BONUS if recovery.resting_hr < ceiling), 0)
        if not bonus and recovery.resting_hr > _RESTING_HR_HIGH:
            bonus = -_MARKER_PENALTY
        score += bonus

    return int(max(0, min(100, round(score))))


def recovery_status(score: float) -> RecoveryStatus:
    for floor, status in _STATUS_FLOORS:
        if score >= floor:
            return status
    return RecoveryStatus.OVERREACHED


def recovery_recommendations(status: RecoveryStatus, recovery: RecoveryMetrics | None) -> list[str]:
    recommendations: list[str] = []
    if status == RecoveryStatus.OVERREACHED:
        recommendations += [
            "Take 2-3 days of complete rest",
            "Focus on sleep quality (8+ hours)",
            "Consider massage or light stretching",
        ]
    elif status == RecoveryStatus.FATIGUED:
        recommendations += [
            "Reduce training intensity by 30%",
            "Add an extra recovery day this week",
            "Prioritize hydration and nutrition",
        ]

    if recovery is None:
        return recommendations
    if recovery.sleep_quality is not None and recovery.sleep_quality < 6:
        recommendations.append("Improve sleep hygiene - aim for consistent bedtime")
    if recovery.muscle_soreness is not None and recovery.muscle_soreness > 7:
        recommendations.append("Consider foam rolling and dynamic stretching")
    if recovery.hrv is not None and recovery.hrv < _HRV_LOW:
        recommendations.append("HRV is low - reduce stress and training load")
    return recommendations


def assess_recovery_status(
    completed: Sequence[CompletedWorkout],
    now: date,
    recovery: RecoveryMetrics | None = None,
) -> RecoveryAssessment:
    """Classify recovery and suggest what to do about it.

    With readiness metrics the score comes from ``overall_recovery_score``;
    without them it falls back to the training-history recovery score.
    """
    if recovery is not None:
        score = overall_recovery_score(recovery)
    else:
        score = calculate_recovery_score(to_runs(completed), now)
    status = recovery_status(score)
    return RecoveryAssessment(
        score=score,
        status=status,
        recommendations=tuple(recovery_recommendations(status, recovery)),
    )
