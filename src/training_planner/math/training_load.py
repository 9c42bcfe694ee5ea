"""Training load: per-run TSS, acute/chronic EWMA, injury risk, recovery.

References:
    - Banister (1991): fitness-fatigue model, 7/28 day time constants
    - Gabbett (2016), Br J Sports Med 50(5):273-280: ACWR risk bands
    - Plews et al. (2013): HRV and resting HR as readiness markers
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date, timedelta

import numpy as np
import pandas as pd

from training_planner.models.enums import (
    ACUTE_LOAD_TIME_CONSTANT,
    ACWR_CAUTION_HIGH,
    ACWR_DANGER_THRESHOLD,
    ACWR_UNDERTRAINED,
    CHRONIC_LOAD_TIME_CONSTANT,
    HARD_EFFORT_LEVEL,
    HARD_EFFORT_PENALTY,
    HRV_HIGH,
    HRV_LOW,
    INJURY_RISK_ACWR_POINTS_DANGER,
    INJURY_RISK_ACWR_POINTS_HIGH,
    INJURY_RISK_ACWR_POINTS_LOW,
    INJURY_RISK_ACWR_POINTS_OPTIMAL,
    INJURY_RISK_MILEAGE_BANDS,
    INJURY_RISK_RECOVERY_WEIGHT,
    LOAD_TREND_BAND,
    LOAD_TREND_LOOKBACK_RUNS,
    RECOVERY_BASE_SCORE,
    RECOVERY_MARKER_POINTS,
    RECOVERY_WINDOW_DAYS,
    RESTING_HR_HIGH,
    RESTING_HR_LOW,
    LoadTrend,
)
from training_planner.models.fitness import LoadPoint, TrainingLoadState
from training_planner.models.run import Run


def calculate_tss(run: Run, threshold_pace: float) -> int:
    """Training Stress Score of a single run.

    TSS = duration × (threshold_pace / pace)² × 100 / 60

    Args:
        run: The run; needs a recorded average pace.
        threshold_pace: Athlete's threshold pace in min/km.

    Returns:
        Rounded TSS, or 0 when the run has no pace.
    """
    if not run.avg_pace_min_per_km:
        return 0
    intensity_factor = threshold_pace / run.avg_pace_min_per_km
    return round(run.duration_min * intensity_factor**2 * 100 / 60)


def exponential_load(tss: Sequence[float], time_constant: int) -> np.ndarray:
    """Exponentially decayed load after each value, starting from zero.

    load_i = load_(i-1)·e^(-1/τ) + tss_i·(1 - e^(-1/τ))
    """
    decay = math.exp(-1 / time_constant)
    series = pd.Series([0.0, *tss], dtype=np.float64)
    ewm = series.ewm(alpha=1 - decay, adjust=False).mean()
    return ewm.to_numpy()[1:]


def load_recommendation(ratio: float) -> str:
    """Guidance text for an acute:chronic ratio band."""
    if ratio < ACWR_UNDERTRAINED:
        return "Training load is low. Consider increasing volume gradually."
    if ratio > ACWR_DANGER_THRESHOLD:
        return "Training load is very high. Risk of overtraining. Consider recovery."
    if ratio > ACWR_CAUTION_HIGH:
        return "Training load is high. Monitor fatigue carefully."
    return "Training load is in optimal range for adaptation."


def calculate_training_load(runs: Sequence[Run], threshold_pace: float) -> TrainingLoadState:
    """Acute and chronic training load over a run history.

    Runs are processed in chronological order regardless of input order.

    Args:
        runs: Run history.
        threshold_pace: Threshold pace in min/km used for TSS.

    Returns:
        TrainingLoadState with rounded acute/chronic, ratio rounded to two
        decimals (1.0 when chronic load is zero), trend and per-run history.
    """
    ordered = sorted(runs, key=lambda r: r.date)
    tss = [calculate_tss(r, threshold_pace) for r in ordered]
    acute = exponential_load(tss, ACUTE_LOAD_TIME_CONSTANT)
    chronic = exponential_load(tss, CHRONIC_LOAD_TIME_CONSTANT)

    history = tuple(
        LoadPoint(
            date=run.date,
            tss=float(t),
            acute=float(a),
            chronic=float(c),
            ratio=float(a / c) if c > 0 else 1.0,
        )
        for run, t, a, c in zip(ordered, tss, acute, chronic)
    )
    if not history:
        return TrainingLoadState(recommendation=load_recommendation(1.0))

    current = history[-1]
    trend = LoadTrend.STABLE
    if len(history) > LOAD_TREND_LOOKBACK_RUNS:
        week_ago = history[-(LOAD_TREND_LOOKBACK_RUNS + 1)].acute
        if current.acute > week_ago * (1 + LOAD_TREND_BAND):
            trend = LoadTrend.INCREASING
        elif current.acute < week_ago * (1 - LOAD_TREND_BAND):
            trend = LoadTrend.DECREASING

    return TrainingLoadState(
        acute=round(current.acute),
        chronic=round(current.chronic),
        ratio=round(current.ratio, 2),
        trend=trend,
        recommendation=load_recommendation(current.ratio),
        history=history,
    )


def calculate_injury_risk(
    training_load: TrainingLoadState,
    weekly_mileage_increase_pct: float,
    recovery_score: float,
) -> int:
    """Additive injury risk score clipped to 0-100.

    Points: ACWR band (10 optimal / 20 low / 25 high / 40 very high),
    week-over-average mileage increase (10 / 20 / 30 above 5 / 10 / 20 %),
    and 0.3 × (100 - recovery score).
    """
    ratio = training_load.ratio
    if ratio < ACWR_UNDERTRAINED:
        risk = INJURY_RISK_ACWR_POINTS_LOW
    elif ratio > ACWR_DANGER_THRESHOLD:
        risk = INJURY_RISK_ACWR_POINTS_DANGER
    elif ratio > ACWR_CAUTION_HIGH:
        risk = INJURY_RISK_ACWR_POINTS_HIGH
    else:
        risk = INJURY_RISK_ACWR_POINTS_OPTIMAL

    for threshold, points in INJURY_RISK_MILEAGE_BANDS:
        if weekly_mileage_increase_pct > threshold:
            risk += points
            break

    risk += round((100 - recovery_score) * INJURY_RISK_RECOVERY_WEIGHT)
    return max(0, min(100, risk))


def calculate_recovery_score(
    runs: Sequence[Run],
    now: date,
    resting_hr: int | None = None,
    hrv: float | None = None,
) -> int:
    """Recovery score from recent hard running and readiness markers.

    Base 70, minus 5 per hard (effort >= 7) run in the trailing 7 days,
    ±10 for HRV above 60 / below 40, ±10 for resting HR below 50 / above 65.

    Args:
        runs: Run history.
        now: Reference date for the trailing window.
        resting_hr: Morning resting heart rate, if known.
        hrv: Heart-rate variability (rMSSD ms), if known.

    Returns:
        Score clamped to 0-100.
    """
    window_start = now - timedelta(days=RECOVERY_WINDOW_DAYS)
    hard_runs = sum(
        1 for r in runs
        if r.date > window_start and r.effort_level is not None and r.effort_level >= HARD_EFFORT_LEVEL
    )
    score = RECOVERY_BASE_SCORE - hard_runs * HARD_EFFORT_PENALTY

    if hrv is not None:
        if hrv > HRV_HIGH:
            score += RECOVERY_MARKER_POINTS
        elif hrv < HRV_LOW:
            score -= RECOVERY_MARKER_POINTS

    if resting_hr is not None:
        if resting_hr < RESTING_HR_LOW:
            score += RECOVERY_MARKER_POINTS
        elif resting_hr > RESTING_HR_HIGH:
            score -= RECOVERY_MARKER_POINTS

    return max(0, min(100, score))
