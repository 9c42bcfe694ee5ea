"""Performance estimates from run history: VDOT, critical speed, economy.

All functions are total: sparse or degenerate histories return the
documented defaults instead of raising.

References:
    - Daniels & Gilbert (1979), Oxygen Power: VO2 cost and %VO2max curves
    - Jones & Vanhatalo (2017), Sports Med 47(Suppl 1): critical speed
    - Daniels (2014), Daniels' Running Formula 3rd ed.: threshold at 88% VO2max
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from training_planner.models.enums import (
    CRITICAL_SPEED_DEFAULT_KMH,
    CRITICAL_SPEED_MIN_DISTANCE_KM,
    CRITICAL_SPEED_MIN_EFFORT,
    ECONOMY_ASSUMED_MAX_HR,
    ECONOMY_ASSUMED_RESTING_HR,
    ECONOMY_MAX_EFFORT,
    ECONOMY_MIN_DURATION_MIN,
    ECONOMY_VO2_AT_MAX_RESERVE,
    LACTATE_THRESHOLD_VO2_FRACTION,
    RUNNING_ECONOMY_DEFAULT,
    VDOT_CANDIDATE_RUNS,
    VDOT_DEFAULT,
    VDOT_MIN_DISTANCE_KM,
    VDOT_PCT_MAX_BASE,
    VDOT_PCT_MAX_FAST_COEF,
    VDOT_PCT_MAX_FAST_RATE,
    VDOT_PCT_MAX_SLOW_COEF,
    VDOT_PCT_MAX_SLOW_RATE,
    VDOT_RACE_EFFORT,
    VDOT_TRAINING_EFFORT_MIN,
    VDOT_VO2_INTERCEPT,
    VDOT_VO2_LINEAR,
    VDOT_VO2_QUADRATIC,
    VO2_PER_KMH,
)
from training_planner.models.run import Run


def vdot_from_performance(distance_km: float, duration_min: float) -> float:
    """Daniels' VDOT for a single performance.

    VO2 = -4.6 + 0.182258·v + 0.000104·v²  (v in m/min)
    %max = 0.8 + 0.1894393·e^(-0.012778·t) + 0.2989558·e^(-0.1932605·t)

    Args:
        distance_km: Distance covered.
        duration_min: Time taken in minutes.

    Returns:
        Unrounded VDOT, or 0.0 for a non-positive duration or distance.
    """
    if duration_min <= 0 or distance_km <= 0:
        return 0.0
    velocity = distance_km * 1000 / duration_min
    vo2 = VDOT_VO2_INTERCEPT + VDOT_VO2_LINEAR * velocity + VDOT_VO2_QUADRATIC * velocity**2
    percent_max = (
        VDOT_PCT_MAX_BASE
        + VDOT_PCT_MAX_FAST_COEF * math.exp(VDOT_PCT_MAX_FAST_RATE * duration_min)
        + VDOT_PCT_MAX_SLOW_COEF * math.exp(VDOT_PCT_MAX_SLOW_RATE * duration_min)
    )
    return vo2 / percent_max


def _is_race_effort(run: Run) -> bool:
    return run.is_race or (run.effort_level is not None and run.effort_level >= VDOT_RACE_EFFORT)


def calculate_vdot(runs: Sequence[Run]) -> int:
    """Estimate VDOT from run history.

    Races and near-maximal efforts of at least 3 km are preferred. Without
    them, the three fastest runs of at least 3 km with a recorded pace and
    a moderate or unrecorded effort are used. Easy running never qualifies.

    Args:
        runs: Run history in any order.

    Returns:
        Best VDOT among the candidates, rounded; 35 when nothing qualifies.
    """
    candidates = [r for r in runs if _is_race_effort(r) and r.distance_km >= VDOT_MIN_DISTANCE_KM]
    if not candidates:
        paced = [
            r for r in runs
            if r.distance_km >= VDOT_MIN_DISTANCE_KM
            and r.avg_pace_min_per_km is not None
            and (r.effort_level is None or r.effort_level >= VDOT_TRAINING_EFFORT_MIN)
        ]
        paced.sort(key=lambda r: r.avg_pace_min_per_km)
        candidates = paced[:VDOT_CANDIDATE_RUNS]

    scores = [vdot_from_performance(r.distance_km, r.duration_min) for r in candidates]
    scores = [s for s in scores if s > 0]
    if not scores:
        return VDOT_DEFAULT
    return round(max(scores))


def calculate_critical_speed(runs: Sequence[Run]) -> float:
    """Two-point critical speed from the most widely separated time trials.

    CS = (d2 - d1) / (t2 - t1) using the shortest and longest qualifying
    efforts (>= 3 km, effort >= 8).

    Returns:
        Critical speed in km/h; 10.0 with fewer than two usable trials.
    """
    trials = sorted(
        (
            r for r in runs
            if r.distance_km >= CRITICAL_SPEED_MIN_DISTANCE_KM
            and r.effort_level is not None
            and r.effort_level >= CRITICAL_SPEED_MIN_EFFORT
        ),
        key=lambda r: r.distance_km,
    )
    if len(trials) < 2:
        return CRITICAL_SPEED_DEFAULT_KMH
    short, long = trials[0], trials[-1]
    delta_t_s = (long.duration_min - short.duration_min) * 60
    if delta_t_s <= 0:
        return CRITICAL_SPEED_DEFAULT_KMH
    delta_d_m = (long.distance_km - short.distance_km) * 1000
    return delta_d_m / delta_t_s * 3.6


def estimate_running_economy(runs: Sequence[Run]) -> int:
    """Mean oxygen cost per km (ml/kg/km) over easy, steady-state runs.

    VO2 is approximated from heart-rate reserve assuming resting HR 60 and
    max HR 190. Lower values mean better economy.

    Returns:
        Rounded mean economy; 200 when no run has HR and pace data.
    """
    economy_runs = [
        r for r in runs
        if r.avg_hr
        and r.avg_pace_min_per_km
        and r.duration_min > ECONOMY_MIN_DURATION_MIN
        and r.effort_level is not None
        and r.effort_level <= ECONOMY_MAX_EFFORT
    ]
    if not economy_runs:
        return RUNNING_ECONOMY_DEFAULT

    hr = np.array([r.avg_hr for r in economy_runs], dtype=np.float64)
    pace = np.array([r.avg_pace_min_per_km for r in economy_runs], dtype=np.float64)
    hr_reserve = (hr - ECONOMY_ASSUMED_RESTING_HR) / (ECONOMY_ASSUMED_MAX_HR - ECONOMY_ASSUMED_RESTING_HR)
    vo2 = hr_reserve * ECONOMY_VO2_AT_MAX_RESERVE
    economies = vo2 / (60 / pace)
    return round(float(np.mean(economies)))


def calculate_lactate_threshold(vdot: float) -> float:
    """Lactate threshold speed (km/h), run at ~88% of VO2max."""
    return vdot * LACTATE_THRESHOLD_VO2_FRACTION / VO2_PER_KMH


def threshold_pace_from_vdot(vdot: float) -> float:
    """Threshold pace in min/km derived from the lactate threshold speed."""
    return 60 / calculate_lactate_threshold(vdot)
