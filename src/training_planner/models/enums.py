"""Enumerations and training constants for the training planner.

Thresholds and coefficients cite their published source where one exists.
"""

from enum import IntEnum, auto


class TrainingPhase(IntEnum):
    """Macrocycle phases in plan order: base -> build -> peak -> taper (-> recovery)."""

    BASE = auto()
    BUILD = auto()
    PEAK = auto()
    TAPER = auto()
    RECOVERY = auto()


class WorkoutType(IntEnum):
    """Workout types, roughly ordered by physiological demand."""

    RECOVERY = auto()
    EASY = auto()
    STEADY = auto()
    TEMPO = auto()
    THRESHOLD = auto()
    VO2MAX = auto()
    SPEED = auto()
    HILL_REPEATS = auto()
    FARTLEK = auto()
    PROGRESSION = auto()
    LONG_RUN = auto()
    RACE_PACE = auto()
    TIME_TRIAL = auto()
    CROSS_TRAINING = auto()
    STRENGTH = auto()


class ZoneType(IntEnum):
    """Seven-zone intensity model, from active recovery to maximal sprinting."""

    RECOVERY = 1
    EASY = 2
    STEADY = 3
    TEMPO = 4
    THRESHOLD = 5
    VO2_MAX = 6
    NEUROMUSCULAR = 7


class Methodology(IntEnum):
    """Coaching systems the plan can be customized for."""

    DANIELS = auto()
    LYDIARD = auto()
    PFITZINGER = auto()
    CUSTOM = auto()


class RacePriority(IntEnum):
    """Race priority classification for target races.

    A = goal race, B = supporting race, C = tune-up race.
    """

    A = auto()
    B = auto()
    C = auto()


class LoadTrend(IntEnum):
    """Direction of the acute training load over the last week of runs."""

    INCREASING = auto()
    STABLE = auto()
    DECREASING = auto()


class PerformanceTrend(IntEnum):
    """Effort-normalized pace trend across completed workouts."""

    IMPROVING = auto()
    STABLE = auto()
    DECLINING = auto()


class Adherence(IntEnum):
    """How much of a planned workout was actually done."""

    NONE = auto()
    PARTIAL = auto()
    COMPLETE = auto()


class Priority(IntEnum):
    """Modification priority. Lower value = applied first."""

    HIGH = 0
    MEDIUM = 1
    LOW = 2


class ModificationType(IntEnum):
    """Kinds of plan mutation the adaptation engine can request."""

    INJURY_PROTOCOL = auto()
    REDUCE_VOLUME = auto()
    REDUCE_INTENSITY = auto()
    ADD_RECOVERY = auto()
    SUBSTITUTE_WORKOUT = auto()
    DELAY_PROGRESSION = auto()


class ModificationStatus(IntEnum):
    """Whether an applied modification changed the plan."""

    APPLIED = auto()
    NO_OP = auto()


class RecoveryStatus(IntEnum):
    """Recovery classification from the overall recovery score."""

    RECOVERED = auto()
    ADEQUATE = auto()
    FATIGUED = auto()
    OVERREACHED = auto()


class FatigueLevel(IntEnum):
    """Forward-looking fatigue classification used to scale upcoming work."""

    LOW = auto()
    MODERATE = auto()
    HIGH = auto()
    SEVERE = auto()


class ChronicFatiguePattern(IntEnum):
    """Pattern label for a streak of hard, under-completed workouts."""

    NONE = auto()
    EMERGING_FATIGUE = auto()
    PERSISTENT_UNDERPERFORMANCE = auto()


class RiskLevel(IntEnum):
    """Overreaching risk classification."""

    LOW = auto()
    MODERATE = auto()
    HIGH = auto()
    CRITICAL = auto()


class ViolationType(IntEnum):
    """Ways a plan can miss its intensity-distribution target."""

    INSUFFICIENT_EASY = auto()
    EXCESSIVE_HARD = auto()
    INSUFFICIENT_HARD = auto()


class ViolationSeverity(IntEnum):
    """Severity of an intensity-distribution violation, by deviation size."""

    LOW = auto()
    MEDIUM = auto()
    HIGH = auto()
    CRITICAL = auto()


class SubstitutionReason(IntEnum):
    """Why a planned workout is being swapped for another type."""

    FATIGUE = auto()
    INJURY = auto()
    ILLNESS = auto()
    TIME_CONSTRAINT = auto()
    WEATHER = auto()


# ---------------------------------------------------------------------------
# VDOT and performance constants
# ---------------------------------------------------------------------------

# Daniels & Gilbert (1979), Oxygen Power: VO2 cost of running velocity (m/min)
VDOT_VO2_INTERCEPT = -4.6
VDOT_VO2_LINEAR = 0.182258
VDOT_VO2_QUADRATIC = 0.000104

# Daniels & Gilbert (1979): fraction of VO2max sustainable for t minutes
VDOT_PCT_MAX_BASE = 0.8
VDOT_PCT_MAX_FAST_COEF = 0.1894393
VDOT_PCT_MAX_FAST_RATE = -0.012778
VDOT_PCT_MAX_SLOW_COEF = 0.2989558
VDOT_PCT_MAX_SLOW_RATE = -0.1932605

VDOT_DEFAULT = 35  # Conservative beginner value when no qualifying run exists
VDOT_MIN_DISTANCE_KM = 3.0
VDOT_RACE_EFFORT = 9  # Near-maximal perceived effort counts as a race
VDOT_TRAINING_EFFORT_MIN = 6  # Easy running says little about VO2max
VDOT_CANDIDATE_RUNS = 3

# Two-point critical speed model: Jones & Vanhatalo (2017), Sports Med 47(Suppl 1)
CRITICAL_SPEED_DEFAULT_KMH = 10.0
CRITICAL_SPEED_MIN_EFFORT = 8
CRITICAL_SPEED_MIN_DISTANCE_KM = 3.0

# Running economy estimate (ml/kg/km) from HR reserve on easy runs
RUNNING_ECONOMY_DEFAULT = 200
ECONOMY_ASSUMED_RESTING_HR = 60
ECONOMY_ASSUMED_MAX_HR = 190
ECONOMY_VO2_AT_MAX_RESERVE = 50
ECONOMY_MAX_EFFORT = 6
ECONOMY_MIN_DURATION_MIN = 20

# Threshold at ~88% VO2max: Daniels (2014), Daniels' Running Formula 3rd ed.
LACTATE_THRESHOLD_VO2_FRACTION = 0.88
VO2_PER_KMH = 3.5  # ml/kg/min of O2 per km/h of running speed

# Training pace divisors of the vVO2max pace: Daniels (2014)
TRAINING_PACE_FRACTIONS = {
    "easy": 0.70,
    "marathon": 0.84,
    "threshold": 0.88,
    "interval": 0.98,
    "repetition": 1.05,
}

# ---------------------------------------------------------------------------
# Training load constants
# ---------------------------------------------------------------------------

# Exponential decay time constants: Banister (1991) fitness-fatigue model
ACUTE_LOAD_TIME_CONSTANT = 7
CHRONIC_LOAD_TIME_CONSTANT = 28

# Trend compares against the acute load this many runs earlier
LOAD_TREND_LOOKBACK_RUNS = 7
LOAD_TREND_BAND = 0.10

# ACWR thresholds: Gabbett (2016), Br J Sports Med 50(5):273-280
ACWR_UNDERTRAINED = 0.8
ACWR_CAUTION_HIGH = 1.3
ACWR_DANGER_THRESHOLD = 1.5

# Injury risk contributions (points)
INJURY_RISK_ACWR_POINTS_LOW = 20
INJURY_RISK_ACWR_POINTS_OPTIMAL = 10
INJURY_RISK_ACWR_POINTS_HIGH = 25
INJURY_RISK_ACWR_POINTS_DANGER = 40
INJURY_RISK_MILEAGE_BANDS = ((20.0, 30), (10.0, 20), (5.0, 10))  # (% increase above, points)
INJURY_RISK_RECOVERY_WEIGHT = 0.3

# Recovery score: Plews et al. (2013) HRV and resting HR as readiness markers
RECOVERY_BASE_SCORE = 70
HARD_EFFORT_LEVEL = 7
HARD_EFFORT_PENALTY = 5
RECOVERY_WINDOW_DAYS = 7
HRV_HIGH = 60
HRV_LOW = 40
RESTING_HR_LOW = 50
RESTING_HR_HIGH = 65
RECOVERY_MARKER_POINTS = 10

# Weekly pattern analysis
LONG_RUN_MIN_KM = 15.0

# ---------------------------------------------------------------------------
# Fitness assessment defaults and overall score weights
# ---------------------------------------------------------------------------
DEFAULT_VDOT = 40
DEFAULT_WEEKLY_MILEAGE_KM = 30.0
DEFAULT_LONGEST_RUN_KM = 10.0
DEFAULT_TRAINING_AGE_YEARS = 1.0
DEFAULT_RECOVERY_RATE = 75

OVERALL_SCORE_VDOT_CEILING = 80
OVERALL_SCORE_MILEAGE_CEILING = 100
OVERALL_SCORE_AGE_CEILING = 10
OVERALL_SCORE_WEIGHTS = {"vdot": 0.40, "volume": 0.25, "experience": 0.20, "recovery": 0.15}

# ---------------------------------------------------------------------------
# Periodization constants
# ---------------------------------------------------------------------------

# Damsted et al. (2019), J Orthop Sports Phys Ther: weekly volume progression
PROGRESSION_RATE_BEGINNER = 0.05
PROGRESSION_RATE_INTERMEDIATE = 0.08
PROGRESSION_RATE_ADVANCED = 0.10

# Pfitzinger & Douglas, Advanced Marathoning: 3 load weeks + 1 recovery week
RECOVERY_WEEK_INTERVAL = 4
RECOVERY_WEEK_VOLUME_FRACTION = 0.7

# Taper volume decays 20% per week: Bosquet et al. (2007) 41-60% total reduction
TAPER_WEEKLY_REDUCTION = 0.2
TAPER_MIN_FACTOR = 0.4
RECOVERY_PHASE_FACTOR = 0.6

DEFAULT_PLAN_WEEKS = 16
DEFAULT_AVAILABLE_DAYS = (0, 2, 4, 6)  # Sunday = 0

# Distance estimate anchors: 5:00/km at 88% intensity
REFERENCE_THRESHOLD_PACE = 5.0
REFERENCE_THRESHOLD_INTENSITY = 88.0

# ---------------------------------------------------------------------------
# Intensity distribution constants
# ---------------------------------------------------------------------------

# Seiler (2010): three-zone model; segment intensity bands
EASY_INTENSITY_MAX = 75
MODERATE_INTENSITY_MAX = 85

DISTRIBUTION_TOLERANCE_PCT = 5
SEVERITY_BANDS = ((5, ViolationSeverity.LOW), (10, ViolationSeverity.MEDIUM), (15, ViolationSeverity.HIGH))

CUSTOMIZED_INTENSITY_MIN = 40
CUSTOMIZED_INTENSITY_MAX = 100

# Corrections applied by the convergence loop
EASY_CONVERSION_INTENSITY = 70
HARD_REDUCTION_INTENSITY = 80
HARD_REDUCTION_INTENSITY_CRITICAL = 70
QUALITY_SEGMENT_INTENSITY = 88
QUALITY_MIN_DURATION_MIN = 45
QUALITY_MAX_PER_WEEK = 2

# ---------------------------------------------------------------------------
# Adaptation constants
# ---------------------------------------------------------------------------
SAFE_ACWR_LOWER = 0.8
SAFE_ACWR_UPPER = 1.3
HIGH_RISK_ACWR = 1.5
MIN_RECOVERY_SCORE = 60
OVERREACHING_DAILY_TSS = 150
CHRONIC_FATIGUE_DAYS = 5
CHRONIC_FATIGUE_EMERGING_DAYS = 3
CHRONIC_FATIGUE_EFFORT = 8
CHRONIC_FATIGUE_COMPLETION = 0.85
LOAD_OVERLOAD_DETECTION_DAYS = 2
LOAD_OVERLOAD_SEVERE_DAYS = 3
ACUTE_FATIGUE_WINDOW_DAYS = 3
MIN_ADHERENCE_RATE = 0.7
PERFORMANCE_TREND_MIN_WORKOUTS = 5
PERFORMANCE_TREND_BAND_PCT = 2.0
ADAPTATION_THRESHOLD_PACE = 5.0  # min/km used for completed-work TSS

INJURY_FREE_WINDOW_DAYS = 7
PARTIAL_PROTOCOL_RECOVERY_RUNS = 7
RECOVERY_CONVERSION_MIN_INTENSITY = 75
INTENSITY_REDUCTION_MIN_INTENSITY = 80
RECOVERY_RUN_DURATION_MIN = 30
RECOVERY_RUN_INTENSITY = 50
