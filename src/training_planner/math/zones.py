"""Seven-zone intensity model and VDOT-derived training paces.

Catalog ranges are percentages: heart rate as %HRmax and pace as % of
threshold pace. Personalized zones convert them to BPM and min/km.

Reference: Daniels (2014), Daniels' Running Formula 3rd ed.
"""

from __future__ import annotations

from dataclasses import replace

from training_planner.models.enums import TRAINING_PACE_FRACTIONS, ZoneType
from training_planner.models.workout import TrainingZone

TRAINING_ZONES: dict[ZoneType, TrainingZone] = {
    ZoneType.RECOVERY: TrainingZone(
        zone=ZoneType.RECOVERY,
        name="Recovery",
        rpe=1,
        hr_range=(50, 60),
        pace_range=(0, 75),
        description="Very easy effort, conversational",
        purpose="Active recovery, promote blood flow",
    ),
    ZoneType.EASY: TrainingZone(
        zone=ZoneType.EASY,
        name="Easy",
        rpe=2,
        hr_range=(60, 70),
        pace_range=(75, 85),
        description="Comfortable, conversational pace",
        purpose="Build aerobic base, improve fat oxidation",
    ),
    ZoneType.STEADY: TrainingZone(
        zone=ZoneType.STEADY,
        name="Steady",
        rpe=3,
        hr_range=(70, 80),
        pace_range=(85, 90),
        description="Moderate effort, slightly harder breathing",
        purpose="Aerobic development, mitochondrial density",
    ),
    ZoneType.TEMPO: TrainingZone(
        zone=ZoneType.TEMPO,
        name="Tempo",
        rpe=4,
        hr_range=(80, 87),
        pace_range=(90, 95),
        description="Comfortably hard, controlled discomfort",
        purpose="Improve lactate clearance, mental toughness",
    ),
    ZoneType.THRESHOLD: TrainingZone(
        zone=ZoneType.THRESHOLD,
        name="Threshold",
        rpe=5,
        hr_range=(87, 92),
        pace_range=(95, 100),
        description="Hard effort, sustainable for ~1 hour",
        purpose="Increase lactate threshold, improve efficiency",
    ),
    ZoneType.VO2_MAX: TrainingZone(
        zone=ZoneType.VO2_MAX,
        name="VO2 Max",
        rpe=6,
        hr_range=(92, 97),
        pace_range=(105, 115),
        description="Very hard, heavy breathing",
        purpose="Maximize oxygen uptake, increase power",
    ),
    ZoneType.NEUROMUSCULAR: TrainingZone(
        zone=ZoneType.NEUROMUSCULAR,
        name="Neuromuscular",
        rpe=7,
        hr_range=(97, 100),
        pace_range=(115, 130),
        description="Maximum effort, short duration",
        purpose="Improve speed, power, and running economy",
    ),
}

# Upper (exclusive) intensity bound of each zone; anything above is neuromuscular
_INTENSITY_UPPER_BOUNDS = (
    (60, ZoneType.RECOVERY),
    (70, ZoneType.EASY),
    (80, ZoneType.STEADY),
    (87, ZoneType.TEMPO),
    (92, ZoneType.THRESHOLD),
    (97, ZoneType.VO2_MAX),
)


def zone_type_for_intensity(intensity: float) -> ZoneType:
    for upper, zone in _INTENSITY_UPPER_BOUNDS:
        if intensity < upper:
            return zone
    return ZoneType.NEUROMUSCULAR


def get_zone_by_intensity(intensity: float) -> TrainingZone:
    """Catalog zone for an intensity on the 0-100 scale."""
    return TRAINING_ZONES[zone_type_for_intensity(intensity)]


def calculate_personalized_zones(
    max_hr: int,
    threshold_pace: float,
    vdot: float | None = None,
) -> dict[ZoneType, TrainingZone]:
    """Scale the catalog zones to an athlete.

    Args:
        max_hr: Maximum heart rate in BPM.
        threshold_pace: Threshold pace in min/km.
        vdot: Accepted for callers that track it; zones depend only on the
            two anchors above.

    Returns:
        Zones keyed by ZoneType with HR in BPM and pace in min/km.
    """
    zones: dict[ZoneType, TrainingZone] = {}
    for zone_type, zone in TRAINING_ZONES.items():
        low_hr, high_hr = zone.hr_range
        low_pace, high_pace = zone.pace_range
        zones[zone_type] = replace(
            zone,
            hr_range=(round(low_hr / 100 * max_hr), round(high_hr / 100 * max_hr)),
            pace_range=(threshold_pace * low_pace / 100, threshold_pace * high_pace / 100),
        )
    return zones


def calculate_training_paces(vdot: float) -> dict[str, float]:
    """Training paces (min/km) keyed easy/marathon/threshold/interval/repetition.

    Uses a linear approximation of the vVO2max pace,
    5.5 - 0.05·(VDOT - 30), divided by each pace's fraction of VO2max.
    """
    vo2max_pace = 5.5 - (vdot - 30) * 0.05
    return {name: vo2max_pace / fraction for name, fraction in TRAINING_PACE_FRACTIONS.items()}
