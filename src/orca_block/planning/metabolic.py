"""Metabolic load and fatigue scoring for sets and sessions.

The metabolic model follows Frederick's exponential decay formula: every rep
contributes ``intensity * exp(-0.215 * reps_from_failure)``, so reps close to
failure cost the most. Session load is the sum of its set loads and is
classified into five zones; 500-800 is the productive hypertrophy band.

The Hanley fatigue score (``reps * (100 / (100 - intensity))**2``) is a
second, simpler stress index used to size per-exercise rep targets.

All functions here are pure. Degenerate inputs (zero reps) return 0 by the
empty-sum definition; callers filter NaN and negative values beforehand.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Mapping

from ..models.athlete import TrainingGoalFocus
from ..models.optimizer import MetabolicZone
from ..utils.tables import require_exhaustive

DECAY_CONSTANT = 0.215
DEFAULT_RPE_DRIFT = 0.15  # RPE added per successive set in a session

# (zone, label, lower bound inclusive); upper bound is the next row's lower bound
METABOLIC_ZONES: list[tuple[MetabolicZone, str, float]] = [
    (MetabolicZone.LIGHT, "Light", 0.0),
    (MetabolicZone.MODERATE, "Moderate (hypertrophy sweet spot)", 500.0),
    (MetabolicZone.MODERATE_HIGH, "Moderate-High", 800.0),
    (MetabolicZone.HIGH, "High", 1100.0),
    (MetabolicZone.EXTREME, "Extreme", 1500.0),
]

PRODUCTIVE_LOAD_FLOOR = 500.0
PRODUCTIVE_LOAD_CEILING = 1100.0

FATIGUE_ZONES: list[tuple[MetabolicZone, float]] = [
    (MetabolicZone.LIGHT, 0.0),
    (MetabolicZone.MODERATE, 400.0),
    (MetabolicZone.MODERATE_HIGH, 500.0),
    (MetabolicZone.HIGH, 600.0),
    (MetabolicZone.EXTREME, 700.0),
]

# Hanley fatigue score target per exercise, (min, max)
FATIGUE_TARGETS = require_exhaustive(
    {
        TrainingGoalFocus.HYPERTROPHY: (400, 600),
        TrainingGoalFocus.STRENGTH: (400, 600),
        TrainingGoalFocus.POWER: (250, 400),
        TrainingGoalFocus.ENDURANCE: (350, 550),
        TrainingGoalFocus.GENERAL: (400, 550),
    },
    TrainingGoalFocus,
    "FATIGUE_TARGETS",
)


@dataclass
class SetLoad:
    """Inputs for one set's metabolic load."""

    intensity_pct: float
    reps: int
    rpe: float

    @classmethod
    def from_dict(cls, data: Mapping) -> "SetLoad":
        """Create from dictionary."""
        return cls(
            intensity_pct=float(data["intensity_pct"]),
            reps=int(data["reps"]),
            rpe=float(data["rpe"]),
        )


@dataclass
class MetabolicZoneInfo:
    """A zone classification with its display label."""

    zone: MetabolicZone
    label: str

    def to_dict(self) -> dict:
        return {"zone": self.zone.value, "label": self.label}


def _as_set_load(item: "SetLoad | Mapping") -> SetLoad:
    if isinstance(item, SetLoad):
        return item
    return SetLoad.from_dict(item)


def calculate_set_metabolic_load(intensity_pct: float, reps: int, rpe: float) -> float:
    """Metabolic load of a single set.

    Args:
        intensity_pct: Load as a percentage of 1RM (0-100)
        reps: Completed reps
        rpe: Rate of perceived exertion (1-10)

    Returns:
        Non-negative load; 0 when reps <= 0
    """
    if reps <= 0:
        return 0.0
    rir = max(0.0, 10.0 - rpe)
    return sum(
        intensity_pct * math.exp(-DECAY_CONSTANT * (rir + reps - i))
        for i in range(1, reps + 1)
    )


def calculate_session_metabolic_load(sets: Iterable["SetLoad | Mapping"]) -> float:
    """Sum of set loads for a session."""
    total = 0.0
    for item in sets:
        s = _as_set_load(item)
        total += calculate_set_metabolic_load(s.intensity_pct, s.reps, s.rpe)
    return total


def effective_rpe(set_index: int, rpe: float, drift: float = DEFAULT_RPE_DRIFT) -> float:
    """RPE of the set at ``set_index`` (0-based) once accrued fatigue is added."""
    return min(10.0, rpe + set_index * drift)


def calculate_session_metabolic_load_with_fatigue(
    sets: Iterable["SetLoad | Mapping"],
    drift: float = DEFAULT_RPE_DRIFT,
) -> float:
    """Session load where each later set runs slightly closer to failure."""
    return sum(calculate_set_loads(sets, drift), 0.0)


def calculate_set_loads(sets: Iterable["SetLoad | Mapping"], drift: float = 0.0) -> list[float]:
    """Load of each set, with ``drift`` RPE added per preceding set."""
    loads = []
    for index, item in enumerate(sets):
        s = _as_set_load(item)
        loads.append(
            calculate_set_metabolic_load(s.intensity_pct, s.reps, effective_rpe(index, s.rpe, drift))
        )
    return loads


def get_metabolic_zone(total_load: float) -> MetabolicZoneInfo:
    """Classify a session load; bounds are inclusive-lower, exclusive-upper."""
    zone, label, _ = METABOLIC_ZONES[0]
    for candidate, candidate_label, lower in METABOLIC_ZONES:
        if total_load >= lower:
            zone, label = candidate, candidate_label
    return MetabolicZoneInfo(zone=zone, label=label)


def sets_to_productive_zone(
    load_per_set: float,
    floor: float = PRODUCTIVE_LOAD_FLOOR,
    max_sets: int = 20,
) -> int | None:
    """Smallest set count whose cumulative load reaches ``floor``.

    The count never drops below the floor. A set at up to 100% 1RM carries
    at most ~517 load, so the floor-reaching count stays under
    ``PRODUCTIVE_LOAD_CEILING`` for the default floor. Returns None when a
    set carries no load.
    """
    if load_per_set <= 0:
        return None
    sets = 1
    while sets * load_per_set < floor and sets < max_sets:
        sets += 1
    return sets


def intensity_for_rpe(reps: int, rpe: float) -> int:
    """%1RM that makes ``reps`` land at ``rpe`` (Epley)."""
    rir = max(0.0, 10.0 - rpe)
    return round(100 / (1 + (reps + rir) / 30))


def rpe_at_intensity(intensity_pct: float, reps: int) -> float:
    """Expected RPE for ``reps`` at ``intensity_pct`` (Epley inverse)."""
    if intensity_pct <= 0:
        return 1.0
    max_reps = 30 * (100 / intensity_pct - 1)
    rir = max_reps - reps
    return round(min(10.0, max(1.0, 10.0 - rir)), 1)


def calculate_set_fatigue_score(reps: int, intensity_pct: float) -> float:
    """Hanley fatigue score for a set."""
    if reps <= 0:
        return 0.0
    intensity_pct = min(intensity_pct, 99.0)
    return reps * (100 / (100 - intensity_pct)) ** 2


def reverse_calculate_reps(target_score: float, intensity_pct: float) -> int:
    """Total reps that reach ``target_score`` at ``intensity_pct``."""
    intensity_pct = min(intensity_pct, 99.0)
    per_rep = (100 / (100 - intensity_pct)) ** 2
    return max(1, round(target_score / per_rep))


def get_fatigue_zone(score: float) -> MetabolicZone:
    """Classify a Hanley fatigue score."""
    zone = FATIGUE_ZONES[0][0]
    for candidate, lower in FATIGUE_ZONES:
        if score >= lower:
            zone = candidate
    return zone


def estimate_peak_force_drop_rep(intensity_pct: float) -> int:
    """Rep at which bar speed starts to drop noticeably.

    Above 90% every rep is a near-max effort, so sets are singles.
    """
    if intensity_pct > 90:
        return 1
    intensity_pct = max(intensity_pct, 1.0)
    max_reps = 30 * (100 / intensity_pct - 1)
    fraction = 0.30 + 0.30 * ((90 - intensity_pct) / 30) ** 0.7
    return max(1, round(max_reps * fraction))


def divide_reps_into_sets(total_reps: int, reps_per_set: int) -> list[int]:
    """Split ``total_reps`` into sets of at most ``reps_per_set``."""
    if total_reps <= 0 or reps_per_set <= 0:
        return []
    full, remainder = divmod(total_reps, reps_per_set)
    division = [reps_per_set] * full
    if remainder:
        division.append(remainder)
    return division
