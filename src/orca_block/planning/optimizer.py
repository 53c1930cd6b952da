"""Volume, intensity and fatigue recommendations for the next session.

The engine starts from a nominal set count (the athlete's session cap shaped
by the training goal and the current phase), scales it by volume tolerance
and damps it by recent fatigue. Damping only ever reduces volume, and the
final count is clamped to ``[1, nominal * MAX_TOLERANCE_SCALAR]`` and to the
config's ``hard_session_cap``.
"""

import math
import re

from loguru import logger

from ..models.athlete import AthleteProfile, TrainingGoalFocus
from ..models.block import TrainingPhase
from ..models.exercises import ExerciseCatalog
from ..models.history import SessionRecord
from ..models.optimizer import (
    IntensityRange,
    OptimizerConfig,
    OptimizerRecommendations,
    PhaseContext,
    RepRangePreference,
    RepScheme,
)
from ..utils.tables import require_exhaustive
from .fatigue import (
    compute_fatigue_signals,
    fatigue_multiplier,
    fatigue_score,
    readiness_adjustment,
    weekly_muscle_volume,
)
from .metabolic import (
    FATIGUE_TARGETS,
    calculate_set_metabolic_load,
    divide_reps_into_sets,
    estimate_peak_force_drop_rep,
    get_metabolic_zone,
    reverse_calculate_reps,
    sets_to_productive_zone,
)

GOAL_PROFILES = require_exhaustive(
    {
        TrainingGoalFocus.STRENGTH: {
            "intensity": (80, 92),
            "scheme": RepScheme(4, 6, 3, 5),
            "rest": (180, 300),
            "volume_multiplier": 0.85,
        },
        TrainingGoalFocus.HYPERTROPHY: {
            "intensity": (60, 75),
            "scheme": RepScheme(3, 4, 8, 12),
            "rest": (60, 120),
            "volume_multiplier": 1.15,
        },
        TrainingGoalFocus.POWER: {
            "intensity": (70, 85),
            "scheme": RepScheme(4, 6, 2, 5),
            "rest": (120, 240),
            "volume_multiplier": 0.75,
        },
        TrainingGoalFocus.ENDURANCE: {
            "intensity": (40, 60),
            "scheme": RepScheme(2, 3, 15, 20),
            "rest": (30, 75),
            "volume_multiplier": 1.0,
        },
        TrainingGoalFocus.GENERAL: {
            "intensity": (65, 80),
            "scheme": RepScheme(3, 4, 6, 10),
            "rest": (90, 150),
            "volume_multiplier": 1.0,
        },
    },
    TrainingGoalFocus,
    "GOAL_PROFILES",
)

REP_PREFERENCES = {
    RepRangePreference.LOW: {"scheme": RepScheme(4, 6, 3, 5), "intensity": (78, 92)},
    RepRangePreference.MODERATE: {"scheme": RepScheme(3, 4, 8, 12), "intensity": (60, 75)},
    RepRangePreference.HIGH: {"scheme": RepScheme(2, 3, 15, 20), "intensity": (40, 60)},
}

# (volume scalar, intensity shift in %1RM)
PHASE_ADJUSTMENTS = require_exhaustive(
    {
        TrainingPhase.GPP: (1.0, -5),
        TrainingPhase.HYPERTROPHY: (1.20, -3),
        TrainingPhase.ACCUMULATION: (1.15, -5),
        TrainingPhase.STRENGTH: (0.90, 3),
        TrainingPhase.INTENSIFICATION: (0.85, 5),
        TrainingPhase.POWER: (0.80, 0),
        TrainingPhase.REALIZATION: (0.65, 5),
        TrainingPhase.PEAKING: (0.65, 5),
        TrainingPhase.DELOAD: (0.5, -10),
    },
    TrainingPhase,
    "PHASE_ADJUSTMENTS",
)

PHASE_FOCUS = require_exhaustive(
    {
        TrainingPhase.GPP: "work capacity",
        TrainingPhase.HYPERTROPHY: "volume",
        TrainingPhase.ACCUMULATION: "volume",
        TrainingPhase.STRENGTH: "intensity",
        TrainingPhase.INTENSIFICATION: "intensity",
        TrainingPhase.POWER: "speed",
        TrainingPhase.REALIZATION: "peak",
        TrainingPhase.PEAKING: "peak",
        TrainingPhase.DELOAD: "recovery",
    },
    TrainingPhase,
    "PHASE_FOCUS",
)

# Session focus when no block is active
GOAL_FOCUS = require_exhaustive(
    {
        TrainingGoalFocus.STRENGTH: "intensity",
        TrainingGoalFocus.HYPERTROPHY: "volume",
        TrainingGoalFocus.POWER: "speed",
        TrainingGoalFocus.ENDURANCE: "volume",
        TrainingGoalFocus.GENERAL: "balanced",
    },
    TrainingGoalFocus,
    "GOAL_FOCUS",
)

HYPERTROPHY_LEANING_PHASES = {
    TrainingPhase.GPP,
    TrainingPhase.HYPERTROPHY,
    TrainingPhase.ACCUMULATION,
}

# Sets multiplier per volume tolerance step (1 = conservative, 5 = high capacity)
TOLERANCE_SCALARS = {1: 0.70, 2: 0.85, 3: 1.0, 4: 1.20, 5: 1.40}
MAX_TOLERANCE_SCALAR = max(TOLERANCE_SCALARS.values())
DEFAULT_VOLUME_TOLERANCE = 3

AUTO_DELOAD_VOLUME_SCALAR, AUTO_DELOAD_INTENSITY_SHIFT = PHASE_ADJUSTMENTS[TrainingPhase.DELOAD]
MINUTES_PER_EXERCISE = 12

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def goal_from_bias(goal_bias: float) -> TrainingGoalFocus:
    """Map a 0-100 hypertrophy/strength slider to a goal."""
    if goal_bias < 30:
        return TrainingGoalFocus.HYPERTROPHY
    if goal_bias > 70:
        return TrainingGoalFocus.STRENGTH
    return TrainingGoalFocus.GENERAL


def tolerance_scalar(volume_tolerance: float | None) -> float:
    """Interpolated sets multiplier for a tolerance clamped to 1-5."""
    if volume_tolerance is None or math.isnan(volume_tolerance):
        volume_tolerance = DEFAULT_VOLUME_TOLERANCE
    tolerance = max(1.0, min(5.0, float(volume_tolerance)))
    lower = math.floor(tolerance)
    if lower == 5:
        return TOLERANCE_SCALARS[5]
    frac = tolerance - lower
    return TOLERANCE_SCALARS[lower] + frac * (TOLERANCE_SCALARS[lower + 1] - TOLERANCE_SCALARS[lower])


def strength_rest_seconds(intensity_pct: float) -> int:
    """Rest between heavy sets."""
    if intensity_pct >= 85:
        return 300
    if intensity_pct >= 80:
        return 240
    if intensity_pct >= 75:
        return 180
    return 150


def is_hypertrophy_leaning(phase_context: PhaseContext | None, goal: TrainingGoalFocus) -> bool:
    """Whether the session should be sized by metabolic load."""
    if phase_context is not None:
        return phase_context.phase.phase in HYPERTROPHY_LEANING_PHASES
    return goal in (TrainingGoalFocus.HYPERTROPHY, TrainingGoalFocus.GENERAL)


def sanitize_rationale(text: str) -> str:
    """Collapse control characters so the text can go into a prompt verbatim."""
    return re.sub(r" {2,}", " ", _CONTROL_CHARS.sub(" ", text)).strip()


def compute_optimizer_recommendations(
    config: OptimizerConfig,
    profile: AthleteProfile,
    history: list[SessionRecord],
    phase_context: PhaseContext | None,
    volume_tolerance: float | None = DEFAULT_VOLUME_TOLERANCE,
    *,
    goal_bias: float | None = None,
    now_ms: int | None = None,
    catalog: ExerciseCatalog | None = None,
) -> OptimizerRecommendations:
    """Compute fresh recommendations from config, profile, history and phase.

    Args:
        config: Optimizer settings
        profile: Athlete profile (stated goal, readiness, check-in)
        history: Completed sessions in any order
        phase_context: Current phase, or None when no block is active
        volume_tolerance: Athlete volume tolerance, clamped to 1-5
        goal_bias: Optional 0-100 slider overriding the stated goal
        now_ms: Reference instant; defaults to the newest history entry
        catalog: Exercise catalog used to attribute sets to muscle groups

    Returns:
        OptimizerRecommendations with a non-empty rationale
    """
    if now_ms is None:
        now_ms = max((record.timestamp for record in history), default=0)

    goal = goal_from_bias(goal_bias) if goal_bias is not None else profile.goal
    goal_profile = GOAL_PROFILES[goal]
    scheme = goal_profile["scheme"]
    intensity_lo, intensity_hi = goal_profile["intensity"]
    rationale: list[str] = []

    if goal_bias is not None:
        rationale.append(f"goal bias {goal_bias:g} -> {goal.value}")
    else:
        rationale.append(f"goal {goal.value}")

    if config.rep_range_preference != RepRangePreference.AUTO:
        preference = REP_PREFERENCES[config.rep_range_preference]
        scheme = preference["scheme"]
        intensity_lo, intensity_hi = preference["intensity"]
        rationale.append(f"{config.rep_range_preference.value} rep preference")

    volume_scalar, intensity_shift = 1.0, 0
    if phase_context is None:
        rationale.append("no active block")
        suggested_focus = GOAL_FOCUS[goal]
    else:
        phase = phase_context.phase.phase
        volume_scalar, intensity_shift = PHASE_ADJUSTMENTS[phase]
        suggested_focus = PHASE_FOCUS[phase]
        rationale.append(
            f"{phase.value} week {phase_context.week_in_phase}/{phase_context.total_weeks_in_phase}"
            f" of {phase_context.block_name}"
        )
        if phase_context.is_end_of_block:
            rationale.append("final block week")

    signals = compute_fatigue_signals(history, now_ms, config.fatigue)
    auto_deload = (
        config.enabled
        and config.auto_deload
        and config.deload_frequency_weeks > 0
        and signals.consecutive_training_weeks >= config.deload_frequency_weeks
        and (phase_context is None or phase_context.phase.phase != TrainingPhase.DELOAD)
    )
    if auto_deload:
        volume_scalar *= AUTO_DELOAD_VOLUME_SCALAR
        intensity_shift += AUTO_DELOAD_INTENSITY_SHIFT
        suggested_focus = PHASE_FOCUS[TrainingPhase.DELOAD]
        rationale.append(
            f"auto-deload after {signals.consecutive_training_weeks} consecutive training weeks"
        )

    intensity = IntensityRange(
        min=max(30, min(100, intensity_lo + intensity_shift)),
        max=max(30, min(100, intensity_hi + intensity_shift)),
    )

    nominal = max(1.0, config.max_sets_per_session * goal_profile["volume_multiplier"] * volume_scalar)
    ceiling = nominal * MAX_TOLERANCE_SCALAR

    if not config.enabled:
        multiplier, score, tol = 1.0, 0.0, 1.0
        rationale.append("optimizer disabled, nominal prescription")
    else:
        tol = tolerance_scalar(volume_tolerance)
        if history:
            score = fatigue_score(signals, config.fatigue)
        else:
            score = 0.0
            rationale.append("no history, neutral fatigue")
        readiness = readiness_adjustment(profile, config.fatigue)
        multiplier = fatigue_multiplier(score, readiness.factor, config.fatigue)
        if score > 0:
            rationale.append(f"fatigue score {score:.2f}")
        rationale.extend(readiness.reasons)
        if tol != 1.0:
            rationale.append(f"volume tolerance x{tol:.2f}")

    raw_volume = nominal * tol * multiplier
    volume_cap = max(1, min(math.floor(ceiling), config.hard_session_cap))
    target_volume = max(1, min(volume_cap, round(raw_volume)))
    if round(raw_volume) > config.hard_session_cap:
        rationale.append(f"capped at {volume_cap} sets per session")

    working_intensity = config.working_intensity_pct
    if working_intensity is None:
        working_intensity = (intensity.min + intensity.max) / 2
    load_per_set = calculate_set_metabolic_load(working_intensity, config.working_reps, config.working_rpe)

    metabolic_target_sets = None
    if is_hypertrophy_leaning(phase_context, goal):
        metabolic_target_sets = sets_to_productive_zone(load_per_set)
        if metabolic_target_sets is not None:
            rationale.append(f"{metabolic_target_sets} sets per exercise reach the productive zone")
    sets_per_exercise = metabolic_target_sets or round((scheme.sets_min + scheme.sets_max) / 2)
    zone = get_metabolic_zone(load_per_set * sets_per_exercise)

    max_exercises = max(1, profile.session_duration // MINUTES_PER_EXERCISE)
    exercise_count = max(1, min(max_exercises, round(target_volume / max(1, sets_per_exercise))))

    if goal == TrainingGoalFocus.STRENGTH:
        rest_range = (strength_rest_seconds(intensity.min), strength_rest_seconds(intensity.max))
    else:
        rest_range = goal_profile["rest"]

    fatigue_lo, fatigue_hi = FATIGUE_TARGETS[goal]
    target_reps = reverse_calculate_reps((fatigue_lo + fatigue_hi) / 2, working_intensity)
    peak_drop = None
    division: list[int] = []
    if goal in (TrainingGoalFocus.STRENGTH, TrainingGoalFocus.POWER):
        peak_drop = estimate_peak_force_drop_rep(working_intensity)
        division = divide_reps_into_sets(target_reps, peak_drop)

    volume_status = weekly_muscle_volume(history, now_ms, config.target_sets_per_muscle_group, catalog)
    priorities = [
        status.muscle_group
        for status in sorted(volume_status, key=lambda s: s.ratio)
        if status.status == "under"
    ]
    if priorities:
        rationale.append(f"under-trained: {', '.join(priorities[:3])}")

    recommendations = OptimizerRecommendations(
        target_volume=target_volume,
        target_intensity=intensity,
        fatigue_adjustment=round(multiplier, 3),
        metabolic_target_sets=metabolic_target_sets,
        zone=zone.zone,
        rationale=sanitize_rationale("; ".join(rationale)),
        training_goal_focus=goal,
        nominal_volume=round(nominal, 2),
        fatigue_score=round(score, 3),
        rep_scheme=scheme,
        rest_range=rest_range,
        exercise_count=exercise_count,
        suggested_focus=suggested_focus,
        metabolic_load_per_set=round(load_per_set, 1),
        weekly_volume_status=volume_status,
        muscle_group_priorities=priorities,
        target_reps_per_exercise=target_reps,
        peak_force_drop_rep=peak_drop,
        strength_set_division=division,
        auto_deload=auto_deload,
    )
    logger.debug(
        "Recommendations: {} sets (nominal {:.1f}, fatigue x{:.2f}, tolerance x{:.2f})",
        target_volume,
        nominal,
        multiplier,
        tol,
    )
    return recommendations
