"""Expand a training block into dated session skeletons.

Sessions take their focus from the split pattern's rotation using one
counter for the whole block, so a push/pull/legs rotation carries on across
phase boundaries instead of restarting at Push. Each focus maps to a fixed
list of (category, tier) slots that are resolved against the block's
exercise preferences; slots without a catalog exercise are left out for a
later step to fill.
"""

from datetime import datetime, timezone
from typing import Callable
from uuid import uuid4

from loguru import logger

from ..models.block import (
    FocusLevel,
    SessionStructure,
    SlotCategory,
    SlotTier,
    SplitPattern,
    TrainingBlock,
    TrainingBlockPhase,
)
from ..models.exercises import ExerciseCatalog, default_catalog
from ..models.schedule import ScheduledWorkout, SkeletonExercise, SuggestedIntensity
from ..utils.exercise_utils import find_matching_exercise
from ..utils.tables import require_exhaustive
from .timeline import DAY_MS, WEEK_MS
from .validation import validate_block

SQ, BP, DL, OHP = SlotCategory.SQUAT, SlotCategory.BENCH, SlotCategory.DEADLIFT, SlotCategory.OHP
CORE, ACC = SlotCategory.CORE, SlotCategory.ACCESSORY
P, S, T = SlotTier.PRIMARY, SlotTier.SECONDARY, SlotTier.TERTIARY
AFLEX, AEXT, AROT = SlotTier.ANTI_FLEXION, SlotTier.ANTI_EXTENSION, SlotTier.ANTI_ROTATION
S1, S2, S3 = SlotTier.SLOT_1, SlotTier.SLOT_2, SlotTier.SLOT_3

SPLIT_FOCUS_ROTATION = require_exhaustive(
    {
        SplitPattern.FULL_BODY: ["Full Body"],
        SplitPattern.UPPER_LOWER: ["Upper", "Lower"],
        SplitPattern.PUSH_PULL_LEGS: ["Push", "Pull", "Legs"],
        SplitPattern.SQUAT_BENCH_DEADLIFT: ["Squat Day", "Bench Day", "Deadlift Day"],
        SplitPattern.CUSTOM: ["Session"],
    },
    SplitPattern,
    "SPLIT_FOCUS_ROTATION",
)

# One lift a day ignores the split pattern
ONE_LIFT_ROTATION = ["Squat", "Bench", "Deadlift", "OHP"]

STANDARD_SLOTS = {
    "Upper": [(BP, P), (BP, S), (OHP, P), (ACC, S1)],
    "Lower": [(SQ, P), (SQ, S), (DL, P), (CORE, AFLEX)],
    "Push": [(BP, P), (BP, S), (OHP, P), (OHP, S)],
    "Pull": [(DL, P), (DL, S), (ACC, S1), (CORE, AEXT)],
    "Legs": [(SQ, P), (SQ, S), (DL, S), (CORE, AFLEX)],
    "Squat Day": [(SQ, P), (SQ, S), (SQ, T), (CORE, AFLEX)],
    "Bench Day": [(BP, P), (BP, S), (BP, T), (OHP, P)],
    "Deadlift Day": [(DL, P), (DL, S), (DL, T), (CORE, AEXT)],
    "Full Body": [(SQ, P), (BP, P), (DL, P), (OHP, P)],
    "Session": [(SQ, P), (BP, P), (DL, P)],
}

ONE_LIFT_SLOTS = {
    "Squat": [(SQ, P), (CORE, AFLEX)],
    "Bench": [(BP, P), (ACC, S1)],
    "Deadlift": [(DL, P), (CORE, AEXT)],
    "OHP": [(OHP, P), (ACC, S2)],
}

MAIN_PLUS_ACCESSORY_SLOTS = {
    "Upper": [(BP, P), (OHP, P)],
    "Lower": [(SQ, P), (DL, P)],
    "Push": [(BP, P), (OHP, P)],
    "Pull": [(DL, P), (DL, S)],
    "Legs": [(SQ, P), (DL, P)],
    "Squat Day": [(SQ, P), (SQ, S)],
    "Bench Day": [(BP, P), (BP, S)],
    "Deadlift Day": [(DL, P), (DL, S)],
    "Full Body": [(SQ, P), (BP, P)],
    "Session": [(SQ, P), (BP, P)],
}

HIGH_VARIETY_SLOTS = {
    "Upper": [(BP, P), (BP, S), (BP, T), (OHP, P), (OHP, S), (ACC, S1), (ACC, S2)],
    "Lower": [(SQ, P), (SQ, S), (SQ, T), (DL, P), (DL, S), (CORE, AFLEX), (CORE, AEXT)],
    "Push": [(BP, P), (BP, S), (BP, T), (OHP, P), (OHP, S), (OHP, T)],
    "Pull": [(DL, P), (DL, S), (DL, T), (ACC, S1), (ACC, S2), (ACC, S3), (CORE, AEXT)],
    "Legs": [(SQ, P), (SQ, S), (SQ, T), (DL, P), (DL, S), (CORE, AFLEX), (CORE, AROT)],
    "Squat Day": [(SQ, P), (SQ, S), (SQ, T), (DL, S), (CORE, AFLEX), (ACC, S1)],
    "Bench Day": [(BP, P), (BP, S), (BP, T), (OHP, P), (OHP, S), (ACC, S1)],
    "Deadlift Day": [(DL, P), (DL, S), (DL, T), (SQ, S), (CORE, AEXT), (ACC, S2)],
    "Full Body": [(SQ, P), (BP, P), (DL, P), (OHP, P), (CORE, AFLEX), (ACC, S1)],
    "Session": [(SQ, P), (BP, P), (DL, P), (OHP, P), (CORE, AFLEX)],
}

SESSION_SLOT_MAPS = require_exhaustive(
    {
        SessionStructure.ONE_LIFT: ONE_LIFT_SLOTS,
        SessionStructure.MAIN_PLUS_ACCESSORY: MAIN_PLUS_ACCESSORY_SLOTS,
        SessionStructure.STANDARD: STANDARD_SLOTS,
        SessionStructure.HIGH_VARIETY: HIGH_VARIETY_SLOTS,
    },
    SessionStructure,
    "SESSION_SLOT_MAPS",
)

MOVEMENT_GROUP = {
    "Squat": "knee-dominant",
    "Squat Day": "knee-dominant",
    "Bench": "horizontal-press",
    "Bench Day": "horizontal-press",
    "OHP": "vertical-press",
    "Push": "press",
    "Upper": "upper",
    "Deadlift": "hip-dominant",
    "Deadlift Day": "hip-dominant",
    "Pull": "pull",
    "Lower": "lower",
    "Legs": "lower",
    "Full Body": "full",
    "Session": "full",
}
PRESSING_GROUPS = {"horizontal-press", "vertical-press", "press"}


def _require_labels(slot_map: dict, labels: list[str], name: str) -> None:
    missing = [label for label in labels if label not in slot_map]
    if missing:
        raise RuntimeError(f"{name} is missing session labels: {', '.join(missing)}")


_SPLIT_LABELS = [label for rotation in SPLIT_FOCUS_ROTATION.values() for label in rotation]
for _structure, _slot_map in SESSION_SLOT_MAPS.items():
    _require_labels(
        _slot_map,
        ONE_LIFT_ROTATION if _structure == SessionStructure.ONE_LIFT else _SPLIT_LABELS,
        f"SESSION_SLOT_MAPS[{_structure.value}]",
    )
_require_labels(MOVEMENT_GROUP, _SPLIT_LABELS + ONE_LIFT_ROTATION, "MOVEMENT_GROUP")

# %1RM and rep range per intensity focus
INTENSITY_TARGETS = require_exhaustive(
    {
        FocusLevel.MINIMAL: {"pct": (40, 50), "reps": (12, 15)},
        FocusLevel.LOW: {"pct": (50, 60), "reps": (10, 15)},
        FocusLevel.MODERATE: {"pct": (60, 75), "reps": (8, 12)},
        FocusLevel.HIGH: {"pct": (78, 88), "reps": (3, 6)},
        FocusLevel.VERY_HIGH: {"pct": (85, 95), "reps": (1, 3)},
    },
    FocusLevel,
    "INTENSITY_TARGETS",
)

# Volume label and sets per exercise per volume focus
VOLUME_TARGETS = require_exhaustive(
    {
        FocusLevel.MINIMAL: {"label": "Minimal", "sets": (1, 2)},
        FocusLevel.LOW: {"label": "Low", "sets": (2, 3)},
        FocusLevel.MODERATE: {"label": "Moderate", "sets": (3, 4)},
        FocusLevel.HIGH: {"label": "High", "sets": (3, 5)},
        FocusLevel.VERY_HIGH: {"label": "Very High", "sets": (4, 5)},
    },
    FocusLevel,
    "VOLUME_TARGETS",
)

SUGGESTED_INTENSITY = require_exhaustive(
    {
        FocusLevel.MINIMAL: SuggestedIntensity.REST,
        FocusLevel.LOW: SuggestedIntensity.LOW,
        FocusLevel.MODERATE: SuggestedIntensity.MODERATE,
        FocusLevel.HIGH: SuggestedIntensity.HIGH,
        FocusLevel.VERY_HIGH: SuggestedIntensity.HIGH,
    },
    FocusLevel,
    "SUGGESTED_INTENSITY",
)

SUGGESTED_DURATION_MINUTES = 60
SKELETON_TIERS = {SlotTier.PRIMARY, SlotTier.SECONDARY, SlotTier.TERTIARY}


def _weekday(epoch_ms: int) -> int:
    """UTC weekday with 0 = Sunday."""
    return (datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc).weekday() + 1) % 7


def _iso_date(epoch_ms: int) -> str:
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc).date().isoformat()


def session_dates(week_start_ms: int, sessions: int, training_days: list[int] | None) -> list[int]:
    """Epoch ms of each session in the calendar week starting at ``week_start_ms``."""
    if training_days:
        start_dow = _weekday(week_start_ms)
        days = sorted(set(training_days))[:sessions]
        return sorted(week_start_ms + ((day - start_dow) % 7) * DAY_MS for day in days)

    spacing = 7 // sessions
    return [week_start_ms + i * spacing * DAY_MS for i in range(sessions)]


def movements_conflict(previous_focus: str, focus: str) -> bool:
    """Whether two foci load the same movement on back-to-back days."""
    if previous_focus == focus:
        return True
    prev_group = MOVEMENT_GROUP[previous_focus]
    group = MOVEMENT_GROUP[focus]
    return prev_group == group or (prev_group in PRESSING_GROUPS and group in PRESSING_GROUPS)


def resolve_session_exercises(
    focus: str,
    block: TrainingBlock,
    catalog: ExerciseCatalog,
) -> list[SkeletonExercise]:
    """Resolve a session's slot keys against the block's preferences."""
    slot_keys = SESSION_SLOT_MAPS[block.session_structure].get(focus, [])
    prefs = block.exercise_preferences
    exercises = []
    for category, tier in slot_keys:
        slot = prefs.find(category, tier) if prefs else None
        if slot is None or slot.exercise_id is None:
            continue
        # Slots may name an exercise by id, name or alias.
        exercise = find_matching_exercise(slot.exercise_id, catalog)
        if exercise is None:
            logger.debug(
                "Slot {}/{} references unknown exercise {}; omitted",
                category.value,
                tier.value,
                slot.exercise_id,
            )
            continue
        if exercise.id != slot.exercise_id:
            logger.debug("Slot exercise {!r} matched to {}", slot.exercise_id, exercise.id)
        exercises.append(
            SkeletonExercise(
                exercise_id=exercise.id,
                exercise_name=exercise.name,
                tier=tier.value if tier in SKELETON_TIERS else "accessory",
            )
        )
    return exercises


def _phase_targets(phase: TrainingBlockPhase) -> dict:
    intensity = INTENSITY_TARGETS[phase.intensity_focus]
    volume = VOLUME_TARGETS[phase.volume_focus]
    pct_lo, pct_hi = intensity["pct"]
    reps_lo, reps_hi = intensity["reps"]
    sets_lo, sets_hi = volume["sets"]
    return {
        "target_intensity": f"{pct_lo}-{pct_hi}% 1RM",
        "target_volume": volume["label"],
        "target_sets_per_exercise": f"{sets_lo}-{sets_hi}",
        "target_rep_range": f"{reps_lo}-{reps_hi}",
        "suggested_intensity": SUGGESTED_INTENSITY[phase.intensity_focus],
    }


def generate_block_skeleton(
    block: TrainingBlock,
    catalog: ExerciseCatalog | None = None,
    id_factory: Callable[[], object] = uuid4,
) -> list[ScheduledWorkout]:
    """Materialize every session of ``block`` as a planned skeleton.

    Args:
        block: The block to expand; validated before generation
        catalog: Exercise catalog for slot resolution (built-in when None)
        id_factory: Produces a fresh id per session

    Returns:
        Sessions in calendar order, one per phase week and session

    Raises:
        BlockValidationError: If the block is structurally invalid
    """
    validate_block(block)
    if catalog is None:
        catalog = default_catalog()

    workouts: list[ScheduledWorkout] = []
    session_counter = 0
    week_offset = 0
    previous: tuple[int, str] | None = None  # (date ms, focus)

    for phase_index, phase in enumerate(block.phases):
        if block.session_structure == SessionStructure.ONE_LIFT:
            rotation = ONE_LIFT_ROTATION
        else:
            rotation = SPLIT_FOCUS_ROTATION[phase.split_pattern]
        targets = _phase_targets(phase)

        for week in range(phase.week_count):
            week_start = block.start_date + (week_offset + week) * WEEK_MS
            dates = session_dates(week_start, phase.sessions_per_week, block.training_days)

            for day_index, date_ms in enumerate(dates):
                focus = rotation[session_counter % len(rotation)]
                if (
                    previous is not None
                    and date_ms - previous[0] == DAY_MS
                    and movements_conflict(previous[1], focus)
                ):
                    for step in range(1, len(rotation)):
                        candidate = rotation[(session_counter + step) % len(rotation)]
                        if not movements_conflict(previous[1], candidate):
                            session_counter += step
                            focus = candidate
                            break

                workouts.append(
                    ScheduledWorkout(
                        id=str(id_factory()),
                        date=_iso_date(date_ms),
                        label=f"{phase.phase.value} - Wk{week + 1} {focus}",
                        phase=phase.phase,
                        training_block_id=block.id,
                        phase_index=phase_index,
                        week_index=week,
                        day_index=day_index,
                        session_focus=focus,
                        skeleton_exercises=resolve_session_exercises(focus, block, catalog),
                        suggested_duration=SUGGESTED_DURATION_MINUTES,
                        **targets,
                    )
                )
                session_counter += 1
                previous = (date_ms, focus)

        week_offset += phase.week_count

    logger.info(
        "Generated {} sessions for block {} ({} weeks)",
        len(workouts),
        block.id,
        block.total_weeks,
    )
    return workouts
