"""Pack skeleton fields into a free-text notes column and back.

Some stores keep scheduled workouts in a table that only has a ``notes``
column for everything beyond date and label. The skeleton fields travel in a
JSON envelope tagged with ``"__sk": 1``; the envelope keys are camelCase to
stay readable by existing rows. Notes that are not an envelope are plain
user notes.
"""

import json

from ..models.schedule import ScheduledWorkout, SkeletonExercise

ENVELOPE_TAG = "__sk"
ENVELOPE_VERSION = 1

# envelope key -> ScheduledWorkout attribute
_FIELDS = {
    "sessionFocus": "session_focus",
    "targetIntensity": "target_intensity",
    "targetVolume": "target_volume",
    "targetSetsPerExercise": "target_sets_per_exercise",
    "targetRepRange": "target_rep_range",
    "trainingBlockId": "training_block_id",
    "phaseIndex": "phase_index",
    "weekIndex": "week_index",
    "dayIndex": "day_index",
}


def _exercise_to_envelope(exercise: SkeletonExercise) -> dict:
    return {
        "exerciseId": exercise.exercise_id,
        "exerciseName": exercise.exercise_name,
        "tier": exercise.tier,
    }


def _exercise_from_envelope(data: dict) -> SkeletonExercise:
    return SkeletonExercise(
        exercise_id=data["exerciseId"],
        exercise_name=data["exerciseName"],
        tier=data.get("tier", "accessory"),
    )


def pack_skeleton_notes(workout: ScheduledWorkout) -> str | None:
    """Serialize a workout's skeleton fields and user notes into one string.

    Workouts without skeleton data keep their notes as-is.
    """
    has_skeleton = (
        workout.session_focus
        or workout.skeleton_exercises
        or workout.target_intensity
        or workout.training_block_id
    )
    if not has_skeleton:
        return workout.notes or None

    envelope: dict = {ENVELOPE_TAG: ENVELOPE_VERSION}
    for key, attr in _FIELDS.items():
        envelope[key] = getattr(workout, attr)
    envelope["skeletonExercises"] = [_exercise_to_envelope(ex) for ex in workout.skeleton_exercises]
    if workout.notes:
        envelope["userNotes"] = workout.notes
    return json.dumps(envelope)


def unpack_skeleton_notes(notes: str | None) -> dict:
    """Recover skeleton fields (snake_case) and user notes from a notes string.

    Returns:
        Keyword values suitable for ScheduledWorkout; only ``notes`` when the
        string is not an envelope
    """
    if not notes:
        return {}
    try:
        parsed = json.loads(notes)
    except json.JSONDecodeError:
        return {"notes": notes}
    if not isinstance(parsed, dict) or parsed.get(ENVELOPE_TAG) != ENVELOPE_VERSION:
        return {"notes": notes}

    fields = {attr: parsed[key] for key, attr in _FIELDS.items() if parsed.get(key) is not None}
    fields["skeleton_exercises"] = [
        _exercise_from_envelope(ex) for ex in parsed.get("skeletonExercises") or []
    ]
    fields["notes"] = parsed.get("userNotes") or ""
    return fields
