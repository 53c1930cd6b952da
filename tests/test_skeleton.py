"""Tests for block skeleton generation."""

import itertools
from datetime import datetime, timezone

import pytest

from orca_block.errors import BlockValidationError
from orca_block.models.block import (
    ExercisePreferences,
    ExerciseSlot,
    FocusLevel,
    SessionStructure,
    SlotCategory,
    SlotTier,
    SplitPattern,
    TrainingBlock,
    TrainingPhase,
)
from orca_block.models.schedule import SuggestedIntensity, WorkoutStatus
from orca_block.planning.skeleton import (
    generate_block_skeleton,
    movements_conflict,
    session_dates,
)
from orca_block.utils.tables import require_exhaustive

from conftest import START_MS, make_phase


def counting_ids():
    counter = itertools.count()
    return lambda: next(counter)


class TestGenerateBlockSkeleton:
    """Tests for generate_block_skeleton."""

    def test_session_count(self, ppl_block):
        """Test one session per phase week and session."""
        workouts = generate_block_skeleton(ppl_block)
        assert len(workouts) == ppl_block.total_sessions == 9

    def test_no_phases(self, start_ms):
        block = TrainingBlock(id="b", name="Empty", start_date=start_ms, length_weeks=4)
        assert generate_block_skeleton(block) == []

    def test_rotation_carries_across_phases(self, ppl_block):
        """Test that the focus rotation never restarts at a phase boundary."""
        workouts = generate_block_skeleton(ppl_block)
        assert [w.session_focus for w in workouts] == ["Push", "Pull", "Legs"] * 3

    def test_rotation_continues_mid_cycle(self, start_ms):
        block = TrainingBlock(
            id="b",
            name="Odd",
            start_date=start_ms,
            phases=[
                make_phase(TrainingPhase.HYPERTROPHY, weeks=1, sessions=2),
                make_phase(TrainingPhase.STRENGTH, weeks=1, sessions=3),
            ],
        )
        foci = [w.session_focus for w in generate_block_skeleton(block)]
        assert foci == ["Push", "Pull", "Legs", "Push", "Pull"]

    def test_labels_and_indices(self, ppl_block):
        workouts = generate_block_skeleton(ppl_block)

        assert workouts[0].label == "Hypertrophy - Wk1 Push"
        assert workouts[4].label == "Hypertrophy - Wk2 Pull"
        assert workouts[6].label == "Strength - Wk1 Push"
        assert (workouts[4].phase_index, workouts[4].week_index, workouts[4].day_index) == (0, 1, 1)
        assert (workouts[8].phase_index, workouts[8].week_index, workouts[8].day_index) == (1, 0, 2)
        assert all(w.training_block_id == "block-1" for w in workouts)
        assert all(w.status == WorkoutStatus.PLANNED for w in workouts)

    def test_even_spacing_without_training_days(self, ppl_block):
        """Test that three sessions land two days apart from the block start."""
        dates = [w.date for w in generate_block_skeleton(ppl_block)]
        assert dates[:4] == ["2024-01-01", "2024-01-03", "2024-01-05", "2024-01-08"]
        assert dates[-1] == "2024-01-19"

    def test_empty_training_days_spaced_evenly(self, ppl_block):
        """Test that an empty weekday list means no preference."""
        ppl_block.training_days = []
        dates = [w.date for w in generate_block_skeleton(ppl_block)]
        assert dates[:4] == ["2024-01-01", "2024-01-03", "2024-01-05", "2024-01-08"]

    def test_training_days(self, ppl_block):
        ppl_block.training_days = [2, 4, 6]  # Tue, Thu, Sat
        dates = [w.date for w in generate_block_skeleton(ppl_block)]
        assert dates[:3] == ["2024-01-02", "2024-01-04", "2024-01-06"]

    def test_training_days_wrap_within_calendar_week(self, ppl_block):
        """Test that weekdays before the start weekday fall later in the week."""
        wednesday = int(datetime(2024, 1, 3, tzinfo=timezone.utc).timestamp() * 1000)
        ppl_block.start_date = wednesday
        ppl_block.training_days = [1, 3, 5]
        dates = [w.date for w in generate_block_skeleton(ppl_block)]
        assert dates[:3] == ["2024-01-03", "2024-01-05", "2024-01-08"]

    def test_phase_targets(self, ppl_block):
        workouts = generate_block_skeleton(ppl_block)
        hypertrophy, strength = workouts[0], workouts[6]

        assert hypertrophy.target_intensity == "60-75% 1RM"
        assert hypertrophy.target_volume == "High"
        assert hypertrophy.target_sets_per_exercise == "3-5"
        assert hypertrophy.target_rep_range == "8-12"
        assert strength.target_rep_range == "3-6"
        assert strength.suggested_intensity == SuggestedIntensity.HIGH

    def test_slot_resolution(self, ppl_block):
        """Test that pinned slots resolve and empty slots are left out."""
        push, pull, legs = generate_block_skeleton(ppl_block)[:3]

        assert [(e.exercise_id, e.tier) for e in push.skeleton_exercises] == [
            ("bench_press", "primary"),
            ("close_grip_bench", "secondary"),
            ("overhead_press", "primary"),
        ]
        assert [e.exercise_id for e in pull.skeleton_exercises] == [
            "deadlift",
            "romanian_deadlift",
            "barbell_row",
            "ab_wheel",
        ]
        assert [e.tier for e in pull.skeleton_exercises][2:] == ["accessory", "accessory"]
        assert legs.skeleton_exercises[0].exercise_name == "Back Squat"

    def test_unknown_exercise_omitted(self, ppl_block):
        ppl_block.exercise_preferences.slots[0].exercise_id = "mystery_lift_xyz"
        legs = generate_block_skeleton(ppl_block)[2]
        assert [e.exercise_id for e in legs.skeleton_exercises] == [
            "front_squat",
            "romanian_deadlift",
            "plank",
        ]

    def test_slot_by_name_or_alias(self, ppl_block):
        """Test that slots naming an exercise resolve to its catalog id."""
        slots = ppl_block.exercise_preferences.slots
        slots[0].exercise_id = "Front Squat"
        slots[5].exercise_id = "RDL"
        slots[6].exercise_id = "Military Press"

        push, pull, legs = generate_block_skeleton(ppl_block)[:3]

        assert legs.skeleton_exercises[0].exercise_id == "front_squat"
        assert legs.skeleton_exercises[0].exercise_name == "Front Squat"
        assert [e.exercise_id for e in pull.skeleton_exercises][:2] == ["deadlift", "romanian_deadlift"]
        assert push.skeleton_exercises[-1].exercise_id == "overhead_press"

    def test_slot_misspelled_name(self, ppl_block):
        ppl_block.exercise_preferences.slots[2].exercise_id = "Bench Pres"
        push = generate_block_skeleton(ppl_block)[0]
        assert push.skeleton_exercises[0].exercise_id == "bench_press"

    def test_no_preferences(self, ppl_block):
        ppl_block.exercise_preferences = None
        assert all(not w.skeleton_exercises for w in generate_block_skeleton(ppl_block))

    def test_deterministic_apart_from_ids(self, ppl_block):
        """Test that repeated runs differ only in session ids."""
        first = [w.to_dict() for w in generate_block_skeleton(ppl_block)]
        second = [w.to_dict() for w in generate_block_skeleton(ppl_block)]

        assert first[0]["id"] != second[0]["id"]
        for a, b in zip(first, second):
            a.pop("id")
            b.pop("id")
        assert first == second

    def test_id_factory(self, ppl_block):
        workouts = generate_block_skeleton(ppl_block, id_factory=counting_ids())
        assert [w.id for w in workouts[:3]] == ["0", "1", "2"]

    def test_conflicting_back_to_back_sessions_advance_rotation(self, start_ms):
        """Test that legs the day after lower body are swapped for the next focus."""
        block = TrainingBlock(
            id="b",
            name="Weekend",
            start_date=start_ms,
            training_days=[0, 1],  # Sun, Mon
            phases=[
                make_phase(TrainingPhase.HYPERTROPHY, weeks=1, sessions=2, split=SplitPattern.UPPER_LOWER),
                make_phase(TrainingPhase.STRENGTH, weeks=1, sessions=2),
            ],
        )
        workouts = generate_block_skeleton(block)

        assert [w.date for w in workouts] == ["2024-01-01", "2024-01-07", "2024-01-08", "2024-01-14"]
        assert [w.session_focus for w in workouts] == ["Upper", "Lower", "Push", "Pull"]

    def test_one_lift_structure(self, ppl_block):
        """Test that one lift a day ignores the split pattern."""
        ppl_block.session_structure = SessionStructure.ONE_LIFT
        workouts = generate_block_skeleton(ppl_block)

        assert [w.session_focus for w in workouts[:5]] == ["Squat", "Bench", "Deadlift", "OHP", "Squat"]
        assert [e.exercise_id for e in workouts[0].skeleton_exercises] == ["back_squat", "plank"]

    def test_main_plus_accessory_structure(self, ppl_block):
        ppl_block.session_structure = SessionStructure.MAIN_PLUS_ACCESSORY
        push = generate_block_skeleton(ppl_block)[0]
        assert [e.exercise_id for e in push.skeleton_exercises] == ["bench_press", "overhead_press"]

    def test_invalid_block_rejected(self, ppl_block):
        ppl_block.phases[0].sessions_per_week = 1
        with pytest.raises(BlockValidationError):
            generate_block_skeleton(ppl_block)

    def test_deload_phase(self, start_ms):
        block = TrainingBlock(
            id="b",
            name="Deload",
            start_date=start_ms,
            phases=[
                make_phase(
                    TrainingPhase.DELOAD,
                    weeks=1,
                    sessions=2,
                    split=SplitPattern.FULL_BODY,
                    intensity=FocusLevel.MINIMAL,
                    volume=FocusLevel.MINIMAL,
                )
            ],
            exercise_preferences=ExercisePreferences(
                slots=[ExerciseSlot(SlotCategory.SQUAT, SlotTier.PRIMARY, "back_squat")]
            ),
        )
        workouts = generate_block_skeleton(block)

        assert [w.label for w in workouts] == ["Deload - Wk1 Full Body"] * 2
        assert workouts[0].suggested_intensity == SuggestedIntensity.REST
        assert workouts[1].date == "2024-01-04"


class TestSchedulingHelpers:
    """Tests for date and movement helpers."""

    def test_session_dates_spacing(self):
        dates = session_dates(START_MS, 2, None)
        assert dates == [START_MS, START_MS + 3 * 24 * 60 * 60 * 1000]

    def test_session_dates_takes_first_days(self):
        """Test that extra training days beyond the session count go unused."""
        day = 24 * 60 * 60 * 1000
        assert session_dates(START_MS, 2, [5, 1, 3]) == [START_MS, START_MS + 2 * day]

    @pytest.mark.parametrize("previous,focus,conflict", [
        ("Push", "Push", True),
        ("Lower", "Legs", True),
        ("Bench", "OHP", True),
        ("Push", "Bench Day", True),
        ("Push", "Pull", False),
        ("Upper", "Push", False),
        ("Squat Day", "Deadlift Day", False),
    ])
    def test_movements_conflict(self, previous, focus, conflict):
        assert movements_conflict(previous, focus) is conflict

    def test_require_exhaustive(self):
        with pytest.raises(RuntimeError, match="one-lift"):
            require_exhaustive({SessionStructure.STANDARD: 1}, SessionStructure, "T")
