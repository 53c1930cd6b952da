"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import pytest

from orca_block.models.athlete import AthleteProfile, ReadinessLevel, TrainingGoalFocus
from orca_block.models.block import (
    ExercisePreferences,
    ExerciseSlot,
    FocusLevel,
    SlotCategory,
    SlotTier,
    SplitPattern,
    TrainingBlock,
    TrainingBlockPhase,
    TrainingPhase,
)
from orca_block.models.history import CompletedSet, SessionRecord
from orca_block.planning.timeline import DAY_MS

# Monday 2024-01-01 00:00 UTC
START_MS = int(datetime(2024, 1, 1, tzinfo=timezone.utc).timestamp() * 1000)


def make_phase(
    phase=TrainingPhase.HYPERTROPHY,
    weeks=2,
    sessions=3,
    split=SplitPattern.PUSH_PULL_LEGS,
    intensity=FocusLevel.MODERATE,
    volume=FocusLevel.HIGH,
) -> TrainingBlockPhase:
    return TrainingBlockPhase(
        phase=phase,
        week_count=weeks,
        sessions_per_week=sessions,
        split_pattern=split,
        intensity_focus=intensity,
        volume_focus=volume,
    )


def make_session(days_ago: float, now_ms: int, **kwargs) -> SessionRecord:
    return SessionRecord(timestamp=int(now_ms - days_ago * DAY_MS), **kwargs)


@pytest.fixture
def start_ms():
    return START_MS


@pytest.fixture
def main_lift_preferences():
    """Primary and secondary slots for the competition lifts."""
    return ExercisePreferences(
        slots=[
            ExerciseSlot(SlotCategory.SQUAT, SlotTier.PRIMARY, "back_squat"),
            ExerciseSlot(SlotCategory.SQUAT, SlotTier.SECONDARY, "front_squat"),
            ExerciseSlot(SlotCategory.BENCH, SlotTier.PRIMARY, "bench_press"),
            ExerciseSlot(SlotCategory.BENCH, SlotTier.SECONDARY, "close_grip_bench"),
            ExerciseSlot(SlotCategory.DEADLIFT, SlotTier.PRIMARY, "deadlift"),
            ExerciseSlot(SlotCategory.DEADLIFT, SlotTier.SECONDARY, "romanian_deadlift"),
            ExerciseSlot(SlotCategory.OHP, SlotTier.PRIMARY, "overhead_press"),
            ExerciseSlot(SlotCategory.OHP, SlotTier.SECONDARY, None),
            ExerciseSlot(SlotCategory.CORE, SlotTier.ANTI_FLEXION, "plank"),
            ExerciseSlot(SlotCategory.CORE, SlotTier.ANTI_EXTENSION, "ab_wheel"),
            ExerciseSlot(SlotCategory.ACCESSORY, SlotTier.SLOT_1, "barbell_row"),
        ]
    )


@pytest.fixture
def ppl_block(main_lift_preferences):
    """Three weeks of push/pull/legs across two phases."""
    return TrainingBlock(
        id="block-1",
        name="Spring Block",
        start_date=START_MS,
        phases=[
            make_phase(TrainingPhase.HYPERTROPHY, weeks=2, sessions=3),
            make_phase(
                TrainingPhase.STRENGTH,
                weeks=1,
                sessions=3,
                intensity=FocusLevel.HIGH,
                volume=FocusLevel.MODERATE,
            ),
        ],
        exercise_preferences=main_lift_preferences,
        is_active=True,
    )


@pytest.fixture
def sample_profile():
    """An intermediate athlete with no check-in."""
    return AthleteProfile(
        name="Test Athlete",
        goal=TrainingGoalFocus.HYPERTROPHY,
        readiness=ReadinessLevel.MEDIUM,
        session_duration=60,
    )


@pytest.fixture
def hard_history():
    """Five heavy, high-RPE sessions in the last week, lighter ones before."""
    now = START_MS + 28 * DAY_MS
    heavy_sets = [CompletedSet("back_squat", reps=3, weight=180, rpe=9.5, intensity_pct=90)] * 5
    recent = [
        make_session(d, now, tonnage=6000, sets=list(heavy_sets), session_rpe=9)
        for d in (0, 1, 2, 4, 6)
    ]
    prior = [make_session(d, now, tonnage=3000, session_rpe=6) for d in (8, 10, 12)]
    return now, prior + recent
