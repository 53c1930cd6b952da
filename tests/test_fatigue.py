"""Tests for history-based fatigue signals."""

import pytest

from orca_block.models.athlete import AthleteProfile, CheckIn, ReadinessLevel
from orca_block.models.history import CompletedSet, ExerciseSummary
from orca_block.models.optimizer import FatigueTuning
from orca_block.planning.fatigue import (
    FatigueSignals,
    compute_fatigue_signals,
    consecutive_training_weeks,
    fatigue_multiplier,
    fatigue_score,
    is_hard_session,
    readiness_adjustment,
    session_rpe_trend,
    weekly_muscle_volume,
)

from conftest import START_MS, make_session


class TestFatigueSignals:
    """Tests for compute_fatigue_signals."""

    def test_hard_week(self, hard_history):
        now, history = hard_history
        signals = compute_fatigue_signals(history, now)

        assert signals.sessions_3d == 3
        assert signals.sessions_7d == 5
        assert signals.hard_sessions_7d == 5
        assert signals.tonnage_7d == 30000
        assert signals.tonnage_prior_7d == 9000
        assert signals.rpe_streak == 5
        assert signals.rpe_trend == "stable"
        assert signals.last_session_high_rpe
        assert signals.consecutive_training_weeks == 2

    def test_order_independent(self, hard_history):
        """Test that shuffled history gives the same signals."""
        now, history = hard_history
        assert compute_fatigue_signals(list(reversed(history)), now) == compute_fatigue_signals(history, now)

    def test_future_sessions_ignored(self, hard_history):
        now, history = hard_history
        future = make_session(-1, now, tonnage=99999, session_rpe=10)
        assert compute_fatigue_signals(history + [future], now) == compute_fatigue_signals(history, now)

    def test_empty_history(self):
        assert compute_fatigue_signals([], START_MS) == FatigueSignals()

    def test_tonnage_ratio_without_prior(self):
        assert FatigueSignals(tonnage_7d=5000).tonnage_ratio is None


class TestSignalHelpers:
    """Tests for the individual signal helpers."""

    def test_hard_session_by_session_rpe(self):
        tuning = FatigueTuning()
        assert is_hard_session(make_session(0, START_MS, session_rpe=8), tuning)
        assert not is_hard_session(make_session(0, START_MS, session_rpe=7), tuning)

    def test_hard_session_by_rpe_target(self):
        record = make_session(
            0, START_MS, exercises=[ExerciseSummary("back_squat", 4, ["quads"], rpe_target=9)]
        )
        assert is_hard_session(record, FatigueTuning())

    def test_rpe_trend(self):
        tuning = FatigueTuning()
        rising = [make_session(10 - i, START_MS, session_rpe=rpe) for i, rpe in enumerate([6, 6, 8, 8])]
        falling = [make_session(10 - i, START_MS, session_rpe=rpe) for i, rpe in enumerate([9, 9, 7, 7])]

        assert session_rpe_trend(rising, tuning) == "rising"
        assert session_rpe_trend(falling, tuning) == "falling"
        assert session_rpe_trend(rising[:3], tuning) is None

    def test_consecutive_training_weeks(self):
        """Test that the run stops at the first thin week."""
        history = [make_session(d, START_MS) for d in (1, 3, 8, 10, 15, 22, 24)]
        assert consecutive_training_weeks(history, START_MS) == 2


class TestScoreAndMultiplier:
    """Tests for fatigue_score and fatigue_multiplier."""

    def test_hard_week_score(self, hard_history):
        now, history = hard_history
        score = fatigue_score(compute_fatigue_signals(history, now))
        assert score == pytest.approx(0.9)

    def test_no_signals(self):
        assert fatigue_score(FatigueSignals()) == 0.0

    def test_zero_weights(self):
        tuning = FatigueTuning(
            weight_frequency=0,
            weight_hard_sessions=0,
            weight_tonnage_trend=0,
            weight_rpe_streak=0,
            weight_rpe_trend=0,
            weight_last_session_rpe=0,
        )
        assert fatigue_score(FatigueSignals(sessions_3d=10), tuning) == 0.0

    @pytest.mark.parametrize("score,readiness,expected", [
        (0.0, 1.0, 1.0),
        (1.0, 1.0, 0.7),
        (0.5, 1.0, 0.85),
        (0.0, 1.3, 1.0),
        (1.0, 0.55, 0.40),
    ])
    def test_multiplier(self, score, readiness, expected):
        """Test damping bounds and that readiness never boosts volume."""
        assert fatigue_multiplier(score, readiness) == pytest.approx(expected)


class TestReadiness:
    """Tests for readiness_adjustment."""

    def test_medium_readiness(self):
        adjustment = readiness_adjustment(AthleteProfile())
        assert adjustment.factor == 1.0
        assert adjustment.reasons == []

    def test_low_readiness_and_check_in(self):
        profile = AthleteProfile(
            readiness=ReadinessLevel.LOW,
            check_in=CheckIn(sleep_hours=5, hrv_baseline=60, hrv_today=45),
        )
        adjustment = readiness_adjustment(profile)

        assert adjustment.factor == pytest.approx(0.55 * 0.85 * 0.88)
        assert adjustment.reasons == ["low readiness", "short sleep (5h)", "HRV below baseline"]

    def test_normal_check_in(self):
        profile = AthleteProfile(check_in=CheckIn(sleep_hours=8, hrv_baseline=60, hrv_today=58))
        assert readiness_adjustment(profile).factor == 1.0


class TestWeeklyMuscleVolume:
    """Tests for weekly_muscle_volume."""

    def test_sets_resolved_from_catalog(self, hard_history):
        now, history = hard_history
        statuses = {s.muscle_group: s for s in weekly_muscle_volume(history, now, 12)}

        assert statuses["quads"].sets == 25
        assert statuses["quads"].status == "over"
        assert statuses["quads"].action == "decrease"

    def test_exercise_summaries(self):
        history = [make_session(1, START_MS, exercises=[ExerciseSummary("bench_press", 4, ["chest"])])]
        [status] = weekly_muscle_volume(history, START_MS, 12)

        assert status.muscle_group == "chest"
        assert status.ratio == 0.33
        assert status.status == "under"

    def test_even_split_for_unknown_exercises(self):
        """Test that unresolvable sets are shared across the session's muscle groups."""
        history = [
            make_session(
                1,
                START_MS,
                sets=[CompletedSet("mystery_lift", reps=8)] * 6,
                muscle_groups=["back", "biceps"],
            )
        ]
        statuses = weekly_muscle_volume(history, START_MS, 3)
        assert [(s.muscle_group, s.sets, s.status) for s in statuses] == [
            ("back", 3, "on-track"),
            ("biceps", 3, "on-track"),
        ]

    def test_old_sessions_ignored(self):
        history = [make_session(8, START_MS, exercises=[ExerciseSummary("bench_press", 4, ["chest"])])]
        assert weekly_muscle_volume(history, START_MS, 12) == []
