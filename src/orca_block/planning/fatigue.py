"""Fatigue signals derived from training history.

History can arrive in any order; everything here sorts by timestamp first
and measures windows back from an explicit ``now_ms``.
"""

from collections import defaultdict
from dataclasses import dataclass, field

from ..models.athlete import AthleteProfile, ReadinessLevel
from ..models.exercises import ExerciseCatalog, default_catalog
from ..models.history import SessionRecord
from ..models.optimizer import FatigueTuning, MuscleVolumeStatus
from .timeline import DAY_MS, WEEK_MS

MIN_SESSIONS_FOR_TREND = 4
MIN_SESSIONS_PER_TRAINING_WEEK = 2


@dataclass
class FatigueSignals:
    """Raw history measurements feeding the fatigue score."""

    sessions_3d: int = 0
    sessions_7d: int = 0
    hard_sessions_7d: int = 0
    tonnage_7d: float = 0.0
    tonnage_prior_7d: float = 0.0
    rpe_streak: int = 0
    rpe_trend: str | None = None  # rising, falling, stable
    last_session_high_rpe: bool = False
    consecutive_training_weeks: int = 0

    @property
    def tonnage_ratio(self) -> float | None:
        if self.tonnage_prior_7d <= 0:
            return None
        return self.tonnage_7d / self.tonnage_prior_7d

    def to_dict(self) -> dict:
        return {
            "sessions_3d": self.sessions_3d,
            "sessions_7d": self.sessions_7d,
            "hard_sessions_7d": self.hard_sessions_7d,
            "tonnage_7d": self.tonnage_7d,
            "tonnage_prior_7d": self.tonnage_prior_7d,
            "rpe_streak": self.rpe_streak,
            "rpe_trend": self.rpe_trend,
            "last_session_high_rpe": self.last_session_high_rpe,
            "consecutive_training_weeks": self.consecutive_training_weeks,
        }


@dataclass
class ReadinessAdjustment:
    """Multiplicative factor from readiness and the pre-workout check-in."""

    factor: float = 1.0
    reasons: list[str] = field(default_factory=list)


def sort_history(history: list[SessionRecord]) -> list[SessionRecord]:
    """Oldest first."""
    return sorted(history, key=lambda record: record.timestamp)


def _mean(values: list[float]) -> float | None:
    return sum(values) / len(values) if values else None


def is_hard_session(record: SessionRecord, tuning: FatigueTuning) -> bool:
    """A session is hard if its load, prescribed RPE or session RPE ran high."""
    avg_pct = _mean([s.intensity_pct for s in record.sets if s.intensity_pct is not None])
    if avg_pct is None:
        avg_pct = _mean(
            [ex.avg_intensity_pct for ex in record.exercises if ex.avg_intensity_pct is not None]
        )
    if avg_pct is not None and avg_pct >= tuning.hard_intensity_pct:
        return True

    avg_rpe_target = _mean([ex.rpe_target for ex in record.exercises if ex.rpe_target is not None])
    if avg_rpe_target is not None and avg_rpe_target >= tuning.hard_rpe_target:
        return True

    return record.session_rpe is not None and record.session_rpe >= tuning.hard_session_rpe


def session_rpe_trend(history: list[SessionRecord], tuning: FatigueTuning) -> str | None:
    """Direction of session RPE over the most recent sessions that logged it."""
    rpes = [r.session_rpe for r in sort_history(history) if r.session_rpe is not None]
    recent = rpes[-tuning.rpe_trend_window:]
    if len(recent) < MIN_SESSIONS_FOR_TREND:
        return None
    half = len(recent) // 2
    delta = _mean(recent[-half:]) - _mean(recent[:half])
    if delta >= tuning.rpe_trend_delta:
        return "rising"
    if delta <= -tuning.rpe_trend_delta:
        return "falling"
    return "stable"


def session_rpe_streak(history: list[SessionRecord], tuning: FatigueTuning) -> int:
    """Number of latest consecutive sessions at or above the streak RPE."""
    streak = 0
    for record in reversed(sort_history(history)):
        if record.session_rpe is None or record.session_rpe < tuning.rpe_streak_threshold:
            break
        streak += 1
    return streak


def had_high_set_rpe(record: SessionRecord, tuning: FatigueTuning) -> bool:
    """Two or more sets, or at least half of the rated sets, at high RPE."""
    rated = [s.rpe for s in record.sets if s.rpe is not None]
    if not rated:
        return False
    high = sum(1 for rpe in rated if rpe >= tuning.high_set_rpe)
    return high >= 2 or high / len(rated) >= 0.5


def consecutive_training_weeks(history: list[SessionRecord], now_ms: int) -> int:
    """Unbroken run of recent 7-day windows that each held two or more sessions."""
    weeks = 0
    while True:
        window_end = now_ms - weeks * WEEK_MS
        window_start = window_end - WEEK_MS
        count = sum(1 for r in history if window_start < r.timestamp <= window_end)
        if count < MIN_SESSIONS_PER_TRAINING_WEEK:
            return weeks
        weeks += 1


def compute_fatigue_signals(
    history: list[SessionRecord],
    now_ms: int,
    tuning: FatigueTuning | None = None,
) -> FatigueSignals:
    """Measure the history windows that feed the fatigue score."""
    tuning = tuning or FatigueTuning()
    ordered = [r for r in sort_history(history) if r.timestamp <= now_ms]
    if not ordered:
        return FatigueSignals()

    last_3d = [r for r in ordered if r.timestamp > now_ms - 3 * DAY_MS]
    last_7d = [r for r in ordered if r.timestamp > now_ms - WEEK_MS]
    prior_7d = [r for r in ordered if now_ms - 2 * WEEK_MS < r.timestamp <= now_ms - WEEK_MS]

    return FatigueSignals(
        sessions_3d=len(last_3d),
        sessions_7d=len(last_7d),
        hard_sessions_7d=sum(1 for r in last_7d if is_hard_session(r, tuning)),
        tonnage_7d=sum(r.tonnage for r in last_7d),
        tonnage_prior_7d=sum(r.tonnage for r in prior_7d),
        rpe_streak=session_rpe_streak(ordered, tuning),
        rpe_trend=session_rpe_trend(ordered, tuning),
        last_session_high_rpe=had_high_set_rpe(ordered[-1], tuning),
        consecutive_training_weeks=consecutive_training_weeks(ordered, now_ms),
    )


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def fatigue_components(signals: FatigueSignals, tuning: FatigueTuning) -> dict[str, float]:
    """Each fatigue component scaled to [0, 1]."""
    dense = signals.sessions_3d >= tuning.dense_sessions_3d
    busy = signals.sessions_7d >= tuning.busy_sessions_7d
    frequency = 1.0 if dense else (0.5 if busy else 0.0)
    ratio = signals.tonnage_ratio
    tonnage = 0.0
    if ratio is not None and tuning.tonnage_spike_ratio > 1:
        tonnage = _clamp01((ratio - 1.0) / (tuning.tonnage_spike_ratio - 1.0))
    return {
        "frequency": frequency,
        "hard_sessions": _clamp01(signals.hard_sessions_7d / max(1, tuning.hard_sessions_cap)),
        "tonnage_trend": tonnage,
        "rpe_streak": _clamp01(signals.rpe_streak / max(1, tuning.rpe_streak_cap)),
        "rpe_trend": 1.0 if signals.rpe_trend == "rising" else 0.0,
        "last_session_rpe": 1.0 if signals.last_session_high_rpe else 0.0,
    }


def fatigue_score(signals: FatigueSignals, tuning: FatigueTuning | None = None) -> float:
    """Weighted fatigue score in [0, 1]; 0 means no detectable fatigue."""
    tuning = tuning or FatigueTuning()
    components = fatigue_components(signals, tuning)
    weights = {
        "frequency": tuning.weight_frequency,
        "hard_sessions": tuning.weight_hard_sessions,
        "tonnage_trend": tuning.weight_tonnage_trend,
        "rpe_streak": tuning.weight_rpe_streak,
        "rpe_trend": tuning.weight_rpe_trend,
        "last_session_rpe": tuning.weight_last_session_rpe,
    }
    total_weight = sum(max(0.0, w) for w in weights.values())
    if total_weight <= 0:
        return 0.0
    score = sum(components[name] * max(0.0, w) for name, w in weights.items()) / total_weight
    return _clamp01(score)


def readiness_adjustment(profile: AthleteProfile, tuning: FatigueTuning | None = None) -> ReadinessAdjustment:
    """Damping from low readiness, short sleep or suppressed HRV."""
    tuning = tuning or FatigueTuning()
    adjustment = ReadinessAdjustment()

    if profile.readiness == ReadinessLevel.LOW:
        adjustment.factor *= tuning.low_readiness_factor
        adjustment.reasons.append("low readiness")

    check_in = profile.check_in
    if check_in is not None:
        if check_in.sleep_hours is not None and check_in.sleep_hours < tuning.poor_sleep_hours:
            adjustment.factor *= tuning.poor_sleep_factor
            adjustment.reasons.append(f"short sleep ({check_in.sleep_hours:g}h)")
        if (
            check_in.hrv_baseline
            and check_in.hrv_today is not None
            and check_in.hrv_today < tuning.hrv_drop_ratio * check_in.hrv_baseline
        ):
            adjustment.factor *= tuning.hrv_factor
            adjustment.reasons.append("HRV below baseline")

    return adjustment


def fatigue_multiplier(score: float, readiness_factor: float, tuning: FatigueTuning | None = None) -> float:
    """Volume multiplier in [min_multiplier, 1]; never above 1."""
    tuning = tuning or FatigueTuning()
    floor = max(0.01, min(1.0, tuning.min_multiplier))
    raw = (1.0 - max(0.0, tuning.max_damping) * _clamp01(score)) * min(1.0, readiness_factor)
    return max(floor, min(1.0, raw))


def _session_muscle_sets(record: SessionRecord, catalog: ExerciseCatalog) -> dict[str, int]:
    counts: dict[str, int] = defaultdict(int)
    if record.exercises:
        for ex in record.exercises:
            for muscle in ex.muscle_groups:
                counts[muscle] += ex.sets
        return counts

    resolved = False
    for completed in record.sets:
        exercise = catalog.get(completed.exercise_id)
        if exercise is None:
            continue
        resolved = True
        for muscle in exercise.muscle_groups:
            counts[muscle.value] += 1
    if resolved or not record.muscle_groups:
        return counts

    share = record.total_sets // len(record.muscle_groups)
    for muscle in record.muscle_groups:
        counts[muscle] += share
    return counts


def weekly_muscle_volume(
    history: list[SessionRecord],
    now_ms: int,
    target_sets: int,
    catalog: ExerciseCatalog | None = None,
) -> list[MuscleVolumeStatus]:
    """Sets per muscle group over the last 7 days against the weekly target."""
    if catalog is None:
        catalog = default_catalog()
    totals: dict[str, int] = defaultdict(int)
    for record in history:
        if now_ms - WEEK_MS < record.timestamp <= now_ms:
            for muscle, sets in _session_muscle_sets(record, catalog).items():
                totals[muscle] += sets

    statuses = []
    target = max(1, target_sets)
    for muscle in sorted(totals):
        ratio = round(totals[muscle] / target, 2)
        if ratio < 0.7:
            status, action = "under", "increase"
        elif ratio <= 1.15:
            status, action = "on-track", "maintain"
        else:
            status, action = "over", "decrease"
        statuses.append(
            MuscleVolumeStatus(
                muscle_group=muscle,
                sets=totals[muscle],
                target=target,
                ratio=ratio,
                status=status,
                action=action,
            )
        )
    return statuses
