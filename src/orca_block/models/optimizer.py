"""Optimizer configuration, phase context and recommendation models."""

from dataclasses import dataclass, field, fields
from enum import Enum

from .block import TrainingBlockPhase
from .athlete import TrainingGoalFocus


class RepRangePreference(str, Enum):
    """Athlete's preferred rep range; auto defers to the goal."""

    AUTO = "auto"
    LOW = "low"  # 3-5 reps
    MODERATE = "moderate"  # 8-12 reps
    HIGH = "high"  # 15-20+ reps


class MetabolicZone(str, Enum):
    """Session metabolic stress classification."""

    LIGHT = "light"
    MODERATE = "moderate"
    MODERATE_HIGH = "moderate-high"
    HIGH = "high"
    EXTREME = "extreme"


@dataclass
class FatigueTuning:
    """Coefficients for the history-based fatigue damping.

    Component weights are normalized by their sum, so only their ratios
    matter. The final multiplier is 1 - max_damping * score, scaled by the
    readiness and check-in factors and clamped to [min_multiplier, 1].
    """

    max_damping: float = 0.30
    min_multiplier: float = 0.40

    weight_frequency: float = 0.20
    weight_hard_sessions: float = 0.20
    weight_tonnage_trend: float = 0.20
    weight_rpe_streak: float = 0.15
    weight_rpe_trend: float = 0.10
    weight_last_session_rpe: float = 0.15

    dense_sessions_3d: int = 3  # sessions within 3 days that count as dense
    busy_sessions_7d: int = 5
    hard_sessions_cap: int = 3
    hard_intensity_pct: float = 85.0
    hard_rpe_target: float = 8.5
    hard_session_rpe: float = 8.0
    tonnage_spike_ratio: float = 1.3  # last 7 days vs prior 7
    rpe_streak_threshold: float = 8.0
    rpe_streak_cap: int = 3
    rpe_trend_window: int = 5
    rpe_trend_delta: float = 0.5
    high_set_rpe: float = 8.5

    low_readiness_factor: float = 0.55
    poor_sleep_hours: float = 6.0
    poor_sleep_factor: float = 0.85
    hrv_drop_ratio: float = 0.85
    hrv_factor: float = 0.88

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict) -> "FatigueTuning":
        """Create from dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown fatigue tuning keys: {', '.join(sorted(unknown))}")
        return cls(**data)


@dataclass
class OptimizerConfig:
    """Athlete-level optimizer settings."""

    enabled: bool = True
    max_sets_per_session: int = 25
    hard_session_cap: int = 40  # absolute limit after tolerance and damping
    rep_range_preference: RepRangePreference = RepRangePreference.AUTO
    auto_deload: bool = True
    deload_frequency_weeks: int = 4
    target_sets_per_muscle_group: int = 12  # weekly
    working_intensity_pct: float | None = None  # defaults to the goal's midpoint
    working_reps: int = 10
    working_rpe: float = 8.0
    fatigue: FatigueTuning = field(default_factory=FatigueTuning)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "enabled": self.enabled,
            "max_sets_per_session": self.max_sets_per_session,
            "hard_session_cap": self.hard_session_cap,
            "rep_range_preference": self.rep_range_preference.value,
            "auto_deload": self.auto_deload,
            "deload_frequency_weeks": self.deload_frequency_weeks,
            "target_sets_per_muscle_group": self.target_sets_per_muscle_group,
            "working_intensity_pct": self.working_intensity_pct,
            "working_reps": self.working_reps,
            "working_rpe": self.working_rpe,
            "fatigue": self.fatigue.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OptimizerConfig":
        """Create from dictionary."""
        return cls(
            enabled=data.get("enabled", True),
            max_sets_per_session=data.get("max_sets_per_session", 25),
            hard_session_cap=data.get("hard_session_cap", 40),
            rep_range_preference=RepRangePreference(data.get("rep_range_preference", "auto")),
            auto_deload=data.get("auto_deload", True),
            deload_frequency_weeks=data.get("deload_frequency_weeks", 4),
            target_sets_per_muscle_group=data.get("target_sets_per_muscle_group", 12),
            working_intensity_pct=data.get("working_intensity_pct"),
            working_reps=data.get("working_reps", 10),
            working_rpe=data.get("working_rpe", 8.0),
            fatigue=FatigueTuning.from_dict(data.get("fatigue", {})),
        )


@dataclass
class PhaseContext:
    """Where an instant falls inside a training block."""

    phase: TrainingBlockPhase
    phase_index: int
    week_in_phase: int  # 1-based
    total_weeks_in_phase: int
    week_in_block: int  # 1-based
    total_block_weeks: int
    block_name: str
    goal_event: str | None = None
    is_end_of_block: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "phase": self.phase.to_dict(),
            "phase_index": self.phase_index,
            "week_in_phase": self.week_in_phase,
            "total_weeks_in_phase": self.total_weeks_in_phase,
            "week_in_block": self.week_in_block,
            "total_block_weeks": self.total_block_weeks,
            "block_name": self.block_name,
            "goal_event": self.goal_event,
            "is_end_of_block": self.is_end_of_block,
        }


@dataclass
class IntensityRange:
    """Target load as a percentage of 1RM."""

    min: float
    max: float

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}


@dataclass
class RepScheme:
    """Sets and reps per exercise."""

    sets_min: int
    sets_max: int
    reps_min: int
    reps_max: int

    def describe(self) -> str:
        return f"{self.sets_min}-{self.sets_max} sets x {self.reps_min}-{self.reps_max} reps"

    def to_dict(self) -> dict:
        return {
            "sets_min": self.sets_min,
            "sets_max": self.sets_max,
            "reps_min": self.reps_min,
            "reps_max": self.reps_max,
        }


@dataclass
class MuscleVolumeStatus:
    """Weekly set count for one muscle group against its target."""

    muscle_group: str
    sets: int
    target: int
    ratio: float
    status: str  # under, on-track, over
    action: str  # increase, maintain, decrease

    def to_dict(self) -> dict:
        return {
            "muscle_group": self.muscle_group,
            "sets": self.sets,
            "target": self.target,
            "ratio": self.ratio,
            "status": self.status,
            "action": self.action,
        }


@dataclass
class OptimizerRecommendations:
    """Volume, intensity and fatigue targets for the next session."""

    target_volume: int  # total working sets
    target_intensity: IntensityRange
    fatigue_adjustment: float  # multiplier in (0, 1]
    metabolic_target_sets: int | None
    zone: MetabolicZone
    rationale: str
    training_goal_focus: TrainingGoalFocus = TrainingGoalFocus.GENERAL
    nominal_volume: float = 0.0
    fatigue_score: float = 0.0
    rep_scheme: RepScheme | None = None
    rest_range: tuple[int, int] = (90, 150)  # seconds
    exercise_count: int = 4
    suggested_focus: str = ""
    metabolic_load_per_set: float = 0.0
    weekly_volume_status: list[MuscleVolumeStatus] = field(default_factory=list)
    muscle_group_priorities: list[str] = field(default_factory=list)
    target_reps_per_exercise: int | None = None
    peak_force_drop_rep: int | None = None
    strength_set_division: list[int] = field(default_factory=list)
    auto_deload: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "target_volume": self.target_volume,
            "target_intensity": self.target_intensity.to_dict(),
            "fatigue_adjustment": self.fatigue_adjustment,
            "metabolic_target_sets": self.metabolic_target_sets,
            "zone": self.zone.value,
            "rationale": self.rationale,
            "training_goal_focus": self.training_goal_focus.value,
            "nominal_volume": self.nominal_volume,
            "fatigue_score": self.fatigue_score,
            "rep_scheme": self.rep_scheme.to_dict() if self.rep_scheme else None,
            "rest_range": list(self.rest_range),
            "exercise_count": self.exercise_count,
            "suggested_focus": self.suggested_focus,
            "metabolic_load_per_set": self.metabolic_load_per_set,
            "weekly_volume_status": [s.to_dict() for s in self.weekly_volume_status],
            "muscle_group_priorities": self.muscle_group_priorities,
            "target_reps_per_exercise": self.target_reps_per_exercise,
            "peak_force_drop_rep": self.peak_force_drop_rep,
            "strength_set_division": self.strength_set_division,
            "auto_deload": self.auto_deload,
        }
