"""Training block and phase data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from ..errors import BlockValidationError


class TrainingPhase(str, Enum):
    """Periodization phases a block can be built from."""

    GPP = "GPP"  # General physical preparedness
    HYPERTROPHY = "Hypertrophy"
    ACCUMULATION = "Accumulation"
    STRENGTH = "Strength"
    INTENSIFICATION = "Intensification"
    POWER = "Power"
    REALIZATION = "Realization"
    PEAKING = "Peaking"
    DELOAD = "Deload"


class SplitPattern(str, Enum):
    """Weekly rotation of session focuses."""

    FULL_BODY = "full-body"
    UPPER_LOWER = "upper-lower"
    PUSH_PULL_LEGS = "push-pull-legs"
    SQUAT_BENCH_DEADLIFT = "squat-bench-deadlift"
    CUSTOM = "custom"


class FocusLevel(str, Enum):
    """Shared scale for a phase's intensity and volume focus."""

    MINIMAL = "minimal"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very-high"


class SessionStructure(str, Enum):
    """How many lifts a generated session holds."""

    ONE_LIFT = "one-lift"  # One lift a day, high frequency
    MAIN_PLUS_ACCESSORY = "main-plus-accessory"
    STANDARD = "standard"
    HIGH_VARIETY = "high-variety"


class SlotCategory(str, Enum):
    """Exercise preference categories."""

    SQUAT = "squat"
    BENCH = "bench"
    DEADLIFT = "deadlift"
    OHP = "ohp"
    CORE = "core"
    ACCESSORY = "accessory"


class SlotTier(str, Enum):
    """Position of a slot within its category."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"
    ANTI_FLEXION = "anti-flexion"
    ANTI_EXTENSION = "anti-extension"
    ANTI_ROTATION = "anti-rotation"
    SLOT_1 = "slot-1"
    SLOT_2 = "slot-2"
    SLOT_3 = "slot-3"


E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: type[E], value: Any, field_name: str) -> E:
    """Parse a closed string set, rejecting unknown values."""
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise BlockValidationError.single(
            field_name,
            f"unknown {enum_cls.__name__} value",
            expected=f"one of: {allowed}",
            value=value,
        ) from None


def require_object(value: Any, field_name: str) -> dict:
    """Reject a nested entry that is not a JSON object."""
    if not isinstance(value, dict):
        raise BlockValidationError.single(field_name, "must be an object", expected="object", value=value)
    return value


def require_list(value: Any, field_name: str) -> list:
    if not isinstance(value, list):
        raise BlockValidationError.single(field_name, "must be a list", expected="list", value=value)
    return value


@dataclass
class ExerciseSlot:
    """A (category, tier) preference, optionally pinned to a catalog exercise."""

    category: SlotCategory
    tier: SlotTier
    exercise_id: str | None = None  # None lets the scheduler/AI choose

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "category": self.category.value,
            "tier": self.tier.value,
            "exercise_id": self.exercise_id,
        }

    @classmethod
    def from_dict(cls, data: dict, path: str = "slot") -> "ExerciseSlot":
        """Create from dictionary."""
        require_object(data, path)
        return cls(
            category=parse_enum(SlotCategory, data.get("category"), f"{path}.category"),
            tier=parse_enum(SlotTier, data.get("tier"), f"{path}.tier"),
            exercise_id=data.get("exercise_id"),
        )


@dataclass
class ExercisePreferences:
    """The athlete's slot selections for a block."""

    slots: list[ExerciseSlot] = field(default_factory=list)

    def find(self, category: SlotCategory, tier: SlotTier) -> ExerciseSlot | None:
        """First slot matching the category and tier."""
        for slot in self.slots:
            if slot.category == category and slot.tier == tier:
                return slot
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"slots": [slot.to_dict() for slot in self.slots]}

    @classmethod
    def from_dict(cls, data: dict, path: str = "exercise_preferences") -> "ExercisePreferences":
        """Create from dictionary."""
        require_object(data, path)
        return cls(
            slots=[
                ExerciseSlot.from_dict(slot, f"{path}.slots[{i}]")
                for i, slot in enumerate(require_list(data.get("slots", []), f"{path}.slots"))
            ]
        )


@dataclass
class TrainingBlockPhase:
    """A contiguous span of weeks sharing one focus and split pattern."""

    phase: TrainingPhase
    week_count: int
    sessions_per_week: int
    split_pattern: SplitPattern
    intensity_focus: FocusLevel = FocusLevel.MODERATE
    volume_focus: FocusLevel = FocusLevel.MODERATE
    primary_archetypes: list[str] = field(default_factory=list)
    description: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "phase": self.phase.value,
            "week_count": self.week_count,
            "sessions_per_week": self.sessions_per_week,
            "split_pattern": self.split_pattern.value,
            "intensity_focus": self.intensity_focus.value,
            "volume_focus": self.volume_focus.value,
            "primary_archetypes": self.primary_archetypes,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict, path: str = "phase") -> "TrainingBlockPhase":
        """Create from dictionary."""
        require_object(data, path)
        return cls(
            phase=parse_enum(TrainingPhase, data.get("phase"), f"{path}.phase"),
            week_count=data.get("week_count", 0),
            sessions_per_week=data.get("sessions_per_week", 0),
            split_pattern=parse_enum(SplitPattern, data.get("split_pattern"), f"{path}.split_pattern"),
            intensity_focus=parse_enum(
                FocusLevel, data.get("intensity_focus", "moderate"), f"{path}.intensity_focus"
            ),
            volume_focus=parse_enum(
                FocusLevel, data.get("volume_focus", "moderate"), f"{path}.volume_focus"
            ),
            primary_archetypes=list(data.get("primary_archetypes", [])),
            description=data.get("description", ""),
        )

    @classmethod
    def from_preset(
        cls,
        phase: TrainingPhase,
        week_count: int,
        sessions_per_week: int,
        split_pattern: SplitPattern,
    ) -> "TrainingBlockPhase":
        """Build a phase from PHASE_PRESETS."""
        preset = PHASE_PRESETS[phase]
        return cls(
            phase=phase,
            week_count=week_count,
            sessions_per_week=sessions_per_week,
            split_pattern=split_pattern,
            intensity_focus=preset["intensity_focus"],
            volume_focus=preset["volume_focus"],
            primary_archetypes=list(preset["primary_archetypes"]),
            description=preset["description"],
        )


@dataclass
class TrainingBlock:
    """A multi-week periodized training cycle."""

    id: str
    name: str
    start_date: int  # epoch milliseconds
    phases: list[TrainingBlockPhase] = field(default_factory=list)
    training_days: list[int] | None = None  # 0=Sun ... 6=Sat
    exercise_preferences: ExercisePreferences | None = None
    goal_bias: float | None = None  # 0 = pure hypertrophy, 100 = pure strength
    volume_tolerance: float | None = None  # 1 = conservative ... 5 = high capacity
    is_active: bool = False
    goal_event: str | None = None  # e.g. "Powerlifting Meet"
    goal_date: int | None = None
    length_weeks: int | None = None  # only meaningful when phases is empty
    session_structure: SessionStructure = SessionStructure.STANDARD

    @property
    def total_weeks(self) -> int:
        """Total block length. Phases are the source of truth when present."""
        if self.phases:
            return sum(phase.week_count for phase in self.phases)
        return self.length_weeks or 0

    @property
    def total_sessions(self) -> int:
        """Number of sessions the block schedules."""
        return sum(phase.week_count * phase.sessions_per_week for phase in self.phases)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "start_date": self.start_date,
            "phases": [phase.to_dict() for phase in self.phases],
            "training_days": self.training_days,
            "exercise_preferences": (
                self.exercise_preferences.to_dict() if self.exercise_preferences else None
            ),
            "goal_bias": self.goal_bias,
            "volume_tolerance": self.volume_tolerance,
            "is_active": self.is_active,
            "goal_event": self.goal_event,
            "goal_date": self.goal_date,
            "length_weeks": self.length_weeks,
            "session_structure": self.session_structure.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TrainingBlock":
        """Create from dictionary.

        Unknown enum values raise BlockValidationError. Numeric ranges are
        checked separately by planning.validation.validate_block.
        """
        require_object(data, "block")
        for required in ("id", "name", "start_date"):
            if required not in data:
                raise BlockValidationError.single(required, "missing required field")

        prefs = data.get("exercise_preferences")
        return cls(
            id=str(data["id"]),
            name=data["name"],
            start_date=data["start_date"],
            phases=[
                TrainingBlockPhase.from_dict(phase, f"phases[{i}]")
                for i, phase in enumerate(require_list(data.get("phases") or [], "phases"))
            ],
            training_days=data.get("training_days"),
            exercise_preferences=ExercisePreferences.from_dict(prefs) if prefs else None,
            goal_bias=data.get("goal_bias"),
            volume_tolerance=data.get("volume_tolerance"),
            is_active=data.get("is_active", False),
            goal_event=data.get("goal_event"),
            goal_date=data.get("goal_date"),
            length_weeks=data.get("length_weeks"),
            session_structure=parse_enum(
                SessionStructure,
                data.get("session_structure") or SessionStructure.STANDARD.value,
                "session_structure",
            ),
        )

    def get_summary(self) -> str:
        """Generate a short summary of the block."""
        summary = f"Block: {self.name}\n"
        summary += f"Length: {self.total_weeks} weeks, {self.total_sessions} sessions\n"
        if self.goal_event:
            summary += f"Goal event: {self.goal_event}\n"
        for i, phase in enumerate(self.phases, 1):
            summary += (
                f"  {i}. {phase.phase.value}: {phase.week_count} wk x "
                f"{phase.sessions_per_week}/wk ({phase.split_pattern.value}, "
                f"intensity {phase.intensity_focus.value}, volume {phase.volume_focus.value})\n"
            )
        return summary


# Default focus/archetypes per phase, used by templates and the block wizard
PHASE_PRESETS: dict[TrainingPhase, dict] = {
    TrainingPhase.GPP: {
        "intensity_focus": FocusLevel.LOW,
        "volume_focus": FocusLevel.MODERATE,
        "primary_archetypes": ["hyp_upper_lower", "hyp_tempo"],
        "description": "Work capacity and movement quality. Moderate volume, light loads.",
    },
    TrainingPhase.HYPERTROPHY: {
        "intensity_focus": FocusLevel.MODERATE,
        "volume_focus": FocusLevel.HIGH,
        "primary_archetypes": ["hyp_ppl", "hyp_upper_lower", "gvt"],
        "description": "High volume, moderate loads. Build muscle mass.",
    },
    TrainingPhase.ACCUMULATION: {
        "intensity_focus": FocusLevel.MODERATE,
        "volume_focus": FocusLevel.VERY_HIGH,
        "primary_archetypes": ["hyp_ppl", "dup_3day", "hyp_upper_lower"],
        "description": "Build work capacity with high volume.",
    },
    TrainingPhase.STRENGTH: {
        "intensity_focus": FocusLevel.HIGH,
        "volume_focus": FocusLevel.MODERATE,
        "primary_archetypes": ["str_5x5", "str_531", "str_texas"],
        "description": "Increase intensity, reduce volume. Build raw strength.",
    },
    TrainingPhase.INTENSIFICATION: {
        "intensity_focus": FocusLevel.HIGH,
        "volume_focus": FocusLevel.MODERATE,
        "primary_archetypes": ["str_531", "str_texas", "conjugate_me"],
        "description": "Progressive overload on competition lifts.",
    },
    TrainingPhase.POWER: {
        "intensity_focus": FocusLevel.HIGH,
        "volume_focus": FocusLevel.LOW,
        "primary_archetypes": ["pow_olympic", "str_speed"],
        "description": "Explosive intent, moderate loads, low fatigue.",
    },
    TrainingPhase.REALIZATION: {
        "intensity_focus": FocusLevel.VERY_HIGH,
        "volume_focus": FocusLevel.LOW,
        "primary_archetypes": ["str_heavy_singles", "str_cluster", "str_531"],
        "description": "Peak intensity, minimal volume. Heavy singles & doubles.",
    },
    TrainingPhase.PEAKING: {
        "intensity_focus": FocusLevel.VERY_HIGH,
        "volume_focus": FocusLevel.LOW,
        "primary_archetypes": ["str_heavy_singles", "str_cluster"],
        "description": "Test new maxes. Minimal fatigue, maximal expression.",
    },
    TrainingPhase.DELOAD: {
        "intensity_focus": FocusLevel.LOW,
        "volume_focus": FocusLevel.MINIMAL,
        "primary_archetypes": ["deload_light", "deload_movement"],
        "description": "Active recovery. 50-60% loads, movement quality focus.",
    },
}


def _phase(phase, weeks, sessions, split, intensity, volume, archetypes, description):
    return TrainingBlockPhase(
        phase=phase,
        week_count=weeks,
        sessions_per_week=sessions,
        split_pattern=split,
        intensity_focus=intensity,
        volume_focus=volume,
        primary_archetypes=archetypes,
        description=description,
    )


# Pre-built blocks; build a TrainingBlock with block_from_template()
BLOCK_TEMPLATES: dict[str, dict] = {
    "linear-8-week": {
        "name": "8-Week Linear Progression",
        "phases": [
            _phase(TrainingPhase.HYPERTROPHY, 3, 4, SplitPattern.UPPER_LOWER,
                   FocusLevel.MODERATE, FocusLevel.HIGH, ["hyp_ppl", "hyp_upper_lower", "gvt"],
                   "High volume hypertrophy. Build muscle mass with moderate loads."),
            _phase(TrainingPhase.STRENGTH, 3, 4, SplitPattern.UPPER_LOWER,
                   FocusLevel.HIGH, FocusLevel.MODERATE, ["str_5x5", "str_531", "str_texas"],
                   "Increase intensity, reduce volume. Build raw strength."),
            _phase(TrainingPhase.PEAKING, 1, 3, SplitPattern.SQUAT_BENCH_DEADLIFT,
                   FocusLevel.VERY_HIGH, FocusLevel.LOW, ["str_heavy_singles", "str_cluster"],
                   "Peak intensity, minimal volume. Test new maxes."),
            _phase(TrainingPhase.DELOAD, 1, 3, SplitPattern.FULL_BODY,
                   FocusLevel.LOW, FocusLevel.MINIMAL, ["deload_light", "deload_movement"],
                   "Active recovery. 50-60% loads, focus on movement quality."),
        ],
    },
    "powerlifting-12-week": {
        "name": "12-Week Powerlifting Prep",
        "phases": [
            _phase(TrainingPhase.ACCUMULATION, 4, 4, SplitPattern.UPPER_LOWER,
                   FocusLevel.MODERATE, FocusLevel.VERY_HIGH, ["hyp_ppl", "dup_3day", "hyp_upper_lower"],
                   "Build work capacity. High volume, moderate intensity."),
            _phase(TrainingPhase.INTENSIFICATION, 4, 4, SplitPattern.SQUAT_BENCH_DEADLIFT,
                   FocusLevel.HIGH, FocusLevel.MODERATE, ["str_531", "str_texas", "conjugate_me"],
                   "Increase loads progressively. Competition lift focus."),
            _phase(TrainingPhase.REALIZATION, 3, 3, SplitPattern.SQUAT_BENCH_DEADLIFT,
                   FocusLevel.VERY_HIGH, FocusLevel.LOW, ["str_heavy_singles", "str_cluster", "str_531"],
                   "Peak for meet. Heavy singles and doubles."),
            _phase(TrainingPhase.DELOAD, 1, 2, SplitPattern.FULL_BODY,
                   FocusLevel.MINIMAL, FocusLevel.MINIMAL, ["deload_light"],
                   "Meet week. Openers only, rest and recover."),
        ],
    },
    "hypertrophy-6-week": {
        "name": "6-Week Hypertrophy Block",
        "phases": [
            _phase(TrainingPhase.ACCUMULATION, 2, 4, SplitPattern.PUSH_PULL_LEGS,
                   FocusLevel.MODERATE, FocusLevel.HIGH, ["hyp_ppl", "hyp_upper_lower", "hyp_bro_split"],
                   "Progressive volume increase. 3-4 sets per exercise."),
            _phase(TrainingPhase.HYPERTROPHY, 3, 5, SplitPattern.PUSH_PULL_LEGS,
                   FocusLevel.MODERATE, FocusLevel.VERY_HIGH, ["gvt", "hyp_ppl", "hyp_arnold"],
                   "Peak volume phase. Mechanical tension and metabolic stress."),
            _phase(TrainingPhase.DELOAD, 1, 3, SplitPattern.FULL_BODY,
                   FocusLevel.LOW, FocusLevel.LOW, ["deload_light", "deload_movement"],
                   "Recover and grow. Reduce volume 40-50%."),
        ],
    },
}


def block_from_template(
    template_id: str,
    block_id: str,
    start_date: int,
    training_days: list[int] | None = None,
    is_active: bool = False,
) -> TrainingBlock:
    """Instantiate a TrainingBlock from BLOCK_TEMPLATES."""
    if template_id not in BLOCK_TEMPLATES:
        raise KeyError(f"Unknown block template: {template_id}")
    template = BLOCK_TEMPLATES[template_id]
    return TrainingBlock(
        id=block_id,
        name=template["name"],
        start_date=start_date,
        phases=[TrainingBlockPhase.from_dict(p.to_dict()) for p in template["phases"]],
        training_days=training_days,
        is_active=is_active,
    )
