"""Scheduled workout skeleton models."""

from dataclasses import dataclass, field
from enum import Enum

from .block import TrainingPhase


class WorkoutStatus(str, Enum):
    """Lifecycle of a scheduled session."""

    PLANNED = "planned"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class SuggestedIntensity(str, Enum):
    """Coarse intensity hint shown alongside a scheduled session."""

    REST = "rest"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


@dataclass
class SkeletonExercise:
    """An exercise resolved from a slot preference."""

    exercise_id: str
    exercise_name: str
    tier: str  # primary, secondary, tertiary or accessory

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "exercise_id": self.exercise_id,
            "exercise_name": self.exercise_name,
            "tier": self.tier,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SkeletonExercise":
        """Create from dictionary."""
        return cls(
            exercise_id=data["exercise_id"],
            exercise_name=data["exercise_name"],
            tier=data.get("tier", "accessory"),
        )


@dataclass
class ScheduledWorkout:
    """A dated session skeleton produced from a training block."""

    id: str
    date: str  # ISO date, UTC (YYYY-MM-DD)
    label: str
    phase: TrainingPhase
    training_block_id: str
    phase_index: int
    week_index: int
    day_index: int
    session_focus: str
    skeleton_exercises: list[SkeletonExercise] = field(default_factory=list)
    target_intensity: str = ""
    target_volume: str = ""
    target_sets_per_exercise: str = ""
    target_rep_range: str = ""
    status: WorkoutStatus = WorkoutStatus.PLANNED
    suggested_intensity: SuggestedIntensity = SuggestedIntensity.MODERATE
    suggested_duration: int = 60  # minutes
    notes: str = ""

    def mark_completed(self) -> None:
        """Mark the session as done."""
        if self.status != WorkoutStatus.PLANNED:
            raise ValueError(f"Cannot complete a {self.status.value} workout")
        self.status = WorkoutStatus.COMPLETED

    def mark_skipped(self) -> None:
        """Mark the session as skipped."""
        if self.status != WorkoutStatus.PLANNED:
            raise ValueError(f"Cannot skip a {self.status.value} workout")
        self.status = WorkoutStatus.SKIPPED

    def reassign_exercise(self, index: int, exercise_id: str, exercise_name: str) -> None:
        """Swap the exercise in one skeleton slot, keeping its tier."""
        if not 0 <= index < len(self.skeleton_exercises):
            raise IndexError(f"No skeleton exercise at position {index}")
        current = self.skeleton_exercises[index]
        self.skeleton_exercises[index] = SkeletonExercise(
            exercise_id=exercise_id,
            exercise_name=exercise_name,
            tier=current.tier,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "date": self.date,
            "label": self.label,
            "phase": self.phase.value,
            "training_block_id": self.training_block_id,
            "phase_index": self.phase_index,
            "week_index": self.week_index,
            "day_index": self.day_index,
            "session_focus": self.session_focus,
            "skeleton_exercises": [ex.to_dict() for ex in self.skeleton_exercises],
            "target_intensity": self.target_intensity,
            "target_volume": self.target_volume,
            "target_sets_per_exercise": self.target_sets_per_exercise,
            "target_rep_range": self.target_rep_range,
            "status": self.status.value,
            "suggested_intensity": self.suggested_intensity.value,
            "suggested_duration": self.suggested_duration,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScheduledWorkout":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            date=data["date"],
            label=data["label"],
            phase=TrainingPhase(data["phase"]),
            training_block_id=data["training_block_id"],
            phase_index=data["phase_index"],
            week_index=data["week_index"],
            day_index=data["day_index"],
            session_focus=data["session_focus"],
            skeleton_exercises=[
                SkeletonExercise.from_dict(ex) for ex in data.get("skeleton_exercises", [])
            ],
            target_intensity=data.get("target_intensity", ""),
            target_volume=data.get("target_volume", ""),
            target_sets_per_exercise=data.get("target_sets_per_exercise", ""),
            target_rep_range=data.get("target_rep_range", ""),
            status=WorkoutStatus(data.get("status", "planned")),
            suggested_intensity=SuggestedIntensity(data.get("suggested_intensity", "moderate")),
            suggested_duration=data.get("suggested_duration", 60),
            notes=data.get("notes", ""),
        )
