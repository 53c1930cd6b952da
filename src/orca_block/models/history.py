"""Completed training history models."""

from dataclasses import dataclass, field


@dataclass
class CompletedSet:
    """One logged working set."""

    exercise_id: str
    reps: int
    weight: float = 0.0  # kg
    rpe: float | None = None
    intensity_pct: float | None = None  # % of 1RM when known

    @property
    def tonnage(self) -> float:
        return self.weight * self.reps

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "exercise_id": self.exercise_id,
            "reps": self.reps,
            "weight": self.weight,
            "rpe": self.rpe,
            "intensity_pct": self.intensity_pct,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CompletedSet":
        """Create from dictionary."""
        return cls(
            exercise_id=data["exercise_id"],
            reps=data["reps"],
            weight=data.get("weight", 0.0),
            rpe=data.get("rpe"),
            intensity_pct=data.get("intensity_pct"),
        )


@dataclass
class ExerciseSummary:
    """Per-exercise rollup of a session."""

    exercise_id: str
    sets: int
    muscle_groups: list[str] = field(default_factory=list)
    avg_intensity_pct: float | None = None
    rpe_target: float | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "exercise_id": self.exercise_id,
            "sets": self.sets,
            "muscle_groups": self.muscle_groups,
            "avg_intensity_pct": self.avg_intensity_pct,
            "rpe_target": self.rpe_target,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseSummary":
        """Create from dictionary."""
        return cls(
            exercise_id=data["exercise_id"],
            sets=data.get("sets", 0),
            muscle_groups=list(data.get("muscle_groups", [])),
            avg_intensity_pct=data.get("avg_intensity_pct"),
            rpe_target=data.get("rpe_target"),
        )


@dataclass
class SessionRecord:
    """A completed session as seen by the optimizer.

    History lists may arrive in any order; consumers sort by timestamp.
    """

    timestamp: int  # epoch milliseconds
    tonnage: float = 0.0
    sets: list[CompletedSet] = field(default_factory=list)
    exercises: list[ExerciseSummary] = field(default_factory=list)
    session_rpe: float | None = None
    muscle_groups: list[str] = field(default_factory=list)

    @property
    def total_sets(self) -> int:
        if self.sets:
            return len(self.sets)
        return sum(ex.sets for ex in self.exercises)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "timestamp": self.timestamp,
            "tonnage": self.tonnage,
            "sets": [s.to_dict() for s in self.sets],
            "exercises": [ex.to_dict() for ex in self.exercises],
            "session_rpe": self.session_rpe,
            "muscle_groups": self.muscle_groups,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionRecord":
        """Create from dictionary.

        Tonnage is derived from the logged sets when not given.
        """
        sets = [CompletedSet.from_dict(s) for s in data.get("sets", [])]
        tonnage = data.get("tonnage")
        if tonnage is None:
            tonnage = sum(s.tonnage for s in sets)
        return cls(
            timestamp=data["timestamp"],
            tonnage=tonnage,
            sets=sets,
            exercises=[ExerciseSummary.from_dict(ex) for ex in data.get("exercises", [])],
            session_rpe=data.get("session_rpe"),
            muscle_groups=list(data.get("muscle_groups", [])),
        )
