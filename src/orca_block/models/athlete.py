"""Athlete profile models."""

from dataclasses import dataclass
from enum import Enum


class TrainingGoalFocus(str, Enum):
    """Goal the optimizer tunes volume and intensity for."""

    STRENGTH = "strength"
    HYPERTROPHY = "hypertrophy"
    POWER = "power"
    ENDURANCE = "endurance"
    GENERAL = "general"


class ReadinessLevel(str, Enum):
    """Self-reported readiness for today's session."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class CheckIn:
    """Optional pre-workout check-in."""

    sleep_hours: float | None = None
    hrv_baseline: float | None = None  # ms, rolling average
    hrv_today: float | None = None  # ms

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "sleep_hours": self.sleep_hours,
            "hrv_baseline": self.hrv_baseline,
            "hrv_today": self.hrv_today,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CheckIn":
        """Create from dictionary."""
        return cls(
            sleep_hours=data.get("sleep_hours"),
            hrv_baseline=data.get("hrv_baseline"),
            hrv_today=data.get("hrv_today"),
        )


@dataclass
class AthleteProfile:
    """What the optimizer knows about the athlete."""

    goal: TrainingGoalFocus = TrainingGoalFocus.GENERAL
    readiness: ReadinessLevel = ReadinessLevel.MEDIUM
    session_duration: int = 60  # Minutes per session
    check_in: CheckIn | None = None
    name: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "goal": self.goal.value,
            "readiness": self.readiness.value,
            "session_duration": self.session_duration,
            "check_in": self.check_in.to_dict() if self.check_in else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AthleteProfile":
        """Create from dictionary."""
        check_in = data.get("check_in")
        return cls(
            name=data.get("name", ""),
            goal=TrainingGoalFocus(data.get("goal", "general")),
            readiness=ReadinessLevel(data.get("readiness", "medium")),
            session_duration=data.get("session_duration", 60),
            check_in=CheckIn.from_dict(check_in) if check_in else None,
        )
