"""Data models for orca-block."""

from .athlete import AthleteProfile, CheckIn, ReadinessLevel, TrainingGoalFocus
from .block import (
    BLOCK_TEMPLATES,
    PHASE_PRESETS,
    ExercisePreferences,
    ExerciseSlot,
    FocusLevel,
    SessionStructure,
    SlotCategory,
    SlotTier,
    SplitPattern,
    TrainingBlock,
    TrainingBlockPhase,
    TrainingPhase,
    block_from_template,
)
from .exercises import Exercise, ExerciseCatalog, MovementPattern, MuscleGroup, default_catalog
from .history import CompletedSet, ExerciseSummary, SessionRecord
from .optimizer import (
    FatigueTuning,
    IntensityRange,
    MetabolicZone,
    MuscleVolumeStatus,
    OptimizerConfig,
    OptimizerRecommendations,
    PhaseContext,
    RepRangePreference,
    RepScheme,
)
from .schedule import ScheduledWorkout, SkeletonExercise, SuggestedIntensity, WorkoutStatus

__all__ = [
    "AthleteProfile",
    "BLOCK_TEMPLATES",
    "CheckIn",
    "CompletedSet",
    "Exercise",
    "ExerciseCatalog",
    "ExercisePreferences",
    "ExerciseSlot",
    "ExerciseSummary",
    "FatigueTuning",
    "FocusLevel",
    "IntensityRange",
    "MetabolicZone",
    "MovementPattern",
    "MuscleGroup",
    "MuscleVolumeStatus",
    "OptimizerConfig",
    "OptimizerRecommendations",
    "PHASE_PRESETS",
    "PhaseContext",
    "ReadinessLevel",
    "RepRangePreference",
    "RepScheme",
    "ScheduledWorkout",
    "SessionRecord",
    "SessionStructure",
    "SkeletonExercise",
    "SlotCategory",
    "SlotTier",
    "SplitPattern",
    "SuggestedIntensity",
    "TrainingBlock",
    "TrainingBlockPhase",
    "TrainingGoalFocus",
    "TrainingPhase",
    "WorkoutStatus",
    "block_from_template",
    "default_catalog",
]
