"""Exercise definitions and the exercise catalog."""

from dataclasses import dataclass, field
from enum import Enum


class MuscleGroup(str, Enum):
    """Major muscle groups."""

    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    FOREARMS = "forearms"
    QUADS = "quads"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    ABS = "abs"
    OBLIQUES = "obliques"
    LOWER_BACK = "lower_back"
    TRAPS = "traps"
    LATS = "lats"


class MovementPattern(str, Enum):
    """Fundamental movement patterns."""

    PUSH_HORIZONTAL = "push_horizontal"
    PUSH_VERTICAL = "push_vertical"
    PULL_HORIZONTAL = "pull_horizontal"
    PULL_VERTICAL = "pull_vertical"
    SQUAT = "squat"
    HINGE = "hinge"
    LUNGE = "lunge"
    CARRY = "carry"
    ANTI_FLEXION = "anti_flexion"
    ANTI_EXTENSION = "anti_extension"
    ANTI_ROTATION = "anti_rotation"
    ISOLATION = "isolation"


class EquipmentType(str, Enum):
    """Equipment types for exercises."""

    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    KETTLEBELL = "kettlebell"
    CABLE = "cable"
    MACHINE = "machine"
    BODYWEIGHT = "bodyweight"
    BANDS = "bands"
    SPECIALTY_BAR = "specialty_bar"


@dataclass
class Exercise:
    """Represents an exercise with metadata."""

    id: str  # stable catalog key referenced by ExerciseSlot.exercise_id
    name: str
    muscle_groups: list[MuscleGroup]
    movement_pattern: MovementPattern
    equipment: list[EquipmentType]
    aliases: list[str] = field(default_factory=list)
    is_compound: bool = False  # True for multi-joint movements

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "muscle_groups": [mg.value for mg in self.muscle_groups],
            "movement_pattern": self.movement_pattern.value,
            "equipment": [eq.value for eq in self.equipment],
            "aliases": self.aliases,
            "is_compound": self.is_compound,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Exercise":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            muscle_groups=[MuscleGroup(mg) for mg in data["muscle_groups"]],
            movement_pattern=MovementPattern(data["movement_pattern"]),
            equipment=[EquipmentType(eq) for eq in data["equipment"]],
            aliases=data.get("aliases", []),
            is_compound=data.get("is_compound", False),
        )


class ExerciseCatalog:
    """Read-only lookup of exercises by id, movement pattern and muscle group."""

    def __init__(self, exercises: list[Exercise]):
        self._by_id: dict[str, Exercise] = {}
        for exercise in exercises:
            self._by_id[exercise.id] = exercise

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, exercise_id: object) -> bool:
        return exercise_id in self._by_id

    def __iter__(self):
        return iter(self._by_id.values())

    def get(self, exercise_id: str | None) -> Exercise | None:
        """Get an exercise by id, or None if it isn't in the catalog."""
        if exercise_id is None:
            return None
        return self._by_id.get(exercise_id)

    def by_pattern(self, pattern: MovementPattern) -> list[Exercise]:
        """All exercises with the given movement pattern."""
        return [ex for ex in self._by_id.values() if ex.movement_pattern == pattern]

    def by_muscle(self, muscle: MuscleGroup) -> list[Exercise]:
        """All exercises that train the given muscle group."""
        return [ex for ex in self._by_id.values() if muscle in ex.muscle_groups]

    def all(self) -> list[Exercise]:
        """All exercises in catalog order."""
        return list(self._by_id.values())


# Built-in barbell-centric library. Ids are the keys used by block slot preferences.
COMMON_EXERCISES: list[Exercise] = [
    # Squat pattern
    Exercise(
        id="back_squat",
        name="Back Squat",
        muscle_groups=[MuscleGroup.QUADS, MuscleGroup.GLUTES, MuscleGroup.HAMSTRINGS],
        movement_pattern=MovementPattern.SQUAT,
        equipment=[EquipmentType.BARBELL],
        aliases=["Squat", "Barbell Squat", "BB Squat", "High Bar Squat"],
        is_compound=True,
    ),
    Exercise(
        id="low_bar_squat",
        name="Low Bar Squat",
        muscle_groups=[MuscleGroup.GLUTES, MuscleGroup.QUADS, MuscleGroup.HAMSTRINGS],
        movement_pattern=MovementPattern.SQUAT,
        equipment=[EquipmentType.BARBELL],
        aliases=["Low Bar Back Squat"],
        is_compound=True,
    ),
    Exercise(
        id="front_squat",
        name="Front Squat",
        muscle_groups=[MuscleGroup.QUADS, MuscleGroup.GLUTES, MuscleGroup.ABS],
        movement_pattern=MovementPattern.SQUAT,
        equipment=[EquipmentType.BARBELL],
        aliases=["Barbell Front Squat"],
        is_compound=True,
    ),
    Exercise(
        id="pause_squat",
        name="Pause Squat",
        muscle_groups=[MuscleGroup.QUADS, MuscleGroup.GLUTES],
        movement_pattern=MovementPattern.SQUAT,
        equipment=[EquipmentType.BARBELL],
        aliases=["Paused Squat"],
        is_compound=True,
    ),
    Exercise(
        id="safety_bar_squat",
        name="Safety Bar Squat",
        muscle_groups=[MuscleGroup.QUADS, MuscleGroup.GLUTES, MuscleGroup.BACK],
        movement_pattern=MovementPattern.SQUAT,
        equipment=[EquipmentType.SPECIALTY_BAR],
        aliases=["SSB Squat"],
        is_compound=True,
    ),
    Exercise(
        id="leg_press",
        name="Leg Press",
        muscle_groups=[MuscleGroup.QUADS, MuscleGroup.GLUTES],
        movement_pattern=MovementPattern.SQUAT,
        equipment=[EquipmentType.MACHINE],
        aliases=["Machine Leg Press", "45 Degree Leg Press"],
        is_compound=True,
    ),
    Exercise(
        id="bulgarian_split_squat",
        name="Bulgarian Split Squat",
        muscle_groups=[MuscleGroup.QUADS, MuscleGroup.GLUTES],
        movement_pattern=MovementPattern.LUNGE,
        equipment=[EquipmentType.DUMBBELL],
        aliases=["BSS", "Rear Foot Elevated Split Squat", "RFESS"],
        is_compound=True,
    ),
    # Bench / horizontal press
    Exercise(
        id="bench_press",
        name="Bench Press",
        muscle_groups=[MuscleGroup.CHEST, MuscleGroup.TRICEPS, MuscleGroup.SHOULDERS],
        movement_pattern=MovementPattern.PUSH_HORIZONTAL,
        equipment=[EquipmentType.BARBELL],
        aliases=["Flat Bench Press", "Barbell Bench Press", "BB Bench"],
        is_compound=True,
    ),
    Exercise(
        id="close_grip_bench",
        name="Close Grip Bench Press",
        muscle_groups=[MuscleGroup.TRICEPS, MuscleGroup.CHEST],
        movement_pattern=MovementPattern.PUSH_HORIZONTAL,
        equipment=[EquipmentType.BARBELL],
        aliases=["CGBP", "Close Grip Bench"],
        is_compound=True,
    ),
    Exercise(
        id="incline_bench",
        name="Incline Bench Press",
        muscle_groups=[MuscleGroup.CHEST, MuscleGroup.SHOULDERS, MuscleGroup.TRICEPS],
        movement_pattern=MovementPattern.PUSH_HORIZONTAL,
        equipment=[EquipmentType.BARBELL],
        aliases=["Incline Press", "Incline BB Press"],
        is_compound=True,
    ),
    Exercise(
        id="larsen_press",
        name="Larsen Press",
        muscle_groups=[MuscleGroup.CHEST, MuscleGroup.TRICEPS],
        movement_pattern=MovementPattern.PUSH_HORIZONTAL,
        equipment=[EquipmentType.BARBELL],
        aliases=["Feet Up Bench"],
        is_compound=True,
    ),
    Exercise(
        id="db_bench_press",
        name="Dumbbell Bench Press",
        muscle_groups=[MuscleGroup.CHEST, MuscleGroup.TRICEPS, MuscleGroup.SHOULDERS],
        movement_pattern=MovementPattern.PUSH_HORIZONTAL,
        equipment=[EquipmentType.DUMBBELL],
        aliases=["DB Bench Press", "Flat DB Press"],
        is_compound=True,
    ),
    Exercise(
        id="dip",
        name="Chest Dip",
        muscle_groups=[MuscleGroup.CHEST, MuscleGroup.TRICEPS, MuscleGroup.SHOULDERS],
        movement_pattern=MovementPattern.PUSH_HORIZONTAL,
        equipment=[EquipmentType.BODYWEIGHT],
        aliases=["Dip", "Parallel Bar Dip"],
        is_compound=True,
    ),
    # Overhead press
    Exercise(
        id="overhead_press",
        name="Overhead Press",
        muscle_groups=[MuscleGroup.SHOULDERS, MuscleGroup.TRICEPS],
        movement_pattern=MovementPattern.PUSH_VERTICAL,
        equipment=[EquipmentType.BARBELL],
        aliases=["OHP", "Military Press", "Standing Press"],
        is_compound=True,
    ),
    Exercise(
        id="push_press",
        name="Push Press",
        muscle_groups=[MuscleGroup.SHOULDERS, MuscleGroup.TRICEPS, MuscleGroup.QUADS],
        movement_pattern=MovementPattern.PUSH_VERTICAL,
        equipment=[EquipmentType.BARBELL],
        is_compound=True,
    ),
    Exercise(
        id="db_shoulder_press",
        name="Dumbbell Shoulder Press",
        muscle_groups=[MuscleGroup.SHOULDERS, MuscleGroup.TRICEPS],
        movement_pattern=MovementPattern.PUSH_VERTICAL,
        equipment=[EquipmentType.DUMBBELL],
        aliases=["DB Shoulder Press", "Seated DB Press"],
        is_compound=True,
    ),
    Exercise(
        id="z_press",
        name="Z Press",
        muscle_groups=[MuscleGroup.SHOULDERS, MuscleGroup.TRICEPS, MuscleGroup.ABS],
        movement_pattern=MovementPattern.PUSH_VERTICAL,
        equipment=[EquipmentType.BARBELL],
        is_compound=True,
    ),
    # Hinge
    Exercise(
        id="deadlift",
        name="Deadlift",
        muscle_groups=[
            MuscleGroup.HAMSTRINGS,
            MuscleGroup.GLUTES,
            MuscleGroup.LOWER_BACK,
            MuscleGroup.BACK,
        ],
        movement_pattern=MovementPattern.HINGE,
        equipment=[EquipmentType.BARBELL],
        aliases=["Conventional Deadlift", "BB Deadlift"],
        is_compound=True,
    ),
    Exercise(
        id="sumo_deadlift",
        name="Sumo Deadlift",
        muscle_groups=[MuscleGroup.HAMSTRINGS, MuscleGroup.GLUTES, MuscleGroup.QUADS],
        movement_pattern=MovementPattern.HINGE,
        equipment=[EquipmentType.BARBELL],
        is_compound=True,
    ),
    Exercise(
        id="romanian_deadlift",
        name="Romanian Deadlift",
        muscle_groups=[MuscleGroup.HAMSTRINGS, MuscleGroup.GLUTES, MuscleGroup.LOWER_BACK],
        movement_pattern=MovementPattern.HINGE,
        equipment=[EquipmentType.BARBELL],
        aliases=["RDL", "Romanian DL"],
        is_compound=True,
    ),
    Exercise(
        id="deficit_deadlift",
        name="Deficit Deadlift",
        muscle_groups=[MuscleGroup.HAMSTRINGS, MuscleGroup.GLUTES, MuscleGroup.LOWER_BACK],
        movement_pattern=MovementPattern.HINGE,
        equipment=[EquipmentType.BARBELL],
        is_compound=True,
    ),
    Exercise(
        id="trap_bar_deadlift",
        name="Trap Bar Deadlift",
        muscle_groups=[MuscleGroup.HAMSTRINGS, MuscleGroup.GLUTES, MuscleGroup.QUADS],
        movement_pattern=MovementPattern.HINGE,
        equipment=[EquipmentType.SPECIALTY_BAR],
        aliases=["Hex Bar Deadlift"],
        is_compound=True,
    ),
    Exercise(
        id="good_morning",
        name="Good Morning",
        muscle_groups=[MuscleGroup.HAMSTRINGS, MuscleGroup.LOWER_BACK, MuscleGroup.GLUTES],
        movement_pattern=MovementPattern.HINGE,
        equipment=[EquipmentType.BARBELL],
        is_compound=True,
    ),
    Exercise(
        id="hip_thrust",
        name="Hip Thrust",
        muscle_groups=[MuscleGroup.GLUTES, MuscleGroup.HAMSTRINGS],
        movement_pattern=MovementPattern.HINGE,
        equipment=[EquipmentType.BARBELL],
        aliases=["Barbell Hip Thrust"],
        is_compound=True,
    ),
    # Pulls
    Exercise(
        id="barbell_row",
        name="Barbell Row",
        muscle_groups=[MuscleGroup.BACK, MuscleGroup.BICEPS, MuscleGroup.LATS],
        movement_pattern=MovementPattern.PULL_HORIZONTAL,
        equipment=[EquipmentType.BARBELL],
        aliases=["Bent Over Row", "BB Row"],
        is_compound=True,
    ),
    Exercise(
        id="pendlay_row",
        name="Pendlay Row",
        muscle_groups=[MuscleGroup.BACK, MuscleGroup.BICEPS, MuscleGroup.LATS],
        movement_pattern=MovementPattern.PULL_HORIZONTAL,
        equipment=[EquipmentType.BARBELL],
        is_compound=True,
    ),
    Exercise(
        id="pull_up",
        name="Pull Up",
        muscle_groups=[MuscleGroup.LATS, MuscleGroup.BICEPS, MuscleGroup.BACK],
        movement_pattern=MovementPattern.PULL_VERTICAL,
        equipment=[EquipmentType.BODYWEIGHT],
        aliases=["Pullup", "Pull-up"],
        is_compound=True,
    ),
    Exercise(
        id="lat_pulldown",
        name="Lat Pulldown",
        muscle_groups=[MuscleGroup.LATS, MuscleGroup.BICEPS, MuscleGroup.BACK],
        movement_pattern=MovementPattern.PULL_VERTICAL,
        equipment=[EquipmentType.CABLE],
        aliases=["Cable Pulldown"],
        is_compound=True,
    ),
    Exercise(
        id="seated_cable_row",
        name="Seated Cable Row",
        muscle_groups=[MuscleGroup.BACK, MuscleGroup.BICEPS, MuscleGroup.LATS],
        movement_pattern=MovementPattern.PULL_HORIZONTAL,
        equipment=[EquipmentType.CABLE],
        aliases=["Cable Row", "Low Row"],
        is_compound=True,
    ),
    Exercise(
        id="face_pull",
        name="Face Pull",
        muscle_groups=[MuscleGroup.SHOULDERS, MuscleGroup.TRAPS],
        movement_pattern=MovementPattern.PULL_HORIZONTAL,
        equipment=[EquipmentType.CABLE],
        aliases=["Rear Delt Face Pull"],
    ),
    # Accessories
    Exercise(
        id="lateral_raise",
        name="Lateral Raise",
        muscle_groups=[MuscleGroup.SHOULDERS],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.DUMBBELL],
        aliases=["Side Raise", "DB Lateral Raise"],
    ),
    Exercise(
        id="barbell_curl",
        name="Barbell Curl",
        muscle_groups=[MuscleGroup.BICEPS],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.BARBELL],
        aliases=["BB Curl"],
    ),
    Exercise(
        id="triceps_pushdown",
        name="Triceps Pushdown",
        muscle_groups=[MuscleGroup.TRICEPS],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.CABLE],
        aliases=["Cable Pushdown", "Rope Pushdown"],
    ),
    Exercise(
        id="leg_curl",
        name="Lying Leg Curl",
        muscle_groups=[MuscleGroup.HAMSTRINGS],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.MACHINE],
        aliases=["Leg Curl", "Hamstring Curl"],
    ),
    Exercise(
        id="leg_extension",
        name="Leg Extension",
        muscle_groups=[MuscleGroup.QUADS],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.MACHINE],
        aliases=["Quad Extension"],
    ),
    Exercise(
        id="calf_raise",
        name="Standing Calf Raise",
        muscle_groups=[MuscleGroup.CALVES],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.MACHINE],
        aliases=["Calf Raise"],
    ),
    Exercise(
        id="shrug",
        name="Barbell Shrug",
        muscle_groups=[MuscleGroup.TRAPS],
        movement_pattern=MovementPattern.ISOLATION,
        equipment=[EquipmentType.BARBELL],
        aliases=["Shrug"],
    ),
    Exercise(
        id="farmer_carry",
        name="Farmer Carry",
        muscle_groups=[MuscleGroup.FOREARMS, MuscleGroup.TRAPS, MuscleGroup.ABS],
        movement_pattern=MovementPattern.CARRY,
        equipment=[EquipmentType.DUMBBELL],
        aliases=["Farmer's Walk"],
        is_compound=True,
    ),
    # Core
    Exercise(
        id="hanging_leg_raise",
        name="Hanging Leg Raise",
        muscle_groups=[MuscleGroup.ABS],
        movement_pattern=MovementPattern.ANTI_FLEXION,
        equipment=[EquipmentType.BODYWEIGHT],
        aliases=["Leg Raise", "Hanging Knee Raise"],
    ),
    Exercise(
        id="cable_crunch",
        name="Cable Crunch",
        muscle_groups=[MuscleGroup.ABS],
        movement_pattern=MovementPattern.ANTI_FLEXION,
        equipment=[EquipmentType.CABLE],
        aliases=["Kneeling Cable Crunch", "Rope Crunch"],
    ),
    Exercise(
        id="plank",
        name="Plank",
        muscle_groups=[MuscleGroup.ABS, MuscleGroup.OBLIQUES],
        movement_pattern=MovementPattern.ANTI_EXTENSION,
        equipment=[EquipmentType.BODYWEIGHT],
        aliases=["Front Plank", "Forearm Plank"],
    ),
    Exercise(
        id="ab_wheel",
        name="Ab Wheel Rollout",
        muscle_groups=[MuscleGroup.ABS],
        movement_pattern=MovementPattern.ANTI_EXTENSION,
        equipment=[EquipmentType.BODYWEIGHT],
        aliases=["Ab Rollout", "Wheel Rollout"],
    ),
    Exercise(
        id="pallof_press",
        name="Pallof Press",
        muscle_groups=[MuscleGroup.OBLIQUES, MuscleGroup.ABS],
        movement_pattern=MovementPattern.ANTI_ROTATION,
        equipment=[EquipmentType.CABLE],
        aliases=["Cable Pallof Press"],
    ),
    Exercise(
        id="suitcase_carry",
        name="Suitcase Carry",
        muscle_groups=[MuscleGroup.OBLIQUES, MuscleGroup.FOREARMS],
        movement_pattern=MovementPattern.ANTI_ROTATION,
        equipment=[EquipmentType.KETTLEBELL],
        aliases=["One Arm Farmer Carry"],
    ),
]


def default_catalog() -> ExerciseCatalog:
    """Catalog built from the built-in exercise library."""
    return ExerciseCatalog(COMMON_EXERCISES)
