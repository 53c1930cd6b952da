"""Exercise catalog loader from JSON."""

import json
from pathlib import Path

from loguru import logger

from ..models.exercises import (
    COMMON_EXERCISES,
    EquipmentType,
    Exercise,
    ExerciseCatalog,
    MovementPattern,
    MuscleGroup,
)


def load_exercises(json_path: Path) -> list[Exercise]:
    """Load exercises from a catalog JSON file.

    The file holds ``{"exercises": [...]}`` where each entry carries an
    ``id``, ``name``, ``muscle_groups``, ``movement_pattern`` and
    ``equipment``. Invalid entries are skipped with a warning.

    Args:
        json_path: Path to the catalog file

    Returns:
        List of Exercise objects loaded from JSON
    """
    with open(json_path) as f:
        data = json.load(f)

    exercises = []
    for ex_data in data.get("exercises", []):
        try:
            exercise = Exercise(
                id=ex_data["id"],
                name=ex_data["name"],
                muscle_groups=[MuscleGroup(mg) for mg in ex_data.get("muscle_groups", [])],
                movement_pattern=MovementPattern(ex_data.get("movement_pattern", "isolation")),
                equipment=[EquipmentType(eq) for eq in ex_data.get("equipment", [])],
                aliases=ex_data.get("aliases", []),
                is_compound=ex_data.get("is_compound", False),
            )
            exercises.append(exercise)
        except (ValueError, KeyError) as e:
            logger.warning(
                "Skipping invalid exercise {}: {}", ex_data.get("name", "unknown"), e
            )
            continue

    logger.debug("Loaded {} exercises from {}", len(exercises), json_path)
    return exercises


def load_catalog(json_path: Path | str | None = None) -> ExerciseCatalog:
    """Build a catalog from a JSON file, or the built-in library when no path is given."""
    if json_path is None:
        return ExerciseCatalog(COMMON_EXERCISES)
    return ExerciseCatalog(load_exercises(Path(json_path)))
