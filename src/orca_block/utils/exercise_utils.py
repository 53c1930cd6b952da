"""Utilities for exercise name normalization and catalog lookup."""

import re
from difflib import SequenceMatcher

from ..models.block import SlotCategory
from ..models.exercises import Exercise, ExerciseCatalog, MovementPattern, default_catalog

ABBREVIATIONS = {
    "bb": "barbell",
    "db": "dumbbell",
    "kb": "kettlebell",
    "ohp": "overhead press",
    "rdl": "romanian deadlift",
    "bss": "bulgarian split squat",
    "sbd": "squat bench deadlift",
    "ssb": "safety bar",
    "cgbp": "close grip bench press",
}

# Movement patterns that make sense for each slot category
CATEGORY_PATTERNS = {
    SlotCategory.SQUAT: {MovementPattern.SQUAT, MovementPattern.LUNGE},
    SlotCategory.BENCH: {MovementPattern.PUSH_HORIZONTAL},
    SlotCategory.DEADLIFT: {MovementPattern.HINGE},
    SlotCategory.OHP: {MovementPattern.PUSH_VERTICAL},
    SlotCategory.CORE: {
        MovementPattern.ANTI_FLEXION,
        MovementPattern.ANTI_EXTENSION,
        MovementPattern.ANTI_ROTATION,
    },
    SlotCategory.ACCESSORY: {
        MovementPattern.PULL_HORIZONTAL,
        MovementPattern.PULL_VERTICAL,
        MovementPattern.CARRY,
        MovementPattern.ISOLATION,
    },
}


def normalize_exercise_name(name: str) -> str:
    """Normalize an exercise name for comparison.

    Converts to lowercase, removes extra whitespace, and expands common abbreviations.
    """
    normalized = re.sub(r"\s+", " ", name.lower().strip())
    normalized = normalized.replace("-", " ")

    if normalized in ABBREVIATIONS:
        return ABBREVIATIONS[normalized]

    for abbrev, full in ABBREVIATIONS.items():
        normalized = re.sub(rf"\b{abbrev}\b", full, normalized)

    return normalized


def find_matching_exercise(
    name: str,
    catalog: ExerciseCatalog | None = None,
    threshold: float = 0.8,
) -> Exercise | None:
    """Find the catalog exercise best matching a free-text name or id.

    Args:
        name: Exercise name, alias or id
        catalog: Catalog to search (defaults to the built-in catalog)
        threshold: Minimum similarity ratio (0-1) to consider a match

    Returns:
        The best matching Exercise or None if no match above threshold
    """
    if catalog is None:
        catalog = default_catalog()

    by_id = catalog.get(name.strip())
    if by_id is not None:
        return by_id

    normalized_name = normalize_exercise_name(name)
    best_match: Exercise | None = None
    best_score = 0.0

    for exercise in catalog:
        candidates = [exercise.name, *exercise.aliases]
        for candidate in candidates:
            normalized = normalize_exercise_name(candidate)
            if normalized == normalized_name:
                return exercise
            score = SequenceMatcher(None, normalized_name, normalized).ratio()
            if score > best_score:
                best_score = score
                best_match = exercise

    if best_score >= threshold:
        return best_match
    return None


def exercises_for_category(
    category: SlotCategory,
    catalog: ExerciseCatalog | None = None,
) -> list[Exercise]:
    """Catalog exercises suitable for a slot category, compounds first."""
    if catalog is None:
        catalog = default_catalog()
    patterns = CATEGORY_PATTERNS[category]
    matches = [ex for ex in catalog if ex.movement_pattern in patterns]
    return sorted(matches, key=lambda ex: (not ex.is_compound, ex.name))
