"""Data loading utilities."""

from .exercise_loader import load_catalog, load_exercises

__all__ = ["load_catalog", "load_exercises"]
