"""Helpers for enum-keyed lookup tables."""

from enum import Enum


def require_exhaustive(table: dict, enum_cls: type[Enum], name: str) -> dict:
    """Fail at import time when a lookup table misses an enum member.

    Adding a member to a phase, split or focus enum then breaks loudly
    instead of falling through to a default at runtime.
    """
    missing = [member.value for member in enum_cls if member not in table]
    if missing:
        raise RuntimeError(f"{name} is missing entries for: {', '.join(missing)}")
    return table
