"""Structural validation of training blocks.

Runs once at the boundary (skeleton generation, CLI and HTTP input) so the
generation algorithm itself can assume a well-formed block.
"""

from enum import Enum
from numbers import Real

from ..errors import BlockValidationError, FieldError
from ..models.block import (
    FocusLevel,
    SessionStructure,
    SplitPattern,
    TrainingBlock,
    TrainingPhase,
)

MIN_SESSIONS_PER_WEEK = 2
MAX_SESSIONS_PER_WEEK = 7


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _check_enum(errors: list[FieldError], path: str, value, enum_cls: type[Enum]) -> None:
    if not isinstance(value, enum_cls):
        allowed = ", ".join(member.value for member in enum_cls)
        errors.append(
            FieldError(path, f"unknown {enum_cls.__name__} value", f"one of: {allowed}", value)
        )


def collect_block_errors(block: TrainingBlock) -> list[FieldError]:
    """Every structural problem in ``block``; empty when it is well formed."""
    errors: list[FieldError] = []

    if not _is_int(block.start_date):
        errors.append(
            FieldError("start_date", "must be an epoch-millisecond integer", "int", block.start_date)
        )

    for i, phase in enumerate(block.phases):
        path = f"phases[{i}]"
        _check_enum(errors, f"{path}.phase", phase.phase, TrainingPhase)
        _check_enum(errors, f"{path}.split_pattern", phase.split_pattern, SplitPattern)
        _check_enum(errors, f"{path}.intensity_focus", phase.intensity_focus, FocusLevel)
        _check_enum(errors, f"{path}.volume_focus", phase.volume_focus, FocusLevel)

        if not _is_int(phase.week_count) or phase.week_count < 0:
            errors.append(
                FieldError(
                    f"{path}.week_count", "must be a non-negative integer", ">= 0", phase.week_count
                )
            )
        if (
            not _is_int(phase.sessions_per_week)
            or not MIN_SESSIONS_PER_WEEK <= phase.sessions_per_week <= MAX_SESSIONS_PER_WEEK
        ):
            errors.append(
                FieldError(
                    f"{path}.sessions_per_week",
                    "out of range",
                    f"integer {MIN_SESSIONS_PER_WEEK}-{MAX_SESSIONS_PER_WEEK}",
                    phase.sessions_per_week,
                )
            )

    # An empty list means no weekday preference; sessions are spaced evenly.
    if block.training_days:
        bad_days = [d for d in block.training_days if not _is_int(d) or not 0 <= d <= 6]
        if bad_days:
            errors.append(
                FieldError("training_days", "weekday out of range", "integers 0-6 (0=Sunday)", bad_days)
            )
        else:
            needed = max(
                (p.sessions_per_week for p in block.phases if _is_int(p.sessions_per_week)),
                default=0,
            )
            distinct = len(set(block.training_days))
            if distinct < needed:
                errors.append(
                    FieldError(
                        "training_days",
                        f"{distinct} distinct days cannot hold {needed} sessions per week",
                        f"at least {needed} distinct weekdays",
                        block.training_days,
                    )
                )

    if block.goal_bias is not None and (
        not _is_number(block.goal_bias) or not 0 <= block.goal_bias <= 100
    ):
        errors.append(FieldError("goal_bias", "out of range", "number 0-100", block.goal_bias))

    if block.volume_tolerance is not None and not _is_number(block.volume_tolerance):
        errors.append(
            FieldError("volume_tolerance", "must be a number", "number 1-5", block.volume_tolerance)
        )

    if block.length_weeks is not None and (
        not _is_int(block.length_weeks) or block.length_weeks < 0
    ):
        errors.append(
            FieldError("length_weeks", "must be a non-negative integer", ">= 0", block.length_weeks)
        )

    _check_enum(errors, "session_structure", block.session_structure, SessionStructure)
    return errors


def validate_block(block: TrainingBlock) -> TrainingBlock:
    """Raise BlockValidationError listing every problem, else return the block."""
    errors = collect_block_errors(block)
    if errors:
        raise BlockValidationError(errors)
    return block
