"""Error types for orca-block.

Structural problems with caller-supplied blocks are reported as
BlockValidationError carrying one FieldError per problem, so that a UI layer
can point at the offending field without parsing messages.
"""

from dataclasses import dataclass
from typing import Any


class OrcaBlockError(Exception):
    """Base class for orca-block errors."""


@dataclass
class FieldError:
    """A single invalid field."""

    field: str  # dotted path, e.g. "phases[1].sessions_per_week"
    message: str
    expected: str = ""
    value: Any = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "field": self.field,
            "message": self.message,
            "expected": self.expected,
            "value": self.value,
        }


class BlockValidationError(OrcaBlockError, ValueError):
    """Raised when a training block is structurally invalid.

    Attributes:
        errors: Every field error found in the block
    """

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        summary = "; ".join(f"{e.field}: {e.message}" for e in errors)
        super().__init__(f"Invalid training block: {summary}")

    @classmethod
    def single(cls, field: str, message: str, expected: str = "", value: Any = None):
        """Build an error for one field."""
        return cls([FieldError(field=field, message=message, expected=expected, value=value)])

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"errors": [e.to_dict() for e in self.errors]}


class ActiveBlockConflictError(OrcaBlockError):
    """Raised when more than one block in a scope is marked active."""

    def __init__(self, block_ids: list[str]):
        self.block_ids = block_ids
        super().__init__(f"Multiple active blocks: {', '.join(block_ids)}")
