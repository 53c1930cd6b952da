"""CLI commands for orca-block."""

from .metabolic import metabolic
from .new_block import new_block
from .optimize import optimize
from .phase import phase
from .serve import serve
from .skeleton import skeleton
from .templates import templates

__all__ = [
    "metabolic",
    "new_block",
    "optimize",
    "phase",
    "serve",
    "skeleton",
    "templates",
]
