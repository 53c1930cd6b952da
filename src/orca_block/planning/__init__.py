"""Periodization scheduling and load optimization."""

from .metabolic import (
    METABOLIC_ZONES,
    MetabolicZoneInfo,
    SetLoad,
    calculate_session_metabolic_load,
    calculate_session_metabolic_load_with_fatigue,
    calculate_set_metabolic_load,
    get_metabolic_zone,
)
from .optimizer import compute_optimizer_recommendations, goal_from_bias
from .skeleton import generate_block_skeleton
from .timeline import (
    BlockStatus,
    block_end_ms,
    block_status,
    find_active_block,
    resolve_current_phase,
    total_block_weeks,
)
from .validation import validate_block

__all__ = [
    "BlockStatus",
    "METABOLIC_ZONES",
    "MetabolicZoneInfo",
    "SetLoad",
    "block_end_ms",
    "block_status",
    "calculate_session_metabolic_load",
    "calculate_session_metabolic_load_with_fatigue",
    "calculate_set_metabolic_load",
    "compute_optimizer_recommendations",
    "find_active_block",
    "generate_block_skeleton",
    "get_metabolic_zone",
    "goal_from_bias",
    "resolve_current_phase",
    "total_block_weeks",
    "validate_block",
]
