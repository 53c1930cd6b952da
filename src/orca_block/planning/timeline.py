"""Resolve where an instant falls inside a training block.

Every function takes "now" explicitly; nothing here reads the wall clock.
"""

from enum import Enum

from loguru import logger

from ..errors import ActiveBlockConflictError
from ..models.block import TrainingBlock
from ..models.optimizer import PhaseContext

DAY_MS = 24 * 60 * 60 * 1000
WEEK_MS = 7 * DAY_MS


class BlockStatus(str, Enum):
    """Block state relative to an instant."""

    NOT_STARTED = "not-started"
    ACTIVE = "active"
    ENDED = "ended"


def total_block_weeks(block: TrainingBlock) -> int:
    """Block length in weeks; the phase sum whenever phases exist."""
    return block.total_weeks


def block_end_ms(block: TrainingBlock) -> int:
    """Epoch ms at which the block's last week ends (exclusive)."""
    return block.start_date + total_block_weeks(block) * WEEK_MS


def block_status(block: TrainingBlock, now_ms: int) -> BlockStatus:
    """Tell apart the reasons resolve_current_phase can return None."""
    if now_ms < block.start_date:
        return BlockStatus.NOT_STARTED
    if now_ms >= block_end_ms(block):
        return BlockStatus.ENDED
    return BlockStatus.ACTIVE


def resolve_current_phase(block: TrainingBlock, now_ms: int) -> PhaseContext | None:
    """Find the phase and week that ``now_ms`` falls into.

    Returns:
        The phase context, or None when the block has no phases, has not
        started yet, or has already ended
    """
    if not block.phases or now_ms < block.start_date:
        return None

    elapsed_weeks = (now_ms - block.start_date) // WEEK_MS
    total_weeks = total_block_weeks(block)

    cum_weeks = 0
    for index, phase in enumerate(block.phases):
        if elapsed_weeks < cum_weeks + phase.week_count:
            week_in_block = elapsed_weeks + 1
            return PhaseContext(
                phase=phase,
                phase_index=index,
                week_in_phase=elapsed_weeks - cum_weeks + 1,
                total_weeks_in_phase=phase.week_count,
                week_in_block=week_in_block,
                total_block_weeks=total_weeks,
                block_name=block.name,
                goal_event=block.goal_event,
                is_end_of_block=week_in_block == total_weeks,
            )
        cum_weeks += phase.week_count

    logger.debug("Block {} ended after {} weeks", block.id, total_weeks)
    return None


def find_active_block(blocks: list[TrainingBlock]) -> TrainingBlock | None:
    """Return the single active block of an athlete scope.

    Raises:
        ActiveBlockConflictError: If more than one block is marked active
    """
    active = [block for block in blocks if block.is_active]
    if len(active) > 1:
        raise ActiveBlockConflictError([block.id for block in active])
    return active[0] if active else None
