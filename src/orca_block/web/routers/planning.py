"""Block planning and optimizer routes."""

from datetime import datetime, timezone

from fastapi import APIRouter, Body, HTTPException, Request

from ...models.athlete import AthleteProfile
from ...models.block import TrainingBlock
from ...models.history import SessionRecord
from ...models.optimizer import OptimizerConfig
from ...planning import (
    block_status,
    compute_optimizer_recommendations,
    generate_block_skeleton,
    resolve_current_phase,
    validate_block,
)

router = APIRouter(prefix="/planning", tags=["planning"])


def _server_now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def _parse_block(data: dict) -> TrainingBlock:
    return validate_block(TrainingBlock.from_dict(data))


@router.post("/skeleton")
async def skeleton(request: Request, block: dict = Body(...)):
    """Expand a training block into dated session skeletons."""
    parsed = _parse_block(block)
    workouts = generate_block_skeleton(parsed, catalog=request.app.state.catalog)
    return {
        "training_block_id": parsed.id,
        "total_weeks": parsed.total_weeks,
        "sessions": [w.to_dict() for w in workouts],
    }


@router.post("/phase")
async def current_phase(block: dict = Body(...), now_ms: int | None = Body(None)):
    """Resolve the phase and week an instant falls into (server time by default)."""
    parsed = _parse_block(block)
    instant = now_ms if now_ms is not None else _server_now_ms()
    context = resolve_current_phase(parsed, instant)
    return {
        "now_ms": instant,
        "status": block_status(parsed, instant).value,
        "phase": context.to_dict() if context else None,
    }


@router.post("/recommendations")
async def recommendations(
    request: Request,
    profile: dict | None = Body(None),
    config: dict | None = Body(None),
    history: list[dict] | None = Body(None),
    block: dict | None = Body(None),
    now_ms: int | None = Body(None),
    volume_tolerance: float | None = Body(None),
    goal_bias: float | None = Body(None, ge=0, le=100),
):
    """Volume, intensity and fatigue targets for the next session.

    When a block is given, its phase at ``now_ms`` drives the recommendation
    and its goal bias and volume tolerance apply unless overridden.
    """
    try:
        athlete = AthleteProfile.from_dict(profile or {})
        optimizer_config = OptimizerConfig.from_dict(config or {})
        records = [SessionRecord.from_dict(r) for r in history or []]
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid input: {e}") from e

    phase_context = None
    if block is not None:
        parsed = _parse_block(block)
        if now_ms is None:
            now_ms = _server_now_ms()
        phase_context = resolve_current_phase(parsed, now_ms)
        if goal_bias is None:
            goal_bias = parsed.goal_bias
        if volume_tolerance is None:
            volume_tolerance = parsed.volume_tolerance

    recs = compute_optimizer_recommendations(
        optimizer_config,
        athlete,
        records,
        phase_context,
        volume_tolerance,
        goal_bias=goal_bias,
        now_ms=now_ms,
        catalog=request.app.state.catalog,
    )
    return {
        "phase": phase_context.to_dict() if phase_context else None,
        "recommendations": recs.to_dict(),
    }
