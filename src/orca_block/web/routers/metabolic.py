"""Metabolic load routes."""

from fastapi import APIRouter, Body, HTTPException

from ...planning.metabolic import (
    METABOLIC_ZONES,
    SetLoad,
    calculate_set_loads,
    get_metabolic_zone,
)

router = APIRouter(prefix="/metabolic", tags=["metabolic"])


@router.post("/session")
async def session_load(sets: list[dict] = Body(...), rpe_drift: float | None = Body(None, ge=0)):
    """Metabolic load per set and for the whole session, with its zone.

    With ``rpe_drift`` each set's load includes the drift, so the set loads
    add up to the total.
    """
    try:
        loads = [SetLoad.from_dict(s) for s in sets]
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid set: {e}") from e

    set_loads = calculate_set_loads(loads, rpe_drift or 0.0)
    total = sum(set_loads, 0.0)

    return {
        "set_loads": [round(load, 2) for load in set_loads],
        "total_load": round(total, 2),
        **get_metabolic_zone(total).to_dict(),
    }


@router.get("/zones")
async def zones():
    """Zone table with inclusive lower and exclusive upper bounds."""
    rows = []
    for i, (zone, label, lower) in enumerate(METABOLIC_ZONES):
        upper = METABOLIC_ZONES[i + 1][2] if i + 1 < len(METABOLIC_ZONES) else None
        rows.append({"zone": zone.value, "label": label, "min": lower, "max": upper})
    return {"zones": rows}
