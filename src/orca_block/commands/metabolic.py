"""Metabolic load command."""

import json

import click

from ..planning.metabolic import (
    DEFAULT_RPE_DRIFT,
    SetLoad,
    calculate_set_loads,
    effective_rpe,
    get_metabolic_zone,
)
from .base import format_table


def parse_set(value: str) -> SetLoad:
    """Parse INTENSITY:REPS:RPE, e.g. 75:10:8."""
    try:
        intensity, reps, rpe = value.split(":")
        load = SetLoad(intensity_pct=float(intensity), reps=int(reps), rpe=float(rpe))
    except ValueError as e:
        raise click.BadParameter(f"'{value}' is not INTENSITY:REPS:RPE") from e
    if not 0 <= load.intensity_pct <= 100 or load.reps < 0 or not 1 <= load.rpe <= 10:
        raise click.BadParameter(f"'{value}' is out of range (0-100 : reps >= 0 : RPE 1-10)")
    return load


@click.command()
@click.option("--set", "-s", "set_values", multiple=True, required=True, help="INTENSITY:REPS:RPE, repeatable")
@click.option("--drift", type=float, default=None, help=f"Add RPE drift per set (e.g. {DEFAULT_RPE_DRIFT})")
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
def metabolic(set_values: tuple[str, ...], drift: float | None, as_json: bool):
    """Estimate the metabolic load of a session and classify its zone.

    Example:

        orca-block metabolic -s 70:10:8 -s 70:10:8 -s 70:10:9
    """
    sets = [parse_set(v) for v in set_values]
    set_loads = calculate_set_loads(sets, drift or 0.0)
    total = sum(set_loads, 0.0)
    zone = get_metabolic_zone(total)

    if as_json:
        click.echo(json.dumps({"total_load": round(total, 2), **zone.to_dict()}, indent=2))
        return

    rows = [
        [str(i + 1), f"{s.intensity_pct:g}%", str(s.reps),
         f"{effective_rpe(i, s.rpe, drift or 0.0):g}", f"{load:.1f}"]
        for i, (s, load) in enumerate(zip(sets, set_loads))
    ]
    click.echo(format_table(["Set", "Load", "Reps", "RPE", "Stress"], rows))
    click.echo()
    click.echo(f"Session load: {total:.1f} ({zone.label})")
