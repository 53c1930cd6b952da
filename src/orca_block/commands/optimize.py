"""Optimizer recommendations command."""

import click

from ..data import load_catalog
from ..models.athlete import AthleteProfile
from ..models.history import SessionRecord
from ..models.optimizer import OptimizerConfig
from ..planning import compute_optimizer_recommendations, resolve_current_phase
from .base import echo_error, load_block, now_ms, parse_instant, read_json, write_json


@click.command()
@click.option(
    "--profile",
    "profile_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Athlete profile JSON (default: general goal, medium readiness)",
)
@click.option("--history", "history_path", type=click.Path(exists=True, dir_okay=False), help="Session history JSON list")
@click.option("--block", "block_path", type=click.Path(exists=True, dir_okay=False), help="Active training block JSON")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Optimizer config JSON")
@click.option("--now", "now", help="Reference instant (ISO date/datetime or epoch ms)")
@click.option("--volume-tolerance", type=float, help="1 (conservative) to 5 (high capacity)")
@click.option("--goal-bias", type=click.FloatRange(0, 100), help="0 = hypertrophy, 100 = strength")
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(exists=True, dir_okay=False),
    envvar="ORCA_BLOCK_CATALOG",
    help="Exercise catalog JSON (default: built-in catalog)",
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@click.pass_context
def optimize(
    ctx: click.Context,
    profile_path: str | None,
    history_path: str | None,
    block_path: str | None,
    config_path: str | None,
    now: str | None,
    volume_tolerance: float | None,
    goal_bias: float | None,
    catalog_path: str | None,
    as_json: bool,
):
    """Recommend volume, intensity and fatigue targets for the next session.

    Block goal bias and volume tolerance apply unless overridden by options.

    Example:

        orca-block optimize --profile me.json --history log.json --block block.json
    """
    try:
        profile = AthleteProfile.from_dict(read_json(profile_path)) if profile_path else AthleteProfile()
        config = OptimizerConfig.from_dict(read_json(config_path)) if config_path else OptimizerConfig()
        history = [SessionRecord.from_dict(r) for r in read_json(history_path)] if history_path else []
    except (KeyError, TypeError, ValueError) as e:
        echo_error(f"Invalid input: {e}")
        ctx.exit(1)

    instant = parse_instant(now)
    phase_context = None
    if block_path:
        block = load_block(ctx, block_path)
        if instant is None:
            instant = now_ms()
        phase_context = resolve_current_phase(block, instant)
        if goal_bias is None:
            goal_bias = block.goal_bias
        if volume_tolerance is None:
            volume_tolerance = block.volume_tolerance

    recs = compute_optimizer_recommendations(
        config,
        profile,
        history,
        phase_context,
        volume_tolerance,
        goal_bias=goal_bias,
        now_ms=instant,
        catalog=load_catalog(catalog_path),
    )

    if as_json:
        write_json(recs.to_dict(), None)
        return

    click.echo()
    click.echo(f"Goal focus:        {recs.training_goal_focus.value}")
    click.echo(f"Target volume:     {recs.target_volume} sets (nominal {recs.nominal_volume:g})")
    click.echo(f"Target intensity:  {recs.target_intensity.min:g}-{recs.target_intensity.max:g}% 1RM")
    if recs.rep_scheme:
        click.echo(f"Rep scheme:        {recs.rep_scheme.describe()}")
    click.echo(f"Rest:              {recs.rest_range[0]}-{recs.rest_range[1]}s")
    click.echo(f"Exercises:         {recs.exercise_count}")
    click.echo(f"Fatigue:           x{recs.fatigue_adjustment:g} (score {recs.fatigue_score:g})")
    if recs.metabolic_target_sets is not None:
        click.echo(f"Metabolic target:  {recs.metabolic_target_sets} sets per exercise")
    click.echo(f"Zone:              {recs.zone.value}")
    if recs.strength_set_division:
        click.echo(f"Set division:      {' + '.join(str(r) for r in recs.strength_set_division)} reps")
    if recs.auto_deload:
        click.echo(click.style("Auto-deload recommended", fg="yellow"))
    click.echo()
    click.echo(f"Rationale: {recs.rationale}")
