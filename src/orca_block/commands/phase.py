"""Current phase command."""

import json

import click

from ..planning import BlockStatus, block_end_ms, block_status, resolve_current_phase
from .base import echo_info, format_date, load_block, now_ms, parse_instant


@click.command()
@click.argument("block_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--now", "now", help="Instant to resolve (ISO date/datetime or epoch ms; default: now)")
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@click.pass_context
def phase(ctx: click.Context, block_file: str, now: str | None, as_json: bool):
    """Show which phase and week of a block an instant falls into."""
    block = load_block(ctx, block_file)
    instant = parse_instant(now)
    if instant is None:
        instant = now_ms()

    context = resolve_current_phase(block, instant)
    status = block_status(block, instant)

    if as_json:
        click.echo(
            json.dumps(
                {"status": status.value, "phase": context.to_dict() if context else None},
                indent=2,
            )
        )
        return

    if context is None:
        if status == BlockStatus.NOT_STARTED:
            echo_info(f"{block.name} starts on {format_date(block.start_date)}")
        elif status == BlockStatus.ENDED:
            echo_info(f"{block.name} ended on {format_date(block_end_ms(block))}")
        else:
            echo_info(f"{block.name} has no phases")
        return

    click.echo()
    click.echo(f"Block: {context.block_name}")
    click.echo(
        f"Phase {context.phase_index + 1}: {context.phase.phase.value} "
        f"(week {context.week_in_phase} of {context.total_weeks_in_phase})"
    )
    click.echo(f"Block week: {context.week_in_block} of {context.total_block_weeks}")
    if context.goal_event:
        click.echo(f"Goal event: {context.goal_event}")
    if context.is_end_of_block:
        click.echo(click.style("Final week of the block", fg="yellow"))
