"""Block template listing command."""

import click

from ..models.block import BLOCK_TEMPLATES
from .base import format_table


@click.command()
def templates():
    """List the built-in training block templates."""
    headers = ["ID", "Name", "Weeks", "Phases"]
    rows = []
    for template_id, template in BLOCK_TEMPLATES.items():
        phases = template["phases"]
        rows.append([
            template_id,
            template["name"],
            str(sum(p.week_count for p in phases)),
            " > ".join(p.phase.value for p in phases),
        ])

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo("Create a block from a template with 'orca-block new-block'")
