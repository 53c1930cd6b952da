"""Block skeleton command."""

import click

from ..data import load_catalog
from ..planning import generate_block_skeleton
from .base import echo_info, format_table, load_block, write_json


@click.command()
@click.argument("block_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(exists=True, dir_okay=False),
    envvar="ORCA_BLOCK_CATALOG",
    help="Exercise catalog JSON (default: built-in catalog)",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the sessions as JSON")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def skeleton(ctx: click.Context, block_file: str, catalog_path: str | None, output: str | None, as_json: bool):
    """Expand a training block into dated session skeletons.

    Examples:

        # Show the calendar
        orca-block skeleton block.json

        # Save sessions for the next step
        orca-block skeleton block.json -o sessions.json
    """
    block = load_block(ctx, block_file)
    workouts = generate_block_skeleton(block, catalog=load_catalog(catalog_path))

    if output or as_json:
        write_json([w.to_dict() for w in workouts], output)
        return

    if not workouts:
        echo_info("Block has no sessions to schedule")
        return

    headers = ["Date", "Label", "Intensity", "Sets", "Reps", "Exercises"]
    rows = [
        [
            w.date,
            w.label,
            w.target_intensity,
            w.target_sets_per_exercise,
            w.target_rep_range,
            ", ".join(ex.exercise_name for ex in w.skeleton_exercises) or "-",
        ]
        for w in workouts
    ]
    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(workouts)} session(s) over {block.total_weeks} week(s)")
