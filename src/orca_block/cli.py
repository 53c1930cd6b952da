"""CLI entry point for orca-block."""

import click

from . import __version__
from .commands import metabolic, new_block, optimize, phase, serve, skeleton, templates
from .logging_config import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="orca-block")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logs")
@click.option("--quiet", "-q", is_flag=True, help="Only show warnings and errors")
def main(verbose: bool, quiet: bool):
    """orca-block: Barbell periodization scheduler and load optimizer.

    Plan multi-week training blocks as dated session skeletons and compute
    volume, intensity and fatigue targets from recent training history.

    Example usage:

        # Create a block from a template
        orca-block new-block -o block.json

        # Lay out the calendar
        orca-block skeleton block.json

        # Where are we today?
        orca-block phase block.json

        # Next-session targets
        orca-block optimize --block block.json --history log.json
    """
    configure_logging(verbose=verbose, quiet=quiet)


# Register commands
main.add_command(skeleton)
main.add_command(phase)
main.add_command(optimize)
main.add_command(metabolic)
main.add_command(new_block)
main.add_command(templates)
main.add_command(serve)


if __name__ == "__main__":
    main()
