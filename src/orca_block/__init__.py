"""orca-block: barbell periodization scheduler and load optimizer."""

from loguru import logger

__version__ = "0.1.0"

# Silent as a library; orca_block.logging_config.configure_logging opts in
logger.disable("orca_block")
