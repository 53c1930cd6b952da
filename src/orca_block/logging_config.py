"""Logger configuration for orca-block."""

import sys

from loguru import logger


def configure_logging(verbose: bool = False, quiet: bool = False, log_file: str | None = None) -> None:
    """Route orca-block logs to stderr (and optionally a file).

    The package keeps its logger disabled on import so that library users see
    nothing unless they opt in; the CLI calls this once at startup.

    Args:
        verbose: Log at DEBUG instead of INFO
        quiet: Only log warnings and errors
        log_file: Optional path to a rotating log file
    """
    level = "DEBUG" if verbose else "WARNING" if quiet else "INFO"

    logger.remove()
    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        level=level,
        colorize=True,
    )
    if log_file:
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message}",
            level=level,
            rotation="10 MB",
            retention="7 days",
        )

    logger.enable("orca_block")
    logger.debug("Logging configured at {}", level)
