"""Shared CLI utilities."""

import asyncio
import json
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path

import click

from ..errors import BlockValidationError
from ..models.block import TrainingBlock
from ..planning.validation import validate_block


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message, err=True)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def echo_validation_error(error: BlockValidationError) -> None:
    """Print one line per invalid field."""
    echo_error("Invalid training block:")
    for field_error in error.errors:
        line = f"  {field_error.field}: {field_error.message}"
        if field_error.expected:
            line += f" (expected {field_error.expected}, got {field_error.value!r})"
        click.echo(line, err=True)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)).rstrip()]
    lines.append("".join("-" * w + " " * padding for w in widths).rstrip())
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)).rstrip())

    return "\n".join(lines)


def read_json(path: str | Path):
    """Load a JSON document, failing with a click error on bad input."""
    try:
        with open(path) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"{path} is not valid JSON: {e}") from e


def write_json(data, output: str | None) -> None:
    """Write JSON to a file, or to stdout when no file is given."""
    text = json.dumps(data, indent=2)
    if output:
        Path(output).write_text(text + "\n")
        echo_success(f"Wrote {output}")
    else:
        click.echo(text)


def parse_instant(value: str | None) -> int | None:
    """Epoch ms from an ISO date/datetime or an integer string. Naive times are UTC."""
    if value is None:
        return None
    if value.lstrip("-").isdigit():
        return int(value)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise click.BadParameter(f"'{value}' is neither an ISO date nor epoch milliseconds") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


def now_ms() -> int:
    """Current wall-clock time; only the CLI boundary reads it."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def format_date(epoch_ms: int) -> str:
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc).date().isoformat()


def load_block(ctx: click.Context, path: str) -> TrainingBlock:
    """Read and validate a block file, exiting with field errors when invalid."""
    try:
        return validate_block(TrainingBlock.from_dict(read_json(path)))
    except BlockValidationError as e:
        echo_validation_error(e)
        ctx.exit(1)

