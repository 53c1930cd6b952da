"""Interactive training block wizard."""

import json
from datetime import date, datetime, timezone
from pathlib import Path
from uuid import uuid4

import click
import questionary
from questionary import Style

from ..errors import BlockValidationError
from ..models.block import (
    BLOCK_TEMPLATES,
    ExercisePreferences,
    ExerciseSlot,
    SessionStructure,
    SlotCategory,
    SlotTier,
    SplitPattern,
    TrainingBlock,
    TrainingBlockPhase,
    TrainingPhase,
    block_from_template,
)
from ..planning.validation import validate_block
from ..utils.exercise_utils import exercises_for_category
from .base import async_command, echo_success, echo_validation_error

custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("selected", "fg:#cc5454"),
        ("separator", "fg:#cc5454"),
        ("instruction", ""),
        ("text", ""),
    ]
)

WEEKDAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
CUSTOM_TEMPLATE = "custom"


def _is_iso_date(value: str) -> bool:
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _is_optional_number(value: str, low: float, high: float) -> bool:
    if not value.strip():
        return True
    try:
        return low <= float(value) <= high
    except ValueError:
        return False


class BlockWizard:
    """Interactive questionnaire that assembles a TrainingBlock."""

    async def collect_block(self) -> TrainingBlock:
        """Run the questionnaire."""
        click.echo("\n=== New Training Block ===\n")

        name = await questionary.text(
            "Block name:",
            validate=lambda v: bool(v.strip()) or "Name is required",
            style=custom_style,
        ).ask_async()

        template_id = await questionary.select(
            "Start from a template?",
            choices=[
                *(questionary.Choice(t["name"], tid) for tid, t in BLOCK_TEMPLATES.items()),
                questionary.Choice("Build phases myself", CUSTOM_TEMPLATE),
            ],
            style=custom_style,
        ).ask_async()

        start = await questionary.text(
            "Start date (YYYY-MM-DD):",
            default=datetime.now(timezone.utc).date().isoformat(),
            validate=lambda v: _is_iso_date(v) or "Use YYYY-MM-DD",
            style=custom_style,
        ).ask_async()
        start_ms = int(
            datetime.fromisoformat(start).replace(tzinfo=timezone.utc).timestamp() * 1000
        )

        days = await questionary.checkbox(
            "Preferred training days (leave empty to space sessions evenly):",
            choices=[questionary.Choice(day, i) for i, day in enumerate(WEEKDAYS)],
            style=custom_style,
        ).ask_async()

        if template_id == CUSTOM_TEMPLATE:
            block = TrainingBlock(id=str(uuid4()), name=name, start_date=start_ms)
            block.phases = await self.collect_phases()
        else:
            block = block_from_template(template_id, str(uuid4()), start_ms)
            block.name = name
        block.training_days = days or None

        block.session_structure = await questionary.select(
            "Session structure:",
            choices=[
                questionary.Choice("Standard (4-7 exercises)", SessionStructure.STANDARD),
                questionary.Choice("Main lift + accessory", SessionStructure.MAIN_PLUS_ACCESSORY),
                questionary.Choice("One lift a day", SessionStructure.ONE_LIFT),
                questionary.Choice("High variety (6-10 exercises)", SessionStructure.HIGH_VARIETY),
            ],
            style=custom_style,
        ).ask_async()

        bias = await questionary.text(
            "Goal bias, 0 = hypertrophy ... 100 = strength (optional):",
            validate=lambda v: _is_optional_number(v, 0, 100) or "Enter 0-100 or leave empty",
            style=custom_style,
        ).ask_async()
        block.goal_bias = float(bias) if bias.strip() else None

        block.volume_tolerance = await questionary.select(
            "Volume tolerance:",
            choices=[
                questionary.Choice("1 - conservative", 1),
                questionary.Choice("2", 2),
                questionary.Choice("3 - typical", 3),
                questionary.Choice("4", 4),
                questionary.Choice("5 - high capacity", 5),
            ],
            default=3,
            style=custom_style,
        ).ask_async()

        event = await questionary.text("Goal event (optional):", style=custom_style).ask_async()
        block.goal_event = event.strip() or None

        if await questionary.confirm(
            "Choose your main lifts now?", default=True, style=custom_style
        ).ask_async():
            block.exercise_preferences = await self.collect_preferences()

        return block

    async def collect_phases(self) -> list[TrainingBlockPhase]:
        """Ask for phases until the user stops."""
        phases = []
        while True:
            phase = await questionary.select(
                f"Phase {len(phases) + 1}:",
                choices=[questionary.Choice(p.value, p) for p in TrainingPhase],
                style=custom_style,
            ).ask_async()
            weeks = await questionary.text(
                "Weeks:",
                default="4",
                validate=lambda v: (v.isdigit() and int(v) > 0) or "Enter a positive number",
                style=custom_style,
            ).ask_async()
            sessions = await questionary.select(
                "Sessions per week:",
                choices=["2", "3", "4", "5", "6", "7"],
                default="4",
                style=custom_style,
            ).ask_async()
            split = await questionary.select(
                "Split pattern:",
                choices=[questionary.Choice(s.value, s) for s in SplitPattern],
                style=custom_style,
            ).ask_async()
            phases.append(TrainingBlockPhase.from_preset(phase, int(weeks), int(sessions), split))

            if not await questionary.confirm(
                "Add another phase?", default=False, style=custom_style
            ).ask_async():
                return phases

    async def collect_preferences(self) -> ExercisePreferences:
        """Pick a primary exercise for each main-lift category."""
        slots = []
        for category in (SlotCategory.SQUAT, SlotCategory.BENCH, SlotCategory.DEADLIFT, SlotCategory.OHP):
            options = exercises_for_category(category)
            exercise_id = await questionary.select(
                f"Primary {category.value}:",
                choices=[
                    *(questionary.Choice(ex.name, ex.id) for ex in options),
                    questionary.Choice("Let the planner choose", ""),
                ],
                style=custom_style,
            ).ask_async()
            slots.append(ExerciseSlot(category, SlotTier.PRIMARY, exercise_id or None))
        return ExercisePreferences(slots=slots)


@click.command(name="new-block")
@click.option("--output", "-o", default="block.json", show_default=True, type=click.Path(dir_okay=False))
@click.pass_context
@async_command
async def new_block(ctx: click.Context, output: str):
    """Create a training block interactively and save it as JSON."""
    block = await BlockWizard().collect_block()

    try:
        validate_block(block)
    except BlockValidationError as e:
        echo_validation_error(e)
        ctx.exit(1)

    Path(output).write_text(json.dumps(block.to_dict(), indent=2) + "\n")
    echo_success(f"Saved {block.name} to {output}")
    click.echo()
    click.echo(block.get_summary())
