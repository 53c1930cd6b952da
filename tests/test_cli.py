"""Tests for the command line interface."""

import importlib
import json

import pytest
from click.testing import CliRunner
from loguru import logger

from orca_block import __version__
from orca_block.cli import main
from orca_block.models.block import TrainingBlock, block_from_template

from conftest import START_MS

# orca_block.commands re-exports the click command under the module name
new_block_module = importlib.import_module("orca_block.commands.new_block")


@pytest.fixture(autouse=True)
def reset_logging():
    """The CLI attaches a sink to the runner's stderr; drop it after each test."""
    yield
    logger.remove()
    logger.disable("orca_block")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def block_file(tmp_path, ppl_block):
    path = tmp_path / "block.json"
    path.write_text(json.dumps(ppl_block.to_dict()))
    return str(path)


class TestSkeletonCommand:
    """Tests for the skeleton command."""

    def test_table(self, runner, block_file):
        result = runner.invoke(main, ["-q", "skeleton", block_file])

        assert result.exit_code == 0
        assert "Hypertrophy - Wk1 Push" in result.output
        assert "Bench Press" in result.output
        assert "Total: 9 session(s) over 3 week(s)" in result.output

    def test_json(self, runner, block_file):
        result = runner.invoke(main, ["-q", "skeleton", block_file, "--json"])

        assert result.exit_code == 0
        sessions = json.loads(result.output)
        assert len(sessions) == 9
        assert sessions[0]["date"] == "2024-01-01"

    def test_output_file(self, runner, block_file, tmp_path):
        out = tmp_path / "sessions.json"
        result = runner.invoke(main, ["-q", "skeleton", block_file, "-o", str(out)])

        assert result.exit_code == 0
        assert "Wrote" in result.output
        assert len(json.loads(out.read_text())) == 9

    def test_invalid_block(self, runner, tmp_path, ppl_block):
        """Test that field errors are printed and the exit code is 1."""
        data = ppl_block.to_dict()
        data["phases"][0]["sessions_per_week"] = 9
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(data))

        result = runner.invoke(main, ["-q", "skeleton", str(path)])

        assert result.exit_code == 1
        assert "phases[0].sessions_per_week" in result.output

    def test_unknown_enum(self, runner, tmp_path, ppl_block):
        data = ppl_block.to_dict()
        data["phases"][1]["phase"] = "Bulking"
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(data))

        result = runner.invoke(main, ["-q", "skeleton", str(path)])

        assert result.exit_code == 1
        assert "phases[1].phase" in result.output

    def test_not_json(self, runner, tmp_path):
        path = tmp_path / "block.json"
        path.write_text("{not json")
        result = runner.invoke(main, ["-q", "skeleton", str(path)])
        assert result.exit_code == 2


class TestPhaseCommand:
    """Tests for the phase command."""

    def test_json(self, runner, block_file):
        result = runner.invoke(main, ["-q", "phase", block_file, "--now", "2024-01-10", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["status"] == "active"
        assert data["phase"]["week_in_block"] == 2
        assert data["phase"]["phase"]["phase"] == "Hypertrophy"

    def test_epoch_ms(self, runner, block_file):
        now = START_MS + 15 * 24 * 60 * 60 * 1000
        result = runner.invoke(main, ["-q", "phase", block_file, "--now", str(now)])

        assert result.exit_code == 0
        assert "Phase 2: Strength (week 1 of 1)" in result.output
        assert "Final week of the block" in result.output

    def test_not_started(self, runner, block_file):
        result = runner.invoke(main, ["-q", "phase", block_file, "--now", "2023-12-25"])
        assert "starts on 2024-01-01" in result.output

    def test_ended(self, runner, block_file):
        result = runner.invoke(main, ["-q", "phase", block_file, "--now", "2024-03-01"])
        assert "ended on 2024-01-22" in result.output

    def test_bad_instant(self, runner, block_file):
        result = runner.invoke(main, ["-q", "phase", block_file, "--now", "next tuesday"])
        assert result.exit_code == 2


class TestOptimizeCommand:
    """Tests for the optimize command."""

    def test_defaults(self, runner):
        result = runner.invoke(main, ["-q", "optimize", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["training_goal_focus"] == "general"
        assert data["target_volume"] == 25
        assert "no active block" in data["rationale"]

    def test_with_block_and_history(self, runner, block_file, tmp_path):
        history = tmp_path / "history.json"
        history.write_text(json.dumps([
            {"timestamp": START_MS + 2 * 24 * 60 * 60 * 1000, "session_rpe": 7,
             "sets": [{"exercise_id": "bench_press", "reps": 8, "weight": 80}]},
        ]))

        result = runner.invoke(main, [
            "-q", "optimize", "--block", block_file, "--history", str(history),
            "--now", "2024-01-03", "--goal-bias", "10",
        ])

        assert result.exit_code == 0
        assert "hypertrophy" in result.output
        assert "Hypertrophy week 1/2 of Spring Block" in result.output

    def test_bad_profile(self, runner, tmp_path):
        profile = tmp_path / "profile.json"
        profile.write_text(json.dumps({"goal": "bulk"}))

        result = runner.invoke(main, ["-q", "optimize", "--profile", str(profile)])

        assert result.exit_code == 1
        assert "Invalid input" in result.output


class TestMetabolicCommand:
    """Tests for the metabolic command."""

    def test_json(self, runner):
        result = runner.invoke(main, ["metabolic", "-s", "100:1:10", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data == {"total_load": 100.0, "zone": "light", "label": "Light"}

    def test_table(self, runner):
        result = runner.invoke(main, ["metabolic", "-s", "75:10:8", "-s", "75:10:9", "--drift", "0.15"])

        assert result.exit_code == 0
        assert "Session load:" in result.output
        assert "9.15" in result.output  # second set's RPE after drift

    @pytest.mark.parametrize("value", ["75:10", "75:ten:8", "120:5:8", "75:5:11"])
    def test_bad_set(self, runner, value):
        result = runner.invoke(main, ["metabolic", "-s", value])
        assert result.exit_code == 2


class TestMiscCommands:
    """Tests for templates, new-block and version."""

    def test_templates(self, runner):
        result = runner.invoke(main, ["templates"])

        assert result.exit_code == 0
        assert "linear-8-week" in result.output
        assert "Accumulation > Intensification > Realization > Deload" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert __version__ in result.output

    def test_new_block(self, runner, tmp_path, monkeypatch):
        """Test that the wizard's block is validated and saved."""
        async def fake_collect(self):
            return block_from_template("hypertrophy-6-week", "wiz", START_MS)

        monkeypatch.setattr(new_block_module.BlockWizard, "collect_block", fake_collect)
        out = tmp_path / "block.json"

        result = runner.invoke(main, ["-q", "new-block", "-o", str(out)])

        assert result.exit_code == 0
        saved = TrainingBlock.from_dict(json.loads(out.read_text()))
        assert saved.id == "wiz"
        assert saved.total_weeks == 6

    def test_new_block_invalid(self, runner, tmp_path, monkeypatch):
        async def fake_collect(self):
            block = block_from_template("hypertrophy-6-week", "wiz", START_MS)
            block.training_days = [1, 2]
            return block

        monkeypatch.setattr(new_block_module.BlockWizard, "collect_block", fake_collect)
        out = tmp_path / "block.json"

        result = runner.invoke(main, ["-q", "new-block", "-o", str(out)])

        assert result.exit_code == 1
        assert "training_days" in result.output
        assert not out.exists()
