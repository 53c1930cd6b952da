"""Tests for training block validation."""

import pytest

from orca_block.errors import BlockValidationError
from orca_block.planning.validation import collect_block_errors, validate_block


def fields_of(errors):
    return [error.field for error in errors]


class TestValidateBlock:
    """Tests for structural block validation."""

    def test_valid_block(self, ppl_block):
        assert validate_block(ppl_block) is ppl_block
        assert collect_block_errors(ppl_block) == []

    @pytest.mark.parametrize("sessions", [1, 8, 0, 3.5])
    def test_sessions_per_week_range(self, ppl_block, sessions):
        """Test that sessions_per_week must be an integer from 2 to 7."""
        ppl_block.phases[1].sessions_per_week = sessions

        with pytest.raises(BlockValidationError) as exc_info:
            validate_block(ppl_block)

        assert fields_of(exc_info.value.errors) == ["phases[1].sessions_per_week"]
        assert exc_info.value.errors[0].value == sessions

    def test_negative_week_count(self, ppl_block):
        ppl_block.phases[0].week_count = -1
        assert fields_of(collect_block_errors(ppl_block)) == ["phases[0].week_count"]

    def test_zero_week_count_allowed(self, ppl_block):
        ppl_block.phases[0].week_count = 0
        assert collect_block_errors(ppl_block) == []

    def test_training_days_out_of_range(self, ppl_block):
        ppl_block.training_days = [1, 3, 7]
        errors = collect_block_errors(ppl_block)
        assert fields_of(errors) == ["training_days"]
        assert errors[0].value == [7]

    def test_too_few_training_days(self, ppl_block):
        """Test that duplicate weekdays cannot hold more sessions."""
        ppl_block.training_days = [1, 1, 3]
        errors = collect_block_errors(ppl_block)
        assert fields_of(errors) == ["training_days"]
        assert "2 distinct days" in errors[0].message

    def test_empty_training_days_allowed(self, ppl_block):
        ppl_block.training_days = []
        assert collect_block_errors(ppl_block) == []

    @pytest.mark.parametrize("bias", [-1, 101, "high", True])
    def test_goal_bias(self, ppl_block, bias):
        ppl_block.goal_bias = bias
        assert fields_of(collect_block_errors(ppl_block)) == ["goal_bias"]

    def test_volume_tolerance_type(self, ppl_block):
        ppl_block.volume_tolerance = "lots"
        assert fields_of(collect_block_errors(ppl_block)) == ["volume_tolerance"]

    def test_unparsed_enum(self, ppl_block):
        """Test that raw strings slipped past from_dict are caught."""
        ppl_block.phases[0].split_pattern = "bro-split"
        assert fields_of(collect_block_errors(ppl_block)) == ["phases[0].split_pattern"]

    def test_start_date_type(self, ppl_block):
        ppl_block.start_date = "2024-01-01"
        assert fields_of(collect_block_errors(ppl_block)) == ["start_date"]

    def test_collects_every_error(self, ppl_block):
        """Test that all problems are reported together."""
        ppl_block.phases[0].sessions_per_week = 9
        ppl_block.goal_bias = 150
        ppl_block.length_weeks = -2

        with pytest.raises(BlockValidationError) as exc_info:
            validate_block(ppl_block)

        assert fields_of(exc_info.value.errors) == [
            "phases[0].sessions_per_week",
            "goal_bias",
            "length_weeks",
        ]
        assert exc_info.value.to_dict()["errors"][1]["expected"] == "number 0-100"
