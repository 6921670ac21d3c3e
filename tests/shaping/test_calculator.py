"""Tests for the shaping distribution calculator."""

import dataclasses

import pytest

from knitcalc.config.settings import get_settings
from knitcalc.schemas.warnings import (
    ShapingChangeBelowEventSize,
    ShapingChangeExceedsStart,
    ShapingRowsExcessive,
    WarningKind,
)
from knitcalc.shaping.calculator import (
    ShapingInput,
    calculate_shaping,
    validate_shaping_input,
)
from knitcalc.utilities.shaping import ShapingAction


def _input(start, target, rows, per_event=2, rows_per_unit=2.8):
    return ShapingInput(
        starting_stitch_count=start,
        target_stitch_count=target,
        total_rows_for_shaping=rows,
        stitches_per_shaping_event=per_event,
        rows_per_unit=rows_per_unit,
    )


class TestValidation:
    def test_valid_input_has_no_errors(self):
        errors, warnings = validate_shaping_input(_input(60, 40, 60))
        assert errors == []
        assert warnings == []

    @pytest.mark.parametrize(
        "field", ["starting_stitch_count", "target_stitch_count", "total_rows_for_shaping"]
    )
    def test_non_positive_count(self, field):
        si = dataclasses.replace(_input(60, 40, 60), **{field: 0})
        errors, _ = validate_shaping_input(si)
        assert errors == [f"{field} must be a positive integer"]

    def test_non_integer_count(self):
        si = dataclasses.replace(_input(60, 40, 60), stitches_per_shaping_event=1.5)
        errors, _ = validate_shaping_input(si)
        assert errors == ["stitches_per_shaping_event must be a positive integer"]

    def test_bool_is_not_an_integer(self):
        si = dataclasses.replace(_input(60, 40, 60), stitches_per_shaping_event=True)
        errors, _ = validate_shaping_input(si)
        assert errors == ["stitches_per_shaping_event must be a positive integer"]

    def test_rows_per_unit(self):
        errors, _ = validate_shaping_input(_input(60, 40, 60, rows_per_unit=0))
        assert errors == ["rows_per_unit must be greater than 0"]

    def test_reports_every_field(self):
        errors, _ = validate_shaping_input(_input(0, -1, 0, per_event=0, rows_per_unit=-2))
        assert len(errors) == 5

    def test_excessive_rows_warning(self):
        _, warnings = validate_shaping_input(_input(60, 40, 501))
        assert warnings == [ShapingRowsExcessive(total_rows=501, limit=500)]

    def test_change_exceeds_start_warning(self):
        _, warnings = validate_shaping_input(_input(10, 30, 60))
        assert warnings == [ShapingChangeExceedsStart(total_change=20, starting_count=10)]

    def test_change_below_event_size_warning(self):
        _, warnings = validate_shaping_input(_input(40, 41, 20))
        assert warnings == [ShapingChangeBelowEventSize(total_change=1, stitches_per_event=2)]

    def test_custom_row_limit(self):
        base = get_settings()
        custom = dataclasses.replace(
            base, shaping=dataclasses.replace(base.shaping, max_plausible_rows=50)
        )
        _, warnings = validate_shaping_input(_input(60, 40, 60), custom)
        assert [w.kind for w in warnings] == [WarningKind.SHAPING_ROWS_EXCESSIVE]


class TestCalculateShaping:
    def test_even_decrease_summary(self):
        result = calculate_shaping(_input(60, 40, 60))
        assert result.success
        event = result.schedule.events[0]
        assert event.action is ShapingAction.DECREASE
        assert event.event_count == 10
        assert event.simple_instruction == "Decrease 2 stitches every 6th row, 10 times."

    def test_uneven_increase_summary(self):
        result = calculate_shaping(_input(30, 50, 55))
        event = result.schedule.events[0]
        assert event.distribution.base_interval == 5
        assert event.distribution.num_shorter_intervals == 5
        assert event.distribution.num_longer_intervals == 5
        assert event.simple_instruction == (
            "Increase 2 stitches every 5th row 5 times, then every 6th row 5 times."
        )

    def test_schedule_metadata(self):
        schedule = calculate_shaping(_input(60, 40, 60)).schedule
        assert schedule.has_shaping
        assert schedule.total_shaping_rows == 10
        assert schedule.algorithm == "linear-distribution"

    def test_no_op(self):
        result = calculate_shaping(_input(48, 48, 30))
        assert result.success
        assert result.schedule.has_shaping is False
        assert result.schedule.events == ()
        assert result.schedule.algorithm == "no-shaping"

    def test_not_enough_rows_is_fatal(self):
        result = calculate_shaping(_input(60, 20, 15))
        assert not result.success
        assert result.schedule is None
        assert result.errors == (
            "Not enough rows for shaping: need 20 shaping rows but only have 15 total rows",
        )

    def test_validation_errors_returned(self):
        result = calculate_shaping(_input(0, 40, 60))
        assert result.errors == ("starting_stitch_count must be a positive integer",)
        assert result.schedule is None

    def test_partial_final_event(self):
        event = calculate_shaping(_input(40, 45, 30)).schedule.events[0]
        assert event.total_stitches_to_change == 5
        assert event.event_count == 3

    def test_warnings_survive_success(self):
        result = calculate_shaping(_input(10, 30, 60))
        assert result.success
        assert result.warning_messages == [
            "Large change relative to starting stitch count - please verify measurements"
        ]


class TestSteps:
    def test_even_steps(self):
        steps = calculate_shaping(_input(60, 40, 60)).schedule.events[0].steps
        assert len(steps) == 20
        assert steps[0].row_offset == 0
        assert steps[0].instruction == "Work 5 rows plain."
        assert steps[1].row_offset == 5
        assert steps[1].instruction == (
            "Decrease row: decrease 1 stitch at beginning and end of row."
        )
        assert steps[-1].row_offset == 59

    def test_longer_intervals_come_first(self):
        steps = calculate_shaping(_input(30, 50, 55)).schedule.events[0].steps
        plain = [s.instruction for s in steps if s.instruction.startswith("Work")]
        assert plain[:5] == ["Work 5 rows plain."] * 5
        assert plain[5:] == ["Work 4 rows plain."] * 5

    def test_no_plain_rows_when_every_row_shapes(self):
        steps = calculate_shaping(_input(20, 12, 4)).schedule.events[0].steps
        assert [s.row_offset for s in steps] == [0, 1, 2, 3]

    def test_single_stitch_wording(self):
        steps = calculate_shaping(_input(20, 23, 9, per_event=1)).schedule.events[0].steps
        assert steps[1].instruction == "Increase row: increase 1 stitch at beginning of row."

    def test_multi_stitch_wording(self):
        steps = calculate_shaping(_input(40, 52, 12, per_event=4)).schedule.events[0].steps
        assert steps[-1].instruction == "Increase row: increase 4 stitches evenly across row."

    @pytest.mark.parametrize(
        "start, target, rows, per_event",
        [(60, 40, 60, 2), (30, 50, 55, 2), (80, 61, 47, 2), (10, 17, 40, 1), (100, 60, 33, 4)],
    )
    def test_offsets_ordered_and_within_budget(self, start, target, rows, per_event):
        steps = calculate_shaping(_input(start, target, rows, per_event)).schedule.events[0].steps
        offsets = [s.row_offset for s in steps]
        assert offsets == sorted(offsets)
        assert offsets[-1] < rows
