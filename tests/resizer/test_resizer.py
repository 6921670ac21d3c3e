"""Tests for the gauge-based pattern resizer."""

import dataclasses

import pytest

from knitcalc.config.settings import get_settings
from knitcalc.resizer.resizer import build_shape, calculate_resize
from knitcalc.schemas.resize import (
    CylindricalShape,
    RectangularShape,
    ResizeRequest,
    ShapeFamily,
    TaperedShape,
)
from knitcalc.schemas.warnings import (
    EaseFit,
    GaugeChangeLarge,
    RoundingDrift,
    ShapingChangeExceedsStart,
    TaperRatioShift,
    UnitConversion,
    WarningKind,
)
from knitcalc.utilities.types import Gauge, Length, Unit


@pytest.fixture(scope="module")
def dk_gauge():
    """20 sts and 28 rows over 10 cm."""
    return Gauge(20, 28)


@pytest.fixture(scope="module")
def inch_gauge():
    """18 sts and 24 rows over 4 inches."""
    return Gauge(18, 24, swatch_width=4, swatch_height=4, unit=Unit.INCH)


PANEL_ORIGINAL = {
    "original_cast_on": 110,
    "original_rows_total": 180,
    "original_finished_width": 50,
    "original_finished_length": 60,
}

SLEEVE_ORIGINAL = {
    "original_cuff_stitches": 44,
    "original_upper_arm_stitches": 64,
    "original_sleeve_length_rows": 120,
    "original_shaping_stitches_per_event": 2,
}

HAT_ORIGINAL = {
    "original_cast_on": 100,
    "original_head_circumference": 50,
    "original_hat_height": 18,
}


def _kinds(result):
    return [w.kind for w in result.warnings]


def _panel(original_gauge, new_gauge, width, length):
    return calculate_resize(
        ResizeRequest(
            template_key="simple_body_panel_rectangular",
            original_gauge=original_gauge,
            new_gauge=new_gauge,
            original_values=PANEL_ORIGINAL,
            new_values={"new_finished_width": width, "new_finished_length": length},
        )
    )


def _sleeve(new_gauge, cuff, upper_arm, length, original=SLEEVE_ORIGINAL):
    return calculate_resize(
        ResizeRequest(
            template_key="simple_sleeve_tapered",
            original_gauge=Gauge(20, 28),
            new_gauge=new_gauge,
            original_values=original,
            new_values={
                "new_cuff_width": cuff,
                "new_upper_arm_width": upper_arm,
                "new_sleeve_length": length,
            },
        )
    )


def _hat(new_gauge, circumference, height):
    return calculate_resize(
        ResizeRequest(
            template_key="simple_hat_cylindrical",
            original_gauge=Gauge(20, 28),
            new_gauge=new_gauge,
            original_values=HAT_ORIGINAL,
            new_values={"new_head_circumference": circumference, "new_hat_height": height},
        )
    )


class TestRequest:
    def test_value_maps_read_only(self, dk_gauge):
        request = ResizeRequest("x", dk_gauge, dk_gauge, {"a": 1}, {"b": 2})
        with pytest.raises(TypeError):
            request.original_values["a"] = 5  # type: ignore[index]


class TestRectangular:
    def test_fifty_cm_panel(self, dk_gauge):
        result = _panel(Gauge(22, 30), dk_gauge, 50, 60)
        assert result.success
        assert result.values["new_cast_on_stitches"] == 100
        assert result.values["new_total_rows"] == 168
        assert result.values["new_actual_width"] == 50.0
        assert result.values["new_actual_length"] == 60.0
        assert result.warnings == ()
        assert result.had_shaping is False

    def test_output_keys_match_template(self, dk_gauge):
        result = _panel(dk_gauge, dk_gauge, 50, 60)
        assert list(result.values) == [
            "new_cast_on_stitches",
            "new_total_rows",
            "new_actual_width",
            "new_actual_length",
        ]

    def test_string_values_accepted(self, dk_gauge):
        result = _panel(dk_gauge, dk_gauge, "50", "60.0")
        assert result.values["new_cast_on_stitches"] == 100

    def test_rounding_drift(self, dk_gauge):
        # 2 sts / 10 cm: one stitch is 5 cm, so 52.5 cm rounds to 11 sts = 55 cm.
        result = _panel(dk_gauge, Gauge(2, 28), 52.5, 60)
        assert result.values["new_cast_on_stitches"] == 11
        assert result.values["new_actual_width"] == 55.0
        drift = [w for w in result.warnings if isinstance(w, RoundingDrift)]
        assert drift == [RoundingDrift(axis="width", delta=pytest.approx(2.5), unit=Unit.CM)]

    def test_small_drift_is_silent(self, dk_gauge):
        result = _panel(dk_gauge, dk_gauge, 50.2, 60)
        assert WarningKind.ROUNDING_DRIFT not in _kinds(result)

    def test_large_gauge_change(self, dk_gauge):
        result = _panel(dk_gauge, Gauge(25, 28), 50, 60)
        assert result.warnings == (GaugeChangeLarge(percent=pytest.approx(25.0)),)
        assert result.warning_messages == [
            "Large gauge change (25.0%) - verify yarn compatibility"
        ]

    def test_gauge_change_compares_per_cm(self, dk_gauge):
        # 20 sts / 10 cm is 5.08 sts per inch; the same fabric must not warn.
        same_fabric = Gauge(20.32, 28.448, swatch_width=4, swatch_height=4, unit=Unit.INCH)
        result = _panel(dk_gauge, same_fabric, 20, 24)
        assert WarningKind.GAUGE_CHANGE_LARGE not in _kinds(result)

    def test_unit_conversion(self, dk_gauge, inch_gauge):
        result = _panel(dk_gauge, inch_gauge, 20, 24)
        assert result.success
        assert result.values["new_cast_on_stitches"] == 90
        assert result.values["new_total_rows"] == 144
        assert result.values["new_actual_width"] == 20.0
        assert result.values["new_actual_length"] == 24.0
        assert result.warnings == (UnitConversion(from_unit=Unit.INCH, to_unit=Unit.CM),)

    def test_scarf_uses_same_branch(self, dk_gauge):
        result = calculate_resize(
            ResizeRequest(
                template_key="simple_scarf_rectangular",
                original_gauge=dk_gauge,
                new_gauge=dk_gauge,
                original_values={
                    "original_cast_on": 40,
                    "original_finished_width": 20,
                    "original_finished_length": 150,
                },
                new_values={"new_finished_width": 25, "new_finished_length": 160},
            )
        )
        assert result.values["new_cast_on_stitches"] == 50
        assert result.values["new_total_rows"] == 448


class TestTapered:
    def test_shaping_summary(self, dk_gauge):
        result = _sleeve(dk_gauge, 22, 32, 21.5)
        assert result.success
        assert result.had_shaping
        assert result.values["new_cuff_stitches"] == 44
        assert result.values["new_upper_arm_stitches"] == 64
        assert result.values["new_sleeve_length_rows"] == 60
        assert result.values["new_actual_cuff_width"] == 22.0
        assert result.values["new_actual_upper_arm_width"] == 32.0
        assert result.values["new_actual_sleeve_length"] == 21.4
        assert result.values["new_shaping_schedule_summary"] == (
            "Increase 2 stitches every 6th row, 10 times."
        )
        assert result.warnings == ()

    def test_stitches_per_event_carried_over(self, dk_gauge):
        original = dict(SLEEVE_ORIGINAL, original_shaping_stitches_per_event=1)
        result = _sleeve(dk_gauge, 22, 32, 21.5, original=original)
        assert result.values["new_shaping_schedule_summary"] == (
            "Increase 1 stitch every 3rd row, 20 times."
        )

    def test_equal_ends(self, dk_gauge):
        original = dict(SLEEVE_ORIGINAL, original_cuff_stitches=50, original_upper_arm_stitches=50)
        result = _sleeve(dk_gauge, 25, 25, 40, original=original)
        assert result.success
        assert result.had_shaping is False
        assert result.values["new_shaping_schedule_summary"] == "No shaping needed"

    def test_taper_ratio_shift(self, dk_gauge):
        # 44 -> 90 sts is a 2.05 ratio against the original 1.45.
        result = _sleeve(dk_gauge, 22, 45, 21.5)
        shifts = [w for w in result.warnings if isinstance(w, TaperRatioShift)]
        assert len(shifts) == 1
        assert shifts[0].original_ratio == pytest.approx(64 / 44)
        assert shifts[0].new_ratio == pytest.approx(90 / 44)
        assert "Significant change in sleeve taper ratio - verify fit" in result.warning_messages

    def test_moderate_ratio_change_is_silent(self, dk_gauge):
        result = _sleeve(dk_gauge, 22, 40, 21.5)
        assert WarningKind.TAPER_RATIO_SHIFT not in _kinds(result)

    def test_not_enough_rows_fails_resize(self, dk_gauge):
        result = _sleeve(dk_gauge, 10, 40, 5)
        assert not result.success
        assert result.values is None
        assert result.errors == (
            "Not enough rows for shaping: need 30 shaping rows but only have 14 total rows",
        )
        assert ShapingChangeExceedsStart(total_change=60, starting_count=20) in result.warnings

    def test_cuff_rounding_to_zero_stitches(self, dk_gauge):
        result = _sleeve(dk_gauge, 0.2, 40, 40)
        assert not result.success
        assert result.values is None
        assert result.errors == (
            "new_cuff_width is too small: it rounds to 0 stitches at the new gauge",
        )

    def test_inch_targets(self, dk_gauge, inch_gauge):
        result = _sleeve(inch_gauge, 8, 12, 10)
        assert result.success
        assert result.values["new_cuff_stitches"] == 36
        assert result.values["new_upper_arm_stitches"] == 54
        assert result.values["new_sleeve_length_rows"] == 60
        assert result.values["new_actual_cuff_width"] == 8.0
        assert _kinds(result)[0] is WarningKind.UNIT_CONVERSION


class TestCylindrical:
    def test_hat(self, dk_gauge):
        result = _hat(dk_gauge, 56, 20)
        assert result.success
        assert dict(result.values) == {
            "new_cast_on_stitches": 112,
            "new_total_rows": 56,
            "new_actual_circumference": 56.0,
            "new_actual_height": 20.0,
        }
        assert result.warnings == ()

    def test_tighter_rounding_tolerance(self):
        # 4 sts / 10 cm: 51.25 cm -> 20.5 -> 21 sts = 52.5 cm, 1.25 cm off.
        result = _hat(Gauge(4, 28), 51.25, 20)
        assert WarningKind.ROUNDING_DRIFT in _kinds(result)
        assert WarningKind.EASE_FIT not in _kinds(result)

    def test_ease_fit(self):
        # 2 sts / 10 cm: 52.5 cm -> 11 sts = 55 cm, 2.5 cm off.
        result = _hat(Gauge(2, 28), 52.5, 20)
        assert EaseFit(axis="circumference", delta=pytest.approx(2.5), unit=Unit.CM) in (
            result.warnings
        )
        assert (
            "Significant circumference change - consider ease for comfortable fit"
            in result.warning_messages
        )


class TestFailures:
    def test_unknown_template(self, dk_gauge):
        result = calculate_resize(ResizeRequest("nope", dk_gauge, dk_gauge, {}, {}))
        assert result.errors == ("Template not found: nope",)
        assert result.values is None

    def test_field_errors_from_both_maps(self, dk_gauge):
        result = calculate_resize(
            ResizeRequest(
                template_key="simple_body_panel_rectangular",
                original_gauge=dk_gauge,
                new_gauge=dk_gauge,
                original_values=dict(PANEL_ORIGINAL, original_cast_on=-4),
                new_values={"new_finished_width": "abc"},
            )
        )
        assert result.errors == (
            "original_cast_on must be positive",
            "new_finished_width must be a number",
            "new_finished_length is required",
        )

    def test_custom_settings(self, dk_gauge):
        base = get_settings()
        strict = dataclasses.replace(
            base, resize=dataclasses.replace(base.resize, max_gauge_change=0.05)
        )
        result = calculate_resize(
            ResizeRequest(
                template_key="simple_body_panel_rectangular",
                original_gauge=Gauge(22, 30),
                new_gauge=dk_gauge,
                original_values=PANEL_ORIGINAL,
                new_values={"new_finished_width": 50, "new_finished_length": 60},
            ),
            strict,
        )
        assert _kinds(result) == [WarningKind.GAUGE_CHANGE_LARGE]


class TestBuildShape:
    def test_rectangular(self):
        shape = build_shape(
            ShapeFamily.RECTANGULAR,
            {},
            {"new_finished_width": 20, "new_finished_length": 10},
            new_unit=Unit.INCH,
            work_unit=Unit.CM,
        )
        assert isinstance(shape, RectangularShape)
        assert shape.width == Length(pytest.approx(50.8), Unit.CM)

    def test_tapered(self):
        shape = build_shape(
            ShapeFamily.TAPERED,
            SLEEVE_ORIGINAL,
            {"new_cuff_width": 22, "new_upper_arm_width": 32, "new_sleeve_length": 40},
            new_unit=Unit.CM,
            work_unit=Unit.CM,
        )
        assert isinstance(shape, TaperedShape)
        assert shape.stitches_per_event == 2
        assert shape.original_wide_stitches == 64

    def test_cylindrical(self):
        shape = build_shape(
            ShapeFamily.CYLINDRICAL,
            {},
            {"new_head_circumference": "56", "new_hat_height": "20"},
            new_unit=Unit.CM,
            work_unit=Unit.CM,
        )
        assert shape == CylindricalShape(
            circumference=Length(56.0, Unit.CM), height=Length(20.0, Unit.CM)
        )
