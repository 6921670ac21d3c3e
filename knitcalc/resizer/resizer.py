"""
Gauge-based pattern resizer.

Recomputes stitch and row counts for an existing pattern knitted at a new
gauge and/or to new dimensions.

Stages:

  1. Template lookup           → "Template not found" on unknown key
  2. validate_fields()         → field-level errors for both value maps
  3. build_shape()             → family dataclass; new dimensions normalised
                                 into the original pattern's unit
  4. family branch (match)     → counts via the gauge conversion primitives;
                                 achieved dimensions recomputed from the
                                 rounded counts and reported in the new unit
  5. tapered only              → calculate_shaping() over the taper's rows

Warnings (rounding drift, gauge change, taper ratio shift, ease fit, unit
conversion) never block a result. A shaping failure inside a tapered resize
is fatal and is reported with the shaping calculator's own messages.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import assert_never

from knitcalc.config.settings import CalculatorSettings, ResizeSettings, get_settings
from knitcalc.resizer.templates import TemplateRegistry, get_template_registry
from knitcalc.resizer.validation import parse_number, validate_fields
from knitcalc.schemas.resize import (
    CylindricalShape,
    RectangularShape,
    ResizeRequest,
    ResizeResult,
    ResizeValue,
    Shape,
    ShapeFamily,
    TaperedShape,
)
from knitcalc.schemas.warnings import (
    CalculationWarning,
    EaseFit,
    GaugeChangeLarge,
    RoundingDrift,
    TaperRatioShift,
    UnitConversion,
)
from knitcalc.shaping.calculator import ShapingInput, calculate_shaping
from knitcalc.utilities.conversion import (
    length_to_rows,
    length_to_stitches,
    rows_to_length,
    stitch_density_per_cm,
    stitches_to_length,
)
from knitcalc.utilities.types import Length, Unit

logger = logging.getLogger(__name__)

NO_SHAPING_SUMMARY = "No shaping needed"


class ResizeError(Exception):
    """Raised inside a family branch when the resize cannot be completed.

    Attributes:
        messages: Human-readable reasons, passed through to ResizeResult.errors.
        warnings: Warnings gathered before the failure.
    """

    def __init__(
        self, messages: tuple[str, ...], warnings: tuple[CalculationWarning, ...] = ()
    ) -> None:
        super().__init__("; ".join(messages))
        self.messages = messages
        self.warnings = warnings


class _Context:
    """Per-call state shared by the family branches."""

    def __init__(self, request: ResizeRequest, settings: ResizeSettings) -> None:
        self.original_gauge = request.original_gauge
        self.new_gauge = request.new_gauge
        self.work_unit = request.original_gauge.unit
        self.display_unit = request.new_gauge.unit
        self.settings = settings
        self.warnings: list[CalculationWarning] = []

    def achieved(self, length: Length) -> float:
        """Express an achieved length in the display unit, rounded for display."""
        return round(length.to(self.display_unit).value, self.settings.display_decimals)

    def check_drift(
        self,
        axis: str,
        desired: Length,
        achieved: Length,
        tolerance: Mapping[Unit, float],
    ) -> float:
        """Append a RoundingDrift when achieved and desired differ too much."""
        delta = abs(desired.to(self.display_unit).value - achieved.to(self.display_unit).value)
        if delta > tolerance[self.display_unit]:
            self.warnings.append(RoundingDrift(axis=axis, delta=delta, unit=self.display_unit))
        return delta

    def check_gauge_change(self) -> None:
        original = stitch_density_per_cm(self.original_gauge)
        change = abs(stitch_density_per_cm(self.new_gauge) - original) / original
        if change > self.settings.max_gauge_change:
            self.warnings.append(GaugeChangeLarge(percent=change * 100))


# ── Shape construction ─────────────────────────────────────────────────────────


def _number(values: Mapping[str, object], key: str) -> float:
    number = parse_number(values.get(key))
    if number is None:
        raise ResizeError((f"{key} is required",))
    return number


def build_shape(
    family: ShapeFamily,
    original_values: Mapping[str, object],
    new_values: Mapping[str, object],
    new_unit: Unit,
    work_unit: Unit,
) -> Shape:
    """
    Build the family dataclass from validated value maps.

    New dimensions arrive in *new_unit* and are converted into *work_unit*
    (the original pattern's unit) so all arithmetic happens in one unit.
    """

    def length(key: str) -> Length:
        return Length(_number(new_values, key), new_unit).to(work_unit)

    match family:
        case ShapeFamily.RECTANGULAR:
            return RectangularShape(
                width=length("new_finished_width"),
                length=length("new_finished_length"),
            )
        case ShapeFamily.TAPERED:
            return TaperedShape(
                narrow_width=length("new_cuff_width"),
                wide_width=length("new_upper_arm_width"),
                length=length("new_sleeve_length"),
                original_narrow_stitches=int(_number(original_values, "original_cuff_stitches")),
                original_wide_stitches=int(
                    _number(original_values, "original_upper_arm_stitches")
                ),
                stitches_per_event=int(
                    _number(original_values, "original_shaping_stitches_per_event")
                ),
            )
        case ShapeFamily.CYLINDRICAL:
            return CylindricalShape(
                circumference=length("new_head_circumference"),
                height=length("new_hat_height"),
            )
        case _:
            assert_never(family)


# ── Family branches ────────────────────────────────────────────────────────────


def _resize_rectangular(shape: RectangularShape, ctx: _Context) -> dict[str, ResizeValue]:
    stitches = length_to_stitches(shape.width, ctx.new_gauge)
    rows = length_to_rows(shape.length, ctx.new_gauge)
    actual_width = stitches_to_length(stitches, ctx.new_gauge)
    actual_length = rows_to_length(rows, ctx.new_gauge)

    tolerance = ctx.settings.rounding_tolerance
    ctx.check_drift("width", shape.width, actual_width, tolerance)
    ctx.check_drift("length", shape.length, actual_length, tolerance)
    ctx.check_gauge_change()

    return {
        "new_cast_on_stitches": stitches,
        "new_total_rows": rows,
        "new_actual_width": ctx.achieved(actual_width),
        "new_actual_length": ctx.achieved(actual_length),
    }


def _resize_tapered(shape: TaperedShape, ctx: _Context) -> tuple[dict[str, ResizeValue], bool]:
    gauge = ctx.new_gauge
    narrow = length_to_stitches(shape.narrow_width, gauge)
    wide = length_to_stitches(shape.wide_width, gauge)
    rows = length_to_rows(shape.length, gauge)
    actual_narrow = stitches_to_length(narrow, gauge)
    actual_wide = stitches_to_length(wide, gauge)
    actual_length = rows_to_length(rows, gauge)

    tolerance = ctx.settings.rounding_tolerance
    ctx.check_drift("cuff_width", shape.narrow_width, actual_narrow, tolerance)
    ctx.check_drift("upper_arm_width", shape.wide_width, actual_wide, tolerance)
    ctx.check_drift("sleeve_length", shape.length, actual_length, tolerance)

    empty = [
        f"{key} is too small: it rounds to 0 stitches at the new gauge"
        for key, count in (("new_cuff_width", narrow), ("new_upper_arm_width", wide))
        if count < 1
    ]
    if empty:
        raise ResizeError(tuple(empty), tuple(ctx.warnings))

    summary = NO_SHAPING_SUMMARY
    had_shaping = False
    if narrow != wide:
        result = calculate_shaping(
            ShapingInput(
                starting_stitch_count=narrow,
                target_stitch_count=wide,
                total_rows_for_shaping=rows,
                stitches_per_shaping_event=shape.stitches_per_event,
                rows_per_unit=gauge.rows_per_unit,
                unit=gauge.unit,
            )
        )
        ctx.warnings.extend(result.warnings)
        if not result.success or result.schedule is None:
            raise ResizeError(result.errors, tuple(ctx.warnings))
        if result.schedule.has_shaping:
            summary = result.schedule.events[0].simple_instruction
            had_shaping = True

    ctx.check_gauge_change()

    original_ratio = shape.original_wide_stitches / shape.original_narrow_stitches
    new_ratio = wide / narrow
    shift = abs(new_ratio - original_ratio) / original_ratio
    if shift > ctx.settings.max_taper_ratio_shift:
        ctx.warnings.append(
            TaperRatioShift(original_ratio=original_ratio, new_ratio=new_ratio, percent=shift * 100)
        )

    values: dict[str, ResizeValue] = {
        "new_cuff_stitches": narrow,
        "new_upper_arm_stitches": wide,
        "new_sleeve_length_rows": rows,
        "new_actual_cuff_width": ctx.achieved(actual_narrow),
        "new_actual_upper_arm_width": ctx.achieved(actual_wide),
        "new_actual_sleeve_length": ctx.achieved(actual_length),
        "new_shaping_schedule_summary": summary,
    }
    return values, had_shaping


def _resize_cylindrical(shape: CylindricalShape, ctx: _Context) -> dict[str, ResizeValue]:
    stitches = length_to_stitches(shape.circumference, ctx.new_gauge)
    rows = length_to_rows(shape.height, ctx.new_gauge)
    actual_circumference = stitches_to_length(stitches, ctx.new_gauge)
    actual_height = rows_to_length(rows, ctx.new_gauge)

    tolerance = ctx.settings.cylindrical_rounding_tolerance
    delta = ctx.check_drift("circumference", shape.circumference, actual_circumference, tolerance)
    ctx.check_drift("height", shape.height, actual_height, tolerance)
    if delta > ctx.settings.ease_fit_tolerance[ctx.display_unit]:
        ctx.warnings.append(EaseFit(axis="circumference", delta=delta, unit=ctx.display_unit))
    ctx.check_gauge_change()

    return {
        "new_cast_on_stitches": stitches,
        "new_total_rows": rows,
        "new_actual_circumference": ctx.achieved(actual_circumference),
        "new_actual_height": ctx.achieved(actual_height),
    }


# ── Entry point ────────────────────────────────────────────────────────────────


def calculate_resize(
    request: ResizeRequest,
    settings: CalculatorSettings | None = None,
    registry: TemplateRegistry | None = None,
) -> ResizeResult:
    """
    Resize a pattern to a new gauge and new dimensions.

    Parameters
    ----------
    request:
        Template key, both gauges, and the named value maps.
    settings:
        Threshold overrides; defaults to the loaded settings singleton.
    registry:
        Template catalog; defaults to the bundled catalog.

    Returns
    -------
    ResizeResult
        Always returned; never raises for bad input. On failure ``values``
        is None and ``errors`` lists every problem found.
    """
    cfg = settings or get_settings()
    catalog = registry or get_template_registry()
    key = request.template_key

    try:
        template = catalog.get(key)
    except KeyError:
        logger.info("Unknown resizer template %r", key)
        return ResizeResult(template_key=key, values=None, errors=(f"Template not found: {key}",))

    errors = validate_fields(request.original_values, template.original_fields)
    errors += validate_fields(request.new_values, template.new_fields)
    if errors:
        logger.info("Rejected resize input for %s: %s", key, "; ".join(errors))
        return ResizeResult(template_key=key, values=None, errors=tuple(errors))

    ctx = _Context(request, cfg.resize)
    if ctx.work_unit is not ctx.display_unit:
        ctx.warnings.append(UnitConversion(from_unit=ctx.display_unit, to_unit=ctx.work_unit))

    had_shaping = False
    try:
        shape = build_shape(
            template.family,
            request.original_values,
            request.new_values,
            new_unit=ctx.display_unit,
            work_unit=ctx.work_unit,
        )
        logger.debug("Resizing %s as %s", key, type(shape).__name__)
        match shape:
            case RectangularShape():
                values = _resize_rectangular(shape, ctx)
            case TaperedShape():
                values, had_shaping = _resize_tapered(shape, ctx)
            case CylindricalShape():
                values = _resize_cylindrical(shape, ctx)
            case _:
                assert_never(shape)
    except ResizeError as exc:
        logger.info("Resize of %s failed: %s", key, exc)
        return ResizeResult(
            template_key=key,
            values=None,
            errors=exc.messages,
            warnings=exc.warnings or tuple(ctx.warnings),
        )

    logger.debug("Resized %s: %s", key, values)
    return ResizeResult(
        template_key=key,
        values=MappingProxyType(values),
        warnings=tuple(ctx.warnings),
        had_shaping=had_shaping,
    )
