"""
Public hammer-sleeve API.

calculate_hammer_sleeve_from_fields() builds a HammerSleeveInput from raw
field values and runs the calculator. Optionally it also renders knitting
instructions for a successful calculation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from knitcalc.config.settings import CalculatorSettings
from knitcalc.hammer_sleeve.calculator import calculate_hammer_sleeve
from knitcalc.resizer.templates import TemplateField
from knitcalc.resizer.validation import (
    gauge_from_fields,
    parse_number,
    unit_from_fields,
    validate_fields,
)
from knitcalc.schemas.hammer_sleeve import (
    DEFAULT_COMPONENT_KEY,
    HammerSleeveInput,
    HammerSleeveResult,
)
from knitcalc.shaping.calculator import ShapingSchedule
from knitcalc.utilities.types import Length, Unit
from knitcalc.writer.hammer_sleeve import (
    HammerSleeveInstructions,
    generate_hammer_sleeve_instructions,
)

MEASUREMENT_FIELDS = (
    TemplateField("total_shoulder_width", "Total shoulder width"),
    TemplateField("upper_arm_width", "Upper arm width"),
    TemplateField("armhole_depth", "Armhole depth"),
    TemplateField("neckline_width", "Neckline width"),
)


@dataclass(frozen=True)
class HammerSleeveReport:
    """Calculation result plus instructions when they were requested and possible."""

    result: HammerSleeveResult
    instructions: HammerSleeveInstructions | None = None


def calculate_hammer_sleeve_from_fields(
    fields: Mapping[str, object],
    settings: CalculatorSettings | None = None,
    with_instructions: bool = False,
    sleeve_shaping: ShapingSchedule | None = None,
) -> HammerSleeveReport:
    """
    Calculate hammer-sleeve counts from raw field values.

    Parameters
    ----------
    fields:
        The four measurements (``total_shoulder_width``, ``upper_arm_width``,
        ``armhole_depth``, ``neckline_width``), an optional ``unit`` for them
        (defaults to the gauge unit), the gauge as ``gauge_stitches``,
        ``gauge_rows`` and optionally ``gauge_unit``, ``swatch_width``,
        ``swatch_height``, and an optional ``component_key``.
    settings:
        Threshold overrides; defaults to the loaded settings singleton.
    with_instructions:
        Also render step-by-step instructions on success.
    sleeve_shaping:
        Optional taper for the main sleeve, passed to the instruction writer.

    Returns
    -------
    HammerSleeveReport
        Always returned; never raises for bad input.
    """
    gauge, errors = gauge_from_fields(fields, "")
    errors += validate_fields(fields, MEASUREMENT_FIELDS)
    unit, unit_errors = unit_from_fields(fields, "unit", gauge.unit if gauge else Unit.CM)
    errors += unit_errors
    if errors or gauge is None:
        return HammerSleeveReport(HammerSleeveResult(calculations=None, errors=tuple(errors)))

    def length(key: str) -> Length:
        return Length(parse_number(fields[key]) or 0.0, unit)

    component_key = fields.get("component_key")
    result = calculate_hammer_sleeve(
        HammerSleeveInput(
            total_shoulder_width=length("total_shoulder_width"),
            upper_arm_width=length("upper_arm_width"),
            armhole_depth=length("armhole_depth"),
            neckline_width=length("neckline_width"),
            gauge=gauge,
            component_key=str(component_key) if component_key else DEFAULT_COMPONENT_KEY,
        ),
        settings,
    )
    if not with_instructions or result.calculations is None:
        return HammerSleeveReport(result)
    return HammerSleeveReport(
        result,
        generate_hammer_sleeve_instructions(result.calculations, sleeve_shaping),
    )
