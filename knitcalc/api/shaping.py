"""
Public shaping API.

calculate_shaping_from_fields() accepts the calculator's inputs as a flat
mapping of raw values (numbers or numeric strings) and returns a
ShapingResult; bad input becomes field-level errors, never an exception.
"""

from __future__ import annotations

from collections.abc import Mapping

from knitcalc.config.settings import CalculatorSettings
from knitcalc.resizer.templates import TemplateField
from knitcalc.resizer.validation import parse_number, unit_from_fields, validate_fields
from knitcalc.shaping.calculator import ShapingInput, ShapingResult, calculate_shaping

SHAPING_FIELDS = (
    TemplateField("starting_stitch_count", "Starting stitch count", integer=True),
    TemplateField("target_stitch_count", "Target stitch count", integer=True),
    TemplateField("total_rows_for_shaping", "Rows available for shaping", integer=True),
    TemplateField("stitches_per_shaping_event", "Stitches per shaping row", integer=True),
    TemplateField("rows_per_unit", "Row gauge per unit"),
)


def calculate_shaping_from_fields(
    fields: Mapping[str, object],
    settings: CalculatorSettings | None = None,
) -> ShapingResult:
    """
    Calculate a shaping schedule from raw field values.

    Parameters
    ----------
    fields:
        ``starting_stitch_count``, ``target_stitch_count``,
        ``total_rows_for_shaping``, ``stitches_per_shaping_event``,
        ``rows_per_unit`` and optionally ``unit`` (``"cm"`` or ``"inch"``).
    settings:
        Threshold overrides; defaults to the loaded settings singleton.

    Returns
    -------
    ShapingResult
        Always returned; never raises for bad input.
    """
    errors = validate_fields(fields, SHAPING_FIELDS)
    unit, unit_errors = unit_from_fields(fields, "unit")
    errors += unit_errors
    if errors:
        return ShapingResult(schedule=None, errors=tuple(errors))

    def count(key: str) -> int:
        return int(parse_number(fields[key]) or 0)

    return calculate_shaping(
        ShapingInput(
            starting_stitch_count=count("starting_stitch_count"),
            target_stitch_count=count("target_stitch_count"),
            total_rows_for_shaping=count("total_rows_for_shaping"),
            stitches_per_shaping_event=count("stitches_per_shaping_event"),
            rows_per_unit=parse_number(fields["rows_per_unit"]) or 0.0,
            unit=unit,
        ),
        settings,
    )
