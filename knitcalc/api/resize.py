"""
Public pattern resizing API.

resize_pattern() takes the original pattern's values and the new targets as
raw mappings, each carrying its own gauge fields, builds the typed request,
and returns a ResizeResult; it never raises for bad input.
"""

from __future__ import annotations

from collections.abc import Mapping

from knitcalc.config.settings import CalculatorSettings
from knitcalc.resizer.resizer import calculate_resize
from knitcalc.resizer.templates import get_template_registry
from knitcalc.resizer.validation import gauge_from_fields, validate_fields
from knitcalc.schemas.resize import ResizeRequest, ResizeResult


def resize_pattern(
    template_key: str,
    original_values: Mapping[str, object],
    new_values: Mapping[str, object],
    settings: CalculatorSettings | None = None,
) -> ResizeResult:
    """
    Resize a pattern from raw field values.

    Parameters
    ----------
    template_key:
        Catalog key, e.g. ``"simple_sleeve_tapered"``.
    original_values:
        The original pattern's values plus its gauge as
        ``original_gauge_stitches``, ``original_gauge_rows`` and optionally
        ``original_gauge_unit``, ``original_swatch_width``,
        ``original_swatch_height``.
    new_values:
        Target dimensions plus the knitter's gauge under the ``new_`` prefix.
        Dimensions are read in the new gauge's unit.
    settings:
        Threshold overrides; defaults to the loaded settings singleton.

    Returns
    -------
    ResizeResult
        Always returned; never raises for bad input. Gauge and value errors
        are reported together.
    """
    original_gauge, errors = gauge_from_fields(original_values, "original")
    new_gauge, new_errors = gauge_from_fields(new_values, "new")
    errors += new_errors
    if original_gauge is None or new_gauge is None:
        catalog = get_template_registry()
        if template_key in catalog.list_keys():
            template = catalog.get(template_key)
            errors += validate_fields(original_values, template.original_fields)
            errors += validate_fields(new_values, template.new_fields)
        return ResizeResult(template_key=template_key, values=None, errors=tuple(errors))

    return calculate_resize(
        ResizeRequest(
            template_key=template_key,
            original_gauge=original_gauge,
            new_gauge=new_gauge,
            original_values=original_values,
            new_values=new_values,
        ),
        settings,
    )
