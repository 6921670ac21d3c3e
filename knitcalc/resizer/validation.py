"""
Field-level validation for resizer inputs.

Every problem is reported as its own message naming the field, so a form can
highlight each bad input. Nothing here raises for user input.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping

from knitcalc.resizer.templates import TemplateField
from knitcalc.utilities.types import Gauge, Unit


def parse_number(value: object) -> float | None:
    """Interpret *value* as a number; strings such as ``"42.5"`` are accepted.

    Returns None for anything that is not a finite number (including bools).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_fields(values: Mapping[str, object], fields: Iterable[TemplateField]) -> list[str]:
    """
    Check *values* against a template's field list.

    Required fields must be present; every supplied field must be a positive
    number, and a whole number where the template marks it as a count.
    """
    errors: list[str] = []
    for f in fields:
        raw = values.get(f.key)
        if _is_blank(raw):
            if f.required:
                errors.append(f"{f.key} is required")
            continue
        number = parse_number(raw)
        if number is None:
            errors.append(f"{f.key} must be a number")
        elif number <= 0:
            errors.append(f"{f.key} must be positive")
        elif f.integer and not number.is_integer():
            errors.append(f"{f.key} must be a whole number")
    return errors


def unit_from_fields(
    fields: Mapping[str, object], key: str, default: Unit = Unit.CM
) -> tuple[Unit, list[str]]:
    """Read a unit name such as ``"cm"`` or ``"INCH"``; blank means *default*."""
    raw = fields.get(key)
    if _is_blank(raw):
        return default, []
    try:
        return Unit(str(raw).strip().lower()), []
    except ValueError:
        return default, [f"{key} must be one of: {', '.join(u.value for u in Unit)}"]


def gauge_from_fields(fields: Mapping[str, object], prefix: str) -> tuple[Gauge | None, list[str]]:
    """
    Build a Gauge from flat form fields named ``{prefix}_gauge_stitches``,
    ``{prefix}_gauge_rows``, ``{prefix}_gauge_unit``, ``{prefix}_swatch_width``
    and ``{prefix}_swatch_height`` (unprefixed when *prefix* is empty).

    The unit defaults to cm. Missing swatch sizes default to the conventional
    swatch for the unit (10 cm or 4 inches).

    Returns:
        ``(gauge, [])`` on success, ``(None, errors)`` otherwise.
    """

    def name_of(name: str) -> str:
        return f"{prefix}_{name}" if prefix else name

    unit, errors = unit_from_fields(fields, name_of("gauge_unit"))

    numbers: dict[str, float] = {}
    for name, required in (
        ("gauge_stitches", True),
        ("gauge_rows", True),
        ("swatch_width", False),
        ("swatch_height", False),
    ):
        key = name_of(name)
        raw = fields.get(key)
        if _is_blank(raw):
            if required:
                errors.append(f"{key} is required")
            else:
                numbers[name] = Gauge.standard_swatch(unit)
            continue
        number = parse_number(raw)
        if number is None:
            errors.append(f"{key} must be a number")
        elif number <= 0:
            errors.append(f"{key} must be positive")
        else:
            numbers[name] = number

    if errors:
        return None, errors
    return (
        Gauge(
            stitches_per_swatch=numbers["gauge_stitches"],
            rows_per_swatch=numbers["gauge_rows"],
            swatch_width=numbers["swatch_width"],
            swatch_height=numbers["swatch_height"],
            unit=unit,
        ),
        [],
    )
