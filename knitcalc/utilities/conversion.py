"""
Unit conversion between physical dimensions and stitch/row counts.

Lengths may be passed either as a :class:`Length` (converted into the
gauge's unit first) or as a bare float already expressed in the gauge's
unit. All functions are pure.

Counts are rounded half-up to match how knitters round on paper
(12.5 stitches → 13), not Python's round-half-to-even.
"""

from __future__ import annotations

import math

from .types import Gauge, Length, Unit, convert_unit


def round_half_up(value: float) -> int:
    """Round to the nearest integer; exact halves round up."""
    return math.floor(value + 0.5)


def _in_gauge_unit(length: Length | float, gauge: Gauge) -> float:
    if isinstance(length, Length):
        return length.to(gauge.unit).value
    return length


def length_to_stitches(length: Length | float, gauge: Gauge) -> int:
    """Convert a physical width to an integer stitch count."""
    return round_half_up(_in_gauge_unit(length, gauge) * gauge.stitches_per_unit)


def length_to_rows(length: Length | float, gauge: Gauge) -> int:
    """Convert a physical height to an integer row count."""
    return round_half_up(_in_gauge_unit(length, gauge) * gauge.rows_per_unit)


def stitches_to_length(count: float, gauge: Gauge) -> Length:
    """Width spanned by *count* stitches, in the gauge's unit."""
    return Length(count / gauge.stitches_per_unit, gauge.unit)


def rows_to_length(count: float, gauge: Gauge) -> Length:
    """Height spanned by *count* rows, in the gauge's unit."""
    return Length(count / gauge.rows_per_unit, gauge.unit)


def stitch_width(gauge: Gauge) -> Length:
    """One stitch-width at the given gauge."""
    return stitches_to_length(1, gauge)


def stitch_density_per_cm(gauge: Gauge) -> float:
    """Stitches per centimetre, whatever unit the gauge was measured in."""
    return gauge.stitches_per_unit / convert_unit(1.0, gauge.unit, Unit.CM)
