"""
English rendering of structured calculation warnings.

The calculators only ever produce warning dataclasses; this module is the
single place where they become user-facing text.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import assert_never

from knitcalc.schemas.warnings import (
    Bound,
    CalculationWarning,
    EaseFit,
    GaugeChangeLarge,
    GeometricMismatch,
    ImplausibleMeasurement,
    RoundingDrift,
    ShapingChangeBelowEventSize,
    ShapingChangeExceedsStart,
    ShapingRowsExcessive,
    TaperRatioShift,
    UnitConversion,
)

_STITCH_AXES = frozenset({"width", "circumference", "cuff_width", "upper_arm_width"})


def _fmt(value: float) -> str:
    return f"{value:g}"


def render_warning(warning: CalculationWarning) -> str:
    """Render a single warning as an English sentence."""
    match warning:
        case ShapingRowsExcessive():
            return "Very large number of rows for shaping - please verify"
        case ShapingChangeExceedsStart():
            return "Large change relative to starting stitch count - please verify measurements"
        case ShapingChangeBelowEventSize():
            return "Total stitch change is less than stitches per shaping event"
        case UnitConversion(from_unit=src, to_unit=dst):
            return f"Unit conversion applied: {src.value} to {dst.value}"
        case RoundingDrift(axis=axis, delta=delta, unit=unit):
            source = "stitch" if axis in _STITCH_AXES else "row"
            name = axis.replace("_", " ").capitalize()
            return (
                f"{name} differs by {delta:.1f}{unit.value} from desired "
                f"due to {source} count rounding"
            )
        case GaugeChangeLarge(percent=percent):
            return f"Large gauge change ({percent:.1f}%) - verify yarn compatibility"
        case TaperRatioShift():
            return "Significant change in sleeve taper ratio - verify fit"
        case EaseFit(axis=axis):
            return f"Significant {axis.replace('_', ' ')} change - consider ease for comfortable fit"
        case ImplausibleMeasurement(field=field, value=value, unit=unit, bound=bound, limit=limit):
            name = field.replace("_", " ").capitalize()
            if bound is Bound.MIN:
                return (
                    f"{name} ({_fmt(value)}{unit.value}) is quite small. "
                    f"Minimum recommended: {_fmt(limit)}{unit.value}"
                )
            return (
                f"{name} ({_fmt(value)}{unit.value}) is quite large. "
                f"Maximum recommended: {_fmt(limit)}{unit.value}"
            )
        case GeometricMismatch(dimension="width", sleeve_value=sleeve, body_value=body):
            return (
                f"Geometric mismatch: sleeve vertical part ({sleeve} sts) "
                f"vs body cutout ({body} sts)"
            )
        case GeometricMismatch(sleeve_value=sleeve, body_value=body):
            return (
                f"Geometric mismatch: sleeve vertical part height ({sleeve} rows) "
                f"vs body cutout depth ({body} rows)"
            )
        case _:
            assert_never(warning)


def render_warnings(warnings: Iterable[CalculationWarning]) -> list[str]:
    """Render every warning in order."""
    return [render_warning(w) for w in warnings]
