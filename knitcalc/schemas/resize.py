"""
Pattern resizer schema: shape families, requests, and results.

Each shape family carries only the dimensions its algorithm needs. The
resizer dispatches on the family dataclass with ``match`` so that adding a
family without a branch is caught by the type checker.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Union

from knitcalc.schemas.warnings import CalculationWarning
from knitcalc.utilities.types import Gauge, Length
from knitcalc.writer.warnings import render_warnings


class ShapeFamily(str, Enum):
    """Calculation branch a template belongs to."""

    RECTANGULAR = "rectangular"
    TAPERED = "tapered"
    CYLINDRICAL = "cylindrical"


@dataclass(frozen=True)
class RectangularShape:
    """Flat panel or scarf: desired finished width and length."""

    width: Length
    length: Length


@dataclass(frozen=True)
class TaperedShape:
    """
    Linear taper from a narrow end to a wide end (e.g. cuff to upper arm).

    Attributes:
        narrow_width: Desired width at the narrow (cast-on) end.
        wide_width: Desired width at the wide end.
        length: Desired length of the tapered section.
        original_narrow_stitches: Narrow-end stitch count in the original pattern.
        original_wide_stitches: Wide-end stitch count in the original pattern.
        stitches_per_event: Stitches changed per shaping row, carried over
            from the original pattern.
    """

    narrow_width: Length
    wide_width: Length
    length: Length
    original_narrow_stitches: int
    original_wide_stitches: int
    stitches_per_event: int


@dataclass(frozen=True)
class CylindricalShape:
    """Tube worked in the round (hat body): circumference and height."""

    circumference: Length
    height: Length


Shape = Union[RectangularShape, TaperedShape, CylindricalShape]

ResizeValue = Union[int, float, str]


@dataclass(frozen=True)
class ResizeRequest:
    """
    Inputs for one resize calculation.

    Attributes:
        template_key: Catalog key of the garment-structure template.
        original_gauge: Gauge the original pattern was written for.
        new_gauge: Gauge the knitter actually gets.
        original_values: Named values from the original pattern (stitch
            counts, row counts, finished dimensions).
        new_values: Named target dimensions, in ``new_gauge.unit``.
    """

    template_key: str
    original_gauge: Gauge
    new_gauge: Gauge
    original_values: Mapping[str, object]
    new_values: Mapping[str, object]

    def __post_init__(self) -> None:
        object.__setattr__(self, "original_values", MappingProxyType(dict(self.original_values)))
        object.__setattr__(self, "new_values", MappingProxyType(dict(self.new_values)))


@dataclass(frozen=True)
class ResizeResult:
    """
    Outcome of a resize calculation.

    ``values`` is None whenever ``errors`` is non-empty. Achieved dimensions
    in ``values`` are expressed in the new gauge's unit.
    """

    template_key: str
    values: MappingProxyType[str, ResizeValue] | None
    errors: tuple[str, ...] = ()
    warnings: tuple[CalculationWarning, ...] = ()
    had_shaping: bool = False

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def warning_messages(self) -> list[str]:
        return render_warnings(self.warnings)
