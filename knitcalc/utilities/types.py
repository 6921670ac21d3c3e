"""
Core type definitions for the shared utilities layer.

All types are frozen dataclasses with fail-fast validation in __post_init__.
Physical lengths always travel with their unit so that centimetres and
inches cannot be mixed by accident.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

CM_PER_INCH: float = 2.54


class Unit(str, Enum):
    """Unit of physical length accepted by the engine."""

    CM = "cm"
    INCH = "inch"


def convert_unit(value: float, from_unit: Unit, to_unit: Unit) -> float:
    """Convert a raw length between centimetres and inches."""
    if from_unit is to_unit:
        return value
    if from_unit is Unit.INCH:
        return value * CM_PER_INCH
    return value / CM_PER_INCH


@dataclass(frozen=True)
class Length:
    """
    A physical length tagged with its unit.

    Subtracting one length from another converts the right-hand operand into
    the left-hand operand's unit, so the result always carries a single unit.
    """

    value: float
    unit: Unit

    def to(self, unit: Unit) -> Length:
        """Return this length expressed in *unit*."""
        return Length(convert_unit(self.value, self.unit, unit), unit)

    def __sub__(self, other: Length) -> Length:
        return Length(self.value - other.to(self.unit).value, self.unit)

    def __truediv__(self, divisor: float) -> Length:
        return Length(self.value / divisor, self.unit)

    def __str__(self) -> str:
        return f"{self.value:.1f}{self.unit.value}"


@dataclass(frozen=True)
class Gauge:
    """
    Knitting gauge measured over a swatch.

    ``stitches_per_swatch`` stitches span ``swatch_width`` and
    ``rows_per_swatch`` rows span ``swatch_height``, both in ``unit``.
    All four numbers must be strictly positive. Gauges are immutable after
    construction and safe to share across calculators.
    """

    stitches_per_swatch: float
    rows_per_swatch: float
    swatch_width: float = 10.0
    swatch_height: float = 10.0
    unit: Unit = Unit.CM

    def __post_init__(self) -> None:
        if self.stitches_per_swatch <= 0:
            raise ValueError(
                f"stitches_per_swatch must be positive, got {self.stitches_per_swatch}"
            )
        if self.rows_per_swatch <= 0:
            raise ValueError(f"rows_per_swatch must be positive, got {self.rows_per_swatch}")
        if self.swatch_width <= 0:
            raise ValueError(f"swatch_width must be positive, got {self.swatch_width}")
        if self.swatch_height <= 0:
            raise ValueError(f"swatch_height must be positive, got {self.swatch_height}")
        # Accept plain strings ("cm", "inch") but always store the enum.
        object.__setattr__(self, "unit", Unit(self.unit))

    @property
    def stitches_per_unit(self) -> float:
        """Stitches per one unit of length (per cm or per inch)."""
        return self.stitches_per_swatch / self.swatch_width

    @property
    def rows_per_unit(self) -> float:
        """Rows per one unit of length (per cm or per inch)."""
        return self.rows_per_swatch / self.swatch_height

    @staticmethod
    def standard_swatch(unit: Unit) -> float:
        """Conventional swatch size for *unit*: 10 cm or 4 inches."""
        return 10.0 if unit is Unit.CM else 4.0
