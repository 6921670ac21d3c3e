"""
Structured calculation warnings.

Warnings never block a result. Each kind is a frozen dataclass carrying the
numbers a caller needs to explain the problem; turning them into prose is the
writer's job (see ``knitcalc.writer.warnings``), so callers can localise or
reformat without parsing strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from knitcalc.utilities.types import Unit


class WarningKind(str, Enum):
    """Discriminator for every warning the engine can emit."""

    SHAPING_ROWS_EXCESSIVE = "shaping_rows_excessive"
    SHAPING_CHANGE_EXCEEDS_START = "shaping_change_exceeds_start"
    SHAPING_CHANGE_BELOW_EVENT_SIZE = "shaping_change_below_event_size"
    UNIT_CONVERSION = "unit_conversion"
    ROUNDING_DRIFT = "rounding_drift"
    GAUGE_CHANGE_LARGE = "gauge_change_large"
    TAPER_RATIO_SHIFT = "taper_ratio_shift"
    EASE_FIT = "ease_fit"
    IMPLAUSIBLE_MEASUREMENT = "implausible_measurement"
    GEOMETRIC_MISMATCH = "geometric_mismatch"


class Bound(str, Enum):
    """Which side of a plausible range a measurement fell outside."""

    MIN = "min"
    MAX = "max"


@dataclass(frozen=True)
class ShapingRowsExcessive:
    """More rows were supplied for shaping than is plausible for one section."""

    kind: ClassVar[WarningKind] = WarningKind.SHAPING_ROWS_EXCESSIVE
    total_rows: int
    limit: int


@dataclass(frozen=True)
class ShapingChangeExceedsStart:
    """The stitch change is larger than the starting count (likely a typo)."""

    kind: ClassVar[WarningKind] = WarningKind.SHAPING_CHANGE_EXCEEDS_START
    total_change: int
    starting_count: int


@dataclass(frozen=True)
class ShapingChangeBelowEventSize:
    """Fewer stitches change in total than one shaping row would change."""

    kind: ClassVar[WarningKind] = WarningKind.SHAPING_CHANGE_BELOW_EVENT_SIZE
    total_change: int
    stitches_per_event: int


@dataclass(frozen=True)
class UnitConversion:
    """New dimensions were converted into the original pattern's unit."""

    kind: ClassVar[WarningKind] = WarningKind.UNIT_CONVERSION
    from_unit: Unit
    to_unit: Unit


@dataclass(frozen=True)
class RoundingDrift:
    """Achieved dimension differs from the desired one after rounding counts."""

    kind: ClassVar[WarningKind] = WarningKind.ROUNDING_DRIFT
    axis: str
    delta: float
    unit: Unit


@dataclass(frozen=True)
class GaugeChangeLarge:
    """Stitch density changed by more than the configured fraction."""

    kind: ClassVar[WarningKind] = WarningKind.GAUGE_CHANGE_LARGE
    percent: float


@dataclass(frozen=True)
class TaperRatioShift:
    """Wide-to-narrow stitch ratio moved away from the original silhouette."""

    kind: ClassVar[WarningKind] = WarningKind.TAPER_RATIO_SHIFT
    original_ratio: float
    new_ratio: float
    percent: float


@dataclass(frozen=True)
class EaseFit:
    """A fitted circumference drifted enough to affect wearing ease."""

    kind: ClassVar[WarningKind] = WarningKind.EASE_FIT
    axis: str
    delta: float
    unit: Unit


@dataclass(frozen=True)
class ImplausibleMeasurement:
    """A measurement lies outside the plausible adult-garment range."""

    kind: ClassVar[WarningKind] = WarningKind.IMPLAUSIBLE_MEASUREMENT
    field: str
    value: float
    unit: Unit
    bound: Bound
    limit: float


@dataclass(frozen=True)
class GeometricMismatch:
    """Two pieces that must join have different stitch or row counts."""

    kind: ClassVar[WarningKind] = WarningKind.GEOMETRIC_MISMATCH
    dimension: str  # "width" (stitches) | "height" (rows)
    sleeve_value: int
    body_value: int


CalculationWarning = Union[
    ShapingRowsExcessive,
    ShapingChangeExceedsStart,
    ShapingChangeBelowEventSize,
    UnitConversion,
    RoundingDrift,
    GaugeChangeLarge,
    TaperRatioShift,
    EaseFit,
    ImplausibleMeasurement,
    GeometricMismatch,
]
