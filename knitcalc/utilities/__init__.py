"""
Shared utilities for the knitcalc calculation engine.

Provides the deterministic primitives used identically by the shaping
calculator, the pattern resizer, and the hammer-sleeve calculator: typed
lengths and gauges, unit and gauge conversion, and shaping rate distribution.
"""

from .conversion import (
    length_to_rows,
    length_to_stitches,
    round_half_up,
    rows_to_length,
    stitch_density_per_cm,
    stitch_width,
    stitches_to_length,
)
from .shaping import (
    ShapingAction,
    ShapingDistribution,
    ShapingInterval,
    count_shaping_events,
    distribute_rows,
)
from .types import CM_PER_INCH, Gauge, Length, Unit, convert_unit

__all__ = [
    # types
    "Gauge",
    "Length",
    "Unit",
    "ShapingAction",
    "ShapingDistribution",
    "ShapingInterval",
    # conversion
    "CM_PER_INCH",
    "convert_unit",
    "round_half_up",
    "length_to_stitches",
    "length_to_rows",
    "stitches_to_length",
    "rows_to_length",
    "stitch_width",
    "stitch_density_per_cm",
    # shaping
    "count_shaping_events",
    "distribute_rows",
]
