"""
Hammer-sleeve construction schema.

A hammer sleeve's cap has two parts: a vertical part that runs along the arm
and drops into a rectangular cutout in the body panel, and a horizontal
extension that continues over the top of the shoulder to meet the neckline.
The vertical part and the cutout form the join edge, so their stitch and row
counts must agree.
"""

from __future__ import annotations

from dataclasses import dataclass

from knitcalc.schemas.warnings import CalculationWarning
from knitcalc.utilities.types import Gauge, Length
from knitcalc.writer.warnings import render_warnings

DEFAULT_COMPONENT_KEY = "hammer_sleeve"


@dataclass(frozen=True)
class HammerSleeveInput:
    """
    Body measurements and gauge for one hammer-sleeve garment.

    Attributes:
        total_shoulder_width: Shoulder point to shoulder point.
        upper_arm_width: Width of the sleeve at the upper arm (flat).
        armhole_depth: Depth of the body cutout.
        neckline_width: Width of the back neck opening.
        gauge: Fabric gauge.
        component_key: Identifier of the component being calculated.
    """

    total_shoulder_width: Length
    upper_arm_width: Length
    armhole_depth: Length
    neckline_width: Length
    gauge: Gauge
    component_key: str = DEFAULT_COMPONENT_KEY


@dataclass(frozen=True)
class SleeveCapExtension:
    """Horizontal strip that forms the top of the shoulder, per side."""

    width_stitches: int
    length_rows: int


@dataclass(frozen=True)
class SleeveCapVerticalPart:
    """Part of the cap along the arm; the join edge with the body cutout."""

    width_stitches: int
    height_rows: int


@dataclass(frozen=True)
class BodyPanelShaping:
    """Rectangular armhole cutout in a front or back body panel.

    Stitch counts are per side except ``body_width_at_chest_stitches``.
    """

    shoulder_strap_width_stitches: int
    armhole_cutout_width_stitches: int
    armhole_depth_rows: int
    bind_off_for_cutout_stitches: int
    body_width_at_chest_stitches: int


@dataclass(frozen=True)
class AchievedDimensions:
    """Dimensions recomputed from the final counts, in the gauge's unit."""

    shoulder_width: Length
    upper_arm_width: Length
    armhole_depth: Length


@dataclass(frozen=True)
class HammerSleeveCalculations:
    component_key: str
    sleeve_cap_extension: SleeveCapExtension
    sleeve_cap_vertical_part: SleeveCapVerticalPart
    body_panel_shaping: BodyPanelShaping
    achieved: AchievedDimensions


@dataclass(frozen=True)
class HammerSleeveResult:
    """Outcome of calculate_hammer_sleeve().

    ``calculations`` is None whenever ``errors`` is non-empty.
    """

    calculations: HammerSleeveCalculations | None
    errors: tuple[str, ...] = ()
    warnings: tuple[CalculationWarning, ...] = ()

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def warning_messages(self) -> list[str]:
        return render_warnings(self.warnings)
