"""
Hammer-sleeve geometry calculator.

Derives the sleeve-cap and body-panel counts for a hammer-sleeve garment so
that the two pieces join exactly.

Pipeline:

  1. validate_hammer_sleeve_input() → errors (positive inputs, neckline
                                      narrower than shoulders, extension
                                      not too narrow) and range warnings
  2. _sleeve_cap()                  → horizontal extension + vertical part
  3. _body_panel()                  → shoulder strap, cutout, bind-off, chest
  4. check_join()                   → GeometricMismatch warnings, never
                                      corrected
  5. _achieved()                    → dimensions recomputed from the counts

All plausibility ranges are in centimetres; inch inputs are converted before
being compared.
"""

from __future__ import annotations

import logging

from knitcalc.config.settings import CalculatorSettings, HammerSleeveSettings, Range, get_settings
from knitcalc.schemas.hammer_sleeve import (
    AchievedDimensions,
    BodyPanelShaping,
    HammerSleeveCalculations,
    HammerSleeveInput,
    HammerSleeveResult,
    SleeveCapExtension,
    SleeveCapVerticalPart,
)
from knitcalc.schemas.warnings import (
    Bound,
    CalculationWarning,
    GeometricMismatch,
    ImplausibleMeasurement,
)
from knitcalc.utilities.conversion import (
    length_to_rows,
    length_to_stitches,
    rows_to_length,
    stitches_to_length,
)
from knitcalc.utilities.types import Gauge, Length, Unit

logger = logging.getLogger(__name__)


def shoulder_extension_width(hs: HammerSleeveInput) -> Length:
    """Width of the cap extension on each side: half of shoulders minus neckline."""
    return (hs.total_shoulder_width - hs.neckline_width) / 2


def _range_warning(field: str, length: Length, bounds: Range) -> ImplausibleMeasurement | None:
    value = length.to(Unit.CM).value
    if value < bounds.min:
        return ImplausibleMeasurement(
            field=field, value=round(value, 1), unit=Unit.CM, bound=Bound.MIN, limit=bounds.min
        )
    if value > bounds.max:
        return ImplausibleMeasurement(
            field=field, value=round(value, 1), unit=Unit.CM, bound=Bound.MAX, limit=bounds.max
        )
    return None


def validate_hammer_sleeve_input(
    hs: HammerSleeveInput,
    settings: CalculatorSettings | None = None,
) -> tuple[list[str], list[CalculationWarning]]:
    """
    Check measurements before any counts are derived.

    Returns:
        ``(errors, warnings)``. A too-narrow shoulder extension is an error
        (the cap cannot be knitted); a too-wide one, or an unusual upper arm
        or armhole, is only a warning.
    """
    cfg = (settings or get_settings()).hammer_sleeve
    errors: list[str] = []
    warnings: list[CalculationWarning] = []

    for name in ("total_shoulder_width", "upper_arm_width", "armhole_depth", "neckline_width"):
        if getattr(hs, name).value <= 0:
            errors.append(f"{name} must be a positive number")
    if errors:
        return errors, warnings

    if hs.neckline_width.to(Unit.CM).value >= hs.total_shoulder_width.to(Unit.CM).value:
        errors.append("Neckline width must be smaller than total shoulder width")
        return errors, warnings

    extension_cm = shoulder_extension_width(hs).to(Unit.CM).value
    if extension_cm < cfg.shoulder_extension_cm.min:
        errors.append(
            f"Shoulder extension width ({extension_cm:.1f}cm) is too small. "
            f"Minimum: {cfg.shoulder_extension_cm.min:g}cm"
        )
        return errors, warnings

    for field, length, bounds in (
        ("shoulder_extension_width", shoulder_extension_width(hs), cfg.shoulder_extension_cm),
        ("upper_arm_width", hs.upper_arm_width, cfg.upper_arm_width_cm),
        ("armhole_depth", hs.armhole_depth, cfg.armhole_depth_cm),
    ):
        warning = _range_warning(field, length, bounds)
        if warning is not None:
            warnings.append(warning)
    return errors, warnings


def _sleeve_cap(
    hs: HammerSleeveInput, cfg: HammerSleeveSettings
) -> tuple[SleeveCapExtension, SleeveCapVerticalPart]:
    extension = SleeveCapExtension(
        width_stitches=length_to_stitches(shoulder_extension_width(hs), hs.gauge),
        length_rows=cfg.extension_length_rows,
    )
    vertical = SleeveCapVerticalPart(
        width_stitches=length_to_stitches(hs.upper_arm_width, hs.gauge),
        height_rows=length_to_rows(hs.armhole_depth, hs.gauge),
    )
    return extension, vertical


def _body_panel(hs: HammerSleeveInput) -> BodyPanelShaping:
    strap = length_to_stitches(hs.neckline_width / 2, hs.gauge)
    cutout = length_to_stitches(hs.upper_arm_width, hs.gauge)
    return BodyPanelShaping(
        shoulder_strap_width_stitches=strap,
        armhole_cutout_width_stitches=cutout,
        armhole_depth_rows=length_to_rows(hs.armhole_depth, hs.gauge),
        bind_off_for_cutout_stitches=cutout,
        body_width_at_chest_stitches=2 * strap + 2 * cutout,
    )


def check_join(vertical: SleeveCapVerticalPart, body: BodyPanelShaping) -> list[GeometricMismatch]:
    """Compare the sleeve's join edge with the body cutout it drops into."""
    mismatches: list[GeometricMismatch] = []
    if vertical.width_stitches != body.armhole_cutout_width_stitches:
        mismatches.append(
            GeometricMismatch(
                dimension="width",
                sleeve_value=vertical.width_stitches,
                body_value=body.armhole_cutout_width_stitches,
            )
        )
    if vertical.height_rows != body.armhole_depth_rows:
        mismatches.append(
            GeometricMismatch(
                dimension="height",
                sleeve_value=vertical.height_rows,
                body_value=body.armhole_depth_rows,
            )
        )
    return mismatches


def _achieved(
    extension: SleeveCapExtension,
    vertical: SleeveCapVerticalPart,
    body: BodyPanelShaping,
    gauge: Gauge,
) -> AchievedDimensions:
    # Both straps plus both extensions span the shoulders.
    shoulder = stitches_to_length(
        2 * body.shoulder_strap_width_stitches + 2 * extension.width_stitches, gauge
    )
    return AchievedDimensions(
        shoulder_width=shoulder,
        upper_arm_width=stitches_to_length(vertical.width_stitches, gauge),
        armhole_depth=rows_to_length(vertical.height_rows, gauge),
    )


def calculate_hammer_sleeve(
    hs: HammerSleeveInput,
    settings: CalculatorSettings | None = None,
) -> HammerSleeveResult:
    """
    Calculate matching sleeve-cap and body-panel counts.

    Parameters
    ----------
    hs:
        Measurements, gauge, and component key.
    settings:
        Threshold overrides; defaults to the loaded settings singleton.

    Returns
    -------
    HammerSleeveResult
        Always returned; never raises for bad measurements. Join mismatches
        caused by rounding are reported as warnings alongside the counts.
    """
    cfg = settings or get_settings()
    errors, warnings = validate_hammer_sleeve_input(hs, cfg)
    if errors:
        logger.info("Rejected hammer sleeve input for %s: %s", hs.component_key, "; ".join(errors))
        return HammerSleeveResult(calculations=None, errors=tuple(errors), warnings=tuple(warnings))

    extension, vertical = _sleeve_cap(hs, cfg.hammer_sleeve)
    body = _body_panel(hs)
    mismatches = check_join(vertical, body)
    if mismatches:
        logger.info("Hammer sleeve join mismatch for %s: %s", hs.component_key, mismatches)
    warnings.extend(mismatches)

    logger.debug(
        "%s: extension %d sts x %d rows, vertical %d sts x %d rows, strap %d sts, chest %d sts",
        hs.component_key,
        extension.width_stitches,
        extension.length_rows,
        vertical.width_stitches,
        vertical.height_rows,
        body.shoulder_strap_width_stitches,
        body.body_width_at_chest_stitches,
    )
    return HammerSleeveResult(
        calculations=HammerSleeveCalculations(
            component_key=hs.component_key,
            sleeve_cap_extension=extension,
            sleeve_cap_vertical_part=vertical,
            body_panel_shaping=body,
            achieved=_achieved(extension, vertical, body, hs.gauge),
        ),
        warnings=tuple(warnings),
    )
