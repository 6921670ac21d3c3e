"""
Step-by-step knitting instructions for a hammer-sleeve garment.

Renders a HammerSleeveCalculations into four numbered sections:

  sleeve      cast on, main sleeve (plain, or tapered per a ShapingSchedule),
              vertical part of the cap, shoulder extension
  front_body  cast on, work to armhole, armhole cutout bind-offs, straps
  back_body   as front_body
  assembly    join extensions to straps, seams, finishing

Stitch counts in the text reflect the count on the needle after the step.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from knitcalc.schemas.hammer_sleeve import HammerSleeveCalculations
from knitcalc.shaping.calculator import ShapingSchedule
from knitcalc.utilities.shaping import ShapingAction
from knitcalc.writer.templates import render_shaping_row, rows_phrase

STITCH_PATTERN = "Stockinette Stitch"

# The calculator does not size the main sleeve or the lower body; these are
# the minimum lengths used for the plain sections.
MIN_MAIN_SLEEVE_ROWS = 20
MIN_BODY_ROWS_TO_ARMHOLE = 40


class HammerSleeveComponent(str, Enum):
    SLEEVE_MAIN = "sleeve_main"
    SLEEVE_VERTICAL_PART = "sleeve_vertical_part"
    SLEEVE_EXTENSION = "sleeve_extension"
    FRONT_BODY = "front_body"
    BACK_BODY = "back_body"
    ASSEMBLY = "assembly"


@dataclass(frozen=True)
class InstructionStep:
    """
    One numbered instruction.

    Attributes:
        step: 1-based position within its section.
        text: Instruction prose.
        stitch_count: Stitches on the needle after the step, or None when
            counts are switched off or not meaningful (assembly).
        component: Piece of the garment the step belongs to.
        rows: Rows worked by the step (0 for cast-on, bind-off, seaming).
    """

    step: int
    text: str
    stitch_count: int | None
    component: HammerSleeveComponent
    rows: int = 0


@dataclass(frozen=True)
class HammerSleeveInstructions:
    sleeve: tuple[InstructionStep, ...]
    front_body: tuple[InstructionStep, ...]
    back_body: tuple[InstructionStep, ...]
    assembly: tuple[InstructionStep, ...]

    @property
    def sections(self) -> dict[str, tuple[InstructionStep, ...]]:
        return {
            "sleeve": self.sleeve,
            "front_body": self.front_body,
            "back_body": self.back_body,
            "assembly": self.assembly,
        }

    @property
    def total_steps(self) -> int:
        return sum(len(steps) for steps in self.sections.values())

    @property
    def total_rows(self) -> int:
        return sum(s.rows for steps in self.sections.values() for s in steps)

    @property
    def components(self) -> list[str]:
        return list(self.sections)


class _Section:
    """Accumulates numbered steps for one section."""

    def __init__(self, include_stitch_counts: bool) -> None:
        self._include_counts = include_stitch_counts
        self.steps: list[InstructionStep] = []

    def add(
        self,
        text: str,
        component: HammerSleeveComponent,
        stitch_count: int | None = None,
        rows: int = 0,
    ) -> None:
        shown = stitch_count if self._include_counts else None
        if shown is not None:
            text = f"{text} ({shown} sts)"
        self.steps.append(
            InstructionStep(
                step=len(self.steps) + 1,
                text=text,
                stitch_count=shown,
                component=component,
                rows=rows,
            )
        )


def _plain_sleeve_text(rows: int) -> str:
    return f"Continue in {STITCH_PATTERN}, work {rows_phrase(rows)} plain."


def _tapered_sleeve(section: _Section, schedule: ShapingSchedule, start: int) -> int:
    """Emit the tapered main sleeve; returns the stitch count at the end."""
    count = start
    row = 0
    for event in schedule.events:
        sign = 1 if event.action is ShapingAction.INCREASE else -1
        remaining = event.total_stitches_to_change
        for interval in event.distribution.schedule():
            if interval > 1:
                section.add(
                    _plain_sleeve_text(interval - 1),
                    HammerSleeveComponent.SLEEVE_MAIN,
                    count,
                    rows=interval - 1,
                )
                row += interval - 1
            row += 1
            # The last event may change fewer stitches than the others.
            change = min(event.stitches_per_event, remaining)
            remaining -= change
            count += sign * change
            side = "RS" if row % 2 == 1 else "WS"
            section.add(
                f"Row {row} ({side}): {render_shaping_row(event.action, change)}",
                HammerSleeveComponent.SLEEVE_MAIN,
                count,
                rows=1,
            )
    return count


def _net_change(schedule: ShapingSchedule) -> int:
    net = 0
    for event in schedule.events:
        sign = 1 if event.action is ShapingAction.INCREASE else -1
        net += sign * event.total_stitches_to_change
    return net


def _sleeve(
    calc: HammerSleeveCalculations,
    schedule: ShapingSchedule | None,
    include_stitch_counts: bool,
) -> tuple[InstructionStep, ...]:
    section = _Section(include_stitch_counts)
    vertical = calc.sleeve_cap_vertical_part
    extension = calc.sleeve_cap_extension

    tapered = schedule is not None and schedule.has_shaping
    # A tapered sleeve is cast on so that it arrives at the cap width.
    cast_on = vertical.width_stitches - _net_change(schedule) if tapered else vertical.width_stitches
    section.add(f"Cast on {cast_on} stitches.", HammerSleeveComponent.SLEEVE_MAIN, cast_on)

    if tapered:
        count = _tapered_sleeve(section, schedule, cast_on)
    else:
        rows = max(MIN_MAIN_SLEEVE_ROWS, vertical.height_rows)
        section.add(_plain_sleeve_text(rows), HammerSleeveComponent.SLEEVE_MAIN, cast_on, rows=rows)
        count = cast_on

    section.add(
        f"Work straight in {STITCH_PATTERN} for {rows_phrase(vertical.height_rows)} "
        "(vertical part of sleeve cap).",
        HammerSleeveComponent.SLEEVE_VERTICAL_PART,
        count,
        rows=vertical.height_rows,
    )

    on_hold = max(0, (count - extension.width_stitches) // 2)
    section.add(
        f"Continue with center {extension.width_stitches} stitches only "
        f"(place remaining {on_hold} stitches each side on hold). "
        f"Work in {STITCH_PATTERN} for {rows_phrase(extension.length_rows)} "
        "to form shoulder extension.",
        HammerSleeveComponent.SLEEVE_EXTENSION,
        extension.width_stitches,
        rows=extension.length_rows,
    )
    return tuple(section.steps)


def _body_panel(
    calc: HammerSleeveCalculations,
    component: HammerSleeveComponent,
    include_stitch_counts: bool,
) -> tuple[InstructionStep, ...]:
    section = _Section(include_stitch_counts)
    body = calc.body_panel_shaping
    name = "Front" if component is HammerSleeveComponent.FRONT_BODY else "Back"
    chest = body.body_width_at_chest_stitches
    strap = body.shoulder_strap_width_stitches
    cutout = body.bind_off_for_cutout_stitches

    section.add(f"{name}: Cast on {chest} stitches.", component, chest)

    rows = max(MIN_BODY_ROWS_TO_ARMHOLE, body.armhole_depth_rows * 2)
    section.add(
        f"Work in {STITCH_PATTERN} for {rows_phrase(rows)} to armhole height.",
        component,
        chest,
        rows=rows,
    )

    remaining = chest - 2 * cutout
    section.add(
        f"Bind off {cutout} stitches (armhole cutout), knit until {cutout} stitches remain, "
        f"bind off remaining {cutout} stitches (armhole cutout).",
        component,
        remaining,
    )

    for side in ("left", "right"):
        section.add(
            f"Continue on {side} shoulder strap only ({strap} stitches). "
            f"Work in {STITCH_PATTERN} for {rows_phrase(body.armhole_depth_rows)}.",
            component,
            strap,
            rows=body.armhole_depth_rows,
        )
    return tuple(section.steps)


def _assembly() -> tuple[InstructionStep, ...]:
    section = _Section(include_stitch_counts=False)
    for text in (
        "Join sleeve extensions to body shoulder straps using seaming.",
        "Sew side seams and underarm seams.",
        "Weave in all ends and block to measurements.",
    ):
        section.add(text, HammerSleeveComponent.ASSEMBLY)
    return tuple(section.steps)


def generate_hammer_sleeve_instructions(
    calc: HammerSleeveCalculations,
    sleeve_shaping: ShapingSchedule | None = None,
    include_stitch_counts: bool = True,
) -> HammerSleeveInstructions:
    """
    Render knitting instructions for every piece of a hammer-sleeve garment.

    Args:
        calc: Counts from calculate_hammer_sleeve().
        sleeve_shaping: Optional cuff-to-upper-arm taper for the main sleeve.
            Without it the main sleeve is worked straight.
        include_stitch_counts: Append "(N sts)" to each step.

    Returns:
        A HammerSleeveInstructions with one tuple of steps per section.
    """
    return HammerSleeveInstructions(
        sleeve=_sleeve(calc, sleeve_shaping, include_stitch_counts),
        front_body=_body_panel(calc, HammerSleeveComponent.FRONT_BODY, include_stitch_counts),
        back_body=_body_panel(calc, HammerSleeveComponent.BACK_BODY, include_stitch_counts),
        assembly=_assembly(),
    )
