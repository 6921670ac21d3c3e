"""
Shaping distribution calculator.

Turns a starting and target stitch count plus a row budget into a schedule of
evenly spaced increase or decrease rows, with a step-by-step breakdown and a
one-line summary.

Pipeline:

  1. validate_shaping_input()  → field errors (fatal) + diagnostics (warnings)
  2. count_shaping_events()    → ceil(total change / stitches per event)
  3. distribute_rows()         → fatal "not enough rows" if events > rows
  4. _build_steps()            → plain-row runs and shaping rows, longer
                                 intervals first
  5. render_shaping_summary()  → "Decrease 2 stitches every 6th row, 10 times."

calculate_shaping() never raises for bad input: it returns a ShapingResult
whose ``errors`` explain what was wrong.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from knitcalc.config.settings import CalculatorSettings, get_settings
from knitcalc.schemas.warnings import (
    CalculationWarning,
    ShapingChangeBelowEventSize,
    ShapingChangeExceedsStart,
    ShapingRowsExcessive,
)
from knitcalc.utilities.shaping import (
    ShapingAction,
    ShapingDistribution,
    count_shaping_events,
    distribute_rows,
)
from knitcalc.utilities.types import Unit
from knitcalc.writer.templates import render_plain_rows, render_shaping_row, render_shaping_summary
from knitcalc.writer.warnings import render_warnings

logger = logging.getLogger(__name__)

ALGORITHM_NONE = "no-shaping"
ALGORITHM_LINEAR = "linear-distribution"


@dataclass(frozen=True)
class ShapingInput:
    """Inputs for a shaping calculation.

    Attributes:
        starting_stitch_count: Stitches on the needle when shaping begins.
        target_stitch_count: Stitches wanted when shaping ends.
        total_rows_for_shaping: Row budget the shaping must fit into.
        stitches_per_shaping_event: Stitches added or removed on each shaping row.
        rows_per_unit: Row gauge of the fabric (informational only).
        unit: Unit ``rows_per_unit`` is expressed in (informational only).
    """

    starting_stitch_count: int
    target_stitch_count: int
    total_rows_for_shaping: int
    stitches_per_shaping_event: int
    rows_per_unit: float
    unit: Unit = Unit.CM


@dataclass(frozen=True)
class ShapingStep:
    """One line of the breakdown, starting ``row_offset`` rows into the section."""

    row_offset: int
    instruction: str


@dataclass(frozen=True)
class ShapingEvent:
    """A single increase or decrease phase and how it is spread over the rows."""

    action: ShapingAction
    total_stitches_to_change: int
    stitches_per_event: int
    event_count: int
    distribution: ShapingDistribution
    simple_instruction: str
    steps: tuple[ShapingStep, ...]


@dataclass(frozen=True)
class ShapingSchedule:
    """Zero or one shaping event for a section.

    ``total_shaping_rows`` counts the shaping rows themselves (one per event),
    not the plain rows between them.
    """

    events: tuple[ShapingEvent, ...]
    has_shaping: bool
    total_shaping_rows: int
    algorithm: str


@dataclass(frozen=True)
class ShapingResult:
    """Outcome of calculate_shaping().

    ``schedule`` is None whenever ``errors`` is non-empty.
    """

    schedule: ShapingSchedule | None
    errors: tuple[str, ...] = ()
    warnings: tuple[CalculationWarning, ...] = ()

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def warning_messages(self) -> list[str]:
        return render_warnings(self.warnings)


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def validate_shaping_input(
    si: ShapingInput,
    settings: CalculatorSettings | None = None,
) -> tuple[list[str], list[CalculationWarning]]:
    """
    Check a ShapingInput before any arithmetic runs.

    Returns:
        ``(errors, warnings)``. Errors are fatal; warnings are heuristics
        the caller may surface (implausible row budget, suspiciously large
        change).
    """
    cfg = (settings or get_settings()).shaping
    errors: list[str] = []
    warnings: list[CalculationWarning] = []

    for name in (
        "starting_stitch_count",
        "target_stitch_count",
        "total_rows_for_shaping",
        "stitches_per_shaping_event",
    ):
        if not _is_positive_int(getattr(si, name)):
            errors.append(f"{name} must be a positive integer")
    if not isinstance(si.rows_per_unit, (int, float)) or si.rows_per_unit <= 0:
        errors.append("rows_per_unit must be greater than 0")
    if errors:
        return errors, warnings

    total_change = abs(si.target_stitch_count - si.starting_stitch_count)
    if 0 < total_change < si.stitches_per_shaping_event:
        warnings.append(
            ShapingChangeBelowEventSize(
                total_change=total_change,
                stitches_per_event=si.stitches_per_shaping_event,
            )
        )
    if si.total_rows_for_shaping > cfg.max_plausible_rows:
        warnings.append(
            ShapingRowsExcessive(total_rows=si.total_rows_for_shaping, limit=cfg.max_plausible_rows)
        )
    if total_change > si.starting_stitch_count:
        warnings.append(
            ShapingChangeExceedsStart(
                total_change=total_change, starting_count=si.starting_stitch_count
            )
        )
    return errors, warnings


def _build_steps(
    distribution: ShapingDistribution,
    action: ShapingAction,
    stitches_per_event: int,
) -> tuple[ShapingStep, ...]:
    """Emit plain-row runs and shaping rows, tracking the running row offset."""
    steps: list[ShapingStep] = []
    shaping_row = render_shaping_row(action, stitches_per_event)
    offset = 0
    for interval in distribution.schedule():
        if interval > 1:
            steps.append(ShapingStep(row_offset=offset, instruction=render_plain_rows(interval - 1)))
            offset += interval - 1
        steps.append(ShapingStep(row_offset=offset, instruction=shaping_row))
        offset += 1
    return tuple(steps)


def calculate_shaping(
    si: ShapingInput,
    settings: CalculatorSettings | None = None,
) -> ShapingResult:
    """
    Calculate an even shaping schedule.

    Parameters
    ----------
    si:
        Starting/target counts, row budget, and stitches per shaping row.
    settings:
        Threshold overrides; defaults to the loaded settings singleton.

    Returns
    -------
    ShapingResult
        Always returned; never raises for bad input. A starting count equal
        to the target yields a successful schedule with ``has_shaping=False``.
        More shaping rows than available rows is a fatal error.
    """
    errors, warnings = validate_shaping_input(si, settings)
    if errors:
        logger.info("Rejected shaping input: %s", "; ".join(errors))
        return ShapingResult(
            schedule=None,
            errors=tuple(errors),
            warnings=tuple(warnings),
        )

    total_change = abs(si.target_stitch_count - si.starting_stitch_count)
    if total_change == 0:
        logger.debug("No shaping needed at %d stitches", si.starting_stitch_count)
        return ShapingResult(
            schedule=ShapingSchedule(
                events=(), has_shaping=False, total_shaping_rows=0, algorithm=ALGORITHM_NONE
            ),
            warnings=tuple(warnings),
        )

    event_count = count_shaping_events(total_change, si.stitches_per_shaping_event)
    if event_count > si.total_rows_for_shaping:
        message = (
            f"Not enough rows for shaping: need {event_count} shaping rows "
            f"but only have {si.total_rows_for_shaping} total rows"
        )
        logger.info(message)
        return ShapingResult(schedule=None, errors=(message,), warnings=tuple(warnings))

    action = (
        ShapingAction.INCREASE
        if si.target_stitch_count > si.starting_stitch_count
        else ShapingAction.DECREASE
    )
    distribution = distribute_rows(si.total_rows_for_shaping, event_count)
    logger.debug(
        "%s %d sts in %d events over %d rows (base interval %d, %d longer)",
        action.value,
        total_change,
        event_count,
        si.total_rows_for_shaping,
        distribution.base_interval,
        distribution.num_longer_intervals,
    )

    event = ShapingEvent(
        action=action,
        total_stitches_to_change=total_change,
        stitches_per_event=si.stitches_per_shaping_event,
        event_count=event_count,
        distribution=distribution,
        simple_instruction=render_shaping_summary(
            distribution.intervals(action, si.stitches_per_shaping_event)
        ),
        steps=_build_steps(distribution, action, si.stitches_per_shaping_event),
    )
    return ShapingResult(
        schedule=ShapingSchedule(
            events=(event,),
            has_shaping=True,
            total_shaping_rows=event_count,
            algorithm=ALGORITHM_LINEAR,
        ),
        warnings=tuple(warnings),
    )
