"""
Shaping prose templates.

render_shaping_row and render_plain_rows produce the per-step lines of a
shaping breakdown; render_shaping_summary turns a list of ShapingIntervals
into the one-line summary knitters expect ("Decrease 2 stitches every 6th
row, 10 times.").
"""

from __future__ import annotations

from knitcalc.utilities.shaping import ShapingAction, ShapingInterval


def ordinal(n: int) -> str:
    """English ordinal for *n*: 1st, 2nd, 3rd, 4th, ..., 11th, 12th, 13th, 21st."""
    if 11 <= n % 100 <= 13:
        return f"{n}th"
    match n % 10:
        case 1:
            return f"{n}st"
        case 2:
            return f"{n}nd"
        case 3:
            return f"{n}rd"
        case _:
            return f"{n}th"


def stitches_phrase(count: int) -> str:
    return "1 stitch" if count == 1 else f"{count} stitches"


def rows_phrase(count: int) -> str:
    return "1 row" if count == 1 else f"{count} rows"


def render_plain_rows(count: int) -> str:
    """Render a run of unshaped rows."""
    return f"Work {rows_phrase(count)} plain."


def render_shaping_row(action: ShapingAction, stitches_per_action: int) -> str:
    """Render one shaping row; placement depends on how many stitches change."""
    label = "Increase" if action is ShapingAction.INCREASE else "Decrease"
    verb = label.lower()
    match stitches_per_action:
        case 1:
            return f"{label} row: {verb} 1 stitch at beginning of row."
        case 2:
            return f"{label} row: {verb} 1 stitch at beginning and end of row."
        case _:
            return f"{label} row: {verb} {stitches_per_action} stitches evenly across row."


def render_shaping_summary(intervals: list[ShapingInterval]) -> str:
    """
    Render shaping intervals as a single instruction line.

    One interval:   "Increase 2 stitches every 4th row, 10 times."
    Two intervals:  "Increase 2 stitches every 5th row 5 times, then every
                     6th row 5 times."

    Intervals are expected in prose order (shorter first), as returned by
    ShapingDistribution.intervals().
    """
    if not intervals:
        return ""
    first = intervals[0]
    label = "Increase" if first.action is ShapingAction.INCREASE else "Decrease"
    head = f"{label} {stitches_phrase(first.stitches_per_action)}"
    if len(intervals) == 1:
        return f"{head} every {ordinal(first.every_n_rows)} row, {first.times} times."
    parts = [f"every {ordinal(i.every_n_rows)} row {i.times} times" for i in intervals]
    return f"{head} " + ", then ".join(parts) + "."
