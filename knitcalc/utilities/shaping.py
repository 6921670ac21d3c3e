"""
Shaping rate arithmetic: distribute increases/decreases evenly across rows.

Given the number of shaping rows needed and the number of rows available,
splits the rows into intervals that differ by at most one row. When the
division is uneven, two interval lengths are used, matching standard knitting
pattern conventions (e.g. "decrease every 4th row 7 times, then every 5th
row 3 times").
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class ShapingAction(str, Enum):
    """Direction of a shaping operation."""

    INCREASE = "increase"
    DECREASE = "decrease"


@dataclass(frozen=True)
class ShapingInterval:
    """A single shaping instruction: perform action every N rows, repeated M times."""

    action: ShapingAction
    every_n_rows: int
    times: int
    stitches_per_action: int


@dataclass(frozen=True)
class ShapingDistribution:
    """
    How ``total_rows`` rows are split between shaping events.

    ``num_shorter_intervals`` events use ``base_interval`` rows each and
    ``num_longer_intervals`` events use ``base_interval + 1`` rows each.
    """

    base_interval: int
    num_shorter_intervals: int
    num_longer_intervals: int

    @property
    def longer_interval(self) -> int:
        return self.base_interval + 1

    @property
    def event_count(self) -> int:
        return self.num_shorter_intervals + self.num_longer_intervals

    @property
    def total_rows(self) -> int:
        return (
            self.num_shorter_intervals * self.base_interval
            + self.num_longer_intervals * self.longer_interval
        )

    def schedule(self) -> list[int]:
        """Interval length of each event in working order.

        Longer intervals come first so the extra rows are absorbed at the
        start of the section rather than bunching the tight intervals there.
        """
        return [self.longer_interval] * self.num_longer_intervals + [
            self.base_interval
        ] * self.num_shorter_intervals

    def intervals(self, action: ShapingAction, stitches_per_action: int) -> list[ShapingInterval]:
        """Intervals in pattern-prose order: the more frequent (shorter) one first."""
        result: list[ShapingInterval] = []
        if self.num_shorter_intervals > 0:
            result.append(
                ShapingInterval(
                    action=action,
                    every_n_rows=self.base_interval,
                    times=self.num_shorter_intervals,
                    stitches_per_action=stitches_per_action,
                )
            )
        if self.num_longer_intervals > 0:
            result.append(
                ShapingInterval(
                    action=action,
                    every_n_rows=self.longer_interval,
                    times=self.num_longer_intervals,
                    stitches_per_action=stitches_per_action,
                )
            )
        return result


def count_shaping_events(total_stitches_to_change: int, stitches_per_action: int) -> int:
    """Shaping rows needed; a final partial event still takes a row."""
    return math.ceil(total_stitches_to_change / stitches_per_action)


def distribute_rows(total_rows: int, event_count: int) -> ShapingDistribution:
    """
    Split *total_rows* into *event_count* intervals as evenly as possible.

    Raises:
        ValueError: If event_count < 1 or there are fewer rows than events.
    """
    if event_count < 1:
        raise ValueError(f"event_count must be >= 1, got {event_count}")
    if event_count > total_rows:
        raise ValueError(
            f"Not enough rows ({total_rows}) for {event_count} shaping events "
            f"(need at least 1 row per event)"
        )
    base_interval = total_rows // event_count
    remainder = total_rows % event_count
    return ShapingDistribution(
        base_interval=base_interval,
        num_shorter_intervals=event_count - remainder,
        num_longer_intervals=remainder,
    )
