"""Date-range overlap checks for price tiers.

Ranges are closed on both ends: a range ending on the day another starts
shares that day, so the two overlap. Single-day ranges are valid.
"""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date


@dataclass(frozen=True)
class NamedRange:
    name: str
    start: date
    end: date

    @property
    def range(self) -> DateRange:
        return DateRange(self.start, self.end)

    def describe(self) -> dict:
        return {
            "name": self.name,
            "start_date": self.start.isoformat(),
            "end_date": self.end.isoformat(),
        }


def overlaps(a: DateRange | NamedRange, b: DateRange | NamedRange) -> bool:
    return a.start <= b.end and b.start <= a.end


def find_first_overlap(ranges: list[NamedRange]) -> tuple[NamedRange, NamedRange] | None:
    """Return the first conflicting pair in input order, or None."""
    for i, first in enumerate(ranges):
        for second in ranges[i + 1:]:
            if overlaps(first, second):
                return first, second
    return None
