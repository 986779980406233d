from collections.abc import Iterator
from dataclasses import dataclass
from dataclasses import field
from datetime import date
from datetime import datetime
from typing import Literal


class InvariantViolation(ValueError):
    """Raised when a day-count series breaks its input contract."""


def _parse_day(value: object) -> date:
    """Accept a calendar date or its `YYYY-MM-DD` string form."""

    if isinstance(value, datetime):
        raise InvariantViolation(f"date {value!r} must not carry a time of day")
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError as exc:
            raise InvariantViolation(f"date {value!r} is not valid") from exc
    raise InvariantViolation(f"date {value!r} is not valid")


@dataclass(frozen=True)
class DayRecord:
    """Single day of the view-count series, as supplied by the source."""

    date: date
    count: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", _parse_day(self.date))
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise InvariantViolation(f"count for {self.date} must be an integer")
        if self.count < 0:
            raise InvariantViolation(
                f"count for {self.date} must be non-negative, got {self.count}"
            )


@dataclass(frozen=True)
class ClassifiedDay:
    """Day record together with its derived intensity level."""

    date: date
    count: int
    level: int


@dataclass(frozen=True)
class WeekColumn:
    """Chronological run of up to seven days rendered as one grid column.

    `start_row` is the weekday row (0 = Sunday) of the first day, so a short
    leading column starts lower in the grid.
    """

    days: tuple[ClassifiedDay, ...]
    start_row: int = 0

    def __len__(self) -> int:
        return len(self.days)

    def __iter__(self) -> Iterator[ClassifiedDay]:
        return iter(self.days)

    @property
    def first_day(self) -> ClassifiedDay | None:
        return self.days[0] if self.days else None

    def rows(self) -> Iterator[tuple[int, ClassifiedDay]]:
        for offset, day in enumerate(self.days):
            yield self.start_row + offset, day


@dataclass(frozen=True)
class SizeMismatch:
    """Non-fatal diagnostic raised while aggregating a series."""

    kind: Literal["window", "coverage"]
    expected: int
    actual: int

    @property
    def message(self) -> str:
        if self.kind == "window":
            return f"Expected {self.expected} days, got {self.actual}"
        return f"Days mismatch: expected {self.expected}, got {self.actual}"


@dataclass(frozen=True)
class HeatmapViewModel:
    """Fully computed heatmap grid ready for rendering."""

    weeks: tuple[WeekColumn, ...]
    month_labels: tuple[str | None, ...]
    total_count: int
    requested_count: int
    diagnostics: tuple[SizeMismatch, ...] = field(default=())

    @property
    def is_empty(self) -> bool:
        return not self.weeks

    @property
    def day_count(self) -> int:
        return sum(len(week) for week in self.weeks)

    def days(self) -> Iterator[ClassifiedDay]:
        for week in self.weeks:
            yield from week.days
