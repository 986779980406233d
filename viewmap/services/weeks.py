from collections.abc import Sequence
from datetime import date

from viewmap.models import ClassifiedDay
from viewmap.models import WeekColumn


DAYS_PER_WEEK = 7
MONTH_NAMES = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)
WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def week_row(day: date) -> int:
    """Return the Sunday-first row (0..6) of a calendar date."""

    return (day.weekday() + 1) % DAYS_PER_WEEK


def month_name(day: date) -> str:
    return MONTH_NAMES[day.month - 1]


def bucket_weeks(days: Sequence[ClassifiedDay]) -> list[WeekColumn]:
    """Slice a contiguous series into Sunday-first week columns.

    Only the first day's weekday is looked up; every later boundary follows
    from the number of days elapsed since the start, so only the first and
    last columns can be shorter than a full week.
    """

    if not days:
        return []

    start_row = week_row(days[0].date)
    weeks: list[WeekColumn] = []
    start = 0
    size = DAYS_PER_WEEK - start_row
    while start < len(days):
        weeks.append(
            WeekColumn(days=tuple(days[start : start + size]), start_row=start_row)
        )
        start += size
        size = DAYS_PER_WEEK
        start_row = 0

    return weeks


def month_labels(weeks: Sequence[WeekColumn]) -> list[str | None]:
    """Label each column whose first day opens a month the previous one did not.

    Only first days are compared, so when a month begins mid-week its label
    lands on the following column.
    """

    labels: list[str | None] = []
    for index, week in enumerate(weeks):
        first = week.first_day
        if first is None:
            labels.append(None)
            continue

        if index == 0:
            labels.append(month_name(first.date))
            continue

        previous = weeks[index - 1].first_day
        if previous is not None and previous.date.month != first.date.month:
            labels.append(month_name(first.date))
        else:
            labels.append(None)

    return labels


def bucket(
    days: Sequence[ClassifiedDay],
) -> tuple[list[WeekColumn], list[str | None]]:
    weeks = bucket_weeks(days)
    return weeks, month_labels(weeks)
