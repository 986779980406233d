from datetime import date
from datetime import timedelta

from viewmap.models import ClassifiedDay
from viewmap.models import WeekColumn
from viewmap.services.weeks import bucket
from viewmap.services.weeks import month_labels
from viewmap.services.weeks import week_row


def _series(start: date, length: int) -> list[ClassifiedDay]:
    return [
        ClassifiedDay(date=start + timedelta(days=offset), count=0, level=0)
        for offset in range(length)
    ]


def test_week_row_is_sunday_first() -> None:
    assert week_row(date(2026, 1, 4)) == 0
    assert week_row(date(2026, 1, 2)) == 5
    assert week_row(date(2026, 1, 3)) == 6


def test_empty_series_has_no_weeks() -> None:
    assert bucket([]) == ([], [])


def test_series_starting_sunday_fills_full_weeks() -> None:
    weeks, labels = bucket(_series(date(2026, 2, 1), 14))

    assert [len(week) for week in weeks] == [7, 7]
    assert [week.start_row for week in weeks] == [0, 0]
    assert labels == ["Feb", None]


def test_leading_partial_week_starts_mid_week() -> None:
    weeks, labels = bucket(_series(date(2026, 4, 1), 7))

    assert [len(week) for week in weeks] == [4, 3]
    assert weeks[0].start_row == 3
    assert weeks[0].first_day.date == date(2026, 4, 1)
    assert labels[0] == "Apr"
    assert [row for row, _ in weeks[0].rows()] == [3, 4, 5, 6]


def test_only_edge_columns_are_short() -> None:
    weeks, _ = bucket(_series(date(2025, 10, 19), 365))

    assert sum(len(week) for week in weeks) == 365
    assert all(len(week) == 7 for week in weeks[1:-1])
    for week in weeks[1:]:
        assert week_row(week.first_day.date) == 0


def test_month_starting_mid_week_is_labelled_on_next_column() -> None:
    weeks, labels = bucket(_series(date(2026, 3, 22), 21))

    assert [week.first_day.date for week in weeks] == [
        date(2026, 3, 22),
        date(2026, 3, 29),
        date(2026, 4, 5),
    ]
    assert labels == ["Mar", None, "Apr"]


def test_year_boundary_labels_new_month() -> None:
    _, labels = bucket(_series(date(2025, 12, 28), 14))

    assert labels == ["Dec", "Jan"]


def test_each_month_run_is_labelled_once() -> None:
    weeks, labels = bucket(_series(date(2025, 10, 19), 365))

    runs: list[list[str | None]] = []
    previous_month = None
    for week, label in zip(weeks, labels):
        month = week.first_day.date.month
        if month != previous_month:
            runs.append([])
            previous_month = month
        runs[-1].append(label)

    for run in runs:
        assert run[0] is not None
        assert run[1:] == [None] * (len(run) - 1)


def test_empty_columns_get_no_label() -> None:
    day = ClassifiedDay(date=date(2026, 5, 3), count=1, level=1)
    weeks = [WeekColumn(days=(day,)), WeekColumn(days=()), WeekColumn(days=(day,))]

    assert month_labels(weeks) == ["May", None, None]


def test_bucketing_is_deterministic() -> None:
    series = _series(date(2026, 1, 2), 40)

    assert bucket(series) == bucket(list(series))
