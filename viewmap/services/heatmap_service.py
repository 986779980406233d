import logging
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from collections.abc import Sequence
from datetime import timedelta

import httpx

from viewmap.clients.link_service import fetch_view_stats
from viewmap.models import ClassifiedDay
from viewmap.models import DayRecord
from viewmap.models import HeatmapViewModel
from viewmap.models import InvariantViolation
from viewmap.models import SizeMismatch
from viewmap.services.levels import LevelClassifier
from viewmap.services.levels import classifier_for
from viewmap.services.levels import default_classifier
from viewmap.services.weeks import bucket
from viewmap.settings import Settings


logger = logging.getLogger(__name__)

DiagnosticObserver = Callable[[SizeMismatch], None]


class LinkServiceError(Exception):
    """Raised when the link service cannot supply a view-count series."""


def parse_day_records(items: Iterable[Mapping[str, object]]) -> list[DayRecord]:
    """Convert wire items of shape `{"date": "YYYY-MM-DD", "count": n}`."""

    return [DayRecord(date=item.get("date"), count=item.get("count")) for item in items]


def validate_series(days: Sequence[DayRecord]) -> None:
    """Ensure consecutive records are exactly one calendar day apart."""

    for previous, current in zip(days, days[1:]):
        step = current.date - previous.date
        if step == timedelta(days=1):
            continue
        if step <= timedelta(0):
            raise InvariantViolation(
                f"{current.date} does not follow {previous.date} chronologically"
            )
        raise InvariantViolation(
            f"series has a gap between {previous.date} and {current.date}"
        )


def aggregate(
    days: Sequence[DayRecord],
    requested_count: int,
    classifier: LevelClassifier | None = None,
    observer: DiagnosticObserver | None = None,
) -> HeatmapViewModel:
    """Build the heatmap view-model for a contiguous day-count series.

    Raises:
        InvariantViolation: If the series has gaps, duplicates or goes
            backwards in time.
    """

    validate_series(days)
    classifier = classifier or default_classifier

    diagnostics: list[SizeMismatch] = []

    def report(mismatch: SizeMismatch) -> None:
        logger.warning(mismatch.message)
        diagnostics.append(mismatch)
        if observer is not None:
            observer(mismatch)

    if len(days) != requested_count:
        report(SizeMismatch(kind="window", expected=requested_count, actual=len(days)))

    classified = [
        ClassifiedDay(
            date=day.date, count=day.count, level=classifier.classify(day.count)
        )
        for day in days
    ]
    weeks, labels = bucket(classified)

    covered = sum(len(week) for week in weeks)
    if covered != len(days):
        report(SizeMismatch(kind="coverage", expected=len(days), actual=covered))

    total = sum(day.count for day in days)
    days_with_views = sum(1 for day in days if day.count > 0)
    logger.debug(
        "Stats aggregated: %d days with views, %d days without views",
        days_with_views,
        len(days) - days_with_views,
    )

    return HeatmapViewModel(
        weeks=tuple(weeks),
        month_labels=tuple(labels),
        total_count=total,
        requested_count=requested_count,
        diagnostics=tuple(diagnostics),
    )


def normalize_window(days: int | None, settings: Settings) -> int:
    if days is None or days <= 0:
        return settings.default_window_days
    return min(days, settings.max_window_days)


def aggregate_with_settings(
    days: Sequence[DayRecord],
    requested_count: int,
    settings: Settings,
    fixed_classifier: LevelClassifier | None = None,
) -> HeatmapViewModel:
    fixed_classifier = fixed_classifier or LevelClassifier(
        tuple(settings.level_thresholds)
    )
    classifier = classifier_for(
        settings.level_scale, fixed_classifier, [day.count for day in days]
    )
    return aggregate(days, requested_count, classifier=classifier)


def get_view_heatmap(
    days: int | None,
    settings: Settings,
    fixed_classifier: LevelClassifier | None = None,
) -> HeatmapViewModel:
    """Fetch the trailing view series from the link service and aggregate it."""

    window = normalize_window(days, settings)

    try:
        items = fetch_view_stats(
            days=window,
            base_url=settings.link_service_url,
            timeout=settings.link_service_timeout_seconds,
        )
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
        raise LinkServiceError("Link service request failed") from exc

    try:
        records = parse_day_records(items)
        return aggregate_with_settings(records, window, settings, fixed_classifier)
    except InvariantViolation as exc:
        raise LinkServiceError(
            f"Link service returned an invalid series: {exc}"
        ) from exc
