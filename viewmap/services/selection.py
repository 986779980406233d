from dataclasses import dataclass
from datetime import date

from viewmap.models import ClassifiedDay
from viewmap.models import HeatmapViewModel
from viewmap.services.weeks import WEEKDAY_NAMES
from viewmap.services.weeks import month_name
from viewmap.services.weeks import week_row


def _views(count: int) -> str:
    return f"{count} {'view' if count == 1 else 'views'}"


def format_day(day: date) -> str:
    """Format a date as `Fri, Jan 2`."""

    return f"{WEEKDAY_NAMES[week_row(day)]}, {month_name(day)} {day.day}"


def tooltip_text(day: ClassifiedDay) -> str:
    return f"{_views(day.count)} on {format_day(day.date)}"


def title_text(view_model: HeatmapViewModel) -> str:
    total = _views(view_model.total_count)
    return f"{total} in the last {view_model.requested_count} days"


@dataclass(frozen=True)
class SelectionState:
    """The single day currently highlighted in a rendered heatmap."""

    selected: ClassifiedDay | None = None

    def select(self, view_model: HeatmapViewModel, day: date) -> "SelectionState":
        for candidate in view_model.days():
            if candidate.date == day:
                return SelectionState(selected=candidate)
        raise KeyError(day)

    def clear(self) -> "SelectionState":
        return SelectionState()

    def is_selected(self, day: ClassifiedDay) -> bool:
        return self.selected is not None and self.selected.date == day.date

    @property
    def tooltip(self) -> str | None:
        if self.selected is None:
            return None
        return tooltip_text(self.selected)
