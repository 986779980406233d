from datetime import date

from pydantic import BaseModel
from pydantic import Field

from viewmap.models import HeatmapViewModel
from viewmap.services.selection import title_text


class HeatmapDay(BaseModel):
    """Single day item used in the heatmap response."""

    date: date
    weekday: int
    count: int
    level: int


class HeatmapWeek(BaseModel):
    """Week column containing ordered daily view items."""

    month_label: str | None
    days: list[HeatmapDay]


class Diagnostic(BaseModel):
    kind: str
    expected: int
    actual: int
    message: str


class HeatmapResponse(BaseModel):
    """View activity heatmap response payload."""

    title: str
    requested_count: int
    total_count: int
    weeks: list[HeatmapWeek]
    diagnostics: list[Diagnostic]

    @classmethod
    def from_view_model(cls, view_model: HeatmapViewModel) -> "HeatmapResponse":
        weeks = [
            HeatmapWeek(
                month_label=label,
                days=[
                    HeatmapDay(
                        date=day.date, weekday=row, count=day.count, level=day.level
                    )
                    for row, day in week.rows()
                ],
            )
            for week, label in zip(view_model.weeks, view_model.month_labels)
        ]
        return cls(
            title=title_text(view_model),
            requested_count=view_model.requested_count,
            total_count=view_model.total_count,
            weeks=weeks,
            diagnostics=[
                Diagnostic(
                    kind=item.kind,
                    expected=item.expected,
                    actual=item.actual,
                    message=item.message,
                )
                for item in view_model.diagnostics
            ],
        )


class DayCountIn(BaseModel):
    date: str
    count: int


class AggregateRequest(BaseModel):
    """Caller-supplied day-count series to aggregate."""

    requested_count: int = Field(ge=0)
    days: list[DayCountIn]


class LegendLevel(BaseModel):
    level: int
    min_count: int


class LegendResponse(BaseModel):
    scale: str
    levels: list[LegendLevel]
