from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Query
from fastapi import Request

from viewmap.api.schemas.heatmap import AggregateRequest
from viewmap.api.schemas.heatmap import HeatmapResponse
from viewmap.api.schemas.heatmap import LegendLevel
from viewmap.api.schemas.heatmap import LegendResponse
from viewmap.models import InvariantViolation
from viewmap.services.heatmap_service import LinkServiceError
from viewmap.services.heatmap_service import aggregate_with_settings
from viewmap.services.heatmap_service import get_view_heatmap
from viewmap.services.heatmap_service import parse_day_records
from viewmap.services.levels import LevelClassifier
from viewmap.settings import Settings


router = APIRouter()


def get_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""

    return request.app.state.settings


def get_classifier(request: Request) -> LevelClassifier:
    """Return the fixed-scale classifier built at startup."""

    return request.app.state.classifier


@router.get("/")
async def root() -> dict[str, str]:
    """Return a basic service greeting."""

    return {"message": "Hello World"}


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/heatmap/views")
def get_views_heatmap(
    days: int | None = Query(default=None),
    settings: Settings = Depends(get_settings),
    classifier: LevelClassifier = Depends(get_classifier),
) -> HeatmapResponse:
    """Return the view activity heatmap for the trailing window of days."""

    try:
        view_model = get_view_heatmap(
            days=days, settings=settings, fixed_classifier=classifier
        )
    except LinkServiceError as exc:
        raise HTTPException(
            status_code=502, detail="Link service request failed"
        ) from exc

    return HeatmapResponse.from_view_model(view_model)


@router.post("/heatmap/aggregate")
def aggregate_heatmap(
    payload: AggregateRequest,
    settings: Settings = Depends(get_settings),
    classifier: LevelClassifier = Depends(get_classifier),
) -> HeatmapResponse:
    """Aggregate a caller-supplied day-count series into a heatmap."""

    try:
        records = parse_day_records(day.model_dump() for day in payload.days)
        view_model = aggregate_with_settings(
            records, payload.requested_count, settings, classifier
        )
    except InvariantViolation as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return HeatmapResponse.from_view_model(view_model)


@router.get("/heatmap/legend")
def get_legend(
    classifier: LevelClassifier = Depends(get_classifier),
) -> LegendResponse:
    """Return the minimum count for each level of the fixed scale."""

    return LegendResponse(
        scale="fixed",
        levels=[
            LegendLevel(level=level, min_count=min_count)
            for level, min_count in classifier.legend()
        ],
    )
