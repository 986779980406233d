from fastapi import FastAPI

from viewmap.api.routes.heatmap import router
from viewmap.core.logging_config import configure_logging
from viewmap.core.middleware import HeatmapRateLimitMiddleware
from viewmap.core.observability import init_sentry
from viewmap.services.levels import LevelClassifier
from viewmap.settings import Settings


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application with logging, Sentry and rate limiting.

    Raises:
        ValueError: If the configured level thresholds are invalid.
    """

    app_settings = app_settings or Settings()
    classifier = LevelClassifier(tuple(app_settings.level_thresholds))
    configure_logging(app_settings)
    init_sentry(app_settings)

    application = FastAPI(title="viewmap")
    application.state.settings = app_settings
    application.state.classifier = classifier
    application.add_middleware(
        HeatmapRateLimitMiddleware,
        requests_per_window=app_settings.rate_limit_per_minute,
        window_seconds=app_settings.rate_limit_window_seconds,
    )
    application.include_router(router)
    return application


app = create_app()
