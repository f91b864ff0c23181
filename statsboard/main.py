from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from statsboard.api.routes.preferences import router as preferences_router
from statsboard.api.routes.stats import router as stats_router
from statsboard.core.middleware import GitHubRateLimitMiddleware
from statsboard.core.observability import configure_logging
from statsboard.core.observability import init_sentry
from statsboard.db import init_db
from statsboard.settings import Settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_db()
    yield


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application with observability and rate limiting."""

    app_settings = app_settings or Settings()
    configure_logging(app_settings)
    init_sentry(app_settings)

    application = FastAPI(title="statsboard", lifespan=lifespan)
    application.add_middleware(
        GitHubRateLimitMiddleware,
        requests_per_window=app_settings.rate_limit_per_minute,
        window_seconds=app_settings.rate_limit_window_seconds,
    )
    application.include_router(stats_router)
    application.include_router(preferences_router)
    return application


app = create_app()
