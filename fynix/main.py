"""FastAPI application entry point."""

import asyncio
import random
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fynix.config import configure_logging, get_settings
from fynix.core import container
from fynix.domain.app_state import AppState
from fynix.domain.common.exceptions import BusinessRuleViolationError, DomainError
from fynix.domain.feed.seed_cards import shuffled_seed_feed
from fynix.exceptions import FynixError
from fynix.infrastructure.api.routers import (
    feed,
    habits,
    money,
    preferences,
    profile,
    quizzes,
    vocabulary,
)

settings = get_settings()
configure_logging(settings.ENVIRONMENT, settings.LOG_LEVEL)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Prepare the session on startup.

    The feed is re-seeded with the shuffled seed cards, the daily streak is
    evaluated and the background refresh is started when an onboarded
    profile is active. State changes from request threads are handed to the
    event loop so the refresh job is rescheduled there.
    """
    store = container.state_store()
    refresh_loop = container.feed_refresh_loop()
    loop = asyncio.get_running_loop()

    store.seed_feed(shuffled_seed_feed(random.Random()))
    streak = store.resume()
    refresh_loop.start()

    def on_state_change(_: AppState) -> None:
        loop.call_soon_threadsafe(refresh_loop.restart_if_changed)

    unsubscribe = store.subscribe(on_state_change)
    logger.info("app_started", streak=streak, feed_refresh=refresh_loop.running)
    try:
        yield
    finally:
        unsubscribe()
        refresh_loop.shutdown()
        logger.info("app_stopped")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message})


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url=f"{settings.API_V1_PREFIX}/docs",
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(FynixError)
    async def fynix_error_handler(request: Request, exc: FynixError) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("request_failed", path=request.url.path, error=exc.message)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        if isinstance(exc, BusinessRuleViolationError):
            return _error_response(status.HTTP_409_CONFLICT, exc.message)
        return _error_response(status.HTTP_400_BAD_REQUEST, exc.message)

    for module in (profile, habits, money, vocabulary, quizzes, feed, preferences):
        app.include_router(module.router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"message": "Welcome to Fynix API"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    @app.get(f"{settings.API_V1_PREFIX}/")
    async def api_root() -> dict[str, str]:
        return {
            "message": "Fynix API v1",
            "version": settings.VERSION,
            "docs": f"{settings.API_V1_PREFIX}/docs",
        }

    return app


app = create_app()
