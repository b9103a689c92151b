from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import redis.asyncio as aioredis
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from marketplace_inbox.api.middleware.correlation_id import CorrelationIdMiddleware
from marketplace_inbox.api.middleware.timing import RequestTimingMiddleware
from marketplace_inbox.api.v1.routers import (
    conversations,
    health,
    messages,
    notifications,
)
from marketplace_inbox.application.exceptions import (
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    UpstreamUnavailableError,
    ValidationError,
)
from marketplace_inbox.application.ports.cache import QueryCache
from marketplace_inbox.config import settings
from marketplace_inbox.infrastructure.background import BackgroundTasks
from marketplace_inbox.infrastructure.cache.memory import InMemoryQueryCache
from marketplace_inbox.infrastructure.cache.redis_cache import RedisQueryCache
from marketplace_inbox.infrastructure.http.marketplace_client import create_http_client

logger = logging.getLogger(__name__)

SHUTDOWN_DRAIN_SECONDS = 5.0


def _build_cache(app: FastAPI) -> QueryCache:
    if settings.CACHE_BACKEND == "redis":
        app.state.redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
        logger.info("Redis query cache enabled")
        return RedisQueryCache(
            app.state.redis,
            settings.CACHE_PREFIX,
            default_ttl=settings.CACHE_TTL_SECONDS,
        )
    app.state.redis = None
    return InMemoryQueryCache(default_ttl=settings.CACHE_TTL_SECONDS)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    app.state.http = create_http_client(
        settings.MARKETPLACE_API_URL, settings.HTTP_TIMEOUT_SECONDS,
    )
    app.state.cache = _build_cache(app)
    app.state.tasks = BackgroundTasks()
    logger.info("Upstream marketplace API at %s", settings.MARKETPLACE_API_URL)

    yield

    await app.state.tasks.drain(timeout=SHUTDOWN_DRAIN_SECONDS)
    await app.state.http.aclose()
    if app.state.redis is not None:
        await app.state.redis.aclose()
        logger.info("Redis connection pool closed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Marketplace Inbox",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(conversations.router)
    app.include_router(messages.router)
    app.include_router(notifications.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AuthenticationError)
    async def _unauthenticated(_req: Request, exc: AuthenticationError) -> JSONResponse:
        return JSONResponse(status_code=401, content={"detail": "Not authenticated"})

    @app.exception_handler(NotFoundError)
    async def _not_found(_req: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.detail})

    @app.exception_handler(ForbiddenError)
    async def _forbidden(_req: Request, exc: ForbiddenError) -> JSONResponse:
        return JSONResponse(status_code=403, content={"detail": exc.detail})

    @app.exception_handler(ValidationError)
    async def _validation(_req: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.detail})

    @app.exception_handler(UpstreamUnavailableError)
    async def _upstream(_req: Request, exc: UpstreamUnavailableError) -> JSONResponse:
        return JSONResponse(
            status_code=502,
            content={"detail": UpstreamUnavailableError.GENERIC_DETAIL},
        )
