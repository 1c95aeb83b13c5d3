"""FastAPI application entrypoint.

Each route used to be a standalone serverless function; they now share one
app: /translate, /detectLanguage, /helloWorld, /christmas and /health.
Auto-generated OpenAPI docs at /docs.

The OpenAIProvider and the RateLimiter are created once during the lifespan
and stored on app.state for injection via Depends(). A missing
OPENAI_API_KEY aborts startup. Expired in-memory rate-limit windows are
purged by APScheduler once per window.
"""

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator, Awaitable, Callable

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from linguaflow.api.detect import router as detect_router
from linguaflow.api.greetings import router as greetings_router
from linguaflow.api.health import router as health_router
from linguaflow.api.translate import router as translate_router
from linguaflow.core.config import Settings, settings as default_settings
from linguaflow.core.exceptions import LinguaflowError, StartupConfigError
from linguaflow.core.security import apply_security_headers, client_address
from linguaflow.db.redis import RedisClient, create_redis_client
from linguaflow.services.llm.openai_provider import OpenAIProvider
from linguaflow.services.rate_limit import (
    InMemoryRateLimitStore,
    RateLimiter,
    RateLimitStore,
    RedisRateLimitStore,
)

INTERNAL_ERROR_MESSAGE = "An internal error occurred."


def _configure_logging(app_settings: Settings) -> None:
    level = getattr(logging, app_settings.log_level.upper(), logging.INFO)
    renderer = (
        structlog.processors.JSONRenderer()
        if app_settings.is_production
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


logger = structlog.get_logger(__name__)


async def _purge_rate_limit_windows(store: RateLimitStore) -> None:
    """Drop finished windows. Called by APScheduler once per window."""
    try:
        await store.purge_expired()
    except Exception as e:
        logger.error("rate_limit_purge_failed", error=str(e))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application startup and shutdown lifecycle.

    Validates configuration, then creates the singleton LLM provider and
    rate limiter and attaches them to app.state. Retrieved in request
    handlers via Depends() in linguaflow/api/deps.py.
    """
    app_settings: Settings = app.state.settings

    # --- Startup ---
    logger.info("app_startup", env=app_settings.app_env)

    if not app_settings.openai_api_key:
        logger.error("openai_api_key_missing")
        raise StartupConfigError("The OPENAI_API_KEY environment variable is required.")

    app.state.llm_provider = OpenAIProvider(
        api_key=app_settings.openai_api_key,
        model=app_settings.openai_model,
        base_url=app_settings.openai_base_url,
        timeout_seconds=app_settings.openai_timeout_seconds,
    )

    redis: RedisClient | None = None
    store: RateLimitStore
    if app_settings.rate_limit_backend == "redis":
        redis = create_redis_client(app_settings.redis_url)
        store = RedisRateLimitStore(redis)
    else:
        store = InMemoryRateLimitStore()

    app.state.rate_limiter = RateLimiter(
        store,
        max_requests=app_settings.rate_limit_max_requests,
        window_seconds=app_settings.rate_limit_window_seconds,
    )

    scheduler = AsyncIOScheduler()
    if isinstance(store, InMemoryRateLimitStore):
        scheduler.add_job(
            _purge_rate_limit_windows,
            "interval",
            seconds=app_settings.rate_limit_window_seconds,
            args=[store],
            id="rate_limit_purge",
        )
    scheduler.start()
    app.state.scheduler = scheduler

    logger.info("app_providers_ready")
    yield

    # --- Shutdown ---
    logger.info("app_shutdown")

    scheduler.shutdown(wait=False)

    if redis is not None:
        await redis.close()


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application for ``app_settings``."""
    app_settings = app_settings or default_settings
    _configure_logging(app_settings)

    app = FastAPI(
        title="Linguaflow Translation API",
        description="Text translation and language detection backed by OpenAI.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    @app.middleware("http")
    async def security_headers_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Bind request context for logging and stamp security headers.

        Unexpected exceptions become a generic 500 JSON body here so the
        headers are applied to every response.
        """
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            endpoint=request.url.path,
            method=request.method,
            client=client_address(request, app_settings.trust_forwarded_for),
        )
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("unhandled_request_error")
            response = JSONResponse(
                status_code=500,
                content={"error": INTERNAL_ERROR_MESSAGE},
            )
        return apply_security_headers(response)

    @app.exception_handler(LinguaflowError)
    async def linguaflow_error_handler(
        request: Request, exc: LinguaflowError
    ) -> JSONResponse:
        """Structured error response for all request-level errors."""
        logger.warning(
            "request_rejected",
            code=exc.code,
            status_code=exc.status_code,
            error=exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers=exc.headers,
        )

    app.include_router(health_router)
    app.include_router(greetings_router)
    app.include_router(translate_router)
    app.include_router(detect_router)
    return app


app = create_app()
