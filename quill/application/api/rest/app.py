import logging
from contextlib import asynccontextmanager

import logfire
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine

from quill.application.api.v1.errors import map_quill_error
from quill.application.api.v1.routes import admin, health, me
from quill.application.di import create_container
from quill.config import Config, configure_logging
from quill.domain.shared.authorization.startup import validate_all_handlers
from quill.domain.shared.error import QuillError, StorageUnavailableError
from quill.infrastructure.persistence.migrate import run_migrations
from quill.infrastructure.persistence.seed import ensure_access_control_seed
from quill.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container
    config = await container.get(Config)

    if config.access.seed_on_startup:
        engine = await container.get(AsyncEngine)
        await ensure_access_control_seed(engine)

    yield

    await container.close()


def create_app(config: Config | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        config: Explicit configuration; read from the environment when omitted.
    """
    if config is None:
        # Pydantic Settings populates from env vars at runtime
        config = Config()  # type: ignore[call-arg]

    # Configure logging early
    configure_logging(config.logging)
    logger.info("Starting Quill server: %s v%s", config.server.name, config.server.version)

    if not config.auth.jwt.secret:
        logger.warning("QUILL_AUTH__JWT__SECRET is empty; every bearer token will be rejected")

    # Validate all handlers have authorization declarations (fail fast)
    validate_all_handlers()

    # Migrations run synchronously, before the event loop starts
    if config.database.auto_migrate:
        run_migrations(config.database.url)

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    logfire.instrument_fastapi(app_instance)

    # Setup dependency injection
    container = create_container(config)
    setup_dishka(container, app_instance)

    # Register v1 routes with /api/v1 prefix
    app_instance.include_router(health.router, prefix="/api/v1")
    app_instance.include_router(me.router, prefix="/api/v1")
    app_instance.include_router(admin.router, prefix="/api/v1")

    # Global Quill error handler - maps domain and infrastructure errors to HTTP responses
    @app_instance.exception_handler(QuillError)
    async def quill_error_handler(request: Request, exc: QuillError):
        http_exc = map_quill_error(exc)
        if http_exc.status_code >= 500:
            logger.error(
                "%s on %s %s: %s",
                exc.code,
                request.method,
                request.url.path,
                exc.message,
            )
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
            headers=http_exc.headers,
        )

    # Lost or refused database connections surface as 503
    @app_instance.exception_handler(OperationalError)
    @app_instance.exception_handler(InterfaceError)
    async def storage_error_handler(request: Request, exc: Exception):
        logger.error(
            "Storage unavailable on %s %s: %s",
            request.method,
            request.url.path,
            exc.__cause__ or exc,
        )
        return await quill_error_handler(
            request,
            StorageUnavailableError("Storage unavailable", code="storage_unavailable"),
        )

    # Global exception handler - logs all unhandled exceptions
    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"code": "internal_error", "message": "Internal server error"},
        )

    return app_instance
