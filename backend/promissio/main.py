"""Application entry point."""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from promissio.core.config import Settings, get_settings
from promissio.core.database import (
    get_database_manager,
    initialize_database,
    shutdown_database,
)
from promissio.core.errors import PromissioError
from promissio.core.logging import LogConfig, configure_logging, get_logger

# Table models register themselves on the shared metadata when imported.
from promissio.modules.audit.infrastructure import models as audit_models  # noqa: F401
from promissio.modules.contracts.infrastructure import models as contract_models  # noqa: F401
from promissio.modules.identity.infrastructure import models as identity_models  # noqa: F401

logger = get_logger(__name__)


def _lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator:
        configure_logging(
            LogConfig(level=settings.log_level, environment=settings.environment)
        )
        logger.info("Starting Promissio Backend", **settings.to_dict())

        manager = initialize_database(settings.database)
        if settings.environment.creates_tables:
            await manager.create_tables()

        yield

        await shutdown_database()
        logger.info("Promissio Backend stopped")

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=_lifespan(settings),
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    add_logging_middleware(app)

    register_exception_handlers(app, settings)
    register_module_routes(app)
    register_health_endpoints(app, settings)

    return app


def add_logging_middleware(app: FastAPI) -> None:
    """Add request/response logging middleware."""

    class LoggingMiddleware(BaseHTTPMiddleware):
        async def dispatch(self, request: Request, call_next):
            start_time = time.perf_counter()

            response = await call_next(request)

            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                process_time_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            return response

    app.add_middleware(LoggingMiddleware)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Map application errors to ``{"error", "message"}`` JSON bodies."""

    @app.exception_handler(PromissioError)
    async def promissio_error_handler(request: Request, exc: PromissioError):
        logger.warning(
            "Request failed",
            path=request.url.path,
            error_code=exc.code,
            status_code=exc.status_code,
            error_id=exc.error_id,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(include_details=settings.debug or exc.status_code == 422),
        )


def register_module_routes(app: FastAPI) -> None:
    """Register API routes for all modules."""
    from promissio.modules.audit.presentation.api import router as audit_router
    from promissio.modules.contracts.presentation.api import router as contracts_router
    from promissio.modules.notification.presentation.api import (
        router as notification_router,
    )

    api_router = APIRouter(prefix="/api")
    api_router.include_router(audit_router, prefix="/audit", tags=["audit"])
    api_router.include_router(contracts_router, prefix="/contracts", tags=["contracts"])
    api_router.include_router(
        notification_router, prefix="/notifications", tags=["notifications"]
    )

    app.include_router(api_router)


def register_health_endpoints(app: FastAPI, settings: Settings) -> None:
    @app.get("/health")
    async def health_check():
        """Basic health check."""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "environment": settings.environment.value,
        }

    @app.get("/health/db")
    async def database_health_check():
        """Database connectivity check."""
        from sqlalchemy import text

        async with get_database_manager().session() as session:
            await session.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "promissio.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
