"""
Main FastAPI application entry point.
Configures the app, middleware, routers, and startup/shutdown events.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Dict, Any, Optional

from fastapi import FastAPI, Request
from pydantic import ValidationError as SettingsError

from app.application.dto.base_dto import HealthCheckResponseDTO
from app.config import Settings, get_settings
from app.domain.repositories.task_repository import TaskRepository
from app.domain.services.task_service import TaskService
from app.infrastructure.log_setup import configure_logging
from app.infrastructure.repositories.task_repository import InMemoryTaskRepository
from app.infrastructure.web.middleware.error_handler import (
    ErrorHandlerMiddleware,
    register_exception_handlers,
)
from app.infrastructure.web.middleware.request_context import (
    AccessLogMiddleware,
    RequestContextMiddleware,
)
from app.infrastructure.web.routers import tasks


def create_application(
    settings: Optional[Settings] = None,
    repository: Optional[TaskRepository] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.
    Every collaborator is built here and handed down explicitly.
    """
    settings = settings or get_settings()
    logger = configure_logging(settings)
    repository = repository or InMemoryTaskRepository(logger.getChild("storage"))
    task_service = TaskService(logger.getChild("tasks"), repository)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle.
        """
        logger.info("Starting %s v%s", settings.api_title, settings.api_version)
        logger.info("Configuration: %s", settings.describe())
        yield
        logger.info("Shutting down application")

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        docs_url=f"{settings.api_prefix}/docs" if settings.debug else None,
        redoc_url=f"{settings.api_prefix}/redoc" if settings.debug else None,
        openapi_url=f"{settings.api_prefix}/openapi.json" if settings.debug else None,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.task_service = task_service
    app.state.repository = repository
    app.state.request_rules = dict(tasks.REQUEST_RULES)

    # Added innermost first: request context wraps access log wraps error handler
    app.add_middleware(ErrorHandlerMiddleware, logger=logger.getChild("errors"), debug=settings.debug)
    app.add_middleware(AccessLogMiddleware, logger=logger.getChild("access"))
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app, logger.getChild("errors"))

    # Include routers
    app.include_router(
        tasks.router,
        prefix=f"{settings.api_prefix}/tasks",
        tags=["Tasks"]
    )

    # Root endpoint
    @app.get("/")
    async def root() -> Dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "environment": settings.environment,
            "docs": f"{settings.api_prefix}/docs" if settings.debug else None,
            "health": f"{settings.api_prefix}/health"
        }

    # Health check endpoint
    @app.get(f"{settings.api_prefix}/health", response_model=HealthCheckResponseDTO)
    def health_check(request: Request) -> HealthCheckResponseDTO:
        """Health check endpoint for monitoring."""
        return HealthCheckResponseDTO(
            status="healthy",
            environment=settings.environment,
            version=settings.api_version,
            tasks=request.app.state.repository.count(),
        )

    return app


def main() -> None:
    """Run the API with uvicorn; PORT must be set."""
    import uvicorn

    try:
        settings = get_settings()
    except SettingsError as exc:
        logging.basicConfig(level=logging.ERROR)
        logging.getLogger(__name__).error("invalid configuration: %s", exc)
        sys.exit(1)

    uvicorn.run(
        create_application(settings),
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
        timeout_graceful_shutdown=settings.shutdown_timeout,
    )


if __name__ == "__main__":
    main()
