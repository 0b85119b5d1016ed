"""
Main Application - Main Layer

Entry point for the FastAPI application: configures logging, initializes
the container and includes the API routers.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from questlogic.main.config import get_settings
from questlogic.main.container import app_lifespan, init_container
from questlogic.presentation.controllers import predictions_router, system_router
from questlogic.shared import configure_logging, get_logger, update_logging_from_settings

# Bootstrap logging from LOG_* variables before settings are parsed
configure_logging()

settings = get_settings()
update_logging_from_settings(settings)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Tie container resources to the application's startup and shutdown."""
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("Application starting up")

    async with app_lifespan() as container:
        app.state.container = container
        yield

    logger.info("Application shutting down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application
    """
    settings = get_settings()

    init_container(settings)

    app = FastAPI(
        title=settings.service.title,
        description=settings.service.description,
        version=settings.service.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(system_router)
    app.include_router(predictions_router)

    return app


app = create_app()
