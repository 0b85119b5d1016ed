"""
Logging Configuration - Shared Layer

Routes structlog events through the standard logging module so that
third-party libraries (uvicorn, pymongo) and our own code share the
same handlers and renderer.
"""

import logging
import os
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import Processor

from questlogic.shared.consts import EnumEnvironment, EnumLogLevel


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.environ.get("LOG_LEVEL") or EnumLogLevel.INFO.value).upper()
    return getattr(logging, name, logging.INFO)


def _select_renderer(environment: str) -> Processor:
    if environment.lower() == EnumEnvironment.PRODUCTION.value:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _build_handlers(file_path: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if file_path:
        handlers.append(logging.FileHandler(file_path))
    return handlers


def configure_logging(
    level: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = "development",
) -> None:
    """
    Configure structlog on top of the root stdlib logger.

    Values not given explicitly fall back to the ``LOG_LEVEL`` and
    ``LOG_FILE_PATH`` environment variables, so this can run before the
    settings object exists.

    Args:
        level: Log level name (DEBUG, INFO, ...).
        file_path: Optional file to mirror console output into.
        environment: Selects JSON output for production, console otherwise.
    """
    numeric_level = _resolve_level(level)
    log_file = file_path or os.environ.get("LOG_FILE_PATH")

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_select_renderer(environment),
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
        ],
    )

    handlers = _build_handlers(log_file)
    for handler in handlers:
        handler.setFormatter(formatter)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    get_logger(__name__).debug(
        "logging.configured",
        level=logging.getLevelName(numeric_level),
        file_path=log_file,
        environment=environment,
    )


def update_logging_from_settings(settings: Any) -> None:
    """Reapply logging configuration once application settings are loaded."""
    try:
        log_settings = settings.logging
        level = getattr(log_settings.level, "value", log_settings.level)
        environment = getattr(
            settings.environment, "value", settings.environment
        )
        configure_logging(
            level=level,
            file_path=log_settings.file_path,
            environment=environment,
        )
    except AttributeError as exc:
        logging.getLogger(__name__).error(
            "Failed to update logging from settings: %s", exc
        )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the project."""
    return structlog.get_logger(name)
