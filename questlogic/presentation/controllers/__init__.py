"""
Controllers Package - Presentation Layer

FastAPI routers. Controllers map DTOs to use cases and domain errors to
HTTP status codes.
"""

from .predictions_controller import router as predictions_router
from .system_controller import router as system_router

__all__ = ["predictions_router", "system_router"]
