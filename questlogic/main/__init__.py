"""
Main module - Main/Composition Root Layer

Sets up settings, the dependency container and the FastAPI application.
"""

from .config import AppSettings, get_settings
from .container import AppContainer, get_container, init_container

__all__ = [
    "AppSettings",
    "get_settings",
    "AppContainer",
    "init_container",
    "get_container",
]
