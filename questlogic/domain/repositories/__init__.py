"""
Repositories Package

Interfaces for persistence. Implementations live in the infrastructure
layer.
"""

from .prediction_event_repository import IPredictionEventRepository

__all__ = ["IPredictionEventRepository"]
