"""MongoDB implementations of the domain repositories."""

from .prediction_event_repository import PredictionEventRepository

__all__ = ["PredictionEventRepository"]
