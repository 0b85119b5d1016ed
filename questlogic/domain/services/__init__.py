"""Domain services: the scoring engine and event payload validation."""

from .event_validator import ValidatedPayload, validate_prediction_event
from .scoring import (
    classify_probability,
    compute_prediction,
    response_curve,
    score,
    sigmoid,
)

__all__ = [
    "ValidatedPayload",
    "validate_prediction_event",
    "classify_probability",
    "compute_prediction",
    "response_curve",
    "score",
    "sigmoid",
]
