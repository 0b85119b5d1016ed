"""
Domain Entities Package

Core value objects for predictions, the persisted prediction event, health
reports and the domain error hierarchy.
"""

from .errors import (
    DomainError,
    OutcomeConflictError,
    PredictionEventNotFoundError,
    PredictionValidationError,
)
from .health import DependencyStatus, ServiceStatus, SystemHealth
from .prediction import (
    DEFAULT_BETA,
    FACTOR_NAMES,
    MOOD_BIAS,
    CurvePoint,
    FactorInputs,
    ModelParams,
    Mood,
    Outcome,
    Prediction,
    PredictionEvent,
    ScoreBreakdown,
    SuccessLabel,
)

__all__ = [
    "DEFAULT_BETA",
    "FACTOR_NAMES",
    "MOOD_BIAS",
    "CurvePoint",
    "FactorInputs",
    "ModelParams",
    "Mood",
    "Outcome",
    "Prediction",
    "PredictionEvent",
    "ScoreBreakdown",
    "SuccessLabel",
    "DependencyStatus",
    "ServiceStatus",
    "SystemHealth",
    "DomainError",
    "PredictionValidationError",
    "PredictionEventNotFoundError",
    "OutcomeConflictError",
]
