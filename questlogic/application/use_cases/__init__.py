"""
Use Cases Package - Application Layer

One class per operation exposed to the presentation layer.
"""

from .health_use_cases import GetHealthStatusUseCase
from .prediction_use_cases import (
    ComputePredictionUseCase,
    GetAllPredictionsUseCase,
    GetPredictionEventUseCase,
    GetResponseCurveUseCase,
    GetUserPredictionsUseCase,
    RecordOutcomeUseCase,
    SubmitPredictionUseCase,
)

__all__ = [
    "GetHealthStatusUseCase",
    "ComputePredictionUseCase",
    "GetAllPredictionsUseCase",
    "GetPredictionEventUseCase",
    "GetResponseCurveUseCase",
    "GetUserPredictionsUseCase",
    "RecordOutcomeUseCase",
    "SubmitPredictionUseCase",
]
