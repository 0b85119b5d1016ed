"""
DTOs Package - Application Layer

Pydantic models shared by the use cases and the HTTP controllers.
"""

from .health_dto import DependencyStatusDTO, SystemHealthDTO
from .prediction_dto import (
    ComputePredictionRequestDTO,
    ComputePredictionResponseDTO,
    ComputedPredictionDTO,
    CurvePointDTO,
    FactorInputsDTO,
    ModelParamsDTO,
    OutcomeDTO,
    PredictionDTO,
    PredictionEventResponseDTO,
    RecordOutcomeRequestDTO,
    ResponseCurveDTO,
    SubmitPredictionRequestDTO,
    SubmitPredictionResponseDTO,
)

__all__ = [
    "DependencyStatusDTO",
    "SystemHealthDTO",
    "ComputePredictionRequestDTO",
    "ComputePredictionResponseDTO",
    "ComputedPredictionDTO",
    "CurvePointDTO",
    "FactorInputsDTO",
    "ModelParamsDTO",
    "OutcomeDTO",
    "PredictionDTO",
    "PredictionEventResponseDTO",
    "RecordOutcomeRequestDTO",
    "ResponseCurveDTO",
    "SubmitPredictionRequestDTO",
    "SubmitPredictionResponseDTO",
]
