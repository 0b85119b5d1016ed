"""
Prediction DTOs - Application Layer

Request and response models exchanged between the HTTP layer and the
prediction use cases.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from questlogic.domain.entities.prediction import (
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


class FactorInputsDTO(BaseModel):
    """The nine factors and mood. Ranges are not enforced."""

    urgency: float = Field(..., description="How pressing the action feels")
    loot: float = Field(..., description="Perceived reward of acting")
    comfort: float = Field(..., description="Comfort of the current state")
    why: float = Field(..., description="Strength of the underlying reason")
    fog: float = Field(..., description="Uncertainty about how to proceed")
    difficulty: float = Field(..., description="Complexity of the task")
    fear: float = Field(..., description="Fear or dread")
    friction: float = Field(..., description="Practical friction")
    habit: float = Field(..., description="Inertia of existing habits")
    mood: Mood = Field(..., description="Current mood category")

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "urgency": 5,
                "loot": 8,
                "comfort": 3,
                "why": 1.5,
                "fog": 2,
                "difficulty": 3,
                "fear": 2,
                "friction": 2,
                "habit": 2,
                "mood": "NEUTRAL",
            }
        },
    )

    @classmethod
    def from_domain(cls, inputs: FactorInputs) -> "FactorInputsDTO":
        return cls(
            urgency=inputs.urgency,
            loot=inputs.loot,
            comfort=inputs.comfort,
            why=inputs.why,
            fog=inputs.fog,
            difficulty=inputs.difficulty,
            fear=inputs.fear,
            friction=inputs.friction,
            habit=inputs.habit,
            mood=inputs.mood,
        )

    def to_domain(self) -> FactorInputs:
        return FactorInputs(**self.model_dump())


class ModelParamsDTO(BaseModel):
    beta: float = Field(..., description="Drive-to-logit scaling factor")
    mood_bias_val: float = Field(..., description="Bias added for the mood")

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_domain(cls, params: ModelParams) -> "ModelParamsDTO":
        return cls(beta=params.beta, mood_bias_val=params.mood_bias_val)


class PredictionDTO(BaseModel):
    z_score: float = Field(..., description="Logit")
    probability: float = Field(..., description="sigmoid(z_score)")

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_domain(cls, prediction: Prediction) -> "PredictionDTO":
        return cls(z_score=prediction.z_score, probability=prediction.probability)


class OutcomeDTO(BaseModel):
    verified: bool
    action_taken: bool
    time_delta: float = Field(..., description="Seconds between prediction and outcome")

    @classmethod
    def from_domain(cls, outcome: Outcome) -> "OutcomeDTO":
        return cls(
            verified=outcome.verified,
            action_taken=outcome.action_taken,
            time_delta=outcome.time_delta,
        )


class PredictionEventResponseDTO(BaseModel):
    """A stored prediction event."""

    id: str
    user_hash: str
    timestamp: datetime
    inputs: FactorInputsDTO
    model_params: ModelParamsDTO
    prediction: PredictionDTO
    outcome: Optional[OutcomeDTO] = None

    model_config = ConfigDict(protected_namespaces=())

    @classmethod
    def from_domain(cls, event: PredictionEvent) -> "PredictionEventResponseDTO":
        return cls(
            id=event.id,
            user_hash=event.user_hash,
            timestamp=event.timestamp,
            inputs=FactorInputsDTO.from_domain(event.inputs),
            model_params=ModelParamsDTO.from_domain(event.model_params),
            prediction=PredictionDTO.from_domain(event.prediction),
            outcome=OutcomeDTO.from_domain(event.outcome) if event.outcome else None,
        )


class SubmitPredictionRequestDTO(BaseModel):
    """Payload recorded when a user asks for a prediction."""

    user_hash: str = Field(..., description="Pseudonymous user identifier")
    inputs: FactorInputsDTO
    model_params: ModelParamsDTO
    prediction: PredictionDTO

    model_config = ConfigDict(extra="forbid", protected_namespaces=())


class SubmitPredictionResponseDTO(BaseModel):
    id: str = Field(..., description="Identifier of the stored event")


class RecordOutcomeRequestDTO(BaseModel):
    action_taken: bool = Field(..., description="Whether the action happened")
    time_delta: float = Field(
        ..., description="Seconds between prediction and the observed outcome"
    )

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"example": {"action_taken": True, "time_delta": 5400.0}},
    )


class ComputePredictionRequestDTO(BaseModel):
    """
    Engine input. When ``model_params`` is omitted the standard mood bias
    table and the configured default beta are used.
    """

    inputs: FactorInputsDTO
    model_params: Optional[ModelParamsDTO] = None

    model_config = ConfigDict(extra="forbid", protected_namespaces=())


class ComputedPredictionDTO(BaseModel):
    """Engine output; values that overflow to inf or NaN serialize as null."""

    z_score: Optional[float] = Field(..., description="Logit, null if not finite")
    probability: Optional[float] = Field(
        ..., description="sigmoid(z_score), null if not finite"
    )

    @classmethod
    def from_domain(cls, prediction: Prediction) -> "ComputedPredictionDTO":
        return cls(z_score=prediction.z_score, probability=prediction.probability)


class ComputePredictionResponseDTO(BaseModel):
    """
    Score breakdown. Inputs are unbounded, so large finite factors can
    overflow; any non-finite intermediate is returned as null.
    """

    value_gap: Optional[float]
    positive_drive: Optional[float]
    total_blockers: Optional[float]
    net_drive: Optional[float]
    level: Optional[int] = Field(
        None, description="Display level; null when net drive is not finite"
    )
    model_params: ModelParamsDTO
    prediction: ComputedPredictionDTO
    label: SuccessLabel

    model_config = ConfigDict(protected_namespaces=())

    @classmethod
    def from_domain(
        cls, breakdown: ScoreBreakdown, params: ModelParams, label: SuccessLabel
    ) -> "ComputePredictionResponseDTO":
        return cls(
            value_gap=breakdown.value_gap,
            positive_drive=breakdown.positive_drive,
            total_blockers=breakdown.total_blockers,
            net_drive=breakdown.net_drive,
            level=breakdown.level,
            model_params=ModelParamsDTO.from_domain(params),
            prediction=ComputedPredictionDTO.from_domain(breakdown.prediction),
            label=label,
        )


class CurvePointDTO(BaseModel):
    drive: float
    probability: float
    baseline: float

    @classmethod
    def from_domain(cls, point: CurvePoint) -> "CurvePointDTO":
        return cls(
            drive=point.drive, probability=point.probability, baseline=point.baseline
        )


class ResponseCurveDTO(BaseModel):
    mood: Mood
    mood_bias_val: float
    points: List[CurvePointDTO] = Field(default_factory=list)
