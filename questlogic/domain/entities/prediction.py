"""
Prediction domain entities.

Snapshots taken when a user asks the oracle for a prediction, and the
event record that stores them together with the outcome observed later.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple


class Mood(str, Enum):
    """Self-reported mood category shifting the logit."""

    POSITIVE = "POSITIVE"
    NEUTRAL = "NEUTRAL"
    DEPRESSED = "DEPRESSED"


# Caller-visible mood bias table. The scoring engine does not look values up
# here on its own; callers pick the bias and pass it in ModelParams.
MOOD_BIAS: Dict[Mood, float] = {
    Mood.POSITIVE: 2.5,
    Mood.NEUTRAL: 0.0,
    Mood.DEPRESSED: -2.0,
}

DEFAULT_BETA = 0.05

DRIVE_FACTORS: Tuple[str, ...] = ("urgency", "loot", "comfort", "why")
BLOCKER_FACTORS: Tuple[str, ...] = ("fog", "difficulty", "fear", "friction", "habit")
FACTOR_NAMES: Tuple[str, ...] = DRIVE_FACTORS + BLOCKER_FACTORS


class SuccessLabel(str, Enum):
    """User-facing band for a probability."""

    IMPOSSIBLE = "IMPOSSIBLE"
    RISKY = "RISKY"
    LIKELY = "LIKELY"
    GUARANTEED = "GUARANTEED"


@dataclass(frozen=True, slots=True)
class FactorInputs:
    """Nine behavioral factors plus the mood category."""

    urgency: float
    loot: float
    comfort: float
    why: float
    fog: float
    difficulty: float
    fear: float
    friction: float
    habit: float
    mood: Mood


@dataclass(frozen=True, slots=True)
class ModelParams:
    """Tunable constants applied at prediction time."""

    beta: float
    mood_bias_val: float

    @classmethod
    def for_mood(cls, mood: Mood, beta: float = DEFAULT_BETA) -> "ModelParams":
        """Build params using the standard mood bias table."""
        return cls(beta=beta, mood_bias_val=MOOD_BIAS[Mood(mood)])


@dataclass(frozen=True, slots=True)
class Prediction:
    z_score: float
    probability: float


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """Intermediate values of a scoring run, alongside the prediction."""

    value_gap: float
    positive_drive: float
    total_blockers: float
    net_drive: float
    level: Optional[int]
    prediction: Prediction


@dataclass(frozen=True, slots=True)
class CurvePoint:
    drive: float
    probability: float
    baseline: float


@dataclass(frozen=True, slots=True)
class Outcome:
    """Ground truth attached to a prediction once observed."""

    action_taken: bool
    time_delta: float
    verified: bool = True


@dataclass(slots=True)
class PredictionEvent:
    """
    Persisted unit of record.

    Everything but ``outcome`` is fixed at creation. ``outcome`` starts as
    ``None`` and may be set exactly once through the repository.
    """

    id: str
    user_hash: str
    timestamp: datetime
    inputs: FactorInputs
    model_params: ModelParams
    prediction: Prediction
    outcome: Optional[Outcome] = None

    @property
    def has_outcome(self) -> bool:
        return self.outcome is not None
