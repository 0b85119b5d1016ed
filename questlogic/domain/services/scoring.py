"""
Scoring engine.

Pure functions turning behavioral factors into a logit and a probability.
Nothing here touches time, storage or identity, and nothing raises for
numeric input: non-finite values propagate through IEEE arithmetic.
"""

from __future__ import annotations

import math
from typing import List, Optional

from questlogic.domain.entities.prediction import (
    CurvePoint,
    FactorInputs,
    ModelParams,
    Prediction,
    ScoreBreakdown,
    SuccessLabel,
)

CURVE_MIN_DRIVE = -6.0
CURVE_MAX_DRIVE = 6.0
CURVE_STEP = 0.5

# Lower bounds (inclusive) of each label band, checked from the bottom up.
_LABEL_THRESHOLDS = (
    (0.3, SuccessLabel.IMPOSSIBLE),
    (0.6, SuccessLabel.RISKY),
    (0.85, SuccessLabel.LIKELY),
)


def sigmoid(z: float) -> float:
    """Standard logistic function, evaluated without overflowing ``exp``."""
    if z >= 0:
        return 1.0 / (1.0 + math.exp(-z))
    # Also reached by NaN, which propagates through exp.
    exp_z = math.exp(z)
    return exp_z / (1.0 + exp_z)


def value_gap(inputs: FactorInputs) -> float:
    return inputs.loot - inputs.comfort


def positive_drive(inputs: FactorInputs) -> float:
    return inputs.urgency * (value_gap(inputs) * inputs.why)


def total_blockers(inputs: FactorInputs) -> float:
    return inputs.fog + inputs.difficulty + inputs.fear + inputs.friction + inputs.habit


def net_drive(inputs: FactorInputs) -> float:
    return positive_drive(inputs) - total_blockers(inputs)


def hero_level(drive: float) -> Optional[int]:
    """Display level derived from net drive; ``None`` when drive is not finite."""
    if not math.isfinite(drive):
        return None
    return max(1, math.floor((drive + 20) / 5))


def compute_prediction(inputs: FactorInputs, params: ModelParams) -> Prediction:
    """
    Map factor inputs and model params to a prediction.

    ``params.mood_bias_val`` is trusted as given: it is not checked against
    ``inputs.mood``.
    """
    z_score = net_drive(inputs) * params.beta + params.mood_bias_val
    return Prediction(z_score=z_score, probability=sigmoid(z_score))


def score(inputs: FactorInputs, params: ModelParams) -> ScoreBreakdown:
    """Run the engine and keep every intermediate value."""
    gap = value_gap(inputs)
    drive = positive_drive(inputs)
    blockers = total_blockers(inputs)
    net = drive - blockers
    return ScoreBreakdown(
        value_gap=gap,
        positive_drive=drive,
        total_blockers=blockers,
        net_drive=net,
        level=hero_level(net),
        prediction=compute_prediction(inputs, params),
    )


def classify_probability(probability: float) -> SuccessLabel:
    for upper_bound, label in _LABEL_THRESHOLDS:
        if probability < upper_bound:
            return label
    return SuccessLabel.GUARANTEED


def response_curve(mood_bias_val: float) -> List[CurvePoint]:
    """Probability across scaled drive values, with and without mood bias."""
    steps = int(round((CURVE_MAX_DRIVE - CURVE_MIN_DRIVE) / CURVE_STEP))
    points: List[CurvePoint] = []
    for index in range(steps + 1):
        drive = CURVE_MIN_DRIVE + index * CURVE_STEP
        points.append(
            CurvePoint(
                drive=drive,
                probability=sigmoid(drive + mood_bias_val),
                baseline=sigmoid(drive),
            )
        )
    return points
