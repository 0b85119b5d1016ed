"""Structural validation for prediction event payloads.

Only shape and type are checked. Factor ranges, the sign of ``beta`` and
the agreement between ``mood`` and ``mood_bias_val`` are deliberately left
to the caller.
"""

from typing import Any, List, Mapping, NamedTuple, Tuple

from questlogic.domain.entities.errors import PredictionValidationError
from questlogic.domain.entities.prediction import (
    FACTOR_NAMES,
    FactorInputs,
    ModelParams,
    Mood,
    Prediction,
)

PARAM_FIELDS: Tuple[str, ...] = ("beta", "mood_bias_val")
PREDICTION_FIELDS: Tuple[str, ...] = ("z_score", "probability")


class ValidatedPayload(NamedTuple):
    user_hash: str
    inputs: FactorInputs
    model_params: ModelParams
    prediction: Prediction


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_numeric_fields(
    section: str,
    data: Any,
    required: Tuple[str, ...],
    allowed: Tuple[str, ...],
    errors: List[str],
) -> None:
    if not isinstance(data, Mapping):
        errors.append(f"{section} must be an object.")
        return

    for name in required:
        if name not in data:
            errors.append(f"{section}.{name} is required.")
        elif not _is_number(data[name]):
            errors.append(f"{section}.{name} must be a number.")

    unexpected = sorted(str(key) for key in data if key not in allowed)
    for name in unexpected:
        errors.append(f"{section}.{name} is not a recognised field.")


def _check_mood(data: Mapping[str, Any], errors: List[str]) -> None:
    if "mood" not in data:
        errors.append("inputs.mood is required.")
        return
    mood = data["mood"]
    if isinstance(mood, str) and mood in Mood.__members__:
        return
    choices = ", ".join(m.value for m in Mood)
    errors.append(f"inputs.mood must be one of: {choices}.")


def validate_prediction_event(
    user_hash: Any,
    inputs: Any,
    model_params: Any,
    prediction: Any,
) -> ValidatedPayload:
    """Validate a raw create payload and convert it to domain snapshots.

    Raises:
        PredictionValidationError: listing every structural problem found.
    """

    errors: List[str] = []

    if not isinstance(user_hash, str):
        errors.append("user_hash must be a string.")

    _check_numeric_fields(
        "inputs", inputs, FACTOR_NAMES, FACTOR_NAMES + ("mood",), errors
    )
    if isinstance(inputs, Mapping):
        _check_mood(inputs, errors)

    _check_numeric_fields(
        "model_params", model_params, PARAM_FIELDS, PARAM_FIELDS, errors
    )
    _check_numeric_fields(
        "prediction", prediction, PREDICTION_FIELDS, PREDICTION_FIELDS, errors
    )

    if errors:
        raise PredictionValidationError(errors)

    factor_inputs = FactorInputs(
        **{name: float(inputs[name]) for name in FACTOR_NAMES},
        mood=Mood(inputs["mood"]),
    )
    return ValidatedPayload(
        user_hash=user_hash,
        inputs=factor_inputs,
        model_params=ModelParams(
            beta=float(model_params["beta"]),
            mood_bias_val=float(model_params["mood_bias_val"]),
        ),
        prediction=Prediction(
            z_score=float(prediction["z_score"]),
            probability=float(prediction["probability"]),
        ),
    )
