from __future__ import annotations

import dataclasses

import pytest

from questlogic.domain.entities.errors import (
    DomainError,
    OutcomeConflictError,
    PredictionEventNotFoundError,
)
from questlogic.domain.entities.prediction import (
    DEFAULT_BETA,
    MOOD_BIAS,
    ModelParams,
    Mood,
)


def test_mood_bias_table() -> None:
    assert MOOD_BIAS == {
        Mood.POSITIVE: 2.5,
        Mood.NEUTRAL: 0.0,
        Mood.DEPRESSED: -2.0,
    }


def test_params_for_mood_uses_table_and_default_beta() -> None:
    params = ModelParams.for_mood(Mood.DEPRESSED)
    assert params == ModelParams(beta=DEFAULT_BETA, mood_bias_val=-2.0)
    assert ModelParams.for_mood("POSITIVE", beta=0.1).mood_bias_val == 2.5


def test_snapshots_are_immutable(sample_inputs) -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        sample_inputs.loot = 1.0  # type: ignore[misc]


def test_error_messages_reference_event_id() -> None:
    not_found = PredictionEventNotFoundError("evt-1")
    conflict = OutcomeConflictError("evt-1")

    assert isinstance(not_found, DomainError)
    assert "evt-1" in not_found.message
    assert conflict.event_id == "evt-1"
    assert conflict.details == {}
