from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import cast

import pytest

from questlogic.domain.entities.errors import (
    OutcomeConflictError,
    PredictionEventNotFoundError,
)
from questlogic.domain.entities.prediction import Mood, Outcome
from questlogic.infrastructure.database.mongo_database import MongoDatabase
from questlogic.infrastructure.repositories.prediction_event_repository import (
    PredictionEventRepository,
)
from tests.conftest import FakeMongoDatabase

T0 = datetime(2026, 1, 10, 12, 0, tzinfo=timezone.utc)


def _repository(database: FakeMongoDatabase) -> PredictionEventRepository:
    return PredictionEventRepository(database=cast(MongoDatabase, database))


async def _create(repository, user_hash, timestamp, inputs, params, prediction):
    return await repository.create(
        user_hash=user_hash,
        timestamp=timestamp,
        inputs=inputs,
        model_params=params,
        prediction=prediction,
    )


@pytest.mark.asyncio
async def test_create_and_find_event(
    fake_mongo_database, sample_inputs, neutral_params, sample_prediction
) -> None:
    repository = _repository(fake_mongo_database)

    event_id = await _create(
        repository, "user-1", T0, sample_inputs, neutral_params, sample_prediction
    )

    stored = fake_mongo_database.get_collection("prediction_events").documents[event_id]
    assert stored["outcome"] is None
    assert stored["inputs"]["mood"] == "NEUTRAL"

    event = await repository.find_by_id(event_id)
    assert event is not None
    assert event.id == event_id
    assert event.user_hash == "user-1"
    assert event.timestamp == T0
    assert event.inputs == sample_inputs
    assert event.model_params == neutral_params
    assert event.prediction == sample_prediction
    assert event.outcome is None


@pytest.mark.asyncio
async def test_identifiers_are_unique(
    fake_mongo_database, sample_inputs, neutral_params, sample_prediction
) -> None:
    repository = _repository(fake_mongo_database)
    ids = {
        await _create(
            repository, "user-1", T0, sample_inputs, neutral_params, sample_prediction
        )
        for _ in range(5)
    }
    assert len(ids) == 5


@pytest.mark.asyncio
async def test_find_by_id_returns_none_for_unknown(fake_mongo_database) -> None:
    assert await _repository(fake_mongo_database).find_by_id("missing") is None


@pytest.mark.asyncio
async def test_attach_outcome_sets_outcome_once(
    fake_mongo_database, sample_inputs, neutral_params, sample_prediction
) -> None:
    repository = _repository(fake_mongo_database)
    event_id = await _create(
        repository, "user-1", T0, sample_inputs, neutral_params, sample_prediction
    )

    await repository.attach_outcome(event_id, Outcome(action_taken=True, time_delta=90))

    with pytest.raises(OutcomeConflictError) as exc_info:
        await repository.attach_outcome(
            event_id, Outcome(action_taken=False, time_delta=5)
        )
    assert exc_info.value.details["existing_outcome"]["action_taken"] is True

    event = await repository.find_by_id(event_id)
    assert event is not None
    assert event.outcome == Outcome(action_taken=True, time_delta=90.0, verified=True)
    assert event.inputs == sample_inputs
    assert event.model_params == neutral_params
    assert event.prediction == sample_prediction
    assert event.timestamp == T0


@pytest.mark.asyncio
async def test_attach_outcome_unknown_event(fake_mongo_database) -> None:
    repository = _repository(fake_mongo_database)

    with pytest.raises(PredictionEventNotFoundError):
        await repository.attach_outcome(
            "missing", Outcome(action_taken=True, time_delta=1)
        )

    assert fake_mongo_database.get_collection("prediction_events").documents == {}


@pytest.mark.asyncio
async def test_listings_are_newest_first_and_filtered(
    fake_mongo_database, sample_inputs, neutral_params, sample_prediction
) -> None:
    repository = _repository(fake_mongo_database)
    first = await _create(
        repository, "alice", T0, sample_inputs, neutral_params, sample_prediction
    )
    second = await _create(
        repository,
        "bob",
        T0 + timedelta(minutes=1),
        sample_inputs,
        neutral_params,
        sample_prediction,
    )
    third = await _create(
        repository,
        "alice",
        T0 + timedelta(minutes=2),
        sample_inputs,
        neutral_params,
        sample_prediction,
    )

    alice = await repository.find_by_user("alice")
    assert [event.id for event in alice] == [third, first]

    everyone = await repository.find_all()
    assert [event.id for event in everyone] == [third, second, first]

    assert await repository.find_by_user("nobody") == []


@pytest.mark.asyncio
async def test_timestamp_ties_fall_back_to_insertion_order(
    fake_mongo_database, sample_inputs, neutral_params, sample_prediction
) -> None:
    repository = _repository(fake_mongo_database)
    ids = [
        await _create(
            repository, "alice", T0, sample_inputs, neutral_params, sample_prediction
        )
        for _ in range(3)
    ]

    listing = [event.id for event in await repository.find_all()]
    assert listing == list(reversed(ids))
    assert [event.id for event in await repository.find_all()] == listing


@pytest.mark.asyncio
async def test_listings_support_pagination(
    fake_mongo_database, sample_inputs, neutral_params, sample_prediction
) -> None:
    repository = _repository(fake_mongo_database)
    ids = [
        await _create(
            repository,
            "alice",
            T0 + timedelta(seconds=i),
            sample_inputs,
            neutral_params,
            sample_prediction,
        )
        for i in range(4)
    ]

    page = await repository.find_by_user("alice", skip=1, limit=2)
    assert [event.id for event in page] == [ids[2], ids[1]]


@pytest.mark.asyncio
async def test_to_entity_reads_stored_documents(fake_mongo_database) -> None:
    repository = _repository(fake_mongo_database)
    fake_mongo_database.get_collection("prediction_events").insert_one(
        {
            "id": "legacy-1",
            "user_hash": "u",
            "timestamp": T0,
            "inputs": {
                "urgency": 1,
                "loot": 2,
                "comfort": 3,
                "why": 4,
                "fog": 5,
                "difficulty": 6,
                "fear": 7,
                "friction": 8,
                "habit": 9,
                "mood": "POSITIVE",
            },
            "model_params": {"beta": 0.05, "mood_bias_val": 2.5},
            "prediction": {"z_score": 0.1, "probability": 0.52},
            "outcome": {"verified": True, "action_taken": False, "time_delta": 12},
        }
    )

    event = await repository.find_by_id("legacy-1")
    assert event is not None
    assert event.inputs.mood is Mood.POSITIVE
    assert event.inputs.habit == 9.0
    assert event.outcome == Outcome(action_taken=False, time_delta=12.0)
    assert event.has_outcome


@pytest.mark.asyncio
async def test_timestamp_reads_back_as_utc_with_millisecond_precision(
    fake_mongo_database, sample_inputs, neutral_params, sample_prediction
) -> None:
    repository = _repository(fake_mongo_database)
    stamped = T0.replace(microsecond=123000)

    event_id = await _create(
        repository, "user-1", stamped, sample_inputs, neutral_params, sample_prediction
    )

    event = await repository.find_by_id(event_id)
    assert event is not None
    assert event.timestamp == stamped
    assert event.timestamp.utcoffset() == timedelta(0)


@pytest.mark.asyncio
async def test_store_drops_sub_millisecond_digits(
    fake_mongo_database, sample_inputs, neutral_params, sample_prediction
) -> None:
    repository = _repository(fake_mongo_database)

    event_id = await _create(
        repository,
        "user-1",
        T0.replace(microsecond=123456),
        sample_inputs,
        neutral_params,
        sample_prediction,
    )

    event = await repository.find_by_id(event_id)
    assert event is not None
    assert event.timestamp == T0.replace(microsecond=123000)


@pytest.mark.asyncio
async def test_concurrent_attach_outcome_has_single_winner(
    fake_mongo_database, sample_inputs, neutral_params, sample_prediction
) -> None:
    repository = _repository(fake_mongo_database)
    event_id = await _create(
        repository, "user-1", T0, sample_inputs, neutral_params, sample_prediction
    )
    outcomes = [
        Outcome(action_taken=True, time_delta=30),
        Outcome(action_taken=False, time_delta=60),
    ]

    results = await asyncio.gather(
        *(repository.attach_outcome(event_id, outcome) for outcome in outcomes),
        return_exceptions=True,
    )

    winners = [i for i, result in enumerate(results) if result is None]
    losers = [r for r in results if isinstance(r, OutcomeConflictError)]
    assert len(winners) == 1
    assert len(losers) == 1

    event = await repository.find_by_id(event_id)
    assert event is not None
    assert event.outcome == outcomes[winners[0]]
