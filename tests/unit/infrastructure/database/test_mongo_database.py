from __future__ import annotations

from typing import Any, Dict

import pytest

from questlogic.infrastructure.database.mongo_database import MongoDatabase
from tests.conftest import FakeCollection


class _StubMongoClient:
    def __init__(self, uri: str, **kwargs: Any) -> None:
        self.uri = uri
        self.kwargs = kwargs
        self.databases: Dict[str, _StubDatabase] = {}
        self.closed = False

    def __getitem__(self, name: str) -> "_StubDatabase":
        return self.databases.setdefault(name, _StubDatabase())

    def close(self) -> None:
        self.closed = True


class _StubDatabase:
    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    @property
    def name(self) -> str:
        return "test_db"


@pytest.fixture(autouse=True)
def patch_mongo_client(monkeypatch) -> None:
    monkeypatch.setattr(
        "questlogic.infrastructure.database.mongo_database.MongoClient",
        _StubMongoClient,
    )


@pytest.mark.asyncio
async def test_insert_and_find_document() -> None:
    database = MongoDatabase("mongodb://localhost:27017", "questlogic")

    document = {"id": "123", "user_hash": "u"}
    await database.insert_one("prediction_events", document)

    result = await database.find_one("prediction_events", {"id": "123"})
    assert result == document


@pytest.mark.asyncio
async def test_update_one_reports_matches() -> None:
    database = MongoDatabase("mongodb://localhost:27017", "questlogic")
    await database.insert_one("prediction_events", {"id": "1", "outcome": None})

    matched = await database.update_one(
        "prediction_events",
        {"id": "1", "outcome": None},
        {"$set": {"outcome": {"verified": True}}},
    )
    assert matched == 1

    matched_again = await database.update_one(
        "prediction_events",
        {"id": "1", "outcome": None},
        {"$set": {"outcome": {"verified": False}}},
    )
    assert matched_again == 0
    stored = await database.find_one("prediction_events", {"id": "1"})
    assert stored is not None
    assert stored["outcome"] == {"verified": True}


@pytest.mark.asyncio
async def test_find_many_sorts_and_pages() -> None:
    database = MongoDatabase("mongodb://localhost:27017", "questlogic")
    for index in range(4):
        await database.insert_one(
            "prediction_events", {"id": str(index), "timestamp": index}
        )

    documents = await database.find_many(
        "prediction_events", {}, sort=[("timestamp", -1)], skip=1, limit=2
    )
    assert [doc["id"] for doc in documents] == ["2", "1"]

    unbounded = await database.find_many("prediction_events", {})
    assert len(unbounded) == 4


@pytest.mark.asyncio
async def test_create_indexes_and_close() -> None:
    database = MongoDatabase(
        "mongodb://localhost:27017", "questlogic", events_collection="events"
    )

    await database.create_indexes()

    collection = database.get_collection("events")
    names = [name for _, name, _ in collection.created_indexes]
    assert names == ["event_id_idx", "user_timestamp_idx", "timestamp_idx"]
    assert collection.created_indexes[0][2] == {"unique": True}

    database.close()
    assert database.client.closed is True


def test_client_returns_timezone_aware_datetimes() -> None:
    database = MongoDatabase("mongodb://localhost:27017", "questlogic")

    assert database.client.kwargs == {"tz_aware": True}
