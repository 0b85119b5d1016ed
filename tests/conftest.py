from __future__ import annotations

import itertools
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Callable, Dict, Iterator, List, Sequence, Tuple

import bson
import pytest
from bson.codec_options import CodecOptions

from questlogic.domain.entities.prediction import (
    FactorInputs,
    ModelParams,
    Mood,
    Prediction,
)

# Matches the tz_aware=True client used by MongoDatabase.
BSON_OPTIONS = CodecOptions(tz_aware=True)


def bson_round_trip(document: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``document`` as MongoDB would store and hand it back."""
    return bson.decode(bson.encode(document), codec_options=BSON_OPTIONS)


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture()
def sample_inputs() -> FactorInputs:
    return FactorInputs(
        urgency=5,
        loot=8,
        comfort=3,
        why=1.5,
        fog=2,
        difficulty=3,
        fear=2,
        friction=2,
        habit=2,
        mood=Mood.NEUTRAL,
    )


@pytest.fixture()
def neutral_params() -> ModelParams:
    return ModelParams(beta=0.05, mood_bias_val=0.0)


@pytest.fixture()
def sample_prediction() -> Prediction:
    return Prediction(z_score=1.325, probability=0.7899932)


@pytest.fixture()
def sample_payload() -> Dict[str, Any]:
    return {
        "user_hash": "a1b2c3",
        "inputs": {
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
        },
        "model_params": {"beta": 0.05, "mood_bias_val": 0.0},
        "prediction": {"z_score": 1.325, "probability": 0.7899932},
    }


class FakeCursor:
    def __init__(self, documents: Sequence[Dict[str, Any]]):
        self._documents = list(documents)
        self._skip = 0
        self._limit: int | None = None

    def sort(self, keys: Sequence[Tuple[str, int]]) -> "FakeCursor":
        for field, direction in reversed(list(keys)):
            self._documents.sort(key=lambda doc: doc[field], reverse=direction < 0)
        return self

    def skip(self, amount: int) -> "FakeCursor":
        self._skip = amount
        return self

    def limit(self, amount: int) -> "FakeCursor":
        self._limit = amount
        return self

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        docs = self._documents[self._skip :]
        if self._limit is not None:
            docs = docs[: self._limit]
        return iter(docs)


class FakeCollection:
    """In-memory collection that stores BSON-encoded copies of documents."""

    def __init__(self) -> None:
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.inserts: List[Dict[str, Any]] = []
        self.last_query: Dict[str, Any] | None = None
        self.created_indexes: List[tuple[Any, ...]] = []
        self._object_ids = itertools.count(1)

    def find_one(self, query: Dict[str, Any]) -> Dict[str, Any] | None:
        self.last_query = query
        for doc in self.documents.values():
            if self._matches(doc, query):
                return doc
        return None

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        self.last_query = query
        results = [doc for doc in self.documents.values() if self._matches(doc, query)]
        return FakeCursor(results)

    def insert_one(self, document: Dict[str, Any]) -> Any:
        document.setdefault("_id", next(self._object_ids))
        self.inserts.append(document)
        self.documents[document["id"]] = bson_round_trip(document)
        return SimpleNamespace(acknowledged=True, inserted_id=document["_id"])

    def update_one(self, query: Dict[str, Any], update: Dict[str, Any]) -> Any:
        self.last_query = query
        for doc in self.documents.values():
            if self._matches(doc, query):
                doc.update(bson_round_trip(update.get("$set", {})))
                return SimpleNamespace(matched_count=1, acknowledged=True)
        return SimpleNamespace(matched_count=0, acknowledged=True)

    def create_index(self, keys: Any, name: str | None = None, **kwargs: Any) -> Any:
        self.created_indexes.append((keys, name, kwargs))
        return name or keys

    @staticmethod
    def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
        # A None value matches both a null and a missing field, as in MongoDB.
        for key, value in query.items():
            if document.get(key) != value:
                return False
        return True


class FakeMongoDatabase:
    def __init__(self, events_collection: str = "prediction_events") -> None:
        self.collections: Dict[str, FakeCollection] = {}
        self.events_collection = events_collection
        self.closed = False

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    async def find_one(self, collection_name: str, query: Dict[str, Any]) -> Any:
        return self.get_collection(collection_name).find_one(query)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort: Sequence[Tuple[str, int]] | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> List[Dict[str, Any]]:
        cursor = self.get_collection(collection_name).find(query)
        if sort:
            cursor.sort(sort)
        cursor.skip(skip)
        if limit is not None:
            cursor.limit(limit)
        return list(cursor)

    async def insert_one(self, collection_name: str, document: Dict[str, Any]) -> Any:
        self.get_collection(collection_name).insert_one(document)
        return document

    async def update_one(
        self, collection_name: str, query: Dict[str, Any], update: Dict[str, Any]
    ) -> int:
        return self.get_collection(collection_name).update_one(query, update).matched_count

    async def create_indexes(self) -> None:  # pragma: no cover - stub for tests
        pass

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def fake_mongo_database() -> FakeMongoDatabase:
    return FakeMongoDatabase()


@pytest.fixture()
def fixed_clock() -> Callable[[], datetime]:
    """Clock advancing one second per call from a fixed origin."""
    origin = datetime(2026, 1, 10, 12, 0, tzinfo=timezone.utc)
    ticks = itertools.count()
    return lambda: origin + timedelta(seconds=next(ticks))
