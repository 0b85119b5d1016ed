"""
Infrastructure Repository - Prediction Event MongoDB Implementation

Events are stored one document per event. The outcome starts as ``null``
and is written by an ``update_one`` filtered on ``outcome: null``, which
makes attach-if-absent atomic per document.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import uuid4

import structlog
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from questlogic.domain.entities.errors import (
    OutcomeConflictError,
    PredictionEventNotFoundError,
)
from questlogic.domain.entities.prediction import (
    FACTOR_NAMES,
    FactorInputs,
    ModelParams,
    Mood,
    Outcome,
    Prediction,
    PredictionEvent,
)
from questlogic.domain.repositories.prediction_event_repository import (
    IPredictionEventRepository,
)
from questlogic.infrastructure.database.mongo_database import MongoDatabase

logger = structlog.get_logger(__name__)

# Newest first; _id breaks timestamp ties in insertion order.
NEWEST_FIRST = [("timestamp", DESCENDING), ("_id", DESCENDING)]


class PredictionEventRepository(IPredictionEventRepository):
    """MongoDB implementation of the prediction event repository."""

    def __init__(
        self, database: MongoDatabase, collection_name: str = "prediction_events"
    ):
        self.database = database
        self.collection_name = collection_name

    async def create(
        self,
        user_hash: str,
        timestamp: datetime,
        inputs: FactorInputs,
        model_params: ModelParams,
        prediction: Prediction,
    ) -> str:
        event_id = str(uuid4())
        document = {
            "id": event_id,
            "user_hash": user_hash,
            "timestamp": timestamp,
            "inputs": self._inputs_to_document(inputs),
            "model_params": {
                "beta": model_params.beta,
                "mood_bias_val": model_params.mood_bias_val,
            },
            "prediction": {
                "z_score": prediction.z_score,
                "probability": prediction.probability,
            },
            "outcome": None,
        }

        try:
            await self.database.insert_one(self.collection_name, document)
        except PyMongoError as e:
            logger.error(
                "prediction_event.create_failed",
                user_hash=user_hash,
                error=str(e),
            )
            raise

        logger.info(
            "prediction_event.created",
            event_id=event_id,
            user_hash=user_hash,
            probability=prediction.probability,
        )
        return event_id

    async def find_by_id(self, event_id: str) -> Optional[PredictionEvent]:
        document = await self.database.find_one(self.collection_name, {"id": event_id})
        if document is None:
            return None
        return self._to_entity(document)

    async def attach_outcome(self, event_id: str, outcome: Outcome) -> None:
        update = {
            "$set": {
                "outcome": {
                    "verified": outcome.verified,
                    "action_taken": outcome.action_taken,
                    "time_delta": outcome.time_delta,
                }
            }
        }

        try:
            matched = await self.database.update_one(
                self.collection_name, {"id": event_id, "outcome": None}, update
            )
            if matched:
                logger.info(
                    "prediction_event.outcome_attached",
                    event_id=event_id,
                    action_taken=outcome.action_taken,
                    time_delta=outcome.time_delta,
                )
                return

            existing = await self.database.find_one(
                self.collection_name, {"id": event_id}
            )
        except PyMongoError as e:
            logger.error(
                "prediction_event.attach_outcome_failed",
                event_id=event_id,
                error=str(e),
            )
            raise

        if existing is None:
            raise PredictionEventNotFoundError(event_id)

        logger.warning("prediction_event.outcome_conflict", event_id=event_id)
        raise OutcomeConflictError(
            event_id, details={"existing_outcome": existing.get("outcome")}
        )

    async def find_by_user(
        self, user_hash: str, skip: int = 0, limit: Optional[int] = None
    ) -> List[PredictionEvent]:
        documents = await self.database.find_many(
            self.collection_name,
            {"user_hash": user_hash},
            sort=NEWEST_FIRST,
            skip=skip,
            limit=limit,
        )
        return [self._to_entity(document) for document in documents]

    async def find_all(
        self, skip: int = 0, limit: Optional[int] = None
    ) -> List[PredictionEvent]:
        documents = await self.database.find_many(
            self.collection_name, {}, sort=NEWEST_FIRST, skip=skip, limit=limit
        )
        return [self._to_entity(document) for document in documents]

    @staticmethod
    def _inputs_to_document(inputs: FactorInputs) -> Dict[str, Any]:
        document: Dict[str, Any] = {
            name: getattr(inputs, name) for name in FACTOR_NAMES
        }
        document["mood"] = inputs.mood.value
        return document

    def _to_entity(self, document: Dict[str, Any]) -> PredictionEvent:
        raw_inputs = document["inputs"]
        raw_params = document["model_params"]
        raw_prediction = document["prediction"]
        raw_outcome = document.get("outcome")

        outcome = None
        if raw_outcome is not None:
            outcome = Outcome(
                action_taken=bool(raw_outcome["action_taken"]),
                time_delta=float(raw_outcome["time_delta"]),
                verified=bool(raw_outcome.get("verified", True)),
            )

        return PredictionEvent(
            id=document["id"],
            user_hash=document["user_hash"],
            timestamp=document["timestamp"],
            inputs=FactorInputs(
                **{name: float(raw_inputs[name]) for name in FACTOR_NAMES},
                mood=Mood(raw_inputs["mood"]),
            ),
            model_params=ModelParams(
                beta=float(raw_params["beta"]),
                mood_bias_val=float(raw_params["mood_bias_val"]),
            ),
            prediction=Prediction(
                z_score=float(raw_prediction["z_score"]),
                probability=float(raw_prediction["probability"]),
            ),
            outcome=outcome,
        )
