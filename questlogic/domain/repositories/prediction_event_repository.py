"""
Prediction Event Repository Interface

Append-only store for prediction events with a single conditional patch
for the outcome.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from questlogic.domain.entities.prediction import (
    FactorInputs,
    ModelParams,
    Outcome,
    Prediction,
    PredictionEvent,
)


class IPredictionEventRepository(ABC):
    """Interface for prediction event repository implementations."""

    @abstractmethod
    async def create(
        self,
        user_hash: str,
        timestamp: datetime,
        inputs: FactorInputs,
        model_params: ModelParams,
        prediction: Prediction,
    ) -> str:
        """
        Insert a new event without an outcome.

        Returns:
            The identifier assigned by the store. It is never reused.
        """
        pass

    @abstractmethod
    async def find_by_id(self, event_id: str) -> Optional[PredictionEvent]:
        """Return the event, or None if no event has that identifier."""
        pass

    @abstractmethod
    async def attach_outcome(self, event_id: str, outcome: Outcome) -> None:
        """
        Set the outcome of an event that does not have one yet.

        The existence check and the write happen as one atomic operation, so
        of two concurrent calls at most one succeeds.

        Raises:
            PredictionEventNotFoundError: If the event does not exist
            OutcomeConflictError: If the event already has an outcome
        """
        pass

    @abstractmethod
    async def find_by_user(
        self, user_hash: str, skip: int = 0, limit: Optional[int] = None
    ) -> List[PredictionEvent]:
        """Events owned by ``user_hash``, newest first."""
        pass

    @abstractmethod
    async def find_all(
        self, skip: int = 0, limit: Optional[int] = None
    ) -> List[PredictionEvent]:
        """Every event, newest first."""
        pass
