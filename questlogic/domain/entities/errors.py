"""
Domain Errors

Exceptions raised by the prediction event log. Each carries a human
readable message plus a ``details`` mapping for structured logging and
API error payloads.
"""

from typing import Any, Dict, List, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class PredictionValidationError(DomainError):
    """Raised when a prediction event payload is structurally invalid."""

    def __init__(self, errors: List[str], details: Optional[Dict[str, Any]] = None):
        self.errors = list(errors)
        merged = {"errors": self.errors, **(details or {})}
        super().__init__("Invalid prediction event: " + "; ".join(self.errors), merged)


class PredictionEventNotFoundError(DomainError):
    """Raised when a prediction event cannot be found."""

    def __init__(self, event_id: str, details: Optional[Dict[str, Any]] = None):
        self.event_id = event_id
        super().__init__(f"Prediction event with ID {event_id} not found", details)


class OutcomeConflictError(DomainError):
    """Raised when an outcome is attached to an event that already has one."""

    def __init__(self, event_id: str, details: Optional[Dict[str, Any]] = None):
        self.event_id = event_id
        super().__init__(
            f"Prediction event {event_id} already has a recorded outcome", details
        )
