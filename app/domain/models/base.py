"""
Base entity and error types for the domain layer.
This module contains the foundational classes for all domain entities.
"""

from datetime import datetime, timezone
from typing import Optional, Any, List
from abc import ABC
from dataclasses import dataclass
from enum import Enum
import uuid


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass
class BaseEntity(ABC):
    """
    Base class for all domain entities.
    Provides common attributes and behavior for all entities.
    """

    id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and are of the same type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        if self.id is None:
            return hash(id(self))
        return hash((self.__class__.__name__, self.id))

    def mark_as_updated(self, now: Optional[datetime] = None) -> None:
        """
        Refresh the updated_at timestamp.
        Never moves it backwards, even if the clock does.
        """
        now = now or utc_now()
        if self.updated_at is not None and now < self.updated_at:
            now = self.updated_at
        self.updated_at = now


class ErrorKind(str, Enum):
    """Closed set of failure kinds a caller has to handle."""
    NOT_FOUND = "not_found"
    VALIDATION_ERROR = "validation_error"
    INTERNAL = "internal_error"


@dataclass(frozen=True)
class FieldViolation:
    """A single violated field constraint."""

    field: str
    rule: str
    message: str
    param: Optional[str] = None

    @property
    def rule_id(self) -> str:
        """Rule identifier including its parameter, e.g. ``max_length 200``."""
        if self.param is None:
            return self.rule
        return f"{self.rule} {self.param}"


class DomainException(Exception):
    """Base exception for domain errors. Every subclass carries one ErrorKind."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity_type: str, entity_id: Any):
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message)
        self.entity_type = entity_type
        self.entity_id = entity_id


class ValidationError(DomainException):
    """Exception raised when one or more field constraints are violated."""

    kind = ErrorKind.VALIDATION_ERROR

    def __init__(self, violations: List[FieldViolation], message: Optional[str] = None):
        self.violations = list(violations)
        if message is None:
            fields = ", ".join(v.field for v in self.violations)
            message = f"Validation failed for: {fields}" if fields else "Validation failed"
        super().__init__(message)


class InternalError(DomainException):
    """Exception raised for unexpected failures (storage, id generation...)."""

    kind = ErrorKind.INTERNAL
