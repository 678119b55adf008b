"""
Domain models for the task management service.
This module exports all domain entities and error types.
"""

# Base classes
from .base import (
    BaseEntity,
    DomainException,
    EntityNotFoundError,
    ErrorKind,
    FieldViolation,
    InternalError,
    ValidationError,
    utc_now,
)

# Domain entities
from .task import (
    Task,
    TaskPriority,
    TaskSortKey,
    TaskStatus,
    CONTENT_MAX_LENGTH,
    TAG_MAX_LENGTH,
    TAGS_MAX_ITEMS,
    TITLE_MAX_LENGTH,
)

__all__ = [
    "BaseEntity",
    "DomainException",
    "EntityNotFoundError",
    "ErrorKind",
    "FieldViolation",
    "InternalError",
    "ValidationError",
    "utc_now",
    "Task",
    "TaskPriority",
    "TaskSortKey",
    "TaskStatus",
    "CONTENT_MAX_LENGTH",
    "TAG_MAX_LENGTH",
    "TAGS_MAX_ITEMS",
    "TITLE_MAX_LENGTH",
]
