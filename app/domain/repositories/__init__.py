"""
Repository interfaces for the domain layer.
This module exports the repository interfaces (ports) for dependency injection.
"""

from .task_repository import (
    RecordNotFoundError,
    TaskPage,
    TaskQuery,
    TaskRepository,
)

__all__ = [
    "RecordNotFoundError",
    "TaskPage",
    "TaskQuery",
    "TaskRepository",
]
