"""
Infrastructure repositories module.
Contains the in-memory implementation of the domain repositories.
"""

from .task_repository import InMemoryTaskRepository

__all__ = [
    "InMemoryTaskRepository",
]
