"""
Domain services for the task management service.
This module exports the domain services and the request context they consume.
"""

from .request_context import RequestContext
from .task_service import TaskChanges, TaskNotFoundError, TaskService

__all__ = [
    "RequestContext",
    "TaskChanges",
    "TaskNotFoundError",
    "TaskService",
]
