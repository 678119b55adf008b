"""
Task repository interface.
Defines the contract for task storage operations and the query objects
exchanged with it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID

from app.domain.models.base import DomainException, ErrorKind
from app.domain.models.task import Task, TaskStatus, TaskSortKey


class RecordNotFoundError(DomainException):
    """Raised by storage when no task is stored under the requested id."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, task_id: UUID):
        super().__init__(f"no task stored with id {task_id}")
        self.task_id = task_id


@dataclass
class TaskQuery:
    """
    Filters, sorting and pagination for a task listing.
    Every field is optional; an empty query returns all tasks.
    """

    status: Optional[TaskStatus] = None
    tags: List[str] = field(default_factory=list)
    q: Optional[str] = None
    sort: Optional[TaskSortKey] = None
    page: Optional[int] = None
    page_size: Optional[int] = None


@dataclass
class TaskPage:
    """A page of tasks plus the metadata of the listing that produced it."""

    items: List[Task]
    total: int
    page: Optional[int] = None
    page_size: Optional[int] = None
    total_pages: Optional[int] = None


class TaskRepository(ABC):
    """
    Repository interface for Task entity.
    Defines all operations needed for task storage.
    """

    @abstractmethod
    def save_task(self, task: Task) -> None:
        """
        Store a task under its id, replacing any existing entry.
        """
        pass

    @abstractmethod
    def get_task_by_id(self, task_id: UUID) -> Task:
        """
        Find a task by its ID.
        Raises RecordNotFoundError if not found.
        """
        pass

    @abstractmethod
    def update_task(self, task: Task) -> None:
        """
        Replace an existing task.
        Raises RecordNotFoundError if no task with that id exists; never creates.
        """
        pass

    @abstractmethod
    def delete_task(self, task_id: UUID) -> None:
        """
        Remove a task permanently.
        Raises RecordNotFoundError if not found.
        """
        pass

    @abstractmethod
    def get_tasks(self, query: TaskQuery) -> TaskPage:
        """
        Filter, paginate and sort the stored tasks.
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """
        Number of stored tasks.
        """
        pass
