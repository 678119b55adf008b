"""
Task service.
Orchestrates the task lifecycle on top of a TaskRepository: identity and
timestamp assignment, defaulting, partial-update merging and translation
of storage outcomes into domain errors.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from app.domain.models.base import DomainException, InternalError, EntityNotFoundError, utc_now
from app.domain.models.task import Task, TaskPriority, TaskStatus
from app.domain.repositories.task_repository import (
    RecordNotFoundError,
    TaskPage,
    TaskQuery,
    TaskRepository,
)
from app.domain.services.request_context import RequestContext


class TaskNotFoundError(EntityNotFoundError):
    """Raised by the service when the referenced task does not exist."""

    def __init__(self, task_id: uuid.UUID):
        super().__init__("Task", task_id)


@dataclass
class TaskChanges:
    """
    Fields supplied in a partial update.
    Empty strings, empty tag lists and None mean "leave unchanged".
    """

    title: Optional[str] = None
    content: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    tags: List[str] = field(default_factory=list)
    due_date: Optional[datetime] = None

    def apply_to(self, task: Task) -> None:
        """Overwrite the fields of ``task`` that this change set supplies."""
        if self.title:
            task.title = self.title
        if self.content:
            task.content = self.content
        if self.status:
            task.status = self.status
        if self.priority:
            task.priority = self.priority
        if self.tags:
            task.tags = list(self.tags)
        if self.due_date is not None:
            task.due_date = self.due_date


class TaskService:
    """Domain service for task operations."""

    def __init__(
        self,
        logger: logging.Logger,
        repository: TaskRepository,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], uuid.UUID] = uuid.uuid4,
    ):
        self.logger = logger
        self.repository = repository
        self.clock = clock
        self.id_factory = id_factory

    def create_task(self, context: RequestContext, task: Task) -> Task:
        """Assign identity, timestamps and defaults, then store the task."""
        log = context.bind(self.logger)
        try:
            task.id = self.id_factory()
        except Exception as exc:
            log.error("task id generation failed: %s", exc)
            raise InternalError("could not generate task id") from exc

        task.created_at = self.clock()
        task.updated_at = task.created_at
        task.apply_defaults()

        self._call_storage(log, "save", self.repository.save_task, task)
        log.info("task created id=%s", task.id)
        return task

    def get_tasks(self, context: RequestContext, query: TaskQuery) -> TaskPage:
        log = context.bind(self.logger)
        page = self._call_storage(log, "list", self.repository.get_tasks, query)
        log.debug("listed tasks returned=%d total=%d", len(page.items), page.total)
        return page

    def get_task_by_id(self, context: RequestContext, task_id: uuid.UUID) -> Task:
        log = context.bind(self.logger)
        try:
            return self._call_storage(log, "get", self.repository.get_task_by_id, task_id)
        except RecordNotFoundError as exc:
            raise TaskNotFoundError(task_id) from exc

    def update_task(self, context: RequestContext, task_id: uuid.UUID, changes: TaskChanges) -> Task:
        """
        Merge ``changes`` into the stored task (PATCH semantics) and persist it.
        """
        log = context.bind(self.logger)
        task = self.get_task_by_id(context, task_id)

        changes.apply_to(task)
        task.mark_as_updated(self.clock())

        try:
            self._call_storage(log, "update", self.repository.update_task, task)
        except RecordNotFoundError as exc:
            # deleted between fetch and update
            log.info("task %s vanished before update", task_id)
            raise TaskNotFoundError(task_id) from exc

        log.info("task updated id=%s", task_id)
        return task

    def delete_task(self, context: RequestContext, task_id: uuid.UUID) -> None:
        log = context.bind(self.logger)
        try:
            self._call_storage(log, "delete", self.repository.delete_task, task_id)
        except RecordNotFoundError as exc:
            raise TaskNotFoundError(task_id) from exc
        log.info("task deleted id=%s", task_id)

    @staticmethod
    def _call_storage(log: logging.LoggerAdapter, operation: str, func, *args):
        """Run a repository call, wrapping unexpected failures as InternalError."""
        try:
            return func(*args)
        except DomainException:
            raise
        except Exception as exc:
            log.exception("task storage %s failed", operation)
            raise InternalError(f"task storage {operation} failed") from exc
