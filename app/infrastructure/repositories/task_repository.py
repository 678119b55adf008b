"""
In-memory task repository implementation.
"""

import logging
from typing import Dict, List, Optional
from uuid import UUID

from app.domain.models.task import Task, TaskSortKey
from app.domain.repositories.task_repository import (
    RecordNotFoundError,
    TaskPage,
    TaskQuery,
    TaskRepository,
)
from app.infrastructure.locking import ReadWriteLock
from app.infrastructure.pagination import offset_paginator


class InMemoryTaskRepository(TaskRepository):
    """
    Task repository backed by a process-local dict.

    The dict keeps insertion order, which is the iteration order of every
    listing and the tie-break for sorting. Tasks are copied on the way in
    and on the way out, so nothing outside the lock shares stored objects.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._tasks: Dict[UUID, Task] = {}
        self._lock = ReadWriteLock()

    def save_task(self, task: Task) -> None:
        """Store a task, replacing any existing one with the same id."""
        stored = task.copy()
        with self._lock.write_locked():
            self._tasks[stored.id] = stored

    def get_task_by_id(self, task_id: UUID) -> Task:
        with self._lock.read_locked():
            task = self._tasks.get(task_id)
            if task is None:
                raise RecordNotFoundError(task_id)
            return task.copy()

    def update_task(self, task: Task) -> None:
        """Replace an existing task. Never creates one."""
        stored = task.copy()
        with self._lock.write_locked():
            if stored.id not in self._tasks:
                raise RecordNotFoundError(stored.id)
            self._tasks[stored.id] = stored

    def delete_task(self, task_id: UUID) -> None:
        with self._lock.write_locked():
            if task_id not in self._tasks:
                raise RecordNotFoundError(task_id)
            del self._tasks[task_id]

    def get_tasks(self, query: TaskQuery) -> TaskPage:
        """
        Run the listing pipeline: status filter, tag filter (match-any),
        substring search, total count, pagination, then sort.
        """
        with self._lock.read_locked():
            matches = [
                task.copy()
                for task in self._tasks.values()
                if self._matches(task, query)
            ]

        items, metadata = offset_paginator.paginate(matches, query.page, query.page_size)
        items = self._sort(items, query.sort)

        self.logger.debug(
            "task query status=%s tags=%s q=%r sort=%s page=%s page_size=%s matched=%d",
            query.status, query.tags, query.q, query.sort,
            query.page, query.page_size, metadata.total_items,
        )

        return TaskPage(
            items=items,
            total=metadata.total_items,
            page=metadata.page,
            page_size=metadata.page_size,
            total_pages=metadata.total_pages,
        )

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._tasks)

    @staticmethod
    def _matches(task: Task, query: TaskQuery) -> bool:
        if query.status and task.status != query.status:
            return False
        if query.tags and not task.has_any_tag(query.tags):
            return False
        if query.q and not task.contains_text(query.q):
            return False
        return True

    @staticmethod
    def _sort(items: List[Task], sort: Optional[TaskSortKey]) -> List[Task]:
        if sort == TaskSortKey.PRIORITY:
            # sorted() is stable: equal priorities keep insertion order
            return sorted(items, key=_priority_rank)
        if sort == TaskSortKey.DESC:
            return list(reversed(items))
        return items


def _priority_rank(task: Task) -> int:
    # tasks saved without defaults sort first
    return task.priority.rank if task.priority else -1
