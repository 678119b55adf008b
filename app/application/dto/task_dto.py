"""
Task DTOs for the application layer.
Data Transfer Objects for task-related operations.
"""

from typing import Optional, List
from datetime import datetime
from uuid import UUID
from pydantic import Field

from .base_dto import (
    BaseDTO, ResponseDTO, CreateRequestDTO, UpdateRequestDTO, ListRequestDTO
)
from app.domain.models.task import Task, TaskStatus, TaskPriority, TaskSortKey
from app.domain.repositories.task_repository import TaskPage, TaskQuery
from app.domain.services.task_service import TaskChanges


def _status(value: Optional[str]) -> Optional[TaskStatus]:
    return TaskStatus(value) if value else None


def _priority(value: Optional[str]) -> Optional[TaskPriority]:
    return TaskPriority(value) if value else None


# Request DTOs
#
# Enumerated fields arrive as plain strings; TaskValidator reports bad values
# together with every other violation, so convert only after validation.

class CreateTaskRequestDTO(CreateRequestDTO):
    """DTO for task creation requests."""

    title: Optional[str] = Field(default=None, description="Task title")
    content: str = Field(default="", description="Task content")
    status: Optional[str] = Field(default=None, description="todo, in_progress or done")
    priority: Optional[str] = Field(default=None, description="low, normal or high")
    tags: List[str] = Field(default_factory=list, description="Tags")
    due_date: Optional[datetime] = Field(default=None, description="Task due date")

    def to_domain(self) -> Task:
        """Build an unsaved Task from a validated request."""
        return Task(
            title=self.title or "",
            content=self.content or "",
            status=_status(self.status),
            priority=_priority(self.priority),
            tags=list(self.tags),
            due_date=self.due_date,
        )


class UpdateTaskRequestDTO(UpdateRequestDTO):
    """
    DTO for task update requests.
    Every field is optional; omitted or empty fields keep their stored value.
    """

    title: Optional[str] = Field(default=None, description="Task title")
    content: Optional[str] = Field(default=None, description="Task content")
    status: Optional[str] = Field(default=None, description="Task status")
    priority: Optional[str] = Field(default=None, description="Task priority")
    tags: Optional[List[str]] = Field(default=None, description="Replacement tag list")
    due_date: Optional[datetime] = Field(default=None, description="Task due date")

    def to_changes(self) -> TaskChanges:
        return TaskChanges(
            title=self.title,
            content=self.content,
            status=_status(self.status),
            priority=_priority(self.priority),
            tags=list(self.tags or []),
            due_date=self.due_date,
        )


class ListTasksRequestDTO(ListRequestDTO):
    """DTO for listing tasks with filters."""

    status: Optional[str] = Field(default=None, description="Filter by task status")
    tags: List[str] = Field(default_factory=list, description="Keep tasks having any of these tags")
    q: Optional[str] = Field(default=None, description="Substring of title or content")
    sort: Optional[str] = Field(default=None, description="priority or desc")

    def to_query(self) -> TaskQuery:
        return TaskQuery(
            status=_status(self.status),
            tags=list(self.tags),
            q=self.q or None,
            sort=TaskSortKey(self.sort) if self.sort else None,
            page=self.page,
            page_size=self.page_size,
        )


# Response DTOs
class TaskResponseDTO(ResponseDTO):
    """DTO for task response."""

    id: UUID = Field(description="Task ID")
    title: str = Field(description="Task title")
    content: str = Field(description="Task content")
    status: TaskStatus = Field(description="Task status")
    priority: TaskPriority = Field(description="Task priority")
    tags: List[str] = Field(default_factory=list, description="Tags")
    due_date: Optional[datetime] = Field(default=None, description="Task due date")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    @classmethod
    def from_domain(cls, task: Task) -> "TaskResponseDTO":
        return cls(
            id=task.id,
            title=task.title,
            content=task.content,
            status=task.status,
            priority=task.priority,
            tags=list(task.tags),
            due_date=task.due_date,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TaskListResponseDTO(BaseDTO):
    """DTO for a page of tasks."""

    items: List[TaskResponseDTO] = Field(description="Tasks on this page")
    page: Optional[int] = Field(default=None, description="Requested page")
    page_size: Optional[int] = Field(default=None, description="Requested page size")
    total: int = Field(description="Matching tasks before pagination")
    total_pages: Optional[int] = Field(default=None, description="Total number of pages")

    @classmethod
    def from_page(cls, page: TaskPage) -> "TaskListResponseDTO":
        return cls(
            items=[TaskResponseDTO.from_domain(task) for task in page.items],
            page=page.page,
            page_size=page.page_size,
            total=page.total,
            total_pages=page.total_pages,
        )
