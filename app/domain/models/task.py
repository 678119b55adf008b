"""
Task domain model.
Represents a unit of work with status, priority and tags.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, List
from enum import Enum

from app.domain.models.base import BaseEntity


TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 5000
TAGS_MAX_ITEMS = 10
TAG_MAX_LENGTH = 32


class TaskStatus(str, Enum):
    """Task workflow status."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class TaskPriority(str, Enum):
    """Task priority levels, declared from lowest to highest."""
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Position in the low < normal < high ordering."""
        return _PRIORITY_RANKS[self]


_PRIORITY_RANKS = {priority: index for index, priority in enumerate(TaskPriority)}


class TaskSortKey(str, Enum):
    """Sort modes understood by the task listing."""
    PRIORITY = "priority"
    DESC = "desc"


@dataclass(eq=False)
class Task(BaseEntity):
    """
    Task entity.

    Created by the task service, which assigns identity, timestamps and
    defaults before the task is stored.
    """

    title: str = ""
    content: str = ""
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    tags: List[str] = field(default_factory=list)
    due_date: Optional[datetime] = None

    def apply_defaults(self) -> None:
        """Fill status and priority when they were left unset."""
        if not self.status:
            self.status = TaskStatus.TODO
        if not self.priority:
            self.priority = TaskPriority.LOW

    def has_any_tag(self, tags: List[str]) -> bool:
        """Check whether the task shares at least one tag with ``tags``."""
        return not set(self.tags).isdisjoint(tags)

    def contains_text(self, query: str) -> bool:
        """Case-sensitive substring match against title or content."""
        return query in self.title or query in self.content

    def copy(self) -> "Task":
        """Detached copy; the tag list is not shared."""
        return replace(self, tags=list(self.tags))
