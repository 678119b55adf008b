"""
Input validation for task requests.

One explicit function per request DTO, each returning every violated
constraint rather than stopping at the first one.
"""

import re
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set, Type

from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.application.dto.task_dto import (
    CreateTaskRequestDTO, UpdateTaskRequestDTO, ListTasksRequestDTO
)
from app.domain.models.base import FieldViolation, ValidationError
from app.domain.models.task import (
    TaskStatus, TaskPriority, TaskSortKey,
    TITLE_MAX_LENGTH, CONTENT_MAX_LENGTH, TAGS_MAX_ITEMS, TAG_MAX_LENGTH
)

MIN_PAGE = 1
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100

STATUS_VALUES = [status.value for status in TaskStatus]
PRIORITY_VALUES = [priority.value for priority in TaskPriority]
SORT_VALUES = [key.value for key in TaskSortKey]


class FieldRules:
    """Single-field checks. Each returns a violation or None."""

    @staticmethod
    def required(field: str, value: Optional[str]) -> Optional[FieldViolation]:
        if value is None or value == "":
            return FieldViolation(field, "required", f"{field} is required")
        return None

    @staticmethod
    def min_length(field: str, value: str, limit: int) -> Optional[FieldViolation]:
        if len(value) < limit:
            return FieldViolation(
                field, "min_length", f"{field} must be at least {limit} characters long", str(limit)
            )
        return None

    @staticmethod
    def max_length(field: str, value: str, limit: int) -> Optional[FieldViolation]:
        if len(value) > limit:
            return FieldViolation(
                field, "max_length", f"{field} must be at most {limit} characters long", str(limit)
            )
        return None

    @staticmethod
    def max_items(field: str, values: Sequence, limit: int) -> Optional[FieldViolation]:
        if len(values) > limit:
            return FieldViolation(
                field, "max_items", f"{field} must contain at most {limit} items", str(limit)
            )
        return None

    @staticmethod
    def one_of(field: str, value: Optional[str], allowed: List[str]) -> Optional[FieldViolation]:
        """Empty values pass; they mean "not supplied"."""
        if value and value not in allowed:
            choices = " ".join(allowed)
            return FieldViolation(
                field, "oneof", f"{field} must be one of: {choices}", choices
            )
        return None

    @staticmethod
    def gte(field: str, value: Optional[int], limit: int) -> Optional[FieldViolation]:
        if value is not None and value < limit:
            return FieldViolation(
                field, "gte", f"{field} must be greater than or equal to {limit}", str(limit)
            )
        return None

    @staticmethod
    def lte(field: str, value: Optional[int], limit: int) -> Optional[FieldViolation]:
        if value is not None and value > limit:
            return FieldViolation(
                field, "lte", f"{field} must be less than or equal to {limit}", str(limit)
            )
        return None


def _collect(checks: Iterable[Optional[FieldViolation]]) -> List[FieldViolation]:
    return [violation for violation in checks if violation is not None]


class TaskValidator:
    """Validators for task request DTOs."""

    @staticmethod
    def validate_create(request: CreateTaskRequestDTO) -> List[FieldViolation]:
        violations = _collect([FieldRules.required("title", request.title)])
        if request.title:
            violations += TaskValidator._title_rules(request.title)
        violations += TaskValidator._common_rules(
            request.content, request.status, request.priority, request.tags
        )
        return violations

    @staticmethod
    def validate_update(request: UpdateTaskRequestDTO) -> List[FieldViolation]:
        violations: List[FieldViolation] = []
        if request.title:
            violations += TaskValidator._title_rules(request.title)
        violations += TaskValidator._common_rules(
            request.content, request.status, request.priority, request.tags
        )
        return violations

    @staticmethod
    def validate_list(request: ListTasksRequestDTO) -> List[FieldViolation]:
        return _collect([
            FieldRules.one_of("status", request.status, STATUS_VALUES),
            FieldRules.gte("page", request.page, MIN_PAGE),
            FieldRules.gte("pageSize", request.page_size, MIN_PAGE_SIZE),
            FieldRules.lte("pageSize", request.page_size, MAX_PAGE_SIZE),
            FieldRules.one_of("sort", request.sort, SORT_VALUES),
        ])

    @staticmethod
    def _title_rules(title: str) -> List[FieldViolation]:
        return _collect([
            FieldRules.min_length("title", title, 1),
            FieldRules.max_length("title", title, TITLE_MAX_LENGTH),
        ])

    @staticmethod
    def _common_rules(
        content: Optional[str],
        status: Optional[str],
        priority: Optional[str],
        tags: Optional[List[str]]
    ) -> List[FieldViolation]:
        checks = [
            FieldRules.max_length("content", content or "", CONTENT_MAX_LENGTH),
            FieldRules.one_of("status", status, STATUS_VALUES),
            FieldRules.one_of("priority", priority, PRIORITY_VALUES),
        ]
        tags = tags or []
        checks.append(FieldRules.max_items("tags", tags, TAGS_MAX_ITEMS))
        for index, tag in enumerate(tags):
            field = f"tags[{index}]"
            checks.append(FieldRules.min_length(field, tag, 1))
            checks.append(FieldRules.max_length(field, tag, TAG_MAX_LENGTH))
        return _collect(checks)


def ensure_valid(violations: List[FieldViolation]) -> None:
    """Raise ValidationError carrying every violation, if there are any."""
    if violations:
        raise ValidationError(violations)


def field_root(field: str) -> str:
    """Top-level field of a violation, e.g. ``tags`` for ``tags[3]``."""
    return re.split(r"[.\[]", field, maxsplit=1)[0]


def validate_well_formed(
    model: Type[BaseModel],
    validate: Callable[[BaseModel], List[FieldViolation]],
    data: Dict[str, object],
    malformed: Set[str],
) -> List[FieldViolation]:
    """
    Run ``validate`` over the fields of ``data`` that parsed.

    Used when a request fails type parsing, so the response still lists the
    rules broken by the remaining fields. ``malformed`` holds the top-level
    wire names that failed parsing; they are left out of the result.
    """
    usable = {key: value for key, value in data.items() if key not in malformed}
    try:
        request = model.model_validate(usable)
    except PydanticValidationError:
        return []
    return [v for v in validate(request) if field_root(v.field) not in malformed]
