"""
Unit tests for Task domain model.
"""

import uuid
from datetime import datetime, timedelta, timezone

from app.domain.models.base import FieldViolation, ValidationError, ErrorKind
from app.domain.models.task import Task, TaskStatus, TaskPriority


class TestTask:
    """Test cases for Task domain model."""

    def test_new_task_has_no_identity_or_defaults(self):
        """A freshly built task is unsaved and has no status or priority."""
        task = Task(title="Write report")

        assert task.id is None
        assert task.status is None
        assert task.priority is None
        assert task.tags == []
        assert task.content == ""

    def test_apply_defaults(self):
        """Unset status and priority become todo and low."""
        task = Task(title="Write report")
        task.apply_defaults()

        assert task.status == TaskStatus.TODO
        assert task.priority == TaskPriority.LOW

    def test_apply_defaults_keeps_explicit_values(self):
        task = Task(title="Ship", status=TaskStatus.DONE, priority=TaskPriority.HIGH)
        task.apply_defaults()

        assert task.status == TaskStatus.DONE
        assert task.priority == TaskPriority.HIGH

    def test_priority_rank_order(self):
        assert TaskPriority.LOW.rank < TaskPriority.NORMAL.rank < TaskPriority.HIGH.rank

    def test_has_any_tag(self):
        task = Task(title="t", tags=["x", "y"])

        assert task.has_any_tag(["y", "z"])
        assert task.has_any_tag(["z", "x"])
        assert not task.has_any_tag(["z"])
        assert not task.has_any_tag([])

    def test_contains_text_is_case_sensitive(self):
        task = Task(title="Buy milk", content="then walk the dog")

        assert task.contains_text("lk")
        assert task.contains_text("walk")
        assert not task.contains_text("Milk")

    def test_copy_does_not_share_tags(self):
        task = Task(id=uuid.uuid4(), title="t", tags=["a"])
        copied = task.copy()
        copied.tags.append("b")

        assert task.tags == ["a"]
        assert copied == task  # same identity

    def test_mark_as_updated_never_goes_backwards(self):
        """updated_at is monotonically non-decreasing."""
        now = datetime(2024, 5, 1, tzinfo=timezone.utc)
        task = Task(title="t", created_at=now, updated_at=now)

        task.mark_as_updated(now - timedelta(minutes=5))
        assert task.updated_at == now

        later = now + timedelta(seconds=1)
        task.mark_as_updated(later)
        assert task.updated_at == later
        assert task.created_at == now

    def test_entities_compare_by_id(self):
        task_id = uuid.uuid4()

        assert Task(id=task_id, title="a") == Task(id=task_id, title="b")
        assert Task(title="a") != Task(title="a")


class TestValidationError:
    """Test cases for the validation error type."""

    def test_carries_every_violation(self):
        violations = [
            FieldViolation("title", "required", "title is required"),
            FieldViolation("pageSize", "lte", "too big", "100"),
        ]
        error = ValidationError(violations)

        assert error.kind == ErrorKind.VALIDATION_ERROR
        assert error.violations == violations
        assert "title" in error.message and "pageSize" in error.message

    def test_rule_id_includes_parameter(self):
        assert FieldViolation("pageSize", "lte", "m", "100").rule_id == "lte 100"
        assert FieldViolation("title", "required", "m").rule_id == "required"
