"""
Unit tests for TaskService.
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from app.domain.models.base import ErrorKind, InternalError
from app.domain.models.task import Task, TaskPriority, TaskStatus
from app.domain.repositories.task_repository import RecordNotFoundError, TaskQuery
from app.domain.services.task_service import TaskChanges, TaskNotFoundError, TaskService
from app.infrastructure.repositories.task_repository import InMemoryTaskRepository


class TestTaskServiceCreate:
    """Test cases for task creation."""

    def test_create_assigns_identity_timestamps_and_defaults(self, service, repository, context):
        task = service.create_task(context, Task(title="Buy milk"))

        assert task.id is not None
        assert task.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert task.updated_at == task.created_at
        assert task.status == TaskStatus.TODO
        assert task.priority == TaskPriority.LOW
        assert repository.get_task_by_id(task.id).title == "Buy milk"

    def test_create_keeps_explicit_status_and_priority(self, service, context):
        task = service.create_task(
            context, Task(title="Ship", status=TaskStatus.IN_PROGRESS, priority=TaskPriority.HIGH)
        )

        assert task.status == TaskStatus.IN_PROGRESS
        assert task.priority == TaskPriority.HIGH

    def test_created_ids_are_unique(self, service, context):
        ids = {service.create_task(context, Task(title=f"t{i}")).id for i in range(20)}

        assert len(ids) == 20

    def test_id_generation_failure_is_internal(self, service_logger, repository, context):
        def broken_ids():
            raise OSError("no entropy")

        service = TaskService(service_logger, repository, id_factory=broken_ids)

        with pytest.raises(InternalError) as exc_info:
            service.create_task(context, Task(title="t"))

        assert exc_info.value.kind == ErrorKind.INTERNAL
        assert repository.count() == 0

    def test_storage_failure_is_internal(self, service_logger, context):
        repository = Mock(spec=InMemoryTaskRepository)
        repository.save_task.side_effect = RuntimeError("disk on fire")
        service = TaskService(service_logger, repository)

        with pytest.raises(InternalError):
            service.create_task(context, Task(title="t"))

    def test_logs_carry_request_id(self, service, context, log_stream):
        task = service.create_task(context, Task(title="t"))

        output = log_stream.getvalue()
        assert "[req-test]" in output
        assert f"task created id={task.id}" in output


class TestTaskServiceRead:
    """Test cases for fetching and listing tasks."""

    def test_get_missing_task(self, service, context):
        missing = uuid.uuid4()

        with pytest.raises(TaskNotFoundError) as exc_info:
            service.get_task_by_id(context, missing)

        assert exc_info.value.kind == ErrorKind.NOT_FOUND
        assert str(missing) in exc_info.value.message

    def test_get_tasks_delegates_to_repository(self, service, context):
        service.create_task(context, Task(title="a", status=TaskStatus.DONE))
        service.create_task(context, Task(title="b"))

        page = service.get_tasks(context, TaskQuery(status=TaskStatus.DONE))

        assert [t.title for t in page.items] == ["a"]
        assert page.total == 1

    def test_list_failure_is_internal(self, service_logger, context):
        repository = Mock(spec=InMemoryTaskRepository)
        repository.get_tasks.side_effect = RuntimeError("boom")
        service = TaskService(service_logger, repository)

        with pytest.raises(InternalError):
            service.get_tasks(context, TaskQuery())


class TestTaskServiceUpdate:
    """Test cases for partial updates."""

    def test_partial_update_only_touches_supplied_fields(self, service, context):
        created = service.create_task(
            context, Task(title="Report", content="draft", priority=TaskPriority.NORMAL, tags=["a"])
        )

        updated = service.update_task(context, created.id, TaskChanges(tags=["b", "c"]))

        assert updated.title == "Report"
        assert updated.content == "draft"
        assert updated.priority == TaskPriority.NORMAL
        assert updated.tags == ["b", "c"]
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at

    def test_empty_values_leave_fields_unchanged(self, service, context):
        created = service.create_task(context, Task(title="Report", tags=["a"]))

        updated = service.update_task(context, created.id, TaskChanges(title="", content="", tags=[]))

        assert updated.title == "Report"
        assert updated.tags == ["a"]

    def test_update_is_persisted(self, service, repository, context):
        created = service.create_task(context, Task(title="Report"))

        service.update_task(context, created.id, TaskChanges(status=TaskStatus.DONE))

        assert repository.get_task_by_id(created.id).status == TaskStatus.DONE

    def test_update_missing_task(self, service, context):
        with pytest.raises(TaskNotFoundError):
            service.update_task(context, uuid.uuid4(), TaskChanges(title="x"))

    def test_task_deleted_between_fetch_and_update(self, service_logger, context, task_factory):
        repository = Mock(spec=InMemoryTaskRepository)
        task = task_factory()
        repository.get_task_by_id.return_value = task
        repository.update_task.side_effect = RecordNotFoundError(task.id)
        service = TaskService(service_logger, repository)

        with pytest.raises(TaskNotFoundError):
            service.update_task(context, task.id, TaskChanges(title="x"))


class TestTaskServiceDelete:
    """Test cases for deletion."""

    def test_delete(self, service, repository, context):
        created = service.create_task(context, Task(title="t"))

        service.delete_task(context, created.id)

        assert repository.count() == 0

    def test_delete_twice(self, service, context):
        created = service.create_task(context, Task(title="t"))
        service.delete_task(context, created.id)

        with pytest.raises(TaskNotFoundError):
            service.delete_task(context, created.id)


class TestTaskChanges:
    """Test cases for TaskChanges merging."""

    def test_due_date_only_set_when_given(self):
        due = datetime(2024, 7, 1, tzinfo=timezone.utc)
        task = Task(title="t", due_date=due)

        TaskChanges().apply_to(task)
        assert task.due_date == due

        later = datetime(2024, 8, 1, tzinfo=timezone.utc)
        TaskChanges(due_date=later).apply_to(task)
        assert task.due_date == later
