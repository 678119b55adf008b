"""
Shared fixtures for the test suite.
"""

import io
import logging
import uuid
from datetime import datetime, timedelta, timezone

import httpx
import pytest
import pytest_asyncio

from app.config import Settings
from app.domain.models.task import Task, TaskPriority, TaskStatus
from app.domain.services.request_context import RequestContext
from app.domain.services.task_service import TaskService
from app.infrastructure.log_setup import RequestIdFilter
from app.infrastructure.repositories.task_repository import InMemoryTaskRepository
from app.main import create_application


class FakeClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + timedelta(seconds=1)
        return now


def make_task(
    title: str = "Task",
    content: str = "",
    status: TaskStatus = TaskStatus.TODO,
    priority: TaskPriority = TaskPriority.LOW,
    tags=None,
    **kwargs,
) -> Task:
    """Task with identity and timestamps, ready to be saved directly."""
    now = datetime.now(timezone.utc)
    return Task(
        id=kwargs.pop("id", uuid.uuid4()),
        created_at=now,
        updated_at=now,
        title=title,
        content=content,
        status=status,
        priority=priority,
        tags=list(tags or []),
        **kwargs,
    )


@pytest.fixture
def repository(service_logger):
    return InMemoryTaskRepository(service_logger.getChild("storage"))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def log_stream():
    return io.StringIO()


@pytest.fixture
def service_logger(log_stream):
    logger = logging.getLogger(f"tests.tasks.{uuid.uuid4()}")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = logging.StreamHandler(log_stream)
    handler.setFormatter(logging.Formatter("%(levelname)s [%(request_id)s] %(message)s"))
    handler.addFilter(RequestIdFilter())
    logger.addHandler(handler)
    return logger


@pytest.fixture
def service(service_logger, repository, clock):
    return TaskService(service_logger, repository, clock=clock)


@pytest.fixture
def context():
    return RequestContext(request_id="req-test")


@pytest.fixture
def settings():
    return Settings(_env_file=None, port=8000, environment="testing")


@pytest.fixture
def app(settings, repository):
    return create_application(settings, repository=repository)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def task_factory():
    return make_task
