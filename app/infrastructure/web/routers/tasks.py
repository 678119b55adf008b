"""
Task management router.
Handles CRUD operations for task resources.

Handlers are plain functions: FastAPI runs them in its worker thread pool,
which is where the synchronous task service expects to be called.
"""

from typing import Annotated, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from app.application.dto.task_dto import (
    CreateTaskRequestDTO,
    UpdateTaskRequestDTO,
    ListTasksRequestDTO,
    TaskResponseDTO,
    TaskListResponseDTO,
)
from app.domain.services.request_context import RequestContext
from app.domain.services.task_service import TaskService
from app.infrastructure.validation import TaskValidator, ensure_valid
from app.infrastructure.web.middleware.request_context import get_request_context


router = APIRouter()


def get_task_service(request: Request) -> TaskService:
    """Dependency to get the task service built by the application factory."""
    return request.app.state.task_service


ServiceDep = Annotated[TaskService, Depends(get_task_service)]
ContextDep = Annotated[RequestContext, Depends(get_request_context)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TaskResponseDTO)
def create_task(
    payload: CreateTaskRequestDTO,
    request: Request,
    response: Response,
    context: ContextDep,
    service: ServiceDep,
):
    """
    Create a new task.

    - **title**: Task title (required, 1-200 characters)
    - **content**: Task content (up to 5000 characters)
    - **status**: todo, in_progress or done (default todo)
    - **priority**: low, normal or high (default low)
    - **tags**: Up to 10 tags of 1-32 characters
    - **dueDate**: Optional due date
    """
    ensure_valid(TaskValidator.validate_create(payload))

    task = service.create_task(context, payload.to_domain())

    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{task.id}"
    return TaskResponseDTO.from_domain(task)


@router.get("", response_model=TaskListResponseDTO)
def list_tasks(
    context: ContextDep,
    service: ServiceDep,
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by task status"),
    tags: List[str] = Query([], description="Keep tasks having any of these tags"),
    q: Optional[str] = Query(None, description="Substring of title or content"),
    sort: Optional[str] = Query(None, description="priority or desc"),
    page: Optional[int] = Query(None, description="Page number (1-based)"),
    page_size: Optional[int] = Query(None, alias="pageSize", description="Items per page (1-100)"),
):
    """
    List tasks.

    - **status**: Exact status match
    - **tags**: Repeatable; a task matches when it has any of them
    - **q**: Case-sensitive substring of title or content
    - **sort**: priority (low to high) or desc (newest first)
    - **page** / **pageSize**: Pagination, applied only when both are given
    """
    payload = ListTasksRequestDTO(
        status=status_filter,
        tags=tags,
        q=q,
        sort=sort,
        page=page,
        page_size=page_size,
    )
    ensure_valid(TaskValidator.validate_list(payload))

    page_result = service.get_tasks(context, payload.to_query())
    return TaskListResponseDTO.from_page(page_result)


@router.get("/{task_id}", response_model=TaskResponseDTO)
def get_task(task_id: UUID, context: ContextDep, service: ServiceDep):
    """
    Get a specific task by ID.
    """
    task = service.get_task_by_id(context, task_id)
    return TaskResponseDTO.from_domain(task)


@router.patch("/{task_id}", response_model=TaskResponseDTO)
def update_task(
    task_id: UUID,
    payload: UpdateTaskRequestDTO,
    context: ContextDep,
    service: ServiceDep,
):
    """
    Partially update a task.
    Only non-empty fields overwrite stored values; tags are replaced as a whole.
    """
    ensure_valid(TaskValidator.validate_update(payload))

    task = service.update_task(context, task_id, payload.to_changes())
    return TaskResponseDTO.from_domain(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: UUID, context: ContextDep, service: ServiceDep):
    """
    Delete a task permanently.
    """
    service.delete_task(context, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# checks re-run by the error handler over the well-formed part of a request
# that failed type parsing
REQUEST_RULES = {
    create_task: (CreateTaskRequestDTO, TaskValidator.validate_create),
    update_task: (UpdateTaskRequestDTO, TaskValidator.validate_update),
    list_tasks: (ListTasksRequestDTO, TaskValidator.validate_list),
}
