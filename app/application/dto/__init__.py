"""
Application layer DTOs.
Data Transfer Objects for API requests and responses.
"""

from .base_dto import *
from .task_dto import *

__all__ = [
    # Base DTOs
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "CreateRequestDTO",
    "UpdateRequestDTO",
    "ListRequestDTO",
    "HealthCheckResponseDTO",
    "ErrorDetailDTO",
    "ErrorInfoDTO",
    "ErrorResponseDTO",

    # Task DTOs
    "CreateTaskRequestDTO",
    "UpdateTaskRequestDTO",
    "ListTasksRequestDTO",
    "TaskResponseDTO",
    "TaskListResponseDTO",
]
