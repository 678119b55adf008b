"""
Base DTOs for the application layer.
Provides common patterns for request/response data transfer objects.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel

from app.domain.models.base import FieldViolation


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(
        # camelCase on the wire, snake_case accepted as well
        alias_generator=to_camel,
        populate_by_name=True,
        # Convert enum values to their values
        use_enum_values=True,
    )


class RequestDTO(BaseDTO):
    """Base class for request DTOs."""

    model_config = ConfigDict(extra="forbid")


class ResponseDTO(BaseDTO):
    """Base class for response DTOs."""
    pass


class CreateRequestDTO(RequestDTO):
    """Base class for creation request DTOs."""
    pass


class UpdateRequestDTO(RequestDTO):
    """Base class for update request DTOs."""
    pass


class ListRequestDTO(RequestDTO):
    """
    Base class for list request DTOs with optional pagination.
    Pagination only applies when both page and page_size are given.
    """

    page: Optional[int] = Field(default=None, description="Page number (1-based)")
    page_size: Optional[int] = Field(default=None, description="Items per page")


class HealthCheckResponseDTO(BaseDTO):
    """Health check response DTO."""

    status: str = Field(description="Service status")
    environment: str = Field(description="Deployment environment")
    version: Optional[str] = Field(default=None, description="Application version")
    tasks: int = Field(description="Number of stored tasks")


class ErrorDetailDTO(BaseDTO):
    """One violated field constraint."""

    field: str = Field(description="Offending field")
    rule: str = Field(description="Machine-readable rule identifier")
    message: str = Field(description="Human-readable message")

    @classmethod
    def from_violation(cls, violation: FieldViolation) -> "ErrorDetailDTO":
        return cls(field=violation.field, rule=violation.rule_id, message=violation.message)


class ErrorInfoDTO(BaseDTO):
    """Error body."""

    code: str = Field(description="Error code")
    message: str = Field(description="Error message")
    details: List[ErrorDetailDTO] = Field(default_factory=list, description="Field-specific errors")


class ErrorResponseDTO(BaseDTO):
    """Error response envelope."""

    error: ErrorInfoDTO
    request_id: str = Field(default="", description="Request ID for tracing")
