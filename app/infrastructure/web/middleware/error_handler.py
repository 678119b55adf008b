"""
Error handling for the FastAPI application.
Maps domain errors, request validation failures and uncaught exceptions to
one consistent error envelope.
"""

import logging
import traceback
from typing import Any, Dict, List, Optional, Type, get_origin

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.datastructures import QueryParams
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.application.dto.base_dto import ErrorDetailDTO, ErrorInfoDTO, ErrorResponseDTO
from app.domain.models.base import DomainException, ErrorKind, FieldViolation, ValidationError
from app.infrastructure.validation import field_root, validate_well_formed
from app.infrastructure.web.middleware.request_context import get_request_context

HTTP_422_UNPROCESSABLE = 422

STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION_ERROR: HTTP_422_UNPROCESSABLE,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

CODE_INVALID_JSON = "invalid_json"
CODE_BAD_REQUEST = "bad_request"

HTTP_CODES = {
    status.HTTP_400_BAD_REQUEST: CODE_BAD_REQUEST,
    status.HTTP_404_NOT_FOUND: ErrorKind.NOT_FOUND.value,
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
}

# location prefixes FastAPI puts in front of the offending field name
_LOCATION_SOURCES = {"body", "query", "path", "header"}


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Optional[List[FieldViolation]] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Build the error envelope shared by every failing response."""
    body = ErrorResponseDTO(
        error=ErrorInfoDTO(
            code=code,
            message=message,
            details=[ErrorDetailDTO.from_violation(v) for v in details or []],
        ),
        request_id=get_request_context(request).request_id,
    )
    content = body.model_dump(mode="json", by_alias=True)
    if extra:
        content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def violations_from_request_error(exc: RequestValidationError) -> List[FieldViolation]:
    """Convert FastAPI/pydantic parsing errors to field violations."""
    violations = []
    for error in exc.errors():
        location = list(error.get("loc", ()))
        if len(location) > 1 and location[0] in _LOCATION_SOURCES:
            location = location[1:]
        field = _field_name(location) or "body"
        if field == "task_id":
            field = "id"
        violations.append(FieldViolation(field, error.get("type", "invalid"), error.get("msg", "invalid value")))
    return violations


def _field_name(location: List[Any]) -> str:
    # list indices are written tags[0], matching TaskValidator
    field = ""
    for part in location:
        if isinstance(part, int):
            field += f"[{part}]"
        else:
            field += f".{part}" if field else str(part)
    return field


def _query_input(model: Type[BaseModel], params: QueryParams) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for name, info in model.model_fields.items():
        key = info.alias or name
        values = params.getlist(key)
        if values:
            data[key] = values if get_origin(info.annotation) is list else values[-1]
    return data


def rule_violations_for_failed_request(
    request: Request,
    exc: RequestValidationError,
    parse_violations: List[FieldViolation],
) -> List[FieldViolation]:
    """
    Rule violations of the fields that did parse, for endpoints listed in
    ``app.state.request_rules`` (endpoint -> (request DTO, validator)).
    """
    rules = getattr(request.app.state, "request_rules", {}).get(request.scope.get("endpoint"))
    if rules is None:
        return []
    model, validate = rules

    if request.method == "GET":
        data = _query_input(model, request.query_params)
    else:
        data = exc.body
    if not isinstance(data, dict):
        return []

    malformed = {field_root(v.field) for v in parse_violations}
    return validate_well_formed(model, validate, data, malformed)


class ExceptionHandlers:
    """Exception handlers sharing one injected logger."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    async def domain_exception(self, request: Request, exc: DomainException) -> JSONResponse:
        """Handle errors raised by the service and validation layers."""
        status_code = STATUS_BY_KIND[exc.kind]
        log = get_request_context(request).bind(self.logger)
        details = exc.violations if isinstance(exc, ValidationError) else None

        if exc.kind is ErrorKind.VALIDATION_ERROR:
            log.warning("invalid request: %s", exc.message)
        elif exc.kind is ErrorKind.NOT_FOUND:
            log.info("not found: %s", exc.message)
        else:
            log.error("internal error: %s", exc.message, exc_info=exc)

        message = exc.message
        if exc.kind is ErrorKind.INTERNAL:
            message = "An unexpected error occurred"
        return error_response(request, status_code, exc.kind.value, message, details)

    async def request_validation(self, request: Request, exc: RequestValidationError) -> JSONResponse:
        """Handle request parsing failures: malformed JSON or mistyped fields."""
        log = get_request_context(request).bind(self.logger)

        if any(error.get("type") == "json_invalid" for error in exc.errors()):
            log.warning("invalid json body")
            return error_response(
                request, status.HTTP_400_BAD_REQUEST, CODE_INVALID_JSON,
                "The request body contains invalid JSON",
            )

        violations = violations_from_request_error(exc)
        violations += rule_violations_for_failed_request(request, exc, violations)
        log.warning("request failed parsing: %s", ", ".join(v.field for v in violations))
        return error_response(
            request, HTTP_422_UNPROCESSABLE, ErrorKind.VALIDATION_ERROR.value,
            "Request validation failed", violations,
        )

    async def http_exception(self, request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Wrap router-level HTTP errors (unknown path, wrong method) in the envelope."""
        code = HTTP_CODES.get(exc.status_code, "http_error")
        message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
        if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
            message = f"The path {request.url.path} was not found"
        response = error_response(request, exc.status_code, code, message)
        if exc.headers:
            response.headers.update(exc.headers)
        return response


def register_exception_handlers(app: FastAPI, logger: logging.Logger) -> None:
    handlers = ExceptionHandlers(logger)
    app.add_exception_handler(DomainException, handlers.domain_exception)
    app.add_exception_handler(RequestValidationError, handlers.request_validation)
    app.add_exception_handler(StarletteHTTPException, handlers.http_exception)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    def __init__(self, app, logger: logging.Logger, debug: bool = False):
        super().__init__(app)
        self.logger = logger
        self.debug = debug

    async def dispatch(self, request: Request, call_next):
        """
        Process the request and handle any exceptions.
        """
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            return self.handle_exception(request, exc)

    def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """
        Log the exception with its traceback and answer with a 500 envelope.
        """
        get_request_context(request).bind(self.logger).error(
            "Unhandled exception: %s: %s (%s %s)",
            type(exc).__name__, exc, request.method, request.url.path,
            exc_info=exc,
        )

        extra = None
        if self.debug:
            extra = {
                "debug": {
                    "exception_type": type(exc).__name__,
                    "traceback": traceback.format_exception(type(exc), exc, exc.__traceback__),
                }
            }

        return error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorKind.INTERNAL.value,
            "An unexpected error occurred",
            extra=extra,
        )
