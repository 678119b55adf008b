"""
Request context and access log middleware.
Attaches a RequestContext to every request and logs one line per response.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.domain.services.request_context import RequestContext

REQUEST_ID_HEADER = "X-Request-ID"


def get_request_context(request: Request) -> RequestContext:
    """
    Typed accessor for the context attached by RequestContextMiddleware.
    Usable as a FastAPI dependency.
    """
    context: Optional[RequestContext] = getattr(request.state, "context", None)
    if context is None:
        # request did not pass through the middleware (e.g. a bare router in tests)
        context = RequestContext()
        request.state.context = context
    return context


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Create the request's RequestContext, honouring an incoming X-Request-ID,
    and echo the id back on the response.
    """

    async def dispatch(self, request: Request, call_next):
        context = RequestContext.from_header(request.headers.get(REQUEST_ID_HEADER))
        request.state.context = context

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = context.request_id
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log method, url, status code and duration of every request."""

    def __init__(self, app, logger: logging.Logger):
        super().__init__(app)
        self.logger = logger

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        get_request_context(request).bind(self.logger).info(
            "%s %s status=%d took=%.2fms",
            request.method,
            request.url,
            response.status_code,
            elapsed_ms,
        )
        return response
