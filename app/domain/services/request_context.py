"""
Request-scoped metadata passed explicitly through the service layer.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from app.domain.models.base import utc_now


@dataclass(frozen=True)
class RequestContext:
    """Context object for a single request's execution."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    received_at: datetime = field(default_factory=utc_now)

    @classmethod
    def from_header(cls, value: Optional[str]) -> "RequestContext":
        """Reuse a caller supplied request id, or mint a new one."""
        if value and value.strip():
            return cls(request_id=value.strip()[:128])
        return cls()

    def bind(self, logger: logging.Logger) -> logging.LoggerAdapter:
        """Logger whose records carry this request's id."""
        return logging.LoggerAdapter(logger, {"request_id": self.request_id})
