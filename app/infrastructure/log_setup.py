"""
Logging configuration.
Builds the application logger once per application instance; components
receive it (or a child of it) explicitly instead of looking it up globally.
"""

import logging
import sys
from typing import Optional, TextIO

from app.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
APP_LOGGER_NAME = "app"


class RequestIdFilter(logging.Filter):
    """Give records logged outside a request a placeholder request id."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        return True


def configure_logging(settings: Settings, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure and return the application logger.
    Calling it again replaces the handler installed by the previous call.
    """
    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(settings.effective_log_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        if getattr(handler, "_app_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler._app_handler = True
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    logger.addHandler(handler)

    return logger
