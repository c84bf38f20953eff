"""Logging configuration and per-request logging middleware."""

import json
import logging
import sys
import time
import uuid
from typing import Any

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

# Request attributes copied from a record's ``extra`` into JSON output
REQUEST_FIELDS = ("request_id", "method", "path", "status_code", "duration_ms")

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

NOISY_LOGGERS = ("uvicorn.access", "uvicorn.error", "httpx", "httpcore", "multipart")


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log collectors in production."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            {name: getattr(record, name) for name in REQUEST_FIELDS if hasattr(record, name)}
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


class RequestLoggingMiddleware:
    """Pure ASGI middleware stamping each HTTP response with ``X-Request-ID``.

    Completed requests are logged at DEBUG, unhandled failures at ERROR with
    the traceback before the exception propagates.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = uuid.uuid4().hex[:8]
        started = time.perf_counter()
        status_code: int | None = None

        async def send_with_id(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                MutableHeaders(scope=message).append("X-Request-ID", request_id)
            await send(message)

        def request_extra() -> dict[str, Any]:
            return {
                "request_id": request_id,
                "method": scope.get("method", ""),
                "path": scope.get("path", ""),
                "status_code": status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            }

        try:
            await self.app(scope, receive, send_with_id)
        except Exception:
            logger.error("Request failed", extra=request_extra(), exc_info=True)
            raise
        logger.debug("Request completed", extra=request_extra())


def setup_logging(log_level: str = "INFO", log_format: str = "text") -> None:
    """Route all logging to stdout at ``log_level``.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR (case-insensitive).
        log_format: "json" for structured output, anything else for text.
    """
    level = getattr(logging, log_level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if log_format.lower() == "json":
        handler.setFormatter(JsonFormatter(datefmt="%Y-%m-%dT%H:%M:%S"))
    else:
        handler.setFormatter(logging.Formatter(fmt=TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger = logging.getLogger()
    root_logger.handlers[:] = [handler]
    root_logger.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("pharma_reports").setLevel(level)

    logger.info("Logging configured | level=%s | format=%s", log_level, log_format)
