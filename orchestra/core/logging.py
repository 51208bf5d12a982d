"""Structured logging for orchestration runs.

Every event carries the request id (API calls) and the session and user of
the run that emitted it, so one orchestration can be followed across the
analyzer, planner, executor and session store.
"""

import asyncio
import functools
import logging
import sys
import time
import uuid
from contextvars import ContextVar
from typing import Any, Dict, Optional

import structlog

from orchestra import __version__
from orchestra.core.config import settings

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
session_id_var: ContextVar[Optional[str]] = ContextVar("session_id", default=None)
user_id_var: ContextVar[Optional[str]] = ContextVar("user_id", default=None)

# Provider keys can surface in client error messages
API_KEY_PREFIXES = ("sk-ant-", "sk-proj-")
SECRET_FIELDS = {"api_key", "anthropic_api_key", "openai_api_key", "authorization"}


def redact_event(
    logger: logging.Logger,
    method_name: str,
    event_dict: Dict[str, Any],
) -> Dict[str, Any]:
    """Mask secret fields and any string value that embeds a provider key."""
    if not settings.redact_sensitive_data:
        return event_dict

    for key, value in event_dict.items():
        if key.lower() in SECRET_FIELDS:
            event_dict[key] = "[REDACTED]"
        elif isinstance(value, str) and any(prefix in value for prefix in API_KEY_PREFIXES):
            event_dict[key] = "[REDACTED]"
    return event_dict


def add_run_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: Dict[str, Any],
) -> Dict[str, Any]:
    """Attach request, session and user ids; explicit fields win."""
    for field, var in (
        ("request_id", request_id_var),
        ("session_id", session_id_var),
        ("user_id", user_id_var),
    ):
        value = var.get()
        if value:
            event_dict.setdefault(field, value)

    event_dict["service"] = "orchestra"
    event_dict["version"] = __version__
    return event_dict


def configure_logging() -> None:
    """Configure structlog and stdlib logging from settings."""
    level = getattr(logging, settings.log_level.upper())
    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_run_context,
            redact_event,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    # provider SDKs log every HTTP request at INFO
    for noisy in ("httpx", "httpcore", "anthropic", "openai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str = __name__) -> structlog.BoundLogger:
    return structlog.get_logger(name)


class RequestIDMiddleware:
    """ASGI middleware: reuse or mint an X-Request-ID and echo it back."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        incoming = dict(scope.get("headers", [])).get(b"x-request-id", b"").decode()
        request_id = incoming or str(uuid.uuid4())
        token = request_id_var.set(request_id)

        async def send_with_id(message):
            if message["type"] == "http.response.start":
                message["headers"] = list(message.get("headers", [])) + [
                    (b"x-request-id", request_id.encode())
                ]
            await send(message)

        try:
            await self.app(scope, receive, send_with_id)
        finally:
            request_id_var.reset(token)


def log_execution(func):
    """Log start, completion and failure of a pipeline coroutine with its duration."""
    if not asyncio.iscoroutinefunction(func):
        raise TypeError(f"log_execution expects a coroutine function, got {func!r}")

    logger = get_logger(func.__module__)

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        start = time.monotonic()
        logger.debug("stage_started", stage=func.__qualname__)
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            logger.error(
                "stage_failed",
                stage=func.__qualname__,
                duration_ms=int((time.monotonic() - start) * 1000),
                error=str(e),
            )
            raise
        logger.info(
            "stage_completed",
            stage=func.__qualname__,
            duration_ms=int((time.monotonic() - start) * 1000),
        )
        return result

    return wrapper
