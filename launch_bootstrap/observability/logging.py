"""Structured logging setup.

Configures standard-library logging with JSON output. Every record carries
the current `launch_id` and `phase` from context variables, so the launch
sequence can be followed without passing a logger around.
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any


_launch_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("launch_id", default="-")
_phase_var: contextvars.ContextVar[str] = contextvars.ContextVar("phase", default="boot")

_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        "asctime",
    }
)


def new_launch_id() -> str:
    return uuid.uuid4().hex[:12]


def bind_launch(launch_id: str) -> contextvars.Token[str]:
    """Bind a launch id to the current context and return the reset token."""

    return _launch_id_var.set(launch_id)


def unbind_launch(token: contextvars.Token[str]) -> None:
    _launch_id_var.reset(token)
    _phase_var.set("boot")


def set_phase(phase: str) -> None:
    _phase_var.set(phase)


def get_context_fields() -> dict[str, str]:
    return {
        "launch_id": _launch_id_var.get(),
        "phase": _phase_var.get(),
    }


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        ctx = get_context_fields()
        record.launch_id = ctx["launch_id"]
        record.phase = ctx["phase"]
        return True


class JsonFormatter(logging.Formatter):
    """Minimal JSON log formatter suitable for structured logs."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        payload: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Fields attached via `extra={...}` and by ContextFilter.
        for k, v in record.__dict__.items():
            if k in _RESERVED_ATTRS or k.startswith("_"):
                continue
            try:
                json.dumps(v)
                payload[k] = v
            except TypeError:
                payload[k] = repr(v)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


def configure_logging(*, level: str = "INFO") -> None:
    """Configure root logging with JSON output.

    Safe to call multiple times; later calls only adjust the level.
    """

    root = logging.getLogger()
    root.setLevel(level.upper())
    if getattr(root, "_launch_bootstrap_configured", False):
        return

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.addFilter(ContextFilter())
    handler.setFormatter(JsonFormatter())

    root.addHandler(handler)
    setattr(root, "_launch_bootstrap_configured", True)
