"""Logging setup with per-request trace ids."""

from __future__ import annotations

import logging
import re
import sys
from contextvars import ContextVar, Token
from typing import Optional
from uuid import uuid4

TRACE_HEADER = "X-Trace-Id"

_current_trace: ContextVar[str] = ContextVar("bikeplanner_trace_id", default="-")
_VALID_TRACE = re.compile(r"^[0-9a-f-]{8,64}$")


def trace_id_from_header(value: Optional[str]) -> str:
    """Reuse a client-supplied trace id when it looks sane, else mint one."""
    if value:
        candidate = value.strip().lower()
        if _VALID_TRACE.match(candidate):
            return candidate
    return uuid4().hex


def bind_trace_id(trace_id: str) -> Token:
    return _current_trace.set(trace_id)


def unbind_trace_id(token: Token) -> None:
    _current_trace.reset(token)


def current_trace_id() -> str:
    return _current_trace.get()


class TraceIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id()
        return True


def configure_logging(service_name: str, level: int | str = logging.INFO) -> logging.Logger:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-7s [%(trace_id)s] %(name)s: %(message)s")
    )
    handler.addFilter(TraceIdFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logging.getLogger(service_name)
