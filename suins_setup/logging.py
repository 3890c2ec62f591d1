"""
suins_setup.logging
-------------------

Structured logging on top of the stdlib:
- JSON or concise text formats
- Context-local fields via `contextvars` (trace_id, network, asset_type, ...)
- Helpers to bind/unbind context fields and open a trace scope

Usage
-----
    from suins_setup import logging as slog

    slog.configure(json=False, level="INFO")  # once at process start
    log = slog.get_logger(__name__)

    with slog.trace_scope(network="testnet"):
        log.info("building day one setup")
"""

from __future__ import annotations

import datetime as _dt
import io
import json
import logging
import os
import sys
import traceback
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Optional

_LOG_CONTEXT: ContextVar[Dict[str, Any]] = ContextVar("_SUINS_LOG_CONTEXT", default={})

DEFAULT_CONTEXT_KEYS = ("trace_id", "network", "asset_type", "component")

# LogRecord attributes that are never treated as structured extras
_RESERVED = frozenset(
    (
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
    )
)

_LEVEL_TO_INT = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

# ----------------------------
# Context
# ----------------------------


def context() -> Dict[str, Any]:
    """Return a *copy* of the active logging context."""
    return dict(_LOG_CONTEXT.get())


def bind(**fields: Any) -> None:
    """Merge fields into the active context."""
    cur = dict(_LOG_CONTEXT.get())
    cur.update({k: _coerce_value(v) for k, v in fields.items()})
    _LOG_CONTEXT.set(cur)


def unbind(*keys: str) -> None:
    cur = dict(_LOG_CONTEXT.get())
    for k in keys:
        cur.pop(k, None)
    _LOG_CONTEXT.set(cur)


@contextmanager
def trace_scope(trace_id: Optional[str] = None, **fields: Any):
    """Bind a trace_id (and any extra fields) for the scope; restore on exit."""
    prev = dict(_LOG_CONTEXT.get())
    try:
        bind(trace_id=trace_id or uuid.uuid4().hex[:12], **fields)
        yield
    finally:
        _LOG_CONTEXT.set(prev)


# ----------------------------
# Formatters
# ----------------------------


def _coerce_value(v: Any) -> Any:
    if v is None or isinstance(v, (bool, int, float, str, list, dict)):
        return v
    if isinstance(v, (bytes, bytearray)):
        return v.hex()
    if isinstance(v, _dt.datetime):
        if v.tzinfo is None:
            v = v.replace(tzinfo=_dt.timezone.utc)
        return v.isoformat()
    return str(v)


def _utcnow_iso() -> str:
    return _dt.datetime.now(_dt.timezone.utc).isoformat(timespec="milliseconds")


def _extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        k: _coerce_value(v)
        for k, v in record.__dict__.items()
        if not k.startswith("_") and k not in _RESERVED
    }


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": _utcnow_iso(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(context())
        for k, v in _extras(record).items():
            payload.setdefault(k, v)
        if record.exc_info:
            payload["err"] = "".join(traceback.format_exception(*record.exc_info)).rstrip()
        return json.dumps(payload, default=str, separators=(",", ":"))


class TextFormatter(logging.Formatter):
    """
    One line per record:
      2026-01-05T12:34:56.789+00:00 | WARNING | suins_setup.setup | network=testnet | skipped
    """

    def format(self, record: logging.LogRecord) -> str:
        ctx = context()
        parts = [f"{k}={ctx[k]}" for k in DEFAULT_CONTEXT_KEYS if ctx.get(k) is not None]
        parts += [
            f"{k}={v}" for k, v in _extras(record).items() if k not in ctx
        ]
        line = f"{_utcnow_iso()} | {record.levelname:<7} | {record.name}"
        if parts:
            line += " | " + " ".join(parts)
        line += f" | {record.getMessage()}"
        if record.exc_info:
            line += "\n" + "".join(traceback.format_exception(*record.exc_info)).rstrip()
        return line


# ----------------------------
# Public setup API
# ----------------------------


def configure(
    *,
    json: Optional[bool] = None,
    level: Optional[str | int] = None,
    stream: io.TextIOBase = sys.stderr,
) -> None:
    """
    Configure the root logger with a single console handler.

    `json=None` defers to SUINS_LOG_FORMAT (json|text), falling back to text
    on a TTY and JSON otherwise. `level=None` defers to SUINS_LOG_LEVEL.
    """
    lvl = _coerce_level(level if level is not None else os.environ.get("SUINS_LOG_LEVEL", "INFO"))
    root = logging.getLogger()
    root.setLevel(lvl)
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setLevel(lvl)
    handler.setFormatter(JSONFormatter() if _decide_json(json, stream) else TextFormatter())
    root.addHandler(handler)

    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(max(lvl, logging.WARNING))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or "suins_setup")


# ----------------------------
# Internals
# ----------------------------


def _coerce_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return _LEVEL_TO_INT.get(str(level).upper(), logging.INFO)


def _decide_json(flag: Optional[bool], stream: io.TextIOBase) -> bool:
    if flag is not None:
        return flag
    env = os.environ.get("SUINS_LOG_FORMAT", "").strip().lower()
    if env in ("json", "text"):
        return env == "json"
    try:
        return not stream.isatty()
    except (AttributeError, ValueError):
        return True


__all__ = [
    "DEFAULT_CONTEXT_KEYS",
    "JSONFormatter",
    "TextFormatter",
    "bind",
    "configure",
    "context",
    "get_logger",
    "trace_scope",
    "unbind",
]
