"""Structured logging for the gateway.

Purpose:
    Configure the shared ``llm_gateway`` logger once (JSON lines on stderr)
    and hand out named children. Every adapter and the registry log through
    ``normalized_log_event`` so each event carries the same key set whatever
    the vendor or call path.

Environment:
    ``LLM_GATEWAY_LOG_LEVEL`` sets the level (DEBUG, INFO, WARNING, ...).
    It is re-read whenever ``get_logger`` is called.

Security:
    Never pass credentials as event fields. Request bodies are logged by the
    transport helpers at DEBUG only.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict, Mapping

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "llm_gateway"
LOG_LEVEL_ENV = "LLM_GATEWAY_LOG_LEVEL"

REQUIRED_NORMALIZED_KEYS = ("phase", "attempt", "error_code", "emitted", "tokens")

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}
_HANDLER_MARK = "_llm_gateway_handler"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    if not value:
        return default
    return _LEVELS.get(value.strip().upper(), default)


def _base_logger(json_mode: bool) -> logging.Logger:
    logger = logging.getLogger(BASE_LOGGER_NAME)
    level = _parse_level(os.getenv(LOG_LEVEL_ENV))
    logger.setLevel(level)
    ours = [h for h in logger.handlers if getattr(h, _HANDLER_MARK, False)]
    if ours:
        for handler in ours:
            handler.setLevel(level)
        return logger
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter() if json_mode else logging.Formatter("%(levelname)s %(name)s %(message)s"))
    setattr(handler, _HANDLER_MARK, True)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True) -> logging.Logger:
    """Return the base logger or a child of it.

    ``"providers.openai"`` becomes ``"llm_gateway.providers.openai"``; names
    already under the base logger are used as is. ``json_mode`` only matters
    for the first call, which installs the stderr handler.
    """
    base = _base_logger(json_mode)
    if name == BASE_LOGGER_NAME:
        return base
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    keep_none: bool = False,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Log ``event`` as one JSON object; ``None`` fields are dropped unless ``keep_none``."""
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    payload.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


def _coerce_tokens(tokens: Any) -> Any:
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens)
    return {"value": repr(tokens)}


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: Any = None,
    tokens: Any = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Log an event carrying ``REQUIRED_NORMALIZED_KEYS``.

    ``error_code`` is left out when ``None``; the other keys are always
    present, ``None`` meaning unknown. Extra fields are added only when set
    and never replace a normalized key.
    """
    fields: Dict[str, Any] = {
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is not None:
        fields["error_code"] = error_code
    for key, value in extra_fields.items():
        if value is not None and key not in fields:
            fields[key] = value
    log_event(logger, event, ctx, keep_none=True, level=level, **fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "LogContext",
    "REQUIRED_NORMALIZED_KEYS",
    "get_logger",
    "log_event",
    "normalized_log_event",
]
