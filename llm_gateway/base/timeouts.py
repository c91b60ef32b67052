"""Timeout configuration for gateway HTTP calls.

``get_timeout_config()`` returns process defaults, optionally overridden by
environment variables (parsed on first use, re-read when they change):

    LLM_GATEWAY_CONNECT_TIMEOUT_SECONDS
    LLM_GATEWAY_HTTP_TIMEOUT_SECONDS
    LLM_GATEWAY_STREAM_TIMEOUT_SECONDS

A client's own ``extra.connect_timeout`` setting wins over the process
default; see :func:`to_httpx_timeout`.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

import httpx

DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: TCP/TLS connect budget.
        http_timeout_seconds: Read budget for unary calls (whole body).
        stream_timeout_seconds: Idle budget between two stream chunks;
            ``None`` disables the read timeout for streams.
    """

    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS
    http_timeout_seconds: float = 120.0
    stream_timeout_seconds: Optional[float] = 300.0


_ENV_NAMES = (
    "LLM_GATEWAY_CONNECT_TIMEOUT_SECONDS",
    "LLM_GATEWAY_HTTP_TIMEOUT_SECONDS",
    "LLM_GATEWAY_STREAM_TIMEOUT_SECONDS",
)

_CACHED: Optional[Tuple[Tuple[str, ...], TimeoutConfig]] = None


def _parse_env_float(name: str, default: Optional[float]) -> Optional[float]:
    """Read a positive float from the environment, else ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the cached :class:`TimeoutConfig` (refreshed on env change)."""
    global _CACHED  # noqa: PLW0603 - module cache
    guard = tuple(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _CACHED[0] == guard:
        return _CACHED[1]
    base = TimeoutConfig()
    cfg = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(_ENV_NAMES[0], base.connect_timeout_seconds) or base.connect_timeout_seconds,
        http_timeout_seconds=_parse_env_float(_ENV_NAMES[1], base.http_timeout_seconds) or base.http_timeout_seconds,
        stream_timeout_seconds=_parse_env_float(_ENV_NAMES[2], base.stream_timeout_seconds),
    )
    _CACHED = (guard, cfg)
    return cfg


def to_httpx_timeout(connect_timeout: Optional[float] = None, *, stream: bool = False) -> httpx.Timeout:
    """Build an ``httpx.Timeout`` for a unary or streaming call."""
    cfg = get_timeout_config()
    connect = connect_timeout if connect_timeout else cfg.connect_timeout_seconds
    read = cfg.stream_timeout_seconds if stream else cfg.http_timeout_seconds
    return httpx.Timeout(read, connect=connect)


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "to_httpx_timeout",
    "DEFAULT_CONNECT_TIMEOUT_SECONDS",
]
