"""Shared HTTP client pool for vendor adapters.

Purpose:
    Hand out reusable ``httpx.Client`` instances so repeated calls to the
    same vendor share a connection pool. Clients are keyed by
    ``(purpose, proxy, connect_timeout)`` because proxy and connect timeout
    are fixed at client construction in httpx.

External dependencies:
    - ``httpx`` for the synchronous HTTP client.

Proxy resolution:
    - An explicit per-client proxy wins. The values ``""``, ``"false"`` and
      ``"-"`` disable proxying entirely.
    - Otherwise ``HTTPS_PROXY`` then ``ALL_PROXY`` from the environment.

Timeouts:
    - Per-request timeouts are passed by the transport helpers (see
      :func:`llm_gateway.base.timeouts.to_httpx_timeout`); the pooled client
      only fixes the connect timeout default.

Lifecycle:
    - All pooled clients are closed at interpreter exit; tests may call
      :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import os
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import to_httpx_timeout

_DISABLED_PROXY_VALUES = frozenset({"", "false", "-"})

_ClientKey = Tuple[str, Optional[str], Optional[float]]
_CLIENTS: Dict[_ClientKey, httpx.Client] = {}
_LOCK = threading.RLock()


def resolve_proxy(explicit: Optional[str]) -> Optional[str]:
    """Return the proxy URL to use, or ``None`` for a direct connection."""
    if explicit is not None:
        if explicit.strip().lower() in _DISABLED_PROXY_VALUES:
            return None
        return explicit.strip()
    for name in ("HTTPS_PROXY", "ALL_PROXY"):
        val = os.getenv(name)
        if val:
            return val
    return None


def get_httpx_client(
    purpose: str,
    *,
    proxy: Optional[str] = None,
    connect_timeout: Optional[float] = None,
) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given purpose and network setup.

    Parameters:
        purpose: Short discriminator such as ``"openai"`` or ``"ollama"``.
        proxy: Raw proxy setting from client configuration (resolved with
            :func:`resolve_proxy`).
        connect_timeout: Connect timeout in seconds; ``None`` uses the
            process default.

    Thread-safety:
        Safe for concurrent use; creation per key is guarded by a lock.
    """
    resolved = resolve_proxy(proxy)
    key = (purpose, resolved, connect_timeout)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        client = httpx.Client(
            proxy=resolved,
            timeout=to_httpx_timeout(connect_timeout),
            # Proxy selection is explicit above; do not let httpx re-read env.
            trust_env=False,
        )
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and forget all pooled clients."""
    with _LOCK:
        clients = list(_CLIENTS.values())
        _CLIENTS.clear()
    for c in clients:
        c.close()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients", "resolve_proxy"]
