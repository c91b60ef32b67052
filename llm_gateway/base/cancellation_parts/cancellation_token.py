"""Cooperative cancellation token (the caller's abort handle).

The flag is a ``threading.Event`` so the producer (stream pump) and the
watcher (abort race) can observe it from different threads; ``wait`` lets a
watcher sleep for one poll interval without busy looping.
"""

from __future__ import annotations

from threading import Event, Lock
from typing import List, Optional

from .cancelled_error import CancelledError


class CancellationToken:
    """A one-way abort flag with optional cascading to child tokens."""

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._event = Event()
        self._reason: Optional[str] = None
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation and cascade to children (idempotent)."""
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()
            children = list(self._children)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        with self._lock:
            self._children.append(token)
            already = self._event.is_set()
            reason = self._reason
        if already:
            token.cancel(reason)
        return token

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def wait(self, timeout: float | None = None) -> bool:
        """Block up to ``timeout`` seconds; return True once cancelled."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancelledError(self._reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._reason!r}, children={len(self._children)})"


__all__ = ["CancellationToken"]
