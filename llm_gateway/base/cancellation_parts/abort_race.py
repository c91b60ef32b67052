"""Race a blocking call against the caller's abort flag.

The work runs on a daemon worker thread while the calling thread polls the
token every ``poll_interval`` seconds. The first to finish wins:

- work finished: its result is returned (or its exception re-raised);
- abort observed: ``on_abort`` runs (typically closing the HTTP response so
  the worker unblocks) and the worker is abandoned.

Partial output the worker already delivered is never retracted.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

from .cancellation_token import CancellationToken

T = TypeVar("T")

ABORT_POLL_INTERVAL_SECONDS = 0.1


def race_with_abort(
    work: Callable[[], T],
    token: CancellationToken,
    *,
    poll_interval: float = ABORT_POLL_INTERVAL_SECONDS,
    on_abort: Optional[Callable[[], None]] = None,
    name: str = "llm-gateway-call",
) -> Tuple[bool, Optional[T]]:
    """Run ``work`` until it completes or ``token`` is cancelled.

    Returns ``(True, result)`` when the work won and ``(False, None)`` when
    the abort won.
    """
    outcome: Dict[str, Any] = {}
    done = threading.Event()

    def _target() -> None:
        try:
            outcome["value"] = work()
        except BaseException as exc:  # noqa: BLE001 - re-raised on the calling thread
            outcome["error"] = exc
        finally:
            done.set()

    worker = threading.Thread(target=_target, name=name, daemon=True)
    worker.start()
    while True:
        if done.wait(poll_interval):
            if "error" in outcome:
                raise outcome["error"]
            return True, outcome.get("value")
        if token.cancelled:
            if on_abort is not None:
                on_abort()
            return False, None


__all__ = ["race_with_abort", "ABORT_POLL_INTERVAL_SECONDS"]
