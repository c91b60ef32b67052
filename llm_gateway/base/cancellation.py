"""Cooperative cancellation primitives (public API facade).

- ``CancellationToken`` is the abort handle a caller holds while a call is
  in flight.
- ``CancelledError`` is raised by work that observes cancellation.
- ``race_with_abort`` runs a blocking call against the token, polling it
  about every 100 ms.
"""

from .cancellation_parts.abort_race import ABORT_POLL_INTERVAL_SECONDS, race_with_abort
from .cancellation_parts.cancellation_token import CancellationToken
from .cancellation_parts.cancelled_error import CancelledError

__all__ = [
    "CancellationToken",
    "CancelledError",
    "race_with_abort",
    "ABORT_POLL_INTERVAL_SECONDS",
]
