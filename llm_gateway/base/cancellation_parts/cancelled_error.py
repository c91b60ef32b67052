"""Cancellation error type."""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when work observes that its cancellation token was triggered.

    Cancellation is a caller decision, not a failure: the streaming path
    converts it into a clean early return and never logs it as an error.
    """


__all__ = ["CancelledError"]
