"""
Root exception of the gateway error taxonomy.

Every failure surfaced by adapters, the streaming pump and the registry is a
``ProviderError`` (or subclass) carrying the normalized code, the vendor it
came from and the raw upstream message, so callers can log and decide
without inspecting vendor payloads.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Structured gateway error.

    Attributes:
        code: Normalized :class:`ErrorCode`.
        message: Human-readable message (vendor text preserved verbatim).
        provider: Provider name where the error originated.
        model: Optional model name associated with the failure.
        retryable: Hint for callers deciding whether to re-invoke. The
            gateway itself never retries.
        raw: Optional underlying exception.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
