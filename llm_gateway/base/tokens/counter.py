"""Token counting collaborator.

The gateway never owns a tokenizer globally. Callers construct one counter
at startup and pass it explicitly wherever an input budget is enforced.

External dependencies:
    - ``tiktoken`` for the default ``cl100k_base`` encoding. The encoding is
      loaded lazily on first use and held by the counter instance.
"""

from __future__ import annotations

from threading import Lock
from typing import Any, Optional, Protocol, runtime_checkable

import tiktoken


@runtime_checkable
class TokenCounter(Protocol):
    """Anything that can count the tokens of a piece of text."""

    def count(self, text: str) -> int:
        ...


class TiktokenCounter:
    """Count tokens with a tiktoken encoding (``cl100k_base`` by default)."""

    def __init__(self, encoding_name: str = "cl100k_base") -> None:
        self.encoding_name = encoding_name
        self._encoding: Optional[Any] = None
        self._lock = Lock()

    def _get_encoding(self):
        if self._encoding is None:
            with self._lock:
                if self._encoding is None:
                    self._encoding = tiktoken.get_encoding(self.encoding_name)
        return self._encoding

    def count(self, text: str) -> int:
        if not text:
            return 0
        return len(self._get_encoding().encode(text, allowed_special="all"))


__all__ = ["TokenCounter", "TiktokenCounter"]
