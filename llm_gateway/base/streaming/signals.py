"""Normalized stream signals produced by adapter frame classifiers.

Every decoded vendor frame is classified into zero or more of these values;
the event pump is the only consumer. Vendors disagree on framing, so the
classifier is where their differences end:

- ``TextDelta``: a piece of answer text, forwarded immediately.
- ``ToolCallDelta``: part of a tool call. A delta carrying ``name`` starts
  a call (``key``/``id`` identify it); later deltas carry argument
  fragments for the current call.
- ``ToolCallClosed``: the current tool call is complete.
- ``ErrorFrame``: the vendor reported an error in-band; the stream fails.
- ``Done``: an explicit end marker (sentinel frame or ``done`` flag).
- ``Ignore``: a known-irrelevant or unknown frame type.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class TextDelta:
    text: str


@dataclass(frozen=True)
class ToolCallDelta:
    key: Optional[Union[int, str]] = None
    id: Optional[str] = None
    name: Optional[str] = None
    fragment: Optional[str] = None

    @property
    def starts_call(self) -> bool:
        return self.name is not None


@dataclass(frozen=True)
class ToolCallClosed:
    key: Optional[Union[int, str]] = None


@dataclass(frozen=True)
class ErrorFrame:
    message: str
    code: Optional[str] = None


@dataclass(frozen=True)
class Done:
    pass


@dataclass(frozen=True)
class Ignore:
    reason: str = ""


StreamSignal = Union[TextDelta, ToolCallDelta, ToolCallClosed, ErrorFrame, Done, Ignore]

DONE = Done()
IGNORE = Ignore()


__all__ = [
    "TextDelta",
    "ToolCallDelta",
    "ToolCallClosed",
    "ErrorFrame",
    "Done",
    "Ignore",
    "StreamSignal",
    "DONE",
    "IGNORE",
]
