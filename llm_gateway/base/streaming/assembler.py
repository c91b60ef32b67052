"""Tool-call assembler.

Buffers ``(name, id, argument fragments)`` for the current call only and
turns it into a :class:`ToolCall` when the call is flushed:

- a new start while a call is open flushes the open call first (vendors may
  start the next call without closing the previous one);
- ``ToolCallClosed`` and end of stream flush the open call, exactly once;
- fragments arriving while no call is open are dropped.

Flushing joins the fragments and parses them as JSON. An empty buffer means
``{}``. Anything else that fails to parse raises
:class:`MalformedToolArguments` and no call is produced for that name.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..errors import MalformedToolArguments
from ..models import ToolCall
from .signals import ToolCallDelta


@dataclass
class _OpenCall:
    name: str
    id: Optional[str] = None
    key: Optional[Union[int, str]] = None
    fragments: List[str] = field(default_factory=list)


class ToolCallAssembler:
    """Incremental tool-call reconstruction for one streaming call."""

    def __init__(self, *, provider: str, model: Optional[str] = None) -> None:
        self._provider = provider
        self._model = model
        self._open: Optional[_OpenCall] = None

    @property
    def is_open(self) -> bool:
        return self._open is not None

    def _continues_open(self, delta: ToolCallDelta) -> bool:
        """True when a named delta repeats the open call rather than starting one."""
        current = self._open
        if current is None or delta.key is None or current.key != delta.key:
            return False
        return delta.id is None or delta.id == current.id

    def apply(self, delta: ToolCallDelta) -> Optional[ToolCall]:
        """Feed one delta; return a call completed as a side effect, if any."""
        if delta.starts_call and not self._continues_open(delta):
            completed = self.flush()
            self._open = _OpenCall(name=delta.name or "", id=delta.id, key=delta.key)
            if delta.fragment:
                self._open.fragments.append(delta.fragment)
            return completed
        if self._open is None:
            return None
        if delta.id and self._open.id is None:
            self._open.id = delta.id
        if delta.name and not self._open.name:
            self._open.name = delta.name
        if delta.fragment:
            self._open.fragments.append(delta.fragment)
        return None

    def flush(self) -> Optional[ToolCall]:
        """Close the open call (if any) and return it."""
        current, self._open = self._open, None
        if current is None:
            return None
        raw = "".join(current.fragments).strip()
        if not raw:
            return ToolCall(name=current.name, arguments={}, id=current.id)
        try:
            arguments = json.loads(raw)
        except ValueError as exc:
            raise MalformedToolArguments(
                current.name,
                provider=self._provider,
                model=self._model,
                detail=str(exc),
            ) from exc
        return ToolCall(name=current.name, arguments=arguments, id=current.id)


__all__ = ["ToolCallAssembler"]
