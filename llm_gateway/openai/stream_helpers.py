"""OpenAI streaming helpers.

Purpose:
- Classify one decoded Chat Completions stream chunk into stream signals.

Frame rules:
- ``choices[0].delta.content`` is answer text.
- ``choices[0].delta.tool_calls[]`` entries are keyed by ``index``; an entry
  carrying ``id`` or ``function.name`` starts a call, later entries carry
  ``function.arguments`` fragments.
- A ``finish_reason`` closes the open call.
- An ``error`` object is an in-band error frame.
- The ``[DONE]`` sentinel is handled before JSON decoding by the adapter.
"""

from __future__ import annotations

from typing import Any, List

from ..base.streaming import (
    IGNORE,
    ErrorFrame,
    Ignore,
    StreamSignal,
    TextDelta,
    ToolCallClosed,
    ToolCallDelta,
)
from .helpers import parse_error_envelope


def _tool_call_delta(entry: Any) -> ToolCallDelta:
    fn = entry.get("function") or {}
    name = fn.get("name")
    call_id = entry.get("id")
    if name is None and call_id:
        name = ""
    fragment = fn.get("arguments")
    return ToolCallDelta(
        key=entry.get("index"),
        id=call_id,
        name=name,
        fragment=fragment if isinstance(fragment, str) and fragment else None,
    )


def parse_chunk(frame: Any) -> List[StreamSignal]:
    if not isinstance(frame, dict):
        return [Ignore("non-object frame")]
    if "error" in frame:
        envelope = parse_error_envelope(frame)
        if envelope is not None:
            code, message = envelope
            return [ErrorFrame(message=message, code=code)]
    choices = frame.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        return [IGNORE]
    choice = choices[0]
    delta = choice.get("delta") or {}
    signals: List[StreamSignal] = []
    content = delta.get("content")
    if isinstance(content, str) and content:
        signals.append(TextDelta(content))
    for entry in delta.get("tool_calls") or []:
        if isinstance(entry, dict):
            signals.append(_tool_call_delta(entry))
    if choice.get("finish_reason"):
        signals.append(ToolCallClosed())
    return signals or [IGNORE]


__all__ = ["parse_chunk"]
