"""Anthropic streaming helpers.

Purpose:
- Classify Messages API stream events into stream signals.

Event mapping:
- ``content_block_start`` with a ``tool_use`` block starts a call
  (``name``, ``id``, keyed by the block ``index``).
- ``content_block_delta``: ``delta.text`` is answer text,
  ``delta.partial_json`` is an argument fragment of the open call.
- ``content_block_stop`` closes the open call.
- ``error`` is an in-band error frame.
- ``message_start``, ``message_delta``, ``message_stop``, ``ping`` and
  unknown types are ignored; the stream ends when the connection closes.
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


def parse_event(frame: Any) -> List[StreamSignal]:
    if not isinstance(frame, dict):
        return [Ignore("non-object frame")]
    kind = frame.get("type")
    if kind == "content_block_start":
        block = frame.get("content_block") or {}
        if block.get("type") == "tool_use" and isinstance(block.get("name"), str) and isinstance(block.get("id"), str):
            return [ToolCallDelta(key=frame.get("index"), id=block["id"], name=block["name"])]
        return [IGNORE]
    if kind == "content_block_delta":
        delta = frame.get("delta") or {}
        if isinstance(delta.get("text"), str):
            return [TextDelta(delta["text"])]
        if isinstance(delta.get("partial_json"), str):
            return [ToolCallDelta(key=frame.get("index"), fragment=delta["partial_json"])]
        return [IGNORE]
    if kind == "content_block_stop":
        return [ToolCallClosed(key=frame.get("index"))]
    if kind == "error":
        envelope = parse_error_envelope(frame)
        if envelope is not None:
            code, message = envelope
            return [ErrorFrame(message=message, code=code)]
        return [ErrorFrame(message=str(frame))]
    return [Ignore(str(kind)) if kind else IGNORE]


__all__ = ["parse_event"]
