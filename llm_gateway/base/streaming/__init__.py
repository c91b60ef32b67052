"""Streaming package: frame decoding, signal classification targets, tool-call
assembly, the event pump and the reply sink.
"""

from .signals import (
    DONE,
    IGNORE,
    Done,
    ErrorFrame,
    Ignore,
    StreamSignal,
    TextDelta,
    ToolCallClosed,
    ToolCallDelta,
)
from .frames import iter_ndjson, iter_sse_data
from .assembler import ToolCallAssembler
from .reply_sink import ChannelClosed, ReplyChannel, ReplyEvent, ReplySink
from .pump import EventPump, FrameDecoder

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
    "iter_sse_data",
    "iter_ndjson",
    "ToolCallAssembler",
    "ReplyEvent",
    "ReplyChannel",
    "ReplySink",
    "ChannelClosed",
    "EventPump",
    "FrameDecoder",
]
