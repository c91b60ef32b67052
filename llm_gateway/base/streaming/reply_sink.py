"""Reply sink and forwarding channel for streaming calls.

The sink accumulates the full answer (text plus finalized tool calls) while
forwarding each increment to the caller. It is mutated by one producer (the
event pump) and drained once with :meth:`ReplySink.take` after the call.

Forwarding contract:
    - ``on_text`` ignores empty deltas.
    - ``on_tool_call`` appends without deduplication.
    - ``on_done`` forwards the terminal marker exactly once.
    - A forwarding failure while the caller's abort token is set is expected
      (the consumer is gone) and swallowed; any other failure propagates.

``ReplyChannel`` is a queue-backed forwarder safe for one producer thread and
one consumer thread; iterating it yields events up to and including the
terminal ``done`` event.
"""

from __future__ import annotations

import logging
import queue
from dataclasses import dataclass
from threading import Event, Lock
from typing import Callable, Iterator, List, Optional, Tuple

from ..cancellation import CancellationToken
from ..models import ToolCall

TEXT = "text"
TOOL_CALL = "tool_call"
DONE = "done"


@dataclass(frozen=True)
class ReplyEvent:
    """One forwarded increment."""

    kind: str
    text: str = ""
    tool_call: Optional[ToolCall] = None


class ChannelClosed(RuntimeError):
    """Raised when forwarding into a channel whose consumer has gone away."""


class ReplyChannel:
    """Single-producer/single-consumer event channel."""

    def __init__(self) -> None:
        self._queue: "queue.Queue[ReplyEvent]" = queue.Queue()
        self._closed = Event()

    def send(self, event: ReplyEvent) -> None:
        if self._closed.is_set():
            raise ChannelClosed("reply channel closed by consumer")
        self._queue.put(event)

    def close(self) -> None:
        """Consumer side: stop accepting events."""
        self._closed.set()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def receive(self, timeout: Optional[float] = None) -> ReplyEvent:
        return self._queue.get(timeout=timeout)

    def __iter__(self) -> Iterator[ReplyEvent]:
        while True:
            event = self._queue.get()
            yield event
            if event.kind == DONE:
                return


class ReplySink:
    """Accumulator for one streaming reply.

    Parameters:
        forward: Optional callable receiving each :class:`ReplyEvent`
            (``ReplyChannel.send`` or a renderer callback).
        abort: The caller's abort token; forwarding errors raised while it is
            set are swallowed.
    """

    def __init__(
        self,
        forward: Optional[Callable[[ReplyEvent], None]] = None,
        *,
        abort: Optional[CancellationToken] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._forward_fn = forward
        self._abort = abort
        self._logger = logger or logging.getLogger("llm_gateway.reply_sink")
        self._chunks: List[str] = []
        self._tool_calls: List[ToolCall] = []
        self._done = False
        self._taken = False
        self._lock = Lock()

    def bind_abort(self, abort: CancellationToken) -> None:
        if self._abort is None:
            self._abort = abort

    @property
    def done(self) -> bool:
        return self._done

    @property
    def text(self) -> str:
        return "".join(self._chunks)

    @property
    def tool_calls(self) -> List[ToolCall]:
        return list(self._tool_calls)

    def on_text(self, delta: str) -> None:
        if not delta:
            return
        self._chunks.append(delta)
        self._forward(ReplyEvent(kind=TEXT, text=delta))

    def on_tool_call(self, call: ToolCall) -> None:
        self._tool_calls.append(call)
        self._forward(ReplyEvent(kind=TOOL_CALL, tool_call=call))

    def on_done(self) -> None:
        with self._lock:
            if self._done:
                return
            self._done = True
        self._forward(ReplyEvent(kind=DONE))

    def take(self) -> Tuple[str, List[ToolCall]]:
        """Move the accumulated text and tool calls out (single use)."""
        with self._lock:
            if self._taken:
                raise RuntimeError("reply sink already consumed")
            self._taken = True
        text, calls = self.text, list(self._tool_calls)
        self._chunks.clear()
        self._tool_calls.clear()
        return text, calls

    def _forward(self, event: ReplyEvent) -> None:
        if self._forward_fn is None:
            return
        try:
            self._forward_fn(event)
        except Exception as exc:
            if self._abort is not None and self._abort.cancelled:
                self._logger.debug("reply forwarding dropped after abort: %s", exc)
                return
            raise


__all__ = [
    "ReplyEvent",
    "ReplyChannel",
    "ReplySink",
    "ChannelClosed",
    "TEXT",
    "TOOL_CALL",
    "DONE",
]
