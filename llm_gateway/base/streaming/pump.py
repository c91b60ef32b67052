"""Streaming event pump.

Drives the decoded frame source of one streaming call, asks the adapter to
classify each frame and dispatches the normalized signals to a
:class:`ReplySink`.

Ordering:
    Text deltas are forwarded in arrival order. A tool call is forwarded
    only once fully assembled, after every text delta that preceded the
    frame that completed it.

Failure modes:
    - ``ErrorFrame`` raises :class:`UpstreamError` at once; the open tool
      call buffer is discarded.
    - Malformed assembled arguments raise :class:`MalformedToolArguments`.
    - The abort token is checked before each frame; observing it raises
      :class:`CancelledError` which the transport maps to a clean close.

Text already forwarded is never retracted on failure.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional

from ..cancellation import CancellationToken
from ..errors import UpstreamError
from ..log_support import LogContext
from .assembler import ToolCallAssembler
from .reply_sink import ReplySink
from .signals import Done, ErrorFrame, Ignore, StreamSignal, TextDelta, ToolCallClosed, ToolCallDelta

FrameDecoder = Callable[[str], List[StreamSignal]]


class EventPump:
    """Pump one frame source into one reply sink."""

    def __init__(
        self,
        decode_frame: FrameDecoder,
        sink: ReplySink,
        *,
        ctx: LogContext,
        logger: logging.Logger,
        token: Optional[CancellationToken] = None,
    ) -> None:
        self._decode = decode_frame
        self._sink = sink
        self._ctx = ctx
        self._logger = logger
        self._token = token
        self._assembler = ToolCallAssembler(provider=ctx.provider or "unknown", model=ctx.model)
        self.emitted = 0
        self.frames = 0

    def run(self, frames: Iterable[str]) -> None:
        """Consume ``frames`` until a terminal signal or the end of input."""
        for frame in frames:
            if self._token is not None:
                self._token.raise_if_cancelled()
            self.frames += 1
            if self._dispatch(self._decode(frame)):
                break
        self.finish()

    def finish(self) -> None:
        """Flush a still-open tool call; later calls are no-ops."""
        self._emit_completed(self._assembler.flush())

    def _dispatch(self, signals: Iterable[StreamSignal]) -> bool:
        """Apply the signals of one frame; True when the stream is finished."""
        for signal in signals:
            if isinstance(signal, TextDelta):
                if signal.text:
                    self.emitted += 1
                self._sink.on_text(signal.text)
            elif isinstance(signal, ToolCallDelta):
                self._emit_completed(self._assembler.apply(signal))
            elif isinstance(signal, ToolCallClosed):
                self._emit_completed(self._assembler.flush())
            elif isinstance(signal, ErrorFrame):
                raise UpstreamError(
                    signal.message,
                    provider=self._ctx.provider or "unknown",
                    model=self._ctx.model,
                    upstream_code=signal.code,
                )
            elif isinstance(signal, Done):
                return True
            elif isinstance(signal, Ignore):
                if signal.reason:
                    self._logger.debug("ignored stream frame: %s", signal.reason)
        return False

    def _emit_completed(self, call) -> None:
        if call is None:
            return
        self.emitted += 1
        self._sink.on_tool_call(call)


__all__ = ["EventPump", "FrameDecoder"]
