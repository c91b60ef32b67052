"""Transport helpers executing unary and streaming vendor calls.

Purpose:
    Run one HTTP exchange for an adapter: build the wire request through the
    adapter's translation methods, execute it on the pooled ``httpx``
    client, map failures onto the error taxonomy and log the normalized
    ``chat.*`` / ``stream.*`` events. Adapters stay pure translators.

External dependencies:
    - ``httpx`` (client supplied by the adapter; pooled or injected).

Failure semantics:
    - Request construction errors (``MalformedInput``, ``MissingCredential``)
      are raised before any network activity.
    - An HTTP error status is parsed once for a vendor error envelope and
      raised as ``UpstreamError``; otherwise ``TransportError{status}``.
    - ``httpx`` transport exceptions become ``TransportError`` classified
      with :func:`classify_exception`.
    - Nothing is retried.

Cancellation:
    Both paths race the blocking call against the caller's token with
    :func:`race_with_abort`. A cancelled streaming call closes the response,
    logs ``stream.cancelled`` and returns normally; text already forwarded
    stays forwarded. The sink's ``on_done`` fires on every exit path.
"""

from __future__ import annotations

import json
import time
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional

import httpx

from .cancellation import CancellationToken, CancelledError, race_with_abort
from .errors import (
    InvalidResponse,
    ProviderError,
    TransportError,
    UpstreamError,
    classify_exception,
)
from .logging import LogContext, normalized_log_event
from .models import Model, NeutralOutput, SendData
from .streaming import EventPump, ReplySink, iter_ndjson, iter_sse_data
from .timeouts import to_httpx_timeout

if TYPE_CHECKING:
    from .adapter import BaseVendorAdapter

_BENIGN_STREAM_END = (httpx.StreamClosed, httpx.StreamConsumed)


def _wrap_transport(adapter: "BaseVendorAdapter", model: Model, exc: Exception) -> TransportError:
    return TransportError(
        str(exc) or exc.__class__.__name__,
        provider=adapter.provider_name,
        model=model.name,
        code=classify_exception(exc),
        raw=exc,
    )


def _decode_json(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return None


def raise_for_status(adapter: "BaseVendorAdapter", model: Model, response: httpx.Response) -> None:
    """Raise ``UpstreamError`` / ``TransportError`` for an error status.

    The body must already be read.
    """
    status = response.status_code
    if status < 400:
        return
    text = response.text
    envelope = adapter.parse_error_envelope(_decode_json(text)) if text else None
    if envelope is not None:
        upstream_code, message = envelope
        raise UpstreamError(
            message,
            provider=adapter.provider_name,
            model=model.name,
            upstream_code=upstream_code,
            status=status,
        )
    raise TransportError(
        f"HTTP Error {status}: {text}",
        provider=adapter.provider_name,
        model=model.name,
        status=status,
    )


def _log_error(adapter: "BaseVendorAdapter", event: str, ctx: LogContext, exc: Exception, emitted: Any) -> None:
    normalized_log_event(
        adapter.logger,
        event,
        ctx,
        phase="finalize",
        attempt=None,
        emitted=emitted,
        tokens=None,
        error=str(exc),
        error_code=classify_exception(exc).value,
    )


def unary_call(
    adapter: "BaseVendorAdapter",
    model: Model,
    request: SendData,
    token: Optional[CancellationToken] = None,
) -> NeutralOutput:
    """Execute a one-shot call and parse the full body.

    Raises ``CancelledError`` when ``token`` is cancelled before the
    response arrives.
    """
    request = request.with_stream(False)
    ctx = LogContext.for_call(adapter.provider_name, model.name, stream=False)
    url = adapter.endpoint(request, model)
    headers = adapter.build_headers(request, model)
    body = adapter.build_body(request, model)
    normalized_log_event(
        adapter.logger,
        "chat.start",
        ctx,
        phase="start",
        attempt=None,
        emitted=None,
        tokens=None,
        has_tools=bool(request.functions),
        temperature=request.temperature,
        top_p=request.top_p,
    )
    adapter.logger.debug("request %s %s", url, json.dumps(body, ensure_ascii=False, default=str))

    client = adapter.http_client()
    timeout = to_httpx_timeout(adapter.connect_timeout())

    def _work() -> httpx.Response:
        try:
            return client.post(url, json=body, headers=headers, timeout=timeout)
        except httpx.HTTPError as exc:
            raise _wrap_transport(adapter, model, exc) from exc

    t0 = time.perf_counter()
    try:
        if token is not None:
            token.raise_if_cancelled()
            won, response = race_with_abort(_work, token, name=f"{adapter.provider_name}-chat")
            if not won or response is None:
                raise CancelledError(token.reason or "operation cancelled")
        else:
            response = _work()
        raise_for_status(adapter, model, response)
        try:
            data = response.json()
        except ValueError as exc:
            raise InvalidResponse(
                f"Invalid response data: {response.text}",
                provider=adapter.provider_name,
                model=model.name,
            ) from exc
        envelope = adapter.parse_error_envelope(data)
        if envelope is not None:
            upstream_code, message = envelope
            raise UpstreamError(
                message,
                provider=adapter.provider_name,
                model=model.name,
                upstream_code=upstream_code,
            )
        output = adapter.parse_unary(data, model)
    except CancelledError as exc:
        normalized_log_event(
            adapter.logger,
            "chat.error",
            ctx,
            phase="finalize",
            attempt=None,
            emitted=False,
            tokens=None,
            error=str(exc),
            error_code="cancelled",
        )
        raise
    except ProviderError as exc:
        _log_error(adapter, "chat.error", ctx, exc, emitted=False)
        raise

    ctx.response_id = output.response_id
    normalized_log_event(
        adapter.logger,
        "chat.end",
        ctx,
        phase="finalize",
        attempt=None,
        emitted=True,
        tokens={"input": output.input_tokens, "output": output.output_tokens},
        latency_ms=(time.perf_counter() - t0) * 1000.0,
        tool_calls=len(output.tool_calls),
    )
    return output


def _frames(adapter: "BaseVendorAdapter", response: httpx.Response) -> Iterator[str]:
    lines = response.iter_lines()
    if adapter.frame_format == "ndjson":
        return iter_ndjson(lines)
    return iter_sse_data(lines)


def streaming_call(
    adapter: "BaseVendorAdapter",
    model: Model,
    request: SendData,
    sink: ReplySink,
    token: Optional[CancellationToken] = None,
) -> None:
    """Execute a streaming call, pumping frames into ``sink``.

    Returns normally on stream end and on cancellation; raises the taxonomy
    errors otherwise. ``sink.on_done()`` fires on every path.
    """
    request = request.with_stream(True)
    token = token or CancellationToken()
    sink.bind_abort(token)
    ctx = LogContext.for_call(adapter.provider_name, model.name, stream=True)
    pump = EventPump(
        lambda data: adapter.decode_frame(data, model),
        sink,
        ctx=ctx,
        logger=adapter.logger,
        token=token,
    )
    state: Dict[str, Any] = {}
    t0 = time.perf_counter()

    def _work() -> None:
        client = adapter.http_client()
        timeout = to_httpx_timeout(adapter.connect_timeout(), stream=True)
        try:
            with client.stream("POST", url, json=body, headers=headers, timeout=timeout) as response:
                state["response"] = response
                if response.status_code >= 400:
                    response.read()
                    raise_for_status(adapter, model, response)
                pump.run(_frames(adapter, response))
        except _BENIGN_STREAM_END:
            pump.finish()
        except httpx.HTTPError as exc:
            if token.cancelled:
                raise CancelledError(token.reason or "operation cancelled") from exc
            raise _wrap_transport(adapter, model, exc) from exc

    def _on_abort() -> None:
        response = state.get("response")
        if response is not None:
            response.close()

    try:
        url = adapter.endpoint(request, model)
        headers = adapter.build_headers(request, model)
        body = adapter.build_body(request, model)
        normalized_log_event(
            adapter.logger,
            "stream.start",
            ctx,
            phase="start",
            attempt=None,
            emitted=None,
            tokens=None,
            has_tools=bool(request.functions),
            temperature=request.temperature,
            top_p=request.top_p,
        )
        adapter.logger.debug("request %s %s", url, json.dumps(body, ensure_ascii=False, default=str))
        token.raise_if_cancelled()
        won, _ = race_with_abort(_work, token, on_abort=_on_abort, name=f"{adapter.provider_name}-stream")
        if not won:
            raise CancelledError(token.reason or "operation cancelled")
    except CancelledError as exc:
        normalized_log_event(
            adapter.logger,
            "stream.cancelled",
            ctx,
            phase="finalize",
            attempt=None,
            emitted=pump.emitted,
            tokens=None,
            reason=str(exc),
        )
        return
    except ProviderError as exc:
        _log_error(adapter, "stream.error", ctx, exc, emitted=pump.emitted)
        raise
    finally:
        sink.on_done()

    normalized_log_event(
        adapter.logger,
        "stream.end",
        ctx,
        phase="finalize",
        attempt=None,
        emitted=pump.emitted,
        tokens=None,
        frames=pump.frames,
        total_duration_ms=(time.perf_counter() - t0) * 1000.0,
    )


__all__ = ["unary_call", "streaming_call", "raise_for_status"]
