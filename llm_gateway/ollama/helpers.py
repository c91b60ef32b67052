"""Ollama helpers module.

Purpose:
- Pure translation between the neutral data model and the Ollama ``/api/chat``
  endpoint.

Wire notes:
- Sampling parameters travel in ``options``.
- Function results are ``{role, type: function_return, name, content}`` and
  function calls ``{role, type: function_call, function_call: {name,
  arguments}}``.
- Inline base64 images go to the message ``images`` list; network images
  are rejected.
- The stream is newline-delimited JSON. Every frame must carry a boolean
  ``done``; ``done: true`` ends the stream.
- Streamed tool calls arrive whole inside ``message.tool_calls`` and are
  emitted as a start plus close pair per call.

Failure modes:
- ``MalformedInput`` for network images.
- ``InvalidResponse`` for frames without a boolean ``done`` and for replies
  without ``message.content``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from ..base.errors import InvalidResponse, MalformedInput
from ..base.models import (
    FunctionCall,
    FunctionResult,
    Message,
    Model,
    NeutralOutput,
    SendData,
    ToolCall,
)
from ..base.streaming import DONE, ErrorFrame, StreamSignal, TextDelta, ToolCallClosed, ToolCallDelta


def render_message(message: Message, network_urls: List[str]) -> Dict[str, Any]:
    if isinstance(message, FunctionResult):
        return {
            "role": message.role,
            "type": "function_return",
            "name": message.name,
            "content": message.content,
        }
    if isinstance(message, FunctionCall):
        return {
            "role": message.role,
            "type": "function_call",
            "function_call": {"name": message.name, "arguments": message.arguments},
        }
    if isinstance(message.content, str):
        return {"role": message.role, "content": message.content}
    images: List[str] = []
    for part in message.image_parts():
        inline = part.inline_image()
        if inline is None:
            network_urls.append(part.url or "")
        else:
            images.append(inline[1])
    rendered: Dict[str, Any] = {"role": message.role, "content": message.text_or_joined()}
    if images:
        rendered["images"] = images
    return rendered


def build_chat_body(request: SendData, model: Model, *, provider: str) -> Dict[str, Any]:
    network_urls: List[str] = []
    messages = [render_message(m, network_urls) for m in request.messages]
    if network_urls:
        raise MalformedInput(
            f"The model does not support network images: {network_urls}",
            provider=provider,
            model=model.name,
            urls=network_urls,
        )
    body: Dict[str, Any] = {"model": model.name, "messages": messages, "stream": request.stream}
    options: Dict[str, Any] = {}
    if request.temperature is not None:
        options["temperature"] = request.temperature
    if request.top_p is not None:
        options["top_p"] = request.top_p
    if options:
        body["options"] = options
    if request.functions:
        body["tools"] = [{"type": "function", "function": f.to_dict()} for f in request.functions]
    return model.merge_extra_fields(body)


def _tool_functions(message: Mapping[str, Any]) -> Iterator[Tuple[str, Any]]:
    """Yield (name, arguments) for each well-formed ``message.tool_calls`` entry."""
    for raw_call in message.get("tool_calls") or []:
        fn = raw_call.get("function") if isinstance(raw_call, dict) else None
        if isinstance(fn, dict) and isinstance(fn.get("name"), str):
            yield fn["name"], fn.get("arguments") or {}


def parse_chat_response(data: Mapping[str, Any], *, provider: str, model: Model) -> NeutralOutput:
    message = data.get("message")
    if not isinstance(message, dict) or not isinstance(message.get("content"), str):
        raise InvalidResponse(f"Invalid response data: {data}", provider=provider, model=model.name)
    calls = [ToolCall(name=name, arguments=arguments) for name, arguments in _tool_functions(message)]
    output = NeutralOutput(
        text=message["content"],
        tool_calls=tuple(calls),
        input_tokens=data.get("prompt_eval_count"),
        output_tokens=data.get("eval_count"),
    )
    return output.ensure_valid(provider=provider, model=model.name, raw=data)


def parse_stream_line(frame: Any, *, provider: str, model: Optional[str] = None) -> List[StreamSignal]:
    if isinstance(frame, dict) and isinstance(frame.get("error"), str):
        return [ErrorFrame(message=frame["error"])]
    if not isinstance(frame, dict) or not isinstance(frame.get("done"), bool):
        raise InvalidResponse(f"Invalid response data: {frame}", provider=provider, model=model)
    signals: List[StreamSignal] = []
    message = frame.get("message")
    if isinstance(message, dict) and isinstance(message.get("content"), str) and message["content"]:
        signals.append(TextDelta(message["content"]))
    if isinstance(message, dict):
        # Calls arrive whole; open and close each in place.
        for index, (name, arguments) in enumerate(_tool_functions(message)):
            fragment = arguments if isinstance(arguments, str) else json.dumps(arguments)
            signals.append(ToolCallDelta(key=index, name=name, fragment=fragment))
            signals.append(ToolCallClosed(key=index))
    if frame["done"]:
        signals.append(DONE)
    return signals


__all__ = ["render_message", "build_chat_body", "parse_chat_response", "parse_stream_line"]
