"""OpenAI helpers module.

Purpose:
- Pure translation between the neutral data model and the Chat Completions
  wire format, shared by the OpenAI adapter and every OpenAI-compatible
  platform.

External dependencies:
- None beyond the standard ``json`` module; no network I/O happens here.

Wire notes:
- System messages stay inline (``role: system``).
- A function result is one message carrying a ``tool_result`` content block;
  a function call is an assistant message with ``tool_calls``.
- ``tool_calls[].function.arguments`` is a JSON *string* on the wire in both
  directions.

Failure modes:
- ``parse_chat_response`` raises ``MalformedToolArguments`` for undecodable
  argument strings and ``InvalidResponse`` when neither text nor tool calls
  are present.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..base.errors import MalformedToolArguments
from ..base.models import (
    FunctionCall,
    FunctionDeclaration,
    FunctionResult,
    Message,
    Model,
    NeutralOutput,
    PlainText,
    SendData,
    ToolCall,
)


def render_message(message: Message) -> Dict[str, Any]:
    """Render one neutral message as a Chat Completions message."""
    if isinstance(message, FunctionResult):
        return {
            "role": message.role,
            "content": [
                {
                    "type": "tool_result",
                    "tool_use_id": message.id or "",
                    "content": message.content,
                }
            ],
        }
    if isinstance(message, FunctionCall):
        return {
            "role": "assistant",
            "content": None,
            "tool_calls": [
                {
                    "id": message.id or "",
                    "type": "function",
                    "function": {"name": message.name, "arguments": message.arguments_json()},
                }
            ],
        }
    content: Any = message.content
    if not isinstance(content, str):
        content = [part.to_dict() for part in content]
    return {"role": message.role, "content": content}


def render_tools(functions: Optional[Tuple[FunctionDeclaration, ...]]) -> Optional[List[Dict[str, Any]]]:
    if not functions:
        return None
    return [
        {
            "type": "function",
            "function": {
                "name": f.name,
                "description": f.description,
                "parameters": f.parameters,
            },
        }
        for f in functions
    ]


def build_chat_body(request: SendData, model: Model) -> Dict[str, Any]:
    """Build the ``/chat/completions`` request body."""
    body: Dict[str, Any] = {
        "model": model.name,
        "messages": [render_message(m) for m in request.messages],
    }
    tools = render_tools(request.functions)
    if tools:
        body["tools"] = tools
    if request.temperature is not None:
        body["temperature"] = request.temperature
    if request.top_p is not None:
        body["top_p"] = request.top_p
    if request.stream:
        body["stream"] = True
    return model.merge_extra_fields(body)


def decode_arguments(raw: Any, *, name: str, provider: str, model: Optional[str] = None) -> Any:
    """Decode a wire ``arguments`` value (JSON string or already-decoded)."""
    if not isinstance(raw, str):
        return raw if raw is not None else {}
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise MalformedToolArguments(name, provider=provider, model=model, detail=str(exc)) from exc


def parse_chat_response(data: Mapping[str, Any], *, provider: str, model: Model) -> NeutralOutput:
    """Parse a non-streaming Chat Completions body."""
    choices = data.get("choices") or []
    message = (choices[0].get("message") if choices and isinstance(choices[0], dict) else None) or {}
    calls: List[ToolCall] = []
    for raw_call in message.get("tool_calls") or []:
        fn = raw_call.get("function") or {}
        name = fn.get("name") or ""
        calls.append(
            ToolCall(
                name=name,
                arguments=decode_arguments(fn.get("arguments"), name=name, provider=provider, model=model.name),
                id=raw_call.get("id"),
            )
        )
    content = message.get("content")
    usage = data.get("usage") or {}
    output = NeutralOutput(
        text=content if isinstance(content, str) else "",
        tool_calls=tuple(calls),
        response_id=data.get("id"),
        input_tokens=usage.get("prompt_tokens"),
        output_tokens=usage.get("completion_tokens"),
    )
    return output.ensure_valid(provider=provider, model=model.name, raw=data)


def parse_error_envelope(data: Any) -> Optional[Tuple[Optional[str], str]]:
    """``error.message`` first, then a bare top-level ``message``."""
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        code = error.get("code") or error.get("type")
        return (str(code) if code is not None else None), error["message"]
    if isinstance(error, str) and error:
        return None, error
    if "choices" not in data and isinstance(data.get("message"), str):
        code = data.get("code")
        return (str(code) if code is not None else None), data["message"]
    return None


__all__ = [
    "render_message",
    "render_tools",
    "build_chat_body",
    "decode_arguments",
    "parse_chat_response",
    "parse_error_envelope",
]
