"""Anthropic (Claude) helpers module.

Purpose:
- Pure translation between the neutral data model and the Messages API.

Wire notes:
- System messages are not allowed inline; they are extracted and sent in the
  top-level ``system`` field.
- Only inline base64 images are accepted. Every ``image_url`` part whose URL
  does not have the ``data:<mime>;base64,<payload>`` form is collected and
  the request is rejected with ``MalformedInput`` before any network call.
- One ``FunctionResult`` becomes a pair of messages: an assistant
  ``tool_use`` block echoing the call and a user ``tool_result`` block. A
  ``FunctionCall`` already answered by a later result is therefore not
  rendered a second time.

Failure modes:
- ``MalformedInput`` for network images.
- ``InvalidResponse`` when a reply has neither text nor tool calls.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from ..base.errors import MalformedInput
from ..base.models import (
    ContentPart,
    FunctionCall,
    FunctionResult,
    Message,
    Model,
    NeutralOutput,
    PlainText,
    SendData,
    ToolCall,
    extract_system_message,
)
from ..config.defaults import CLAUDE_DEFAULT_MAX_TOKENS


def _render_part(part: ContentPart, network_urls: List[str]) -> Dict[str, Any]:
    if part.type == "text":
        return {"type": "text", "text": part.text or ""}
    inline = part.inline_image()
    if inline is None:
        network_urls.append(part.url or "")
        return {"url": part.url}
    mime_type, data = inline
    return {
        "type": "image",
        "source": {"type": "base64", "media_type": mime_type, "data": data},
    }


def _tool_use_block(call_id: Optional[str], name: str, arguments: Any) -> Dict[str, Any]:
    return {
        "type": "tool_use",
        "id": call_id,
        "name": name,
        "input": arguments if arguments is not None else {},
    }


def render_messages(messages: List[Message], network_urls: List[str]) -> List[Dict[str, Any]]:
    """Render the non-system conversation; collect network image URLs."""
    answered: Set[str] = {m.id for m in messages if isinstance(m, FunctionResult) and m.id}
    out: List[Dict[str, Any]] = []
    for message in messages:
        if isinstance(message, FunctionResult):
            out.append(
                {
                    "role": "assistant",
                    "content": [_tool_use_block(message.id, message.name, message.arguments)],
                }
            )
            out.append(
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "tool_result",
                            "tool_use_id": message.id,
                            "content": message.content,
                        }
                    ],
                }
            )
        elif isinstance(message, FunctionCall):
            if message.id and message.id in answered:
                continue
            out.append(
                {
                    "role": "assistant",
                    "content": [_tool_use_block(message.id, message.name, message.arguments)],
                }
            )
        elif isinstance(message.content, str):
            out.append({"role": message.role, "content": message.content})
        else:
            out.append(
                {
                    "role": message.role,
                    "content": [_render_part(p, network_urls) for p in message.content],
                }
            )
    return out


def build_messages_body(request: SendData, model: Model, *, provider: str) -> Dict[str, Any]:
    """Build the ``/v1/messages`` request body."""
    system, rest = extract_system_message(list(request.messages))
    network_urls: List[str] = []
    messages = render_messages(rest, network_urls)
    if network_urls:
        raise MalformedInput(
            f"The model does not support network images: {network_urls}",
            provider=provider,
            model=model.name,
            urls=network_urls,
        )
    body: Dict[str, Any] = {"model": model.name, "messages": messages}
    if system is not None:
        body["system"] = system
    body["max_tokens"] = model.max_output_tokens or CLAUDE_DEFAULT_MAX_TOKENS
    if request.temperature is not None:
        body["temperature"] = request.temperature
    if request.top_p is not None:
        body["top_p"] = request.top_p
    if request.stream:
        body["stream"] = True
    if request.functions:
        body["tools"] = [
            {"name": f.name, "description": f.description, "input_schema": f.parameters}
            for f in request.functions
        ]
    return model.merge_extra_fields(body)


def parse_messages_response(data: Mapping[str, Any], *, provider: str, model: Model) -> NeutralOutput:
    """Parse a non-streaming Messages API body."""
    content = data.get("content")
    blocks = content if isinstance(content, list) else []
    first = blocks[0] if blocks and isinstance(blocks[0], dict) else {}
    text = first.get("text") if isinstance(first.get("text"), str) else ""
    calls = [
        ToolCall(name=b["name"], arguments=b["input"], id=b["id"])
        for b in blocks
        if isinstance(b, dict)
        and b.get("type") == "tool_use"
        and isinstance(b.get("name"), str)
        and "input" in b
        and isinstance(b.get("id"), str)
    ]
    usage = data.get("usage") or {}
    output = NeutralOutput(
        text=text,
        tool_calls=tuple(calls),
        response_id=data.get("id"),
        input_tokens=usage.get("input_tokens"),
        output_tokens=usage.get("output_tokens"),
    )
    return output.ensure_valid(provider=provider, model=model.name, raw=data)


def parse_error_envelope(data: Any) -> Optional[Tuple[Optional[str], str]]:
    """``{"type": "error", "error": {"type": ..., "message": ...}}``."""
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error.get("type"), error["message"]
    return None


__all__ = [
    "render_messages",
    "build_messages_body",
    "parse_messages_response",
    "parse_error_envelope",
]
