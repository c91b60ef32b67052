"""Qianwen (Aliyun DashScope) helpers module.

Purpose:
- Pure translation between the neutral data model and the DashScope
  text-generation API.

Wire notes:
- Body shape: ``{model, input: {messages}, parameters: {...}, functions?}``.
- Function calls have no wire representation and are rendered as assistant
  text ``Function call: {name} with arguments: {args}``; function results
  are plain ``{role, content}`` messages.
- Streaming requires ``parameters.incremental_output`` so each event carries
  only the new text in ``output.text``.
- Errors are reported as top-level ``code`` + ``message`` (also inside
  stream events).

Failure modes:
- ``MalformedInput`` for image parts (text-generation models take text only).
- ``InvalidResponse`` when ``output.text`` is missing.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..base.errors import MalformedInput
from ..base.models import FunctionCall, Message, Model, NeutralOutput, PlainText, SendData


def render_message(message: Message) -> Dict[str, Any]:
    if isinstance(message, FunctionCall):
        return {
            "role": message.role,
            "content": f"Function call: {message.name} with arguments: {message.arguments_json()}",
        }
    return {"role": message.role, "content": message.text_or_joined()}


def build_generation_body(request: SendData, model: Model, *, provider: str) -> Dict[str, Any]:
    """Build the text-generation request body."""
    image_urls = [
        part.url or ""
        for m in request.messages
        if isinstance(m, PlainText)
        for part in m.image_parts()
    ]
    if image_urls:
        raise MalformedInput(
            f"The model does not support images: {image_urls}",
            provider=provider,
            model=model.name,
            urls=image_urls,
        )
    parameters: Dict[str, Any] = {}
    if request.temperature is not None:
        parameters["temperature"] = request.temperature
    if request.top_p is not None:
        parameters["top_p"] = request.top_p
    if request.stream:
        parameters["incremental_output"] = True
    body: Dict[str, Any] = {
        "model": model.name,
        "input": {"messages": [render_message(m) for m in request.messages]},
        "parameters": parameters,
    }
    if request.functions:
        body["functions"] = [f.to_dict() for f in request.functions]
    return model.merge_extra_fields(body)


def parse_error_envelope(data: Any) -> Optional[Tuple[Optional[str], str]]:
    """Top-level ``code`` and ``message``; the message reads ``"{code}: {message}"``."""
    if not isinstance(data, dict):
        return None
    code, message = data.get("code"), data.get("message")
    if isinstance(code, str) and code and isinstance(message, str):
        return code, f"{code}: {message}"
    return None


def output_text(data: Mapping[str, Any]) -> Optional[str]:
    output = data.get("output")
    if isinstance(output, dict) and isinstance(output.get("text"), str):
        return output["text"]
    return None


def parse_generation_response(data: Mapping[str, Any], *, provider: str, model: Model) -> NeutralOutput:
    usage = data.get("usage") or {}
    output = NeutralOutput(
        text=output_text(data) or "",
        response_id=data.get("request_id"),
        input_tokens=usage.get("input_tokens"),
        output_tokens=usage.get("output_tokens"),
    )
    return output.ensure_valid(provider=provider, model=model.name, raw=data)


__all__ = [
    "render_message",
    "build_generation_body",
    "parse_error_envelope",
    "output_text",
    "parse_generation_response",
]
