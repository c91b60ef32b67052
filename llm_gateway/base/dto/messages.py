"""Serialization boundary for neutral messages.

Purpose
-------
Conversation history arrives from callers (and leaves towards persistence
layers owned by callers) as plain JSON. This module validates those payloads
with pydantic and converts them into the immutable message variants of
:mod:`llm_gateway.base.models`.

Decoding rules
--------------
1. A payload carrying an explicit ``kind`` tag (``plain_text``,
   ``function_call``, ``function_result``) is validated as that variant via a
   discriminated union. This is the shape produced by ``Message.to_dict``.
2. Untagged payloads are decoded by ordered attempts, most specific first:
   a ``function_call`` object selects the function-call variant; a non-null
   ``name`` next to ``content`` selects the function-result variant; anything
   else is plain text. A payload is therefore only read as a function result
   when its shape requires the extra fields.

Failure modes
-------------
Validation errors surface as :class:`MalformedInput` carrying pydantic's
message.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, model_validator

from ..errors import MalformedInput
from ..models import (
    ContentPart,
    FunctionCall,
    FunctionDeclaration,
    FunctionResult,
    Message,
    PlainText,
)

RoleName = Literal["system", "user", "assistant", "function", "tool"]


class ImageUrlDTO(BaseModel):
    url: str


class ContentPartDTO(BaseModel):
    """One structured content part (``text`` or ``image_url``)."""

    type: Literal["text", "image_url"]
    text: Optional[str] = None
    image_url: Optional[ImageUrlDTO] = None

    @model_validator(mode="after")
    def _check_payload(self) -> "ContentPartDTO":
        if self.type == "text" and self.text is None:
            raise ValueError("text part requires 'text'")
        if self.type == "image_url" and self.image_url is None:
            raise ValueError("image_url part requires 'image_url.url'")
        return self

    def to_domain(self) -> ContentPart:
        if self.type == "text":
            return ContentPart.of_text(self.text or "")
        return ContentPart.of_image(self.image_url.url)  # type: ignore[union-attr]


class PlainTextDTO(BaseModel):
    kind: Literal["plain_text"] = "plain_text"
    role: RoleName
    content: Union[str, List[ContentPartDTO]]

    def to_domain(self) -> PlainText:
        if isinstance(self.content, str):
            return PlainText(role=self.role, content=self.content)
        return PlainText(role=self.role, content=tuple(p.to_domain() for p in self.content))


class FunctionCallBodyDTO(BaseModel):
    name: str
    arguments: Any = Field(default_factory=dict)


class FunctionCallDTO(BaseModel):
    kind: Literal["function_call"] = "function_call"
    role: RoleName = "assistant"
    id: Optional[str] = None
    function_call: FunctionCallBodyDTO

    def to_domain(self) -> FunctionCall:
        return FunctionCall(
            role=self.role,
            name=self.function_call.name,
            arguments=self.function_call.arguments,
            id=self.id,
        )


class FunctionResultDTO(BaseModel):
    kind: Literal["function_result"] = "function_result"
    role: RoleName = "function"
    id: Optional[str] = None
    name: str
    content: str
    arguments: Any = None

    def to_domain(self) -> FunctionResult:
        return FunctionResult(
            role=self.role,
            name=self.name,
            content=self.content,
            id=self.id,
            arguments=self.arguments,
        )


MessageDTO = Annotated[
    Union[PlainTextDTO, FunctionCallDTO, FunctionResultDTO],
    Field(discriminator="kind"),
]

_TAGGED = TypeAdapter(MessageDTO)


class FunctionDeclarationDTO(BaseModel):
    """JSON shape of a caller-supplied function declaration."""

    name: str
    description: str = ""
    parameters: Dict[str, Any] = Field(default_factory=lambda: {"type": "object", "properties": {}})

    def to_domain(self) -> FunctionDeclaration:
        return FunctionDeclaration(name=self.name, description=self.description, parameters=self.parameters)


def _select_untagged(payload: Mapping[str, Any]) -> type:
    if payload.get("function_call") is not None:
        return FunctionCallDTO
    if payload.get("name") is not None and "content" in payload:
        return FunctionResultDTO
    return PlainTextDTO


def decode_message(payload: Mapping[str, Any]) -> Message:
    """Decode one JSON message payload into a neutral message variant."""
    try:
        if "kind" in payload:
            return _TAGGED.validate_python(dict(payload)).to_domain()
        dto_cls = _select_untagged(payload)
        return dto_cls.model_validate(dict(payload)).to_domain()
    except ValidationError as exc:
        raise MalformedInput(f"Invalid message payload: {exc}", provider="gateway") from exc


def decode_messages(payloads: List[Mapping[str, Any]]) -> List[Message]:
    return [decode_message(p) for p in payloads]


def encode_messages(messages: List[Message]) -> List[Dict[str, Any]]:
    return [m.to_dict() for m in messages]


def decode_functions(payloads: List[Mapping[str, Any]]) -> List[FunctionDeclaration]:
    try:
        return [FunctionDeclarationDTO.model_validate(dict(p)).to_domain() for p in payloads]
    except ValidationError as exc:
        raise MalformedInput(f"Invalid function declaration: {exc}", provider="gateway") from exc


__all__ = [
    "ContentPartDTO",
    "PlainTextDTO",
    "FunctionCallDTO",
    "FunctionResultDTO",
    "FunctionDeclarationDTO",
    "MessageDTO",
    "decode_message",
    "decode_messages",
    "encode_messages",
    "decode_functions",
]
