"""
Neutral chat message variants.

A conversation is an ordered sequence of three message shapes:

- :class:`PlainText` carries text (or structured parts) from any role.
- :class:`FunctionCall` records a model-requested tool invocation.
- :class:`FunctionResult` carries the stringified output of a tool run.

``id`` on the function variants is only populated for vendors that correlate
calls and results by identifier. All variants are immutable and expose
``to_dict`` producing the tagged serialization understood by
:func:`llm_gateway.base.dto.decode_message`.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from .content_part import ContentPart

# Message roles understood by the gateway.
Role = Literal["system", "user", "assistant", "function", "tool"]


@dataclass(frozen=True)
class PlainText:
    """Plain conversational content.

    Attributes:
        role: Author role.
        content: Raw text, or a tuple of :class:`ContentPart` items for
            multi-part (e.g. image) input.
    """

    role: Role
    content: Union[str, Tuple[ContentPart, ...]]

    def __post_init__(self) -> None:
        if isinstance(self.content, list):
            object.__setattr__(self, "content", tuple(self.content))

    kind = "plain_text"

    def is_structured(self) -> bool:
        return not isinstance(self.content, str)

    def image_parts(self) -> List[ContentPart]:
        if isinstance(self.content, str):
            return []
        return [p for p in self.content if p.type == "image_url"]

    def text_or_joined(self) -> str:
        """Return the text view of the content (image parts are skipped)."""
        if isinstance(self.content, str):
            return self.content
        return "\n".join(p.text for p in self.content if p.type == "text" and p.text)

    def to_dict(self) -> Dict[str, Any]:
        content: Any = self.content
        if not isinstance(content, str):
            content = [p.to_dict() for p in content]
        return {"kind": self.kind, "role": self.role, "content": content}


@dataclass(frozen=True)
class FunctionCall:
    """A tool invocation requested by the model.

    ``arguments`` is a JSON value (usually a mapping).
    """

    role: Role
    name: str
    arguments: Any
    id: Optional[str] = None

    kind = "function_call"

    def arguments_json(self) -> str:
        if isinstance(self.arguments, str):
            return self.arguments
        return json.dumps(self.arguments, ensure_ascii=False)

    def text_or_joined(self) -> str:
        return f"{self.name}({self.arguments_json()})"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "kind": self.kind,
            "role": self.role,
            "function_call": {"name": self.name, "arguments": self.arguments},
        }
        if self.id is not None:
            data["id"] = self.id
        return data


@dataclass(frozen=True)
class FunctionResult:
    """Stringified output of a tool run, addressed back to the model.

    ``arguments`` optionally repeats the originating call's arguments so
    vendors that need the call echoed next to its result can rebuild it.
    """

    role: Role
    name: str
    content: str
    id: Optional[str] = None
    arguments: Any = None

    kind = "function_result"

    def text_or_joined(self) -> str:
        return self.content

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "kind": self.kind,
            "role": self.role,
            "name": self.name,
            "content": self.content,
        }
        if self.id is not None:
            data["id"] = self.id
        if self.arguments is not None:
            data["arguments"] = self.arguments
        return data


Message = Union[PlainText, FunctionCall, FunctionResult]


def extract_system_message(messages: List[Message]) -> Tuple[Optional[str], List[Message]]:
    """Split leading-or-inline system messages out of a conversation.

    Returns the joined system text (``None`` when absent) and the remaining
    messages in their original order.
    """
    system_parts: List[str] = []
    rest: List[Message] = []
    for msg in messages:
        if isinstance(msg, PlainText) and msg.role == "system":
            system_parts.append(msg.text_or_joined())
        else:
            rest.append(msg)
    system = "\n\n".join(p for p in system_parts if p) if system_parts else None
    return system, rest


__all__ = [
    "Role",
    "PlainText",
    "FunctionCall",
    "FunctionResult",
    "Message",
    "extract_system_message",
]
