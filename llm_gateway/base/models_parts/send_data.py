"""
Vendor-neutral request (``SendData``) and function declarations.

Built fresh for every call from conversation history, the new input and the
optional tool declarations; adapters translate it into their wire body and
never keep it afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..capabilities import Capability
from ..errors import MalformedInput
from .message import Message, PlainText


@dataclass(frozen=True)
class FunctionDeclaration:
    """A caller-supplied function the model may call.

    ``parameters`` is a JSON schema object.
    """

    name: str
    description: str = ""
    parameters: Dict[str, Any] = field(default_factory=lambda: {"type": "object", "properties": {}})

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "parameters": self.parameters}


@dataclass(frozen=True)
class SendData:
    """Neutral chat completion request.

    Attributes:
        messages: Ordered conversation.
        temperature: Optional sampling temperature.
        top_p: Optional nucleus sampling value.
        stream: Whether the caller wants incremental delivery.
        functions: Optional tool declarations.
    """

    messages: Tuple[Message, ...]
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    stream: bool = False
    functions: Optional[Tuple[FunctionDeclaration, ...]] = None

    def __post_init__(self) -> None:
        if not isinstance(self.messages, tuple):
            object.__setattr__(self, "messages", tuple(self.messages))
        if self.functions is not None and not isinstance(self.functions, tuple):
            object.__setattr__(self, "functions", tuple(self.functions))

    def with_stream(self, stream: bool) -> "SendData":
        return SendData(
            messages=self.messages,
            temperature=self.temperature,
            top_p=self.top_p,
            stream=stream,
            functions=self.functions,
        )

    def required_capabilities(self) -> frozenset:
        """Capabilities a model needs to accept this request."""
        caps = {Capability.TEXT}
        if any(isinstance(m, PlainText) and m.image_parts() for m in self.messages):
            caps.add(Capability.VISION)
        return frozenset(caps)


def build_messages(
    text: Optional[str],
    history: Optional[Sequence[Message]] = None,
    *,
    provider: str = "gateway",
) -> List[Message]:
    """Assemble the conversation: history first, then the new user text.

    Raises :class:`MalformedInput` when both are empty.
    """
    if not text and not history:
        raise MalformedInput("Both text and history are empty.", provider=provider)
    messages: List[Message] = list(history or [])
    if text:
        messages.append(PlainText(role="user", content=text))
    return messages


__all__ = ["FunctionDeclaration", "SendData", "build_messages"]
