"""
Vendor-neutral reply of a one-shot call.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..errors import InvalidResponse
from .message import Message, PlainText
from .tool_call import ToolCall


@dataclass(frozen=True)
class NeutralOutput:
    """Parsed unary response.

    At least one of ``text`` (non-empty) or ``tool_calls`` must be present;
    adapters call :meth:`ensure_valid` before returning.
    """

    text: str = ""
    tool_calls: Tuple[ToolCall, ...] = ()
    response_id: Optional[str] = None
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.tool_calls, tuple):
            object.__setattr__(self, "tool_calls", tuple(self.tool_calls))

    def is_valid(self) -> bool:
        return bool(self.text) or bool(self.tool_calls)

    def ensure_valid(self, *, provider: str, model: Optional[str] = None, raw: object = None) -> "NeutralOutput":
        if not self.is_valid():
            raise InvalidResponse(f"Invalid response data: {raw}", provider=provider, model=model)
        return self

    def to_messages(self) -> List[Message]:
        """Render the reply as conversation messages (tool calls first)."""
        out: List[Message] = [call.to_message() for call in self.tool_calls]
        if self.text:
            out.append(PlainText(role="assistant", content=self.text))
        return out


__all__ = ["NeutralOutput"]
