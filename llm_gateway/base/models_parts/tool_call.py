"""
Tool-call value types.

``ToolCall`` is what a model asks the caller to run; ``ToolCallResult`` pairs
a call with the output the caller produced. Both are plain immutable values.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Set, Tuple

from .message import FunctionCall, FunctionResult


@dataclass(frozen=True)
class ToolCall:
    """A model-requested invocation of a caller-supplied function.

    Attributes:
        name: Function name.
        arguments: Decoded JSON arguments.
        id: Vendor correlation id, when the vendor protocol provides one.
    """

    name: str
    arguments: Any
    id: Optional[str] = None

    def dedup_key(self) -> Tuple[str, ...]:
        if self.id is not None:
            return ("id", self.id)
        return ("call", self.name, json.dumps(self.arguments, sort_keys=True, default=str))

    @staticmethod
    def dedup(calls: Iterable["ToolCall"]) -> List["ToolCall"]:
        """Drop duplicate calls keeping the last occurrence of each.

        The key is ``id`` when present, otherwise name plus arguments.
        Survivors keep their original relative order.
        """
        seen: Set[Tuple[str, ...]] = set()
        kept: List[ToolCall] = []
        for call in reversed(list(calls)):
            key = call.dedup_key()
            if key in seen:
                continue
            seen.add(key)
            kept.append(call)
        kept.reverse()
        return kept

    def to_message(self) -> FunctionCall:
        return FunctionCall(role="assistant", name=self.name, arguments=self.arguments, id=self.id)


@dataclass(frozen=True)
class ToolCallResult:
    """Output produced by the caller for one :class:`ToolCall`.

    ``output`` is a JSON value; ``None`` means the tool produced nothing worth
    sending back.
    """

    call: ToolCall
    output: Any = None

    def output_text(self) -> str:
        if isinstance(self.output, str):
            return self.output
        return json.dumps(self.output, ensure_ascii=False)

    def to_message(self) -> FunctionResult:
        return FunctionResult(
            role="function",
            name=self.call.name,
            content=self.output_text(),
            id=self.call.id,
            arguments=self.call.arguments,
        )


def needs_sending(results: Iterable[ToolCallResult]) -> bool:
    """Return True when at least one result carries a non-null output."""
    return any(r.output is not None for r in results)


__all__ = ["ToolCall", "ToolCallResult", "needs_sending"]
