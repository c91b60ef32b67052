"""
Model descriptor.

A ``Model`` is an immutable value owned by the registry; sessions and
callers hold copies, never references back into the registry. Identity is
``"<provider>:<name>"``.

``tokens_count_factors`` is ``(per_message, bias)``: the budget check counts
every message's text, adds ``per_message`` tokens of framing overhead per
message and a fixed ``bias`` for the reply priming.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Sequence, Tuple

from ..capabilities import Capability, format_capabilities
from ..errors import InputTooLong
from ..tokens import TokenCounter
from .message import Message

DEFAULT_TOKENS_COUNT_FACTORS: Tuple[int, int] = (5, 2)


@dataclass(frozen=True)
class Model:
    """A model offered by one provider.

    Attributes:
        provider: Provider (client) name, e.g. ``"openai"`` or a configured
            alias such as ``"local-ollama"``.
        name: Vendor model name.
        capabilities: Declared capability set.
        max_input_tokens: Optional input ceiling enforced before sending.
        max_output_tokens: Optional reply ceiling (required by some vendors).
        tokens_count_factors: ``(per_message, bias)`` budget factors.
        extra_fields: Configured body fields merged into every request body
            for this model (e.g. vendor sampling options).
    """

    provider: str
    name: str
    capabilities: FrozenSet[Capability] = field(default_factory=lambda: frozenset({Capability.TEXT}))
    max_input_tokens: Optional[int] = None
    max_output_tokens: Optional[int] = None
    tokens_count_factors: Tuple[int, int] = DEFAULT_TOKENS_COUNT_FACTORS
    extra_fields: Optional[Mapping[str, Any]] = field(default=None, compare=False, hash=False)

    @property
    def id(self) -> str:
        return f"{self.provider}:{self.name}"

    def has_capabilities(self, required: Iterable[Capability]) -> bool:
        return set(required).issubset(self.capabilities)

    def merge_extra_fields(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Merge ``extra_fields`` into ``body`` in place; nested objects merge one level."""
        for key, value in (self.extra_fields or {}).items():
            current = body.get(key)
            if isinstance(current, dict) and isinstance(value, Mapping):
                body[key] = {**current, **value}
            else:
                body[key] = value
        return body

    def describe(self) -> str:
        limit = self.max_input_tokens if self.max_input_tokens is not None else "-"
        return f"{self.id} [{format_capabilities(self.capabilities)}] max_input={limit}"

    def total_tokens(self, messages: Sequence[Message], counter: TokenCounter) -> int:
        """Estimate the prompt size of ``messages`` under this model's factors."""
        if not messages:
            return 0
        per_message, bias = self.tokens_count_factors
        text_tokens = sum(counter.count(m.text_or_joined()) for m in messages)
        return text_tokens + per_message * len(messages) + bias

    def guard_max_input_tokens(self, messages: Sequence[Message], counter: TokenCounter) -> int:
        """Raise :class:`InputTooLong` when the budget is reached; return the total."""
        total = self.total_tokens(messages, counter)
        if self.max_input_tokens is not None and total >= self.max_input_tokens:
            raise InputTooLong(total, self.max_input_tokens, provider=self.provider, model=self.name)
        return total

    @staticmethod
    def find(models: Sequence["Model"], value: str) -> Optional["Model"]:
        """Return the first model matching ``provider:name`` or a bare name."""
        for model in models:
            if model.id == value or model.name == value:
                return model
        return None


__all__ = ["Model", "DEFAULT_TOKENS_COUNT_FACTORS"]
