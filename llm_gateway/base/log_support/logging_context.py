"""Per-call context merged into every structured log event."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Who is being called and how.

    ``response_id`` is filled in once the vendor reports one; ``stream`` is
    ``None`` for events outside a call (registry fallback).
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    stream: Optional[bool] = None
    response_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_call(cls, provider: str, model: str, *, stream: bool) -> "LogContext":
        return cls(provider=provider, model=model, stream=stream)

    def to_dict(self) -> Dict[str, Any]:
        out = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "extra"}
        out.update(self.extra)
        return {k: v for k, v in out.items() if v is not None}


__all__ = ["LogContext"]
