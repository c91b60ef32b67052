"""Model capability flags and parsing helpers.

Capabilities are declared per model (built-in catalogues or configuration)
as comma separated strings such as ``"text,vision"``. Parsing normalizes
aliases (``image`` -> ``vision``) and rejects unknown names so that a typo in
configuration cannot silently disable a fallback path.
"""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Iterable, Union


class Capability(str, Enum):
    """Declared feature of a model used for fallback selection."""

    TEXT = "text"
    VISION = "vision"


_ALIASES = {
    "text": Capability.TEXT,
    "chat": Capability.TEXT,
    "vision": Capability.VISION,
    "image": Capability.VISION,
    "images": Capability.VISION,
}


def parse_capabilities(value: Union[str, Iterable[str], None]) -> FrozenSet[Capability]:
    """Parse a capability declaration into a frozen set.

    ``None`` or an empty declaration means text-only. Raises ``ValueError``
    on unknown capability names.
    """
    if value is None:
        return frozenset({Capability.TEXT})
    items = value.split(",") if isinstance(value, str) else list(value)
    caps = set()
    for raw in items:
        key = str(raw.value if isinstance(raw, Capability) else raw).strip().lower()
        if not key:
            continue
        cap = _ALIASES.get(key)
        if cap is None:
            raise ValueError(f"unknown model capability '{raw}'")
        caps.add(cap)
    return frozenset(caps or {Capability.TEXT})


def format_capabilities(caps: Iterable[Capability]) -> str:
    order = [c for c in Capability if c in set(caps)]
    return ",".join(c.value for c in order)


__all__ = ["Capability", "parse_capabilities", "format_capabilities"]
