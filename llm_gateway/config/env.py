"""llm_gateway.config.env
======================

Environment variable naming for per-client settings.

Convention
----------
``<NAME>_<FIELD>`` upper-cased, with dashes turned into underscores:
``OPENAI_API_KEY``, ``LOCAL_OLLAMA_API_BASE``, ``GROQ_PROXY``. ``NAME`` is the
configured client name (which defaults to the adapter type), so two clients
of the same type can carry different credentials.

Failure Modes
-------------
Helpers never raise for unset variables; they return ``None`` and callers
decide (the adapters raise ``MissingCredential`` at send time).
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional

# Fields that may be supplied through the environment.
ENV_FIELDS = (
    "api_key",
    "api_base",
    "organization_id",
    "proxy",
    "connect_timeout",
    "model",
    "chat_endpoint",
)


def env_prefix(name: str) -> str:
    """Return the upper-cased environment prefix for a client name."""
    return (name or "").strip().upper().replace("-", "_")


def env_var_name(name: str, field_name: str) -> str:
    """Return e.g. ``OPENAI_API_KEY`` for ``("openai", "api_key")``."""
    return f"{env_prefix(name)}_{field_name.upper()}"


def get_env_value(name: str, field_name: str) -> Optional[str]:
    """Read one setting for a client from the environment (empty is unset)."""
    val = os.environ.get(env_var_name(name, field_name))
    if val is None or not val.strip():
        return None
    return val.strip()


def env_overrides(name: str, fields: Iterable[str] = ENV_FIELDS) -> Dict[str, str]:
    """Collect every set ``<NAME>_<FIELD>`` variable for a client."""
    out: Dict[str, str] = {}
    for field_name in fields:
        val = get_env_value(name, field_name)
        if val is not None:
            out[field_name] = val
    return out


def is_placeholder(val: Optional[str]) -> bool:
    """Return True for obvious placeholder credentials (``changeme``, ``<...>``)."""
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or (v.startswith("<") and v.endswith(">"))


__all__ = [
    "ENV_FIELDS",
    "env_prefix",
    "env_var_name",
    "get_env_value",
    "env_overrides",
    "is_placeholder",
]
