"""Validated client configuration.

Purpose
-------
One configured client (an adapter instance) is described by a
``ClientConfig``: which adapter ``type`` serves it, the ``name`` used as the
provider part of model ids, credentials and endpoint overrides, declared
models and transport extras.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation.

Failure modes
-------------
- ``pydantic.ValidationError`` for wrongly typed values (e.g. a non-numeric
  ``max_input_tokens``) and for unknown model capabilities. Missing
  credentials are not validation errors; they surface at send time.

Notes
-----
Flat ``proxy`` / ``connect_timeout`` keys (as produced by environment
overrides) are folded into ``extra``; a flat ``model`` key declares a single
model when no ``models`` list is present.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..base.capabilities.core import parse_capabilities


class ModelConfig(BaseModel):
    """A model declared in configuration."""

    name: str
    max_input_tokens: Optional[int] = None
    max_output_tokens: Optional[int] = None
    capabilities: str = "text"
    extra_fields: Optional[Dict[str, Any]] = None

    @field_validator("capabilities")
    @classmethod
    def _known_capabilities(cls, value: str) -> str:
        parse_capabilities(value)
        return value


class ClientExtra(BaseModel):
    """Transport settings shared by every adapter type."""

    proxy: Optional[str] = None
    connect_timeout: Optional[float] = None


class ClientConfig(BaseModel):
    """Configuration of one client.

    Attributes
    ----------
    type:
        Adapter kind (``openai``, ``openai-compatible``, ``claude``,
        ``qianwen``, ``ollama``).
    name:
        Provider name used in model ids and environment lookups; defaults
        to ``type``.
    """

    type: str
    name: Optional[str] = None
    api_key: Optional[str] = None
    api_base: Optional[str] = None
    organization_id: Optional[str] = None
    chat_endpoint: Optional[str] = None
    models: List[ModelConfig] = Field(default_factory=list)
    extra: ClientExtra = Field(default_factory=ClientExtra)

    @model_validator(mode="before")
    @classmethod
    def _fold_flat_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        extra = dict(data.get("extra") or {})
        for key in ("proxy", "connect_timeout"):
            if key in data:
                value = data.pop(key)
                extra.setdefault(key, value)
        data["extra"] = extra
        model = data.pop("model", None)
        if model and not data.get("models"):
            data["models"] = [{"name": model}]
        return data

    @model_validator(mode="after")
    def _default_name(self) -> "ClientConfig":
        if not self.name:
            self.name = self.type
        return self

    @property
    def client_name(self) -> str:
        return self.name or self.type


__all__ = ["ModelConfig", "ClientExtra", "ClientConfig"]
