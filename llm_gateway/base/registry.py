"""Provider registry.

Purpose
-------
Resolve configured clients to adapter instances, flatten their model
catalogues and apply capability-based model fallback.

Adapters are imported lazily with ``importlib`` from an explicit table keyed
by adapter type; every configured client is instantiated when the registry
is built, so an unknown type or a duplicate client name fails at startup
rather than per request.

Fallback semantics
------------------
``ensure_capabilities`` only ever substitutes a model of the *same*
provider, scanning its catalogue in declared order. It never crosses
providers and raises ``CapabilityUnavailable`` when no model qualifies.
"""

from __future__ import annotations

from importlib import import_module
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Type

import httpx

from ..config import ClientConfig
from .adapter import BaseVendorAdapter
from .capabilities import Capability, format_capabilities
from .errors import CapabilityUnavailable, UnknownModel, UnknownProvider
from .logging import LogContext, get_logger, normalized_log_event
from .models import Model


class ProviderRegistry:
    """Adapters and catalogue for an ordered list of configured clients."""

    # Adapter type -> import path and class name
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "llm_gateway.openai.client", "class": "OpenAIAdapter"},
        "claude": {"module": "llm_gateway.anthropic.client", "class": "ClaudeAdapter"},
        "openai-compatible": {
            "module": "llm_gateway.openai_compatible.client",
            "class": "OpenAICompatibleAdapter",
        },
        "ollama": {"module": "llm_gateway.ollama.client", "class": "OllamaAdapter"},
        "qianwen": {"module": "llm_gateway.qianwen.client", "class": "QianwenAdapter"},
    }

    def __init__(self, configs: Iterable[ClientConfig], *, client: Optional[httpx.Client] = None) -> None:
        self._logger = get_logger("registry")
        self._adapters: Dict[str, BaseVendorAdapter] = {}
        for config in configs:
            adapter = self.create_adapter(config, client=client)
            if adapter.provider_name in self._adapters:
                raise UnknownProvider(
                    adapter.provider_name,
                    "configured more than once; give each client a distinct name",
                )
            self._adapters[adapter.provider_name] = adapter

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        return tuple(cls._PROVIDERS.keys())

    @classmethod
    def adapter_class(cls, kind: str) -> Type[BaseVendorAdapter]:
        entry = cls._PROVIDERS.get((kind or "").lower().strip())
        if not entry:
            raise UnknownProvider(kind, f"supported types are {', '.join(cls.supported())}")
        try:
            module = import_module(entry["module"])
        except ImportError as exc:  # pragma: no cover - packaging failure
            raise UnknownProvider(kind, f"failed to import '{entry['module']}': {exc}") from exc
        try:
            return getattr(module, entry["class"])
        except AttributeError as exc:  # pragma: no cover - table typo
            raise UnknownProvider(kind, f"adapter class '{entry['class']}' not found") from exc

    @classmethod
    def create_adapter(cls, config: ClientConfig, *, client: Optional[httpx.Client] = None) -> BaseVendorAdapter:
        """Instantiate the adapter serving ``config`` (``UnknownProvider`` when unregistered)."""
        return cls.adapter_class(config.type)(config, client=client)

    @property
    def adapters(self) -> List[BaseVendorAdapter]:
        return list(self._adapters.values())

    def adapter_for(self, provider: str) -> BaseVendorAdapter:
        try:
            return self._adapters[provider]
        except KeyError:
            raise UnknownProvider(provider, "no client with this name is configured") from None

    def list_models(self) -> List[Model]:
        """All models, in provider declaration order then catalogue order."""
        models: List[Model] = []
        for adapter in self._adapters.values():
            models.extend(adapter.list_models())
        return models

    def resolve(self, model_id: str) -> Model:
        """Exact match on ``provider:name`` or bare name; first match wins."""
        model = Model.find(self.list_models(), model_id)
        if model is None:
            raise UnknownModel(model_id)
        return model

    def ensure_capabilities(self, model: Model, required: Iterable[Capability]) -> Model:
        """Return ``model`` or the first same-provider model offering ``required``."""
        needed = frozenset(required)
        if model.has_capabilities(needed):
            return model
        candidates: Sequence[Model] = self.adapter_for(model.provider).list_models()
        for candidate in candidates:
            if candidate.has_capabilities(needed):
                normalized_log_event(
                    self._logger,
                    "registry.fallback",
                    LogContext(provider=model.provider, model=model.name),
                    phase="resolve",
                    attempt=None,
                    emitted=None,
                    tokens=None,
                    required=format_capabilities(needed),
                    selected=candidate.id,
                )
                return candidate
        missing = sorted(c.value for c in needed - model.capabilities)
        raise CapabilityUnavailable(",".join(missing), provider=model.provider, model=model.name)


def list_models(configs: Iterable[ClientConfig]) -> List[Model]:
    """Flatten the catalogues of ``configs`` without keeping a registry."""
    return ProviderRegistry(configs).list_models()


__all__ = ["ProviderRegistry", "list_models"]
