"""Outbound gateway facade.

Purpose:
    One object callers talk to: resolve a model id, apply capability
    fallback, enforce the input token budget and dispatch to the adapter
    serving the model, for one-shot or streaming calls.

Collaborators:
    - ``ProviderRegistry`` built from the configured clients (startup-time
      ``UnknownProvider``).
    - A ``TokenCounter`` supplied by the caller; without one the budget
      check is skipped.

Failure modes:
    ``UnknownModel``, ``CapabilityUnavailable`` and ``InputTooLong`` are
    raised before any network activity; adapter errors propagate unchanged.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Union

import httpx

from .base.cancellation import CancellationToken
from .base.capabilities import Capability
from .base.models import Model, NeutralOutput, SendData
from .base.registry import ProviderRegistry
from .base.streaming import ReplySink
from .base.tokens import TokenCounter
from .config import ClientConfig, load_clients_config

ModelRef = Union[str, Model]


class Gateway:
    """Vendor-neutral chat completion entry point."""

    def __init__(
        self,
        configs: Optional[Iterable[ClientConfig]] = None,
        *,
        token_counter: Optional[TokenCounter] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Build the registry for ``configs`` (default: :func:`load_clients_config`).

        Parameters:
            configs: Ordered client configurations.
            token_counter: Counter used for the max-input-tokens check.
            client: Optional ``httpx.Client`` shared by every adapter.
        """
        self.registry = ProviderRegistry(
            configs if configs is not None else load_clients_config(),
            client=client,
        )
        self.token_counter = token_counter

    def list_models(self) -> List[Model]:
        return self.registry.list_models()

    def resolve(self, model_id: str) -> Model:
        return self.registry.resolve(model_id)

    def ensure_capabilities(self, model: ModelRef, required: Iterable[Capability]) -> Model:
        return self.registry.ensure_capabilities(self._model(model), required)

    def _model(self, model: ModelRef) -> Model:
        return self.registry.resolve(model) if isinstance(model, str) else model

    def prepare(self, model: ModelRef, request: SendData) -> Model:
        """Resolve, apply capability fallback and check the token budget."""
        selected = self.ensure_capabilities(model, request.required_capabilities())
        if self.token_counter is not None:
            selected.guard_max_input_tokens(request.messages, self.token_counter)
        return selected

    def send_once(
        self,
        model: ModelRef,
        request: SendData,
        token: Optional[CancellationToken] = None,
    ) -> NeutralOutput:
        selected = self.prepare(model, request)
        return self.registry.adapter_for(selected.provider).send_once(selected, request, token)

    def send_streaming(
        self,
        model: ModelRef,
        request: SendData,
        sink: ReplySink,
        token: Optional[CancellationToken] = None,
    ) -> None:
        """Stream a reply into ``sink``; returns when the stream ends or is aborted."""
        selected = self.prepare(model, request)
        self.registry.adapter_for(selected.provider).send_streaming(selected, request, sink, token)


__all__ = ["Gateway", "ModelRef"]
