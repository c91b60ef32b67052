"""Shared base class for vendor adapters.

Purpose:
    Hold what every adapter needs besides its wire translation: the client
    configuration, credential lookup, the model catalogue, the HTTP client
    and frame decoding. Subclasses implement the translation methods of
    :class:`~llm_gateway.base.interfaces.VendorAdapter`; ``send_once`` and
    ``send_streaming`` delegate to :mod:`llm_gateway.base.transport`.

Credentials:
    ``get_config_value(field)`` returns the configured value, else the
    ``<NAME>_<FIELD>`` environment variable. Construction never fails for
    missing credentials; ``require_config_value`` raises
    :class:`MissingCredential` while a request is being built.

Stream framing:
    ``frame_format`` is ``"sse"`` or ``"ndjson"``. ``stream_sentinel`` is a
    literal data payload (``[DONE]``) that ends the stream without being
    parsed as JSON.
"""

from __future__ import annotations

import json
import logging
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Tuple

import httpx

from ..config import ClientConfig
from ..config.env import get_env_value
from .cancellation import CancellationToken
from .capabilities import parse_capabilities
from .errors import InvalidResponse, MissingCredential
from .http import get_httpx_client
from .logging import get_logger
from .models import DEFAULT_TOKENS_COUNT_FACTORS, Model, NeutralOutput, SendData
from .streaming import DONE, ReplySink, StreamSignal
from .transport import streaming_call, unary_call

# (name, max_input_tokens, max_output_tokens, capabilities)
CatalogueRow = Tuple[str, Optional[int], Optional[int], str]


class BaseVendorAdapter:
    """Configuration, catalogue and transport plumbing shared by adapters."""

    type_name: ClassVar[str] = ""
    frame_format: ClassVar[str] = "sse"
    stream_sentinel: ClassVar[Optional[str]] = None
    tokens_count_factors: ClassVar[Tuple[int, int]] = DEFAULT_TOKENS_COUNT_FACTORS
    builtin_models: ClassVar[Sequence[CatalogueRow]] = ()

    def __init__(
        self,
        config: ClientConfig,
        *,
        client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Bind the adapter to one configured client.

        Parameters:
            config: Validated client configuration.
            client: Optional ``httpx.Client`` (tests inject a mock transport);
                defaults to the shared pool keyed by proxy/connect timeout.
            logger: Optional logger; defaults to ``llm_gateway.providers.<type>``.
        """
        self.config = config
        self._client = client
        self.logger = logger or get_logger(f"providers.{config.type}")

    @property
    def provider_name(self) -> str:
        return self.config.client_name

    # ---- configuration ----
    def get_config_value(self, field_name: str) -> Optional[str]:
        value = getattr(self.config, field_name, None)
        if value:
            return str(value)
        return get_env_value(self.provider_name, field_name)

    def require_config_value(self, field_name: str, model: Optional[Model] = None) -> str:
        value = self.get_config_value(field_name)
        if not value:
            raise MissingCredential(
                field_name,
                provider=self.provider_name,
                model=model.name if model else None,
            )
        return value

    def proxy(self) -> Optional[str]:
        if self.config.extra.proxy is not None:
            return self.config.extra.proxy
        return get_env_value(self.provider_name, "proxy")

    def connect_timeout(self) -> Optional[float]:
        if self.config.extra.connect_timeout:
            return float(self.config.extra.connect_timeout)
        raw = get_env_value(self.provider_name, "connect_timeout")
        try:
            return float(raw) if raw else None
        except ValueError:
            return None

    def http_client(self) -> httpx.Client:
        if self._client is not None:
            return self._client
        return get_httpx_client(
            self.config.type,
            proxy=self.proxy(),
            connect_timeout=self.connect_timeout(),
        )

    # ---- catalogue ----
    def _model_from_row(
        self,
        name: str,
        max_input_tokens: Optional[int],
        max_output_tokens: Optional[int],
        capabilities: str,
        extra_fields: Optional[Mapping[str, Any]] = None,
    ) -> Model:
        return Model(
            provider=self.provider_name,
            name=name,
            capabilities=parse_capabilities(capabilities),
            max_input_tokens=max_input_tokens,
            max_output_tokens=max_output_tokens,
            tokens_count_factors=self.tokens_count_factors,
            extra_fields=extra_fields,
        )

    def list_models(self) -> List[Model]:
        """Declared models when configured, else the built-in catalogue."""
        if self.config.models:
            return [
                self._model_from_row(
                    m.name,
                    m.max_input_tokens,
                    m.max_output_tokens,
                    m.capabilities,
                    m.extra_fields,
                )
                for m in self.config.models
            ]
        return [self._model_from_row(*row) for row in self.builtin_models]

    # ---- streaming frames ----
    def decode_frame(self, data: str, model: Model) -> List[StreamSignal]:
        """Decode one raw frame payload and classify it."""
        if self.stream_sentinel is not None and data.strip() == self.stream_sentinel:
            return [DONE]
        try:
            frame = json.loads(data)
        except ValueError as exc:
            raise InvalidResponse(
                f"Invalid stream frame: {data}",
                provider=self.provider_name,
                model=model.name,
            ) from exc
        return self.parse_stream_frame(frame, model)

    # ---- translation (implemented per vendor) ----
    def endpoint(self, request: SendData, model: Model) -> str:
        raise NotImplementedError

    def build_headers(self, request: SendData, model: Model) -> Dict[str, str]:
        raise NotImplementedError

    def build_body(self, request: SendData, model: Model) -> Dict[str, Any]:
        raise NotImplementedError

    def parse_unary(self, data: Mapping[str, Any], model: Model) -> NeutralOutput:
        raise NotImplementedError

    def parse_stream_frame(self, frame: Any, model: Model) -> List[StreamSignal]:
        raise NotImplementedError

    def parse_error_envelope(self, data: Any) -> Optional[Tuple[Optional[str], str]]:
        return None

    # ---- calls ----
    def send_once(
        self,
        model: Model,
        request: SendData,
        token: Optional[CancellationToken] = None,
    ) -> NeutralOutput:
        return unary_call(self, model, request, token)

    def send_streaming(
        self,
        model: Model,
        request: SendData,
        sink: ReplySink,
        token: Optional[CancellationToken] = None,
    ) -> None:
        streaming_call(self, model, request, sink, token)


__all__ = ["BaseVendorAdapter", "CatalogueRow"]
