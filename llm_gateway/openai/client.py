"""OpenAI provider adapter.

Purpose:
    Chat Completions over plain HTTP: ``POST {api_base}/chat/completions``
    with bearer auth and the optional ``OpenAI-Organization`` header.

External dependencies:
    - ``httpx`` via the shared transport helpers; no SDK.

Failure modes:
    - ``MissingCredential`` at send time when no API key is configured
      (config value or ``<NAME>_API_KEY``).
    - Error envelopes (``error.message``) surface as ``UpstreamError``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..base.adapter import BaseVendorAdapter
from ..base.models import Model, NeutralOutput, SendData
from ..base.streaming import StreamSignal
from ..config.defaults import (
    OPENAI_CHAT_PATH,
    OPENAI_DEFAULT_API_BASE,
    OPENAI_MODELS,
    OPENAI_TOKENS_COUNT_FACTORS,
)
from .helpers import build_chat_body, parse_chat_response, parse_error_envelope
from .stream_helpers import parse_chunk


class OpenAIAdapter(BaseVendorAdapter):
    type_name = "openai"
    stream_sentinel = "[DONE]"
    tokens_count_factors = OPENAI_TOKENS_COUNT_FACTORS
    builtin_models = OPENAI_MODELS

    def api_base(self, model: Optional[Model] = None) -> str:
        return (self.get_config_value("api_base") or OPENAI_DEFAULT_API_BASE).rstrip("/")

    def endpoint(self, request: SendData, model: Model) -> str:
        return f"{self.api_base(model)}{OPENAI_CHAT_PATH}"

    def build_headers(self, request: SendData, model: Model) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self.require_config_value('api_key', model)}"}
        organization_id = self.get_config_value("organization_id")
        if organization_id:
            headers["OpenAI-Organization"] = organization_id
        return headers

    def build_body(self, request: SendData, model: Model) -> Dict[str, Any]:
        return build_chat_body(request, model)

    def parse_unary(self, data: Mapping[str, Any], model: Model) -> NeutralOutput:
        return parse_chat_response(data, provider=self.provider_name, model=model)

    def parse_stream_frame(self, frame: Any, model: Model) -> List[StreamSignal]:
        return parse_chunk(frame)

    def parse_error_envelope(self, data: Any) -> Optional[Tuple[Optional[str], str]]:
        return parse_error_envelope(data)


__all__ = ["OpenAIAdapter"]
