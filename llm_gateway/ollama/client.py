"""Ollama provider adapter.

Purpose:
    Chat against an Ollama daemon (or a compatible server):
    ``POST {api_base}{chat_endpoint}`` with ``chat_endpoint`` defaulting to
    ``/api/chat``. Models are the ones declared in configuration.

Authentication:
    None by default. When an API key is configured it is sent verbatim in
    the ``Authorization`` header (no scheme prefix).

Failure modes:
    - Error statuses carrying ``{"error": "..."}`` surface as ``UpstreamError``;
      other error bodies as ``TransportError("HTTP Error {status}: ...")``.
    - ``InvalidResponse`` for malformed NDJSON frames.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..base.adapter import BaseVendorAdapter
from ..base.models import Model, NeutralOutput, SendData
from ..base.streaming import StreamSignal
from ..config.defaults import (
    OLLAMA_DEFAULT_API_BASE,
    OLLAMA_DEFAULT_CHAT_ENDPOINT,
    OLLAMA_TOKENS_COUNT_FACTORS,
)
from .helpers import build_chat_body, parse_chat_response, parse_stream_line


class OllamaAdapter(BaseVendorAdapter):
    type_name = "ollama"
    frame_format = "ndjson"
    tokens_count_factors = OLLAMA_TOKENS_COUNT_FACTORS

    def endpoint(self, request: SendData, model: Model) -> str:
        base = (self.get_config_value("api_base") or OLLAMA_DEFAULT_API_BASE).rstrip("/")
        chat_endpoint = self.get_config_value("chat_endpoint") or OLLAMA_DEFAULT_CHAT_ENDPOINT
        return f"{base}{chat_endpoint}"

    def build_headers(self, request: SendData, model: Model) -> Dict[str, str]:
        api_key = self.get_config_value("api_key")
        return {"Authorization": api_key} if api_key else {}

    def build_body(self, request: SendData, model: Model) -> Dict[str, Any]:
        return build_chat_body(request, model, provider=self.provider_name)

    def parse_unary(self, data: Mapping[str, Any], model: Model) -> NeutralOutput:
        return parse_chat_response(data, provider=self.provider_name, model=model)

    def parse_stream_frame(self, frame: Any, model: Model) -> List[StreamSignal]:
        return parse_stream_line(frame, provider=self.provider_name, model=model.name)

    def parse_error_envelope(self, data: Any) -> Optional[Tuple[Optional[str], str]]:
        if isinstance(data, dict) and isinstance(data.get("error"), str):
            return None, data["error"]
        return None


__all__ = ["OllamaAdapter"]
