"""Anthropic Claude provider adapter.

Purpose:
    Messages API over plain HTTP: ``POST {api_base}/messages`` with the
    ``anthropic-version`` and ``anthropic-beta`` (tool use) headers.

External dependencies:
    - ``httpx`` via the shared transport helpers; no SDK.

Failure modes:
    - ``MalformedInput`` for network-hosted images (before any request).
    - No ``x-api-key`` header is sent when no key is configured.
    - ``UpstreamError`` for ``error.type`` / ``error.message`` envelopes,
      in the body or as an in-band stream event.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..base.adapter import BaseVendorAdapter
from ..base.models import Model, NeutralOutput, SendData
from ..base.streaming import StreamSignal
from ..config.defaults import (
    CLAUDE_API_VERSION,
    CLAUDE_BETA_FEATURES,
    CLAUDE_DEFAULT_API_BASE,
    CLAUDE_MESSAGES_PATH,
    CLAUDE_MODELS,
    CLAUDE_TOKENS_COUNT_FACTORS,
)
from .helpers import build_messages_body, parse_error_envelope, parse_messages_response
from .stream_helpers import parse_event


class ClaudeAdapter(BaseVendorAdapter):
    type_name = "claude"
    tokens_count_factors = CLAUDE_TOKENS_COUNT_FACTORS
    builtin_models = CLAUDE_MODELS

    def endpoint(self, request: SendData, model: Model) -> str:
        base = (self.get_config_value("api_base") or CLAUDE_DEFAULT_API_BASE).rstrip("/")
        return f"{base}{CLAUDE_MESSAGES_PATH}"

    def build_headers(self, request: SendData, model: Model) -> Dict[str, str]:
        headers = {
            "anthropic-version": CLAUDE_API_VERSION,
            "anthropic-beta": CLAUDE_BETA_FEATURES,
        }
        api_key = self.get_config_value("api_key")
        if api_key:
            headers["x-api-key"] = api_key
        return headers

    def build_body(self, request: SendData, model: Model) -> Dict[str, Any]:
        return build_messages_body(request, model, provider=self.provider_name)

    def parse_unary(self, data: Mapping[str, Any], model: Model) -> NeutralOutput:
        return parse_messages_response(data, provider=self.provider_name, model=model)

    def parse_stream_frame(self, frame: Any, model: Model) -> List[StreamSignal]:
        return parse_event(frame)

    def parse_error_envelope(self, data: Any) -> Optional[Tuple[Optional[str], str]]:
        return parse_error_envelope(data)


__all__ = ["ClaudeAdapter"]
