"""Qianwen provider adapter.

Purpose:
    DashScope text generation over plain HTTP with bearer auth. Streaming is
    enabled per request with the ``X-DashScope-SSE: enable`` header; the
    stream ends when the server closes the connection.

Failure modes:
    - ``MissingCredential`` at send time when no API key is configured.
    - ``UpstreamError`` for ``code``/``message`` envelopes (body or event).
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..base.adapter import BaseVendorAdapter
from ..base.models import Model, NeutralOutput, SendData
from ..base.streaming import IGNORE, ErrorFrame, Ignore, StreamSignal, TextDelta
from ..config.defaults import QIANWEN_API_URL, QIANWEN_MODELS, QIANWEN_TOKENS_COUNT_FACTORS
from .helpers import build_generation_body, output_text, parse_error_envelope, parse_generation_response


class QianwenAdapter(BaseVendorAdapter):
    type_name = "qianwen"
    tokens_count_factors = QIANWEN_TOKENS_COUNT_FACTORS
    builtin_models = QIANWEN_MODELS

    def endpoint(self, request: SendData, model: Model) -> str:
        return self.get_config_value("api_base") or QIANWEN_API_URL

    def build_headers(self, request: SendData, model: Model) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self.require_config_value('api_key', model)}"}
        if request.stream:
            headers["X-DashScope-SSE"] = "enable"
        return headers

    def build_body(self, request: SendData, model: Model) -> Dict[str, Any]:
        return build_generation_body(request, model, provider=self.provider_name)

    def parse_unary(self, data: Mapping[str, Any], model: Model) -> NeutralOutput:
        return parse_generation_response(data, provider=self.provider_name, model=model)

    def parse_stream_frame(self, frame: Any, model: Model) -> List[StreamSignal]:
        if not isinstance(frame, dict):
            return [Ignore("non-object frame")]
        envelope = parse_error_envelope(frame)
        if envelope is not None:
            code, message = envelope
            return [ErrorFrame(message=message, code=code)]
        text = output_text(frame)
        return [TextDelta(text)] if text else [IGNORE]

    def parse_error_envelope(self, data: Any) -> Optional[Tuple[Optional[str], str]]:
        return parse_error_envelope(data)


__all__ = ["QianwenAdapter"]
