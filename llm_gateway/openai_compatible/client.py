"""OpenAI-compatible platform adapter.

Purpose:
    Same wire as :mod:`llm_gateway.openai` against third-party platforms.
    The client name selects a platform from ``OPENAI_COMPATIBLE_PLATFORMS``
    (``groq``, ``deepseek``, ``openrouter``, ...) unless ``api_base`` is
    configured explicitly.

Credentials:
    ``api_key`` is optional (self-hosted servers often run without one);
    bearer auth is attached only when present. ``api_base`` is required:
    configured, from ``<NAME>_API_BASE``, or from the platform table.

Models:
    Only declared models exist; there is no built-in catalogue.
"""

from __future__ import annotations

from typing import Dict, Optional

from ..base.models import Model, SendData
from ..config.defaults import OPENAI_COMPATIBLE_PLATFORMS
from ..base.errors import MissingCredential
from ..openai.client import OpenAIAdapter


def platform_api_base(name: str) -> Optional[str]:
    return OPENAI_COMPATIBLE_PLATFORMS.get((name or "").lower())


class OpenAICompatibleAdapter(OpenAIAdapter):
    type_name = "openai-compatible"
    builtin_models = ()

    def api_base(self, model: Optional[Model] = None) -> str:
        base = self.get_config_value("api_base") or platform_api_base(self.provider_name)
        if not base:
            raise MissingCredential(
                "api_base",
                provider=self.provider_name,
                model=model.name if model else None,
            )
        return base.rstrip("/")

    def build_headers(self, request: SendData, model: Model) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        api_key = self.get_config_value("api_key")
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        organization_id = self.get_config_value("organization_id")
        if organization_id:
            headers["OpenAI-Organization"] = organization_id
        return headers


__all__ = ["OpenAICompatibleAdapter", "platform_api_base"]
