"""Provider registry: adapter table, catalogue flattening, resolution and fallback."""
from __future__ import annotations

import logging

import pytest

from llm_gateway.anthropic import ClaudeAdapter
from llm_gateway.base.capabilities import Capability
from llm_gateway.base.errors import CapabilityUnavailable, UnknownModel, UnknownProvider
from llm_gateway.base.interfaces import VendorAdapter
from llm_gateway.base.logging import get_logger
from llm_gateway.base.registry import ProviderRegistry, list_models
from llm_gateway.config import ClientConfig
from llm_gateway.ollama import OllamaAdapter
from llm_gateway.openai import OpenAIAdapter
from llm_gateway.openai_compatible import OpenAICompatibleAdapter
from llm_gateway.qianwen import QianwenAdapter


def _configs():
    return [
        ClientConfig(type="openai"),
        ClientConfig.model_validate(
            {
                "type": "ollama",
                "name": "local",
                "models": [
                    {"name": "llama3", "max_input_tokens": 8192},
                    {"name": "llava", "capabilities": "text,vision"},
                ],
            }
        ),
        ClientConfig.model_validate({"type": "openai-compatible", "name": "groq", "models": [{"name": "llama3"}]}),
    ]


def test_adapter_table_maps_every_type():
    assert ProviderRegistry.supported() == ("openai", "claude", "openai-compatible", "ollama", "qianwen")
    assert ProviderRegistry.adapter_class("openai") is OpenAIAdapter
    assert ProviderRegistry.adapter_class("claude") is ClaudeAdapter
    assert ProviderRegistry.adapter_class("openai-compatible") is OpenAICompatibleAdapter
    assert ProviderRegistry.adapter_class("ollama") is OllamaAdapter
    assert ProviderRegistry.adapter_class("qianwen") is QianwenAdapter


def test_every_adapter_satisfies_the_protocol():
    registry = ProviderRegistry(_configs())
    assert all(isinstance(a, VendorAdapter) for a in registry.adapters)


def test_unknown_type_fails_at_construction():
    with pytest.raises(UnknownProvider):
        ProviderRegistry([ClientConfig(type="gemini")])


def test_duplicate_client_names_fail_at_construction():
    configs = [ClientConfig(type="openai"), ClientConfig(type="openai-compatible", name="openai")]
    with pytest.raises(UnknownProvider, match="configured more than once"):
        ProviderRegistry(configs)


def test_construction_does_not_need_credentials():
    registry = ProviderRegistry([ClientConfig(type="openai"), ClientConfig(type="qianwen")])
    assert [a.provider_name for a in registry.adapters] == ["openai", "qianwen"]


def test_list_models_follows_declaration_then_catalogue_order():
    ids = [m.id for m in list_models(_configs())]
    assert ids[:5] == [
        "openai:gpt-4-turbo-preview",
        "openai:gpt-4-vision-preview",
        "openai:gpt-4-1106-preview",
        "openai:gpt-3.5-turbo",
        "openai:gpt-3.5-turbo-1106",
    ]
    assert ids[5:] == ["local:llama3", "local:llava", "groq:llama3"]


def test_resolve_by_id_or_bare_name_first_match_wins():
    registry = ProviderRegistry(_configs())
    assert registry.resolve("groq:llama3").provider == "groq"
    assert registry.resolve("llama3").provider == "local"
    assert registry.resolve("local:llama3").max_input_tokens == 8192
    with pytest.raises(UnknownModel):
        registry.resolve("mystery")


def test_ensure_capabilities_keeps_capable_model():
    registry = ProviderRegistry(_configs())
    model = registry.resolve("gpt-4-vision-preview")
    assert registry.ensure_capabilities(model, {Capability.VISION}) is model


def test_ensure_capabilities_falls_back_within_provider():
    registry = ProviderRegistry(_configs())
    logger = get_logger("registry")
    records = []
    handler = logging.Handler()
    handler.emit = records.append  # type: ignore[assignment]
    logger.addHandler(handler)
    try:
        selected = registry.ensure_capabilities(registry.resolve("openai:gpt-3.5-turbo"), {Capability.VISION})
    finally:
        logger.removeHandler(handler)

    assert selected.id == "openai:gpt-4-vision-preview"
    assert any('"registry.fallback"' in r.getMessage() for r in records)


def test_ensure_capabilities_never_crosses_providers():
    registry = ProviderRegistry(_configs())
    with pytest.raises(CapabilityUnavailable) as ei:
        registry.ensure_capabilities(registry.resolve("groq:llama3"), {Capability.VISION})
    assert ei.value.capability == "vision"
    assert ei.value.provider == "groq"


def test_adapter_for_unknown_provider():
    with pytest.raises(UnknownProvider):
        ProviderRegistry(_configs()).adapter_for("claude")
