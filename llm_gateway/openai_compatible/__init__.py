"""Adapter for OpenAI-compatible platforms."""

from .client import OpenAICompatibleAdapter, platform_api_base

__all__ = ["OpenAICompatibleAdapter", "platform_api_base"]
