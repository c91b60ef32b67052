"""OpenAI Chat Completions adapter."""

from .client import OpenAIAdapter

__all__ = ["OpenAIAdapter"]
