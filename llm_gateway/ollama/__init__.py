"""Ollama chat adapter."""

from .client import OllamaAdapter

__all__ = ["OllamaAdapter"]
