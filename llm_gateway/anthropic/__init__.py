"""Anthropic Claude Messages API adapter."""

from .client import ClaudeAdapter

__all__ = ["ClaudeAdapter"]
