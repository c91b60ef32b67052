"""Token counting public surface."""

from .counter import TiktokenCounter, TokenCounter

__all__ = ["TokenCounter", "TiktokenCounter"]
