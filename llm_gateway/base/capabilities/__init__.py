"""Capability flags public surface."""

from .core import Capability, format_capabilities, parse_capabilities

__all__ = ["Capability", "parse_capabilities", "format_capabilities"]
