"""
Vendor-agnostic interfaces for the gateway.

Re-exports the Protocols defined under ``llm_gateway.base.interfaces_parts``
so callers depend on one stable import path.
"""

from __future__ import annotations

from .interfaces_parts import VendorAdapter

__all__ = ["VendorAdapter"]
