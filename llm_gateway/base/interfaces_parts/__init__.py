"""Interfaces (Protocols) split into single-class modules."""

from .vendor_adapter import VendorAdapter

__all__ = ["VendorAdapter"]
