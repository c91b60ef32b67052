"""Errors parts package.

Prefer importing from ``llm_gateway.base.errors`` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .classification import classify_exception, code_for_status
from .taxonomy import (
    CapabilityUnavailable,
    InputTooLong,
    InvalidResponse,
    MalformedInput,
    MalformedToolArguments,
    MissingCredential,
    TransportError,
    UnknownModel,
    UnknownProvider,
    UpstreamError,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "code_for_status",
    "MalformedInput",
    "MissingCredential",
    "TransportError",
    "UpstreamError",
    "InvalidResponse",
    "MalformedToolArguments",
    "UnknownModel",
    "UnknownProvider",
    "CapabilityUnavailable",
    "InputTooLong",
]
