"""Unified gateway error taxonomy public surface.

Re-exports the implementations under ``llm_gateway.base.errors_parts`` so
callers depend on a single stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_exception, code_for_status
from .errors_parts.taxonomy import (
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
