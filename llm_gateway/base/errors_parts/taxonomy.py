"""
Concrete gateway error types.

Each class fixes its :class:`ErrorCode` and adds the fields callers need to
react without parsing messages (offending URLs, missing field, HTTP status,
vendor error code, tool name, token counts).

Resolution-time errors (``UnknownModel``, ``UnknownProvider``,
``CapabilityUnavailable``) use ``provider="registry"`` when no single vendor
is involved.
"""
from __future__ import annotations

from typing import Iterable, Optional

from .classification import RETRYABLE_CODES, code_for_status
from .error_code import ErrorCode
from .provider_error import ProviderError


class MalformedInput(ProviderError):
    """Request content cannot be represented in the vendor wire format."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        model: Optional[str] = None,
        urls: Iterable[str] = (),
    ) -> None:
        super().__init__(code=ErrorCode.VALIDATION, message=message, provider=provider, model=model)
        self.urls = tuple(urls)


class MissingCredential(ProviderError):
    """A required configuration value (usually ``api_key``) is absent."""

    def __init__(self, field_name: str, *, provider: str, model: Optional[str] = None) -> None:
        env_name = f"{provider.upper().replace('-', '_')}_{field_name.upper()}"
        super().__init__(
            code=ErrorCode.CONFIGURATION,
            message=f"Miss {field_name} (set it in config or {env_name})",
            provider=provider,
            model=model,
        )
        self.field_name = field_name


class TransportError(ProviderError):
    """Network or HTTP layer failure; ``status`` is set for HTTP errors."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        model: Optional[str] = None,
        status: Optional[int] = None,
        code: Optional[ErrorCode] = None,
        raw: Optional[Exception] = None,
    ) -> None:
        resolved = code or code_for_status(status)
        super().__init__(
            code=resolved,
            message=message,
            provider=provider,
            model=model,
            retryable=resolved in RETRYABLE_CODES,
            raw=raw,
        )
        self.status = status


class UpstreamError(ProviderError):
    """The vendor reported an application-level error (in-band or via status)."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        model: Optional[str] = None,
        upstream_code: Optional[str] = None,
        status: Optional[int] = None,
    ) -> None:
        code = code_for_status(status) if status is not None else ErrorCode.UPSTREAM
        if code is ErrorCode.UNKNOWN:
            code = ErrorCode.UPSTREAM
        super().__init__(
            code=code,
            message=message,
            provider=provider,
            model=model,
            retryable=code in RETRYABLE_CODES,
        )
        self.upstream_code = upstream_code
        self.status = status


class InvalidResponse(ProviderError):
    """The vendor returned a body the parser cannot make sense of."""

    def __init__(self, message: str, *, provider: str, model: Optional[str] = None) -> None:
        super().__init__(code=ErrorCode.INVALID_RESPONSE, message=message, provider=provider, model=model)


class MalformedToolArguments(InvalidResponse):
    """Assembled tool-call arguments are not valid JSON."""

    def __init__(self, name: str, *, provider: str, model: Optional[str] = None, detail: str = "") -> None:
        message = f"Tool call '{name}' is invalid: arguments must be in valid JSON format"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, provider=provider, model=model)
        self.name = name


class UnknownModel(ProviderError):
    """No configured model matches the requested id."""

    def __init__(self, model_id: str) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message=f"Invalid model '{model_id}'",
            provider="registry",
            model=model_id,
        )
        self.model_id = model_id


class UnknownProvider(ProviderError):
    """A configured client names an adapter type that is not registered."""

    def __init__(self, provider: str, detail: str = "") -> None:
        message = f"Unknown provider '{provider}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(code=ErrorCode.CONFIGURATION, message=message, provider=provider)


class CapabilityUnavailable(ProviderError):
    """No model of the selected provider offers the required capability."""

    def __init__(self, capability: str, *, provider: str, model: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.UNSUPPORTED,
            message=f"No model of '{provider}' supports '{capability}'",
            provider=provider,
            model=model,
        )
        self.capability = capability


class InputTooLong(ProviderError):
    """Pre-flight token budget check failed."""

    def __init__(self, tokens: int, limit: int, *, provider: str, model: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION,
            message=f"Exceed max input tokens limit ({tokens} >= {limit})",
            provider=provider,
            model=model,
        )
        self.tokens = tokens
        self.limit = limit


__all__ = [
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
