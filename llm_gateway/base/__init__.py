"""
Gateway Base Package

Exports the vendor-neutral contracts shared by every adapter:
- Models: neutral messages, tool calls, requests, outputs and catalogue entries
- Errors: the stable error taxonomy
- Cancellation: caller-held abort tokens
- Registry: lazy creation of adapters by configured client type
"""

from .cancellation import CancellationToken, CancelledError
from .capabilities import Capability
from .errors import (
    CapabilityUnavailable,
    ErrorCode,
    InputTooLong,
    InvalidResponse,
    MalformedInput,
    MalformedToolArguments,
    MissingCredential,
    ProviderError,
    TransportError,
    UnknownModel,
    UnknownProvider,
    UpstreamError,
)
from .models import (
    FunctionCall,
    FunctionDeclaration,
    FunctionResult,
    Message,
    Model,
    NeutralOutput,
    PlainText,
    Role,
    SendData,
    ToolCall,
    ToolCallResult,
)
from .registry import ProviderRegistry
from .streaming import ReplyChannel, ReplyEvent, ReplySink

__all__ = [
    "CancellationToken",
    "CancelledError",
    "Capability",
    "ErrorCode",
    "ProviderError",
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
    "Role",
    "PlainText",
    "FunctionCall",
    "FunctionResult",
    "Message",
    "ToolCall",
    "ToolCallResult",
    "Model",
    "FunctionDeclaration",
    "SendData",
    "NeutralOutput",
    "ProviderRegistry",
    "ReplySink",
    "ReplyChannel",
    "ReplyEvent",
]
