"""llm_gateway package

Vendor-neutral chat completion gateway over OpenAI, OpenAI-compatible
platforms, Claude, Qianwen and Ollama.

Public API (re-exported):
    - Version: ``__version__``
    - Facade: :class:`Gateway`
    - Configuration: :func:`load_clients_config`, :class:`ClientConfig`
    - Data model: :class:`Message`, :class:`SendData`, :class:`Model`,
      :class:`NeutralOutput`, :class:`ToolCall`
    - Errors: :class:`ProviderError`, :class:`ErrorCode`
    - Streaming: :class:`ReplySink`, :class:`ReplyChannel`
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import ErrorCode, ProviderError
from .base.models import (
    FunctionDeclaration,
    Message,
    Model,
    NeutralOutput,
    SendData,
    ToolCall,
    ToolCallResult,
)
from .base.streaming import ReplyChannel, ReplySink
from .config import ClientConfig, get_provider_config, load_clients_config
from .gateway import Gateway

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Gateway",
    "ClientConfig",
    "load_clients_config",
    "get_provider_config",
    "CancellationToken",
    "CancelledError",
    "ErrorCode",
    "ProviderError",
    "Message",
    "SendData",
    "FunctionDeclaration",
    "Model",
    "NeutralOutput",
    "ToolCall",
    "ToolCallResult",
    "ReplySink",
    "ReplyChannel",
]
