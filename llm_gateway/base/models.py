"""
Vendor-neutral data model public surface.

Re-exports the implementations under ``llm_gateway.base.models_parts``.
"""

from .models_parts.content_part import ContentPart, ContentPartType
from .models_parts.message import (
    FunctionCall,
    FunctionResult,
    Message,
    PlainText,
    Role,
    extract_system_message,
)
from .models_parts.tool_call import ToolCall, ToolCallResult, needs_sending
from .models_parts.model import DEFAULT_TOKENS_COUNT_FACTORS, Model
from .models_parts.send_data import FunctionDeclaration, SendData, build_messages
from .models_parts.neutral_output import NeutralOutput

NeutralRequest = SendData

__all__ = [
    "ContentPart",
    "ContentPartType",
    "Role",
    "PlainText",
    "FunctionCall",
    "FunctionResult",
    "Message",
    "extract_system_message",
    "ToolCall",
    "ToolCallResult",
    "needs_sending",
    "Model",
    "DEFAULT_TOKENS_COUNT_FACTORS",
    "FunctionDeclaration",
    "SendData",
    "NeutralRequest",
    "build_messages",
    "NeutralOutput",
]
