"""Pydantic DTOs for the JSON boundary of the gateway."""

from .messages import (
    ContentPartDTO,
    FunctionCallDTO,
    FunctionDeclarationDTO,
    FunctionResultDTO,
    MessageDTO,
    PlainTextDTO,
    decode_functions,
    decode_message,
    decode_messages,
    encode_messages,
)

__all__ = [
    "ContentPartDTO",
    "PlainTextDTO",
    "FunctionCallDTO",
    "FunctionResultDTO",
    "FunctionDeclarationDTO",
    "MessageDTO",
    "decode_message",
    "decode_messages",
    "encode_messages",
    "decode_functions",
]
