"""Error types, error rendering and payload type aliases."""

from .errors import (
    MESSAGE_FIELD,
    STACK_TRACE_FIELD,
    LogFormatError,
    format_message,
    format_stack_trace,
)
from .types import Fields, JsonDict, JsonPrimitive, JsonValue

__all__ = [
    "MESSAGE_FIELD",
    "STACK_TRACE_FIELD",
    "Fields",
    "JsonDict",
    "JsonPrimitive",
    "JsonValue",
    "LogFormatError",
    "format_message",
    "format_stack_trace",
]
