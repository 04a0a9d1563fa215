"""Core value types."""

from .severity import TRACE_LEVEL, Severity, compare, is_enabled_at

__all__ = ["TRACE_LEVEL", "Severity", "compare", "is_enabled_at"]
