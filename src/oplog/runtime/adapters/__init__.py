"""Pluggable log backends.

- LocalLogAdapter: stdlib logging (default)
- CloudLogAdapter: Google Cloud Logging, enabled with OPLOG_USE_REMOTE=true

New backends implement the LoggerAdapter protocol and are passed to
Logger(adapter=...) directly.
"""

from __future__ import annotations

from oplog.foundation.config import OplogSettings

from .base import LoggerAdapter
from .cloud import CloudLogAdapter
from .local import LocalLogAdapter


def create_adapter(name: str, settings: OplogSettings) -> LoggerAdapter:
    """Build the adapter selected by `settings.use_remote`."""
    if settings.use_remote:
        return CloudLogAdapter(name, settings)
    return LocalLogAdapter(name)


__all__ = ["CloudLogAdapter", "LocalLogAdapter", "LoggerAdapter", "create_adapter"]
