"""oplog - structured logging facade with operation logs.

Level-gated, parameterized logging routed to a pluggable backend (stdlib
logging or Google Cloud Logging), plus operation logs: structured records
that bracket a unit of work and are emitted once, with elapsed time, status
and a correlation id.

Quick Start:
    >>> from oplog import Severity, configure_logging, get_logger
    >>>
    >>> configure_logging(format="json", level="INFO")
    >>> log = get_logger(__name__)
    >>>
    >>> log.info("worker %s ready", worker_id)
    >>> log.warn({"queue": "emails", "depth": 1200})

Operation logs:
    >>> op = log.start_operation("charge_card", context_id=request_id)
    >>> op.add_field("amount", 42.5).add_field("card_bin", "411111", Severity.DEBUG)
    >>> op.succeed()
    # => {"_operationName": "charge_card", "_contextId": "...", "amount": 42.5,
    #     "_operationStatus": "succeeded", "_operationTook": 38, ...}

Cloud Logging:
    OPLOG_USE_REMOTE=true
    OPLOG_REMOTE_SEVERITY_LEVEL=WARN
    OPLOG_REMOTE_CREDENTIALS_PATH=/secrets/sa.json
    OPLOG_REMOTE_PROJECT_ID=my-project
"""

from __future__ import annotations

__version__ = "1.0.0"

from .core import Severity, compare, is_enabled_at
from .foundation.config import OplogSettings, clear_settings_cache, get_settings
from .foundation.errors import LogFormatError
from .runtime import (
    CloudLogAdapter,
    LocalLogAdapter,
    Logger,
    LoggerAdapter,
    OperationLog,
    OperationStatus,
    configure_logging,
    create_adapter,
    current_operation,
    get_logger,
    operation,
)

__all__ = [
    "CloudLogAdapter",
    "LocalLogAdapter",
    "LogFormatError",
    "Logger",
    "LoggerAdapter",
    "OperationLog",
    "OperationStatus",
    "OplogSettings",
    "Severity",
    "clear_settings_cache",
    "compare",
    "configure_logging",
    "create_adapter",
    "current_operation",
    "get_logger",
    "get_settings",
    "is_enabled_at",
    "operation",
]
