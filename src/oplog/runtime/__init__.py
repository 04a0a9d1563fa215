"""Runtime: logger facade, operation logs, backends and renderers."""

from .adapters import CloudLogAdapter, LocalLogAdapter, LoggerAdapter, create_adapter
from .logger import Logger, get_logger
from .operation import (
    OPERATION_NAME,
    OPERATION_STARTED,
    OPERATION_STATUS,
    OPERATION_TOOK,
    OperationLog,
    OperationStatus,
    current_operation,
    operation,
)
from .renderers import ConsoleFormatter, JsonFormatter, configure_logging

__all__ = [
    "OPERATION_NAME",
    "OPERATION_STARTED",
    "OPERATION_STATUS",
    "OPERATION_TOOK",
    "CloudLogAdapter",
    "ConsoleFormatter",
    "JsonFormatter",
    "LocalLogAdapter",
    "Logger",
    "LoggerAdapter",
    "OperationLog",
    "OperationStatus",
    "configure_logging",
    "create_adapter",
    "current_operation",
    "get_logger",
    "operation",
]
