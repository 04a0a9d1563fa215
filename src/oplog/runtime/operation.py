"""Operation logs: one structured record per unit of work.

An OperationLog accumulates fields while an operation runs and emits them
once, with elapsed time and status, when the operation ends. Each field
carries a severity; at emission only the fields at or above the logger's
current level are kept, so diagnostic detail can be attached freely and
shows up only when the application runs verbose.

Lifecycle:
    start_operation()  -> TRACE record, _operationStatus="started"
    add_field(...)     -> no I/O
    succeed() / warn() / fail() / fatal()
                       -> one record with _operationTook and final status,
                          then the operation is flushed; later terminal
                          calls do nothing

Example:
    >>> log = get_logger(__name__)
    >>> op = log.start_operation("import_orders", context_id=request_id)
    >>> op.add_field("file", path).add_field("raw_header", header, Severity.DEBUG)
    >>> try:
    ...     count = import_orders(path)
    ...     op.add_field("count", count).succeed()
    ... except OSError as e:
    ...     op.fail(e)

    Or as a context manager:
    >>> with log.start_operation("import_orders") as op:
    ...     op.add_field("count", import_orders(path))

OperationLog is not thread-safe. Use one instance per operation, from a
single call stack; concurrent add_field/terminal calls on the same instance
are undefined.
"""

from __future__ import annotations

import functools
import inspect
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar, Token
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ParamSpec, Self, TypeVar

from oplog.core import Severity
from oplog.foundation.config import DEFAULT_CONTEXT_FIELD
from oplog.foundation.errors import JsonDict

if TYPE_CHECKING:
    from types import TracebackType

    from .logger import Logger

P = ParamSpec("P")
T = TypeVar("T")

OPERATION_NAME = "_operationName"
OPERATION_STATUS = "_operationStatus"
OPERATION_TOOK = "_operationTook"
OPERATION_STARTED = "_operationStarted"

# Levels succeed() may emit at; anything else is clamped to INFO
_SUCCESS_LEVELS = frozenset({Severity.TRACE, Severity.DEBUG, Severity.INFO})

_current_operation: ContextVar[OperationLog | None] = ContextVar("current_operation", default=None)


class OperationStatus(StrEnum):
    """Value of the _operationStatus field."""

    STARTED = "started"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OperationLog:
    """Single-use structured record bracketing one operation.

    Created by Logger.start_operation(), which also performs the start
    emission. Fields are stored as name -> (severity, value); the last
    write per name wins. The reserved names (operation name, correlation
    id field, _operationTook, _operationStatus) cannot be overwritten by
    add_field: such writes are stored under "_" + name instead.
    """

    __slots__ = (
        "_name",
        "_logger",
        "_exit_level",
        "_context_field",
        "_fields",
        "_flushed",
        "_started_at",
        "_token",
    )

    def __init__(
        self,
        name: str,
        logger: Logger,
        exit_level: Severity = Severity.INFO,
        context_field: str = DEFAULT_CONTEXT_FIELD,
    ) -> None:
        self._name = name
        self._logger: Logger | None = logger
        self._exit_level = exit_level
        self._context_field = context_field
        self._flushed = False
        self._started_at = time.perf_counter()
        self._token: Token[OperationLog | None] | None = None
        self._fields: dict[str, tuple[Severity, Any]] = {
            OPERATION_NAME: (Severity.INFO, name),
            context_field: (Severity.INFO, str(uuid.uuid4())),
            OPERATION_STATUS: (Severity.INFO, OperationStatus.STARTED.value),
        }

    # ─────────────────────────────────────────────────────────────────────
    # Construction steps (driven by Logger.start_operation)
    # ─────────────────────────────────────────────────────────────────────

    def chain(self, context_id: str | None) -> Self:
        """Replace the generated correlation id with a caller-supplied one."""
        if context_id is not None:
            self._fields[self._context_field] = (Severity.INFO, context_id)
        return self

    def log_start(self) -> Self:
        """Emit the TRACE "started" record and start the clock."""
        if self._logger is not None:
            self._logger.trace(self.get_filtered_fields())
        self._started_at = time.perf_counter()
        self._fields[OPERATION_STARTED] = (Severity.INFO, datetime.now().astimezone().isoformat(timespec="milliseconds"))
        return self

    # ─────────────────────────────────────────────────────────────────────
    # Fields
    # ─────────────────────────────────────────────────────────────────────

    def add_field(self, name: str, value: Any, severity: Severity = Severity.INFO) -> Self:
        """Attach a field, shown only when the logger's level is at or below `severity`.

        After the operation ended the write is accepted but never emitted.
        """
        if name in (OPERATION_NAME, OPERATION_TOOK, OPERATION_STATUS, self._context_field):
            name = f"_{name}"
        self._fields[name] = (severity, value)
        return self

    def add_fields(self, fields: dict[str, Any], severity: Severity = Severity.INFO) -> Self:
        for name, value in fields.items():
            self.add_field(name, value, severity)
        return self

    def get_filtered_fields(self, verbose: bool = False) -> JsonDict:
        """Fields visible at the logger's current level, or all of them if `verbose`."""
        if self._logger is None:
            return {}
        if verbose:
            return {k: v for k, (_, v) in self._fields.items()}
        current = self._logger.level
        return {k: v for k, (sev, v) in self._fields.items() if sev >= current}

    # ─────────────────────────────────────────────────────────────────────
    # Terminal calls
    # ─────────────────────────────────────────────────────────────────────

    def succeed(self, level: Severity | None = None, *, verbose: bool = False) -> None:
        """End successfully at `level` (default: the exit level). Only TRACE/DEBUG/INFO; others become INFO."""
        if self._flushed or self._logger is None:
            return
        level = self._exit_level if level is None else level
        if level not in _SUCCESS_LEVELS:
            level = Severity.INFO
        self._finish(level, OperationStatus.SUCCEEDED, None, verbose)

    def warn(self, error: BaseException | None = None, *, verbose: bool = False) -> None:
        """End as failed, logged at WARN."""
        self._finish(Severity.WARN, OperationStatus.FAILED, error, verbose)

    def fail(self, error: BaseException | None = None, *, verbose: bool = False) -> None:
        """End as failed, logged at ERROR."""
        self._finish(Severity.ERROR, OperationStatus.FAILED, error, verbose)

    def fatal(self, error: BaseException | None = None, *, verbose: bool = False) -> None:
        """End as failed, logged at FATAL."""
        self._finish(Severity.FATAL, OperationStatus.FAILED, error, verbose)

    def _finish(self, level: Severity, status: OperationStatus, error: BaseException | None, verbose: bool) -> None:
        logger = self._logger
        if self._flushed or logger is None:
            return
        took_ms = int((time.perf_counter() - self._started_at) * 1000)
        self._fields[OPERATION_TOOK] = (Severity.INFO, took_ms)
        self._fields[OPERATION_STATUS] = (Severity.INFO, status.value)
        try:
            logger.log_fields(level, self.get_filtered_fields(verbose), error=error)
        finally:
            self._flush()

    def _flush(self) -> None:
        self._fields.clear()
        self._logger = None
        self._flushed = True

    # ─────────────────────────────────────────────────────────────────────
    # Accessors
    # ─────────────────────────────────────────────────────────────────────

    @property
    def name(self) -> str:
        return self._name

    @property
    def exit_level(self) -> Severity:
        return self._exit_level

    @property
    def context_id(self) -> str:
        """Correlation id; pass it to start_operation() of related operations. Empty once flushed."""
        entry = self._fields.get(self._context_field)
        return "" if entry is None else str(entry[1])

    @property
    def is_flushed(self) -> bool:
        return self._flushed

    def __repr__(self) -> str:
        state = "flushed" if self._flushed else "running"
        return f"OperationLog(name={self._name!r}, state={state})"

    # ─────────────────────────────────────────────────────────────────────
    # Context manager
    # ─────────────────────────────────────────────────────────────────────

    def __enter__(self) -> Self:
        self._token = _current_operation.set(self)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._token is not None:
            _current_operation.reset(self._token)
            self._token = None
        if exc_val is None:
            self.succeed()
        else:
            self.fail(exc_val)


def current_operation() -> OperationLog | None:
    """The operation opened by the innermost enclosing `with` block or @operation call."""
    return _current_operation.get()


def operation(
    logger: Logger,
    name: str | None = None,
    *,
    exit_level: Severity = Severity.INFO,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator running each call of the function inside an operation log.

    The operation is named after the function unless `name` is given.
    Use current_operation() inside the function to add fields.

    Example:
        >>> @operation(log)
        ... def sync_accounts(batch: list[str]) -> int:
        ...     current_operation().add_field("batch_size", len(batch))
        ...     return push(batch)
    """
    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        op_name = name or func.__name__

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            with logger.start_operation(op_name, exit_level=exit_level):
                return func(*args, **kwargs)

        @functools.wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            with logger.start_operation(op_name, exit_level=exit_level):
                return await func(*args, **kwargs)  # type: ignore[misc]

        return async_wrapper if inspect.iscoroutinefunction(func) else wrapper  # type: ignore[return-value]

    return decorator
