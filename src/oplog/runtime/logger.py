"""Logger facade: level-gated emission and operation logs over one backend.

Call sites never check levels themselves:

    >>> log = get_logger(__name__)
    >>> log.debug("loaded %d rows from %s", count, table)   # formatted only if DEBUG is on
    >>> log.info({"event": "cache_refresh", "entries": 120})  # structured record
    >>> log.error("upload failed for %s", key, error=exc)    # with stack trace

The backend is chosen once, at construction, from settings.use_remote:
stdlib logging (LocalLogAdapter) or Google Cloud Logging (CloudLogAdapter).
A Logger holds no per-call state and can be shared between threads; create
one per module and reuse it.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping

from oplog.core import Severity
from oplog.foundation.config import OplogSettings, get_settings
from oplog.foundation.errors import Fields

from .adapters import LoggerAdapter, create_adapter
from .operation import OperationLog


class Logger:
    """Facade delegating every emission to a single LoggerAdapter.

    Each level method accepts either a printf-style template with positional
    arguments, or a field mapping (no positional arguments). `error=` attaches
    an exception to either form.

    Args:
        name: Logger / log name, typically __name__
        settings: Settings (default: get_settings())
        adapter: Explicit backend, bypassing settings.use_remote
    """

    __slots__ = ("_name", "_settings", "_adapter")

    def __init__(
        self,
        name: str,
        settings: OplogSettings | None = None,
        *,
        adapter: LoggerAdapter | None = None,
    ) -> None:
        self._name = name
        self._settings = settings or get_settings()
        self._adapter = adapter if adapter is not None else create_adapter(name, self._settings)

    @property
    def name(self) -> str:
        return self._name

    @property
    def adapter(self) -> LoggerAdapter:
        return self._adapter

    @property
    def level(self) -> Severity:
        """Most verbose severity the backend currently emits."""
        return self._adapter.level

    def get_level(self) -> Severity:
        return self._adapter.level

    def is_enabled(self, severity: Severity) -> bool:
        return self._adapter.is_enabled(severity)

    # ─────────────────────────────────────────────────────────────────────
    # Emission
    # ─────────────────────────────────────────────────────────────────────

    def log(
        self,
        severity: Severity,
        message: str | Fields,
        *args: object,
        error: BaseException | None = None,
    ) -> None:
        if isinstance(message, Mapping):
            if args:
                raise TypeError("positional arguments cannot be combined with a field mapping")
            self._adapter.log_fields(severity, message, error)
        else:
            self._adapter.log(severity, message, args, error)

    def log_fields(self, severity: Severity, fields: Fields, error: BaseException | None = None) -> None:
        self._adapter.log_fields(severity, fields, error)

    def trace(self, message: str | Fields, *args: object, error: BaseException | None = None) -> None:
        self.log(Severity.TRACE, message, *args, error=error)

    def debug(self, message: str | Fields, *args: object, error: BaseException | None = None) -> None:
        self.log(Severity.DEBUG, message, *args, error=error)

    def info(self, message: str | Fields, *args: object, error: BaseException | None = None) -> None:
        self.log(Severity.INFO, message, *args, error=error)

    def warn(self, message: str | Fields, *args: object, error: BaseException | None = None) -> None:
        self.log(Severity.WARN, message, *args, error=error)

    def error(self, message: str | Fields, *args: object, error: BaseException | None = None) -> None:
        self.log(Severity.ERROR, message, *args, error=error)

    def fatal(self, message: str | Fields, *args: object, error: BaseException | None = None) -> None:
        self.log(Severity.FATAL, message, *args, error=error)

    # stdlib-style names
    warning = warn
    critical = fatal

    def exception(self, message: str | Fields, *args: object) -> None:
        """Log at ERROR with the exception currently being handled."""
        self.log(Severity.ERROR, message, *args, error=sys.exc_info()[1])

    # ─────────────────────────────────────────────────────────────────────
    # Operation logs
    # ─────────────────────────────────────────────────────────────────────

    def start_operation(
        self,
        name: str,
        context_id: str | None = None,
        exit_level: Severity = Severity.INFO,
    ) -> OperationLog:
        """Start an operation log bound to this logger and emit its TRACE start record.

        Args:
            name: Operation name (_operationName)
            context_id: Correlation id to continue; a fresh uuid4 otherwise
            exit_level: Default level for succeed()
        """
        op = OperationLog(name, self, exit_level, self._settings.context_field_name)
        return op.chain(context_id).log_start()

    def close(self) -> None:
        self._adapter.close()

    def __repr__(self) -> str:
        return f"Logger(name={self._name!r}, adapter={type(self._adapter).__name__})"


def get_logger(name: str, settings: OplogSettings | None = None) -> Logger:
    """Create a Logger, typically `get_logger(__name__)` at module level."""
    return Logger(name, settings)
