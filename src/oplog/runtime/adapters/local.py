"""Local sink: Python's standard logging module."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from oplog.core import Severity
from oplog.foundation.errors import STACK_TRACE_FIELD, Fields, format_message, format_stack_trace


@dataclass(slots=True)
class LocalLogAdapter:
    """Forward emissions to a stdlib logger named `name`.

    Enablement is the stdlib logger's own isEnabledFor(), so per-package
    levels set through logging configuration apply. Field mappings are
    passed as the record's msg object; renderers.JsonFormatter and
    ConsoleFormatter render them as structured output.

    Example:
        >>> adapter = LocalLogAdapter("billing.invoices")
        >>> adapter.log(Severity.INFO, "sent %d invoices", (12,))
        >>> adapter.log_fields(Severity.WARN, {"invoice": "A-17", "retry": 2})
    """

    name: str
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(self.name)

    @property
    def level(self) -> Severity:
        return Severity.from_stdlib(self._logger.getEffectiveLevel())

    def is_enabled(self, severity: Severity) -> bool:
        return self._logger.isEnabledFor(severity.stdlib_level)

    def log(
        self,
        severity: Severity,
        message: str,
        args: Sequence[object] = (),
        error: BaseException | None = None,
    ) -> None:
        if not self.is_enabled(severity):
            return
        text = format_message(message, args)
        self._logger.log(severity.stdlib_level, text, exc_info=_exc_info(error))

    def log_fields(self, severity: Severity, fields: Fields, error: BaseException | None = None) -> None:
        if not self.is_enabled(severity):
            return
        payload = dict(fields)
        if error is not None:
            payload[STACK_TRACE_FIELD] = format_stack_trace(error)
        self._logger.log(severity.stdlib_level, payload)

    def close(self) -> None:
        pass


def _exc_info(error: BaseException | None) -> tuple[type[BaseException], BaseException, object] | None:
    if error is None:
        return None
    return (type(error), error, error.__traceback__)
