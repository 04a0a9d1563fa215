"""Backend adapter protocol.

An adapter turns emissions into a specific sink's wire format and decides
enablement. Every implementation must check `is_enabled` before formatting
a template or touching the sink.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from oplog.core import Severity
from oplog.foundation.errors import Fields


@runtime_checkable
class LoggerAdapter(Protocol):
    """Protocol for log backends.

    Implementations must be safe to call from multiple threads.
    """

    @property
    def level(self) -> Severity:
        """Most verbose severity currently emitted."""
        ...

    def is_enabled(self, severity: Severity) -> bool: ...

    def log(
        self,
        severity: Severity,
        message: str,
        args: Sequence[object] = (),
        error: BaseException | None = None,
    ) -> None:
        """Emit a printf-style message template with its arguments."""
        ...

    def log_fields(self, severity: Severity, fields: Fields, error: BaseException | None = None) -> None:
        """Emit a field mapping as one structured record."""
        ...

    def close(self) -> None:
        """Flush and release backend resources."""
        ...
