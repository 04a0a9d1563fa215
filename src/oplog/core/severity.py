"""Severity model shared by emission gating and per-field filtering.

A single total order is used everywhere: TRACE < DEBUG < INFO < WARN < ERROR < FATAL.
Lower values are more verbose. Backends map onto their own vocabularies via
`stdlib_level` (Python logging) and `cloud_severity` (Google Cloud Logging),
the latter with gaps since Cloud Logging has no TRACE and no FATAL.
"""

from __future__ import annotations

import logging
from enum import IntEnum

# Python logging has no TRACE; register one below DEBUG so local sinks can gate it
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")


class Severity(IntEnum):
    """Ordered log severity. Compare with <, >= etc. like any IntEnum."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5

    @classmethod
    def parse(cls, name: str | None) -> Severity | None:
        """Exact-name lookup ("WARN" matches, "warn" does not). None when unknown."""
        if not name:
            return None
        return cls.__members__.get(name)

    @classmethod
    def from_stdlib(cls, levelno: int) -> Severity:
        """Most verbose severity a stdlib logger set to `levelno` still emits."""
        for sev in cls:
            if sev.stdlib_level >= levelno:
                return sev
        return cls.FATAL

    @property
    def stdlib_level(self) -> int:
        return _STDLIB_LEVELS[self]

    @property
    def cloud_severity(self) -> str:
        """Cloud Logging LogSeverity name."""
        return _CLOUD_SEVERITIES[self]


_STDLIB_LEVELS: dict[Severity, int] = {
    Severity.TRACE: TRACE_LEVEL,
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.FATAL: logging.CRITICAL,
}

_CLOUD_SEVERITIES: dict[Severity, str] = {
    Severity.TRACE: "DEFAULT",
    Severity.DEBUG: "DEBUG",
    Severity.INFO: "INFO",
    Severity.WARN: "WARNING",
    Severity.ERROR: "ALERT",
    Severity.FATAL: "EMERGENCY",
}


def compare(a: Severity, b: Severity) -> int:
    """Three-way comparison: negative if `a` is more verbose than `b`, 0 if equal."""
    return int(a) - int(b)


def is_enabled_at(configured: Severity, candidate: Severity) -> bool:
    """Whether `candidate` is emitted when the threshold is `configured`."""
    return candidate >= configured
