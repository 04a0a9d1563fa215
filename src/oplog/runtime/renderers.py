"""Renderers for the local sink, plugged into stdlib logging as Formatters.

LocalLogAdapter hands stdlib logging either a text message or the field
mapping itself as `record.msg`. These formatters render both shapes:

- ConsoleFormatter: human-readable colored lines for development
- JsonFormatter: JSON Lines (orjson) for log aggregation

Quick Start:
    >>> from oplog import configure_logging, get_logger
    >>>
    >>> configure_logging(format="console", level="DEBUG")
    >>> log = get_logger(__name__)
    >>> log.info({"user_id": 42, "action": "login"})
    # => 10:30:45.123 [info] app.auth user_id=42 action="login"
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, TextIO

from oplog.core import Severity
from oplog.foundation import codec

if TYPE_CHECKING:
    from oplog.foundation.config import OplogSettings


# ─────────────────────────────────────────────────────────────────────────────
# Formatters
# ─────────────────────────────────────────────────────────────────────────────


class ConsoleFormatter(logging.Formatter):
    """Human-readable colored console output.

    Format: timestamp [level] logger event key=value key2=value2

    Field-mapping records have no event; their fields become key=value pairs.
    Colors are auto-detected from the output stream, can be forced on/off.
    """

    def __init__(self, *, colors: bool = False, show_timestamp: bool = True) -> None:
        super().__init__()
        self.colors = colors
        self.show_timestamp = show_timestamp

    def format(self, record: logging.LogRecord) -> str:
        c = _COLORS if self.colors else _NO_COLORS
        level = _level_name(record.levelno)
        level_color = _LEVEL_COLORS.get(level, c["dim"]) if self.colors else ""

        parts: list[str] = []
        if self.show_timestamp:
            ts = datetime.fromtimestamp(record.created, tz=UTC).strftime("%H:%M:%S.%f")[:-3]
            parts.append(f"{c['dim']}{ts}{c['reset']}")
        parts.append(f"{level_color}[{level}]{c['reset']}")
        parts.append(f"{c['dim']}{record.name}{c['reset']}")

        if isinstance(record.msg, Mapping):
            for k, v in record.msg.items():
                parts.append(f"{c['cyan']}{k}{c['reset']}={_format_value(v, c)}")
        else:
            parts.append(f"{c['bold']}{record.getMessage()}{c['reset']}")

        line = " ".join(parts)
        if record.exc_info:
            line += f"\n{c['red']}{self.formatException(record.exc_info)}{c['reset']}"
        return line


class JsonFormatter(logging.Formatter):
    """JSON Lines output for log aggregation.

    Each record is a single JSON object on its own line. Field mappings are
    merged at the top level; text messages go under "event". The record
    metadata (timestamp, level, logger) wins over same-named fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, object] = {}
        if isinstance(record.msg, Mapping):
            data.update(record.msg)
        else:
            data["event"] = record.getMessage()
        data["timestamp"] = datetime.fromtimestamp(record.created, tz=UTC).isoformat()
        data["level"] = _level_name(record.levelno)
        data["logger"] = record.name
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return codec.dumps(data).decode()


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


_HANDLER_MARK = "_oplog_handler"


def configure_logging(
    format: str | None = None,  # noqa: A002 - shadows builtin but matches stdlib
    level: str | None = None,
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
    settings: OplogSettings | None = None,
) -> logging.Handler:
    """Configure the root stdlib logger for the local sink.

    Replaces a handler installed by a previous call, leaves others alone.
    Unset arguments come from `settings.local` (default: get_settings()).

    Args:
        format: Output format - "console" (human), "json" (machine), "none"
        level: Minimum level - TRACE, DEBUG, INFO, WARN, ERROR, FATAL
        output: Output stream (default: stderr for console, stdout for json)
        colors: Force colors on/off (None = auto-detect)
        settings: Settings supplying defaults for unset arguments

    Returns:
        The installed handler

    Example:
        >>> # Development (human-readable, colored)
        >>> configure_logging(format="console", level="TRACE")

        >>> # Production (JSON for aggregation)
        >>> configure_logging(format="json", level="INFO")
    """
    if settings is None:
        from oplog.foundation.config import get_settings
        settings = get_settings()
    fmt = (format or settings.local.format).lower()
    level_name = (level or settings.local.level).upper()
    colors = settings.local.colors if colors is None else colors

    handler: logging.Handler
    if fmt == "console":
        stream = output or sys.stderr
        use_colors = colors if colors is not None else (hasattr(stream, "isatty") and stream.isatty())
        handler = logging.StreamHandler(stream)
        handler.setFormatter(ConsoleFormatter(colors=use_colors))
    elif fmt == "json":
        handler = logging.StreamHandler(output or sys.stdout)
        handler.setFormatter(JsonFormatter())
    elif fmt == "none":
        handler = logging.NullHandler()
    else:
        raise ValueError(f"Unknown format: {fmt}. Use 'console', 'json', or 'none'")

    setattr(handler, _HANDLER_MARK, True)
    root = logging.getLogger()
    for existing in [h for h in root.handlers if getattr(h, _HANDLER_MARK, False)]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(_resolve_level(level_name))
    return handler


def _resolve_level(name: str) -> int:
    """Severity name ("WARN") or stdlib name ("WARNING") to a stdlib level."""
    sev = Severity.parse(name)
    if sev is not None:
        return sev.stdlib_level
    resolved = logging.getLevelName(name)
    if isinstance(resolved, int):
        return resolved
    raise ValueError(f"Unknown level: {name}")


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


_COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
    "white": "\033[37m",
}

_NO_COLORS = {k: "" for k in _COLORS}

_LEVEL_COLORS = {
    "trace": _COLORS["dim"],
    "debug": _COLORS["dim"],
    "info": _COLORS["green"],
    "warn": _COLORS["yellow"],
    "error": _COLORS["red"],
    "fatal": _COLORS["magenta"],
}


def _level_name(levelno: int) -> str:
    """Stdlib level number to lowercase Severity name."""
    return Severity.from_stdlib(levelno).name.lower()


def _format_value(v: object, c: dict[str, str]) -> str:
    """Format a value for console output."""
    if isinstance(v, str):
        return f'{c["yellow"]}"{v}"{c["reset"]}'
    if isinstance(v, bool):
        return f'{c["blue"]}{str(v).lower()}{c["reset"]}'
    if isinstance(v, (int, float)):
        return f'{c["blue"]}{v}{c["reset"]}'
    if isinstance(v, dict):
        return f'{c["dim"]}{{{len(v)} items}}{c["reset"]}'
    if isinstance(v, (list, tuple)):
        return f'{c["dim"]}[{len(v)} items]{c["reset"]}'
    return f'{c["white"]}{v!r}{c["reset"]}'
