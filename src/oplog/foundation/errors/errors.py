"""Error types and error rendering shared by the backend adapters.

Only one failure is ever surfaced from an emission call: a message template
that does not match its arguments. Everything else (delivery, credentials)
is absorbed by the adapters.
"""

from __future__ import annotations

import traceback
from collections.abc import Sequence

STACK_TRACE_FIELD = "_stackTrace"
MESSAGE_FIELD = "_message"


class LogFormatError(TypeError):
    """Message template and positional arguments do not match.

    The original TypeError/ValueError/KeyError is kept as __cause__.
    """

    def __init__(self, template: str, args: Sequence[object]) -> None:
        super().__init__(f"cannot format log message {template!r} with {len(args)} argument(s)")
        self.template = template
        self.args_given = tuple(args)


def format_message(template: str, args: Sequence[object]) -> str:
    """printf-style formatting; the template is returned verbatim without args."""
    if not args:
        return template
    # A single mapping argument enables %(name)s templates, as in stdlib logging
    values: object = args[0] if len(args) == 1 and isinstance(args[0], dict) else tuple(args)
    try:
        return template % values
    except (TypeError, ValueError, KeyError) as e:
        raise LogFormatError(template, args) from e


def format_stack_trace(error: BaseException) -> str:
    """Full traceback text for `error`, including chained causes."""
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))
