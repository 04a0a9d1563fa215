"""orjson encoding shared by the JSON renderer and the Cloud Logging sink."""

from __future__ import annotations

from typing import Any

import orjson

_OPTIONS = orjson.OPT_NON_STR_KEYS

# orjson range for integers; wider ones are rejected without consulting `default`
_INT_MIN = -(2**63)
_INT_MAX = 2**64 - 1


def dumps(obj: Any) -> bytes:
    """Serialize to JSON, stringifying anything orjson cannot encode natively."""
    try:
        return orjson.dumps(obj, default=str, option=_OPTIONS)
    except orjson.JSONEncodeError:
        return orjson.dumps(_narrow_ints(obj), default=str, option=_OPTIONS)


def _narrow_ints(obj: Any) -> Any:
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, int):
        return obj if _INT_MIN <= obj <= _INT_MAX else str(obj)
    if isinstance(obj, dict):
        return {k: _narrow_ints(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [_narrow_ints(v) for v in obj]
    return obj
