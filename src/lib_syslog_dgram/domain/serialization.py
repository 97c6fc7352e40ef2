"""Total, cycle-safe JSON serialisation for log record bodies.

Purpose
-------
Turn arbitrary record payloads into compact JSON without ever raising, so a
badly shaped ``extra`` field cannot take down the logging call site.

Contents
--------
* :data:`CIRCULAR` - sentinel written in place of repeated references.
* :data:`TOO_DEEP` - sentinel written for containers nested past :data:`MAX_DEPTH`.
* :func:`to_plain` - convert a value graph into JSON-compatible primitives.
* :func:`safe_dumps` - :func:`to_plain` followed by compact :func:`json.dumps`.

System Role
-----------
Called by the formatter for every message body. Any container or object seen
earlier in the same pass is replaced by :data:`CIRCULAR`, which both breaks
reference cycles and keeps shared sub-objects from being expanded twice.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any
from uuid import UUID

CIRCULAR = "[Circular]"
TOO_DEEP = "[Depth]"
MAX_DEPTH = 64

_SCALARS = (str, int, bool, type(None))


def to_plain(value: Any) -> Any:
    """Return a JSON-compatible copy of ``value``.

    Examples
    --------
    >>> record = {"msg": "hi"}
    >>> record["self"] = record
    >>> to_plain(record)
    {'msg': 'hi', 'self': '[Circular]'}
    >>> to_plain({"when": date(2024, 1, 2), "ratio": float("nan")})
    {'when': '2024-01-02', 'ratio': None}
    """

    return _convert(value, set(), 0)


def safe_dumps(value: Any) -> str:
    """Serialise ``value`` to compact JSON, replacing repeats with :data:`CIRCULAR`.

    Examples
    --------
    >>> items = [1, 2]
    >>> items.append(items)
    >>> safe_dumps({"items": items})
    '{"items":[1,2,"[Circular]"]}'
    """

    return json.dumps(to_plain(value), ensure_ascii=False, separators=(",", ":"))


def _convert(value: Any, seen: set[int], depth: int) -> Any:
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Enum):
        return _convert(value.value, seen, depth)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (Decimal, UUID, PurePath)):
        return str(value)

    if depth >= MAX_DEPTH:
        return TOO_DEEP
    marker = id(value)
    if marker in seen:
        return CIRCULAR
    seen.add(marker)

    if isinstance(value, Mapping):
        return {_key(key): _convert(item, seen, depth + 1) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_convert(item, seen, depth + 1) for item in value]
    attributes = _public_attributes(value)
    if attributes is not None:
        return {key: _convert(item, seen, depth + 1) for key, item in attributes.items()}
    return _fallback_repr(value)


def _key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, Enum):
        return str(key.value)
    return _fallback_str(key)


def _public_attributes(value: Any) -> dict[str, Any] | None:
    if callable(value):
        return None
    try:
        namespace = vars(value)
    except TypeError:
        return None
    return {key: item for key, item in namespace.items() if not key.startswith("_")}


def _fallback_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:  # noqa: BLE001
        return _fallback_repr(value)


def _fallback_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception:  # noqa: BLE001
        return f"<unrepresentable {type(value).__name__}>"


__all__ = ["CIRCULAR", "MAX_DEPTH", "TOO_DEEP", "safe_dumps", "to_plain"]
