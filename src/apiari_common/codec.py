"""JSON encoding shared by the stream writer and the state store."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError

from apiari_common.errors import EncodeError


def _find_non_finite(value: Any) -> float | None:
    if isinstance(value, float):
        return None if math.isfinite(value) else value
    if isinstance(value, dict):
        items = list(value.keys()) + list(value.values())
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = list(value)
    else:
        return None
    for item in items:
        found = _find_non_finite(item)
        if found is not None:
            return found
    return None


def encode_json(
    adapter: TypeAdapter[Any], value: Any, path: Path, indent: int | None = None
) -> bytes:
    """Serialize ``value`` or raise :class:`EncodeError`.

    pydantic writes NaN and infinities as ``null``; those are rejected here
    instead of being silently rewritten.
    """
    try:
        data = adapter.dump_json(value, indent=indent)
    except PydanticSerializationError as exc:
        raise EncodeError(path, f"cannot encode value: {exc}") from exc

    bad = _find_non_finite(adapter.dump_python(value))
    if bad is not None:
        raise EncodeError(path, f"cannot encode non-finite float {bad!r}")
    return data
