"""Atomic JSON state persistence.

State files are written to a temp sibling and renamed into place, so the
target path always holds either the previous or the new content, never a
partial write.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Generic, TypeVar

from pydantic import TypeAdapter

from apiari_common.codec import encode_json
from apiari_common.errors import (
    CorruptStateError,
    MissingStateError,
    ReadError,
    WriteError,
)
from apiari_common.settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _default_state(
    path: Path, state_type: Any, default_factory: Callable[[], T] | None
) -> T:
    if default_factory is not None:
        return default_factory()
    if state_type is Any:
        return None  # type: ignore[return-value]
    try:
        return state_type()
    except Exception as exc:
        raise MissingStateError(
            path, f"state file missing and {state_type!r} has no default"
        ) from exc


def load_state(
    path: str | os.PathLike[str],
    state_type: Any,
    default_factory: Callable[[], T] | None = None,
) -> T:
    """Load a state value, or its default if the file does not exist.

    The default is ``default_factory()`` when given, ``None`` for ``Any``, else
    ``state_type()``. Raises :class:`MissingStateError` when that default cannot
    be built, :class:`CorruptStateError` when the file does not decode and
    :class:`ReadError` on any other I/O failure.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        return _default_state(path, state_type, default_factory)
    except OSError as exc:
        raise ReadError(path, f"read failed: {exc}") from exc

    try:
        return TypeAdapter(state_type).validate_json(data)
    except Exception as exc:
        raise CorruptStateError(path, f"cannot decode state: {exc}") from exc


def save_state(
    path: str | os.PathLike[str], state: T, state_type: Any = None
) -> None:
    """Serialize ``state`` as pretty-printed JSON and atomically replace ``path``."""
    path = Path(path)
    adapter = TypeAdapter(state_type if state_type is not None else type(state))
    data = encode_json(adapter, state, path, indent=2)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=settings.state_tmp_suffix
        )
    except OSError as exc:
        raise WriteError(path, f"cannot create temp file: {exc}") from exc

    tmp_path = Path(tmp_name)
    try:
        with open(tmp_fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise WriteError(path, f"write failed: {exc}") from exc
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise

    logger.debug("Saved state to %s (%d bytes)", path, len(data))


class StateFile(Generic[T]):
    """A state value of a fixed type bound to a fixed path."""

    def __init__(
        self,
        path: str | os.PathLike[str],
        state_type: Any,
        default_factory: Callable[[], T] | None = None,
    ) -> None:
        self._path = Path(path)
        self._state_type = state_type
        self._default_factory = default_factory

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> T:
        return load_state(self._path, self._state_type, self._default_factory)

    def save(self, state: T) -> None:
        save_state(self._path, state, self._state_type)
