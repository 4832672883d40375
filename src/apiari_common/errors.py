"""Exceptions raised by the stream and state helpers."""

from __future__ import annotations

from pathlib import Path


class PersistenceError(Exception):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


class ReadError(PersistenceError):
    """Reading a stream or state file failed (not raised for missing files)."""


class WriteError(PersistenceError):
    """Creating directories, writing or renaming failed."""


class EncodeError(PersistenceError):
    """The value could not be serialized to JSON."""


class CorruptStateError(PersistenceError):
    """A state file exists but does not decode into the requested type."""


class MissingStateError(PersistenceError):
    """A state file is absent and its type has no default value."""
