"""Shared I/O helpers: JSONL record streams, atomic state files, shell text."""

from __future__ import annotations

from apiari_common.errors import (
    CorruptStateError,
    EncodeError,
    MissingStateError,
    PersistenceError,
    ReadError,
    WriteError,
)
from apiari_common.ipc import JsonlReader, JsonlWriter
from apiari_common.shell import sanitize, shell_quote
from apiari_common.state import StateFile, load_state, save_state

__all__ = [
    "CorruptStateError",
    "EncodeError",
    "JsonlReader",
    "JsonlWriter",
    "MissingStateError",
    "PersistenceError",
    "ReadError",
    "StateFile",
    "WriteError",
    "load_state",
    "sanitize",
    "save_state",
    "shell_quote",
]
