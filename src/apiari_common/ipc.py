"""JSONL record streams with cursor-based polling.

A :class:`JsonlWriter` appends one JSON record per line; a
:class:`JsonlReader` tracks a byte offset into the same file so that each
:meth:`JsonlReader.poll` only returns records appended since the previous
call. Readers are cheap to resume: persist :attr:`JsonlReader.offset` and
hand it back to :meth:`JsonlReader.with_offset` after a restart.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter

from apiari_common.codec import encode_json
from apiari_common.errors import ReadError, WriteError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JsonlReader(Generic[T]):
    """Incremental reader over an append-only JSONL file.

    Only newline-terminated lines are consumed; a partially written last line
    stays in the file for the next poll. Lines that fail to decode into the
    record type are skipped, but the offset still moves past them so a single
    bad line never blocks the stream.

    The offset is not re-validated if the file shrinks: polls return nothing
    until the file grows past the stored offset again.
    """

    def __init__(
        self, path: str | os.PathLike[str], record_type: Any = Any, offset: int = 0
    ) -> None:
        self._path = Path(path)
        self._adapter: TypeAdapter[T] = TypeAdapter(record_type)
        self._offset = offset

    @classmethod
    def with_offset(
        cls, path: str | os.PathLike[str], offset: int, record_type: Any = Any
    ) -> JsonlReader[T]:
        """Resume reading at a byte offset previously taken from :attr:`offset`."""
        return cls(path, record_type, offset=offset)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def offset(self) -> int:
        return self._offset

    def set_offset(self, offset: int) -> None:
        self._offset = offset

    def skip_to_end(self) -> int:
        """Move the cursor to the current end of file (0 if it doesn't exist)."""
        try:
            self._offset = self._path.stat().st_size
        except FileNotFoundError:
            self._offset = 0
        except OSError as exc:
            raise ReadError(self._path, f"stat failed: {exc}") from exc
        return self._offset

    def poll(self) -> list[T]:
        """Return records appended since the last poll, in file order."""
        try:
            f = open(self._path, "rb")
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise ReadError(self._path, f"open failed: {exc}") from exc

        records: list[T] = []
        offset = self._offset
        with f:
            try:
                if os.fstat(f.fileno()).st_size <= offset:
                    return []
                f.seek(offset)
                for raw in f:
                    if not raw.endswith(b"\n"):
                        break  # incomplete line, still being written
                    offset += len(raw)
                    line = raw.strip()
                    if not line:
                        continue
                    try:
                        records.append(self._adapter.validate_json(line))
                    except Exception:  # any failure to build a record
                        logger.debug(
                            "Skipping malformed line ending at offset %d in %s",
                            offset,
                            self._path,
                        )
            except OSError as exc:
                raise ReadError(self._path, f"read failed: {exc}") from exc

        self._offset = offset
        return records


class JsonlWriter(Generic[T]):
    """Appends records to a JSONL file, one compact JSON value per line.

    Each :meth:`append` opens, writes and closes the file; parent directories
    are created on demand.
    """

    def __init__(self, path: str | os.PathLike[str], record_type: Any = Any) -> None:
        self._path = Path(path)
        self._adapter: TypeAdapter[T] = TypeAdapter(record_type)

    @property
    def path(self) -> Path:
        return self._path

    def append(self, record: T) -> None:
        data = encode_json(self._adapter, record, self._path) + b"\n"

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "ab") as f:
                f.write(data)
        except OSError as exc:
            raise WriteError(self._path, f"append failed: {exc}") from exc
