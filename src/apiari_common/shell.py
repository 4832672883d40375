"""Shell quoting and sanitization helpers."""

from __future__ import annotations

import re

SANITIZE_MAX_LEN = 40

_NOT_ALNUM = re.compile(r"[^a-z0-9]")


def shell_quote(s: str) -> str:
    """Wrap ``s`` in single quotes for literal use in a shell command.

    Embedded single quotes use the ``'\\''`` idiom: close the quoted segment,
    emit an escaped quote, reopen.

    >>> shell_quote("it's")
    "'it'\\\\''s'"
    """
    return "'" + s.replace("'", "'\\''") + "'"


def sanitize(s: str) -> str:
    """Turn ``s`` into a branch/directory-safe token.

    Lowercases, maps every non-ASCII-alphanumeric character to ``-``, strips
    hyphens from both ends and truncates to 40 characters.
    """
    return _NOT_ALNUM.sub("-", s.lower()).strip("-")[:SANITIZE_MAX_LEN]
