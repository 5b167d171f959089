"""Argument checks for node scopes."""
from __future__ import annotations

from permission_nodes import patterns


def is_invalid_server(server: str) -> bool:
    """Return True if *server* cannot be used as a server scope name.

    A server name may not contain whitespace or any of the delimiters the
    text encoding reserves (``/``, ``-``, ``$``).
    """
    return bool(patterns.RESERVED_SERVER_CHARS.search(server))
