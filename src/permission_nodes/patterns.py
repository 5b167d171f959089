"""Compiled delimiter and detection patterns for the node text encoding.

All patterns are module-level constants compiled once at import time and
are safe to share between threads.

The textual node encoding is::

    [server[-world]/][(key=value,...)]permission[$expiry]

Use :func:`compile` for patterns that come from callers (e.g. ``r=``
server queries); it returns ``None`` instead of raising on bad input.
"""
from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Delimiters
# ---------------------------------------------------------------------------

# server[-world] / node
SERVER_DELIMITER: re.Pattern[str] = re.compile(r"/")

# server - world
WORLD_DELIMITER: re.Pattern[str] = re.compile(r"-")

# node $ expiry
TEMP_DELIMITER: re.Pattern[str] = re.compile(r"\$")

# alternation groups: a|b|c
VERTICAL_BAR: re.Pattern[str] = re.compile(r"\|")

# shorthand segment splitter
DOT: re.Pattern[str] = re.compile(r"\.")

# ---------------------------------------------------------------------------
# Detectors
# ---------------------------------------------------------------------------

# Must be used with fullmatch().
GROUP_MATCH: re.Pattern[str] = re.compile(r"group\..*")

# Must be used with search(): a "(...)" block opening a dot-segment.
SHORTHAND_NODE: re.Pattern[str] = re.compile(r"(?:^|\.)\([^.]+\)")

# Must be used with fullmatch(): "(k=v,...)rest". The block needs at least
# one "=" so shorthand like "(a|b).c" is not mistaken for contexts.
NODE_CONTEXTS: re.Pattern[str] = re.compile(r"\([^)]*=[^)]*\).*")

# Characters a server name may not contain.
RESERVED_SERVER_CHARS: re.Pattern[str] = re.compile(r"[/\-$\s]")

# Signed 64-bit decimal literal.
EXPIRY_LITERAL: re.Pattern[str] = re.compile(r"[+-]?[0-9]+")


def split(pattern: re.Pattern[str], text: str, limit: int = 0) -> list[str]:
    """Split *text* on *pattern*.

    With ``limit == 0`` trailing empty fields are dropped, so ``"a|b|"``
    yields ``["a", "b"]``. A positive ``limit`` caps the number of fields
    and keeps trailing empties, so ``"server/"`` with ``limit=2`` yields
    ``["server", ""]``.
    """
    if limit > 0:
        return pattern.split(text, maxsplit=limit - 1)

    parts = pattern.split(text)
    if len(parts) == 1:
        return parts
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def compile(pattern: str) -> re.Pattern[str] | None:  # noqa: A001
    """Compile *pattern*, returning ``None`` if it is not a valid regex."""
    try:
        return re.compile(pattern)
    except re.error as exc:
        logger.debug("Ignoring invalid regex %r: %s", pattern, exc)
        return None
