"""Mutable builder and text decoder for permission nodes.

:class:`NodeBuilder` collects node fields, validates them as they are
set, and produces an immutable :class:`~permission_nodes.nodes.node.Node`
from :meth:`NodeBuilder.build`. A builder is single-owner and is meant to
be discarded after one ``build()`` call.

:func:`builder_from_serialized_node` reverses
:meth:`Node.to_serialized_node`::

    [server[-world]/][(key=value,...)]permission[$expiry]

Example
-------
::

    node = (
        NodeBuilder("essentials.fly")
        .set_server("survival")
        .set_world("nether")
        .with_extra_context("region", "spawn")
        .build()
    )
    decoded = from_serialized_node(node.to_serialized_node())
    assert decoded == node
"""
from __future__ import annotations

import logging

from permission_nodes import patterns
from permission_nodes.nodes.errors import InvalidNodeArgumentError, NodeParseError
from permission_nodes.nodes.node import Node
from permission_nodes.nodes.validation import is_invalid_server

logger = logging.getLogger(__name__)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class NodeBuilder:
    """Accumulates node fields before building an immutable :class:`Node`.

    Parameters
    ----------
    permission:
        The permission string. When *convert_contexts* is set and the
        string starts with a ``(key=value,...)`` block, the block is
        parsed into extra contexts and the rest becomes the permission.
    convert_contexts:
        Whether to parse a leading context block. Default ``False``.
    """

    def __init__(self, permission: str, convert_contexts: bool = False) -> None:
        self._value: bool = True
        self._server: str | None = None
        self._world: str | None = None
        self._expire_at: int = 0
        self._extra_contexts: dict[str, str] = {}

        if convert_contexts and patterns.NODE_CONTEXTS.fullmatch(permission):
            block, self._permission = permission[1:].split(")", 1)
            self._parse_contexts(block)
        else:
            self._permission = permission

    def _parse_contexts(self, block: str) -> None:
        for pair in block.split(","):
            if "=" not in pair:
                logger.debug("Skipping malformed context pair %r", pair)
                continue
            key, value = pair.split("=", 1)
            self._extra_contexts[key] = value

    @property
    def permission(self) -> str:
        return self._permission

    @property
    def extra_contexts(self) -> dict[str, str]:
        return dict(self._extra_contexts)

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_negated(self, negated: bool) -> NodeBuilder:
        self._value = not negated
        return self

    def set_value(self, value: bool) -> NodeBuilder:
        self._value = value
        return self

    def set_expiry(self, expire_at: int) -> NodeBuilder:
        self._expire_at = expire_at
        return self

    def set_world(self, world: str | None) -> NodeBuilder:
        self._world = world
        return self

    def set_server(self, server: str | None) -> NodeBuilder:
        """Set the server scope.

        Raises
        ------
        InvalidNodeArgumentError
            If *server* contains whitespace or a reserved delimiter.
        """
        if server is not None and is_invalid_server(server):
            raise InvalidNodeArgumentError(f"Server name invalid: {server!r}")
        self._server = server
        return self

    def set_server_raw(self, server: str | None) -> NodeBuilder:
        """Set the server scope without validating it."""
        self._server = server
        return self

    def with_extra_context(self, key: str, value: str) -> NodeBuilder:
        if key is None:
            raise InvalidNodeArgumentError("Context key must not be None")
        if value is None:
            raise InvalidNodeArgumentError("Context value must not be None")
        self._extra_contexts[key] = value
        return self

    def build(self) -> Node:
        return Node(
            permission=self._permission,
            value=self._value,
            expire_at=self._expire_at,
            server=self._server,
            world=self._world,
            extra_contexts=self._extra_contexts,
        )


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _parse_expiry(text: str) -> int:
    if not patterns.EXPIRY_LITERAL.fullmatch(text):
        raise NodeParseError("Invalid expiry", text)
    expire_at = int(text)
    if not _INT64_MIN <= expire_at <= _INT64_MAX:
        raise NodeParseError("Expiry out of range", text)
    return expire_at


def _node_part(rest: str) -> tuple[str, int | None]:
    """Split ``node[$expiry]`` into the node text and the parsed expiry."""
    if "$" in rest:
        node_text, expiry_text = patterns.split(patterns.TEMP_DELIMITER, rest, 2)
        return node_text, _parse_expiry(expiry_text)
    return rest, None


def builder_from_serialized_node(text: str, value: bool = True) -> NodeBuilder:
    """Decode *text* into a :class:`NodeBuilder`.

    Parameters
    ----------
    text:
        Serialized node, e.g. ``"survival-nether/essentials.fly$1999999999"``.
    value:
        The grant/negate value to give the node.

    Returns
    -------
    NodeBuilder

    Raises
    ------
    NodeParseError
        If the expiry segment is not a valid integer.
    """
    server: str | None = None
    world: str | None = None

    if "/" in text:
        scope, rest = patterns.split(patterns.SERVER_DELIMITER, text, 2)
        if "-" in scope:
            server, world = patterns.split(patterns.WORLD_DELIMITER, scope, 2)
        else:
            server = scope
    else:
        rest = text

    node_text, expire_at = _node_part(rest)

    builder = NodeBuilder(node_text, convert_contexts=True)
    if server is not None:
        builder.set_server_raw(server)
    if world is not None:
        builder.set_world(world)
    if expire_at is not None:
        builder.set_expiry(expire_at)
    builder.set_value(value)

    logger.debug(
        "Decoded %r: permission=%r server=%r world=%r expiry=%r",
        text,
        builder.permission,
        server,
        world,
        expire_at,
    )
    return builder


def from_serialized_node(text: str, value: bool = True) -> Node:
    """Decode *text* and build the node it describes."""
    return builder_from_serialized_node(text, value).build()
