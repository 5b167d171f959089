"""Immutable permission node.

A :class:`Node` is one permission rule: a dotted permission path, a
grant/negate value, an optional expiry, optional server and world scopes,
and any number of extra context constraints.

Nodes are built once, usually through
:class:`~permission_nodes.nodes.builder.NodeBuilder` or
:meth:`Node.from_serialized_node`, and never change afterwards. They are
safe to share between threads.

Scope normalisation
-------------------
- ``server`` of ``"global"`` (any case) or ``""`` is stored as ``None``.
- ``world`` of ``""`` is stored as ``None``.
- A world without a server gets the server ``"global"``.

Example
-------
::

    node = Node("essentials.fly", server="survival", world="nether",
                expire_at=1999999999)
    assert node.to_serialized_node() == "survival-nether/essentials.fly$1999999999"
    assert node.should_apply_on_server("SURVIVAL")
"""
from __future__ import annotations

import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType

from permission_nodes import patterns
from permission_nodes.nodes import matching
from permission_nodes.nodes.errors import InvalidNodeArgumentError, NodeStateError
from permission_nodes.nodes.protocol import PermissionNode

GLOBAL_SCOPE = "global"
GROUP_PREFIX = "group."


def _now() -> int:
    return int(time.time())


@dataclass(frozen=True)
class Node:
    """An immutable permission node.

    Attributes
    ----------
    permission:
        Dotted permission path, e.g. ``"foo.bar.*"``. Must not be empty.
    value:
        ``True`` if the node grants the permission, ``False`` if it negates it.
    expire_at:
        Unix time in seconds when the node expires. ``0`` means permanent.
    server:
        Server scope, or ``None`` when the node is global.
    world:
        World scope, or ``None`` when the node applies in every world.
    extra_contexts:
        Read-only mapping of additional ``key -> value`` constraints.
    """

    permission: str
    value: bool = True
    expire_at: int = 0
    server: str | None = None
    world: str | None = None
    extra_contexts: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.permission:
            raise InvalidNodeArgumentError("Empty permission")

        server = self.server
        world = self.world
        if server is not None and (server == "" or server.lower() == GLOBAL_SCOPE):
            server = None
        if world == "":
            world = None
        if world is not None and server is None:
            server = GLOBAL_SCOPE

        object.__setattr__(self, "server", server)
        object.__setattr__(self, "world", world)
        object.__setattr__(
            self,
            "extra_contexts",
            MappingProxyType(dict(self.extra_contexts or {})),
        )

    def __hash__(self) -> int:
        return hash(
            (
                self.permission,
                self.value,
                self.expire_at,
                self.server,
                self.world,
                frozenset(self.extra_contexts.items()),
            )
        )

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    @classmethod
    def from_serialized_node(cls, text: str, value: bool = True) -> Node:
        """Decode *text* and build the node it describes.

        Raises
        ------
        InvalidNodeArgumentError
            If the decoded permission is empty.
        NodeParseError
            If the expiry segment is not an integer.
        """
        from permission_nodes.nodes.builder import builder_from_serialized_node

        return builder_from_serialized_node(text, value).build()

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def key(self) -> str:
        return self.permission

    @property
    def expiry_unix_time(self) -> int:
        return self.expire_at

    @property
    def expiry(self) -> datetime:
        """The expiry time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.expire_at, tz=timezone.utc)

    def is_negated(self) -> bool:
        return not self.value

    def is_server_specific(self) -> bool:
        return self.server is not None

    def is_world_specific(self) -> bool:
        return self.world is not None

    def is_temporary(self) -> bool:
        return self.expire_at != 0

    def is_permanent(self) -> bool:
        return not self.is_temporary()

    def has_expired(self, now: float | None = None) -> bool:
        """Return True if the expiry time lies strictly before *now*.

        The check does not special-case permanent nodes; test
        :meth:`is_temporary` first.
        """
        current = _now() if now is None else int(now)
        return self.expire_at < current

    def seconds_until_expiry(self, now: float | None = None) -> int:
        """Seconds left until expiry. Negative once the node has expired."""
        current = _now() if now is None else int(now)
        return self.expire_at - current

    def is_wildcard(self) -> bool:
        return self.permission.endswith(".*")

    def is_group_node(self) -> bool:
        return patterns.GROUP_MATCH.fullmatch(self.permission) is not None

    def get_group_name(self) -> str:
        if not self.is_group_node():
            raise NodeStateError("This is not a group node")
        return self.permission[len(GROUP_PREFIX):]

    def get_wildcard_level(self) -> int:
        """Number of ``.`` characters in the permission."""
        return self.permission.count(".")

    def set_value(self, value: bool) -> bool:
        raise NodeStateError("Node is immutable; use NodeBuilder to derive a new node")

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def should_apply_on_server(
        self,
        server: str | None,
        include_global: bool = True,
        apply_regex: bool = True,
    ) -> bool:
        return matching.should_apply_on_server(self, server, include_global, apply_regex)

    def should_apply_on_world(
        self,
        world: str | None,
        include_global: bool = True,
        apply_regex: bool = True,
    ) -> bool:
        return matching.should_apply_on_world(self, world, include_global, apply_regex)

    def should_apply_on_any_servers(
        self, servers: Sequence[str], include_global: bool = True
    ) -> bool:
        return matching.should_apply_on_any_servers(self, servers, include_global)

    def should_apply_on_any_worlds(
        self, worlds: Sequence[str], include_global: bool = True
    ) -> bool:
        return matching.should_apply_on_any_worlds(self, worlds, include_global)

    def should_apply_with_context(self, context: Mapping[str, str] | None) -> bool:
        return matching.should_apply_with_context(self, context)

    def almost_equals(self, other: PermissionNode) -> bool:
        return matching.almost_equals(self, other)

    def resolve_wildcard(self, possible_nodes: Sequence[str] | None) -> list[str]:
        return matching.resolve_wildcard(self, possible_nodes)

    def resolve_shorthand(self) -> list[str]:
        return matching.resolve_shorthand(self)

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def to_serialized_node(self) -> str:
        """Encode the node as ``[server[-world]/][(k=v,...)]permission[$expiry]``."""
        parts: list[str] = []

        if self.server is not None:
            parts.append(self.server)
            if self.world is not None:
                parts.append(f"-{self.world}")
            parts.append("/")
        elif self.world is not None:
            parts.append(f"{GLOBAL_SCOPE}-{self.world}/")

        if self.extra_contexts:
            pairs = ",".join(f"{k}={v}" for k, v in self.extra_contexts.items())
            parts.append(f"({pairs})")

        parts.append(self.permission)

        if self.expire_at != 0:
            parts.append(f"${self.expire_at}")

        return "".join(parts)

    def __str__(self) -> str:
        return self.to_serialized_node()
