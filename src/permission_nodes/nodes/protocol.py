"""Node and builder protocols.

Consumers that construct, store, or query permission nodes should depend
on these protocols rather than on :class:`~permission_nodes.nodes.node.Node`
directly, so that another node representation can be swapped in.

Usage:
    def grants(node: PermissionNode, server: str) -> bool:
        return not node.is_negated() and node.should_apply_on_server(server)
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class PermissionNode(Protocol):
    """Read-only view of a single permission rule."""

    @property
    def permission(self) -> str:
        """Dotted permission path, never empty."""
        ...

    @property
    def value(self) -> bool:
        """True if the rule grants, False if it negates."""
        ...

    @property
    def expire_at(self) -> int:
        """Unix time in seconds when the node expires, 0 if permanent."""
        ...

    @property
    def server(self) -> str | None:
        """Server scope, or None for global."""
        ...

    @property
    def world(self) -> str | None:
        """World scope, or None for every world."""
        ...

    @property
    def extra_contexts(self) -> Mapping[str, str]:
        """Read-only snapshot of additional context constraints."""
        ...

    def is_negated(self) -> bool: ...

    def is_server_specific(self) -> bool: ...

    def is_world_specific(self) -> bool: ...

    def is_temporary(self) -> bool: ...

    def is_permanent(self) -> bool: ...

    def has_expired(self, now: float | None = None) -> bool: ...

    def seconds_until_expiry(self, now: float | None = None) -> int: ...

    def is_wildcard(self) -> bool: ...

    def is_group_node(self) -> bool: ...

    def get_group_name(self) -> str: ...

    def get_wildcard_level(self) -> int: ...

    def should_apply_on_server(
        self, server: str | None, include_global: bool = True, apply_regex: bool = True
    ) -> bool: ...

    def should_apply_on_world(
        self, world: str | None, include_global: bool = True, apply_regex: bool = True
    ) -> bool: ...

    def should_apply_on_any_servers(
        self, servers: Sequence[str], include_global: bool = True
    ) -> bool: ...

    def should_apply_on_any_worlds(
        self, worlds: Sequence[str], include_global: bool = True
    ) -> bool: ...

    def should_apply_with_context(self, context: Mapping[str, str] | None) -> bool: ...

    def almost_equals(self, other: PermissionNode) -> bool: ...

    def resolve_wildcard(self, possible_nodes: Sequence[str] | None) -> list[str]: ...

    def resolve_shorthand(self) -> list[str]: ...

    def to_serialized_node(self) -> str: ...

    def set_value(self, value: bool) -> bool:
        """Always fails: nodes are immutable."""
        ...


class PermissionNodeBuilder(Protocol):
    """Mutable construction path for a :class:`PermissionNode`."""

    def set_negated(self, negated: bool) -> PermissionNodeBuilder: ...

    def set_value(self, value: bool) -> PermissionNodeBuilder: ...

    def set_expiry(self, expire_at: int) -> PermissionNodeBuilder: ...

    def set_world(self, world: str | None) -> PermissionNodeBuilder: ...

    def set_server(self, server: str | None) -> PermissionNodeBuilder: ...

    def with_extra_context(self, key: str, value: str) -> PermissionNodeBuilder: ...

    def build(self) -> PermissionNode: ...
