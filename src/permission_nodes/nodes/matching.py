"""Applicability checks for permission nodes.

Every function here is total: it returns a boolean (or a list) for any
input and never raises. Invalid ``r=`` regex queries are treated as "does
not apply".

Scope queries
-------------
A server or world query is matched against the node's scope in one of
three forms:

- ``r=<regex>``  the node's scope must fully match the regex (only when
  ``apply_regex`` is set).
- ``(a|b|c)``     the node's scope must equal one of the alternatives.
- ``name``        the node's scope must equal the name.

All comparisons are case-insensitive. A node without a scope applies only
when ``include_global`` is set. An empty or ``None`` query always applies.

Expansion
---------
:func:`resolve_shorthand` computes the Cartesian product of every
``(a|b)`` segment, so its output grows exponentially with the number of
alternation segments. Callers should bound input size or cache results.
"""
from __future__ import annotations

import itertools
from collections.abc import Mapping, Sequence

from permission_nodes import patterns
from permission_nodes.nodes.protocol import PermissionNode


# ---------------------------------------------------------------------------
# Scope matching
# ---------------------------------------------------------------------------


def _is_alternation(text: str) -> bool:
    return text.startswith("(") and text.endswith(")") and "|" in text


def _alternatives(text: str) -> list[str]:
    return patterns.split(patterns.VERTICAL_BAR, text[1:-1])


def match_scope(
    scope: str | None,
    query: str | None,
    include_global: bool,
    apply_regex: bool,
) -> bool:
    """Return True if a node scoped to *scope* applies for *query*."""
    if not query:
        return True

    if scope is None:
        return include_global

    if apply_regex and query.lower().startswith("r="):
        compiled = patterns.compile(query[2:])
        if compiled is None:
            return False
        return compiled.fullmatch(scope) is not None

    if _is_alternation(query):
        folded = scope.lower()
        return any(alt.lower() == folded for alt in _alternatives(query))

    return scope.lower() == query.lower()


def should_apply_on_server(
    node: PermissionNode,
    server: str | None,
    include_global: bool = True,
    apply_regex: bool = True,
) -> bool:
    return match_scope(node.server, server, include_global, apply_regex)


def should_apply_on_world(
    node: PermissionNode,
    world: str | None,
    include_global: bool = True,
    apply_regex: bool = True,
) -> bool:
    return match_scope(node.world, world, include_global, apply_regex)


def should_apply_on_any_servers(
    node: PermissionNode,
    servers: Sequence[str],
    include_global: bool = True,
) -> bool:
    """Return True if the node applies on any of *servers*.

    Regex queries are disabled for the batch form.
    """
    return any(
        should_apply_on_server(node, server, include_global, False)
        for server in servers
    )


def should_apply_on_any_worlds(
    node: PermissionNode,
    worlds: Sequence[str],
    include_global: bool = True,
) -> bool:
    """Return True if the node applies on any of *worlds*.

    Regex queries are disabled for the batch form.
    """
    return any(
        should_apply_on_world(node, world, include_global, False)
        for world in worlds
    )


def should_apply_with_context(
    node: PermissionNode,
    context: Mapping[str, str] | None,
) -> bool:
    """Return True if every key in *context* is matched by the node.

    Keys the node carries but the query omits are ignored.
    """
    if not context:
        return True

    extra = node.extra_contexts
    for key, value in context.items():
        if key not in extra or value is None:
            return False
        if extra[key].lower() != value.lower():
            return False
    return True


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------


def _scope_almost_equal(mine: str | None, theirs: str | None) -> bool:
    # Equal presence on both sides never matches.
    if (theirs is not None) == (mine is not None):
        return False
    if theirs is not None:
        return mine is not None and theirs.lower() == mine.lower()
    return True


def almost_equals(node: PermissionNode, other: PermissionNode) -> bool:
    """Loose equality used when replacing or removing a node.

    Permission is compared case-insensitively, extra contexts must be
    equal, and both nodes must agree on being temporary. Server and world
    are only considered equal when *other* lacks the scope and *node* has
    it; matching presence (both set or both unset) compares unequal.
    """
    if other.permission.lower() != node.permission.lower():
        return False
    if not _scope_almost_equal(node.server, other.server):
        return False
    if not _scope_almost_equal(node.world, other.world):
        return False
    if dict(other.extra_contexts) != dict(node.extra_contexts):
        return False
    return other.is_temporary() == node.is_temporary()


# ---------------------------------------------------------------------------
# Expansion
# ---------------------------------------------------------------------------


def resolve_wildcard(
    node: PermissionNode,
    possible_nodes: Sequence[str] | None,
) -> list[str]:
    """Return the candidates covered by a ``prefix.*`` node, in input order."""
    if not node.is_wildcard() or possible_nodes is None:
        return []

    prefix = node.permission[:-2]
    return [candidate for candidate in possible_nodes if candidate.startswith(prefix)]


def resolve_shorthand(node: PermissionNode) -> list[str]:
    """Expand ``(a|b)`` segments into every concrete permission.

    The result has no guaranteed order.

    ``(a|b).c`` expands to ``a.c`` and ``b.c``.
    """
    permission = node.permission
    if not patterns.SHORTHAND_NODE.search(permission):
        return []
    if "." not in permission:
        return []

    segments: list[set[str]] = []
    for part in patterns.split(patterns.DOT, permission):
        if _is_alternation(part):
            segments.append(set(_alternatives(part)))
        else:
            segments.append({part})

    return list({".".join(combo) for combo in itertools.product(*segments)})
