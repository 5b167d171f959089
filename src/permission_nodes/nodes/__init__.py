"""Permission node value type, builder, and matching engine.

Example
-------
::

    from permission_nodes.nodes import Node, from_serialized_node

    node = from_serialized_node("survival/(region=spawn)essentials.fly$1999999999")
    assert node.server == "survival"
    assert node.extra_contexts == {"region": "spawn"}
    assert node.should_apply_with_context({"region": "SPAWN"})
"""
from __future__ import annotations

from permission_nodes.nodes.builder import (
    NodeBuilder,
    builder_from_serialized_node,
    from_serialized_node,
)
from permission_nodes.nodes.errors import (
    InvalidNodeArgumentError,
    NodeError,
    NodeParseError,
    NodeStateError,
)
from permission_nodes.nodes.node import GLOBAL_SCOPE, Node
from permission_nodes.nodes.protocol import PermissionNode, PermissionNodeBuilder

__all__ = [
    # Core types
    "GLOBAL_SCOPE",
    "Node",
    "NodeBuilder",
    "PermissionNode",
    "PermissionNodeBuilder",
    # Decoding
    "builder_from_serialized_node",
    "from_serialized_node",
    # Errors
    "InvalidNodeArgumentError",
    "NodeError",
    "NodeParseError",
    "NodeStateError",
]
