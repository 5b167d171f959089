"""permission-nodes — permission node encoding and matching engine.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import permission_nodes as pn
>>> node = pn.from_serialized_node("survival-nether/essentials.fly$1999999999")
>>> node.server, node.world, node.expire_at
('survival', 'nether', 1999999999)
>>> node.should_apply_on_server("SURVIVAL")
True
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------
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

# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
from permission_nodes.query import NodeQuery, QueryConfigError, QueryLoader

__all__ = [
    "__version__",
    # Nodes
    "GLOBAL_SCOPE",
    "Node",
    "NodeBuilder",
    "PermissionNode",
    "PermissionNodeBuilder",
    "builder_from_serialized_node",
    "from_serialized_node",
    # Errors
    "InvalidNodeArgumentError",
    "NodeError",
    "NodeParseError",
    "NodeStateError",
    # Queries
    "NodeQuery",
    "QueryConfigError",
    "QueryLoader",
]
