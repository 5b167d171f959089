#!/usr/bin/env python3
"""Example: Quickstart — permission-nodes

Build, serialize, decode, and match permission nodes.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install permission-nodes
"""
from __future__ import annotations

import permission_nodes as pn


def main() -> None:
    print(f"permission-nodes version: {pn.__version__}")

    # Step 1: Build a scoped, temporary node
    node = (
        pn.NodeBuilder("essentials.fly")
        .set_server("survival")
        .set_world("nether")
        .set_expiry(1999999999)
        .with_extra_context("region", "spawn")
        .build()
    )
    serialized = node.to_serialized_node()
    print(f"Serialized: {serialized}")

    # Step 2: Decode it back
    decoded = pn.from_serialized_node(serialized)
    print(f"Round trip equal: {decoded == node}")

    # Step 3: Match against request contexts
    queries = [
        pn.NodeQuery(server="SURVIVAL", world="nether", context={"region": "spawn"}),
        pn.NodeQuery(server="creative"),
        pn.NodeQuery(server="r=surv.*", world="(nether|the_end)"),
    ]
    print("\nMatching:")
    for query in queries:
        icon = "APPLIES" if query.matches(node) else "SKIP"
        print(f"  [{icon}] server={query.server} world={query.world} context={query.context}")

    # Step 4: Expand shorthand and wildcard nodes
    shorthand = pn.Node("plugin.(fly|heal).(self|others)")
    print(f"\nShorthand expands to: {sorted(shorthand.resolve_shorthand())}")

    wildcard = pn.Node("plugin.fly.*")
    known = ["plugin.fly.self", "plugin.fly.others", "plugin.heal.self"]
    print(f"Wildcard covers: {wildcard.resolve_wildcard(known)}")


if __name__ == "__main__":
    main()
