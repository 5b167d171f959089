"""CLI entry point for permission-nodes.

Invoked as::

    permission-nodes [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m permission_nodes.cli.main

Commands
--------
- parse     Decode a serialized node and show its fields
- check     Test whether a node applies to a server/world/context query
- expand    Expand a shorthand node into concrete permissions
- wildcard  Resolve a wildcard node against candidate permissions
- version   Show version information
"""
from __future__ import annotations

import logging
import sys

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from permission_nodes.nodes import Node, NodeError, from_serialized_node

console = Console()
err_console = Console(stderr=True)

_EXIT_DECODE_ERROR = 2


def _decode_or_exit(text: str, value: bool = True) -> Node:
    try:
        return from_serialized_node(text, value)
    except NodeError as exc:
        err_console.print(f"[red]Invalid node:[/red] {escape(str(exc))}", highlight=False)
        sys.exit(_EXIT_DECODE_ERROR)


def _parse_context_options(pairs: tuple[str, ...]) -> dict[str, str]:
    context: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="--context")
        key, value = pair.split("=", 1)
        context[key] = value
    return context


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Permission node tools: decode, match, and expand serialized nodes."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show version information."""
    from permission_nodes import __version__

    console.print(
        Panel(
            f"[bold]permission-nodes[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Permission node encoding and matching engine.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# parse
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("text")
@click.option("--negated", is_flag=True, help="Decode the node as a negated rule.")
def parse_command(text: str, negated: bool) -> None:
    """Decode a serialized node and show its fields."""
    node = _decode_or_exit(text, not negated)

    table = Table(title="Node", box=box.SIMPLE)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("permission", node.permission)
    table.add_row("value", str(node.value).lower())
    table.add_row("server", node.server or "-")
    table.add_row("world", node.world or "-")
    table.add_row(
        "expiry",
        node.expiry.isoformat() if node.is_temporary() else "permanent",
    )
    contexts = ", ".join(f"{k}={v}" for k, v in sorted(node.extra_contexts.items()))
    table.add_row("contexts", contexts or "-")
    if node.is_group_node():
        table.add_row("group", node.get_group_name())
    table.add_row("wildcard", str(node.is_wildcard()).lower())

    console.print(table, highlight=False)
    console.print(f"  Serialized: {node.to_serialized_node()}", markup=False, highlight=False)


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("text")
@click.option("--server", "-s", default=None, help="Server query (name, (a|b), or r=regex).")
@click.option("--world", "-w", default=None, help="World query (name, (a|b), or r=regex).")
@click.option("--context", "-x", "context_pairs", multiple=True, help="Context constraint key=value.")
@click.option("--no-global", is_flag=True, help="Do not match nodes without a server/world scope.")
@click.option("--no-regex", is_flag=True, help="Treat r= queries literally.")
@click.option(
    "--query",
    "-q",
    "query_path",
    default=None,
    type=click.Path(exists=True),
    help="Load the query from a YAML file instead of options.",
)
def check_command(
    text: str,
    server: str | None,
    world: str | None,
    context_pairs: tuple[str, ...],
    no_global: bool,
    no_regex: bool,
    query_path: str | None,
) -> None:
    """Test whether a node applies. Exits 0 if it applies, 1 if not."""
    from permission_nodes.query import NodeQuery, QueryConfigError, QueryLoader

    node = _decode_or_exit(text)

    if query_path is not None:
        try:
            query = QueryLoader().load(query_path)
        except QueryConfigError as exc:
            err_console.print(f"[red]Invalid query:[/red] {escape(str(exc))}", highlight=False)
            sys.exit(_EXIT_DECODE_ERROR)
    else:
        query = NodeQuery(
            server=server,
            world=world,
            context=_parse_context_options(context_pairs),
            include_global=not no_global,
            include_global_world=not no_global,
            apply_regex=not no_regex,
        )

    applies = query.matches(node)
    status_str = "[green]APPLIES[/green]" if applies else "[red]DOES NOT APPLY[/red]"
    console.print(Panel(status_str, title="Node Check Result", border_style="blue"))
    sys.exit(0 if applies else 1)


# ---------------------------------------------------------------------------
# expand
# ---------------------------------------------------------------------------


@cli.command(name="expand")
@click.argument("text")
def expand_command(text: str) -> None:
    """Expand a shorthand node such as ``plugin.(fly|heal)``."""
    node = _decode_or_exit(text)
    expanded = sorted(node.resolve_shorthand())
    if not expanded:
        console.print("[yellow]Not a shorthand node.[/yellow]")
        return
    for permission in expanded:
        console.print(permission, markup=False, highlight=False)


# ---------------------------------------------------------------------------
# wildcard
# ---------------------------------------------------------------------------


@cli.command(name="wildcard")
@click.argument("text")
@click.argument("candidates", nargs=-1)
def wildcard_command(text: str, candidates: tuple[str, ...]) -> None:
    """Resolve a wildcard node against candidate permissions."""
    node = _decode_or_exit(text)
    if not node.is_wildcard():
        console.print("[yellow]Not a wildcard node.[/yellow]")
        return
    for permission in node.resolve_wildcard(list(candidates)):
        console.print(permission, markup=False, highlight=False)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    cli()
