"""Node queries: the requesting context a node is evaluated against.

A :class:`NodeQuery` bundles the server, world, and extra context of a
request together with the matching flags, and decides whether a single
node applies. Composing the results of many nodes (priority, negation
ordering) is left to the caller.

Queries can be loaded from YAML with :class:`QueryLoader`.

Schema
------
::

    server: "survival"
    world: "(nether|the_end)"
    include_global: true
    include_global_world: true
    apply_regex: true
    context:
      region: "spawn"

Example
-------
::

    query = QueryLoader().load_from_dict({"server": "survival"})
    assert query.matches(Node("essentials.fly", server="SURVIVAL"))
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from permission_nodes.nodes.protocol import PermissionNode

logger = logging.getLogger(__name__)


class QueryConfigError(ValueError):
    """Raised when a query YAML config is malformed or invalid.

    Attributes
    ----------
    config_path:
        The path to the config file that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")


class NodeQuery(BaseModel):
    """The context a node is checked against.

    ``server`` and ``world`` accept the same forms as
    :meth:`Node.should_apply_on_server`: a plain name, ``(a|b)``
    alternation, or ``r=<regex>`` when ``apply_regex`` is set.
    """

    model_config = {"extra": "forbid", "frozen": True}

    server: str | None = Field(default=None)
    world: str | None = Field(default=None)
    context: dict[str, str] = Field(default_factory=dict)
    include_global: bool = Field(default=True)
    include_global_world: bool = Field(default=True)
    apply_regex: bool = Field(default=True)

    @field_validator("context", mode="before")
    @classmethod
    def stringify_context(cls, value: object) -> object:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(k): str(v) for k, v in value.items()}
        return value

    def matches(self, node: PermissionNode) -> bool:
        """Return True if *node* applies to this query."""
        return (
            node.should_apply_on_server(self.server, self.include_global, self.apply_regex)
            and node.should_apply_on_world(
                self.world, self.include_global_world, self.apply_regex
            )
            and node.should_apply_with_context(self.context)
        )

    def filter(self, nodes: Iterable[PermissionNode]) -> list[PermissionNode]:
        """Return the nodes that apply to this query, preserving order."""
        return [node for node in nodes if self.matches(node)]


class QueryLoader:
    """Loads :class:`NodeQuery` objects from YAML files, strings, or dicts."""

    def load(self, config_path: str | Path) -> NodeQuery:
        """Load a query from a YAML file.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        QueryConfigError
            If the file cannot be parsed or fails validation.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Query config not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise QueryConfigError(
                f"Failed to parse YAML: {exc}", str(config_path)
            ) from exc

        return self._build_query(raw, config_path=str(config_path))

    def load_from_dict(
        self,
        config: dict[str, object],
        config_path: str | None = None,
    ) -> NodeQuery:
        return self._build_query(config, config_path=config_path)

    def load_from_yaml_string(
        self,
        yaml_string: str,
        config_path: str | None = None,
    ) -> NodeQuery:
        try:
            raw = yaml.safe_load(yaml_string) or {}
        except yaml.YAMLError as exc:
            raise QueryConfigError(
                f"Failed to parse YAML string: {exc}", config_path
            ) from exc
        return self._build_query(raw, config_path=config_path)

    def _build_query(
        self,
        raw: object,
        config_path: str | None = None,
    ) -> NodeQuery:
        if not isinstance(raw, dict):
            raise QueryConfigError(
                "Query config must be a YAML mapping (dict).", config_path
            )

        try:
            query = NodeQuery.model_validate(raw)
        except ValidationError as exc:
            raise QueryConfigError(f"Invalid query: {exc}", config_path) from exc

        logger.debug("Loaded query from %s: %r", config_path or "<dict>", query)
        return query
