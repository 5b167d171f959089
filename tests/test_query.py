"""Tests for NodeQuery and QueryLoader."""
from __future__ import annotations

import pathlib

import pytest

from permission_nodes.nodes import Node
from permission_nodes.query import NodeQuery, QueryConfigError, QueryLoader


@pytest.fixture()
def loader() -> QueryLoader:
    return QueryLoader()


@pytest.fixture()
def nodes() -> list[Node]:
    return [
        Node("essentials.fly"),
        Node("essentials.fly", server="survival"),
        Node("essentials.fly", server="creative"),
        Node("essentials.fly", server="survival", world="nether"),
        Node("essentials.fly", server="survival", extra_contexts={"region": "spawn"}),
    ]


# ---------------------------------------------------------------------------
# NodeQuery
# ---------------------------------------------------------------------------

class TestNodeQuery:
    def test_empty_query_matches_everything(self, nodes: list[Node]) -> None:
        assert NodeQuery().filter(nodes) == nodes

    def test_server_query(self, nodes: list[Node]) -> None:
        matched = NodeQuery(server="SURVIVAL").filter(nodes)
        assert nodes[2] not in matched
        assert nodes[0] in matched
        assert nodes[1] in matched

    def test_exclude_global(self, nodes: list[Node]) -> None:
        matched = NodeQuery(server="survival", include_global=False).filter(nodes)
        assert nodes[0] not in matched
        assert nodes[1] in matched

    def test_world_query(self, nodes: list[Node]) -> None:
        query = NodeQuery(server="survival", world="overworld", include_global_world=True)
        matched = query.filter(nodes)
        assert nodes[3] not in matched
        assert nodes[1] in matched

    def test_world_query_excluding_global_worlds(self, nodes: list[Node]) -> None:
        query = NodeQuery(server="survival", world="nether", include_global_world=False)
        assert query.filter(nodes) == [nodes[3]]

    def test_context_query(self, nodes: list[Node]) -> None:
        query = NodeQuery(server="survival", context={"region": "Spawn"})
        assert query.filter(nodes) == [nodes[4]]

    def test_regex_query(self, nodes: list[Node]) -> None:
        query = NodeQuery(server="r=(surv|crea).*", include_global=False)
        assert query.filter(nodes) == nodes[1:]

    def test_regex_disabled(self, nodes: list[Node]) -> None:
        query = NodeQuery(server="r=surv.*", include_global=False, apply_regex=False)
        assert query.filter(nodes) == []

    def test_query_is_frozen(self) -> None:
        query = NodeQuery(server="survival")
        with pytest.raises(Exception):
            query.server = "creative"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# QueryLoader
# ---------------------------------------------------------------------------

class TestQueryLoader:
    def test_load_from_dict(self, loader: QueryLoader) -> None:
        query = loader.load_from_dict({"server": "survival", "context": {"region": "spawn"}})
        assert query.server == "survival"
        assert query.context == {"region": "spawn"}
        assert query.include_global is True

    def test_context_values_stringified(self, loader: QueryLoader) -> None:
        query = loader.load_from_dict({"context": {"level": 3}})
        assert query.context == {"level": "3"}

    def test_null_context_becomes_empty(self, loader: QueryLoader) -> None:
        assert loader.load_from_dict({"context": None}).context == {}

    def test_unknown_key_rejected(self, loader: QueryLoader) -> None:
        with pytest.raises(QueryConfigError):
            loader.load_from_dict({"servr": "survival"})

    def test_non_mapping_rejected(self, loader: QueryLoader) -> None:
        with pytest.raises(QueryConfigError):
            loader.load_from_yaml_string("- survival\n- creative\n")

    def test_load_from_yaml_string(self, loader: QueryLoader) -> None:
        query = loader.load_from_yaml_string(
            "server: survival\nworld: nether\napply_regex: false\n"
        )
        assert query.world == "nether"
        assert query.apply_regex is False

    def test_empty_yaml_yields_default_query(self, loader: QueryLoader) -> None:
        assert loader.load_from_yaml_string("") == NodeQuery()

    def test_invalid_yaml_raises(self, loader: QueryLoader) -> None:
        with pytest.raises(QueryConfigError):
            loader.load_from_yaml_string("server: [unclosed")

    def test_load_file(self, loader: QueryLoader, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "query.yaml"
        path.write_text("server: creative\ncontext:\n  region: spawn\n", encoding="utf-8")
        query = loader.load(path)
        assert query.server == "creative"
        assert query.context == {"region": "spawn"}

    def test_load_missing_file(self, loader: QueryLoader, tmp_path: pathlib.Path) -> None:
        with pytest.raises(FileNotFoundError):
            loader.load(tmp_path / "missing.yaml")

    def test_error_message_includes_path(
        self, loader: QueryLoader, tmp_path: pathlib.Path
    ) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("include_global: [1, 2]\n", encoding="utf-8")
        with pytest.raises(QueryConfigError) as exc_info:
            loader.load(path)
        assert exc_info.value.config_path == str(path)
        assert str(path) in str(exc_info.value)
