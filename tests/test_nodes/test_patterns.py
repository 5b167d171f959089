"""Tests for the node pattern library."""
from __future__ import annotations

import re

import pytest

from permission_nodes import patterns


# ---------------------------------------------------------------------------
# split
# ---------------------------------------------------------------------------

class TestSplit:
    def test_unlimited_drops_trailing_empty_fields(self) -> None:
        assert patterns.split(patterns.VERTICAL_BAR, "a|b|") == ["a", "b"]

    def test_unlimited_keeps_leading_empty_fields(self) -> None:
        assert patterns.split(patterns.DOT, ".a.b") == ["", "a", "b"]

    def test_no_match_returns_whole_text(self) -> None:
        assert patterns.split(patterns.DOT, "") == [""]

    def test_limit_keeps_trailing_empty_field(self) -> None:
        assert patterns.split(patterns.SERVER_DELIMITER, "server/", 2) == ["server", ""]

    def test_limit_splits_once(self) -> None:
        assert patterns.split(patterns.WORLD_DELIMITER, "a-b-c", 2) == ["a", "b-c"]

    def test_temp_delimiter_is_literal(self) -> None:
        assert patterns.split(patterns.TEMP_DELIMITER, "node$123", 2) == ["node", "123"]


# ---------------------------------------------------------------------------
# Detectors
# ---------------------------------------------------------------------------

class TestDetectors:
    @pytest.mark.parametrize("text", ["group.admin", "group.admin.extra", "group."])
    def test_group_match(self, text: str) -> None:
        assert patterns.GROUP_MATCH.fullmatch(text) is not None

    @pytest.mark.parametrize("text", ["groups.admin", "my.group.admin", "group"])
    def test_group_match_rejects(self, text: str) -> None:
        assert patterns.GROUP_MATCH.fullmatch(text) is None

    @pytest.mark.parametrize("text", ["(a|b).c", "plugin.(fly|heal)", "a.(b).c"])
    def test_shorthand_detected(self, text: str) -> None:
        assert patterns.SHORTHAND_NODE.search(text) is not None

    @pytest.mark.parametrize("text", ["a.b.c", "plugin.fly(x)", "(a.b)"])
    def test_shorthand_not_detected(self, text: str) -> None:
        assert patterns.SHORTHAND_NODE.search(text) is None

    def test_node_contexts_requires_block_prefix(self) -> None:
        assert patterns.NODE_CONTEXTS.fullmatch("(world=nether)essentials.fly")
        assert patterns.NODE_CONTEXTS.fullmatch("essentials.fly") is None
        assert patterns.NODE_CONTEXTS.fullmatch("()essentials.fly") is None

    @pytest.mark.parametrize("text", ["(a|b).c", "(fly|heal)", "(a).b"])
    def test_node_contexts_requires_key_value_pair(self, text: str) -> None:
        assert patterns.NODE_CONTEXTS.fullmatch(text) is None

    def test_node_contexts_block_before_shorthand(self) -> None:
        assert patterns.NODE_CONTEXTS.fullmatch("(k=v)(a|b).c")

    @pytest.mark.parametrize("name", ["a/b", "a-b", "a$b", "a b"])
    def test_reserved_server_chars(self, name: str) -> None:
        assert patterns.RESERVED_SERVER_CHARS.search(name)


# ---------------------------------------------------------------------------
# compile
# ---------------------------------------------------------------------------

class TestCompile:
    def test_valid_pattern_compiles(self) -> None:
        compiled = patterns.compile(r"surv.*")
        assert isinstance(compiled, re.Pattern)
        assert compiled.fullmatch("survival")

    def test_invalid_pattern_returns_none(self) -> None:
        assert patterns.compile("(unclosed") is None

    def test_invalid_pattern_does_not_raise(self) -> None:
        assert patterns.compile("[") is None
