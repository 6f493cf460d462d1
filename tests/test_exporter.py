#!/usr/bin/env python3
"""
METACFG EXPORTER SUITE
----------------------
Serializer output format and structural round-trip through the parser.
"""

import pytest
from metacfg.api import parse, export_nodes
from metacfg.core.models import ConfigNode
from metacfg.parsing.exporter import ConfigExporter


def leaf(key, value, **meta):
    return ConfigNode(key=key, value=value, original_value=value, meta=meta)


def test_leaf_and_branch_layout():
    nodes = [
        ConfigNode(key="server", meta={"doc": "HTTP"}, children=[
            leaf("port", "8080", why="a\nb"),
        ]),
        leaf("debug", "false"),
    ]
    assert export_nodes(nodes) == (
        "# @doc: HTTP\n"
        "server:\n"
        "  # @why: a\n"
        "  #   b\n"
        "  port: 8080\n"
        "debug: false"
    )


def test_none_value_renders_empty():
    assert export_nodes([ConfigNode(key="key")]) == "key: "


def test_starting_indent():
    assert export_nodes([leaf("a", "1")], indent=2) == "    a: 1"


def test_custom_indent_width():
    nodes = [ConfigNode(key="a", children=[leaf("b", "1")])]
    assert ConfigExporter(indent_width=4).export(nodes) == "a:\n    b: 1"


def test_empty_forest():
    assert export_nodes([]) == ""


def test_structural_round_trip(sample_text):
    tree = parse(sample_text)
    assert parse(export_nodes(tree)) == tree


def test_export_is_stable_after_first_pass(sample_text):
    once = export_nodes(parse(sample_text))
    assert export_nodes(parse(once)) == once


@pytest.mark.parametrize("text", [
    "a:\n  b: 1\nc: 2",
    "# @doc: hello\nkey: val",
    "# @doc: one\n#   two\n#     three\nkey: [x, y]",
    "# @why:\n#   first\n#\n#   second\nkey:",
    "a:\n  b:\n    c:\n      d: deep\n  e: 1",
    "dup: 1\ndup: 2",
    "# @doc:\n#   a\n#     b\nkey: v",
    "# @doc:\n#   Intro:\n#     - one\n#     - two\nkey: v",
    "# @doc: x\n#       deep\nkey: v",
])
def test_round_trip_cases(text):
    tree = parse(text)
    assert parse(export_nodes(tree)) == tree


def test_edited_value_is_exported():
    tree = parse("# @doc: Port\nport: 8080")
    tree[0].value = "9090"
    assert export_nodes(tree) == "# @doc: Port\nport: 9090"
