#!/usr/bin/env python3
"""
METACFG TAG SUITE
-----------------
Tag extraction from comment runs and the dedent rule.
"""

import pytest
from metacfg.api import parse_tags, dedent
from metacfg.parsing.tags import TagExtractor
from metacfg.parsing.context import ParseContext


@pytest.mark.parametrize("lines,expected", [
    (["  foo", "  bar"], "foo\nbar"),
    (["    a", "      b"], "a\n  b"),
    (["  a", "", "    b"], "a\n\n  b"),
    (["    x", " "], "x"),
    (["   ", ""], ""),
    ([], ""),
])
def test_dedent(lines, expected):
    assert dedent(lines) == expected


def test_single_tag():
    assert parse_tags([" @doc: hello"]) == {"doc": "hello"}


def test_space_after_colon_is_optional():
    assert parse_tags(["@default:8080"]) == {"default": "8080"}


def test_several_tags_in_one_run():
    meta = parse_tags([" @options: a | b", " @default: a", " @multi: true"])
    assert meta == {"options": "a | b", "default": "a", "multi": "true"}


def test_text_before_first_tag_is_dropped():
    assert parse_tags([" host: localhost", "   @doc: Bind address"]) == {"doc": "Bind address"}


def test_duplicate_tag_last_wins():
    assert parse_tags([" @doc: first", " @doc: second"]) == {"doc": "second"}


def test_block_tag_is_dedented():
    meta = parse_tags([
        "   @why:",
        "     text   — human readable",
        "     json   — structured",
    ])
    assert meta == {"why": "text   — human readable\njson   — structured"}


def test_inline_text_with_continuation():
    """Continuation lines are dedented among themselves, not against the opener."""
    meta = parse_tags([" @doc: first line", "   second line", "     indented"])
    assert meta == {"doc": "first line\nsecond line\n  indented"}


def test_inline_text_keeps_deeper_continuation_indent():
    """Continuation lines lose at most the width up to the opener's text."""
    meta = parse_tags([" @doc: Intro:", "     - one", "     - two"])
    assert meta == {"doc": "Intro:\n  - one\n  - two"}
    nested = parse_tags(["   @why: top", "       deeper"])
    assert nested == {"why": "top\n  deeper"}


def test_empty_tag():
    assert parse_tags([" @doc:"]) == {"doc": ""}


def test_no_tags():
    assert parse_tags([" just a comment", ""]) == {}


def test_diagnostics_for_stray_and_duplicate():
    context = ParseContext(raw_text="", collect_diagnostics=True)
    TagExtractor(context).extract([" stray", " @doc: a", " @doc: b"], [10, 11, 12])
    assert [(d.line_no, d.code) for d in context.diagnostics] == [
        (10, "STRAY_TAG_TEXT"),
        (12, "DUPLICATE_TAG"),
    ]
