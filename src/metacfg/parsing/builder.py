#!/usr/bin/env python3
"""
METACFG TREE BUILDER - The Architect
------------------------------------
Converts classified lines into a ConfigNode forest with a single
left-to-right scan. Indentation alone decides nesting: each level runs
until it meets a line indented less than its minimum indent, which is
left for an ancestor level to consume.

Comment runs are buffered per level and become the metadata of the next
key line, provided the run does not start deeper than that key.

Author: MetaCfg Team
Date: 2026-10-19
"""

import logging
from dataclasses import dataclass
from typing import List, Optional
from metacfg.core.models import ConfigNode, ParsedLine, EMPTY, COMMENT
from metacfg.parsing.context import ParseContext
from metacfg.parsing.tags import TagExtractor

logger = logging.getLogger("metacfg.builder")


@dataclass
class _Cursor:
    """Scan position for one build() call."""
    lines: List[ParsedLine]
    index: int = 0

    def current(self) -> Optional[ParsedLine]:
        if self.index < len(self.lines):
            return self.lines[self.index]
        return None

    def advance(self):
        self.index += 1

    def peek_substantive(self) -> Optional[ParsedLine]:
        """Next key line from the current position, skipping empties and comments."""
        i = self.index
        while i < len(self.lines) and self.lines[i].kind in (EMPTY, COMMENT):
            i += 1
        return self.lines[i] if i < len(self.lines) else None


class TreeBuilder:
    """
    Builds the node forest. Holds no scan state between calls; the cursor
    is created per build() so concurrent parses never share a position.
    """

    def __init__(self, context: Optional[ParseContext] = None):
        self.context = context
        self.extractor = TagExtractor(context)

    def _report(self, line_no: int, code: str, message: str):
        if self.context is not None:
            self.context.report(line_no, code, message)

    def _build_level(self, cursor: _Cursor, min_indent: int) -> List[ConfigNode]:
        nodes: List[ConfigNode] = []
        comments: List[ParsedLine] = []
        comment_indent: Optional[int] = None

        while cursor.current() is not None:
            item = cursor.current()

            # 1. Blank lines neither end comment runs nor affect nesting
            if item.kind == EMPTY:
                cursor.advance()
                continue

            # 2. Comments: buffer, or hand control back to the parent level
            if item.kind == COMMENT:
                if item.indent < min_indent:
                    break
                if comment_indent is None:
                    comment_indent = item.indent
                comments.append(item)
                cursor.advance()
                continue

            # 3. Key lines
            if item.indent < min_indent:
                break
            cursor.advance()

            children: List[ConfigNode] = []
            following = cursor.peek_substantive()
            if following is not None and following.indent > item.indent:
                children = self._build_level(cursor, following.indent)

            if comment_indent is None or comment_indent <= item.indent:
                meta = self.extractor.extract([c.content for c in comments],
                                              [c.line_no for c in comments])
            else:
                meta = {}
                self._report(comments[0].line_no, "ORPHAN_COMMENT",
                             f"Comment run at indent {comment_indent} is deeper than "
                             f"key '{item.key}' at indent {item.indent}; dropped")

            value = None if children else (item.value or "")

            if any(n.key == item.key for n in nodes):
                self._report(item.line_no, "DUPLICATE_KEY",
                             f"Sibling key '{item.key}' repeated; both kept")

            nodes.append(ConfigNode(
                key=item.key,
                value=value,
                original_value=value,
                meta=meta,
                children=children,
                expanded=True,
                docs_expanded=False,
                options_expanded=False,
            ))

            comments = []
            comment_indent = None

        if comments:
            self._report(comments[0].line_no, "TRAILING_COMMENT",
                         "Comment run not followed by a key at this level; dropped")
        return nodes

    def build(self, lines: List[ParsedLine]) -> List[ConfigNode]:
        """Builds the full forest starting at indent 0."""
        cursor = _Cursor(lines)
        nodes = self._build_level(cursor, 0)
        logger.debug(f"Built {len(nodes)} root node(s) from {len(lines)} line(s)")
        return nodes
