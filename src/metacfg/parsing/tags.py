#!/usr/bin/env python3
"""
METACFG TAG EXTRACTOR - The Curator
-----------------------------------
Turns a run of comment lines into node documentation. A line of the form
`@tag: text` opens a tag; the lines that follow belong to it until the
next opener. Each tag's block is dedented before it is stored.

Author: MetaCfg Team
Date: 2026-10-19
"""

import re
from typing import Dict, List, Optional
from metacfg.parsing.context import ParseContext

TAG_PATTERN = re.compile(r'^(\s*)@([A-Za-z0-9_]+):\s*(.*)')
INDENT_PATTERN = re.compile(r'^(\s*)')


def _strip_common_indent(lines: List[str], limit: Optional[int] = None) -> List[str]:
    """Removes the indent shared by every non-blank line, at most `limit` wide."""
    indents = [len(INDENT_PATTERN.match(l).group(1)) for l in lines if l.strip()]
    if not indents:
        return list(lines)
    width = min(indents)
    if limit is not None:
        width = min(width, limit)
    return [l[width:] for l in lines]


def dedent(lines: List[str]) -> str:
    """
    Strips the common leading-whitespace width from a block and trims it.

    Blank lines do not count towards the common width and lose at most
    what they have.
    """
    if not lines:
        return ""
    return "\n".join(_strip_common_indent(lines)).strip()


class TagExtractor:
    """
    Scans one comment run and builds the tag -> content mapping.
    """

    def __init__(self, context: Optional[ParseContext] = None):
        self.context = context

    def _report(self, line_nos: Optional[List[int]], idx: int, code: str, message: str):
        if self.context is None:
            return
        line_no = line_nos[idx] if line_nos and idx < len(line_nos) else 0
        self.context.report(line_no, code, message)

    def _commit(self, column: int, opener: str, continuation: List[str]) -> str:
        """
        Joins the opener's inline text with its dedented continuation lines.

        The opener text has already lost its leading whitespace to the tag
        pattern, so it is left out of the indent measurement. When it is
        present, continuation lines lose at most the width up to the text
        of a `@tag: text` opener (`column` + 2), so deeper lines keep their
        relative indent.
        """
        if opener:
            body = _strip_common_indent(continuation, column + 2)
            return "\n".join([opener] + body).strip()
        return "\n".join(_strip_common_indent(continuation)).strip()

    def extract(self, lines: List[str], line_nos: Optional[List[int]] = None) -> Dict[str, str]:
        """
        Primary interface. `lines` are comment contents with the leading '#'
        removed; `line_nos` optionally maps them back to source positions.
        """
        meta: Dict[str, str] = {}
        current_tag: Optional[str] = None
        column = 0
        opener = ""
        continuation: List[str] = []

        for i, line in enumerate(lines):
            match = TAG_PATTERN.match(line)
            if match:
                if current_tag:
                    meta[current_tag] = self._commit(column, opener, continuation)
                current_tag = match.group(2)
                if current_tag in meta:
                    self._report(line_nos, i, "DUPLICATE_TAG",
                                 f"Tag '@{current_tag}' repeated; last occurrence wins")
                column = len(match.group(1))
                opener = match.group(3)
                continuation = []
            elif current_tag:
                continuation.append(line)
            elif line.strip():
                self._report(line_nos, i, "STRAY_TAG_TEXT",
                             f"Comment text before any tag: {line.strip()!r}")

        if current_tag:
            meta[current_tag] = self._commit(column, opener, continuation)
        return meta


def parse_tags(lines: List[str]) -> Dict[str, str]:
    """Convenience wrapper: extract tags from a comment run."""
    return TagExtractor().extract(lines)
