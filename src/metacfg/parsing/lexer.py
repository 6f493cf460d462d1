#!/usr/bin/env python3
"""
METACFG LEXER - Line Classifier
-------------------------------
Splits raw configuration text into indent-tagged ParsedLine records
(empty / comment / key). Lines matching none of the three shapes are
dropped without error.

Author: MetaCfg Team
Date: 2026-10-19
"""

import re
from typing import List, Optional
from metacfg.core.models import ParsedLine, EMPTY, COMMENT, KEY
from metacfg.parsing.context import ParseContext


class LineClassifier:
    """
    Orchestrates the transition from raw text to ParsedLine records.
    Stateless between calls: every classify() works on its own input.
    """

    INDENT_PATTERN = re.compile(r'^(\s*)')
    # Group 1: Key identifier, Group 2: raw value (space after ':' optional)
    KEY_PATTERN = re.compile(r'^([a-zA-Z_][a-zA-Z0-9_]*):\s*(.*)$')

    def _clean_artifacts(self, text: str) -> str:
        """
        Removes invisible UTF-8 BOM markers and standardizes line endings.
        """
        text = text.lstrip('\ufeff')
        return text.replace('\r\n', '\n')

    def classify_line(self, line: str, line_no: int = 0) -> Optional[ParsedLine]:
        """
        Classifies a single line. Returns None for unrecognized content.
        """
        indent = len(self.INDENT_PATTERN.match(line).group(1))
        content = line[indent:]

        if not content:
            return ParsedLine(kind=EMPTY, indent=indent, line_no=line_no)

        if content.startswith('#'):
            return ParsedLine(kind=COMMENT, indent=indent, line_no=line_no,
                              content=content[1:])

        match = self.KEY_PATTERN.match(content)
        if match:
            return ParsedLine(kind=KEY, indent=indent, line_no=line_no,
                              key=match.group(1), value=match.group(2) or "")
        return None

    def classify(self, raw_text: str, context: Optional[ParseContext] = None) -> List[ParsedLine]:
        """
        Decomposes raw text into an ordered list of ParsedLine records.
        This is the primary interface for the ParsePipeline.
        """
        lines = self._clean_artifacts(raw_text).split('\n')
        parsed = []

        for i, line in enumerate(lines, 1):
            record = self.classify_line(line, line_no=i)
            if record is None:
                if context is not None:
                    context.report(i, "UNRECOGNIZED_LINE", f"Ignored line: {line.strip()!r}")
                continue
            parsed.append(record)

        return parsed
