#!/usr/bin/env python3
"""
METACFG PARSE CONTEXT
---------------------
A state record for one parse session. It stores the raw text, the
classified lines, the resulting node forest and, when requested, the
diagnostics describing everything the parser silently dropped.

Author: MetaCfg Team
Date: 2026-10-19
"""

import logging
from dataclasses import dataclass, field
from typing import List
from metacfg.core.models import ConfigNode, ParsedLine, Diagnostic

logger = logging.getLogger("metacfg.pipeline")


@dataclass
class ParseContext:
    """
    Maintains the state of a single parse session.

    Initialised by the ParsePipeline and enriched by the classifier and
    the tree builder in turn.
    """
    raw_text: str                                               # Input exactly as given
    lines: List[ParsedLine] = field(default_factory=list)       # Classified lines
    nodes: List[ConfigNode] = field(default_factory=list)       # Resulting forest
    diagnostics: List[Diagnostic] = field(default_factory=list)
    collect_diagnostics: bool = False

    def report(self, line_no: int, code: str, message: str):
        """Records a dropped element. A no-op unless collection is enabled."""
        if not self.collect_diagnostics:
            return
        logger.debug(f"L{line_no} {code}: {message}")
        self.diagnostics.append(Diagnostic(line_no=line_no, code=code, message=message))
