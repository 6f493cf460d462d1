#!/usr/bin/env python3
"""
METACFG PARSE PIPELINE - The Coordinator
----------------------------------------
Runs raw text through classification and tree building in a fixed order
and returns the whole session as a ParseContext.

The pipeline never raises on malformed input. With diagnostics enabled it
additionally records every line or comment it dropped; the resulting tree
is the same either way.

Author: MetaCfg Team
Date: 2026-10-19
"""

import logging
from metacfg.parsing.lexer import LineClassifier
from metacfg.parsing.builder import TreeBuilder
from metacfg.parsing.context import ParseContext

logger = logging.getLogger("metacfg.pipeline")


class ParsePipeline:
    """
    The Orchestrator: classification first, then tree construction
    (which drives tag extraction for every comment run).
    """

    def __init__(self, collect_diagnostics: bool = False):
        self.collect_diagnostics = collect_diagnostics
        self.classifier = LineClassifier()

    def run(self, input_text: str) -> ParseContext:
        context = ParseContext(raw_text=input_text,
                               collect_diagnostics=self.collect_diagnostics)

        # --- PHASE 1: LINE CLASSIFICATION ---
        context.lines = self.classifier.classify(input_text, context)

        # --- PHASE 2: TREE CONSTRUCTION ---
        # A fresh builder per run keeps the context binding local to it.
        context.nodes = TreeBuilder(context).build(context.lines)

        if context.diagnostics:
            logger.debug(f"Parse finished with {len(context.diagnostics)} diagnostic(s)")
        return context
