#!/usr/bin/env python3
"""
METACFG PUBLIC API
------------------
Function-style entry points over the parsing suite, for callers that do
not need the pipeline objects.

Author: MetaCfg Team
Date: 2026-10-19
"""

from typing import List
from metacfg.core.models import ConfigNode
from metacfg.parsing.pipeline import ParsePipeline
from metacfg.parsing.exporter import ConfigExporter
from metacfg.parsing.tags import parse_tags, dedent
from metacfg.parsing.values import parse_value, format_value

__all__ = [
    "parse",
    "export_nodes",
    "parse_value",
    "format_value",
    "parse_tags",
    "dedent",
]


def parse(source_text: str) -> List[ConfigNode]:
    """Parses configuration text into a node forest. Never raises."""
    return ParsePipeline().run(source_text).nodes


def export_nodes(nodes: List[ConfigNode], indent: int = 0) -> str:
    """Renders a node forest back to configuration text."""
    return ConfigExporter().export(nodes, indent)
