#!/usr/bin/env python3
"""
METACFG EXPORTER - Structural Round-Trip
----------------------------------------
Renders a ConfigNode forest back to configuration text. Metadata is
re-emitted as `# @tag:` comment lines above each key. Reparsing the output
yields the same tree; original blank lines and comment placement are not
reproduced.

Author: MetaCfg Team
Date: 2026-10-19
"""

from typing import List
from metacfg.core.models import ConfigNode


class ConfigExporter:
    """
    The Reconstructor: converts node forests back to text.
    """

    def __init__(self, indent_width: int = 2):
        self.indent_width = indent_width

    def _meta_lines(self, prefix: str, tag: str, content: str) -> List[str]:
        first, *rest = content.split('\n')
        lines = [f"{prefix}# @{tag}: {first}"]
        # Continuation lines sit two columns past the '@'
        lines.extend(f"{prefix}#   {line}" for line in rest)
        return lines

    def export(self, nodes: List[ConfigNode], indent: int = 0) -> str:
        """
        Exports nodes at the given nesting level. Lines are joined with
        newlines; no trailing newline is added.
        """
        lines: List[str] = []
        prefix = ' ' * (self.indent_width * indent)

        for node in nodes:
            for tag, content in node.meta.items():
                lines.extend(self._meta_lines(prefix, tag, content))

            if node.has_children:
                lines.append(f"{prefix}{node.key}:")
                lines.append(self.export(node.children, indent + 1))
            else:
                value = node.value if node.value is not None else ""
                lines.append(f"{prefix}{node.key}: {value}")

        return '\n'.join(lines)
