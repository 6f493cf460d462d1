#!/usr/bin/env python3
"""
METACFG YAML BRIDGE - Standard YAML Rendering
---------------------------------------------
Converts a ConfigNode forest into a ruamel.yaml round-trip document so it
can be handed to tools that expect real YAML. Array values become flow
sequences and metadata becomes `# @tag:` comments above each key.

YAML mappings cannot hold duplicate keys: when siblings share a key the
last one wins, keeping the position of the first.

Author: MetaCfg Team
Date: 2026-10-19
"""

import io
from typing import Any, Dict, List, Union
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from metacfg.core.models import ConfigNode
from metacfg.parsing.values import parse_value


class YamlBridge:
    """
    Builds CommentedMaps from node forests and dumps them.
    """

    def __init__(self, include_meta: bool = True):
        self.include_meta = include_meta
        self.yaml = YAML(typ='rt')
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096

    def _comment_text(self, meta: Dict[str, str]) -> str:
        lines = []
        for tag, content in meta.items():
            first, *rest = content.split('\n')
            lines.append(f"@{tag}: {first}")
            lines.extend(f"  {line}" for line in rest)
        return '\n'.join(lines)

    def _leaf(self, node: ConfigNode) -> Union[str, CommentedSeq]:
        parsed = parse_value(node.value if node.value is not None else "")
        if isinstance(parsed, list):
            seq = CommentedSeq(parsed)
            seq.fa.set_flow_style()
            return seq
        return parsed

    def to_commented_map(self, nodes: List[ConfigNode], depth: int = 0) -> CommentedMap:
        """Recursively rebuilds the forest as a CommentedMap."""
        mapping = CommentedMap()
        for node in nodes:
            if node.has_children:
                mapping[node.key] = self.to_commented_map(node.children, depth + 1)
            else:
                mapping[node.key] = self._leaf(node)

            if self.include_meta and node.meta:
                mapping.yaml_set_comment_before_after_key(
                    node.key, before=self._comment_text(node.meta), indent=2 * depth)
        return mapping

    def dump(self, nodes: List[ConfigNode]) -> str:
        stream = io.StringIO()
        self.yaml.dump(self.to_commented_map(nodes), stream)
        return stream.getvalue()


def to_plain(nodes: List[ConfigNode]) -> Dict[str, Any]:
    """Plain dict/list data for the forest (metadata dropped)."""
    data: Dict[str, Any] = {}
    for node in nodes:
        if node.has_children:
            data[node.key] = to_plain(node.children)
        else:
            data[node.key] = parse_value(node.value if node.value is not None else "")
    return data
