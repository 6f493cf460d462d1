#!/usr/bin/env python3
"""
METACFG STORE - Tree State Holder
---------------------------------
A plain, non-reactive holder for a parsed forest. It offers the lookups
and in-place mutations an editing surface needs (value edits, expand /
collapse flags) without any notification wiring of its own.

Author: MetaCfg Team
Date: 2026-10-19
"""

from typing import List, Optional, Tuple
from metacfg.core.models import ConfigNode
from metacfg.parsing.pipeline import ParsePipeline
from metacfg.parsing.exporter import ConfigExporter


class ConfigStore:
    """
    Holds the root forest. Nodes are addressed either by index path
    ("root.0.2") or by dotted key path ("server.tls.enabled").
    """

    def __init__(self, nodes: Optional[List[ConfigNode]] = None):
        self._root: List[ConfigNode] = list(nodes) if nodes else []
        self.exporter = ConfigExporter()

    @classmethod
    def from_source(cls, source_text: str) -> "ConfigStore":
        return cls(ParsePipeline().run(source_text).nodes)

    @property
    def root(self) -> List[ConfigNode]:
        return self._root

    def set_root(self, nodes: List[ConfigNode]):
        """Replaces the forest in place so existing references see the change."""
        self._root[:] = nodes

    # --- Lookup ---

    def get_node(self, path: str) -> Optional[ConfigNode]:
        """Resolves an index path. Malformed or out-of-range paths yield None."""
        parts = path.split('.')
        if parts[0] != 'root' or len(parts) < 2:
            return None
        try:
            indices = [int(p) for p in parts[1:]]
        except ValueError:
            return None

        siblings = self._root
        node = None
        for index in indices:
            if index < 0 or index >= len(siblings):
                return None
            node = siblings[index]
            siblings = node.children
        return node

    def find(self, key_path: str) -> Optional[ConfigNode]:
        """Resolves a dotted key path; the first matching sibling wins."""
        siblings = self._root
        node = None
        for key in key_path.split('.'):
            node = next((n for n in siblings if n.key == key), None)
            if node is None:
                return None
            siblings = node.children
        return node

    # --- Per-node mutations (no-ops on a missing node) ---

    def toggle_expand(self, path: str):
        node = self.get_node(path)
        if node and node.has_children:
            node.expanded = not node.expanded

    def toggle_docs(self, path: str):
        node = self.get_node(path)
        if node:
            node.docs_expanded = not node.docs_expanded

    def toggle_options_expand(self, path: str):
        node = self.get_node(path)
        if node:
            node.options_expanded = not node.options_expanded

    def set_value(self, path: str, value: str):
        node = self.get_node(path)
        if node:
            node.value = value

    # --- Bulk mutations ---

    def _set_all_expanded(self, nodes: List[ConfigNode], expanded: bool):
        for node in nodes:
            if node.has_children:
                node.expanded = expanded
                self._set_all_expanded(node.children, expanded)

    def _set_all_docs_expanded(self, nodes: List[ConfigNode], expanded: bool):
        for node in nodes:
            if node.meta:
                node.docs_expanded = expanded
            if node.has_children:
                self._set_all_docs_expanded(node.children, expanded)

    def expand_all(self):
        self._set_all_expanded(self._root, True)

    def collapse_all(self):
        self._set_all_expanded(self._root, False)

    def expand_all_docs(self):
        self._set_all_docs_expanded(self._root, True)

    def collapse_all_docs(self):
        self._set_all_docs_expanded(self._root, False)

    # --- Reporting ---

    def modified(self) -> List[Tuple[str, ConfigNode]]:
        """Key paths and nodes whose value differs from the parsed one."""
        found = []

        def walk(nodes: List[ConfigNode], prefix: str):
            for node in nodes:
                key_path = f"{prefix}.{node.key}" if prefix else node.key
                if node.is_modified:
                    found.append((key_path, node))
                walk(node.children, key_path)

        walk(self._root, "")
        return found

    def export(self) -> str:
        return self.exporter.export(self._root)
