#!/usr/bin/env python3
"""
METACFG CORE MODELS
-------------------
Defines the fundamental data structures used across the MetaCfg engine.
ConfigNode is the only structure that survives a parse; ParsedLine and
Diagnostic are transient records produced along the way.

Author: MetaCfg Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, List, Any

# Line kinds produced by the classifier
EMPTY = "empty"
COMMENT = "comment"
KEY = "key"


@dataclass
class ConfigNode:
    """
    A single entry in the configuration tree.

    A node is either a leaf holding a scalar `value` or a branch holding
    `children` (with `value` set to None). The UI flags are initialised here
    and left for the presentation layer to flip.
    """
    key: str
    value: Optional[str] = None
    original_value: Optional[str] = None  # Snapshot taken at parse time
    meta: Dict[str, str] = field(default_factory=dict)
    children: List["ConfigNode"] = field(default_factory=list)
    expanded: bool = True
    docs_expanded: bool = False
    options_expanded: bool = False

    @property
    def has_children(self) -> bool:
        return len(self.children) > 0

    @property
    def is_modified(self) -> bool:
        """True once a consumer has edited the value since parsing."""
        return self.value != self.original_value

    def to_dict(self) -> Dict[str, Any]:
        """Structural snapshot (UI flags excluded)."""
        return {
            "key": self.key,
            "value": self.value,
            "meta": dict(self.meta),
            "children": [child.to_dict() for child in self.children],
        }


@dataclass
class ParsedLine:
    """
    Classification record for one raw source line.

    Created by the LineClassifier and consumed by the TreeBuilder;
    never retained past a parse.
    """
    kind: str                     # EMPTY, COMMENT or KEY
    indent: int                   # Leading whitespace width
    line_no: int = 0              # 1-based position in the source text
    content: str = ""             # Comment text after '#', untrimmed
    key: str = ""                 # Captured identifier for KEY lines
    value: str = ""               # Raw trailing value text for KEY lines


@dataclass
class Diagnostic:
    """A record of input the parser dropped or ignored."""
    line_no: int
    code: str
    message: str

    def __str__(self) -> str:
        return f"L{self.line_no}: {self.code}: {self.message}"
