#!/usr/bin/env python3
"""
METACFG VALUE CODEC
-------------------
Array literal handling for leaf values: `[a, b, c]` <-> ['a', 'b', 'c'].
Elements cannot contain commas or brackets; there is no escaping.

Author: MetaCfg Team
Date: 2026-10-19
"""

from typing import List, Union

Value = Union[str, List[str]]


def is_array_literal(text: str) -> bool:
    trimmed = text.strip()
    return trimmed.startswith('[') and trimmed.endswith(']')


def parse_value(text: str) -> Value:
    """
    Detects array syntax. Scalars come back exactly as given (untrimmed).
    """
    if not is_array_literal(text):
        return text
    inner = text.strip()[1:-1]
    if not inner.strip():
        return []
    return [item.strip() for item in inner.split(',')]


def format_value(value: Value) -> str:
    """Renders a list as `[a, b]` (always bracketed); strings pass through."""
    if isinstance(value, list):
        return f"[{', '.join(value)}]"
    return value
