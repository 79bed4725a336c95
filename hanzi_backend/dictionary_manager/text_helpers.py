#!/usr/bin/env python3
"""
Text helpers for dictionary records: pinyin display strings and IDS
decomposition descriptors.
"""

import logging
from typing import Any, List, Optional

from hanzi_backend.dictionary_manager.enums import (
    PINYIN_SEPARATOR,
    StructureOperator,
)

logger = logging.getLogger(__name__)


def normalize_pinyin(pinyin_input: Any) -> str:
    """
    Build the display string for an ordered list of pinyin readings.

    Anything that is not a list (None, a bare string, a number) yields "".
    Blank or non-string items inside the list are dropped.
    """
    if not isinstance(pinyin_input, list):
        if pinyin_input is not None:
            logger.debug(f"Ignoring non-list pinyin value: {pinyin_input!r}")
        return ""
    readings = [
        reading.strip()
        for reading in pinyin_input
        if isinstance(reading, str) and reading.strip()
    ]
    return PINYIN_SEPARATOR.join(readings)


def is_variation_selector(char: str) -> bool:
    code_point = ord(char)
    return 0xFE00 <= code_point <= 0xFE0F or 0xE0100 <= code_point <= 0xE01EF


def parse_decomposition(decomposition: Optional[str]) -> List[str]:
    """
    Split a decomposition descriptor into its constituent glyphs.

    Ideographic Description Characters describe layout, not components, and
    are dropped along with whitespace. A variation selector stays attached to
    the glyph it follows.

    Args:
        decomposition: A descriptor such as "⿰氵青" or "⿱⿰木木心"

    Returns:
        The glyphs in structural order, e.g. ["氵", "青"]
    """
    if not decomposition:
        return []

    components: List[str] = []
    for char in decomposition:
        if char.isspace() or StructureOperator.is_operator(char):
            continue
        if is_variation_selector(char):
            if components:
                components[-1] += char
            continue
        components.append(char)
    return components


def get_top_level_operator(decomposition: Optional[str]) -> Optional[StructureOperator]:
    """Return the operator a descriptor starts with, None for a bare glyph."""
    if not decomposition:
        return None
    return StructureOperator.from_symbol(decomposition.lstrip()[:1])
