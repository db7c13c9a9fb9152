"""
Color literal harvesting from CSS text.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Tuple

# Longest hex form first so "#FF0000" is not cut to "#FF0"; a hex run of any
# other length is not a color.
COLOR_PATTERN = re.compile(
    r"#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{3})(?![0-9a-fA-F])"
    r"|rgba?\([^)]+\)"
    r"|hsla?\([^)]+\)"
)


def harvest_colors(text: str) -> List[str]:
    """Return every color literal in ``text`` exactly as written, in source order."""
    if not text:
        return []
    return COLOR_PATTERN.findall(text)


def harvest_blocks(blocks: Iterable[str]) -> List[str]:
    """Harvest every color occurrence across several CSS blocks, duplicates included."""
    return [color for block in blocks for color in harvest_colors(block)]


def unique_colors(colors: Iterable[str]) -> Tuple[str, ...]:
    """Keep the first occurrence of each literal.

    Deduplication is purely syntactic: ``#FFF`` and ``#ffffff`` are distinct.
    """
    return tuple(dict.fromkeys(colors))
