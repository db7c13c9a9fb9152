"""Fusion of provider content with DOM-derived assets."""

from __future__ import annotations

from .enrichment import AssetEnricher
from .formatter import COLOR_PALETTE_LIMIT, RAW_HTML_PREVIEW_CHARS, format_document
from .fuser import ContentFuser
from .links import LinkGroups, classify_links
from .models import FusedDocument

__all__ = [
    "AssetEnricher",
    "COLOR_PALETTE_LIMIT",
    "ContentFuser",
    "FusedDocument",
    "LinkGroups",
    "RAW_HTML_PREVIEW_CHARS",
    "classify_links",
    "format_document",
]
