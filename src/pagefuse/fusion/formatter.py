"""
Renders the flat text document handed to AI consumers.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from pagefuse.extractor.models import AssetManifest, LayoutElement
from pagefuse.provider.models import ProviderLink

RAW_HTML_PREVIEW_CHARS = 2000
COLOR_PALETTE_LIMIT = 10


def _section(header: str, lines: Sequence[str]) -> Optional[str]:
    if not lines:
        return None
    return f"{header}:\n" + "\n".join(lines)


def _layout_line(element: LayoutElement) -> str:
    parts = [f"- <{element.tag}>"]
    if element.class_name:
        parts.append(f'class="{element.class_name}"')
    if element.id:
        parts.append(f'id="{element.id}"')
    return " ".join(parts)


def format_document(
    *,
    title: str,
    description: str,
    url: str,
    content: str,
    raw_html: str = "",
    images: Iterable[ProviderLink] = (),
    stylesheets: Iterable[ProviderLink] = (),
    fonts: Iterable[ProviderLink] = (),
    manifest: Optional[AssetManifest] = None,
) -> str:
    """Concatenate every section in a fixed order, omitting empty ones.

    Order: header (title, description, URL), IMAGES FOUND, STYLESHEETS,
    FONTS, EXTRACTED IMAGES, BACKGROUND IMAGES, COLOR PALETTE, LAYOUT
    STRUCTURE, Main Content, RAW HTML STRUCTURE.
    """
    blocks: List[Optional[str]] = [
        f"Title: {title}\nDescription: {description}\nURL: {url}",
        _section("IMAGES FOUND", [f'- {img.href} (alt: "{img.text or "N/A"}")' for img in images]),
        _section("STYLESHEETS", [f"- {css.href}" for css in stylesheets]),
        _section("FONTS", [f"- {font.href}" for font in fonts]),
    ]

    if manifest is not None:
        blocks += [
            _section(
                "EXTRACTED IMAGES",
                [f'- {img.src} (alt: "{img.alt}", class: "{img.class_name}")' for img in manifest.images],
            ),
            _section("BACKGROUND IMAGES", [f"- {bg}" for bg in manifest.background_images]),
            _section("COLOR PALETTE", [", ".join(manifest.colors[:COLOR_PALETTE_LIMIT])] if manifest.colors else []),
            _section("LAYOUT STRUCTURE", [_layout_line(el) for el in manifest.layout_elements]),
        ]

    blocks.append(f"Main Content:\n{content}")
    preview = raw_html[:RAW_HTML_PREVIEW_CHARS] + "..." if raw_html else "Not available"
    blocks.append(f"RAW HTML STRUCTURE:\n{preview}")

    return "\n\n".join(block for block in blocks if block is not None).strip()
