"""
BeautifulSoup-based extractor for the visual assets of an HTML page.
"""

from __future__ import annotations

import asyncio
import re
from typing import Any, Dict, List

import structlog
from bs4 import BeautifulSoup

from pagefuse.exceptions import ValidationError
from pagefuse.utils.urls import page_origin, resolve_url

from .colors import harvest_blocks, unique_colors
from .models import LAYOUT_TAGS, AssetManifest, ImageAsset, LayoutElement, LinkAsset
from .protocols import Extractor

logger = structlog.get_logger(__name__)

BACKGROUND_IMAGE_PATTERN = re.compile(r"""background-image:\s*url\(['"]?([^'")]+)['"]?\)""")
FONT_FILE_PATTERN = re.compile(r"\.(woff|woff2|ttf|otf|eot)$", re.IGNORECASE)


def _has_background_image(style: str | None) -> bool:
    return style is not None and "background-image" in style


class AssetExtractor(Extractor):
    """Walks a parsed document and collects images, links, styles, colors and landmarks."""

    name = "soup-enhanced"

    def __init__(self) -> None:
        self.config: Dict[str, Any] = {
            "parser": "html.parser",
            # Keep class/rel as authored strings instead of token lists.
            "multi_valued_attributes": None,
        }

    def extract(self, html: str, *, url: str | None = None) -> AssetManifest:
        """Extract the asset manifest from ``html``.

        Args:
            html: HTML document to parse. Must be non-empty.
            url: Optional page URL; references are resolved against its origin.

        Returns:
            AssetManifest with every category in document order.

        Raises:
            ValidationError: If ``html`` is empty or missing.
        """
        if not html:
            raise ValidationError("HTML content is required")

        soup = BeautifulSoup(
            html,
            self.config["parser"],
            multi_valued_attributes=self.config["multi_valued_attributes"],
        )
        origin = page_origin(url)

        inline_styles = self._inline_styles(soup)
        harvested = harvest_blocks(inline_styles)
        manifest = AssetManifest(
            images=tuple(self._images(soup, origin)),
            background_images=tuple(self._background_images(soup, origin)),
            stylesheets=tuple(self._stylesheets(soup, origin)),
            fonts=tuple(self._fonts(soup, origin)),
            inline_styles=tuple(inline_styles),
            colors=unique_colors(harvested),
            colors_found=len(harvested),
            layout_elements=tuple(self._layout_elements(soup)),
        )

        logger.debug("Assets extracted", url=url, **manifest.counts())
        return manifest

    async def extract_async(self, html: str, *, url: str | None = None) -> AssetManifest:
        """Run :meth:`extract` in the default thread pool; parsing is CPU bound."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: self.extract(html, url=url))

    def _images(self, soup: BeautifulSoup, origin: str) -> List[ImageAsset]:
        images = []
        for img in soup.find_all("img"):
            src = img.get("src")
            if not src:
                continue
            images.append(
                ImageAsset(
                    src=resolve_url(src, origin),
                    original_src=src,
                    alt=img.get("alt") or "",
                    class_name=img.get("class") or "",
                    width=img.get("width"),
                    height=img.get("height"),
                )
            )
        return images

    def _background_images(self, soup: BeautifulSoup, origin: str) -> List[str]:
        backgrounds = []
        for element in soup.find_all(style=_has_background_image):
            match = BACKGROUND_IMAGE_PATTERN.search(element.get("style") or "")
            if match and match.group(1):
                backgrounds.append(resolve_url(match.group(1), origin))
        return backgrounds

    def _stylesheets(self, soup: BeautifulSoup, origin: str) -> List[LinkAsset]:
        sheets = []
        for link in soup.find_all("link", rel="stylesheet"):
            href = link.get("href")
            if href:
                sheets.append(LinkAsset(href=resolve_url(href, origin), original_href=href))
        return sheets

    def _fonts(self, soup: BeautifulSoup, origin: str) -> List[LinkAsset]:
        fonts = []
        for link in soup.find_all("link"):
            href = link.get("href") or ""
            rel = link.get("rel") or ""
            if not href:
                continue
            if "font" in rel or "font" in href or FONT_FILE_PATTERN.search(href):
                fonts.append(LinkAsset(href=resolve_url(href, origin), original_href=href, rel=rel))
        return fonts

    def _inline_styles(self, soup: BeautifulSoup) -> List[str]:
        styles = []
        for style in soup.find_all("style"):
            content = style.string
            if content:
                styles.append(str(content))
        return styles

    def _layout_elements(self, soup: BeautifulSoup) -> List[LayoutElement]:
        return [
            LayoutElement(
                tag=element.name.lower(),
                class_name=element.get("class") or "",
                id=element.get("id") or "",
            )
            for element in soup.find_all(list(LAYOUT_TAGS))
        ]
