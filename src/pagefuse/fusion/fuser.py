"""
Merges the provider's render with the DOM-derived asset manifest.
"""

from __future__ import annotations

from typing import Optional

from pagefuse.extractor.models import AssetManifest
from pagefuse.provider.models import ProviderResponse
from pagefuse.utils.text import sanitize_quotes

from .formatter import format_document
from .links import classify_links
from .models import FusedDocument


class ContentFuser:
    """Builds one FusedDocument per scrape; holds no state between calls."""

    def fuse(
        self,
        response: ProviderResponse,
        manifest: Optional[AssetManifest],
        url: str,
    ) -> FusedDocument:
        groups = classify_links(response.links)
        title = sanitize_quotes(response.title)
        description = sanitize_quotes(response.description)
        content = sanitize_quotes(response.markdown)

        formatted = format_document(
            title=title,
            description=description,
            url=url,
            content=content,
            raw_html=response.raw_html,
            images=groups.images,
            stylesheets=groups.stylesheets,
            fonts=groups.fonts,
            manifest=manifest,
        )

        return FusedDocument(
            formatted_text=formatted,
            title=title,
            description=description,
            content=content,
            url=url,
            images=groups.images,
            stylesheets=groups.stylesheets,
            fonts=groups.fonts,
            raw_html=response.raw_html or None,
            screenshot=response.screenshot,
            extracted_assets=manifest,
        )
