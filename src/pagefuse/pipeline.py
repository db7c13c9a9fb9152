"""
Request-level flows behind the two service endpoints.

``extract_assets_payload`` turns (html, url) into the extract-assets response
body. ``ScrapePipeline`` scrapes a URL through the provider, enriches the
result with a best-effort asset extraction over the provider's HTML, fuses
both, and builds the scrape-url-enhanced response body.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog

from pagefuse.config.config import Config
from pagefuse.exceptions import ValidationError
from pagefuse.extractor.asset_extractor import AssetExtractor
from pagefuse.extractor.models import AssetManifest
from pagefuse.fusion.enrichment import AssetEnricher
from pagefuse.fusion.fuser import ContentFuser
from pagefuse.fusion.models import FusedDocument
from pagefuse.observability import increment
from pagefuse.provider.client import FirecrawlClient
from pagefuse.provider.models import ProviderResponse

logger = structlog.get_logger(__name__)

SCRAPER_NAME = "firecrawl-enhanced"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _record_asset_counts(manifest: AssetManifest) -> None:
    for category, count in (
        ("images", len(manifest.images)),
        ("background_images", len(manifest.background_images)),
        ("stylesheets", len(manifest.stylesheets)),
        ("fonts", len(manifest.fonts)),
        ("colors", len(manifest.colors)),
        ("layout_elements", len(manifest.layout_elements)),
    ):
        if count:
            increment("assets_extracted", count, labels={"category": category})


def extract_assets_payload(
    html: Optional[str],
    url: Optional[str] = None,
    extractor: Optional[AssetExtractor] = None,
) -> Dict[str, Any]:
    """Extract assets from ``html`` and wrap them in the response envelope.

    Raises:
        ValidationError: If ``html`` is empty or missing.
    """
    extractor = extractor or AssetExtractor()
    manifest = extractor.extract(html or "", url=url)
    _record_asset_counts(manifest)
    return {
        "success": True,
        "assets": manifest.to_dict(),
        "metadata": {
            "extractor": extractor.name,
            "timestamp": _timestamp(),
            **manifest.counts(),
        },
        "message": "Assets extracted successfully from HTML content",
    }


def build_scrape_payload(url: str, document: FusedDocument, response: ProviderResponse) -> Dict[str, Any]:
    """Wrap a fused document in the scrape-url-enhanced response envelope."""
    return {
        "success": True,
        "url": url,
        "content": document.formatted_text,
        "structured": document.structured,
        "metadata": {
            "scraper": SCRAPER_NAME,
            "timestamp": _timestamp(),
            "contentLength": len(document.formatted_text),
            "cached": response.cached,
            "imagesCount": len(document.images),
            "stylesheetsCount": len(document.stylesheets),
            "fontsCount": len(document.fonts),
            "hasScreenshot": bool(document.screenshot),
            **response.metadata,
        },
        "message": "URL scraped successfully with enhanced visual content extraction",
    }


class ScrapePipeline:
    """Provider scrape, additive enrichment, fusion. One instance serves many requests."""

    def __init__(
        self,
        config: Config,
        provider: Optional[FirecrawlClient] = None,
        enricher: Optional[AssetEnricher] = None,
        fuser: Optional[ContentFuser] = None,
    ):
        self.config = config
        self.provider = provider or FirecrawlClient(config.provider)
        self.enricher = enricher or AssetEnricher(config.assets)
        self.fuser = fuser or ContentFuser()

    async def fuse(self, url: str) -> tuple[FusedDocument, ProviderResponse]:
        """Scrape and fuse ``url``.

        Provider and configuration errors propagate; enrichment failures
        degrade to a document without extracted assets.
        """
        if not url:
            raise ValidationError("URL is required")

        response = await self.provider.scrape(url)
        manifest = await self.enricher.enrich(response.html, url)
        if manifest is not None:
            _record_asset_counts(manifest)

        document = self.fuser.fuse(response, manifest, url)
        logger.info(
            "Page fused",
            component="scrape-url-enhanced",
            url=url,
            content_length=len(document.formatted_text),
            enriched=manifest is not None,
        )
        return document, response

    async def run(self, url: str) -> Dict[str, Any]:
        """Scrape and fuse ``url`` and return the response body."""
        document, response = await self.fuse(url)
        return build_scrape_payload(url, document, response)

    async def aclose(self) -> None:
        await self.provider.close()
