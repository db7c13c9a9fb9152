"""
Best-effort secondary asset extraction over the provider's HTML.
"""

from __future__ import annotations

from typing import Optional

import httpx
import structlog

from pagefuse.config.config import AssetsConfig
from pagefuse.exceptions import ExtractionDegraded
from pagefuse.extractor.asset_extractor import AssetExtractor
from pagefuse.extractor.models import AssetManifest
from pagefuse.observability import increment

logger = structlog.get_logger(__name__)


class AssetEnricher:
    """
    Runs the asset extractor against scraped HTML.

    In-process by default. When ``AssetsConfig.base_url`` is set the manifest
    is requested from a remote ``/extract-assets`` endpoint instead. Either
    way a failure yields ``None`` and the primary flow carries on.
    """

    def __init__(
        self,
        config: AssetsConfig,
        extractor: AssetExtractor | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.config = config
        self.extractor = extractor or AssetExtractor()
        self._client = client

    async def enrich(self, html: str, url: Optional[str]) -> Optional[AssetManifest]:
        if not html:
            return None
        try:
            if self.config.base_url:
                return await self._extract_remote(html, url)
            return await self.extractor.extract_async(html, url=url)
        except Exception as e:
            increment("enrichment_failures")
            logger.warning("Failed to extract additional assets", component="enrichment", url=url, error=str(e))
            return None

    async def _extract_remote(self, html: str, url: Optional[str]) -> AssetManifest:
        endpoint = f"{self.config.base_url}/extract-assets"
        body = {"html": html, "url": url}
        if self._client is not None:
            response = await self._client.post(endpoint, json=body, timeout=self.config.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                response = await client.post(endpoint, json=body)

        if not response.is_success:
            raise ExtractionDegraded(f"extract-assets returned status {response.status_code}")
        data = response.json()
        if not data.get("success") or not isinstance(data.get("assets"), dict):
            raise ExtractionDegraded(data.get("error") or "extract-assets returned no assets")
        return AssetManifest.from_dict(data["assets"])
