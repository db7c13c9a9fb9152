"""
Async client for the Firecrawl scrape API.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import httpx
import structlog

from pagefuse.config.config import ProviderConfig
from pagefuse.exceptions import ConfigurationError, ProviderError, ValidationError
from pagefuse.observability import histogram, increment

from .models import ProviderResponse

logger = structlog.get_logger(__name__)


class FirecrawlClient:
    """
    Issues one scrape request per call and decodes the multi-format response.

    The request asks for markdown, html, links and a full-page screenshot,
    lets dynamic content settle, and accepts a cached render younger than
    ``max_age_ms``. Failures are raised as ProviderError; retrying is left
    to the caller.
    """

    def __init__(self, config: ProviderConfig, client: httpx.AsyncClient | None = None):
        """
        Args:
            config: Provider settings, including the API key.
            client: An optional httpx.AsyncClient. If not provided, one is
                    created and owned by this instance.
        """
        self.config = config
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> FirecrawlClient:
        return self

    async def __aexit__(self, exc_type: Optional[type], exc_val: Optional[BaseException], exc_tb: Any) -> None:
        await self.close()

    def build_request(self, url: str) -> Dict[str, Any]:
        """Return the JSON body sent to the scrape endpoint."""
        cfg = self.config
        return {
            "url": url,
            "formats": list(cfg.formats),
            "waitFor": cfg.wait_for_ms,
            "timeout": cfg.timeout_ms,
            "blockAds": cfg.block_ads,
            "maxAge": cfg.max_age_ms,
            "includeTags": list(cfg.include_tags),
            "onlyMainContent": cfg.only_main_content,
            "actions": [
                {"type": "wait", "milliseconds": cfg.settle_ms},
                {"type": "screenshot", "fullPage": cfg.full_page_screenshot},
            ],
        }

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.request_timeout)
        return self._client

    async def scrape(self, url: str) -> ProviderResponse:
        """Scrape ``url`` through the provider.

        Raises:
            ValidationError: If ``url`` is empty.
            ConfigurationError: If no API key is configured. Raised before any
                network activity.
            ProviderError: On transport failure, a non-2xx status, or a body
                without a successful ``data`` payload.
        """
        if not url:
            raise ValidationError("URL is required")
        if not self.config.api_key:
            raise ConfigurationError("FIRECRAWL_API_KEY environment variable is not set")

        log = logger.bind(component="provider", url=url)
        log.info("Scraping with Firecrawl")

        started = time.perf_counter()
        try:
            response = await self._get_client().post(
                self.config.endpoint,
                headers={
                    "Authorization": f"Bearer {self.config.api_key}",
                    "Content-Type": "application/json",
                },
                json=self.build_request(url),
                timeout=self.config.request_timeout,
            )
        except httpx.HTTPError as e:
            increment("provider_responses", labels={"status_class": "error"})
            log.warning("Firecrawl request failed", error=str(e))
            raise ProviderError(f"Firecrawl request failed: {e}") from e
        finally:
            histogram("provider_latency_seconds", time.perf_counter() - started)

        increment("provider_responses", labels={"status_class": f"{response.status_code // 100}xx"})

        if not response.is_success:
            log.warning("Firecrawl returned an error status", status=response.status_code)
            raise ProviderError(
                f"Firecrawl API error: {response.text}",
                body=response.text,
                upstream_status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderError("Firecrawl returned a non-JSON body", body=response.text) from e

        if not isinstance(payload, dict) or not payload.get("success") or not isinstance(payload.get("data"), dict):
            raise ProviderError("Failed to scrape content", body=response.text, upstream_status=response.status_code)

        result = ProviderResponse.from_payload(payload["data"])
        log.info(
            "Firecrawl scrape complete",
            cached=result.cached,
            links=len(result.links),
            has_screenshot=bool(result.screenshot),
        )
        return result

    async def close(self) -> None:
        """Closes the underlying HTTP client if it was created internally."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
