"""Client for the remote page-scraping provider."""

from __future__ import annotations

from .client import FirecrawlClient
from .models import ProviderLink, ProviderResponse

__all__ = ["FirecrawlClient", "ProviderLink", "ProviderResponse"]
