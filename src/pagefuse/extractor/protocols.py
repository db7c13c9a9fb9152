"""
Protocols for pluggable HTML asset extraction strategies.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .models import AssetManifest


@runtime_checkable
class Extractor(Protocol):
    """Pluggable HTML-to-AssetManifest strategy."""

    name: str

    def extract(self, html: str, *, url: str | None = None) -> AssetManifest:
        """Extract the asset manifest from an HTML string.

        Args:
            html: HTML content to extract from
            url: Optional page URL; its origin resolves relative references

        Returns:
            AssetManifest with every asset category
        """
        ...
