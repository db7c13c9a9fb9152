"""
The fused, AI-ready document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from pagefuse.extractor.models import AssetManifest
from pagefuse.provider.models import ProviderLink


@dataclass(slots=True, frozen=True)
class FusedDocument:
    """Provider content merged with DOM-derived assets, as prose and as fields."""

    formatted_text: str
    title: str
    description: str
    content: str
    url: str
    images: Tuple[ProviderLink, ...] = ()
    stylesheets: Tuple[ProviderLink, ...] = ()
    fonts: Tuple[ProviderLink, ...] = ()
    raw_html: Optional[str] = None
    screenshot: Optional[str] = None
    extracted_assets: Optional[AssetManifest] = None

    @property
    def structured(self) -> Dict[str, Any]:
        """The same data as :attr:`formatted_text`, field by field."""
        return {
            "title": self.title,
            "description": self.description,
            "content": self.content,
            "url": self.url,
            "images": [link.to_dict() for link in self.images],
            "stylesheets": [link.to_dict() for link in self.stylesheets],
            "fonts": [link.to_dict() for link in self.fonts],
            "rawHtml": self.raw_html,
            "screenshot": self.screenshot,
            "extractedAssets": self.extracted_assets.to_dict() if self.extracted_assets else None,
        }
