"""
PageFuse Asset Extraction Module

Parses an HTML document with BeautifulSoup and recovers its visual assets:
images, background images, stylesheets, fonts, inline style blocks, the
color palette found in those blocks, and the layout landmarks.
"""

from .asset_extractor import AssetExtractor
from .colors import harvest_blocks, harvest_colors, unique_colors
from .models import LAYOUT_TAGS, AssetManifest, ImageAsset, LayoutElement, LinkAsset
from .protocols import Extractor

__all__ = [
    "AssetExtractor",
    "AssetManifest",
    "Extractor",
    "ImageAsset",
    "LAYOUT_TAGS",
    "LayoutElement",
    "LinkAsset",
    "harvest_blocks",
    "harvest_colors",
    "unique_colors",
]
