"""
PageFuse - Web-page asset extraction and content fusion for AI consumers.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .extractor import AssetExtractor, AssetManifest
from .fusion import ContentFuser, FusedDocument
from .pipeline import ScrapePipeline

__all__ = ["__version__", "Config", "AssetExtractor", "AssetManifest", "ContentFuser", "FusedDocument", "ScrapePipeline"]
