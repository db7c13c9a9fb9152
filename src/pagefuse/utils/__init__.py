"""Utility modules for PageFuse."""

from .text import sanitize_quotes
from .urls import page_origin, resolve_url

__all__ = ["page_origin", "resolve_url", "sanitize_quotes"]
