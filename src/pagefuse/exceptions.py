"""
Error taxonomy shared by the extraction and scraping flows.
"""

from __future__ import annotations


class PageFuseError(Exception):
    """Base class for all PageFuse errors."""

    status_code = 500


class ValidationError(PageFuseError, ValueError):
    """Raised when a required input is missing or empty."""

    status_code = 400


class ConfigurationError(PageFuseError):
    """Raised when a required setting (such as the provider API key) is absent."""

    pass


class ProviderError(PageFuseError):
    """Raised when the remote scraping provider fails or returns an unusable payload."""

    def __init__(self, message: str, *, body: str | None = None, upstream_status: int | None = None) -> None:
        super().__init__(message)
        self.body = body
        self.upstream_status = upstream_status


class ExtractionDegraded(PageFuseError):
    """Raised inside the enrichment pass; always caught and logged, never surfaced."""

    pass
