"""
Resolution of authored resource references against a page origin.
"""

from __future__ import annotations

from urllib.parse import urljoin, urlparse

import structlog

logger = structlog.get_logger(__name__)

ABSOLUTE_PREFIXES = ("http://", "https://")
DEFAULT_PORTS = {"http": 80, "https": 443}


def page_origin(url: str | None) -> str:
    """Return ``scheme://host[:port]`` for an absolute URL, or ``""``.

    Scheme and host are lowercased, credentials are dropped and the port is
    kept only when it differs from the scheme default. Relative, empty and
    unparsable URLs have no origin; callers then keep authored references as
    they are.
    """
    if not url:
        return ""
    try:
        parsed = urlparse(url.strip())
        port = parsed.port
    except ValueError:
        logger.debug("Could not parse page URL", url=url)
        return ""
    host = parsed.hostname
    if not parsed.scheme or not host:
        return ""

    scheme = parsed.scheme.lower()
    if ":" in host:
        host = f"[{host}]"
    if port is not None and port != DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"
    return f"{scheme}://{host}"


def resolve_url(candidate: str, base_origin: str | None) -> str:
    """Resolve ``candidate`` against ``base_origin``.

    Absolute http(s) references pass through untouched. Without an origin the
    candidate is returned as authored. A reference that cannot be joined is
    also returned as authored so one bad attribute never fails a page.
    """
    if candidate.startswith(ABSOLUTE_PREFIXES):
        return candidate
    if not base_origin:
        return candidate
    try:
        return urljoin(base_origin, candidate)
    except ValueError as e:
        logger.debug("URL resolution failed, keeping original", candidate=candidate, error=str(e))
        return candidate
