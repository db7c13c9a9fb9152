"""
Data models for the scraping provider's response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(slots=True, frozen=True)
class ProviderLink:
    """A link reported by the provider."""

    href: str
    rel: Optional[str] = None
    text: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Any) -> Optional[ProviderLink]:
        """Decode a link sent either as a bare URL string or as an object."""
        if isinstance(raw, str):
            return cls(href=raw) if raw else None
        if isinstance(raw, dict) and raw.get("href"):
            return cls(href=str(raw["href"]), rel=raw.get("rel"), text=raw.get("text"))
        return None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"href": self.href}
        if self.rel is not None:
            data["rel"] = self.rel
        if self.text is not None:
            data["text"] = self.text
        return data


@dataclass(slots=True, frozen=True)
class ProviderResponse:
    """Multi-format render of one page as returned by the provider."""

    markdown: str = ""
    html: str = ""
    raw_html: str = ""
    links: Tuple[ProviderLink, ...] = ()
    screenshot: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    cached: bool = False

    @property
    def title(self) -> str:
        return self.metadata.get("title") or ""

    @property
    def description(self) -> str:
        return self.metadata.get("description") or ""

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> ProviderResponse:
        """Build a response from the ``data`` object of a successful scrape."""
        raw_links = data.get("links")
        links: List[ProviderLink] = []
        if isinstance(raw_links, list):
            for raw in raw_links:
                link = ProviderLink.from_raw(raw)
                if link is not None:
                    links.append(link)

        screenshot = data.get("screenshot")
        if not screenshot:
            # Screenshots taken by explicit actions are reported separately.
            actions = data.get("actions")
            action_shots = actions.get("screenshots") if isinstance(actions, dict) else None
            screenshot = action_shots[0] if isinstance(action_shots, list) and action_shots else None

        metadata = data.get("metadata")
        return cls(
            markdown=data.get("markdown") or "",
            html=data.get("html") or "",
            raw_html=data.get("rawHtml") or "",
            links=tuple(links),
            screenshot=screenshot,
            metadata=dict(metadata) if isinstance(metadata, dict) else {},
            cached=bool(data.get("cached", False)),
        )
