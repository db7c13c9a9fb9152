"""
Data models for asset extraction results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

LAYOUT_TAGS: Tuple[str, ...] = ("header", "nav", "main", "section", "article", "aside", "footer")


@dataclass(slots=True, frozen=True)
class ImageAsset:
    """An ``<img>`` with its resolved and authored source."""

    src: str
    original_src: str
    alt: str = ""
    class_name: str = ""
    width: Optional[str] = None
    height: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "src": self.src,
            "alt": self.alt,
            "className": self.class_name,
            "width": self.width,
            "height": self.height,
            "originalSrc": self.original_src,
        }


@dataclass(slots=True, frozen=True)
class LinkAsset:
    """A stylesheet or font ``<link>``."""

    href: str
    original_href: str
    rel: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"href": self.href}
        if self.rel is not None:
            data["rel"] = self.rel
        data["originalHref"] = self.original_href
        return data


@dataclass(slots=True, frozen=True)
class LayoutElement:
    """One structural landmark node, without its subtree."""

    tag: str
    class_name: str = ""
    id: str = ""

    def __post_init__(self) -> None:
        if self.tag not in LAYOUT_TAGS:
            raise ValueError(f"Not a layout landmark tag: {self.tag!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {"tag": self.tag, "className": self.class_name, "id": self.id}


@dataclass(slots=True, frozen=True)
class AssetManifest:
    """Every asset category recovered from one HTML document."""

    images: Tuple[ImageAsset, ...] = ()
    background_images: Tuple[str, ...] = ()
    stylesheets: Tuple[LinkAsset, ...] = ()
    fonts: Tuple[LinkAsset, ...] = ()
    inline_styles: Tuple[str, ...] = ()
    colors: Tuple[str, ...] = ()
    layout_elements: Tuple[LayoutElement, ...] = ()
    # Color occurrences before deduplication; None when only the unique list is known.
    colors_found: Optional[int] = None

    def __post_init__(self) -> None:
        if len(set(self.colors)) != len(self.colors):
            raise ValueError("colors must not contain duplicates")
        if self.colors_found is not None and self.colors_found < len(self.colors):
            raise ValueError("colors_found cannot be smaller than the number of unique colors")

    def counts(self) -> Dict[str, int]:
        """Per-category counts, keyed the way response metadata reports them."""
        return {
            "imagesCount": len(self.images),
            "backgroundImagesCount": len(self.background_images),
            "stylesheetsCount": len(self.stylesheets),
            "fontsCount": len(self.fonts),
            "colorsCount": len(self.colors) if self.colors_found is None else self.colors_found,
            "layoutElementsCount": len(self.layout_elements),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "images": [image.to_dict() for image in self.images],
            "backgroundImages": list(self.background_images),
            "stylesheets": [sheet.to_dict() for sheet in self.stylesheets],
            "fonts": [font.to_dict() for font in self.fonts],
            "inlineStyles": list(self.inline_styles),
            "colors": list(self.colors),
            "layoutElements": [element.to_dict() for element in self.layout_elements],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AssetManifest:
        """Rebuild a manifest from its wire form (as returned by /extract-assets)."""
        return cls(
            images=tuple(
                ImageAsset(
                    src=item["src"],
                    original_src=item.get("originalSrc", item["src"]),
                    alt=item.get("alt") or "",
                    class_name=item.get("className") or "",
                    width=item.get("width"),
                    height=item.get("height"),
                )
                for item in data.get("images") or []
            ),
            background_images=tuple(data.get("backgroundImages") or []),
            stylesheets=tuple(
                LinkAsset(href=item["href"], original_href=item.get("originalHref", item["href"]))
                for item in data.get("stylesheets") or []
            ),
            fonts=tuple(
                LinkAsset(
                    href=item["href"],
                    original_href=item.get("originalHref", item["href"]),
                    rel=item.get("rel", ""),
                )
                for item in data.get("fonts") or []
            ),
            inline_styles=tuple(data.get("inlineStyles") or []),
            colors=tuple(dict.fromkeys(data.get("colors") or [])),
            layout_elements=tuple(
                LayoutElement(
                    tag=item["tag"],
                    class_name=item.get("className") or "",
                    id=item.get("id") or "",
                )
                for item in data.get("layoutElements") or []
            ),
        )
