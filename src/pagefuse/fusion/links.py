"""
Coarse classification of provider links into asset categories.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Tuple

from pagefuse.provider.models import ProviderLink

IMAGE_HREF_PATTERN = re.compile(r"(jpg|jpeg|png|gif|svg|webp|bmp|ico)$", re.IGNORECASE)
FONT_HREF_PATTERN = re.compile(r"(woff|woff2|ttf|otf|eot)$", re.IGNORECASE)


@dataclass(slots=True, frozen=True)
class LinkGroups:
    images: Tuple[ProviderLink, ...] = ()
    stylesheets: Tuple[ProviderLink, ...] = ()
    fonts: Tuple[ProviderLink, ...] = ()


def is_image_link(link: ProviderLink) -> bool:
    return bool(IMAGE_HREF_PATTERN.search(link.href))


def is_stylesheet_link(link: ProviderLink) -> bool:
    return link.rel == "stylesheet" or ".css" in link.href


def is_font_link(link: ProviderLink) -> bool:
    return "font" in link.href or bool(FONT_HREF_PATTERN.search(link.href))


def classify_links(links: Iterable[ProviderLink]) -> LinkGroups:
    """Split the provider's flat link list by href extension and keywords.

    A link may land in more than one group (a ``.svg`` under ``/fonts/`` is
    both an image and a font). Works without any DOM-derived manifest.
    """
    links = tuple(links)
    return LinkGroups(
        images=tuple(link for link in links if is_image_link(link)),
        stylesheets=tuple(link for link in links if is_stylesheet_link(link)),
        fonts=tuple(link for link in links if is_font_link(link)),
    )
