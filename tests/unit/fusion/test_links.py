"""
Unit tests for provider link classification.
"""

from pagefuse.fusion.links import classify_links, is_font_link, is_image_link, is_stylesheet_link
from pagefuse.provider.models import ProviderLink


def test_image_links():
    assert is_image_link(ProviderLink(href="https://ex.com/a.PNG"))
    assert is_image_link(ProviderLink(href="https://ex.com/icon.ico"))
    assert not is_image_link(ProviderLink(href="https://ex.com/a.png?v=2"))


def test_stylesheet_links():
    assert is_stylesheet_link(ProviderLink(href="https://ex.com/theme", rel="stylesheet"))
    assert is_stylesheet_link(ProviderLink(href="https://ex.com/site.css?v=1"))
    assert not is_stylesheet_link(ProviderLink(href="https://ex.com/about"))


def test_font_links():
    assert is_font_link(ProviderLink(href="https://fonts.googleapis.com/css2?family=Inter"))
    assert is_font_link(ProviderLink(href="https://ex.com/f/x.TTF"))
    assert not is_font_link(ProviderLink(href="https://ex.com/about"))


def test_classify_provider_links(provider_response):
    groups = classify_links(provider_response.links)

    assert [link.href for link in groups.images] == ["https://example.com/logo.png"]
    assert [link.href for link in groups.stylesheets] == ["https://example.com/app.css"]
    assert [link.href for link in groups.fonts] == ["https://fonts.gstatic.com/s/inter.woff2"]


def test_link_in_several_groups():
    svg = ProviderLink(href="https://ex.com/fonts/glyphs.svg")
    groups = classify_links([svg])
    assert groups.images == (svg,)
    assert groups.fonts == (svg,)
    assert groups.stylesheets == ()


def test_no_links():
    groups = classify_links([])
    assert (groups.images, groups.stylesheets, groups.fonts) == ((), (), ())
