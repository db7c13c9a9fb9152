"""
Shared fixtures for the PageFuse test suite.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List

import httpx
import pytest
import structlog

from pagefuse.config import AssetsConfig, Config, ProviderConfig
from pagefuse.provider.models import ProviderResponse


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


@pytest.fixture(scope="session", autouse=True)
def structlog_to_stdlib():
    """Send log events through stdlib logging so they never reach command stdout."""
    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars, structlog.processors.KeyValueRenderer()],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def restore_logging():
    """Undo configure_logging: root handlers, root level and the structlog configuration."""
    root = logging.getLogger()
    level = root.level
    saved = structlog.get_config()
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    structlog.configure(**saved)


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep real credentials and config files out of the tests."""
    monkeypatch.delenv("FIRECRAWL_API_KEY", raising=False)
    monkeypatch.delenv("PAGEFUSE_CONFIG", raising=False)


# ============================================================================
# HTML Fixtures
# ============================================================================


@pytest.fixture
def sample_html() -> str:
    """A page exercising every asset category."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Acme Widgets</title>
        <link rel="stylesheet" href="/css/site.css">
        <link rel="stylesheet" href="https://fonts.googleapis.com/css2?family=Inter">
        <link rel="preload" href="/static/inter.woff2" as="font">
        <link rel="icon" href="/favicon.ico">
        <style>
            body { color: #333; background: rgb(250, 250, 250); }
            .btn { color: #FFF; border-color: hsl(210, 50%, 40%); }
        </style>
        <style>.btn:hover { color: #FFF; background: rgba(0,0,0,0.5); }</style>
    </head>
    <body>
        <header class="site-header" id="top">
            <nav class="main-nav"><a href="/">Home</a></nav>
        </header>
        <main>
            <section id="hero" style="background-image: url('/img/hero.jpg'); height: 400px">
                <img src="/img/logo.png" alt="Acme logo" class="logo big" width="120" height="40">
                <img src="">
                <img src="https://cdn.example.org/banner.webp">
            </section>
            <article><p>Widgets for everyone.</p></article>
        </main>
        <aside class="sidebar"></aside>
        <footer></footer>
    </body>
    </html>
    """


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def test_config() -> Config:
    """Configuration with a dummy provider key and in-process enrichment."""
    return Config(
        provider=ProviderConfig(api_key="test-key", endpoint="https://provider.test/v1/scrape"),
        assets=AssetsConfig(),
    )


# ============================================================================
# Provider Fixtures
# ============================================================================


@pytest.fixture
def provider_data() -> Dict[str, Any]:
    """The ``data`` object of a successful provider scrape."""
    return {
        "markdown": "# Acme “Widgets” — the best…",
        "html": (
            '<html><head><link rel="stylesheet" href="/app.css"><style>a{color:#0af}</style></head>'
            '<body><header class="top"></header><img src="/hero.png" alt="Hero" class="hero"></body></html>'
        ),
        "rawHtml": "<html><body>raw</body></html>",
        "links": [
            "https://example.com/about",
            {"href": "https://example.com/logo.png", "text": "Logo"},
            {"href": "https://example.com/app.css", "rel": "stylesheet"},
            "https://fonts.gstatic.com/s/inter.woff2",
        ],
        "screenshot": "https://provider.test/screenshots/abc.png",
        "metadata": {"title": "Acme ‘Widgets’", "description": "Widgets «for» all", "statusCode": 200},
        "cached": True,
    }


@pytest.fixture
def provider_response(provider_data) -> ProviderResponse:
    return ProviderResponse.from_payload(provider_data)


class RecordingTransport:
    """httpx MockTransport wrapper that records every request it answers."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []
        self._handler = handler
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport)

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def provider_transport(provider_data) -> RecordingTransport:
    """A transport answering every scrape with ``provider_data``."""
    return RecordingTransport(lambda request: httpx.Response(200, json={"success": True, "data": provider_data}))


@pytest.fixture
def make_transport() -> Callable[[Callable[[httpx.Request], httpx.Response]], RecordingTransport]:
    """Factory for recording transports with a custom handler."""
    return RecordingTransport
