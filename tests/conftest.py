"""
Shared test configuration for pagemeta.

Fixtures here build parsed documents and network-free extractors so unit
tests never touch the network.
"""

from typing import Callable, Dict, Optional

import httpx
import pytest
from bs4 import BeautifulSoup

from pagemeta.config import Config, ExtractionConfig
from pagemeta.errors import FetchError
from pagemeta.extractor import Extractor
from pagemeta.fetchers import FetchResponse
from pagemeta.models import Metadata

TARGET_URL = "https://example.com"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


# ============================================================================
# Document fixtures
# ============================================================================


@pytest.fixture
def parse() -> Callable[[str], BeautifulSoup]:
    """Return a helper that parses markup with the default tree builder."""

    def _parse(markup: str) -> BeautifulSoup:
        return BeautifulSoup(markup, "html.parser")

    return _parse


@pytest.fixture
def target_url() -> str:
    return TARGET_URL


@pytest.fixture
def article_html() -> str:
    """A typical article page carrying Open Graph, schema.org and feed links."""
    paragraph = (
        "Structured metadata lets crawlers understand a page without guessing. "
        "Open Graph tags, JSON-LD blocks and microdata all describe the same "
        "article from slightly different angles, and a robust extractor has to "
        "know which of them to trust first."
    )
    return f"""
    <html lang="en">
    <head>
        <title>Fallback Title</title>
        <meta property="og:title" content="OG Title"/>
        <meta property="og:description" content="OG Description"/>
        <meta property="og:site_name" content="Example News"/>
        <meta property="og:image" content="/images/lead.png"/>
        <meta property="article:published_time" content="2022-10-11T15:04:05Z"/>
        <link rel="icon" href="/static/icon.png"/>
        <link rel="alternate" type="application/rss+xml" href="/feed.rss"/>
        <link rel="alternate" type="application/atom+xml" href="https://example.com/feed.atom"/>
    </head>
    <body>
        <article>
            <h1>Article Heading</h1>
            <span property="schema:author">John Schema</span>
            <p>{paragraph}</p>
            <p>{paragraph}</p>
        </article>
    </body>
    </html>
    """


# ============================================================================
# Extraction fixtures
# ============================================================================


@pytest.fixture
def extractor() -> Extractor:
    """Extractor with the favicon probe disabled."""
    return Extractor(image_validator=None)


@pytest.fixture
def offline_config() -> Config:
    """Configuration that never probes the network for favicons."""
    return Config(extraction=ExtractionConfig(favicon_probe=False))


# ============================================================================
# Fetching fixtures
# ============================================================================


class StaticFetcher:
    """Fetcher serving canned responses keyed by URL."""

    def __init__(self, pages: Dict[str, str], name: str = "static", metadata: Optional[Metadata] = None):
        self.pages = pages
        self.name = name
        self.metadata = metadata
        self.calls = []

    def fetch(self, url: str) -> FetchResponse:
        self.calls.append(url)
        if url not in self.pages:
            raise FetchError(f"{self.name} has no page for {url}")
        return FetchResponse(
            status_code=200,
            headers={"Content-Type": "text/html; charset=utf-8"},
            body=self.pages[url].encode("utf-8"),
            url=url,
            metadata=self.metadata,
        )


@pytest.fixture
def static_fetcher_factory():
    """Build StaticFetcher instances."""
    return StaticFetcher


@pytest.fixture
def mock_transport_client():
    """Return a helper building an httpx.Client over a MockTransport handler."""
    clients = []

    def _build(handler) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _build

    for client in clients:
        client.close()
