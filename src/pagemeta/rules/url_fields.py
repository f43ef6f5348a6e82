"""
Rules for URL-valued metadata fields: canonical URL, favicon, feeds and the
lead image.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

import structlog
from bs4 import BeautifulSoup

from ..errors import ValueNotFoundError
from ..utils.images import is_valid_image
from ..utils.urls import fix_relative_path, origin
from .base import ExtractionStrategy, Rule
from .extractors import extract_all_attr, extract_attr, extract_json_ld, extract_meta
from .results import ExtractResult, MultiValue, SelectorInfo, SingleValue

logger = structlog.get_logger(__name__)

ImageValidator = Callable[[str], bool]
Strategies = Tuple[ExtractionStrategy, ...]

_NOT_TRACKING_PIXEL = ":not([width='1']):not([height='1'])"


def canonical_strategies() -> Strategies:
    return (
        ExtractionStrategy(
            ("meta[property='og:url']", "meta[name='twitter:url']", "meta[property='twitter:url']"),
            extract_attr("content"),
        ),
        ExtractionStrategy(
            ("link[rel='canonical']", "link[rel='alternate'][hreflang='x-default']"),
            extract_attr("href"),
        ),
    )


def favicon_strategies() -> Strategies:
    return (
        ExtractionStrategy(
            (
                "link[rel='icon']",
                "link[rel='shortcut icon']",
                "link[rel='apple-touch-icon']",
                "link[rel='apple-touch-icon-precomposed']",
                "link[rel~='mask-icon']",
            ),
            extract_attr("href"),
        ),
    )


def feed_strategies() -> Strategies:
    # One strategy per feed flavour; the feed rule runs all of them
    return (
        ExtractionStrategy(("link[type='application/rss+xml']",), extract_all_attr("href")),
        ExtractionStrategy(("link[type='application/feed+json']",), extract_all_attr("href")),
        ExtractionStrategy(("link[type='application/atom+xml']",), extract_all_attr("href")),
    )


def lead_image_strategies() -> Strategies:
    return (
        ExtractionStrategy(
            (
                "meta[property='og:image:secure_url']",
                "meta[property='og:image:url']",
                "meta[property='og:image']",
                "meta[name='og:image']",
                "meta[name='twitter:image:src']",
                "meta[property='twitter:image:src']",
                "meta[name='twitter:image']",
                "meta[property='twitter:image']",
                "meta[itemprop='image']",
            ),
            extract_meta,
        ),
        ExtractionStrategy(("image.url", "image", "thumbnailUrl"), extract_json_ld),
        ExtractionStrategy((f"img[src]{_NOT_TRACKING_PIXEL}",), extract_attr("src")),
        ExtractionStrategy((f"img[data-src]{_NOT_TRACKING_PIXEL}",), extract_attr("data-src")),
        ExtractionStrategy((f"img[data-lazy-src]{_NOT_TRACKING_PIXEL}",), extract_attr("data-lazy-src")),
    )


class CanonicalRule(Rule):
    """Canonical URL; the target URL itself when the page declares none."""

    name = "canonical"

    def default_strategies(self) -> Sequence[ExtractionStrategy]:
        return canonical_strategies()

    def extract(self, document: BeautifulSoup, target_url: str) -> ExtractResult:
        try:
            result = super().extract(document, target_url)
        except ValueNotFoundError:
            return SingleValue(target_url, SelectorInfo(selector="content", attribute="href", in_meta=False))

        value = str(result.value)
        if not value.startswith("http"):
            value = fix_relative_path(target_url, value)

        info = result.selector_info
        return SingleValue(
            value,
            SelectorInfo(selector=info.selector, attribute=info.attribute, in_meta=info.attribute == "content"),
        )


class FaviconRule(Rule):
    """Favicon link, falling back to probing ``/favicon.ico`` on the target host.

    ``image_validator`` performs the probe; ``None`` disables it.
    """

    name = "favicon"

    def __init__(
        self,
        strategies: Optional[Sequence[ExtractionStrategy]] = None,
        *,
        image_validator: Optional[ImageValidator] = is_valid_image,
    ) -> None:
        super().__init__(strategies)
        self.image_validator = image_validator

    def default_strategies(self) -> Sequence[ExtractionStrategy]:
        return favicon_strategies()

    def extract(self, document: BeautifulSoup, target_url: str) -> ExtractResult:
        try:
            return super().extract(document, target_url)
        except ValueNotFoundError:
            if self.image_validator is None:
                raise

        favicon_url = f"{origin(target_url)}/favicon.ico"
        if self.image_validator(favicon_url):
            return SingleValue(favicon_url, SelectorInfo(selector="favicon.ico", attribute="href", in_meta=False))

        logger.debug("No favicon found", url=target_url, probed=favicon_url)
        raise ValueNotFoundError(self.name)


class FeedRule(Rule):
    """Every RSS, JSON Feed and Atom link on the page.

    Unlike other rules all strategies run and their matches are combined.
    """

    name = "feed"

    def default_strategies(self) -> Sequence[ExtractionStrategy]:
        return feed_strategies()

    def extract(self, document: BeautifulSoup, target_url: str) -> ExtractResult:
        feeds: List[str] = []
        for strategy in self.strategies:
            result = strategy.run(document, target_url)
            if not result.found:
                continue
            if isinstance(result, MultiValue):
                feeds.extend(result.values)
            else:
                feeds.append(str(result.value))

        if not feeds:
            raise ValueNotFoundError(self.name)

        return MultiValue(
            tuple(fix_relative_path(target_url, feed) for feed in feeds),
            SelectorInfo(selector="feed", attribute="href", in_meta=False),
        )


class LeadImageRule(Rule):
    name = "lead_image"

    def default_strategies(self) -> Sequence[ExtractionStrategy]:
        return lead_image_strategies()
