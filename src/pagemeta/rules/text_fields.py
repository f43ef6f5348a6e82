"""
Rules for the plain-text metadata fields.

Strategy lists are produced by factory functions so every rule instance owns
its own immutable tuple.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from bs4 import BeautifulSoup

from ..errors import ValueNotFoundError
from ..utils.urls import extract_domain
from .base import ExtractionStrategy, Rule
from .extractors import extract_attr, extract_css, extract_json_ld, extract_meta, extract_time
from .results import ExtractResult, SelectorInfo, SingleValue

Strategies = Tuple[ExtractionStrategy, ...]


def author_strategies() -> Strategies:
    return (
        ExtractionStrategy(("author.name", "brand.name", "creator.name"), extract_json_ld),
        ExtractionStrategy(
            (
                "meta[name='author']",
                "meta[property='article:author']",
                "meta[property='dc:creator']",
                'meta[property="schema:author"]',
                'meta[name="dc.creator"]',
                'meta[itemprop="author"]',
            ),
            extract_meta,
        ),
        ExtractionStrategy(
            (
                # RDFa
                'span[property="schema:author"]',
                'div[typeof="schema:Person"] span[property="schema:name"]',
                'span[property="dc:creator"]',
                'div[typeof="dc:Person"] span[property="dc:name"]',
                # Microdata
                'span[itemprop="author"]',
                'div[itemtype="http://schema.org/Person"] span[itemprop="name"]',
                # Common class and id conventions
                'span[class="author"]',
                'a[rel="author"]',
                'span[id="author"]',
            ),
            extract_css,
        ),
    )


def date_strategies() -> Strategies:
    return (
        ExtractionStrategy(("datePublished", "dateCreated", "dateModified"), extract_json_ld),
        ExtractionStrategy(
            (
                "meta[property='article:published_time']",
                "meta[property*='published_time']",
                "[itemprop*='datepublished']",
                "[itemprop*='datePublished']",
                "meta[property='og:published_time']",
                "meta[name='article:published_time']",
                "meta[name='og:published_time']",
                "meta[property*='modified_time']",
                "[itemprop*='datemodified']",
                "[itemprop*='dateModified']",
                "[itemprop*='date']",
            ),
            extract_meta,
        ),
        ExtractionStrategy(("time[itemprop*='date']", "time[datetime]"), extract_time),
        ExtractionStrategy(
            (
                ".post-date",
                ".entry-date",
                ".article-date",
                "[id*='date']",
                "[class*='date']",
                "[class*='time']",
            ),
            extract_css,
        ),
    )


def description_strategies() -> Strategies:
    return (
        ExtractionStrategy(
            (
                "meta[property='og:description']",
                "meta[name='twitter:description']",
                "meta[property='twitter:description']",
                "meta[name='description']",
                "meta[itemprop='description']",
            ),
            extract_meta,
        ),
        ExtractionStrategy(("description", "articleBody"), extract_json_ld),
        ExtractionStrategy(
            (
                ".post-description",
                ".entry-description",
                ".article-description",
                ".post-content p",
                ".entry-content p",
                ".article-content p",
                ".post-content",
                ".entry-content",
                ".article-content",
                ".post-body",
                ".entry-body",
                ".article-body",
                ".post",
                ".entry",
            ),
            extract_css,
        ),
    )


def lang_strategies() -> Strategies:
    return (
        ExtractionStrategy(("meta[property='og:locale']", "meta[itemprop='inLanguage']"), extract_meta),
        ExtractionStrategy(("inLanguage",), extract_json_ld),
        ExtractionStrategy(("html",), extract_attr("lang")),
    )


def publisher_strategies() -> Strategies:
    return (
        ExtractionStrategy(("publisher.name", "brand.name"), extract_json_ld),
        ExtractionStrategy(
            (
                "meta[property='og:site_name']",
                "meta[name*='application-name']",
                "meta[name*='app-title']",
                "meta[property*='app_name']",
                "meta[name='publisher']",
                "meta[name='twitter:app:name:iphone']",
                "meta[property='twitter:app:name:iphone']",
                "meta[name='twitter:app:name:ipad']",
                "meta[property='twitter:app:name:ipad']",
                "meta[name='twitter:app:name:googleplay']",
                "meta[property='twitter:app:name:googleplay']",
            ),
            extract_meta,
        ),
        ExtractionStrategy(("#logo", ".logo", "a[class*='brand']", "[class*='brand']"), extract_css),
        ExtractionStrategy(("[class*='logo'] a img[alt]", "[class*='logo'] img[alt]"), extract_attr("alt")),
    )


def title_strategies() -> Strategies:
    return (
        ExtractionStrategy(
            ("meta[property='og:title']", "meta[name='twitter:title']", "meta[property='twitter:title']"),
            extract_meta,
        ),
        ExtractionStrategy(("title",), extract_css),
        ExtractionStrategy(("headline",), extract_json_ld),
        ExtractionStrategy(
            (".post-title", ".entry-title", "h1[class*='title' i] a", "h1[class*='title' i]"),
            extract_css,
        ),
    )


def site_name_strategies() -> Strategies:
    return (
        ExtractionStrategy(
            (
                "meta[property='og:site_name']",
                "meta[name='og:site_name']",
                "meta[property='twitter:site_name']",
                "meta[name='twitter:site_name']",
                "meta[itemprop='name']",
                "meta[name='application-name']",
            ),
            extract_meta,
        ),
    )


class AuthorRule(Rule):
    name = "author"

    def default_strategies(self) -> Sequence[ExtractionStrategy]:
        return author_strategies()


class DateRule(Rule):
    name = "date"

    def default_strategies(self) -> Sequence[ExtractionStrategy]:
        return date_strategies()


class DescriptionRule(Rule):
    name = "description"

    def default_strategies(self) -> Sequence[ExtractionStrategy]:
        return description_strategies()


class LangRule(Rule):
    name = "lang"

    def default_strategies(self) -> Sequence[ExtractionStrategy]:
        return lang_strategies()


class PublisherRule(Rule):
    name = "publisher"

    def default_strategies(self) -> Sequence[ExtractionStrategy]:
        return publisher_strategies()


class TitleRule(Rule):
    name = "title"

    def default_strategies(self) -> Sequence[ExtractionStrategy]:
        return title_strategies()


class SiteNameRule(Rule):
    """Site name, falling back to the bare domain of the target URL."""

    name = "site_name"

    def default_strategies(self) -> Sequence[ExtractionStrategy]:
        return site_name_strategies()

    def extract(self, document: BeautifulSoup, target_url: str) -> ExtractResult:
        try:
            return super().extract(document, target_url)
        except ValueNotFoundError:
            domain = extract_domain(target_url)
            if not domain:
                raise
            return SingleValue(domain, SelectorInfo(selector="domain", attribute="host", in_meta=False))
