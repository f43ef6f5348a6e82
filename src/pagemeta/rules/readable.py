"""
Readable article content via readability-lxml.

The boilerplate-removal algorithm itself lives in readability-lxml; this
module only runs it and maps its output (plus a few page-level meta tags) onto
a ``ReadableValue``.
"""

from __future__ import annotations

from typing import Sequence

import structlog
from bs4 import BeautifulSoup
from readability import Document

from ..utils.urls import fix_relative_path
from .base import ExtractFunc, ExtractionStrategy, Rule
from .extractors import extract_attr, extract_css, extract_meta
from .results import NO_RESULT, ExtractResult, ReadableResult, ReadableValue, SelectorInfo

logger = structlog.get_logger(__name__)

EXCERPT_LENGTH = 255
EXCERPT_SUFFIX = "..."

# Placeholder readability-lxml returns for documents without a <title>
NO_TITLE = "[no-title]"

# Articles shorter than this are considered too thin to be worth reading mode
MIN_READABLE_LENGTH = 140

_EXCERPT_SELECTORS = (
    "meta[property='og:description']",
    "meta[name='twitter:description']",
    "meta[name='description']",
)
_IMAGE_SELECTORS = ("meta[property='og:image']", "meta[name='twitter:image']")
_BYLINE_META_SELECTORS = ("meta[name='author']", "meta[property='article:author']")
_BYLINE_CSS_SELECTORS = ("[rel='author']", "[itemprop='author']", ".byline")
_SITE_NAME_SELECTORS = ("meta[property='og:site_name']",)


def truncate_excerpt(excerpt: str, limit: int = EXCERPT_LENGTH) -> str:
    """Cut ``excerpt`` to ``limit`` characters, marking the cut with an ellipsis."""
    if len(excerpt) <= limit:
        return excerpt
    return excerpt[:limit] + EXCERPT_SUFFIX


def _first_value(document: BeautifulSoup, target_url: str, extractor: ExtractFunc, selectors: Sequence[str]) -> str:
    result = extractor(document, target_url, selectors)
    return str(result.value).strip() if result.found else ""


def _summary_text(content_html: str) -> tuple[str, str]:
    """Return (plain text, first paragraph) of readability's article HTML."""
    soup = BeautifulSoup(content_html, "html.parser")
    text = " ".join(soup.get_text(" ").split())
    paragraph = soup.find("p")
    first_paragraph = " ".join(paragraph.get_text(" ").split()) if paragraph else ""
    return text, first_paragraph


def extract_readable(document: BeautifulSoup, target_url: str, selectors: Sequence[str]) -> ExtractResult:
    """Run readability over the whole document. Selectors are ignored."""
    try:
        article = Document(str(document), url=target_url)
        content_html = article.summary(html_partial=True)
        title = article.short_title() or article.title()
    except Exception as e:
        logger.debug("Readability extraction failed", url=target_url, error=str(e))
        return NO_RESULT

    text, first_paragraph = _summary_text(content_html or "")
    if not text:
        return NO_RESULT

    excerpt = _first_value(document, target_url, extract_meta, _EXCERPT_SELECTORS) or first_paragraph
    image = _first_value(document, target_url, extract_meta, _IMAGE_SELECTORS)
    byline = _first_value(document, target_url, extract_meta, _BYLINE_META_SELECTORS) or _first_value(
        document, target_url, extract_css, _BYLINE_CSS_SELECTORS
    )

    value = ReadableValue(
        excerpt=truncate_excerpt(excerpt),
        html=content_html,
        text=text,
        image=fix_relative_path(target_url, image) if image else "",
        lang=_first_value(document, target_url, extract_attr("lang"), ("html",)),
        length=len(text),
        title="" if title == NO_TITLE else title or "",
        byline=byline,
        site_name=_first_value(document, target_url, extract_meta, _SITE_NAME_SELECTORS),
        is_readable=len(text) >= MIN_READABLE_LENGTH,
    )
    return ReadableResult(value, SelectorInfo(selector="readable", attribute="readable", in_meta=False))


def readable_strategies() -> Sequence[ExtractionStrategy]:
    return (ExtractionStrategy(("html",), extract_readable),)


class ReadableRule(Rule):
    name = "readable"

    def default_strategies(self) -> Sequence[ExtractionStrategy]:
        return readable_strategies()
