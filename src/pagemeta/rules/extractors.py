"""
Extraction primitives.

Each extractor has the signature ``(document, target_url, selectors)`` and
returns an ``ExtractResult``. Extractors are pure: they only read the parsed
tree.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterator, List, Optional, Sequence

import structlog
from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from .base import ExtractFunc
from .results import NO_RESULT, ExtractResult, MultiValue, SelectorInfo, SingleValue

logger = structlog.get_logger(__name__)

JSON_LD_SELECTOR = 'script[type="application/ld+json"]'


def _attribute(node: Tag, attribute: str) -> Optional[str]:
    value = node.get(attribute)
    if value is None:
        return None
    # bs4 hands back multi-valued attributes (rel, class) as lists
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def _first_text_child(node: Tag) -> Optional[str]:
    for child in node.children:
        if isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            text = child.strip()
            if text:
                return text
    return None


def extract_attr(attribute: str) -> ExtractFunc:
    """Build an extractor reading ``attribute`` off the first node matched by each selector."""

    def extractor(document: BeautifulSoup, target_url: str, selectors: Sequence[str]) -> ExtractResult:
        for selector in selectors:
            node = document.select_one(selector)
            if node is None:
                continue
            value = _attribute(node, attribute)
            if value is not None:
                return SingleValue(value, SelectorInfo(selector=selector, attribute=attribute, in_meta=False))
        return NO_RESULT

    extractor.__name__ = f"extract_attr_{attribute.replace('-', '_')}"
    return extractor


def extract_all_attr(attribute: str) -> ExtractFunc:
    """Build an extractor collecting ``attribute`` from every node matched by every selector."""

    def extractor(document: BeautifulSoup, target_url: str, selectors: Sequence[str]) -> ExtractResult:
        values: List[str] = []
        matched = ""
        for selector in selectors:
            for node in document.select(selector):
                value = _attribute(node, attribute)
                if value is not None and value.strip():
                    values.append(value.strip())
                    matched = matched or selector
        if not values:
            return NO_RESULT
        return MultiValue(tuple(values), SelectorInfo(selector=matched, attribute=attribute, in_meta=False))

    extractor.__name__ = f"extract_all_attr_{attribute.replace('-', '_')}"
    return extractor


_extract_content = extract_attr("content")


def extract_meta(document: BeautifulSoup, target_url: str, selectors: Sequence[str]) -> ExtractResult:
    """Read the ``content`` attribute of meta-like tags.

    The first selector whose node carries ``content`` decides the outcome: a
    blank value ends the strategy with no result.
    """
    result = _extract_content(document, target_url, selectors)
    if not isinstance(result, SingleValue):
        return NO_RESULT
    value = result.text.strip()
    if not value:
        return NO_RESULT
    return SingleValue(value, SelectorInfo(selector=result.selector_info.selector, attribute="content", in_meta=True))


def extract_css(document: BeautifulSoup, target_url: str, selectors: Sequence[str]) -> ExtractResult:
    """Read the first text child of the first node matched by each selector."""
    for selector in selectors:
        node = document.select_one(selector)
        if node is None:
            continue
        text = _first_text_child(node)
        if text is not None:
            return SingleValue(text, SelectorInfo(selector=selector, attribute="text", in_meta=False))
    return NO_RESULT


extract_time = extract_attr("datetime")


def _json_ld_objects(document: BeautifulSoup) -> Iterator[Dict[str, Any]]:
    for script in document.select(JSON_LD_SELECTOR):
        raw = (script.string or script.get_text()).strip()
        if not raw:
            continue
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.debug("Skipping malformed JSON-LD block", error=str(e))
            continue

        candidates = data if isinstance(data, list) else [data]
        for candidate in candidates:
            if not isinstance(candidate, dict):
                continue
            yield candidate
            graph = candidate.get("@graph")
            if isinstance(graph, list):
                yield from (item for item in graph if isinstance(item, dict))


def _walk_path(obj: Dict[str, Any], path: str) -> Optional[str]:
    current = obj
    for key in path.split("."):
        value = current.get(key)
        if isinstance(value, dict):
            current = value
        elif isinstance(value, str):
            return value
        else:
            return None
    return None


def extract_json_ld(document: BeautifulSoup, target_url: str, selectors: Sequence[str]) -> ExtractResult:
    """Resolve dotted paths (``author.name``) against JSON-LD blocks.

    Blocks are scanned in document order and selectors in priority order; the
    first string reached wins. A string found part-way along a path is
    returned as-is, anything other than an object or string abandons the path.
    """
    for obj in _json_ld_objects(document):
        for selector in selectors:
            value = _walk_path(obj, selector)
            if value is not None:
                return SingleValue(value, SelectorInfo(selector=selector, attribute="json-ld", in_meta=False))
    return NO_RESULT
