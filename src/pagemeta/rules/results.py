"""
Extraction results.

Every extractor returns one of the result shapes below. Each shape knows how
to project itself onto a ``Metadata`` record, so the orchestrator never needs
to switch on field keys.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Tuple

from ..models import Metadata
from ..utils.text import normalize
from ..utils.urls import fix_relative_path


@dataclass(frozen=True)
class SelectorInfo:
    """Where a value was found."""

    selector: str = ""
    attribute: str = ""
    in_meta: bool = False


class ExtractResult(ABC):
    """Base class for all extraction results."""

    selector_info: SelectorInfo

    @property
    @abstractmethod
    def found(self) -> bool:
        """Whether the extractor matched anything."""

    @property
    @abstractmethod
    def value(self) -> Any:
        """The raw extracted value."""

    @abstractmethod
    def apply(self, key: str, target_url: str, metadata: Metadata) -> None:
        """Write this result onto ``metadata`` under the rule ``key``."""


class NoResult(ExtractResult):
    """Nothing was found."""

    selector_info = SelectorInfo()

    @property
    def found(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None

    def apply(self, key: str, target_url: str, metadata: Metadata) -> None:
        pass

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoResult)

    def __hash__(self) -> int:
        return hash(NoResult)

    def __repr__(self) -> str:
        return "NoResult()"


NO_RESULT = NoResult()


def _set_text(attr: str) -> Callable[[Metadata, str, str, SelectorInfo], None]:
    def setter(metadata: Metadata, value: str, target_url: str, info: SelectorInfo) -> None:
        setattr(metadata, attr, normalize(value))

    return setter


def _set_canonical(metadata: Metadata, value: str, target_url: str, info: SelectorInfo) -> None:
    canonical_url = fix_relative_path(target_url, value)
    metadata.canonical_url = canonical_url
    metadata.url = canonical_url


def _set_favicon(metadata: Metadata, value: str, target_url: str, info: SelectorInfo) -> None:
    metadata.favicon_url = fix_relative_path(target_url, value)


def _set_lead_image(metadata: Metadata, value: str, target_url: str, info: SelectorInfo) -> None:
    metadata.lead_image_url = fix_relative_path(target_url, value)
    metadata.lead_image_in_meta = info.in_meta


_SINGLE_VALUE_SETTERS: Dict[str, Callable[[Metadata, str, str, SelectorInfo], None]] = {
    "author": _set_text("author"),
    "canonical": _set_canonical,
    "date": _set_text("date"),
    "description": _set_text("description"),
    "favicon": _set_favicon,
    "lang": _set_text("lang"),
    "lead_image": _set_lead_image,
    "publisher": _set_text("publisher"),
    "site_name": _set_text("site_name"),
    "title": _set_text("title"),
}


@dataclass(frozen=True)
class SingleValue(ExtractResult):
    """A single string value."""

    text: str
    selector_info: SelectorInfo = field(default_factory=SelectorInfo)

    @property
    def found(self) -> bool:
        return True

    @property
    def value(self) -> str:
        return self.text

    def apply(self, key: str, target_url: str, metadata: Metadata) -> None:
        setter = _SINGLE_VALUE_SETTERS.get(key)
        if setter is None:
            metadata.dynamic[key] = self.text
        else:
            setter(metadata, self.text, target_url, self.selector_info)


@dataclass(frozen=True)
class MultiValue(ExtractResult):
    """A set of string values, e.g. every feed link on a page."""

    values: Tuple[str, ...]
    selector_info: SelectorInfo = field(default_factory=SelectorInfo)

    @property
    def found(self) -> bool:
        return len(self.values) > 0

    @property
    def value(self) -> List[str]:
        return list(self.values)

    def apply(self, key: str, target_url: str, metadata: Metadata) -> None:
        if key == "feed":
            metadata.feed_urls = list(self.values)
        else:
            metadata.dynamic[key] = list(self.values)


@dataclass(frozen=True)
class ReadableValue:
    """Article content produced by the readability delegate."""

    excerpt: str = ""
    html: str = ""
    text: str = ""
    image: str = ""
    lang: str = ""
    length: int = 0
    title: str = ""
    byline: str = ""
    site_name: str = ""
    is_readable: bool = False


@dataclass(frozen=True)
class ReadableResult(ExtractResult):
    """Composite result of the readability delegate."""

    readable: ReadableValue
    selector_info: SelectorInfo = field(default_factory=SelectorInfo)

    @property
    def found(self) -> bool:
        return True

    @property
    def value(self) -> ReadableValue:
        return self.readable

    def apply(self, key: str, target_url: str, metadata: Metadata) -> None:
        metadata.readable_excerpt = self.readable.excerpt
        metadata.readable_html = self.readable.html
        metadata.readable_text = self.readable.text
        metadata.readable_image = self.readable.image
        metadata.readable_lang = self.readable.lang
        metadata.readable_length = self.readable.length
        metadata.readable_title = self.readable.title
        metadata.readable_byline = self.readable.byline
        metadata.readable_site_name = self.readable.site_name
        metadata.is_readable = self.readable.is_readable
