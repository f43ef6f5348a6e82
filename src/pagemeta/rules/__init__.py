"""
pagemeta rule engine.

Each metadata field is resolved by a Rule: an ordered list of extraction
strategies tried until one matches. Rules are keyed by field name:

- author, date, description, lang, publisher, site_name, title: text fields
- canonical, favicon, feed, lead_image: URL fields, fixed up against the page URL
- readable: article content from readability-lxml
"""

from typing import Dict, Optional

from .base import ExtractFunc, ExtractionStrategy, Rule
from .extractors import (
    extract_all_attr,
    extract_attr,
    extract_css,
    extract_json_ld,
    extract_meta,
    extract_time,
)
from .readable import ReadableRule, extract_readable
from .results import (
    NO_RESULT,
    ExtractResult,
    MultiValue,
    NoResult,
    ReadableResult,
    ReadableValue,
    SelectorInfo,
    SingleValue,
)
from .text_fields import AuthorRule, DateRule, DescriptionRule, LangRule, PublisherRule, SiteNameRule, TitleRule
from .url_fields import CanonicalRule, FaviconRule, FeedRule, ImageValidator, LeadImageRule
from ..utils.images import is_valid_image


def default_rules(image_validator: Optional[ImageValidator] = is_valid_image) -> Dict[str, Rule]:
    """Build a fresh rule map with one default rule per known field."""
    return {
        "author": AuthorRule(),
        "canonical": CanonicalRule(),
        "date": DateRule(),
        "description": DescriptionRule(),
        "favicon": FaviconRule(image_validator=image_validator),
        "feed": FeedRule(),
        "lang": LangRule(),
        "lead_image": LeadImageRule(),
        "publisher": PublisherRule(),
        "readable": ReadableRule(),
        "site_name": SiteNameRule(),
        "title": TitleRule(),
    }


__all__ = [
    "default_rules",
    # Engine
    "Rule",
    "ExtractionStrategy",
    "ExtractFunc",
    # Results
    "ExtractResult",
    "NoResult",
    "NO_RESULT",
    "SingleValue",
    "MultiValue",
    "ReadableResult",
    "ReadableValue",
    "SelectorInfo",
    # Extractors
    "extract_attr",
    "extract_all_attr",
    "extract_css",
    "extract_json_ld",
    "extract_meta",
    "extract_time",
    "extract_readable",
    # Field rules
    "AuthorRule",
    "CanonicalRule",
    "DateRule",
    "DescriptionRule",
    "FaviconRule",
    "FeedRule",
    "LangRule",
    "LeadImageRule",
    "PublisherRule",
    "ReadableRule",
    "SiteNameRule",
    "TitleRule",
    "ImageValidator",
]
