"""
Data models for extracted page metadata.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List

from .errors import ValueNotFoundError


@dataclass
class Metadata:
    """Metadata extracted from a single HTML document.

    Fixed fields cover the concepts every page may carry; values for rule keys
    outside that set (site-specific extras) land in ``dynamic``.
    """

    author: str = ""
    title: str = ""
    description: str = ""
    date: str = ""
    canonical_url: str = ""
    url: str = ""
    clean_url: str = ""
    favicon_url: str = ""
    feed_urls: List[str] = field(default_factory=list)
    lang: str = ""
    lead_image_url: str = ""
    lead_image_in_meta: bool = False
    publisher: str = ""
    site_name: str = ""
    html: str = ""

    # Readability output
    readable_excerpt: str = ""
    readable_html: str = ""
    readable_text: str = ""
    readable_image: str = ""
    readable_lang: str = ""
    readable_length: int = 0
    readable_title: str = ""
    readable_byline: str = ""
    readable_site_name: str = ""
    is_readable: bool = False

    dynamic: Dict[str, Any] = field(default_factory=dict)

    # Per-field misses recorded during extraction; diagnostics only
    errors: List[ValueNotFoundError] = field(default_factory=list, repr=False, compare=False)

    def to_dict(self, *, include_html: bool = True) -> Dict[str, Any]:
        """Serialize to a plain dict, leaving out extraction diagnostics."""
        data = {f.name: copy.deepcopy(getattr(self, f.name)) for f in fields(self) if f.name != "errors"}
        if not include_html:
            data.pop("html", None)
        return data

    @property
    def missing_fields(self) -> List[str]:
        """Rule keys that produced no value."""
        return [error.rule for error in self.errors]
