"""
HTML parsing.

Wraps BeautifulSoup so the rest of the package receives a parsed tree together
with the URL and response headers it came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Union

from bs4 import BeautifulSoup

DEFAULT_FEATURES = "html.parser"


@dataclass
class ParsedPage:
    """A parsed document plus the context it was fetched in."""

    document: BeautifulSoup
    url: str
    headers: Dict[str, str] = field(default_factory=dict)

    def _header(self, name: str) -> Optional[str]:
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return None

    @property
    def mime_type(self) -> str:
        """The response Content-Type, or an empty string when unknown."""
        return self._header("content-type") or ""

    @property
    def is_html(self) -> bool:
        return "text/html" in self.mime_type


def parse_html(
    markup: Union[str, bytes],
    target_url: str,
    headers: Optional[Mapping[str, str]] = None,
    features: str = DEFAULT_FEATURES,
) -> ParsedPage:
    """Parse ``markup`` into a ``ParsedPage``.

    Broken markup is tolerated the way the underlying tree builder tolerates it.
    """
    document = BeautifulSoup(markup, features)
    return ParsedPage(document=document, url=target_url, headers=dict(headers or {}))
