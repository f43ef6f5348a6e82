"""
Text normalization for extracted values.
"""

from __future__ import annotations

from bs4 import BeautifulSoup


def normalize(value: str) -> str:
    """Strip HTML tags, decode entities and trim whitespace."""
    if "<" not in value and "&" not in value:
        return value.strip()
    return BeautifulSoup(value, "html.parser").get_text().strip()
