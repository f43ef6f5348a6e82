"""
YouTube watch pages.

YouTube keeps the channel name and upload date in microdata rather than the
usual article meta tags.
"""

from __future__ import annotations

from typing import Dict

from ..rules import AuthorRule, DateRule, ExtractionStrategy, Rule, extract_attr, extract_css, extract_meta
from .base import Site


class YouTube(Site):
    def domain_key(self) -> str:
        return "youtube.com"

    def rules(self) -> Dict[str, Rule]:
        return {
            "author": AuthorRule(
                [
                    ExtractionStrategy(('[class*="user-info"]',), extract_css),
                    ExtractionStrategy(('[itemprop="author"] [itemprop="name"]',), extract_attr("content")),
                ]
            ),
            "date": DateRule(
                [
                    ExtractionStrategy(
                        ('meta[itemprop="datePublished"]', 'meta[itemprop="uploadDate"]'),
                        extract_meta,
                    ),
                ]
            ),
        }
