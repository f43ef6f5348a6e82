"""
High-level entry point: fetch or read a page, parse it and extract metadata.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from typing import Dict, List, Optional, Sequence, Union

import structlog
from bs4 import BeautifulSoup

from .config import Config
from .errors import FetchError, ValueNotFoundError
from .extractor import Extractor
from .fetchers import FetchResponse, HTMLFetcher, StandardHTTPFetcher
from .models import Metadata
from .parser import ParsedPage, parse_html
from .sites import Site, SiteRegistry, default_registry
from .utils.images import is_valid_image
from .utils.urls import clean_url

logger = structlog.get_logger(__name__)

# Rules re-run on pages whose fetcher already supplied metadata
SUPPLEMENTARY_RULES = ("readable", "lead_image")


@dataclass
class PageResult:
    """Extracted metadata together with the response it came from."""

    document: Optional[BeautifulSoup]
    url: str
    metadata: Metadata = field(default_factory=Metadata)
    headers: Dict[str, str] = field(default_factory=dict)
    is_html: bool = False
    mime_type: str = ""
    status_code: int = 0
    fetcher_name: str = ""


class PageMeta:
    """
    Fetches pages and extracts their metadata.

    Fetchers are tried in order and the first one that succeeds is used. Site
    overrides are looked up per page in ``registry``, which defaults to the
    process-wide ``default_registry``.
    """

    def __init__(
        self,
        fetchers: Optional[Sequence[HTMLFetcher]] = None,
        *,
        config: Optional[Config] = None,
        registry: Optional[SiteRegistry] = None,
        extractor: Optional[Extractor] = None,
    ) -> None:
        self.config = config or Config()
        self.registry = registry if registry is not None else default_registry
        self.fetchers: List[HTMLFetcher] = list(fetchers or [])
        if not self.fetchers:
            self.fetchers.append(
                StandardHTTPFetcher(
                    timeout=self.config.fetch.timeout,
                    user_agent=self.config.fetch.user_agent,
                    follow_redirects=self.config.fetch.follow_redirects,
                )
            )

        if extractor is None:
            validator = None
            if self.config.extraction.favicon_probe:
                validator = partial(is_valid_image, timeout=self.config.extraction.favicon_timeout)
            extractor = Extractor(image_validator=validator)
        self.extractor = extractor

    def register_site(self, site: Site) -> None:
        self.registry.register_site(site)

    def _extractor_for(self, target_url: str) -> Extractor:
        if not self.config.extraction.apply_site_rules:
            return self.extractor
        site = self.registry.find_site(target_url)
        if site is None:
            return self.extractor
        return self.extractor.apply_site_specific_rules(site)

    def _parse(self, markup: Union[str, bytes], target_url: str, headers: Optional[Dict[str, str]] = None) -> ParsedPage:
        return parse_html(markup, target_url, headers=headers, features=self.config.parser.features)

    def _extract(self, page: ParsedPage) -> Metadata:
        metadata = self._extractor_for(page.url).extract_metadata(page.document, page.url)
        metadata.clean_url = clean_url(page.url)
        return metadata

    def read_and_parse(self, markup: Union[str, bytes], target_url: str) -> PageResult:
        """Extract metadata from HTML that is already at hand."""
        page = self._parse(markup, target_url)
        return PageResult(
            document=page.document,
            url=target_url,
            metadata=self._extract(page),
            headers=page.headers,
            is_html=page.is_html,
            mime_type=page.mime_type,
        )

    def _fetch(self, target_url: str) -> tuple[HTMLFetcher, FetchResponse]:
        errors: List[str] = []
        for fetcher in self.fetchers:
            try:
                return fetcher, fetcher.fetch(target_url)
            except FetchError as e:
                logger.warning("Fetcher failed", fetcher=fetcher.name, url=target_url, error=str(e))
                errors.append(f"{fetcher.name}: {e}")
        raise FetchError(f"unable to fetch HTML from {target_url}: " + "; ".join(errors))

    def fetch_and_parse(self, target_url: str) -> PageResult:
        """Fetch ``target_url`` and extract its metadata.

        Raises:
            FetchError: if every fetcher failed.
        """
        fetcher, response = self._fetch(target_url)
        page = self._parse(response.body, target_url, headers=response.headers)

        result = PageResult(
            document=page.document,
            url=target_url,
            headers=page.headers,
            is_html=page.is_html,
            mime_type=page.mime_type,
            status_code=response.status_code,
            fetcher_name=fetcher.name,
        )

        if response.metadata is not None:
            result.metadata = response.metadata
            if not result.metadata.clean_url:
                result.metadata.clean_url = clean_url(target_url)
            extractor = self._extractor_for(target_url)
            for key in SUPPLEMENTARY_RULES:
                try:
                    extracted = extractor.extract_rule_by_key(page.document, target_url, key)
                except ValueNotFoundError:
                    continue
                extracted.apply(key, target_url, result.metadata)
            return result

        result.metadata = self._extract(page)
        return result
