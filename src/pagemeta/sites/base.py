"""
Site overrides and the registry that maps domains to them.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Optional

import structlog

from ..rules.base import Rule
from ..utils.urls import extract_domain

logger = structlog.get_logger(__name__)


class Site(ABC):
    """Replacement rules for pages on one domain.

    ``rules()`` keys must match the extractor's rule keys; each entry replaces
    the default rule for that key.
    """

    @abstractmethod
    def domain_key(self) -> str:
        """Domain the site applies to, e.g. ``"example.com"``."""

    @abstractmethod
    def rules(self) -> Mapping[str, Rule]:
        """Rules overriding the defaults for this site."""


class SiteRegistry:
    """Maps normalized domains to sites.

    Lookups are exact matches on the lowercased hostname with any leading
    ``www.`` removed; there is no wildcard or suffix matching.
    """

    def __init__(self) -> None:
        self._sites: Dict[str, Site] = {}
        self._lock = threading.Lock()

    def register_site(self, site: Site) -> None:
        """Register ``site``, replacing any site with the same domain key."""
        key = extract_domain(site.domain_key())
        with self._lock:
            self._sites[key] = site
        logger.debug("Registered site", domain=key, overrides=sorted(site.rules()))

    def unregister_site(self, domain: str) -> Optional[Site]:
        """Remove and return the site registered for ``domain``, if any."""
        with self._lock:
            return self._sites.pop(extract_domain(domain), None)

    def find_site(self, url: str) -> Optional[Site]:
        """Return the site registered for ``url`` (a URL or bare hostname)."""
        return self._sites.get(extract_domain(url))

    def domains(self) -> List[str]:
        return sorted(self._sites)

    def __contains__(self, url: object) -> bool:
        return isinstance(url, str) and self.find_site(url) is not None

    def __len__(self) -> int:
        return len(self._sites)
