"""
Protocols for pluggable HTML fetchers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, runtime_checkable

from ..models import Metadata


@dataclass
class FetchResponse:
    """What a fetcher returns for one URL."""

    status_code: int
    headers: Dict[str, str]
    body: bytes
    url: str
    # Set by fetchers backed by services that already extract metadata
    metadata: Optional[Metadata] = field(default=None)

    @property
    def has_metadata(self) -> bool:
        return self.metadata is not None


@runtime_checkable
class HTMLFetcher(Protocol):
    """Fetches the HTML for a URL."""

    name: str

    def fetch(self, url: str) -> FetchResponse:
        """Fetch ``url``.

        Raises:
            FetchError: if the page could not be retrieved.
        """
        ...
