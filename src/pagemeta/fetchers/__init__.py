"""HTML fetchers."""

from .base import FetchResponse, HTMLFetcher
from .standard import StandardHTTPFetcher

__all__ = ["FetchResponse", "HTMLFetcher", "StandardHTTPFetcher"]
