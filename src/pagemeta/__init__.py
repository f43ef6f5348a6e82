"""
pagemeta - Rule-based metadata extraction for HTML pages.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .client import PageMeta, PageResult
from .config import Config
from .errors import FetchError, PageMetaError, StructuralError, UnknownRuleError, ValueNotFoundError
from .extractor import Extractor
from .models import Metadata
from .parser import ParsedPage, parse_html
from .sites import Site, SiteRegistry, default_registry

__all__ = [
    "__version__",
    "Config",
    "Extractor",
    "Metadata",
    "PageMeta",
    "PageResult",
    "ParsedPage",
    "parse_html",
    "Site",
    "SiteRegistry",
    "default_registry",
    "PageMetaError",
    "ValueNotFoundError",
    "StructuralError",
    "UnknownRuleError",
    "FetchError",
]
