"""Utility modules for pagemeta."""

from .images import IMAGE_CONTENT_TYPES, is_valid_image
from .text import normalize
from .urls import clean_url, extract_domain, fix_relative_path, is_url_valid

__all__ = [
    "IMAGE_CONTENT_TYPES",
    "clean_url",
    "extract_domain",
    "fix_relative_path",
    "is_url_valid",
    "is_valid_image",
    "normalize",
]
