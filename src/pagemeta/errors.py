"""
Exception types raised by pagemeta.
"""

from __future__ import annotations


class PageMetaError(Exception):
    """Base exception for pagemeta errors."""

    pass


class ValueNotFoundError(PageMetaError):
    """Raised when a rule exhausts all of its strategies without a match."""

    def __init__(self, rule: str = "") -> None:
        self.rule = rule
        super().__init__(f"no value found for {rule}" if rule else "no value found")


class StructuralError(PageMetaError):
    """Raised when the document cannot be processed at all."""

    pass


class UnknownRuleError(PageMetaError, KeyError):
    """Raised when a rule key is not registered on the extractor."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"no rule registered for key '{key}'")

    def __str__(self) -> str:
        return str(self.args[0])


class FetchError(PageMetaError):
    """Raised when HTML could not be fetched from a URL."""

    pass
