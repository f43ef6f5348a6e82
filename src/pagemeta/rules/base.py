"""
Rules and extraction strategies.

A rule resolves one metadata field. It holds an ordered tuple of strategies,
each pairing selector candidates with one extractor function; the first
strategy that finds something wins, so strategies are listed from the most to
the least trustworthy signal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Optional, Sequence, Tuple

from bs4 import BeautifulSoup

from ..errors import ValueNotFoundError
from .results import ExtractResult

ExtractFunc = Callable[[BeautifulSoup, str, Sequence[str]], ExtractResult]


@dataclass(frozen=True)
class ExtractionStrategy:
    """One heuristic: selector candidates plus the extractor that reads them."""

    selectors: Tuple[str, ...]
    extractor: ExtractFunc

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, "selectors", tuple(self.selectors))

    def run(self, document: BeautifulSoup, target_url: str) -> ExtractResult:
        return self.extractor(document, target_url, self.selectors)


class Rule:
    """Base rule: walks its strategies in order until one finds a value.

    Subclasses provide their defaults through ``default_strategies``;
    passing ``strategies`` replaces them entirely.
    """

    name: ClassVar[str] = "rule"

    def __init__(self, strategies: Optional[Sequence[ExtractionStrategy]] = None) -> None:
        if strategies:
            self.strategies: Tuple[ExtractionStrategy, ...] = tuple(strategies)
        else:
            self.strategies = tuple(self.default_strategies())

    def default_strategies(self) -> Sequence[ExtractionStrategy]:
        return ()

    def extract(self, document: BeautifulSoup, target_url: str) -> ExtractResult:
        """Return the first found result.

        Raises:
            ValueNotFoundError: if no strategy matched.
        """
        for strategy in self.strategies:
            result = strategy.run(document, target_url)
            if result.found:
                return result
        raise ValueNotFoundError(self.name)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(strategies={len(self.strategies)})"
