"""
Metadata extractor.

Runs every registered field rule against a parsed document and merges the
results into a single ``Metadata`` record. Missing fields are normal: they are
recorded on the record and extraction carries on.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Optional

import structlog
from bs4 import BeautifulSoup

from .errors import StructuralError, UnknownRuleError, ValueNotFoundError
from .models import Metadata
from .rules import ExtractResult, ImageValidator, Rule, default_rules
from .sites import Site
from .utils.images import is_valid_image

logger = structlog.get_logger(__name__)


class Extractor:
    """
    Field-rule orchestrator.

    Holds one rule per metadata key. Instances are not mutated after
    construction: applying site overrides yields a new extractor, so a single
    default extractor can be shared while each request derives its own.
    """

    def __init__(
        self,
        rules: Optional[Mapping[str, Rule]] = None,
        *,
        image_validator: Optional[ImageValidator] = is_valid_image,
    ) -> None:
        self._rules: Dict[str, Rule] = dict(rules) if rules is not None else default_rules(image_validator)

    @property
    def rules(self) -> Mapping[str, Rule]:
        return MappingProxyType(self._rules)

    def apply_site_specific_rules(self, site: Site) -> Extractor:
        """Return an extractor whose rules are these rules overridden by ``site``."""
        overrides = dict(site.rules())
        logger.debug("Applying site rules", domain=site.domain_key(), keys=sorted(overrides))
        return Extractor({**self._rules, **overrides})

    def extract_metadata(self, document: Optional[BeautifulSoup], target_url: str) -> Metadata:
        """Run every rule against ``document`` and collect the results.

        Args:
            document: Parsed HTML document
            target_url: URL the document was fetched from, used to resolve relative links

        Returns:
            Metadata record; fields whose rules found nothing keep their defaults
            and are listed in ``metadata.errors``.

        Raises:
            StructuralError: if there is no document or it cannot be rendered.
        """
        if document is None:
            raise StructuralError("document is None")

        try:
            html = str(document)
        except Exception as e:
            raise StructuralError(f"failed to render document: {e}") from e

        metadata = Metadata(html=html)

        for key, rule in self._rules.items():
            try:
                result = rule.extract(document, target_url)
            except ValueNotFoundError as e:
                metadata.errors.append(e if e.rule == key else ValueNotFoundError(key))
                logger.debug("No value found", field=key, url=target_url)
                continue

            if result.found:
                result.apply(key, target_url, metadata)

        logger.info(
            "Extracted metadata",
            url=target_url,
            found=len(self._rules) - len(metadata.errors),
            missing=metadata.missing_fields,
        )
        return metadata

    def extract_rule_by_key(self, document: BeautifulSoup, target_url: str, key: str) -> ExtractResult:
        """Run the single rule registered under ``key``.

        Raises:
            UnknownRuleError: if no rule is registered for ``key``.
            ValueNotFoundError: if the rule found nothing.
        """
        rule = self._rules.get(key)
        if rule is None:
            raise UnknownRuleError(key)
        return rule.extract(document, target_url)
