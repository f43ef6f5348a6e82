"""
Unit tests for the PageMeta client facade.
"""

from typing import get_args
from unittest.mock import patch

import pytest

from pagemeta.client import PageMeta
from pagemeta.config import Config, ExtractionConfig, ParserConfig
from pagemeta.errors import FetchError
from pagemeta.extractor import Extractor
from pagemeta.models import Metadata
from pagemeta.rules import ExtractionStrategy, LeadImageRule, TitleRule, extract_attr, extract_css
from pagemeta.sites import Site, SiteRegistry, build_default_registry, default_registry

URL = "https://example.com/post?utm_source=feed&id=7"

PAGE = """
<html><head>
<title>Page Title</title>
<meta property="og:image" content="/lead.jpg">
</head><body><h2>Section</h2><img class="hero" src="/hero.jpg"></body></html>
"""


class SectionSite(Site):
    def domain_key(self):
        return "example.com"

    def rules(self):
        return {"title": TitleRule([ExtractionStrategy(("h2",), extract_css)])}


class HeroImageSite(Site):
    def domain_key(self):
        return "example.com"

    def rules(self):
        return {"lead_image": LeadImageRule([ExtractionStrategy(("img.hero",), extract_attr("src"))])}


class TestPageMetaConstruction:
    """Test client construction."""

    def test_default_fetcher(self, offline_config):
        """Test that a standard fetcher is used when none is given."""
        client = PageMeta(config=offline_config)

        assert [fetcher.name for fetcher in client.fetchers] == ["standard"]
        assert client.fetchers[0].timeout == offline_config.fetch.timeout

    def test_favicon_probe_disabled_by_config(self, offline_config):
        """Test that disabling the probe reaches the favicon rule."""
        client = PageMeta(config=offline_config)
        assert client.extractor.rules["favicon"].image_validator is None

    def test_favicon_probe_timeout(self):
        """Test that the probe uses the configured timeout."""
        config = Config(extraction=ExtractionConfig(favicon_timeout=1.5))
        validator = PageMeta(config=config).extractor.rules["favicon"].image_validator

        assert validator.keywords == {"timeout": 1.5}

    def test_default_registry_is_shared(self, offline_config):
        """Test that sites registered on default_registry reach every client."""
        default_registry.register_site(SectionSite())
        try:
            client = PageMeta(config=offline_config)

            assert client.registry is default_registry
            assert client.read_and_parse(PAGE, URL).metadata.title == "Section"
        finally:
            default_registry.unregister_site("example.com")

    def test_explicit_registry_is_isolated(self, offline_config):
        """Test that a passed registry keeps registrations to that client."""
        first = PageMeta(config=offline_config, registry=build_default_registry())
        first.register_site(SectionSite())

        assert first.registry.find_site("https://example.com") is not None
        assert default_registry.find_site("https://example.com") is None

    @pytest.mark.parametrize("features", get_args(ParserConfig.model_fields["features"].annotation))
    def test_every_allowed_parser_works(self, features):
        """Test that each accepted tree builder is installed and usable."""
        config = Config(parser=ParserConfig(features=features), extraction=ExtractionConfig(favicon_probe=False))
        result = PageMeta(config=config, registry=SiteRegistry()).read_and_parse(PAGE, URL)

        assert result.metadata.title == "Page Title"


class TestReadAndParse:
    """Test extraction from markup at hand."""

    def test_extracts_and_cleans_url(self, offline_config):
        """Test metadata extraction and tracking parameter removal."""
        result = PageMeta(config=offline_config).read_and_parse(PAGE, URL)

        assert result.metadata.title == "Page Title"
        assert result.metadata.lead_image_url == "https://example.com/lead.jpg"
        assert result.metadata.canonical_url == URL
        assert result.metadata.clean_url == "https://example.com/post?id=7"
        assert result.url == URL
        assert result.status_code == 0

    def test_site_rules_applied(self, offline_config):
        """Test that registered sites override defaults for their domain."""
        client = PageMeta(config=offline_config, registry=build_default_registry())
        client.register_site(SectionSite())

        assert client.read_and_parse(PAGE, URL).metadata.title == "Section"
        assert client.read_and_parse(PAGE, "https://other.com").metadata.title == "Page Title"

    def test_site_rules_disabled(self):
        """Test that site rules can be switched off."""
        config = Config(extraction=ExtractionConfig(favicon_probe=False, apply_site_rules=False))
        client = PageMeta(config=config, registry=SiteRegistry())
        client.register_site(SectionSite())

        assert client.read_and_parse(PAGE, URL).metadata.title == "Page Title"


class TestFetchAndParse:
    """Test fetching through pluggable fetchers."""

    def test_first_successful_fetcher_wins(self, offline_config, static_fetcher_factory):
        """Test fetcher fallback order."""
        failing = static_fetcher_factory({}, name="failing")
        working = static_fetcher_factory({URL: PAGE}, name="working")
        unused = static_fetcher_factory({URL: PAGE}, name="unused")

        result = PageMeta([failing, working, unused], config=offline_config).fetch_and_parse(URL)

        assert result.fetcher_name == "working"
        assert result.status_code == 200
        assert result.is_html is True
        assert result.metadata.title == "Page Title"
        assert failing.calls == [URL]
        assert unused.calls == []

    def test_all_fetchers_fail(self, offline_config, static_fetcher_factory):
        """Test that exhausting fetchers raises FetchError naming each one."""
        client = PageMeta(
            [static_fetcher_factory({}, name="a"), static_fetcher_factory({}, name="b")],
            config=offline_config,
        )
        with pytest.raises(FetchError) as exc_info:
            client.fetch_and_parse(URL)

        assert "a:" in str(exc_info.value)
        assert "b:" in str(exc_info.value)

    def test_presupplied_metadata_is_kept(self, offline_config, static_fetcher_factory):
        """Test that fetcher metadata is kept and only supplemented."""
        supplied = Metadata(title="Service Title", author="Service Author")
        fetcher = static_fetcher_factory({URL: PAGE}, metadata=supplied)

        with patch.object(Extractor, "extract_metadata") as full_extraction:
            result = PageMeta([fetcher], config=offline_config).fetch_and_parse(URL)

        full_extraction.assert_not_called()
        assert result.metadata is supplied
        assert result.metadata.title == "Service Title"
        assert result.metadata.author == "Service Author"
        assert result.metadata.lead_image_url == "https://example.com/lead.jpg"

    def test_presupplied_metadata_uses_site_rules(self, offline_config, static_fetcher_factory):
        """Test that supplementing fetcher metadata honours site overrides."""
        registry = SiteRegistry()
        registry.register_site(HeroImageSite())
        fetcher = static_fetcher_factory({URL: PAGE}, metadata=Metadata(title="Service Title"))

        result = PageMeta([fetcher], config=offline_config, registry=registry).fetch_and_parse(URL)

        assert result.metadata.title == "Service Title"
        assert result.metadata.lead_image_url == "https://example.com/hero.jpg"
