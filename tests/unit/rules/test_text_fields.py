"""
Unit tests for the text field rules.
"""

import pytest

from pagemeta.errors import ValueNotFoundError
from pagemeta.rules import (
    AuthorRule,
    DateRule,
    DescriptionRule,
    LangRule,
    PublisherRule,
    SelectorInfo,
    SiteNameRule,
    TitleRule,
)

URL = "https://example.com/post"


class TestAuthorRule:
    """Test author extraction."""

    def test_json_ld_first(self, parse):
        """Test that JSON-LD beats meta tags."""
        doc = parse(
            '<meta name="author" content="Meta Author">'
            '<script type="application/ld+json">{"author": {"name": "LD Author"}}</script>'
        )
        assert AuthorRule().extract(doc, URL).value == "LD Author"

    def test_meta_author(self, parse):
        """Test the author meta tag."""
        doc = parse('<meta name="author" content="Meta Author">')
        result = AuthorRule().extract(doc, URL)

        assert result.value == "Meta Author"
        assert result.selector_info.in_meta is True

    def test_rdfa_span(self, parse):
        """Test the schema.org RDFa span."""
        doc = parse('<span property="schema:author">John Schema</span>')
        assert AuthorRule().extract(doc, URL).value == "John Schema"

    def test_rel_author_link(self, parse):
        """Test the rel=author link fallback."""
        doc = parse('<a rel="author" href="/me">Linked Author</a>')
        assert AuthorRule().extract(doc, URL).value == "Linked Author"

    def test_not_found(self, parse):
        """Test that a page without any author raises."""
        with pytest.raises(ValueNotFoundError):
            AuthorRule().extract(parse("<p>Nobody</p>"), URL)


class TestDateRule:
    """Test date extraction."""

    def test_published_time_meta(self, parse):
        """Test the article:published_time meta tag."""
        doc = parse('<meta property="article:published_time" content="2022-10-11T15:04:05Z">')
        assert DateRule().extract(doc, URL).value == "2022-10-11T15:04:05Z"

    def test_time_element(self, parse):
        """Test the <time datetime> fallback."""
        doc = parse('<time datetime="2021-05-06">May 6</time>')
        assert DateRule().extract(doc, URL).value == "2021-05-06"

    def test_class_based_text(self, parse):
        """Test the class-name text fallback."""
        doc = parse('<span class="post-date">March 3, 2020</span>')
        assert DateRule().extract(doc, URL).value == "March 3, 2020"


class TestDescriptionRule:
    """Test description extraction."""

    def test_og_description(self, parse):
        """Test that og:description wins over the description meta."""
        doc = parse('<meta name="description" content="Plain"><meta property="og:description" content="OG">')
        assert DescriptionRule().extract(doc, URL).value == "OG"

    def test_json_ld_description(self, parse):
        """Test the JSON-LD fallback."""
        doc = parse('<script type="application/ld+json">{"description": "From LD"}</script>')
        assert DescriptionRule().extract(doc, URL).value == "From LD"

    def test_article_paragraph(self, parse):
        """Test the article body paragraph fallback."""
        doc = parse('<div class="entry-content"><p>First paragraph.</p></div>')
        assert DescriptionRule().extract(doc, URL).value == "First paragraph."


class TestLangRule:
    """Test language extraction."""

    def test_og_locale(self, parse):
        """Test that og:locale beats the html lang attribute."""
        doc = parse('<html lang="en"><head><meta property="og:locale" content="en_GB"></head></html>')
        assert LangRule().extract(doc, URL).value == "en_GB"

    def test_html_lang_attribute(self, parse):
        """Test the html lang attribute fallback."""
        doc = parse('<html lang="fr"><body></body></html>')
        assert LangRule().extract(doc, URL).value == "fr"


class TestPublisherRule:
    """Test publisher extraction."""

    def test_json_ld_publisher(self, parse):
        """Test the JSON-LD publisher name."""
        doc = parse('<script type="application/ld+json">{"publisher": {"name": "Daily"}}</script>')
        assert PublisherRule().extract(doc, URL).value == "Daily"

    def test_logo_alt_text(self, parse):
        """Test the logo image alt fallback."""
        doc = parse('<div class="site-logo"><a href="/"><img src="/l.png" alt="Acme"></a></div>')
        assert PublisherRule().extract(doc, URL).value == "Acme"


class TestTitleRule:
    """Test title extraction."""

    def test_og_title_beats_title_tag(self, parse):
        """Test that og:title wins over <title>."""
        doc = parse('<title>Tag</title><meta property="og:title" content="OG Title">')
        assert TitleRule().extract(doc, URL).value == "OG Title"

    def test_empty_og_title_falls_back(self, parse):
        """Test that an empty og:title is ignored."""
        doc = parse('<title>Tag Title</title><meta property="og:title" content="">')
        assert TitleRule().extract(doc, URL).value == "Tag Title"

    def test_blank_og_title_moves_to_next_strategy(self, parse):
        """Test that a blank og:title skips the rest of the meta strategy."""
        doc = parse(
            '<title>Tag Title</title><meta property="og:title" content=""><meta name="twitter:title" content="T">'
        )
        result = TitleRule().extract(doc, URL)

        assert result.value == "Tag Title"
        assert result.selector_info.selector == "title"

    def test_heading_class_is_case_insensitive(self, parse):
        """Test the h1 title class fallback."""
        doc = parse('<h1 class="PostTitle">Heading</h1>')
        assert TitleRule().extract(doc, URL).value == "Heading"


class TestSiteNameRule:
    """Test site name extraction."""

    def test_og_site_name(self, parse):
        """Test the og:site_name meta tag."""
        doc = parse('<meta property="og:site_name" content="Example News">')
        assert SiteNameRule().extract(doc, URL).value == "Example News"

    def test_domain_fallback(self, parse):
        """Test that the bare domain is used when nothing is declared."""
        result = SiteNameRule().extract(parse("<p>x</p>"), "https://www.example.com/x")

        assert result.value == "example.com"
        assert result.selector_info == SelectorInfo("domain", "host", False)

    def test_no_domain_raises(self, parse):
        """Test that an unusable target URL still raises."""
        with pytest.raises(ValueNotFoundError):
            SiteNameRule().extract(parse("<p>x</p>"), "")
