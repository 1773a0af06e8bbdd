"""Unit tests for headline filters."""

import re
from textwrap import dedent

import pytest

from org_outline.parser import OrgOutline
from orgsift.models.config import ParseOptions
from orgsift.services.filters import (
    apply_filters,
    filter_by_custom_id,
    filter_by_level,
    filter_by_section,
    filter_by_section_custom_id,
    filter_by_title,
)


BOOK = dedent("""\
    * Book
    :PROPERTIES:
    :CUSTOM_ID: book1
    :END:
    ** Chapter One
    :PROPERTIES:
    :CUSTOM_ID: chapter1
    :END:
    *** Scene A
    ** Chapter Two
    :PROPERTIES:
    :CUSTOM_ID: chapter2
    :END:
    *** Scene B
    * Appendix
    ** Notes
    """)


@pytest.fixture
def headlines():
    """All headlines of the sample book."""
    return OrgOutline.parse(BOOK).headlines


def titles(headlines):
    return [h.title for h in headlines]


class TestFilterByLevel:
    """Tests for the level range filter."""

    def test_min_and_max_equal(self, headlines):
        """Test minLevel=2, maxLevel=2 returns exactly the level-2 headlines."""
        result = filter_by_level(headlines, 2, 2)

        assert titles(result) == ["Chapter One", "Chapter Two", "Notes"]
        assert all(h.level == 2 for h in result)

    def test_unbounded(self, headlines):
        """Test None bounds keep everything."""
        assert filter_by_level(headlines, None, None) == headlines

    def test_max_only(self, headlines):
        """Test an upper bound alone."""
        assert titles(filter_by_level(headlines, None, 1)) == ["Book", "Appendix"]

    def test_min_above_max_is_empty(self, headlines):
        """Test an empty range keeps nothing."""
        assert filter_by_level(headlines, 3, 2) == []


class TestPatternFilters:
    """Tests for title and CUSTOM_ID filters."""

    def test_title(self, headlines):
        """Test titles are searched with the regex."""
        assert titles(filter_by_title(headlines, re.compile("^Chapter"))) == [
            "Chapter One",
            "Chapter Two",
        ]

    def test_custom_id(self, headlines):
        """Test only headlines with a matching CUSTOM_ID are kept."""
        assert titles(filter_by_custom_id(headlines, re.compile(r"chapter\d"))) == [
            "Chapter One",
            "Chapter Two",
        ]

    def test_none_pattern_passes_through(self, headlines):
        """Test an absent pattern is a no-op."""
        assert filter_by_title(headlines, None) is headlines
        assert filter_by_custom_id(headlines, None) is headlines
        assert filter_by_section(headlines, None) is headlines
        assert filter_by_section_custom_id(headlines, None) is headlines


class TestSectionFilters:
    """Tests for ancestor-based filters."""

    def test_section_title(self, headlines):
        """Test headlines inside a matching section."""
        assert titles(filter_by_section(headlines, re.compile("^Chapter One$"))) == ["Scene A"]

    def test_section_title_matches_any_ancestor(self, headlines):
        """Test the pattern may match any level of the path."""
        assert titles(filter_by_section(headlines, re.compile("^Book$"))) == [
            "Chapter One",
            "Scene A",
            "Chapter Two",
            "Scene B",
        ]

    def test_gap_entries_never_match(self):
        """Test placeholder entries for skipped levels are ignored."""
        headlines = OrgOutline.parse("* A\n*** C\n").headlines

        assert filter_by_section(headlines, re.compile("^$")) == []

    def test_section_custom_id(self, headlines):
        """Test headlines inside a section whose CUSTOM_ID matches."""
        result = filter_by_section_custom_id(headlines, re.compile("chapter2"))

        assert titles(result) == ["Scene B"]

    def test_section_custom_id_with_filtered_ancestors(self, headlines):
        """Test ancestors are looked up in all headlines."""
        scenes = filter_by_level(headlines, 3, 3)

        result = filter_by_section_custom_id(scenes, re.compile("chapter"), all_headlines=headlines)

        assert titles(result) == ["Scene A", "Scene B"]

    def test_duplicate_section_titles_first_match_wins(self):
        """Test the known limitation: only the first of two equal titles is used."""
        headlines = OrgOutline.parse(dedent("""\
            * Part
            :PROPERTIES:
            :CUSTOM_ID: p1
            :END:
            ** Item X
            * Part
            :PROPERTIES:
            :CUSTOM_ID: p2
            :END:
            ** Item Y
            """)).headlines

        assert filter_by_section_custom_id(headlines, re.compile("p2")) == []
        assert titles(filter_by_section_custom_id(headlines, re.compile("p1"))) == [
            "Item X",
            "Item Y",
        ]

    def test_duplicate_title_without_custom_id_is_skipped(self):
        """Test the first same-titled section that has a CUSTOM_ID is used."""
        headlines = OrgOutline.parse(dedent("""\
            * Intro
            ** Note
            * Intro
            :PROPERTIES:
            :CUSTOM_ID: ch2
            :END:
            ** Sub
            """)).headlines

        result = filter_by_section_custom_id(headlines, re.compile("ch2"))

        assert titles(result) == ["Note", "Sub"]


class TestApplyFilters:
    """Tests for filter composition."""

    def test_level_only(self, headlines):
        """Test level bounds with every pattern unset."""
        options = ParseOptions(min_level=2, max_level=2)

        assert titles(apply_filters(headlines, options)) == ["Chapter One", "Chapter Two", "Notes"]

    def test_no_options_keeps_everything(self, headlines):
        """Test default options keep every headline."""
        assert apply_filters(headlines, ParseOptions()) == headlines

    def test_filters_intersect(self, headlines):
        """Test every active filter must pass."""
        options = ParseOptions(
            min_level=3,
            section_title_pattern=re.compile("Chapter"),
            section_custom_id_pattern=re.compile("chapter1"),
        )

        assert titles(apply_filters(headlines, options)) == ["Scene A"]
