"""Unit tests for inline markup rendering."""

import pytest

from org_outline.markup import (
    PLACEHOLDER_MARK,
    Link,
    RenderMode,
    extract_links,
    format_link,
    protect_links,
    render_markup,
    restore_links,
)


class TestLinks:
    """Tests for bracket link handling."""

    def test_html_link(self):
        """Test a labelled link renders as an anchor."""
        assert render_markup("[[http://x][Y]]", RenderMode.HTML) == '<a href="http://x">Y</a>'

    def test_markdown_link(self):
        """Test a labelled link renders as a Markdown link."""
        assert render_markup("[[http://x][Y]]", RenderMode.MARKDOWN) == "[Y](http://x)"

    def test_bare_link_uses_url_as_label(self):
        """Test that [[url]] links show the URL itself."""
        assert render_markup("[[https://orgmode.org]]", RenderMode.MARKDOWN) == (
            "[https://orgmode.org](https://orgmode.org)"
        )

    def test_url_is_not_rendered_as_markup(self):
        """Test that underscores and slashes in URLs and labels stay untouched."""
        text = "See [[https://x.org/a_b_c/d_e][my_label]] here"
        assert render_markup(text, RenderMode.MARKDOWN) == (
            "See [my_label](https://x.org/a_b_c/d_e) here"
        )
        assert render_markup(text, RenderMode.HTML) == (
            'See <a href="https://x.org/a_b_c/d_e">my_label</a> here'
        )

    def test_emphasis_around_link(self):
        """Test that emphasis wrapping a link still applies."""
        assert render_markup("*[[http://x][Y]]*", RenderMode.HTML) == (
            '<strong><a href="http://x">Y</a></strong>'
        )

    def test_extract_links(self):
        """Test links are returned in order of appearance."""
        links = extract_links("[[https://orgmode.org][Org]] or [[file:a.org]]")

        assert links == [
            Link("[[https://orgmode.org][Org]]", "https://orgmode.org", "Org"),
            Link("[[file:a.org]]", "file:a.org", "file:a.org"),
        ]

    def test_format_link_plain_keeps_source(self):
        """Test that plain mode reproduces the original link text."""
        link = Link("[[u][t]]", "u", "t")
        assert format_link(link, RenderMode.PLAIN) == "[[u][t]]"


class TestPlaceholders:
    """Tests for link placeholder protection."""

    def test_protect_links_numbers_placeholders(self):
        """Test each link gets its own numbered placeholder."""
        protected, links, mark = protect_links("see [[a][b]] and [[c]]")

        assert mark == PLACEHOLDER_MARK
        assert protected == f"see {mark}LINK0{mark} and {mark}LINK1{mark}"
        assert [link.url for link in links] == ["a", "c"]
        assert "[[" not in protected

    def test_restore_links_round_trip(self):
        """Test that restoring in plain mode gives back the input."""
        text = "see [[a][b]] and [[c]]"
        protected, links, mark = protect_links(text)

        assert restore_links(protected, links, mark, RenderMode.PLAIN) == text

    def test_placeholder_never_collides_with_content(self):
        """Test that text already containing the mark keeps its literal placeholder."""
        literal = f"{PLACEHOLDER_MARK}LINK0{PLACEHOLDER_MARK}"
        text = f"{literal} [[u][t]]"

        protected, links, mark = protect_links(text)

        assert mark == PLACEHOLDER_MARK * 2
        assert render_markup(text, RenderMode.HTML) == f'{literal} <a href="u">t</a>'


class TestEmphasis:
    """Tests for emphasis rules."""

    def test_html_emphasis(self):
        """Test every HTML emphasis rule."""
        text = "*bold* /italic/ _under_ +strike+ ~code~ =verb="
        assert render_markup(text, RenderMode.HTML) == (
            "<strong>bold</strong> <em>italic</em> <u>under</u> "
            "<del>strike</del> <code>code</code> <code>verb</code>"
        )

    def test_markdown_emphasis(self):
        """Test every Markdown emphasis rule."""
        text = "*bold* /italic/ _under_ +strike+ ~code~ =verb="
        assert render_markup(text, RenderMode.MARKDOWN) == (
            "**bold** *italic* _under_ ~~strike~~ `code` `verb`"
        )

    def test_emphasis_followed_by_punctuation(self):
        """Test closing delimiters before punctuation."""
        assert render_markup("This is *important*.", RenderMode.HTML) == (
            "This is <strong>important</strong>."
        )

    def test_plain_mode_is_identity(self):
        """Test that plain mode returns text unchanged."""
        text = "*x* /y/ [[a][b]]"
        assert render_markup(text, RenderMode.PLAIN) == text

    @pytest.mark.parametrize("text", [
        "a/b/c",
        "snake_case_name",
        "1 + 2 + 3",
        "x = 1 and y = 2",
        "* not bold *",
    ])
    def test_non_emphasis_left_alone(self, text):
        """Test delimiters inside words or next to spaces are literal."""
        assert render_markup(text, RenderMode.HTML) == text
        assert render_markup(text, RenderMode.MARKDOWN) == text

    @pytest.mark.parametrize("text", [
        "",
        "*not closed",
        "[[broken",
        "[[a][b]",
        "]]odd[[",
        "**",
        "/ / / /",
        "~=~=+_*",
        "[[[[x]]]]",
    ])
    def test_total_over_malformed_input(self, text):
        """Test rendering never fails on unbalanced input."""
        for mode in RenderMode:
            assert isinstance(render_markup(text, mode), str)

    def test_malformed_link_stays_literal(self):
        """Test unterminated link brackets are kept as text."""
        assert render_markup("[[broken link", RenderMode.HTML) == "[[broken link"
