"""Inline markup rendering for Org text.

Converts Org emphasis markers and bracket links to HTML or Markdown with one
pipeline shared by both targets:

1. links are swapped for opaque placeholders so their URLs and labels are
   never touched by emphasis rules
2. the target's emphasis rules run in a fixed order
3. placeholders are swapped back for the target's link syntax

Nested or overlapping emphasis (``*bold /italic* text/``) is not supported;
each rule is a single regex pass and the first match wins.
"""

import re
from dataclasses import dataclass
from enum import Enum


class RenderMode(Enum):
    """Output flavour for titles and content."""

    PLAIN = "plain"
    HTML = "html"
    MARKDOWN = "markdown"


@dataclass(frozen=True)
class Link:
    """Bracket link found in a piece of text.

    Attributes:
        full_text: The whole '[[...]]' span as it appears in the source
        url: Link target
        text: Display label (the URL itself for '[[url]]' links)
    """

    full_text: str
    url: str
    text: str


LINK_RE = re.compile(r"\[\[([^\]]+)\]\[([^\]]+)\]\]|\[\[([^\]]+)\]\]")

# Private-use code point; emphasis rules never match it.
PLACEHOLDER_MARK = "\ue000"


# Characters allowed right before an opening and right after a closing
# delimiter (start and end of text are allowed too).
PRE_BORDER = r"""(?<![^\s\-({'"])"""
POST_BORDER = r"""(?![^\s\-.,;:!?'")}\[\]\\])"""


def _wrap_rule(delimiter: str, replacement: str) -> tuple[re.Pattern, str]:
    """Build a rule matching text wrapped in a single-character delimiter.

    The wrapped text may not contain the delimiter and may not start or end
    with whitespace. The delimiters must sit on a word border, so 'a/b/c',
    'snake_case_name' and the '/' of an already emitted '</strong>' never match.
    """
    d = re.escape(delimiter)
    body = "([^\\s" + d + "](?:[^" + d + "]*?[^\\s" + d + "])?)"
    return re.compile(PRE_BORDER + d + body + d + POST_BORDER), replacement


HTML_RULES = [
    _wrap_rule("*", r"<strong>\1</strong>"),
    _wrap_rule("/", r"<em>\1</em>"),
    _wrap_rule("_", r"<u>\1</u>"),
    _wrap_rule("+", r"<del>\1</del>"),
    _wrap_rule("~", r"<code>\1</code>"),
    _wrap_rule("=", r"<code>\1</code>"),
]

MARKDOWN_RULES = [
    _wrap_rule("*", r"**\1**"),
    _wrap_rule("/", r"*\1*"),
    _wrap_rule("_", r"_\1_"),
    _wrap_rule("+", r"~~\1~~"),
    _wrap_rule("~", r"`\1`"),
    _wrap_rule("=", r"`\1`"),
]

RULES = {
    RenderMode.HTML: HTML_RULES,
    RenderMode.MARKDOWN: MARKDOWN_RULES,
}


def _link_from_match(match: re.Match) -> Link:
    if match.group(1) is not None:
        return Link(match.group(0), match.group(1), match.group(2))
    return Link(match.group(0), match.group(3), match.group(3))


def extract_links(text: str) -> list[Link]:
    """Find all bracket links in text, in order of appearance.

    Examples:
        >>> [link.url for link in extract_links("[[https://orgmode.org][Org]] or [[file:a.org]]")]
        ['https://orgmode.org', 'file:a.org']
    """
    return [_link_from_match(match) for match in LINK_RE.finditer(text)]


def format_link(link: Link, mode: RenderMode) -> str:
    if mode is RenderMode.HTML:
        return f'<a href="{link.url}">{link.text}</a>'
    if mode is RenderMode.MARKDOWN:
        return f"[{link.text}]({link.url})"
    return link.full_text


def _placeholder_mark(text: str) -> str:
    """Pick a marker that does not occur anywhere in text."""
    mark = PLACEHOLDER_MARK
    while mark in text:
        mark += PLACEHOLDER_MARK
    return mark


def protect_links(text: str) -> tuple[str, list[Link], str]:
    """Replace every bracket link with a numbered placeholder.

    Placeholders look like ``<mark>LINK<n><mark>`` where the mark is a run of
    private-use characters absent from the input, so they cannot collide with
    document content.

    Returns:
        Tuple of (protected text, links in placeholder index order, mark)
    """
    mark = _placeholder_mark(text)
    links: list[Link] = []

    def substitute(match: re.Match) -> str:
        links.append(_link_from_match(match))
        return f"{mark}LINK{len(links) - 1}{mark}"

    return LINK_RE.sub(substitute, text), links, mark


def restore_links(text: str, links: list[Link], mark: str, mode: RenderMode) -> str:
    """Swap placeholders back for the mode's link syntax, in index order."""
    for index, link in enumerate(links):
        text = text.replace(f"{mark}LINK{index}{mark}", format_link(link, mode), 1)
    return text


def render_markup(text: str, mode: RenderMode) -> str:
    """Render Org inline markup in text for the given mode.

    Never fails: malformed links and unbalanced delimiters stay literal.

    Args:
        text: Org text (a title, a paragraph line, a list item, a table cell)
        mode: Target mode; RenderMode.PLAIN returns text unchanged

    Returns:
        Rendered text

    Examples:
        >>> render_markup("[[http://x][Y]]", RenderMode.HTML)
        '<a href="http://x">Y</a>'
        >>> render_markup("*bold* and /italic/", RenderMode.MARKDOWN)
        '**bold** and *italic*'
    """
    if mode is RenderMode.PLAIN:
        return text

    protected, links, mark = protect_links(text)
    for pattern, replacement in RULES[mode]:
        protected = pattern.sub(replacement, protected)
    return restore_links(protected, links, mark, mode)
