"""Org outline parser - Parse, render and reflow Org mode documents.

This package provides the core of orgsift: it parses Org's headline-based
outline format into flat headline records and renders their content to HTML
or Markdown, and it reflows hard-wrapped paragraphs.

Key features:
- Parse Org text into OrgHeadline records (level, title, content, properties, path)
- Render inline markup and blocks (lists, tables, quotes, source blocks)
- Protect bracket links from emphasis substitution
- Unwrap hard-wrapped paragraphs and list items without crossing structure

Example:
    >>> from org_outline import OrgOutline, RenderMode
    >>> outline = OrgOutline.parse("* Tasks\\n** Write /docs/", RenderMode.HTML)
    >>> outline.headlines[1].title
    'Write <em>docs</em>'
    >>> outline.headlines[1].path
    ('Tasks',)
"""

from org_outline.blocks import render_content
from org_outline.classifier import LineKind, classify
from org_outline.markup import Link, RenderMode, extract_links, render_markup
from org_outline.parser import OrgHeadline, OrgOutline, ParserState, next_state
from org_outline.unwrap import should_join, unwrap_text

__version__ = "0.1.0"

__all__ = [
    "LineKind",
    "Link",
    "OrgHeadline",
    "OrgOutline",
    "ParserState",
    "RenderMode",
    "classify",
    "extract_links",
    "next_state",
    "render_content",
    "render_markup",
    "should_join",
    "unwrap_text",
]
