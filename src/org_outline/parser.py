"""Org outline parser.

This module turns an Org document into a flat, document-ordered list of
headlines. Each headline carries its level, title, content lines, property
drawer values and the titles of its ancestor sections.

Parsing is a single forward pass driven by a three-state machine
(see ParserState and next_state). It never raises on malformed content:
unterminated drawers and blocks simply end where the headline ends.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from org_outline.blocks import render_content
from org_outline.classifier import (
    LineKind,
    classify,
    headline_level,
    is_block_begin,
    is_block_end,
    is_blank,
    is_comment,
    is_metadata_line,
    parse_property,
)
from org_outline.markup import RenderMode, render_markup


class ParserState(Enum):
    """States of the outline parser."""

    NO_OPEN_HEADLINE = "no-open-headline"
    HEADLINE_OPEN = "headline-open"
    INSIDE_DRAWER = "inside-drawer"


def next_state(state: ParserState, kind: LineKind) -> ParserState:
    """Transition function of the outline parser.

    Args:
        state: Current state
        kind: Category of the line being consumed

    Returns:
        State after consuming the line
    """
    if kind is LineKind.HEADLINE:
        return ParserState.HEADLINE_OPEN
    if state is ParserState.HEADLINE_OPEN and kind is LineKind.DRAWER_OPEN:
        return ParserState.INSIDE_DRAWER
    if state is ParserState.INSIDE_DRAWER and kind is LineKind.DRAWER_CLOSE:
        return ParserState.HEADLINE_OPEN
    return state


@dataclass(frozen=True)
class OrgHeadline:
    """One finalized node of the outline.

    Attributes:
        level: Number of leading '*' on the headline line
        title: Title text, rendered when the outline was parsed with a render mode
        content: Content lines (trimmed, without blank/comment/keyword lines);
                 block bodies are kept verbatim
        properties: Property drawer values keyed by lower-cased property name
        path: Unrendered titles of the ancestor sections, root first. Skipped
              levels appear as empty strings so that level == len(path) + 1.
        raw_title: Unrendered title
    """

    level: int
    title: str
    content: tuple[str, ...] = ()
    properties: dict[str, str] = field(default_factory=dict)
    path: tuple[str, ...] = ()
    raw_title: str = ""

    @property
    def custom_id(self) -> Optional[str]:
        return self.properties.get("custom_id")

    def render_content(self, mode: RenderMode) -> str:
        """Render the content lines as HTML or Markdown (or join them in plain mode)."""
        return render_content(list(self.content), mode)


def _keep_content_line(line: str) -> bool:
    if is_blank(line) or is_comment(line):
        return False
    if is_metadata_line(line):
        return is_block_begin(line) or is_block_end(line)
    return True


@dataclass
class _OpenHeadline:
    """Headline still accepting content and properties.

    Lines are trimmed as they arrive, except the bodies of #+BEGIN/#+END
    blocks, which are kept verbatim and survive finalization unfiltered.
    """

    level: int
    title: str
    raw_title: str
    path: tuple[str, ...]
    content: list[str] = field(default_factory=list)
    properties: dict[str, str] = field(default_factory=dict)
    verbatim: set[int] = field(default_factory=set)
    in_block: bool = False

    def add_line(self, line: str) -> None:
        if self.in_block and not is_block_end(line):
            self.verbatim.add(len(self.content))
            self.content.append(line)
            return
        if is_block_begin(line):
            self.in_block = True
        elif is_block_end(line):
            self.in_block = False
        self.content.append(line.strip())

    def finalize(self) -> OrgHeadline:
        return OrgHeadline(
            level=self.level,
            title=self.title,
            content=tuple(
                line for i, line in enumerate(self.content)
                if i in self.verbatim or _keep_content_line(line)
            ),
            properties={k: v for k, v in self.properties.items() if v.strip()},
            path=self.path,
            raw_title=self.raw_title,
        )


def update_section_path(stack: list[str], level: int, title: str) -> list[str]:
    """Compute the section stack after a headline at the given level.

    The result always has exactly `level` entries: the stack is cut to the
    parent depth, padded with empty strings when levels were skipped, and the
    new title is pushed.

    Examples:
        >>> update_section_path(["A", "B"], 2, "C")
        ['A', 'C']
        >>> update_section_path(["A"], 4, "D")
        ['A', '', '', 'D']
    """
    parents = stack[: level - 1]
    parents += [""] * (level - 1 - len(parents))
    return parents + [title]


@dataclass
class OrgOutline:
    """Parsed representation of an Org document.

    Attributes:
        headlines: Finalized headlines in document order
        source_text: Original text for debugging
        render_mode: Mode used for titles (content is rendered on demand)
        frontmatter: Lines before the first headline
        keywords: '#+KEY: value' settings from the frontmatter, lower-cased keys
    """

    headlines: list[OrgHeadline]
    source_text: str
    render_mode: RenderMode = RenderMode.PLAIN
    frontmatter: list[str] = field(default_factory=list)
    keywords: dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, text: str, render_mode: RenderMode = RenderMode.PLAIN) -> "OrgOutline":
        """Parse Org text into an outline.

        Args:
            text: Org document
            render_mode: When HTML or MARKDOWN, headline titles are stored
                rendered. Section paths always hold the unrendered titles.

        Returns:
            Parsed OrgOutline
        """
        frontmatter, headlines = _parse_headlines(text.splitlines(), render_mode)
        return cls(
            headlines=headlines,
            source_text=text,
            render_mode=render_mode,
            frontmatter=frontmatter,
            keywords=_parse_keywords(frontmatter),
        )

    def find_headline(self, text: str) -> Optional[OrgHeadline]:
        """Find the first headline whose title contains text (case-insensitive)."""
        for headline in self.headlines:
            if text.lower() in headline.raw_title.lower():
                return headline
        return None

    def find_by_custom_id(self, custom_id: str) -> Optional[OrgHeadline]:
        for headline in self.headlines:
            if headline.custom_id == custom_id:
                return headline
        return None


def _parse_headlines(
    lines: list[str], render_mode: RenderMode
) -> tuple[list[str], list[OrgHeadline]]:
    """Run the parser state machine over the lines.

    Returns:
        Tuple of (frontmatter_lines, headlines)
    """
    frontmatter: list[str] = []
    headlines: list[OrgHeadline] = []
    section_path: list[str] = []
    current: Optional[_OpenHeadline] = None
    state = ParserState.NO_OPEN_HEADLINE

    for line in lines:
        kind = classify(line, in_drawer=state is ParserState.INSIDE_DRAWER)

        if kind is LineKind.HEADLINE:
            if current is not None:
                headlines.append(current.finalize())
            level = headline_level(line)
            raw_title = line[level:].strip()
            section_path = update_section_path(section_path, level, raw_title)
            current = _OpenHeadline(
                level=level,
                title=render_markup(raw_title, render_mode),
                raw_title=raw_title,
                path=tuple(section_path[:-1]),
            )
        elif state is ParserState.NO_OPEN_HEADLINE:
            frontmatter.append(line)
        elif state is ParserState.INSIDE_DRAWER:
            if kind is LineKind.PROPERTY:
                key, value = parse_property(line)
                current.properties[key] = value
            # anything else inside a drawer is dropped
        elif kind is not LineKind.DRAWER_OPEN:
            current.add_line(line)

        state = next_state(state, kind)

    if current is not None:
        headlines.append(current.finalize())

    return frontmatter, headlines


def _parse_keywords(lines: list[str]) -> dict[str, str]:
    """Collect '#+KEY: value' lines into a dict (last one wins)."""
    keywords = {}
    for line in lines:
        stripped = line.strip()
        if not stripped.startswith("#+") or ":" not in stripped:
            continue
        key, _, value = stripped[2:].partition(":")
        if key and " " not in key:
            keywords[key.lower()] = value.strip()
    return keywords
