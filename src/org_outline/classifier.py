"""Line classification for Org outline documents.

Every predicate in this module looks at a single physical line and answers
one question about it. Predicates are independent: a line may satisfy several
of them (an indented table row is also "indented", a quote line can look like
a property). Callers that need a single answer use classify(), which applies
a fixed precedence.
"""

import re
from enum import Enum
from typing import Optional


HEADLINE_RE = re.compile(r"^(\*+)\s")
UNORDERED_ITEM_RE = re.compile(r"^\s*[-+*]\s+")
ORDERED_ITEM_RE = re.compile(r"^\s*\d+[.)]\s+")
PROPERTY_RE = re.compile(r"^\s*:([\w-]+):(?:\s+(.*)|\s*)$")
TABLE_SEPARATOR_RE = re.compile(r"^\|[-+|:\s]*-[-+|:\s]*\|$")
BLOCK_BEGIN_RE = re.compile(r"^\s*#\+begin_(\w+)(?:\s+([^\s:]\S*))?", re.IGNORECASE)
BLOCK_END_RE = re.compile(r"^\s*#\+end_\w*", re.IGNORECASE)
QUOTE_RE = re.compile(r"^\s*: ")
METADATA_RE = re.compile(r"^\s*#\+")
CONTINUATION_START_RE = re.compile(r"^\s*[-+*\d]")

DRAWER_OPEN = ":PROPERTIES:"
DRAWER_CLOSE = ":END:"


class LineKind(Enum):
    """Category assigned to a line by classify()."""

    DRAWER_OPEN = "drawer_open"
    DRAWER_CLOSE = "drawer_close"
    HEADLINE = "headline"
    BLOCK_BEGIN = "block_begin"
    BLOCK_END = "block_end"
    PROPERTY = "property"
    TABLE_ROW = "table_row"
    QUOTE = "quote"
    LIST_ITEM = "list_item"
    BLANK = "blank"
    COMMENT = "comment"
    KEYWORD = "keyword"
    TEXT = "text"


def is_headline(line: str) -> bool:
    """Check if a line starts with one or more '*' followed by whitespace.

    Indented asterisks are list items, not headlines.
    """
    return bool(HEADLINE_RE.match(line))


def headline_level(line: str) -> int:
    """Count the leading '*' of a headline line (0 for any other line)."""
    match = HEADLINE_RE.match(line)
    return len(match.group(1)) if match else 0


def is_comment(line: str) -> bool:
    """Check if a line is an Org comment (first character '#').

    Keyword lines such as '#+TITLE:' or '#+BEGIN_SRC' are not comments.
    """
    return line.startswith("#") and not line.startswith("#+")


def is_metadata_line(line: str) -> bool:
    """Check if a line is a '#+' keyword line (including block sentinels)."""
    return bool(METADATA_RE.match(line))


def is_unordered_list_item(line: str) -> bool:
    return bool(UNORDERED_ITEM_RE.match(line))


def is_ordered_list_item(line: str) -> bool:
    return bool(ORDERED_ITEM_RE.match(line))


def is_list_item(line: str) -> bool:
    """Check if a line is a bullet ('-', '+', '*') or numbered ('1.', '1)') item."""
    return is_unordered_list_item(line) or is_ordered_list_item(line)


def is_drawer_open(line: str) -> bool:
    return line.strip() == DRAWER_OPEN


def is_drawer_close(line: str) -> bool:
    return line.strip() == DRAWER_CLOSE


def is_property_line(line: str) -> bool:
    """Check if a line has the ':key: value' or bare ':key:' shape.

    The drawer sentinels themselves are excluded. This only describes the
    shape of the line; whether it really is a property depends on the parser
    being inside a property drawer.
    """
    if is_drawer_open(line) or is_drawer_close(line):
        return False
    return bool(PROPERTY_RE.match(line))


def parse_property(line: str) -> Optional[tuple[str, str]]:
    """Split a property line into a (lower-cased key, trimmed value) pair.

    Returns:
        The pair, or None if the line is not property-shaped
    """
    if not is_property_line(line):
        return None
    match = PROPERTY_RE.match(line)
    key, value = match.group(1), match.group(2) or ""
    return key.lower(), value.strip()


def is_table_row(line: str) -> bool:
    """Check if a trimmed line starts and ends with '|'."""
    stripped = line.strip()
    return len(stripped) >= 2 and stripped.startswith("|") and stripped.endswith("|")


def is_table_line(line: str) -> bool:
    """Check if a trimmed line starts with '|' (complete or not)."""
    return line.strip().startswith("|")


def is_table_separator(line: str) -> bool:
    """Check if a table row is a rule made of dashes ('|---+---|')."""
    return is_table_row(line) and bool(TABLE_SEPARATOR_RE.match(line.strip()))


def is_block_begin(line: str) -> bool:
    return bool(BLOCK_BEGIN_RE.match(line))


def is_block_end(line: str) -> bool:
    return bool(BLOCK_END_RE.match(line))


def block_language(line: str) -> Optional[str]:
    """Get the language token of a '#+BEGIN_SRC lang' line.

    Returns:
        Language name, or None for other blocks and source blocks without one

    Examples:
        >>> block_language("#+begin_src python :results output")
        'python'
        >>> block_language("#+BEGIN_EXAMPLE")
    """
    match = BLOCK_BEGIN_RE.match(line)
    if not match or match.group(1).lower() != "src":
        return None
    return match.group(2)


def is_quote_line(line: str) -> bool:
    """Check if a line starts with a colon followed by one space."""
    return bool(QUOTE_RE.match(line))


def is_blank(line: str) -> bool:
    return not line.strip()


def is_continuation_line(line: str) -> bool:
    """Check if an indented line continues the text above it.

    Indented list markers and lines starting with a digit are excluded so that
    nested items and numbered content are never absorbed.
    """
    return (
        line[:1].isspace()
        and not is_list_item(line)
        and not CONTINUATION_START_RE.match(line)
    )


def classify(line: str, in_drawer: bool = False) -> LineKind:
    """Assign a single category to a line.

    Precedence: drawer sentinels > headline > block begin/end > property line >
    table row > quote line > list item > everything else. Property lines are
    only recognized when in_drawer is True; outside a drawer a ':word:' line
    in prose stays ordinary text.

    Args:
        line: Line to classify
        in_drawer: Whether the caller is inside a property drawer

    Returns:
        The LineKind of the line
    """
    if is_drawer_open(line):
        return LineKind.DRAWER_OPEN
    if is_drawer_close(line):
        return LineKind.DRAWER_CLOSE
    if is_headline(line):
        return LineKind.HEADLINE
    if is_block_begin(line):
        return LineKind.BLOCK_BEGIN
    if is_block_end(line):
        return LineKind.BLOCK_END
    if in_drawer and is_property_line(line):
        return LineKind.PROPERTY
    if is_table_row(line):
        return LineKind.TABLE_ROW
    if is_quote_line(line):
        return LineKind.QUOTE
    if is_list_item(line):
        return LineKind.LIST_ITEM
    if is_blank(line):
        return LineKind.BLANK
    if is_comment(line.lstrip()):
        return LineKind.COMMENT
    if is_metadata_line(line):
        return LineKind.KEYWORD
    return LineKind.TEXT
