"""Paragraph reflow for Org documents.

Joins hard-wrapped physical lines back into one logical line per paragraph
or list item, without ever crossing a structural boundary (headlines,
keywords, drawers, tables, blocks, blank lines). Works on raw text and does
not depend on the outline parser.
"""

import re

from org_outline.classifier import (
    is_blank,
    is_block_begin,
    is_block_end,
    is_continuation_line,
    is_drawer_close,
    is_drawer_open,
    is_headline,
    is_list_item,
    is_property_line,
    is_quote_line,
    is_table_line,
)

WHITESPACE_RE = re.compile(r"\s+")


def _is_boundary(line: str) -> bool:
    """Lines that never join with a neighbour."""
    return (
        is_blank(line)
        or line.lstrip().startswith("#")  # comments and keywords
        or is_headline(line)
        or is_drawer_open(line)
        or is_drawer_close(line)
        or is_property_line(line)
        or is_quote_line(line)
    )


def should_join(current: str, successor: str, inside_block: bool) -> bool:
    """Decide whether successor continues the logical line current.

    The first rule that applies wins:

    1. nothing joins inside a #+BEGIN/#+END block
    2. blank, comment, keyword, headline and drawer lines never join
    3. table lines never join
    4. a block start never joins the line above it
    5. two list items stay separate
    6. an indented continuation joins the list item above it
    7. other indented lines stay separate
    8. everything else joins

    Args:
        current: Logical line built so far
        successor: Next physical line
        inside_block: Whether current sits inside a #+BEGIN/#+END block

    Returns:
        True if successor should be appended to current
    """
    if inside_block:
        return False
    if _is_boundary(current) or _is_boundary(successor):
        return False
    if is_table_line(current) or is_table_line(successor):
        return False
    if is_block_begin(successor):
        return False
    if is_list_item(current) and is_list_item(successor):
        return False
    if is_list_item(current) and is_continuation_line(successor):
        return True
    if successor[:1].isspace() and not is_continuation_line(successor):
        return False
    return True


def join_lines(current: str, successor: str) -> str:
    """Append successor to current with a single space.

    The successor is trimmed; when current is a list item, runs of whitespace
    inside the successor are collapsed as well.
    """
    addition = successor.strip()
    if is_list_item(current):
        addition = WHITESPACE_RE.sub(" ", addition)
    return f"{current} {addition}"


def unwrap_lines(lines: list[str]) -> list[str]:
    """Reflow a list of physical lines into logical lines."""
    result = []
    inside_block = False
    i = 0

    while i < len(lines):
        current = lines[i]
        i += 1

        if is_block_begin(current):
            inside_block = True
            result.append(current)
            continue
        if is_block_end(current):
            inside_block = False
            result.append(current)
            continue

        while i < len(lines) and should_join(current, lines[i], inside_block):
            current = join_lines(current, lines[i])
            i += 1
        result.append(current)

    return result


def unwrap_text(text: str) -> str:
    """Unwrap paragraphs and list items of an Org document.

    Blank lines, block contents and structural lines are kept exactly where
    they are; a trailing newline is preserved.

    Examples:
        >>> unwrap_text("- item one\\n  continued text")
        '- item one continued text'
        >>> unwrap_text("A paragraph\\nwrapped here.\\n\\nNext one.")
        'A paragraph wrapped here.\\n\\nNext one.'
    """
    result = "\n".join(unwrap_lines(text.splitlines()))
    if text.endswith("\n"):
        result += "\n"
    return result
