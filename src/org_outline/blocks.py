"""Block-level rendering of headline content.

Groups runs of content lines into source blocks, tables, quotes, lists and
paragraphs, and renders each group to HTML or Markdown. Inline markup inside
the groups goes through org_outline.markup; source block bodies are emitted
verbatim.

Nested structures (a table inside a list item, a list inside a quote) are not
recognized: each line belongs to exactly one top-level block.
"""

import re
from typing import Callable, Optional

from org_outline.classifier import (
    ORDERED_ITEM_RE,
    UNORDERED_ITEM_RE,
    block_language,
    is_blank,
    is_block_begin,
    is_block_end,
    is_ordered_list_item,
    is_quote_line,
    is_list_item,
    is_table_row,
    is_table_separator,
)
from org_outline.markup import RenderMode, render_markup

WHITESPACE_RE = re.compile(r"\s+")


def escape_html(text: str) -> str:
    """Escape the characters that would otherwise be read as HTML."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _take_while(lines: list[str], start: int, predicate: Callable[[str], bool]) -> int:
    """Return the index just past the run of lines matching predicate."""
    end = start
    while end < len(lines) and predicate(lines[end]):
        end += 1
    return end


def split_table_cells(row: str) -> list[str]:
    """Split a table row into trimmed cells.

    Examples:
        >>> split_table_cells("| a | b  |c|")
        ['a', 'b', 'c']
    """
    inner = row.strip()[1:-1]
    return [cell.strip() for cell in inner.split("|")]


def _table_rows(lines: list[str]) -> tuple[Optional[list[str]], list[list[str]]]:
    """Split a run of table lines into an optional header and body rows.

    A header exists only when the second row is a separator. Separator rows
    are never part of the output.
    """
    header = None
    rows = lines
    if len(lines) >= 2 and is_table_separator(lines[1]):
        header = split_table_cells(lines[0])
        rows = lines[2:]
    body = [split_table_cells(row) for row in rows if not is_table_separator(row)]
    return header, body


def render_source_block(lines: list[str], mode: RenderMode) -> str:
    """Render a '#+BEGIN_...' block (begin line, body, optional end line)."""
    language = block_language(lines[0])
    body = lines[1:]
    if body and is_block_end(body[-1]):
        body = body[:-1]
    code = "\n".join(body)

    if mode is RenderMode.HTML:
        css_class = f' class="language-{language}"' if language else ""
        return f"<pre><code{css_class}>{escape_html(code)}</code></pre>"
    return f"```{language or ''}\n{code}\n```"


def render_table(lines: list[str], mode: RenderMode) -> str:
    """Render a run of table rows as an HTML table or a GFM pipe table.

    Ragged rows keep their own number of cells.
    """
    header, body = _table_rows(lines)

    if mode is RenderMode.HTML:
        parts = ["<table>"]
        if header is not None:
            cells = "".join(f"<th>{render_markup(cell, mode)}</th>" for cell in header)
            parts.append(f"<thead>\n<tr>{cells}</tr>\n</thead>")
        parts.append("<tbody>")
        for row in body:
            cells = "".join(f"<td>{render_markup(cell, mode)}</td>" for cell in row)
            parts.append(f"<tr>{cells}</tr>")
        parts.append("</tbody>")
        parts.append("</table>")
        return "\n".join(parts)

    # GFM needs a header row; without one the first row takes its place
    rows = ([header] if header is not None else []) + body
    if not rows:
        return ""
    rendered = [[render_markup(cell, mode) for cell in row] for row in rows]

    widths: list[int] = []
    for row in rendered:
        for i, cell in enumerate(row):
            if i == len(widths):
                widths.append(1)
            widths[i] = max(widths[i], len(cell))

    def format_row(row: list[str]) -> str:
        return "| " + " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)) + " |"

    output = [format_row(rendered[0])]
    output.append("| " + " | ".join("-" * width for width in widths) + " |")
    output.extend(format_row(row) for row in rendered[1:])
    return "\n".join(output)


def render_quote(lines: list[str], mode: RenderMode) -> str:
    """Render a run of ': ' lines as a blockquote."""
    texts = [render_markup(line.lstrip()[2:], mode) for line in lines]
    if mode is RenderMode.HTML:
        paragraphs = "\n".join(f"<p>{text}</p>" for text in texts)
        return f"<blockquote>\n{paragraphs}\n</blockquote>"
    return "\n".join(f"> {text}" for text in texts)


def _split_list_item(line: str) -> tuple[str, str]:
    """Split a list item into its marker ('-', '3.', '2)') and its text."""
    match = ORDERED_ITEM_RE.match(line) or UNORDERED_ITEM_RE.match(line)
    return match.group(0).strip(), line[match.end():]


def render_list(lines: list[str], mode: RenderMode) -> str:
    """Render a run of list items of one ordering kind."""
    items = [_split_list_item(line) for line in lines]

    if mode is RenderMode.HTML:
        tag = "ol" if is_ordered_list_item(lines[0]) else "ul"
        entries = "\n".join(
            f"<li>{render_markup(text.strip(), mode)}</li>" for _, text in items
        )
        return f"<{tag}>\n{entries}\n</{tag}>"

    output = []
    for marker, text in items:
        normalized = WHITESPACE_RE.sub(" ", text.strip())
        output.append(f"{marker} {render_markup(normalized, mode)}")
    return "\n".join(output)


def render_paragraph(line: str, mode: RenderMode) -> str:
    text = render_markup(line.strip(), mode)
    if mode is RenderMode.HTML:
        return f"<p>{text}</p>"
    return text


def render_content(lines: list[str], mode: RenderMode) -> str:
    """Render the content lines of one headline.

    Walks the lines once with a cursor. At each position the first matching
    handler (source block, table, quote, list, paragraph) consumes its run of
    lines. Blank lines only separate blocks.

    Args:
        lines: Content lines of a finalized headline
        mode: Target mode; RenderMode.PLAIN joins the lines unchanged

    Returns:
        Rendered content; HTML blocks are separated by a newline, Markdown
        blocks by a blank line
    """
    if mode is RenderMode.PLAIN:
        return "\n".join(lines)

    blocks = []
    i = 0
    while i < len(lines):
        line = lines[i]

        if is_blank(line):
            i += 1
            continue

        if is_block_begin(line):
            end = _take_while(lines, i + 1, lambda l: not is_block_end(l))
            end = min(end + 1, len(lines))  # include the end line when present
            blocks.append(render_source_block(lines[i:end], mode))
        elif is_table_row(line):
            end = _take_while(lines, i, is_table_row)
            blocks.append(render_table(lines[i:end], mode))
        elif is_quote_line(line):
            end = _take_while(lines, i, is_quote_line)
            blocks.append(render_quote(lines[i:end], mode))
        elif is_list_item(line):
            ordered = is_ordered_list_item(line)
            end = _take_while(
                lines, i, lambda l: is_list_item(l) and is_ordered_list_item(l) == ordered
            )
            blocks.append(render_list(lines[i:end], mode))
        else:
            end = i + 1
            blocks.append(render_paragraph(line, mode))
        i = end

    separator = "\n" if mode is RenderMode.HTML else "\n\n"
    return separator.join(block for block in blocks if block)
