"""Serialization of parsed headlines to JSON and YAML."""

import json
from pathlib import Path
from typing import Any

import yaml

from org_outline.markup import RenderMode
from org_outline.parser import OrgHeadline
from orgsift.models.config import resolve_output_format


def headline_to_record(
    headline: OrgHeadline, render_mode: RenderMode, include_level: bool = False
) -> dict[str, Any]:
    """Convert a headline into a plain dict ready for serialization.

    In plain mode content stays a list of lines; in HTML and Markdown mode it
    is the rendered content as one string. Empty path entries standing for
    skipped levels are left out.

    Examples:
        >>> headline_to_record(OrgHeadline(level=2, title="Notes", content=("a",)), RenderMode.PLAIN)
        {'title': 'Notes', 'content': ['a'], 'properties': {}, 'path': []}
    """
    record: dict[str, Any] = {}
    if include_level:
        record["level"] = headline.level
    record["title"] = headline.title
    if render_mode is RenderMode.PLAIN:
        record["content"] = list(headline.content)
    else:
        record["content"] = headline.render_content(render_mode)
    record["properties"] = dict(headline.properties)
    record["path"] = [title for title in headline.path if title]
    return record


def serialize(records: list[dict[str, Any]], output_format: str) -> str:
    """Serialize records as pretty JSON or block-style YAML.

    Raises:
        UnsupportedFormatError: If output_format is not json or yaml
    """
    output_format = resolve_output_format(output_format)
    if output_format == "yaml":
        return yaml.safe_dump(
            records,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    return json.dumps(records, indent=2, ensure_ascii=False) + "\n"


def output_path_for(input_path: Path, output_format: str) -> Path:
    """Default output path: the input path with the format as its suffix.

    Examples:
        >>> output_path_for(Path("notes.org"), "yaml")
        PosixPath('notes.yaml')
    """
    return input_path.with_suffix(f".{resolve_output_format(output_format)}")
