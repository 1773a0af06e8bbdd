"""Headline filters for `orgsift parse`.

Every filter takes a list of headlines and returns the matching subset in
document order. A filter whose pattern (or bounds) is None passes its input
through unchanged, so filters compose by plain chaining.
"""

import re
from typing import Optional

from org_outline.parser import OrgHeadline
from orgsift.models.config import ParseOptions


def filter_by_level(
    headlines: list[OrgHeadline], min_level: Optional[int], max_level: Optional[int]
) -> list[OrgHeadline]:
    """Keep headlines with min_level <= level <= max_level (None = unbounded)."""
    return [
        h for h in headlines
        if (min_level is None or h.level >= min_level)
        and (max_level is None or h.level <= max_level)
    ]


def filter_by_title(
    headlines: list[OrgHeadline], pattern: Optional[re.Pattern]
) -> list[OrgHeadline]:
    if pattern is None:
        return headlines
    return [h for h in headlines if pattern.search(h.title)]


def filter_by_custom_id(
    headlines: list[OrgHeadline], pattern: Optional[re.Pattern]
) -> list[OrgHeadline]:
    """Keep headlines whose CUSTOM_ID property matches pattern."""
    if pattern is None:
        return headlines
    return [h for h in headlines if h.custom_id is not None and pattern.search(h.custom_id)]


def filter_by_section(
    headlines: list[OrgHeadline], pattern: Optional[re.Pattern]
) -> list[OrgHeadline]:
    """Keep headlines with at least one ancestor title matching pattern.

    Empty path entries stand for skipped levels and never match.
    """
    if pattern is None:
        return headlines
    return [h for h in headlines if any(title and pattern.search(title) for title in h.path)]


def _section_custom_ids(all_headlines: list[OrgHeadline]) -> dict[str, str]:
    """Map each title to the CUSTOM_ID of the first headline carrying both.

    Titles are not unique: when two sections with the same title both have a
    CUSTOM_ID, the first one in document order wins and the other's CUSTOM_ID
    is invisible to the section filter. Same-titled headlines without a
    CUSTOM_ID are skipped.
    """
    ids: dict[str, str] = {}
    for headline in all_headlines:
        if headline.custom_id is not None and headline.raw_title not in ids:
            ids[headline.raw_title] = headline.custom_id
    return ids


def filter_by_section_custom_id(
    headlines: list[OrgHeadline],
    pattern: Optional[re.Pattern],
    all_headlines: Optional[list[OrgHeadline]] = None,
) -> list[OrgHeadline]:
    """Keep headlines inside a section whose CUSTOM_ID matches pattern.

    Ancestors are looked up by title in all_headlines (defaults to
    headlines), so the lookup still works after other filters have removed
    the ancestors themselves.
    """
    if pattern is None:
        return headlines
    ids = _section_custom_ids(all_headlines if all_headlines is not None else headlines)
    return [
        h for h in headlines
        if any(title in ids and pattern.search(ids[title]) for title in h.path)
    ]


def apply_filters(headlines: list[OrgHeadline], options: ParseOptions) -> list[OrgHeadline]:
    """Apply every filter in options, in a fixed order.

    Order: level, title, custom id, section title, section custom id.

    Args:
        headlines: All headlines of the document
        options: Parse options carrying bounds and patterns

    Returns:
        Headlines passing every active filter
    """
    result = filter_by_level(headlines, options.min_level, options.max_level)
    result = filter_by_title(result, options.title_pattern)
    result = filter_by_custom_id(result, options.custom_id_pattern)
    result = filter_by_section(result, options.section_title_pattern)
    return filter_by_section_custom_id(
        result, options.section_custom_id_pattern, all_headlines=headlines
    )
