"""Link, tag and mention extraction.

Pure helpers shared by the graph, search, tag and analytics features.
They operate on raw note text (front matter included) and never touch
the vault themselves.
"""

import re
from pathlib import PurePosixPath

from vault_api.links.models import Link, Mention
from vault_api.notes.tools import frontmatter_tags, parse_note

# [[target]] or [[target|display]]
WIKILINK_PATTERN = re.compile(r"\[\[([^\]]+)\]\]")
# [text](url)
MARKDOWN_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
# #tag, #area/sub-area, #snake_case
TAG_PATTERN = re.compile(r"#([a-zA-Z0-9_/\-]+)")


def extract_links(content: str, include_tags: bool = False) -> list[Link]:
    """Extract wikilinks, local markdown links and optionally tags.

    Markdown links whose URL starts with ``http`` are external and
    skipped.

    Args:
        content: Note text to scan
        include_tags: Also return ``#tag`` tokens as tag links

    Returns:
        Wikilinks, then markdown links, then tags, each in document order

    Examples:
        >>> [l.target for l in extract_links("See [[API Design|the API]] and [x](notes/x.md)")]
        ['API Design', 'notes/x.md']
    """
    links: list[Link] = []

    for match in WIKILINK_PATTERN.finditer(content):
        target, _, display = match.group(1).partition("|")
        target = target.strip()
        links.append(Link(type="wikilink", target=target, display=display.strip() or target))

    for match in MARKDOWN_LINK_PATTERN.finditer(content):
        text, url = match.group(1), match.group(2)
        if not url.startswith("http"):
            links.append(Link(type="markdown", target=url, display=text))

    if include_tags:
        for tag in TAG_PATTERN.findall(content):
            links.append(Link(type="tag", target=tag, display=f"#{tag}"))

    return links


def extract_wikilink_targets(content: str) -> list[str]:
    """Return the targets of all wikilinks in content."""
    return [link.target for link in extract_links(content) if link.type == "wikilink"]


def link_basename(target: str) -> str:
    """Reduce a link target to a bare note name.

    Examples:
        >>> link_basename("Projects/API.md")
        'API'
        >>> link_basename("API")
        'API'
    """
    name = PurePosixPath(target.strip()).name
    return name.removesuffix(".md")


def expand_nested_tag(tag: str) -> list[str]:
    """Return every prefix path of a hierarchical tag, the tag last.

    Examples:
        >>> expand_nested_tag("a/b/c")
        ['a', 'a/b', 'a/b/c']
        >>> expand_nested_tag("solo")
        ['solo']
    """
    parts = tag.split("/")
    return ["/".join(parts[: i + 1]) for i in range(len(parts))]


def extract_all_tags(content: str, include_nested: bool = True) -> set[str]:
    """Collect front matter and inline tags of a note.

    Args:
        content: Raw note text, front matter included
        include_nested: Expand ``a/b/c`` into ``a``, ``a/b`` and ``a/b/c``

    Returns:
        Set of unique tags without the ``#`` prefix
    """
    tags = frontmatter_tags(parse_note(content).front_matter)
    tags.extend(TAG_PATTERN.findall(content))

    if not include_nested:
        return set(tags)
    return {nested for tag in tags for nested in expand_nested_tag(tag)}


def find_mentions(content: str, basename: str) -> list[Mention]:
    """Find lines mentioning a note name, case-insensitively.

    Examples:
        >>> find_mentions("intro\\nsee the api notes", "API")[0].line_number
        2
    """
    if not basename:
        return []
    needle = basename.lower()
    return [
        Mention(line_number=number, line_content=line.strip())
        for number, line in enumerate(content.split("\n"), 1)
        if needle in line.lower()
    ]
