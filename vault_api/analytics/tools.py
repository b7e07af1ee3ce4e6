"""Vault statistics and health metrics.

Example:
    stats = await get_vault_stats(vault)
    stats.health_score  # 0-100
"""

import math
import re
from collections import Counter
from datetime import UTC, date, datetime
from typing import Any

from vault_api.analytics.models import HealthFactors, LongestNote, MostLinkedNote, VaultStats
from vault_api.dependencies import VaultClient, logger
from vault_api.links.tools import extract_all_tags, extract_links
from vault_api.notes.tools import YAML_HANDLER, parse_note

HTML_TAG_PATTERN = re.compile(r"<[^>]+>")
# Letters only; apostrophes and hyphens allowed after the first letter
WORD_PATTERN = re.compile(r"[^\W\d_](?:[^\W\d_]|['-])*")
MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})")

# =============================================================================
# Helper Functions
# =============================================================================


def count_words(content: str) -> int:
    """Count alphabetic words, ignoring HTML tags.

    Examples:
        >>> count_words("Hello <b>world</b>, it's 2025!")
        3
        >>> count_words("")
        0
    """
    return len(WORD_PATTERN.findall(HTML_TAG_PATTERN.sub(" ", content)))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(2.49)
        2
    """
    return math.floor(value + 0.5)


def _ratio(part: int, total: int, default: float = 0.0) -> float:
    return part / total if total > 0 else default


def creation_month(front_matter: dict[str, Any], modified: int) -> str:
    """Month a note was created, as YYYY-MM.

    Uses the front matter ``created`` value when it starts with a
    year and month, else the file's last-modified time.

    Examples:
        >>> creation_month({"created": "2024-03-15"}, 0)
        '2024-03'
        >>> creation_month({}, 0)
        '1970-01'
    """
    created = front_matter.get("created")
    if isinstance(created, datetime | date):
        return created.strftime("%Y-%m")
    if isinstance(created, str):
        match = MONTH_PATTERN.match(created.strip())
        if match:
            return f"{match.group(1)}-{match.group(2)}"
    return datetime.fromtimestamp(modified, UTC).strftime("%Y-%m")


# =============================================================================
# Operations
# =============================================================================


async def get_vault_stats(vault: VaultClient) -> VaultStats:
    """Compute corpus-wide statistics in a single pass.

    Notes that cannot be read still count towards ``markdown_files``
    but contribute nothing else.

    Args:
        vault: Vault to analyse

    Returns:
        VaultStats with derived metrics and health score
    """
    logger.info("vault_stats_called")

    all_files = await vault.list_files(pattern="*")
    markdown_files = [file_path for file_path in all_files if file_path.endswith(".md")]

    total_size = 0
    with_frontmatter = 0
    with_tags = 0
    with_links = 0
    word_counts: dict[str, int] = {}
    link_counts: dict[str, int] = {}
    tag_counts: Counter[str] = Counter()
    timeline: Counter[str] = Counter()

    for file_path in markdown_files:
        try:
            content = await vault.read_file(file_path)
            modified = await vault.last_modified(file_path)
        except Exception as e:
            logger.debug("vault_stats_file_error", extra={"path": file_path, "error": str(e)})
            continue

        total_size += len(content.encode("utf-8"))

        front_matter = parse_note(content, YAML_HANDLER).front_matter
        if front_matter:
            with_frontmatter += 1

        tags = extract_all_tags(content, include_nested=True)
        if tags:
            with_tags += 1
            tag_counts.update(tags)

        link_counts[file_path] = len(extract_links(content))
        if link_counts[file_path] > 0:
            with_links += 1

        word_counts[file_path] = count_words(content)
        timeline[creation_month(front_matter, modified)] += 1

    note_count = len(markdown_files)
    stats = VaultStats(
        total_files=len(all_files),
        markdown_files=note_count,
        total_size_bytes=total_size,
        notes_with_frontmatter=with_frontmatter,
        notes_with_tags=with_tags,
        notes_with_links=with_links,
        tag_distribution=dict(sorted(tag_counts.items(), key=lambda item: (-item[1], item[0]))),
        creation_timeline=dict(sorted(timeline.items())),
    )

    if word_counts:
        stats.average_note_length = round_half_up(sum(word_counts.values()) / len(word_counts))
        # max() keeps the first file on ties
        longest = max(word_counts, key=lambda path: word_counts[path])
        stats.longest_note = LongestNote(file=longest, word_count=word_counts[longest])

    if link_counts:
        most_linked = max(link_counts, key=lambda path: link_counts[path])
        stats.most_linked_note = MostLinkedNote(
            file=most_linked, link_count=link_counts[most_linked]
        )
        stats.orphan_notes = sum(1 for count in link_counts.values() if count == 0)

    factors = HealthFactors(
        frontmatter_usage=_ratio(with_frontmatter, note_count),
        tag_usage=_ratio(with_tags, note_count),
        link_usage=_ratio(with_links, note_count),
        orphan_ratio=1 - _ratio(stats.orphan_notes, note_count),
    )
    stats.health_factors = factors
    stats.health_score = round_half_up(
        (
            factors.frontmatter_usage
            + factors.tag_usage
            + factors.link_usage
            + factors.orphan_ratio
        )
        / 4
        * 100
    )

    logger.info(
        "vault_stats_completed",
        extra={"markdown_files": note_count, "health_score": stats.health_score},
    )

    return stats
