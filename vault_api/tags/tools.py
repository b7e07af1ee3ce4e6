"""Tag listing across the vault.

Example:
    list_tags(vault, min_count=2, format="hierarchical")
"""

from collections import Counter
from typing import Any

from vault_api.dependencies import VaultClient, logger
from vault_api.links.tools import extract_all_tags
from vault_api.tags.models import TagCount, TagListing

# =============================================================================
# Helper Functions
# =============================================================================


async def count_vault_tags(
    vault: VaultClient, include_nested: bool = True
) -> tuple[Counter[str], int]:
    """Count, per tag, the notes using it.

    Args:
        vault: Vault to scan
        include_nested: Count parent segments of hierarchical tags too

    Returns:
        Tuple of (tag counts, number of markdown files scanned)
    """
    tag_counts: Counter[str] = Counter()
    files = await vault.list_files()

    for file_path in files:
        try:
            content = await vault.read_file(file_path)
        except Exception as e:
            logger.debug("tags_file_error", extra={"path": file_path, "error": str(e)})
            continue
        tag_counts.update(extract_all_tags(content, include_nested))

    return tag_counts, len(files)


def build_tag_hierarchy(tag_counts: dict[str, int]) -> dict[str, Any]:
    """Fold tag counts into a tree keyed by path segment.

    Every node carries the summed count of the tags below it.

    Examples:
        >>> build_tag_hierarchy({"a/b": 2, "a/c": 1})
        {'a': {'_count': 3, '_children': {'b': {'_count': 2, '_children': {}}, 'c': {'_count': 1, '_children': {}}}}}
    """
    hierarchy: dict[str, Any] = {}
    for tag, count in tag_counts.items():
        level = hierarchy
        for part in tag.split("/"):
            node = level.setdefault(part, {"_count": 0, "_children": {}})
            node["_count"] += count
            level = node["_children"]
    return hierarchy


# =============================================================================
# Operations
# =============================================================================


async def list_tags(
    vault: VaultClient,
    min_count: int = 1,
    include_nested: bool = True,
    format: str = "flat",
) -> TagListing:
    """List vault tags with usage counts, most used first.

    Args:
        vault: Vault to scan
        min_count: Drop tags used by fewer notes
        include_nested: Expand hierarchical tags into their parents
        format: 'flat' list or 'hierarchical' tree

    Returns:
        TagListing in the requested format
    """
    tag_counts, files_scanned = await count_vault_tags(vault, include_nested)

    ranked = sorted(
        ((tag, count) for tag, count in tag_counts.items() if count >= min_count),
        key=lambda item: (-item[1], item[0]),
    )

    tags: list[TagCount] | dict[str, Any]
    if format == "hierarchical":
        tags = build_tag_hierarchy(dict(ranked))
    else:
        tags = [TagCount(tag=tag, count=count) for tag, count in ranked]

    return TagListing(
        format="hierarchical" if format == "hierarchical" else "flat",
        total_unique_tags=len(ranked),
        total_files_scanned=files_scanned,
        tags=tags,
    )
