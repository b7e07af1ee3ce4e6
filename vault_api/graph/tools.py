"""Link graph analysis: backlinks and related notes.

The link graph is implicit. Nothing is indexed; every call re-reads
the vault and derives edges from wikilinks, markdown links, tags and
plain-text mentions.
"""

from pathlib import PurePosixPath

from vault_api.dependencies import VaultClient, VaultNotFoundError, logger
from vault_api.graph.models import (
    Backlink,
    BacklinksResult,
    RelatedNote,
    RelatedNotesResult,
    RelationCriterion,
)
from vault_api.links.models import Link
from vault_api.links.tools import (
    extract_links,
    extract_wikilink_targets,
    find_mentions,
    link_basename,
)
from vault_api.notes.tools import frontmatter_tags, normalize_path, note_from_raw

# Weight of a direct wikilink in either direction
LINK_WEIGHT = 2


async def get_backlinks(
    vault: VaultClient,
    note_path: str,
    include_mentions: bool = True,
    include_tags: bool = False,
) -> BacklinksResult:
    """Find notes that link to or mention a note.

    A link counts when its target equals the note path, the bare
    basename or basename + ``.md``. With ``include_mentions`` any line
    containing the basename (case-insensitive) counts as well. A
    missing target note is not an error; it simply has no outgoing
    links.

    Args:
        vault: Vault to scan
        note_path: Target note (``.md`` added when missing)
        include_mentions: Also report plain-text mentions
        include_tags: Include tags among extracted links

    Returns:
        BacklinksResult with incoming and outgoing references
    """
    note_path = normalize_path(note_path)
    basename = PurePosixPath(note_path).stem
    accepted_targets = {note_path, basename, f"{basename}.md"}

    logger.info(
        "backlinks_called",
        extra={"note_path": note_path, "include_mentions": include_mentions},
    )

    outgoing: list[Link] = []
    try:
        outgoing = extract_links(await vault.read_file(note_path), include_tags)
    except VaultNotFoundError:
        logger.debug("backlinks_target_missing", extra={"path": note_path})

    backlinks: list[Backlink] = []
    for file_path in await vault.list_files():
        if file_path == note_path:
            continue

        try:
            content = await vault.read_file(file_path)
        except Exception as e:
            logger.debug("backlinks_file_error", extra={"path": file_path, "error": str(e)})
            continue

        links = [
            link for link in extract_links(content, include_tags) if link.target in accepted_targets
        ]
        mentions = find_mentions(content, basename) if include_mentions else []

        if links or mentions:
            backlinks.append(
                Backlink(
                    file=file_path,
                    links=links,
                    mentions=mentions,
                    link_count=len(links),
                    mention_count=len(mentions),
                )
            )

    return BacklinksResult(
        target_note=note_path,
        backlinks=backlinks,
        outgoing_links=outgoing,
        backlink_count=len(backlinks),
        outgoing_link_count=len(outgoing),
    )


async def get_related_notes(
    vault: VaultClient,
    path: str,
    criteria: list[RelationCriterion] | None = None,
    limit: int = 10,
) -> RelatedNotesResult:
    """Rank notes by how strongly they relate to a source note.

    Scoring per candidate note:
    - tags: +1 per front matter tag shared with the source
    - links: +2 when the source wikilinks to the candidate ('linked_to')
    - always: +2 when the candidate wikilinks to the source ('links_back')

    Args:
        vault: Vault to scan
        path: Source note path
        criteria: 'tags', 'links' or both (default: both)
        limit: Maximum results to return

    Returns:
        RelatedNotesResult sorted by descending similarity

    Raises:
        VaultNotFoundError: If the source note does not exist
    """
    criteria = list(dict.fromkeys(criteria or ["tags", "links"]))
    if not await vault.file_exists(path) or await vault.is_directory(path):
        raise VaultNotFoundError(f"Note not found: {path}")

    source = note_from_raw(path, await vault.read_file(path))
    source_basename = link_basename(path)
    source_tags = frontmatter_tags(source.front_matter) if "tags" in criteria else []
    source_links = (
        {link_basename(target) for target in extract_wikilink_targets(source.content)}
        if "links" in criteria
        else set()
    )

    logger.info("related_notes_called", extra={"path": path, "criteria": criteria})

    related: list[RelatedNote] = []
    for file_path in await vault.list_files():
        if file_path == path:
            continue

        try:
            note = note_from_raw(file_path, await vault.read_file(file_path))
        except Exception as e:
            logger.debug("related_notes_file_error", extra={"path": file_path, "error": str(e)})
            continue

        similarity = 0
        connections: list[str] = []

        if source_tags:
            other_tags = set(frontmatter_tags(note.front_matter))
            shared = list(dict.fromkeys(tag for tag in source_tags if tag in other_tags))
            if shared:
                similarity += len(shared)
                connections.append(f"shared_tags: {', '.join(shared)}")

        if link_basename(file_path) in source_links:
            similarity += LINK_WEIGHT
            connections.append("linked_to")

        # Checked whatever the criteria
        other_links = {link_basename(t) for t in extract_wikilink_targets(note.content)}
        if source_basename in other_links:
            similarity += LINK_WEIGHT
            connections.append("links_back")

        if similarity > 0:
            related.append(RelatedNote(note=note, similarity=similarity, connections=connections))

    related.sort(key=lambda item: item.similarity, reverse=True)
    related = related[:limit]

    return RelatedNotesResult(
        related_notes=related,
        source_note=path,
        criteria=criteria,
        total_found=len(related),
    )
