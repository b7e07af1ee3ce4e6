"""Note parsing and note operations.

This module holds the front matter codec used by every other feature
(``parse_note`` / ``build_note``) and the note-level operations exposed
by the notes router: list, read, create, upsert, replace, patch, delete,
their bulk variants, and the recent/daily note lookups.

Notes are never cached. Every operation re-reads the file from the
vault, and every mutation builds a complete new raw string and writes
it back wholesale.

Example:
    >>> parsed = parse_note("---\\ntitle: Plan\\n---\\n# Plan")
    >>> parsed.front_matter
    {'title': 'Plan'}
    >>> build_note(parsed.front_matter, parsed.content)
    '---\\ntitle: Plan\\n---\\n# Plan'
"""

from datetime import date, timedelta
from typing import Any

import yaml
from frontmatter.default_handlers import BaseHandler, YAMLHandler

from vault_api.dependencies import (
    VaultClient,
    VaultConflictError,
    VaultNotFoundError,
    logger,
)
from vault_api.notes.models import (
    BulkDeleteResult,
    BulkUpdateEntry,
    BulkUpdateItem,
    BulkUpdateResult,
    Note,
    NoteContent,
    NoteStoreRequest,
    NoteWriteRequest,
)

DELIMITER = "---"

# YAML capability used by the codec; any python-frontmatter handler fits
YAML_HANDLER = YAMLHandler()


class DailyNoteNotFoundError(VaultNotFoundError):
    """Raised when no daily note exists for a date."""

    def __init__(self, day: date, searched_paths: list[str]) -> None:
        super().__init__(f"Daily note not found for {day.isoformat()}")
        self.date = day
        self.searched_paths = searched_paths


# =============================================================================
# Front Matter Codec
# =============================================================================


def normalize_path(path: str) -> str:
    """Normalize a note path for consistent handling.

    This function ensures all paths are in a consistent format:
    - Strips leading/trailing whitespace
    - Strips leading/trailing slashes
    - Appends .md extension if not present

    Args:
        path: Raw path input from the request

    Returns:
        Normalized path with .md extension

    Examples:
        >>> normalize_path("test")
        'test.md'
        >>> normalize_path("/Projects/API Design/")
        'Projects/API Design.md'
        >>> normalize_path("note.md")
        'note.md'
    """
    path = path.strip().strip("/")
    if not path.endswith(".md"):
        path = f"{path}.md"
    return path


def is_delimiter(line: str) -> bool:
    return line.strip() == DELIMITER


def parse_note(raw: str, handler: BaseHandler = YAML_HANDLER) -> NoteContent:
    """Split raw note text into front matter and body.

    The block is recognised only when the very first line is ``---``;
    it ends at the next ``---`` line. Whitespace around a delimiter is
    ignored. Parsing fails soft:

    - invalid YAML (or a non-mapping document) leaves the front matter
      empty and returns the whole input as content
    - an unterminated block yields everything after the opening line
    - an empty block yields the text after the closing line

    Args:
        raw: Raw note content (may or may not have front matter)
        handler: python-frontmatter handler used to load the block

    Returns:
        NoteContent with parsed front matter (possibly empty) and body
    """
    lines = raw.split("\n")
    if not is_delimiter(lines[0]):
        return NoteContent(content=raw)

    closing = next((i for i in range(1, len(lines)) if is_delimiter(lines[i])), None)
    if closing is None:
        return NoteContent(content="\n".join(lines[1:]).lstrip("\r\n"))

    block = "\n".join(lines[1:closing])
    remainder = "\n".join(lines[closing + 1 :]).lstrip("\r\n")
    if not block.strip():
        return NoteContent(content=remainder)

    try:
        metadata = handler.load(block)
    except yaml.YAMLError as e:
        logger.debug("frontmatter_parse_failed", extra={"error": str(e)})
        return NoteContent(content=raw)

    if metadata is None:
        return NoteContent(content=remainder)
    if not isinstance(metadata, dict):
        return NoteContent(content=raw)

    return NoteContent(
        front_matter={str(key): value for key, value in metadata.items()},
        content=remainder,
    )


def build_note(
    front_matter: dict[str, Any], content: str, handler: BaseHandler = YAML_HANDLER
) -> str:
    """Serialize front matter and body back into raw note text.

    Notes without front matter stay plain: no delimiter block is
    emitted. Keys keep their insertion order.

    Args:
        front_matter: Front matter mapping
        content: Markdown body

    Returns:
        Raw note text

    Example output:
        ---
        title: API Design
        tags:
        - project
        ---
        # API Design
    """
    if not front_matter:
        return content
    serialized = handler.export(front_matter, sort_keys=False)
    return f"{DELIMITER}\n{serialized}\n{DELIMITER}\n{content}"


def frontmatter_tags(front_matter: dict[str, Any]) -> list[str]:
    """Return the front matter ``tags`` field as a list of strings.

    A scalar value is treated as a single tag, ``None`` entries are
    dropped and a leading ``#`` is removed.

    Examples:
        >>> frontmatter_tags({"tags": ["a", "#b"]})
        ['a', 'b']
        >>> frontmatter_tags({"tags": "solo"})
        ['solo']
        >>> frontmatter_tags({})
        []
    """
    tags = front_matter.get("tags")
    if tags is None:
        return []
    if not isinstance(tags, list):
        tags = [tags]
    return [str(tag).lstrip("#") for tag in tags if tag is not None and str(tag).strip()]


def note_from_raw(path: str, raw: str) -> Note:
    """Build a Note from its path and raw text."""
    parsed = parse_note(raw)
    return Note(path=path, front_matter=parsed.front_matter, content=parsed.content)


async def load_note(vault: VaultClient, path: str) -> Note:
    """Read and parse a single note.

    Raises:
        VaultNotFoundError: If the note does not exist
    """
    if not await vault.file_exists(path) or await vault.is_directory(path):
        raise VaultNotFoundError(f"Note not found: {path}")
    return note_from_raw(path, await vault.read_file(path))


# =============================================================================
# Note Operations
# =============================================================================


async def list_notes(vault: VaultClient, search: str | None = None) -> list[Note]:
    """List all notes, optionally filtered by a search term.

    The search is case-insensitive and matches the path, the body or
    any front matter tag.
    """
    notes: list[Note] = []
    needle = search.lower() if search else None

    for file_path in await vault.list_files():
        try:
            note = note_from_raw(file_path, await vault.read_file(file_path))
        except Exception as e:
            logger.debug("list_notes_file_error", extra={"path": file_path, "error": str(e)})
            continue

        if needle and not (
            needle in note.path.lower()
            or needle in note.content.lower()
            or any(needle in tag.lower() for tag in frontmatter_tags(note.front_matter))
        ):
            continue
        notes.append(note)

    return notes


async def get_note(vault: VaultClient, path: str) -> Note:
    """Read a note by path (``.md`` added when missing)."""
    return await load_note(vault, normalize_path(path))


async def _write_note(
    vault: VaultClient, path: str, front_matter: dict[str, Any], content: str
) -> Note:
    raw = build_note(front_matter, content)
    await vault.write_file(path, raw)
    return note_from_raw(path, raw)


async def create_note(vault: VaultClient, request: NoteStoreRequest) -> Note:
    """Create a new note.

    Raises:
        VaultConflictError: If a note already exists at the path
    """
    path = normalize_path(request.path)
    if await vault.file_exists(path):
        raise VaultConflictError(f"Note already exists at {path}")

    note = await _write_note(vault, path, request.front_matter or {}, request.content or "")
    logger.info("note_created", extra={"path": path})
    return note


async def upsert_note(vault: VaultClient, request: NoteStoreRequest) -> tuple[Note, bool]:
    """Create a note or overwrite it completely.

    Returns:
        Tuple of (note, created) where created is False for an update
    """
    path = normalize_path(request.path)
    created = not await vault.file_exists(path)

    note = await _write_note(vault, path, request.front_matter or {}, request.content or "")
    logger.info("note_upserted", extra={"path": path, "created": created})
    return note, created


async def update_note(vault: VaultClient, path: str, request: NoteWriteRequest) -> Note:
    """Replace front matter and body of an existing note."""
    path = normalize_path(path)
    if not await vault.file_exists(path):
        raise VaultNotFoundError(f"Note not found: {path}")

    note = await _write_note(vault, path, request.front_matter or {}, request.content or "")
    logger.info("note_updated", extra={"path": path})
    return note


async def patch_note(vault: VaultClient, path: str, request: NoteWriteRequest) -> Note:
    """Merge front matter into an existing note and optionally replace its body.

    Front matter keys are merged shallowly, the request winning on
    conflicts. The body is kept unless the request carries one.
    """
    existing = await load_note(vault, normalize_path(path))
    front_matter = {**existing.front_matter, **(request.front_matter or {})}
    content = request.content if request.content is not None else existing.content

    note = await _write_note(vault, existing.path, front_matter, content)
    logger.info("note_patched", extra={"path": existing.path})
    return note


async def delete_note(vault: VaultClient, path: str) -> None:
    """Delete a note."""
    path = normalize_path(path)
    if not await vault.file_exists(path):
        raise VaultNotFoundError(f"Note not found: {path}")
    await vault.delete_file(path)
    logger.info("note_deleted", extra={"path": path})


async def bulk_delete_notes(vault: VaultClient, paths: list[str]) -> BulkDeleteResult:
    """Delete several notes, reporting which ones did not exist."""
    result = BulkDeleteResult()
    for raw_path in paths:
        path = normalize_path(raw_path)
        if await vault.file_exists(path) and not await vault.is_directory(path):
            await vault.delete_file(path)
            result.deleted.append(path)
        else:
            result.not_found.append(path)

    logger.info(
        "notes_bulk_deleted",
        extra={"deleted": len(result.deleted), "not_found": len(result.not_found)},
    )
    return result


async def bulk_update_notes(vault: VaultClient, items: list[BulkUpdateItem]) -> BulkUpdateResult:
    """Patch several notes; missing notes are reported, not created."""
    result = BulkUpdateResult()
    for item in items:
        path = normalize_path(item.path)
        try:
            note = await patch_note(vault, path, item)
        except VaultNotFoundError:
            result.results.append(BulkUpdateEntry(path=path, status="not_found"))
            continue
        result.results.append(BulkUpdateEntry(path=path, status="updated", note=note))
    return result


async def get_recent_notes(vault: VaultClient, limit: int = 5) -> list[Note]:
    """Return the most recently modified notes, newest first."""
    stamped: list[tuple[int, str]] = []
    for file_path in await vault.list_files():
        try:
            stamped.append((await vault.last_modified(file_path), file_path))
        except Exception as e:
            logger.debug("recent_notes_file_error", extra={"path": file_path, "error": str(e)})

    stamped.sort(key=lambda item: item[0], reverse=True)

    notes: list[Note] = []
    for _, file_path in stamped:
        if len(notes) >= limit:
            break
        try:
            notes.append(note_from_raw(file_path, await vault.read_file(file_path)))
        except Exception as e:
            logger.debug("recent_notes_file_error", extra={"path": file_path, "error": str(e)})
    return notes


def parse_day(value: str, today: date | None = None) -> date:
    """Resolve 'today', 'yesterday', 'tomorrow' or an ISO date.

    Raises:
        ValueError: If the value is not a recognised date

    Examples:
        >>> parse_day("yesterday", today=date(2025, 1, 2))
        datetime.date(2025, 1, 1)
        >>> parse_day("2025-05-21")
        datetime.date(2025, 5, 21)
    """
    today = today or date.today()
    shortcuts = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    value = value.strip().lower()
    if value in shortcuts:
        return shortcuts[value]
    return date.fromisoformat(value)


def daily_note_candidates(day: date, folders: list[str]) -> list[str]:
    """Paths a daily note for ``day`` may live at, in lookup order."""
    stamp = day.isoformat()
    return [
        stamp,
        f"{stamp}.md",
        *(f"{folder}/{stamp}.md" for folder in folders),
        f"{day:%Y/%m/%d}.md",
    ]


async def get_daily_note(vault: VaultClient, day: date, folders: list[str]) -> Note:
    """Find the daily note for a date.

    Raises:
        DailyNoteNotFoundError: If none of the candidate paths exists
    """
    candidates = daily_note_candidates(day, folders)
    for path in candidates:
        if await vault.file_exists(path) and not await vault.is_directory(path):
            try:
                return note_from_raw(path, await vault.read_file(path))
            except Exception as e:
                logger.debug("daily_note_file_error", extra={"path": path, "error": str(e)})
                continue
    raise DailyNoteNotFoundError(day, candidates)
