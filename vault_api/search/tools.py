"""Vault search operations.

This module implements the two search flavours exposed by the API:

- ``grep_vault``: line-oriented pattern matching over any vault file,
  aware of the front matter block, with a global result cap
- ``search_vault``: note-level search across filename, body and tags,
  ranked by how many scopes matched

Both are linear scans that re-read every candidate file. Files that
cannot be read are skipped; they never abort a scan.
"""

import re
from collections.abc import Callable
from enum import Enum
from fnmatch import fnmatchcase

from vault_api.dependencies import VaultClient, logger
from vault_api.notes.tools import frontmatter_tags, is_delimiter, note_from_raw
from vault_api.search.models import (
    GrepFileResult,
    GrepMatch,
    GrepRequest,
    GrepResult,
    SearchScope,
    VaultSearchHit,
    VaultSearchResult,
)

LineMatcher = Callable[[str], bool]


class FrontmatterState(Enum):
    """Where a line-by-line scan stands relative to the front matter block."""

    BEFORE_BLOCK = "before_block"
    IN_BLOCK = "in_block"
    AFTER_BLOCK = "after_block"


# =============================================================================
# Helper Functions
# =============================================================================


def build_matcher(pattern: str, is_regex: bool, case_sensitive: bool) -> LineMatcher:
    """Build a line predicate for a grep pattern.

    An invalid regular expression produces a matcher that never
    matches, so the scan carries on with zero hits.

    Examples:
        >>> build_matcher("api", is_regex=False, case_sensitive=False)("The API")
        True
        >>> build_matcher("^#+ ", is_regex=True, case_sensitive=True)("## Heading")
        True
        >>> build_matcher("([", is_regex=True, case_sensitive=False)("anything")
        False
    """
    if is_regex:
        try:
            compiled = re.compile(pattern, 0 if case_sensitive else re.IGNORECASE)
        except re.error as e:
            logger.warning("grep_invalid_pattern", extra={"pattern": pattern, "error": str(e)})
            return lambda line: False
        return lambda line: compiled.search(line) is not None

    if case_sensitive:
        return lambda line: pattern in line
    needle = pattern.lower()
    return lambda line: needle in line.lower()


def find_matches(
    lines: list[str],
    matcher: LineMatcher,
    include_frontmatter: bool = True,
    context_lines: int = 0,
) -> list[GrepMatch]:
    """Match lines of one file, tracking the front matter block.

    The block opens only when the first line is ``---`` and closes at
    the next ``---`` line; both delimiter lines are skipped. After the
    block (or in a file without one) a ``---`` line is ordinary text,
    e.g. a horizontal rule. An unterminated block runs to the end of
    the file.

    Args:
        lines: File content split into lines
        matcher: Line predicate from build_matcher()
        include_frontmatter: Match lines inside the block too
        context_lines: Lines of context to attach before/after each match

    Returns:
        Matches in line order
    """
    matches: list[GrepMatch] = []
    state = FrontmatterState.BEFORE_BLOCK

    for index, line in enumerate(lines):
        delimiter = is_delimiter(line)

        if state is FrontmatterState.BEFORE_BLOCK:
            if delimiter:
                state = FrontmatterState.IN_BLOCK
                continue
            state = FrontmatterState.AFTER_BLOCK
        elif state is FrontmatterState.IN_BLOCK and delimiter:
            state = FrontmatterState.AFTER_BLOCK
            continue

        in_frontmatter = state is FrontmatterState.IN_BLOCK
        if in_frontmatter and not include_frontmatter:
            continue

        if matcher(line):
            matches.append(
                GrepMatch(
                    line_number=index + 1,
                    line_content=line,
                    in_frontmatter=in_frontmatter,
                    context_before=lines[max(0, index - context_lines) : index],
                    context_after=lines[index + 1 : index + 1 + context_lines],
                )
            )

    return matches


# =============================================================================
# Operations
# =============================================================================


async def grep_vault(vault: VaultClient, request: GrepRequest) -> GrepResult:
    """Search vault files line by line.

    Files matching ``file_pattern`` are scanned in path order. Matches
    accumulate against ``max_results``: the file that reaches the cap is
    truncated and no further files are read.

    Args:
        vault: Vault to search
        request: Pattern and options

    Returns:
        GrepResult with per-file matches
    """
    logger.info(
        "grep_vault_called",
        extra={"pattern": request.pattern, "is_regex": request.is_regex},
    )

    files = [
        file_path
        for file_path in await vault.list_files(pattern="*")
        if fnmatchcase(file_path, request.file_pattern)
    ]
    matcher = build_matcher(request.pattern, request.is_regex, request.case_sensitive)

    results: list[GrepFileResult] = []
    total_matches = 0

    for file_path in files:
        if total_matches >= request.max_results:
            break

        try:
            content = await vault.read_file(file_path)
        except Exception as e:
            logger.debug("grep_file_error", extra={"path": file_path, "error": str(e)})
            continue

        lines = [line.rstrip("\r") for line in content.split("\n")]
        matches = find_matches(lines, matcher, request.include_frontmatter, request.context_lines)
        if not matches:
            continue

        kept = matches[: request.max_results - total_matches]
        results.append(GrepFileResult(file=file_path, matches=kept, total_matches=len(matches)))
        total_matches += len(kept)

    logger.info(
        "grep_vault_completed",
        extra={"files_with_matches": len(results), "total_matches": total_matches},
    )

    return GrepResult(
        pattern=request.pattern,
        is_regex=request.is_regex,
        files_searched=len(files),
        files_with_matches=len(results),
        total_matches=total_matches,
        results=results,
    )


async def search_vault(
    vault: VaultClient,
    query: str,
    scope: list[SearchScope] | None = None,
    path_filter: str | None = None,
    limit: int = 20,
) -> VaultSearchResult:
    """Search notes by filename, body and front matter tags.

    Relevance is the number of scopes that matched. At most
    ``limit * 2`` candidate notes are examined and scanning stops once
    ``limit`` hits are collected.

    Args:
        vault: Vault to search
        query: Case-insensitive text to look for
        scope: Any of 'content', 'filename', 'tags' (default: all)
        path_filter: Only consider paths starting with this prefix
        limit: Maximum results to return

    Returns:
        VaultSearchResult sorted by descending relevance
    """
    scope = list(dict.fromkeys(scope or ["content", "filename", "tags"]))
    needle = query.lower()

    logger.info(
        "search_vault_called",
        extra={"query": query, "scope": scope, "path_filter": path_filter},
    )

    files = await vault.list_files()
    if path_filter:
        files = [file_path for file_path in files if file_path.startswith(path_filter)]

    hits: list[VaultSearchHit] = []

    for file_path in files[: limit * 2]:
        matches: list[SearchScope] = []
        if "filename" in scope and needle in file_path.lower():
            matches.append("filename")

        try:
            note = note_from_raw(file_path, await vault.read_file(file_path))
        except Exception as e:
            logger.debug("search_file_error", extra={"path": file_path, "error": str(e)})
            continue

        if "content" in scope and needle in note.content.lower():
            matches.append("content")

        if "tags" in scope and any(
            needle in tag.lower() for tag in frontmatter_tags(note.front_matter)
        ):
            matches.append("tags")

        if matches:
            hits.append(VaultSearchHit(note=note, matches=matches, relevance=len(matches)))

        if len(hits) >= limit:
            break

    # Sort by relevance (descending), stable for equal scores
    hits.sort(key=lambda hit: hit.relevance, reverse=True)
    hits = hits[:limit]

    return VaultSearchResult(
        results=hits,
        query=query,
        scope=scope,
        total_results=len(hits),
    )
