"""Pydantic models for search requests and results.

This module defines the data structures for the two search flavours:
grep-style line matching and scoped vault search. Models follow the
same pattern as notes/models.py.
"""

from typing import Literal

from pydantic import BaseModel, Field

from vault_api.notes.models import Note

SearchScope = Literal["content", "filename", "tags"]


class GrepRequest(BaseModel):
    """A grep-style search over vault files.

    Attributes:
        pattern: Text or regular expression to look for
        is_regex: Treat pattern as a regular expression
        case_sensitive: Match case exactly
        include_frontmatter: Also match lines inside the front matter block
        file_pattern: Glob filter on vault-relative paths
        max_results: Global cap on returned matches
        context_lines: Lines of context around each match
    """

    pattern: str = Field(..., min_length=1)
    is_regex: bool = False
    case_sensitive: bool = False
    include_frontmatter: bool = True
    file_pattern: str = "*.md"
    max_results: int = Field(default=100, ge=1, le=1000)
    context_lines: int = Field(default=0, ge=0, le=10)


class GrepMatch(BaseModel):
    """A single matching line."""

    line_number: int = Field(..., ge=1)
    line_content: str
    in_frontmatter: bool = False
    context_before: list[str] = Field(default_factory=list)
    context_after: list[str] = Field(default_factory=list)


class GrepFileResult(BaseModel):
    """Matches found in one file.

    Attributes:
        file: Vault-relative path
        matches: Matches returned for this file (may be capped)
        total_matches: Matching lines in this file before capping
    """

    file: str
    matches: list[GrepMatch] = Field(default_factory=list)
    total_matches: int = Field(default=0, ge=0)


class GrepResult(BaseModel):
    """Result of a grep over the vault."""

    pattern: str
    is_regex: bool = False
    files_searched: int = Field(default=0, ge=0)
    files_with_matches: int = Field(default=0, ge=0)
    total_matches: int = Field(default=0, ge=0)
    results: list[GrepFileResult] = Field(default_factory=list)


class VaultSearchHit(BaseModel):
    """A note that matched a vault search.

    Attributes:
        note: The matching note
        matches: Scopes that matched ('filename', 'content', 'tags')
        relevance: Number of matching scopes
    """

    note: Note
    matches: list[SearchScope] = Field(default_factory=list)
    relevance: int = Field(default=0, ge=0)


class VaultSearchResult(BaseModel):
    """Collection of vault search hits."""

    results: list[VaultSearchHit] = Field(default_factory=list)
    query: str = ""
    scope: list[SearchScope] = Field(default_factory=list)
    total_results: int = Field(default=0, ge=0)
