"""Pydantic models for note operations."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class NoteContent(BaseModel):
    """Parsed note with front matter and body separated.

    This model represents the result of splitting raw note text into
    its YAML front matter block and the markdown body that follows.

    Attributes:
        front_matter: Parsed front matter mapping (empty if none)
        content: The markdown content after the front matter block

    Example raw text:
        ---
        title: API Design
        tags:
          - project
        ---
        # API Design
    """

    front_matter: dict[str, Any] = Field(default_factory=dict)
    content: str = ""


class Note(BaseModel):
    """A note identified by its vault-relative path."""

    path: str = Field(..., description="Vault-relative path")
    front_matter: dict[str, Any] = Field(default_factory=dict, description="Front matter")
    content: str = Field(default="", description="Markdown body")


class NoteWriteRequest(BaseModel):
    """Body for creating or replacing a note."""

    front_matter: dict[str, Any] | None = None
    content: str | None = None


class NoteStoreRequest(NoteWriteRequest):
    """Body for creating a note at a given path."""

    path: str = Field(..., min_length=1)


class BulkDeleteRequest(BaseModel):
    """Body for deleting several notes at once."""

    paths: list[str] = Field(..., min_length=1)


class BulkUpdateItem(NoteWriteRequest):
    """A single note update in a bulk request."""

    path: str = Field(..., min_length=1)


class BulkUpdateRequest(BaseModel):
    """Body for updating several notes at once."""

    items: list[BulkUpdateItem] = Field(..., min_length=1)


class BulkDeleteResult(BaseModel):
    """Outcome of a bulk delete.

    Attributes:
        deleted: Paths that were deleted
        not_found: Paths that did not exist
    """

    deleted: list[str] = Field(default_factory=list)
    not_found: list[str] = Field(default_factory=list)


class BulkUpdateEntry(BaseModel):
    """Per-note outcome of a bulk update."""

    path: str
    status: Literal["updated", "not_found"]
    note: Note | None = None


class BulkUpdateResult(BaseModel):
    """Outcome of a bulk update."""

    results: list[BulkUpdateEntry] = Field(default_factory=list)
