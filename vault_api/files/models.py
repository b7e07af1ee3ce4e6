"""Pydantic models for raw file and directory operations."""

from typing import Literal

from pydantic import BaseModel, Field

WriteMode = Literal["overwrite", "append", "prepend"]


class FileInfo(BaseModel):
    """A file in the vault.

    Attributes:
        path: Vault-relative path
        size: Size in bytes
        last_modified: ISO 8601 timestamp of the last modification
    """

    path: str
    size: int = Field(default=0, ge=0)
    last_modified: str


class FileContent(BaseModel):
    """Raw text of a file."""

    path: str
    content: str


class FileStoreRequest(BaseModel):
    """Request to create a file or a directory."""

    path: str = Field(..., min_length=1)
    type: Literal["file", "directory"] = "file"
    content: str = ""


class FileUpdateRequest(BaseModel):
    """Request to replace the content of an existing file."""

    content: str


class FileWriteRequest(BaseModel):
    """Request to write a file, creating it when missing.

    Attributes:
        path: Target file path
        content: Text to write
        mode: 'overwrite' replaces the file, 'append' and 'prepend'
            add to the existing text
    """

    path: str = Field(..., min_length=1)
    content: str
    mode: WriteMode = "overwrite"


class FileOperationResult(BaseModel):
    """Outcome of a create, update or delete."""

    message: str
    path: str


class FileWriteResult(FileOperationResult):
    """Outcome of a write, with the resulting file size."""

    mode: WriteMode
    size: int = Field(default=0, ge=0)


class DirectoryEntry(BaseModel):
    """A file or directory in a listing.

    ``size`` is None for directories.
    """

    path: str
    type: Literal["file", "directory"]
    size: int | None = None
    modified: int


class DirectoryListing(BaseModel):
    """One page of a directory listing."""

    items: list[DirectoryEntry] = Field(default_factory=list)
    total_items: int = Field(default=0, ge=0)
    path: str
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=50, ge=1)
    has_more: bool = False
