"""Pydantic models for tag listings."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class TagCount(BaseModel):
    """Tag with usage count.

    Attributes:
        tag: Tag name without # prefix
        count: Number of notes using this tag
    """

    tag: str = Field(..., description="Tag name without #")
    count: int = Field(default=0, ge=0)


class TagListing(BaseModel):
    """All tags of the vault with their counts.

    ``tags`` is a flat list of TagCount for the 'flat' format, or a
    nested mapping ``{segment: {"_count": n, "_children": {...}}}`` for
    the 'hierarchical' format.
    """

    format: Literal["flat", "hierarchical"] = "flat"
    total_unique_tags: int = Field(default=0, ge=0)
    total_files_scanned: int = Field(default=0, ge=0)
    tags: list[TagCount] | dict[str, Any] = Field(default_factory=list)
