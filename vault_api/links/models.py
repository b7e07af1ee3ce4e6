"""Pydantic models for extracted links and mentions."""

from typing import Literal

from pydantic import BaseModel, Field


class Link(BaseModel):
    """A reference found in note text.

    Attributes:
        type: 'wikilink', 'markdown' or 'tag'
        target: Note path/basename for links, tag name for tags
        display: Human readable label
    """

    type: Literal["wikilink", "markdown", "tag"]
    target: str
    display: str


class Mention(BaseModel):
    """A line mentioning a note by name."""

    line_number: int = Field(..., ge=1, description="1-indexed line number")
    line_content: str = Field(..., description="Trimmed line text")
