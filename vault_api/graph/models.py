"""Pydantic models for link graph results."""

from typing import Literal

from pydantic import BaseModel, Field

from vault_api.links.models import Link, Mention
from vault_api.notes.models import Note

RelationCriterion = Literal["tags", "links"]


class Backlink(BaseModel):
    """A note that links to or mentions the target note.

    Attributes:
        file: Path of the linking note
        links: Links in that note pointing at the target
        mentions: Lines mentioning the target's name
        link_count: Number of matching links
        mention_count: Number of mentioning lines
    """

    file: str
    links: list[Link] = Field(default_factory=list)
    mentions: list[Mention] = Field(default_factory=list)
    link_count: int = Field(default=0, ge=0)
    mention_count: int = Field(default=0, ge=0)


class BacklinksResult(BaseModel):
    """Incoming and outgoing references of a note."""

    target_note: str
    backlinks: list[Backlink] = Field(default_factory=list)
    outgoing_links: list[Link] = Field(default_factory=list)
    backlink_count: int = Field(default=0, ge=0)
    outgoing_link_count: int = Field(default=0, ge=0)


class RelatedNote(BaseModel):
    """A note related to the source note.

    Attributes:
        note: The related note
        similarity: Integer score used for ranking only
        connections: Labels explaining the score, e.g. 'linked_to'
    """

    note: Note
    similarity: int = Field(default=0, ge=0)
    connections: list[str] = Field(default_factory=list)


class RelatedNotesResult(BaseModel):
    """Notes related to a source note, best first."""

    related_notes: list[RelatedNote] = Field(default_factory=list)
    source_note: str
    criteria: list[RelationCriterion] = Field(default_factory=list)
    total_found: int = Field(default=0, ge=0)
