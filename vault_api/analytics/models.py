"""Pydantic models for vault statistics.

This module defines the metrics record returned by get_vault_stats().
Models follow project patterns.
"""

from pydantic import BaseModel, Field


class LongestNote(BaseModel):
    """Note with the highest word count."""

    file: str = Field(..., description="Note path")
    word_count: int = Field(default=0, ge=0, description="Words in the note")


class MostLinkedNote(BaseModel):
    """Note with the most outgoing links."""

    file: str = Field(..., description="Note path")
    link_count: int = Field(default=0, ge=0, description="Outgoing links")


class HealthFactors(BaseModel):
    """Ratios feeding the health score, each in [0, 1].

    Attributes:
        frontmatter_usage: Share of notes with a front matter block
        tag_usage: Share of notes carrying at least one tag
        link_usage: Share of notes with at least one outgoing link
        orphan_ratio: One minus the share of notes without links
    """

    frontmatter_usage: float = Field(default=0.0, ge=0.0, le=1.0)
    tag_usage: float = Field(default=0.0, ge=0.0, le=1.0)
    link_usage: float = Field(default=0.0, ge=0.0, le=1.0)
    orphan_ratio: float = Field(default=1.0, ge=0.0, le=1.0)


class VaultStats(BaseModel):
    """Corpus-wide statistics and health metrics.

    Counts cover markdown notes only, except ``total_files`` which
    counts every file in the vault.

    Attributes:
        total_files: All files in the vault
        markdown_files: Markdown notes in the vault
        total_size_bytes: Combined UTF-8 size of readable notes
        notes_with_frontmatter: Notes with a non-empty front matter block
        notes_with_tags: Notes with front matter or inline tags
        notes_with_links: Notes with wikilinks or markdown links
        orphan_notes: Notes without outgoing links
        average_note_length: Mean word count, rounded half up
        longest_note: Note with the most words
        most_linked_note: Note with the most outgoing links
        tag_distribution: Tag to note count, most used first
        creation_timeline: YYYY-MM to note count, oldest month first
        health_score: Mean of the health factors as a percentage
        health_factors: The individual ratios
    """

    total_files: int = Field(default=0, ge=0)
    markdown_files: int = Field(default=0, ge=0)
    total_size_bytes: int = Field(default=0, ge=0)
    notes_with_frontmatter: int = Field(default=0, ge=0)
    notes_with_tags: int = Field(default=0, ge=0)
    notes_with_links: int = Field(default=0, ge=0)
    orphan_notes: int = Field(default=0, ge=0)
    average_note_length: int = Field(default=0, ge=0)
    longest_note: LongestNote | None = None
    most_linked_note: MostLinkedNote | None = None
    tag_distribution: dict[str, int] = Field(default_factory=dict)
    creation_timeline: dict[str, int] = Field(default_factory=dict)
    health_score: int = Field(default=0, ge=0, le=100)
    health_factors: HealthFactors = Field(default_factory=HealthFactors)
