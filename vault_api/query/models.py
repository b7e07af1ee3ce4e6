"""Pydantic models for front matter queries."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class FrontmatterQuery(BaseModel):
    """A structured query over note front matter.

    Works like a tiny Dataview: filter notes with ``where``, project
    ``fields``, then sort, de-duplicate and limit.

    Attributes:
        fields: Keys to project, or ``["*"]`` for the whole front matter
        where: Field -> literal (equality) or ``[operator, value]``
        sort_by: Field to sort records on
        sort_direction: 'asc' or 'desc'
        limit: Maximum number of records returned
        distinct: Drop records repeating the projected field values

    Example:
        {
            "fields": ["title", "status"],
            "where": {"status": "active", "priority": [">=", 2]},
            "sort_by": "title",
            "limit": 20
        }
    """

    fields: list[str] = Field(default_factory=lambda: ["*"])
    where: dict[str, Any] = Field(default_factory=dict)
    sort_by: str | None = None
    sort_direction: Literal["asc", "desc"] = "asc"
    limit: int = Field(default=100, ge=1, le=1000)
    distinct: bool = False

    @property
    def wants_all_fields(self) -> bool:
        """True when the wildcard is among the requested fields."""
        return "*" in self.fields


class QueryResult(BaseModel):
    """Records produced by a front matter query.

    Attributes:
        query: The query that was run, defaults filled in
        total_files_scanned: Markdown files considered
        total_records: Number of records returned
        records: Projected records, each with ``_file`` and ``_path``
    """

    query: FrontmatterQuery
    total_files_scanned: int = Field(default=0, ge=0)
    total_records: int = Field(default=0, ge=0)
    records: list[dict[str, Any]] = Field(default_factory=list)
