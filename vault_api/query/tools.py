"""Front matter query engine.

This module evaluates structured queries over note front matter, in
the spirit of the Dataview plugin: filter with ``where`` predicates,
project fields, sort, de-duplicate and limit. It also lists the
front matter keys and values used across the vault.

Example:
    query_frontmatter(vault, FrontmatterQuery(
        fields=["title"],
        where={"status": "active", "tags": ["contains", "project"]},
        sort_by="title",
    ))
"""

import json
import operator as op
import posixpath
from datetime import date
from typing import Any

from vault_api.dependencies import VaultClient, logger
from vault_api.notes.tools import parse_note
from vault_api.query.models import FrontmatterQuery, QueryResult

ORDERINGS = {">": op.gt, ">=": op.ge, "<": op.lt, "<=": op.le}


# =============================================================================
# Predicate Evaluation
# =============================================================================


def _comparable(value: Any) -> Any:
    """Dates compare as ISO strings so they line up with JSON input."""
    if isinstance(value, date):
        return value.isoformat()
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strict_equals(value: Any, other: Any) -> bool:
    """Equality that never treats booleans as numbers.

    Examples:
        >>> strict_equals(1, True)
        False
        >>> strict_equals(date(2025, 1, 1), "2025-01-01")
        True
    """
    value, other = _comparable(value), _comparable(other)
    if isinstance(value, bool) or isinstance(other, bool):
        return type(value) is type(other) and value == other
    return value == other


def compare_values(value: Any, operator: str, compare_value: Any) -> bool:
    """Evaluate a single ``value <operator> compare_value`` predicate.

    Orderings compare numbers numerically and strings lexicographically;
    anything else (including null) does not satisfy an ordering.
    Unknown operators never match.

    Args:
        value: Front matter value (None when the key is absent)
        operator: One of =, !=, >, >=, <, <=, in, contains, like
        compare_value: Value supplied by the query

    Returns:
        Whether the predicate holds
    """
    if operator == "=":
        return strict_equals(value, compare_value)
    if operator == "!=":
        return not strict_equals(value, compare_value)

    if operator in ORDERINGS:
        left, right = _comparable(value), _comparable(compare_value)
        numeric = _is_number(left) and _is_number(right)
        textual = isinstance(left, str) and isinstance(right, str)
        return (numeric or textual) and ORDERINGS[operator](left, right)

    if operator == "in":
        return isinstance(compare_value, list) and any(
            strict_equals(value, candidate) for candidate in compare_value
        )
    if operator == "contains":
        return isinstance(value, list) and any(
            strict_equals(item, compare_value) for item in value
        )
    if operator == "like":
        return (
            isinstance(value, str)
            and isinstance(compare_value, str)
            and compare_value.lower() in value.lower()
        )

    return False


def matches_where(front_matter: dict[str, Any], where: dict[str, Any]) -> bool:
    """Check a note's front matter against every ``where`` entry (AND).

    A list condition reads as ``[operator, value]``; any other value is
    an equality literal.

    Examples:
        >>> matches_where({"status": "active", "priority": 3}, {"priority": [">", 2]})
        True
        >>> matches_where({"status": "active"}, {"status": "active", "priority": "high"})
        False
    """
    for field, condition in where.items():
        value = front_matter.get(field)

        if isinstance(condition, list):
            operator = condition[0] if condition else "="
            compare_value = condition[1] if len(condition) > 1 else None
            if not isinstance(operator, str) or not compare_values(value, operator, compare_value):
                return False
        elif not strict_equals(value, condition):
            return False

    return True


# =============================================================================
# Projection, Sorting, Distinct
# =============================================================================


def project_record(path: str, front_matter: dict[str, Any], fields: list[str]) -> dict[str, Any]:
    """Build a query record for one note.

    Examples:
        >>> project_record("Projects/a.md", {"title": "A", "x": 1}, ["title", "missing"])
        {'_file': 'Projects/a.md', '_path': 'Projects', 'title': 'A', 'missing': None}
    """
    record: dict[str, Any] = {"_file": path, "_path": posixpath.dirname(path) or "."}
    if "*" in fields:
        record.update(front_matter)
    else:
        for field in fields:
            record[field] = front_matter.get(field)
    return record


def _sort_key(value: Any) -> tuple[int, Any]:
    # null/empty < numbers < strings < anything else
    value = _comparable(value)
    if value is None or value == "":
        return (0, "")
    if isinstance(value, (int, float)):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    return (3, json.dumps(value, sort_keys=True, default=str))


def sort_records(
    records: list[dict[str, Any]], sort_by: str, direction: str = "asc"
) -> list[dict[str, Any]]:
    """Stable sort on one field, skipped when no record has the field."""
    if not any(record.get(sort_by) is not None for record in records):
        return records
    return sorted(
        records,
        key=lambda record: _sort_key(record.get(sort_by)),
        reverse=direction == "desc",
    )


def distinct_records(records: list[dict[str, Any]], fields: list[str]) -> list[dict[str, Any]]:
    """Keep the first record for each combination of field values."""
    seen: set[str] = set()
    unique: list[dict[str, Any]] = []
    for record in records:
        key = json.dumps([record.get(field) for field in fields], sort_keys=True, default=str)
        if key not in seen:
            seen.add(key)
            unique.append(record)
    return unique


# =============================================================================
# Operations
# =============================================================================


async def query_frontmatter(vault: VaultClient, query: FrontmatterQuery) -> QueryResult:
    """Run a front matter query over every markdown note.

    Only notes that have front matter are candidates. Unreadable files
    are skipped.
    """
    logger.info(
        "query_frontmatter_called",
        extra={"fields": query.fields, "where": query.where, "sort_by": query.sort_by},
    )

    files = await vault.list_files()
    records: list[dict[str, Any]] = []

    for file_path in files:
        try:
            parsed = parse_note(await vault.read_file(file_path))
        except Exception as e:
            logger.debug("query_file_error", extra={"path": file_path, "error": str(e)})
            continue

        if parsed.front_matter and matches_where(parsed.front_matter, query.where):
            records.append(project_record(file_path, parsed.front_matter, query.fields))

    if query.sort_by:
        records = sort_records(records, query.sort_by, query.sort_direction)

    if query.distinct and query.fields and not query.wants_all_fields:
        records = distinct_records(records, query.fields)

    records = records[: query.limit]

    return QueryResult(
        query=query,
        total_files_scanned=len(files),
        total_records=len(records),
        records=records,
    )


async def _all_front_matter(vault: VaultClient) -> list[dict[str, Any]]:
    front_matters: list[dict[str, Any]] = []
    for file_path in await vault.list_files():
        try:
            front_matters.append(parse_note(await vault.read_file(file_path)).front_matter)
        except Exception as e:
            logger.debug("metadata_file_error", extra={"path": file_path, "error": str(e)})
    return front_matters


async def list_metadata_keys(vault: VaultClient) -> list[str]:
    """Unique front matter keys across the vault, in first-seen order."""
    keys: dict[str, None] = {}
    for front_matter in await _all_front_matter(vault):
        keys.update(dict.fromkeys(front_matter))
    return list(keys)


async def list_metadata_values(vault: VaultClient, key: str) -> list[Any]:
    """Unique values of one front matter key, in first-seen order."""
    seen: set[str] = set()
    values: list[Any] = []
    for front_matter in await _all_front_matter(vault):
        if key not in front_matter:
            continue
        value = front_matter[key]
        fingerprint = json.dumps(value, sort_keys=True, default=str)
        if fingerprint not in seen:
            seen.add(fingerprint)
            values.append(value)
    return values
