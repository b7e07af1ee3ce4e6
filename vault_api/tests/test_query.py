"""Tests for front matter queries and metadata listings."""

from datetime import date
from pathlib import Path

import pytest

from vault_api.dependencies import VaultClient
from vault_api.query.models import FrontmatterQuery
from vault_api.query.tools import (
    compare_values,
    distinct_records,
    list_metadata_keys,
    list_metadata_values,
    matches_where,
    project_record,
    query_frontmatter,
    sort_records,
)

# =============================================================================
# Predicate Tests
# =============================================================================


class TestCompareValues:
    """Tests for single predicate evaluation."""

    def test_equality_is_strict(self) -> None:
        """Test that booleans never equal numbers."""
        assert compare_values(1, "=", 1)
        assert not compare_values(True, "=", 1)
        assert compare_values(1, "!=", "1")

    def test_orderings(self) -> None:
        assert compare_values(3, ">", 2)
        assert compare_values(2, ">=", 2)
        assert compare_values("a", "<", "b")
        assert not compare_values(None, "<", 5)
        assert not compare_values("3", ">", 2)

    def test_dates_compare_as_iso(self) -> None:
        assert compare_values(date(2025, 3, 1), ">", "2025-01-01")
        assert compare_values(date(2025, 3, 1), "=", "2025-03-01")

    def test_in_contains_like(self) -> None:
        assert compare_values("b", "in", ["a", "b"])
        assert compare_values(["x", "y"], "contains", "y")
        assert not compare_values("xy", "contains", "y")
        assert compare_values("Hello World", "like", "world")

    def test_unknown_operator(self) -> None:
        assert not compare_values(1, "~=", 1)


class TestMatchesWhere:
    """Tests for AND semantics across where entries."""

    def test_and_semantics(self) -> None:
        front_matter = {"status": "active", "priority": 3}

        assert matches_where(front_matter, {"status": "active"})
        assert matches_where(front_matter, {"status": "active", "priority": [">=", 3]})
        assert not matches_where(front_matter, {"status": "active", "priority": [">", 3]})

    def test_missing_field(self) -> None:
        assert not matches_where({"a": 1}, {"b": 1})
        assert matches_where({"a": 1}, {"b": ["!=", 1]})

    def test_empty_where_matches(self) -> None:
        assert matches_where({"a": 1}, {})


# =============================================================================
# Projection and Ordering Tests
# =============================================================================


class TestRecords:
    """Tests for projection, sorting and distinct."""

    def test_project_root_file(self) -> None:
        record = project_record("a.md", {"x": 1}, ["*"])
        assert record == {"_file": "a.md", "_path": ".", "x": 1}

    def test_project_subset_fills_none(self) -> None:
        record = project_record("p/a.md", {"x": 1, "y": 2}, ["y", "z"])
        assert record == {"_file": "p/a.md", "_path": "p", "y": 2, "z": None}

    def test_sort_puts_missing_first(self) -> None:
        records = [{"n": "b"}, {"n": None}, {"n": "a"}]
        assert [r["n"] for r in sort_records(records, "n")] == [None, "a", "b"]
        assert [r["n"] for r in sort_records(records, "n", "desc")] == ["b", "a", None]

    def test_sort_skipped_without_field(self) -> None:
        records = [{"a": 2}, {"a": 1}]
        assert sort_records(records, "missing") == records

    def test_distinct(self) -> None:
        records = [{"s": "x", "_file": "1"}, {"s": "x", "_file": "2"}, {"s": "y", "_file": "3"}]
        assert [r["_file"] for r in distinct_records(records, ["s"])] == ["1", "3"]


# =============================================================================
# Query Operation Tests
# =============================================================================


class TestQueryFrontmatter:
    """Tests for query_frontmatter over a vault."""

    @pytest.fixture
    def status_vault(self, write_file) -> None:
        write_file("one.md", "---\nstatus: active\n---\none")
        write_file("two.md", "---\nstatus: pending\n---\ntwo")
        write_file("three.md", "---\nstatus: active\npriority: high\n---\nthree")
        write_file("plain.md", "no front matter")

    @pytest.mark.asyncio
    async def test_and_semantics(self, mock_vault_client: VaultClient, status_vault) -> None:
        """Test that adding a condition narrows the result."""
        active = await query_frontmatter(
            mock_vault_client, FrontmatterQuery(where={"status": "active"})
        )
        assert sorted(r["_file"] for r in active.records) == ["one.md", "three.md"]
        assert active.total_files_scanned == 4

        narrowed = await query_frontmatter(
            mock_vault_client,
            FrontmatterQuery(where={"status": "active", "priority": "high"}),
        )
        assert [r["_file"] for r in narrowed.records] == ["three.md"]

    @pytest.mark.asyncio
    async def test_notes_without_frontmatter_excluded(
        self, mock_vault_client: VaultClient, status_vault
    ) -> None:
        result = await query_frontmatter(mock_vault_client, FrontmatterQuery())
        assert "plain.md" not in [r["_file"] for r in result.records]
        assert result.total_records == 3

    @pytest.mark.asyncio
    async def test_unreadable_file_skipped(
        self, mock_vault_client: VaultClient, mock_vault_path: Path, status_vault
    ) -> None:
        mock_vault_path.joinpath("bad.md").write_bytes(b"\xff\xfe---\nstatus: active\n---\n")

        result = await query_frontmatter(
            mock_vault_client, FrontmatterQuery(where={"status": "active"})
        )

        assert sorted(r["_file"] for r in result.records) == ["one.md", "three.md"]

    @pytest.mark.asyncio
    async def test_sort_distinct_limit(self, mock_vault_client: VaultClient, status_vault) -> None:
        result = await query_frontmatter(
            mock_vault_client,
            FrontmatterQuery(fields=["status"], sort_by="status", distinct=True, limit=1),
        )
        assert result.records == [{"_file": "one.md", "_path": ".", "status": "active"}]


class TestMetadata:
    """Tests for metadata key and value listings."""

    @pytest.mark.asyncio
    async def test_keys_and_values(self, mock_vault_client: VaultClient, write_file) -> None:
        write_file("a.md", "---\nstatus: open\ntags: [x]\n---\n")
        write_file("b.md", "---\nstatus: done\n---\n")
        write_file("c.md", "---\nstatus: open\n---\n")

        assert await list_metadata_keys(mock_vault_client) == ["status", "tags"]
        assert await list_metadata_values(mock_vault_client, "status") == ["open", "done"]
        assert await list_metadata_values(mock_vault_client, "tags") == [["x"]]
