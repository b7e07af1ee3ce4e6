"""Tests for backlinks and related notes."""

from pathlib import Path

import pytest

from vault_api.dependencies import VaultClient, VaultNotFoundError
from vault_api.graph.tools import get_backlinks, get_related_notes

# =============================================================================
# Backlink Tests
# =============================================================================


class TestBacklinks:
    """Tests for get_backlinks."""

    @pytest.mark.asyncio
    async def test_asymmetry(self, mock_vault_client: VaultClient, write_file) -> None:
        """Test that A -> B makes A a backlink of B, not the reverse."""
        write_file("A.md", "Links to [[B]]")
        write_file("B.md", "No links here")

        of_b = await get_backlinks(mock_vault_client, "B", include_mentions=False)
        of_a = await get_backlinks(mock_vault_client, "A", include_mentions=False)

        assert [b.file for b in of_b.backlinks] == ["A.md"]
        assert of_b.backlinks[0].link_count == 1
        assert of_a.backlinks == []
        assert [link.target for link in of_a.outgoing_links] == ["B"]

    @pytest.mark.asyncio
    async def test_accepts_path_and_extension(
        self, mock_vault_client: VaultClient, write_file
    ) -> None:
        write_file("Projects/API.md", "target")
        write_file("one.md", "[[API.md]]")
        write_file("two.md", "[[Projects/API.md]]")
        write_file("three.md", "[[APIs]]")

        result = await get_backlinks(mock_vault_client, "Projects/API", include_mentions=False)

        assert [b.file for b in result.backlinks] == ["one.md", "two.md"]

    @pytest.mark.asyncio
    async def test_mentions(self, mock_vault_client: VaultClient, write_file) -> None:
        write_file("Plan.md", "the plan")
        write_file("notes.md", "intro\nwe follow the PLAN closely")

        result = await get_backlinks(mock_vault_client, "Plan")

        assert result.backlink_count == 1
        backlink = result.backlinks[0]
        assert backlink.link_count == 0
        assert backlink.mention_count == 1
        assert backlink.mentions[0].line_number == 2

    @pytest.mark.asyncio
    async def test_unreadable_file_skipped(
        self, mock_vault_client: VaultClient, mock_vault_path: Path, write_file
    ) -> None:
        write_file("B.md", "target")
        write_file("A.md", "[[B]]")
        mock_vault_path.joinpath("bad.md").write_bytes(b"\xff\xfe [[B]]")

        result = await get_backlinks(mock_vault_client, "B", include_mentions=False)

        assert [b.file for b in result.backlinks] == ["A.md"]

    @pytest.mark.asyncio
    async def test_missing_target(self, mock_vault_client: VaultClient, write_file) -> None:
        """Test that a missing note still reports who links to it."""
        write_file("a.md", "[[Ghost]]")

        result = await get_backlinks(mock_vault_client, "Ghost")

        assert result.outgoing_links == []
        assert [b.file for b in result.backlinks] == ["a.md"]


# =============================================================================
# Related Notes Tests
# =============================================================================


class TestRelatedNotes:
    """Tests for get_related_notes."""

    @pytest.mark.asyncio
    async def test_ranking(self, mock_vault_client: VaultClient, write_file) -> None:
        """Test that a shared tag plus a link outranks a single shared tag."""
        write_file("X.md", "---\ntags: [t]\n---\nSee [[Z]]")
        write_file("Y.md", "---\ntags: [t]\n---\nunrelated")
        write_file("Z.md", "---\ntags: [t]\n---\nunrelated")
        write_file("W.md", "nothing shared")

        result = await get_related_notes(mock_vault_client, "X.md")

        assert [r.note.path for r in result.related_notes] == ["Z.md", "Y.md"]
        assert result.related_notes[0].similarity == 3
        assert result.related_notes[0].connections == ["shared_tags: t", "linked_to"]
        assert result.related_notes[1].similarity == 1
        assert result.total_found == 2

    @pytest.mark.asyncio
    async def test_two_way_link_outranks_shared_tag(
        self, mock_vault_client: VaultClient, write_file
    ) -> None:
        write_file("X.md", "---\ntags: [t]\n---\nSee [[Z]]")
        write_file("Y.md", "---\ntags: [t]\n---\nunrelated")
        write_file("Z.md", "Back to [[X]]")

        result = await get_related_notes(mock_vault_client, "X.md")

        assert [(r.note.path, r.similarity, r.connections) for r in result.related_notes] == [
            ("Z.md", 4, ["linked_to", "links_back"]),
            ("Y.md", 1, ["shared_tags: t"]),
        ]

    @pytest.mark.asyncio
    async def test_links_back_counts_with_tags_only(
        self, mock_vault_client: VaultClient, write_file
    ) -> None:
        write_file("X.md", "---\ntags: [t]\n---\nsource")
        write_file("Y.md", "---\ntags: [t]\n---\nback to [[X]]")

        result = await get_related_notes(mock_vault_client, "X.md", criteria=["tags"])

        assert [r.note.path for r in result.related_notes] == ["Y.md"]
        assert result.related_notes[0].similarity == 3
        assert result.related_notes[0].connections == ["shared_tags: t", "links_back"]

    @pytest.mark.asyncio
    async def test_links_back(self, mock_vault_client: VaultClient, write_file) -> None:
        write_file("X.md", "plain")
        write_file("Y.md", "back to [[X]]")

        result = await get_related_notes(mock_vault_client, "X.md", criteria=["links"])

        assert result.related_notes[0].connections == ["links_back"]
        assert result.related_notes[0].similarity == 2

    @pytest.mark.asyncio
    async def test_tags_only_ignores_outgoing_links(
        self, mock_vault_client: VaultClient, write_file
    ) -> None:
        write_file("X.md", "See [[Y]]")
        write_file("Y.md", "plain")

        result = await get_related_notes(mock_vault_client, "X.md", criteria=["tags"])

        assert result.related_notes == []
        assert result.criteria == ["tags"]

    @pytest.mark.asyncio
    async def test_limit(self, mock_vault_client: VaultClient, write_file) -> None:
        write_file("X.md", "---\ntags: [t]\n---\n")
        for name in ("a", "b", "c"):
            write_file(f"{name}.md", "---\ntags: [t]\n---\n")

        result = await get_related_notes(mock_vault_client, "X.md", limit=2)

        assert [r.note.path for r in result.related_notes] == ["a.md", "b.md"]

    @pytest.mark.asyncio
    async def test_unreadable_candidate_skipped(
        self, mock_vault_client: VaultClient, mock_vault_path: Path, write_file
    ) -> None:
        write_file("X.md", "---\ntags: [t]\n---\n")
        write_file("Y.md", "---\ntags: [t]\n---\n")
        mock_vault_path.joinpath("bad.md").write_bytes(b"\xff\xfe [[X]]")

        result = await get_related_notes(mock_vault_client, "X.md")

        assert [r.note.path for r in result.related_notes] == ["Y.md"]

    @pytest.mark.asyncio
    async def test_missing_source(self, mock_vault_client: VaultClient) -> None:
        with pytest.raises(VaultNotFoundError):
            await get_related_notes(mock_vault_client, "nope.md")
