"""Tests for link and tag extraction."""

from vault_api.links.tools import (
    expand_nested_tag,
    extract_all_tags,
    extract_links,
    extract_wikilink_targets,
    find_mentions,
    link_basename,
)

# =============================================================================
# Link Extraction Tests
# =============================================================================


class TestExtractLinks:
    """Tests for wikilink and markdown link extraction."""

    def test_wikilinks_with_alias(self) -> None:
        """Test that [[target|alias]] splits into target and display."""
        links = extract_links("See [[API Design|the API]] and [[Plan]]")

        assert [(link.target, link.display) for link in links] == [
            ("API Design", "the API"),
            ("Plan", "Plan"),
        ]
        assert all(link.type == "wikilink" for link in links)

    def test_markdown_links_skip_external(self) -> None:
        """Test that http(s) links are ignored."""
        links = extract_links("[local](notes/x.md) and [site](https://example.com)")

        assert len(links) == 1
        assert links[0].type == "markdown"
        assert links[0].target == "notes/x.md"
        assert links[0].display == "local"

    def test_tags_only_when_requested(self) -> None:
        """Test that inline tags are links only with include_tags."""
        content = "Text #project/api"

        assert extract_links(content) == []
        tags = extract_links(content, include_tags=True)
        assert [(link.type, link.target, link.display) for link in tags] == [
            ("tag", "project/api", "#project/api")
        ]

    def test_wikilink_targets(self) -> None:
        assert extract_wikilink_targets("[[A]] [b](b.md) [[C|c]]") == ["A", "C"]


class TestLinkBasename:
    """Tests for reducing link targets to note names."""

    def test_strips_folder_and_extension(self) -> None:
        assert link_basename("Projects/API.md") == "API"

    def test_bare_name(self) -> None:
        assert link_basename("API") == "API"


# =============================================================================
# Tag Extraction Tests
# =============================================================================


class TestTags:
    """Tests for front matter and inline tag collection."""

    def test_expand_nested(self) -> None:
        assert expand_nested_tag("a/b/c") == ["a", "a/b", "a/b/c"]

    def test_collects_frontmatter_and_inline(self) -> None:
        """Test that both sources contribute, without # prefix."""
        content = "---\ntags: [alpha, '#beta']\n---\nBody #gamma"
        assert extract_all_tags(content, include_nested=False) == {"alpha", "beta", "gamma"}

    def test_nested_expansion(self) -> None:
        """Test that a/b/c contributes every prefix exactly once."""
        tags = extract_all_tags("#a/b/c and #a/b", include_nested=True)
        assert tags == {"a", "a/b", "a/b/c"}

    def test_without_nesting(self) -> None:
        assert extract_all_tags("#a/b/c", include_nested=False) == {"a/b/c"}


class TestFindMentions:
    """Tests for plain-text mentions."""

    def test_case_insensitive_with_line_numbers(self) -> None:
        mentions = find_mentions("intro\n  the api notes  \nnothing", "API")

        assert len(mentions) == 1
        assert mentions[0].line_number == 2
        assert mentions[0].line_content == "the api notes"

    def test_empty_basename(self) -> None:
        assert find_mentions("anything", "") == []
