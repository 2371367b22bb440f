"""Tests for storage key candidates."""

import pytest
from notestage.core.keys import build_keys, index_keys, partial_key


class TestBuildKeys:
    """Tests for build_keys()."""

    def test__with_domain__three_keys_in_priority_order(self) -> None:
        assert build_keys("note", "example.com") == [
            "example.com/note.md",
            "shared/note.md",
            "note.md",
        ]

    def test__without_domain__shared_then_legacy(self) -> None:
        assert build_keys("note") == ["shared/note.md", "note.md"]
        assert build_keys("note", "") == ["shared/note.md", "note.md"]

    def test__shared_domain__duplicates_collapse(self) -> None:
        """Keys equal to an earlier key are probed once."""
        assert build_keys("note", "shared") == ["shared/note.md", "note.md"]

    def test__targeted_slug__reached_through_legacy_key(self) -> None:
        """Prefixed slugs still resolve to their targeted key, last."""
        assert build_keys("shared/guide", "example.com")[-1] == "shared/guide.md"
        assert build_keys("indexes/topics", "example.com")[-1] == "indexes/topics.md"
        assert build_keys("other.example/post", "example.com")[-1] == "other.example/post.md"

    def test__surrounding_slashes__stripped(self) -> None:
        assert build_keys("/nested/note/", "example.com")[0] == "example.com/nested/note.md"

    def test__empty_slug__raises(self) -> None:
        with pytest.raises(ValueError, match="Slug must not be empty"):
            build_keys("/", "example.com")

    def test__repeated_calls__same_result(self) -> None:
        assert build_keys("a/b", "example.com") == build_keys("a/b", "example.com")


class TestIndexAndPartialKeys:
    """Tests for index_keys() and partial_key()."""

    def test__index_keys__domain_index_first(self) -> None:
        assert index_keys("example.com") == [
            "example.com/index.md",
            "shared/index.md",
            "index.md",
        ]

    def test__partial_key__domain_scoped(self) -> None:
        assert partial_key("header", "example.com") == "example.com/header.md"
