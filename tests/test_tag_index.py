"""
Tests for building the TagIndex from the decorated tag walk.
"""

import pytest

from repochangelog.domain.tag import Tag, TagIndex
from repochangelog.services.tag_index import (
    build_tag_index,
    first_tag,
    load_tag_index,
    parse_decorated_log,
)


class TestFirstTag:
    """Tests for decoration parsing."""

    def test_single_tag(self):
        assert first_tag(" (tag: v1.0.0)") == "v1.0.0"

    def test_head_marker_is_stripped(self):
        assert first_tag("(HEAD, tag: v1.0.0)") == "v1.0.0"

    def test_head_arrow_branch_is_ignored(self):
        assert first_tag("(HEAD -> main, tag: v1.0.0, origin/main)") == "v1.0.0"

    def test_first_of_several_tags_wins(self):
        assert first_tag("(tag: v1.1.0, tag: v1.1.0-rc1)") == "v1.1.0"

    def test_branch_only_decoration(self):
        assert first_tag("(origin/feature, feature)") is None

    def test_empty_decoration(self):
        assert first_tag("") is None


class TestParseDecoratedLog:
    """Tests for splitting git log output into records."""

    def test_tab_separated_fields(self):
        output = "bbb2222\t2024-01-01\t (tag: v1.0.0)\naaa1111\t2023-06-01\t (tag: v0.9.0)"
        assert parse_decorated_log(output) == [
            ("bbb2222", "2024-01-01", "(tag: v1.0.0)"),
            ("aaa1111", "2023-06-01", "(tag: v0.9.0)"),
        ]

    def test_missing_decoration_field(self):
        assert parse_decorated_log("ccc3333\t2024-02-01") == [("ccc3333", "2024-02-01", "")]

    def test_blank_lines_are_skipped(self):
        assert parse_decorated_log("\n\n") == []


class TestBuildTagIndex:
    """Tests for build_tag_index."""

    def test_keeps_input_order(self):
        index = build_tag_index([
            ("bbb2222", "2024-01-01", "(HEAD -> main, tag: v1.0.0)"),
            ("aaa1111", "2023-06-01", "(tag: v0.9.0)"),
        ])
        assert index.names() == ["v1.0.0", "v0.9.0"]
        assert index.newest == Tag("v1.0.0", "bbb2222", "2024-01-01")
        assert index.oldest.name == "v0.9.0"

    def test_branch_records_are_skipped(self):
        index = build_tag_index([
            ("ccc3333", "2024-02-01", "(origin/develop)"),
            ("bbb2222", "2024-01-01", "(tag: v1.0.0)"),
        ])
        assert index.names() == ["v1.0.0"]

    def test_duplicate_decorations_collapse(self):
        index = build_tag_index([
            ("bbb2222", "2024-01-01", "(tag: v1.0.0, tag: release-1)"),
        ])
        assert index.names() == ["v1.0.0"]
        assert "release-1" not in index

    def test_repeated_name_keeps_first(self):
        index = build_tag_index([
            ("bbb2222", "2024-01-01", "(tag: v1.0.0)"),
            ("aaa1111", "2023-06-01", "(tag: v1.0.0)"),
        ])
        assert len(index) == 1
        assert index.get("v1.0.0").commit == "bbb2222"

    def test_empty_input_is_empty_index(self):
        index = build_tag_index([])
        assert index.is_empty
        assert index.newest is None
        assert index == TagIndex()

    def test_load_tag_index(self, two_tag_git):
        index = load_tag_index(two_tag_git)
        assert index.names() == ["v1.0.0", "v0.9.0"]
        assert index.position("v0.9.0") == 1
        assert index[1].date == "2023-06-01"


class TestTagIndex:
    """Tests for TagIndex lookups."""

    def test_lookup_helpers(self, four_tags):
        assert four_tags.position("v2") == 2
        assert four_tags.position("v9") is None
        assert four_tags.get("v9") is None
        assert [t.name for t in four_tags] == ["v4", "v3", "v2", "v1"]

    def test_direct_construction_indexes_names(self):
        index = TagIndex(tags=(Tag("v2", "b", "2024-02-01"), Tag("v1", "a", "2024-01-01")))
        assert "v1" in index
        assert index.position("v1") == 1

    def test_to_dict(self):
        tag = Tag("v1", "a1", "2024-01-01")
        assert tag.to_dict() == {"name": "v1", "commit": "a1", "date": "2024-01-01"}
        assert str(tag) == "v1"
