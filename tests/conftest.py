"""
Shared fixtures: an in-memory stand-in for GitClient.
"""

import pytest

from repochangelog.domain.tag import Tag, TagIndex


class FakeGit:
    """Answers GitClient queries from dictionaries and records log calls."""

    def __init__(self, tags=(), refs=(), nearest=None, containing=None,
                 logs=None, config=None, commits=None, roots=()):
        # tags: (name, commit, date) newest first
        self.tags = list(tags)
        self.refs = set(refs) | {name for name, _, _ in self.tags}
        self.nearest = nearest or {}
        self.containing = containing or {}
        self.logs = logs or {}
        self.config = config or {}
        # ref -> full hash; tags map to their own commit
        self.commits = {name: commit for name, commit, _ in self.tags}
        self.commits.update(commits or {})
        self.roots = set(roots)
        self.log_calls = []

    def tag_log(self):
        return "\n".join(
            f"{commit}\t{date}\t (tag: {name})" for name, commit, date in self.tags
        )

    def log_lines(self, pretty, options, revisions):
        self.log_calls.append((pretty, tuple(options), tuple(revisions)))
        key = revisions[0] if revisions else ""
        return list(self.logs.get(key, []))

    def is_valid_ref(self, ref):
        return ref in self.refs

    def commit_of(self, ref):
        return self.commits.get(ref)

    def has_parent(self, ref):
        return ref not in self.roots

    def nearest_tag(self, ref):
        return self.nearest.get(ref)

    def containing_tag(self, ref):
        return self.containing.get(ref)

    def config_value(self, key):
        return self.config.get(key)


@pytest.fixture
def two_tag_git():
    """v1.0.0 (2024-01-01) and v0.9.0 (2023-06-01), two commits after v1.0.0."""
    return FakeGit(
        tags=[
            ("v1.0.0", "bbb2222", "2024-01-01"),
            ("v0.9.0", "aaa1111", "2023-06-01"),
        ],
        refs=["abc1234", "main"],
        logs={
            "v1.0.0..": ["  * Add stdout flag", "  * Fix typo"],
            "v0.9.0..v1.0.0": ["  * Release 1.0.0"],
            "v0.9.0": ["  * Release 0.9.0", "  * Initial commit"],
            "": ["  * everything"],
        },
    )


@pytest.fixture
def fake_git_factory():
    return FakeGit


@pytest.fixture
def four_tags():
    return TagIndex.from_tags([
        Tag("v4", "d4", "2024-04-01"),
        Tag("v3", "c3", "2024-03-01"),
        Tag("v2", "b2", "2024-02-01"),
        Tag("v1", "a1", "2024-01-01"),
    ])
