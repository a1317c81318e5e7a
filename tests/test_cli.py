"""
Tests for the repochangelog command line.
"""

import os
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from repochangelog import cli
from repochangelog.exit_codes import GitError

TODAY = "2024-02-10"


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("REPOCHANGELOG_CONFIG", raising=False)
    return CliRunner()


@pytest.fixture
def fake_git(two_tag_git):
    """Patch GitClient in the CLI and pin the untagged section date."""
    with patch.object(cli, "GitClient", return_value=two_tag_git), \
            patch("repochangelog.services.range_selector.date") as mock_date:
        mock_date.today.return_value.isoformat.return_value = TODAY
        yield two_tag_git


class TestChangelogCommand:

    def test_stdout_default_run(self, runner, fake_git):
        with runner.isolated_filesystem():
            result = runner.invoke(cli.changelog_cmd, ["--stdout"])
        assert result.exit_code == 0, result.output
        assert result.output == (
            "n.n.n / 2024-02-10\n"
            "==================\n"
            "\n"
            "  * Add stdout flag\n"
            "  * Fix typo\n"
            "\n"
            "v1.0.0 / 2024-01-01\n"
            "===================\n"
            "\n"
            "  * Release 1.0.0\n"
        )

    def test_list_and_tag_label(self, runner, fake_git):
        with runner.isolated_filesystem():
            result = runner.invoke(cli.changelog_cmd, ["-x", "-l", "-t", "1.1.0"])
        assert result.exit_code == 0, result.output
        assert result.output == "  * Add stdout flag\n  * Fix typo\n\n  * Release 1.0.0\n"

    def test_writes_file_and_appends_previous(self, runner, fake_git):
        with runner.isolated_filesystem():
            with open("History.md", "w") as f:
                f.write("0.1.0 / 2023-01-01\n")
            result = runner.invoke(
                cli.changelog_cmd, ["--no-edit", "-s", "v0.9.0", "-f", "v1.0.0"]
            )
            content = open("History.md").read()
        assert result.exit_code == 0, result.output
        assert content.startswith("v1.0.0 / 2024-01-01\n")
        assert content.endswith("  * Initial commit\n\n0.1.0 / 2023-01-01\n")

    def test_prune_old(self, runner, fake_git):
        with runner.isolated_filesystem():
            with open("CHANGELOG.md", "w") as f:
                f.write("stale\n")
            result = runner.invoke(cli.changelog_cmd, ["--no-edit", "-p", "-a", "-l"])
            content = open("CHANGELOG.md").read()
        assert result.exit_code == 0, result.output
        assert content == "  * everything\n"

    def test_explicit_file_argument(self, runner, fake_git):
        with runner.isolated_filesystem():
            result = runner.invoke(cli.changelog_cmd, ["--no-edit", "-a", "-l", "NEWS.md"])
            assert open("NEWS.md").read() == "  * everything\n"
        assert result.exit_code == 0, result.output

    def test_no_merges_flag(self, runner, fake_git):
        with runner.isolated_filesystem():
            runner.invoke(cli.changelog_cmd, ["-x", "-n", "-a"])
        _, options, _ = fake_git.log_calls[-1]
        assert "--no-merges" in options

    def test_merges_only_flag(self, runner, fake_git):
        with runner.isolated_filesystem():
            runner.invoke(cli.changelog_cmd, ["-x", "-m", "-a"])
        pretty, options, _ = fake_git.log_calls[-1]
        assert "--merges" in options
        assert pretty == "  * %s%n%w(64,4,4)%b"


class TestChangelogErrors:

    def test_start_tag_and_commit_conflict(self, runner, fake_git):
        with runner.isolated_filesystem():
            result = runner.invoke(
                cli.changelog_cmd, ["-x", "-s", "v0.9.0", "--start-commit", "abc1234"]
            )
            assert not os.path.exists("History.md")
        assert result.exit_code == 1
        assert fake_git.log_calls == []

    def test_unknown_tag(self, runner, fake_git):
        with runner.isolated_filesystem():
            with open("History.md", "w") as f:
                f.write("keep\n")
            result = runner.invoke(cli.changelog_cmd, ["--no-edit", "-f", "v9.9.9"])
            assert open("History.md").read() == "keep\n"
        assert result.exit_code == 1

    def test_merge_flags_conflict(self, runner, fake_git):
        result = runner.invoke(cli.changelog_cmd, ["-x", "-n", "-m"])
        assert result.exit_code == 1

    def test_git_failure(self, runner, fake_git):
        with patch.object(fake_git, "log_lines", side_effect=GitError("git log failed")):
            with runner.isolated_filesystem():
                result = runner.invoke(cli.changelog_cmd, ["-x", "-a"])
        assert result.exit_code == 1

    def test_interrupt(self, runner, fake_git):
        with patch.object(fake_git, "log_lines", side_effect=KeyboardInterrupt):
            with runner.isolated_filesystem():
                result = runner.invoke(cli.changelog_cmd, ["-x", "-a"])
        assert result.exit_code == 130

    def test_help_exits_one(self, runner):
        result = runner.invoke(cli.changelog_cmd, ["-h"])
        assert result.exit_code == 1
        assert "--start-commit" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli.changelog_cmd, ["--version"])
        assert result.exit_code == 0
        assert "repochangelog" in result.output
