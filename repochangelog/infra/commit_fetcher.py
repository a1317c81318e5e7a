"""
Commit fetching for repochangelog.

CommitFetcher turns a RangeExpression into pre-formatted changelog lines.
It never looks inside the lines it returns.
"""

import logging
from typing import List

from ..config import ChangelogConfig, MergeFilter
from ..domain.range import RangeExpression
from .git_client import GitClient

logger = logging.getLogger(__name__)


class CommitFetcher:
    """
    Fetch formatted commit lines for one range.

    The log template and filter flags are fixed at construction from an
    immutable ChangelogConfig.

    Example:
        fetcher = CommitFetcher(GitClient(), config)
        for line in fetcher.fetch(Between("v0.9.0", "v1.0.0")):
            print(line)
    """

    def __init__(self, git: GitClient, config: ChangelogConfig):
        self.git = git
        self.config = config

    @property
    def pretty(self) -> str:
        if self.config.merge_filter is MergeFilter.MERGES_ONLY:
            return self.config.merge_format
        return self.config.log_format

    @property
    def options(self) -> List[str]:
        options = list(self.config.log_options)
        if self.config.merge_filter is MergeFilter.NO_MERGES:
            options.append("--no-merges")
        elif self.config.merge_filter is MergeFilter.MERGES_ONLY:
            options.append("--merges")
        return options

    def fetch(self, expression: RangeExpression) -> List[str]:
        """
        Fetch the commit lines of one range, newest first.

        Runs of blank lines (left by empty merge bodies) collapse to one
        and blank lines at either end are dropped. Blank lines between
        body paragraphs are kept.

        Raises:
            GitError: If git log fails
        """
        logger.debug(f"Fetching commits for {expression}")
        lines = self.git.log_lines(self.pretty, self.options, expression.args())
        kept: List[str] = []
        for line in lines:
            if not line.strip():
                if not kept or not kept[-1]:
                    continue
                line = ""
            kept.append(line)
        while kept and not kept[-1]:
            kept.pop()
        return kept

