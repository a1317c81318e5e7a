"""
Infrastructure layer for repochangelog.

Contains abstractions for external systems:
- GitClient: Git command execution
- CommitFetcher: Formatted commit lines for a range

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient
from .commit_fetcher import CommitFetcher

__all__ = [
    'GitClient',
    'CommitFetcher',
]
