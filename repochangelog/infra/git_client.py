"""
Git client infrastructure for repochangelog.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic
"""

import re
import subprocess
from typing import List, Optional, Tuple
import logging

from ..exit_codes import GitError

logger = logging.getLogger(__name__)

# Format of the decorated tag walk: short hash, short date, decorations
TAG_LOG_FORMAT = "%h%x09%ad%x09%d"

# `git describe --contains` answers "v1.2.0~3" or "v1.2.0^2~1"
_DESCRIBE_SUFFIX = re.compile(r"[~^].*$")


class GitClient:
    """
    Abstraction over git commands.

    Lookups (refs, tags, config) return None when git has no answer.
    Log queries raise GitError when git fails.

    Example:
        client = GitClient(cwd="/path/to/repo")
        if client.is_valid_ref("v1.0.0"):
            print(client.nearest_tag("v1.0.0"))
    """

    def __init__(self, cwd: Optional[str] = None, timeout: int = 30):
        """
        Initialize GitClient.

        Args:
            cwd: Repository working directory (default: current directory)
            timeout: Command timeout in seconds (default: 30)
        """
        self.cwd = cwd
        self.timeout = timeout

    def _run(self, args: List[str], check: bool = False) -> Tuple[Optional[str], int]:
        """
        Run a git command.

        Args:
            args: Arguments after ``git``
            check: Raise GitError on non-zero exit

        Returns:
            Tuple of (stdout, returncode)
        """
        cmd = ["git", *args]
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"Git command timed out: {' '.join(cmd)}")
            if check:
                raise GitError(f"git {args[0]} timed out after {self.timeout}s")
            return None, -1
        except OSError as e:
            logger.error(f"Git command failed: {' '.join(cmd)} - {e}")
            if check:
                raise GitError(f"Could not run git: {e}")
            return None, -1

        if check and result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise GitError(
                f"git {args[0]} failed: {stderr or 'exit code ' + str(result.returncode)}",
                returncode=result.returncode,
            )

        return result.stdout, result.returncode

    def tag_log(self) -> str:
        """
        Decorated history of every tagged commit, newest first.

        One line per commit: ``<short hash>\\t<YYYY-MM-DD>\\t<decorations>``.
        """
        output, _ = self._run([
            "log", "--tags", "--simplify-by-decoration", "--date=short",
            f"--pretty=format:{TAG_LOG_FORMAT}",
        ], check=True)
        return output or ""

    def log_lines(self, pretty: str, options: List[str], revisions: List[str]) -> List[str]:
        """
        Formatted ``git log`` output, one list entry per line.

        Args:
            pretty: ``--pretty=format:`` template
            options: Extra ``git log`` options (e.g. ``--no-merges``)
            revisions: Revision range arguments (empty for all history)

        Returns:
            Lines with trailing whitespace removed
        """
        output, _ = self._run(
            ["log", *options, f"--pretty=format:{pretty}", *revisions, "--"],
            check=True,
        )
        if not output:
            return []
        return [line.rstrip() for line in output.splitlines()]

    def is_valid_ref(self, ref: str) -> bool:
        """Check that ref names an existing commit."""
        _, code = self._run(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"])
        return code == 0

    def commit_of(self, ref: str) -> Optional[str]:
        """Full hash of the commit ref points at."""
        output, code = self._run(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"])
        if code == 0 and output and output.strip():
            return output.strip()
        return None

    def has_parent(self, ref: str) -> bool:
        """False for root commits."""
        _, code = self._run(["rev-parse", "--verify", "--quiet", f"{ref}^"])
        return code == 0

    def nearest_tag(self, ref: str) -> Optional[str]:
        """The most recent tag reachable from ref (ref itself when tagged)."""
        output, code = self._run(["describe", "--tags", "--abbrev=0", ref])
        if code == 0 and output and output.strip():
            return output.strip()
        return None

    def containing_tag(self, ref: str) -> Optional[str]:
        """The nearest tag that contains ref, or None when no tag does."""
        output, code = self._run(["describe", "--tags", "--contains", ref])
        if code != 0 or not output or not output.strip():
            return None
        return _DESCRIBE_SUFFIX.sub("", output.strip()) or None

    def config_value(self, key: str) -> Optional[str]:
        """Read a git config value."""
        output, code = self._run(["config", "--get", key])
        if code == 0 and output and output.strip():
            return output.rstrip("\n")
        return None
