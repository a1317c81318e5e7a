"""
Changelog file handling for repochangelog.

Finds the changelog in a directory, reads its previous content and
replaces it atomically: the new text goes to a temporary file next to
the target, which is renamed over the target only once complete.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Union

import click
import logging

logger = logging.getLogger(__name__)

# Existing changelog names: CHANGELOG.md, History.md, changes.txt, ...
CHANGELOG_NAME = re.compile(r"change|history", re.IGNORECASE)


def find_changelog(directory: Union[str, Path] = ".", default: str = "History.md") -> Path:
    """
    Locate the changelog file in a directory.

    Returns the first regular file (sorted by name) whose name contains
    "change" or "history", case-insensitively, else ``directory/default``.
    """
    directory = Path(directory)
    try:
        candidates = sorted(p for p in directory.iterdir() if p.is_file())
    except OSError as e:
        logger.warning(f"Cannot list {directory}: {e}")
        candidates = []

    for path in candidates:
        if CHANGELOG_NAME.search(path.name):
            logger.debug(f"Using existing changelog {path}")
            return path
    return directory / default


def read_previous(path: Union[str, Path]) -> str:
    """Existing changelog text, or "" when the file does not exist."""
    path = Path(path)
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8")


def write_changelog(
    path: Union[str, Path],
    content: str,
    open_editor: bool = False,
    editor: Optional[str] = None
) -> Path:
    """
    Atomically replace the changelog at path with content.

    When open_editor is set the temporary file is opened in the user's
    editor before it replaces the target. On any error, including
    KeyboardInterrupt, the temporary file is removed and the original
    file is left untouched.

    Returns:
        The path written
    """
    path = Path(path)
    directory = path.parent
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=directory
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        if open_editor:
            logger.debug(f"Opening {tmp_name} in editor")
            click.edit(filename=tmp_name, editor=editor)
        if path.exists():
            os.chmod(tmp_name, path.stat().st_mode & 0o777)
        else:
            os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    logger.debug(f"Wrote {path}")
    return path
