"""
TagIndex construction for repochangelog.

Turns the decorated tag walk (``git log --tags --simplify-by-decoration``)
into a TagIndex, newest first.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from ..domain.tag import Tag, TagIndex

logger = logging.getLogger(__name__)

TAG_PREFIX = "tag: "

# (commit, date, decoration)
TagRecord = Tuple[str, str, str]


def parse_decorated_log(output: str) -> List[TagRecord]:
    """
    Split tab-separated ``%h %ad %d`` output into records.

    Lines without a decoration field are returned with an empty decoration.
    """
    records: List[TagRecord] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        parts = line.split("\t", 2)
        commit = parts[0].strip()
        date = parts[1].strip() if len(parts) > 1 else ""
        decoration = parts[2].strip() if len(parts) > 2 else ""
        records.append((commit, date, decoration))
    return records


def first_tag(decoration: str) -> Optional[str]:
    """
    Return the first tag name in a decoration string.

    Examples:
        "(HEAD -> main, tag: v1.0.0, origin/main)"  -> "v1.0.0"
        "(tag: v1.1.0, tag: v1.1.0-rc1)"            -> "v1.1.0"
        "(origin/feature)"                          -> None
    """
    decoration = decoration.strip()
    if decoration.startswith("(") and decoration.endswith(")"):
        decoration = decoration[1:-1]

    for entry in decoration.split(","):
        entry = entry.strip()
        if entry.startswith(TAG_PREFIX):
            name = entry[len(TAG_PREFIX):].strip()
            if name:
                return name
    return None


def build_tag_index(records: Iterable[TagRecord]) -> TagIndex:
    """
    Build a TagIndex from (commit, date, decoration) records.

    Records must already be newest first. Branch and remote decorations
    are ignored, records without a tag are skipped and only the first tag
    of a commit is kept.
    """
    tags: List[Tag] = []
    for commit, date, decoration in records:
        name = first_tag(decoration)
        if name is None:
            continue
        tags.append(Tag(name=name, commit=commit, date=date))

    index = TagIndex.from_tags(tags)
    if index.is_empty:
        logger.debug("No tags found")
    else:
        logger.debug(f"Found {len(index)} tags, newest {index.newest.name}")
    return index


def load_tag_index(git) -> TagIndex:
    """Read the repository's tags through a GitClient."""
    return build_tag_index(parse_decorated_log(git.tag_log()))
