"""
Range domain objects for repochangelog.

RangeBound: what the user asked for (a tag name or a commit ref).
RangeExpression: what gets fetched from git for one section.
"""

from dataclasses import dataclass
from typing import List, Optional, Union


@dataclass(frozen=True)
class TagName:
    """A bound given as a tag name (or any ref that resolves to a tag)."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class CommitRef:
    """A bound given as a commit ref."""
    ref: str

    def __str__(self) -> str:
        return self.ref


RangeBound = Optional[Union[TagName, CommitRef]]


@dataclass(frozen=True)
class All:
    """Every commit in the repository."""

    def args(self) -> List[str]:
        return []

    def __str__(self) -> str:
        return "<all>"


@dataclass(frozen=True)
class UpTo:
    """Every commit reachable from ``ref``, ``ref`` included."""
    ref: str

    def args(self) -> List[str]:
        return [self.ref]

    def __str__(self) -> str:
        return self.ref


@dataclass(frozen=True)
class Between:
    """
    Commits after ``from_exclusive`` up to ``to_inclusive``.

    An empty ``to_inclusive`` means up to the current tip (HEAD).
    """
    from_exclusive: str
    to_inclusive: str = ""

    def args(self) -> List[str]:
        return [f"{self.from_exclusive}..{self.to_inclusive}"]

    def __str__(self) -> str:
        return f"{self.from_exclusive}..{self.to_inclusive}"


RangeExpression = Union[All, UpTo, Between]
