"""
Section domain objects for repochangelog.

A changelog is a newest-first sequence of sections. The range selector
emits SectionBoundary values; once the commits of a boundary are fetched
it becomes a Section ready for rendering.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .range import RangeExpression


class RenderMode(Enum):
    """How a section is rendered."""
    PLAIN = "plain"      # Bare bullet list
    TITLED = "titled"    # "Title / Date", underline, blank line, bullets


@dataclass(frozen=True)
class SectionBoundary:
    """
    One section to fetch.

    Attributes:
        label: Section title (a tag name, or the untagged label)
        date: ISO date shown next to the title
        expression: Commit range to fetch
        untagged: True for the section of commits newer than every tag
    """
    label: str
    date: str
    expression: RangeExpression
    untagged: bool = False


@dataclass(frozen=True)
class Section:
    """A fetched section: optional title and date, plus commit lines."""
    title: Optional[str]
    date: Optional[str]
    lines: Tuple[str, ...] = ()

    @classmethod
    def from_boundary(cls, boundary: SectionBoundary, lines) -> 'Section':
        return cls(title=boundary.label, date=boundary.date, lines=tuple(lines))

    @property
    def is_empty(self) -> bool:
        return not self.lines
