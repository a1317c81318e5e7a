"""
Domain layer for repochangelog.

Contains pure domain objects with no I/O or side effects:
- Tag, TagIndex: release tags, newest first
- TagName, CommitRef: user-supplied range bounds
- All, UpTo, Between: commit ranges to fetch
- SectionBoundary, Section, RenderMode: changelog sections

These objects are immutable.
"""

from .tag import Tag, TagIndex
from .range import TagName, CommitRef, RangeBound, All, UpTo, Between, RangeExpression
from .section import RenderMode, Section, SectionBoundary

__all__ = [
    'Tag',
    'TagIndex',
    'TagName',
    'CommitRef',
    'RangeBound',
    'All',
    'UpTo',
    'Between',
    'RangeExpression',
    'RenderMode',
    'Section',
    'SectionBoundary',
]
