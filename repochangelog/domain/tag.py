"""
Tag domain objects for repochangelog.

A release tag marks a section boundary in the changelog:
- Tag: one tag with the short commit it points at and that commit's date
- TagIndex: the repository's tags, newest first

Both are immutable value objects, built once per run.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class Tag:
    """
    A release tag.

    Attributes:
        name: Tag name (e.g., "v1.0.0")
        commit: Short hash of the tagged commit
        date: ISO date of the tagged commit (e.g., "2024-01-01")
    """

    name: str
    commit: str
    date: str

    def __str__(self) -> str:
        return self.name

    def to_dict(self) -> Dict[str, str]:
        return {
            'name': self.name,
            'commit': self.commit,
            'date': self.date,
        }


@dataclass(frozen=True)
class TagIndex:
    """
    Ordered sequence of tags, newest first.

    An empty index is valid and means the repository has no tags.

    Example:
        index = TagIndex.from_tags([Tag("v1.0.0", "abc1234", "2024-01-01")])
        index.newest.name          -> "v1.0.0"
        index.position("v1.0.0")   -> 0
    """

    tags: Tuple[Tag, ...] = ()
    _positions: Dict[str, int] = field(init=False, compare=False, repr=False)

    def __post_init__(self):
        positions: Dict[str, int] = {}
        for i, tag in enumerate(self.tags):
            positions.setdefault(tag.name, i)
        object.__setattr__(self, '_positions', positions)

    @classmethod
    def from_tags(cls, tags: List[Tag]) -> 'TagIndex':
        """Build an index keeping the first occurrence of each tag name."""
        seen = set()
        kept: List[Tag] = []
        for tag in tags:
            if tag.name in seen:
                continue
            seen.add(tag.name)
            kept.append(tag)
        return cls(tags=tuple(kept))

    @property
    def is_empty(self) -> bool:
        return not self.tags

    @property
    def newest(self) -> Optional[Tag]:
        return self.tags[0] if self.tags else None

    @property
    def oldest(self) -> Optional[Tag]:
        return self.tags[-1] if self.tags else None

    def names(self) -> List[str]:
        return [tag.name for tag in self.tags]

    def get(self, name: str) -> Optional[Tag]:
        position = self._positions.get(name)
        return self.tags[position] if position is not None else None

    def position(self, name: str) -> Optional[int]:
        return self._positions.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._positions

    def __len__(self) -> int:
        return len(self.tags)

    def __iter__(self) -> Iterator[Tag]:
        return iter(self.tags)

    def __getitem__(self, index: int) -> Tag:
        return self.tags[index]
