"""
Range selection for repochangelog.

Decides which commit ranges make up the changelog sections. Selection
runs in two phases:

1. resolve(): check the user's bounds against the repository and the
   TagIndex. Every configuration error is raised here, before anything
   is fetched.
2. walk(): lazily walk the TagIndex newest to oldest and yield one
   SectionBoundary per section.

Walk states:
    SEEK_FINAL    skip tags newer than the final tag
    ACCUMULATING  yield one section per tag
    DONE          start tag reached, stop
"""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterator, Optional

from ..config import DEFAULT_TITLE
from ..domain.range import All, Between, CommitRef, RangeBound, TagName, UpTo
from ..domain.section import SectionBoundary
from ..domain.tag import TagIndex
from ..exit_codes import ConfigError, ResolutionError

logger = logging.getLogger(__name__)


class WalkState(Enum):
    SEEK_FINAL = "seek_final"
    ACCUMULATING = "accumulating"
    DONE = "done"


class PlanMode(Enum):
    """How the sections of a run are produced."""
    ALL = "all"                    # One section with all history
    SINCE_COMMIT = "since_commit"  # One section from the start commit to HEAD
    WALK = "walk"                  # Walk the tag index


@dataclass(frozen=True)
class SelectionRequest:
    """
    Bounds requested by the user.

    Attributes:
        list_all: Ignore bounds and render all history as one section
        start_tag: Oldest tag to include
        start_commit: Oldest commit to include
        final_tag: Newest tag to include
    """
    list_all: bool = False
    start_tag: Optional[str] = None
    start_commit: Optional[str] = None
    final_tag: Optional[str] = None

    @property
    def start(self) -> RangeBound:
        if self.start_commit:
            return CommitRef(self.start_commit)
        if self.start_tag:
            return TagName(self.start_tag)
        return None

    @property
    def final(self) -> RangeBound:
        return TagName(self.final_tag) if self.final_tag else None


@dataclass(frozen=True)
class SelectionPlan:
    """A request resolved against the repository."""
    mode: PlanMode
    index: TagIndex
    start_tag: Optional[str] = None
    final_tag: Optional[str] = None
    start_commit: Optional[str] = None
    start_parent: Optional[str] = None


class RangeSelector:
    """
    Turns user bounds into the newest-first sequence of section ranges.

    Example:
        selector = RangeSelector(index, GitClient())
        for boundary in selector.select(SelectionRequest(start_tag="v0.9.0")):
            print(boundary.label, boundary.expression)
    """

    def __init__(
        self,
        index: TagIndex,
        git,
        title: str = DEFAULT_TITLE,
        today: Optional[str] = None
    ):
        """
        Initialize RangeSelector.

        Args:
            index: Repository tags, newest first
            git: GitClient used to resolve refs that are not indexed tags
            title: Label of the section newer than every tag
            today: Date shown on untagged sections (default: today)
        """
        self.index = index
        self.git = git
        self.title = title
        self.today = today or date.today().isoformat()

    def select(self, request: SelectionRequest) -> Iterator[SectionBoundary]:
        """
        Resolve the request, then return a lazy iterator of boundaries.

        Raises:
            ConfigError: Conflicting or unknown bounds
            ResolutionError: Start commit with no enclosing tag
        """
        plan = self.resolve(request)
        return self.walk(plan)

    def resolve(self, request: SelectionRequest) -> SelectionPlan:
        """Check and resolve the request. Never fetches commits."""
        if request.start_tag and request.start_commit:
            raise ConfigError("--start-tag and --start-commit cannot be used together")

        if request.list_all:
            return SelectionPlan(mode=PlanMode.ALL, index=self.index)

        start_commit = request.start_commit
        start_parent = None
        if start_commit:
            if not self.git.is_valid_ref(start_commit):
                raise ConfigError(f"Unknown commit '{start_commit}'")
            if self.git.has_parent(start_commit):
                start_parent = f"{start_commit}~"
            else:
                logger.debug(f"Start commit {start_commit} is a root commit")

        if start_commit and not request.final_tag:
            return SelectionPlan(
                mode=PlanMode.SINCE_COMMIT,
                index=self.index,
                start_commit=start_commit,
                start_parent=start_parent,
            )

        if self.index.is_empty:
            logger.info("No tags found, listing all commits")
            return SelectionPlan(mode=PlanMode.ALL, index=self.index)

        final_tag = None
        if request.final_tag:
            final_tag = self._resolve_tag(request.final_tag, "final tag")

        start_tag = None
        if request.start_tag:
            start_tag = self._resolve_tag(request.start_tag, "start tag")
        elif start_commit:
            start_tag = self._containing_tag(start_commit)

        if start_tag and final_tag:
            if self.index.position(start_tag) < self.index.position(final_tag):
                raise ConfigError(
                    f"Start {start_commit or start_tag} ({start_tag}) is newer "
                    f"than final tag {final_tag}"
                )

        return SelectionPlan(
            mode=PlanMode.WALK,
            index=self.index,
            start_tag=start_tag,
            final_tag=final_tag,
            start_commit=start_commit,
            start_parent=start_parent,
        )

    def _indexed_tag_at(self, ref: str) -> Optional[str]:
        """Name of the indexed tag on the commit ref points at."""
        commit = self.git.commit_of(ref)
        if not commit:
            return None
        for tag in self.index:
            if commit.startswith(tag.commit):
                return tag.name
        return None

    def _to_indexed(self, name: str) -> Optional[str]:
        if name in self.index:
            return name
        return self._indexed_tag_at(name)

    def _resolve_tag(self, name: str, role: str) -> str:
        """
        Resolve a tag name, or any ref, to the nearest indexed tag at or before it.

        Tags sharing a commit with an indexed tag resolve to that tag.
        """
        if name in self.index:
            return name
        if not self.git.is_valid_ref(name):
            raise ConfigError(f"Unknown {role} '{name}'")

        tag = self._indexed_tag_at(name)
        if tag is None:
            nearest = self.git.nearest_tag(name)
            if nearest is None:
                raise ConfigError(f"No tag found at or before {role} '{name}'")
            tag = self._to_indexed(nearest)
            if tag is None:
                raise ConfigError(f"Tag '{nearest}' for {role} '{name}' is not a release tag")
        logger.debug(f"Resolved {role} {name} to {tag}")
        return tag

    def _containing_tag(self, commit: str) -> str:
        """The indexed tag enclosing a start commit."""
        name = self.git.containing_tag(commit)
        tag = self._to_indexed(name) if name else None
        if tag is None:
            raise ResolutionError(f"No tag contains commit '{commit}'")
        logger.debug(f"Start commit {commit} is contained in {tag}")
        return tag

    def walk(self, plan: SelectionPlan) -> Iterator[SectionBoundary]:
        """Yield section boundaries, newest first."""
        if plan.mode is PlanMode.ALL:
            yield SectionBoundary(self.title, self.today, All())
            return

        if plan.mode is PlanMode.SINCE_COMMIT:
            if plan.start_parent:
                expression = Between(plan.start_parent)
            else:
                expression = UpTo("HEAD")
            yield SectionBoundary(self.title, self.today, expression)
            return

        tags = plan.index.tags
        state = WalkState.SEEK_FINAL if plan.final_tag else WalkState.ACCUMULATING

        for position, tag in enumerate(tags):
            older = tags[position + 1] if position + 1 < len(tags) else None

            if position == 0 and plan.final_tag is None:
                yield SectionBoundary(
                    self.title, self.today, Between(tag.name), untagged=True
                )
                if plan.start_tag is None:
                    return

            if state is WalkState.SEEK_FINAL:
                if tag.name != plan.final_tag:
                    continue
                state = WalkState.ACCUMULATING

            if plan.start_commit and tag.name == plan.start_tag:
                if plan.start_parent:
                    expression = Between(plan.start_parent, tag.name)
                else:
                    expression = UpTo(tag.name)
                yield SectionBoundary(tag.name, tag.date, expression)
                state = WalkState.DONE
                break

            if older is None:
                expression = UpTo(tag.name)
            else:
                expression = Between(older.name, tag.name)
            yield SectionBoundary(tag.name, tag.date, expression)

            if tag.name == plan.start_tag:
                state = WalkState.DONE
                break

        logger.debug(f"Walk finished in state {state.value}")
