"""
Changelog generation service for repochangelog.

Orchestrates the tag index, range selection, commit fetching and
rendering, then places the new sections ahead of any previous
changelog content.
"""

import logging
from dataclasses import replace
from typing import Iterator, List, Optional

from ..config import ChangelogConfig
from ..domain.section import RenderMode, Section
from ..domain.tag import TagIndex
from ..infra.commit_fetcher import CommitFetcher
from ..infra.git_client import GitClient
from ..render import SectionRenderer
from .range_selector import RangeSelector, SelectionRequest
from .tag_index import load_tag_index

logger = logging.getLogger(__name__)


def assemble(new_content: str, previous: str = "", prune: bool = False) -> str:
    """
    Place new sections ahead of the previous changelog content.

    Previous content is kept verbatim, after one blank line, unless
    prune is set. Without previous content the result ends with a
    single newline.
    """
    new_content = new_content.strip("\n")
    if prune or not previous.strip():
        return new_content + "\n" if new_content else ""
    if not new_content:
        return previous
    return f"{new_content}\n\n{previous}"


def default_bounds(request: SelectionRequest, index: TagIndex) -> SelectionRequest:
    """
    Fill in the start tag of a run without any bounds.

    A plain run covers the commits since the newest tag plus the newest
    tag's own section, so the start tag defaults to the newest tag.
    """
    if request.list_all or request.start_tag or request.start_commit or request.final_tag:
        return request
    if index.is_empty:
        return request
    return replace(request, start_tag=index.newest.name)


class ChangelogService:
    """
    Service for generating changelog text from git history.

    Example:
        service = ChangelogService(config)
        text = service.generate(SelectionRequest(start_tag="v0.9.0"))
        print(text)
    """

    def __init__(
        self,
        config: ChangelogConfig,
        git_client: Optional[GitClient] = None,
        fetcher: Optional[CommitFetcher] = None,
        today: Optional[str] = None
    ):
        """
        Initialize ChangelogService.

        Args:
            config: Run settings
            git_client: GitClient instance (creates new if None)
            fetcher: CommitFetcher instance (built from git_client if None)
            today: Date shown on untagged sections (default: today)
        """
        self.config = config
        self.git = git_client or GitClient()
        self.fetcher = fetcher or CommitFetcher(self.git, config)
        self.today = today

    def sections(self, request: SelectionRequest) -> Iterator[Section]:
        """
        Resolve the request, then lazily fetch one section per boundary.

        The untagged section is skipped when no commit postdates the
        newest tag. Other empty sections are kept.

        Raises:
            ConfigError, ResolutionError: Before any commit is fetched
        """
        index = load_tag_index(self.git)
        request = default_bounds(request, index)
        selector = RangeSelector(
            index, self.git, title=self.config.default_title, today=self.today
        )
        boundaries = selector.select(request)
        return self._fetch_sections(boundaries)

    def _fetch_sections(self, boundaries) -> Iterator[Section]:
        for boundary in boundaries:
            lines = self.fetcher.fetch(boundary.expression)
            if boundary.untagged and not lines:
                logger.debug("No commits since the newest tag")
                continue
            logger.debug(f"Section {boundary.label}: {len(lines)} lines")
            yield Section.from_boundary(boundary, lines)

    def generate(
        self,
        request: SelectionRequest,
        mode: RenderMode = RenderMode.TITLED
    ) -> str:
        """Render the requested sections, newest first, separated by a blank line."""
        renderer = SectionRenderer(mode)
        rendered: List[str] = []
        for section in self.sections(request):
            text = renderer.render(section)
            if text:
                rendered.append(text)
        return "\n\n".join(rendered)

    def build(
        self,
        request: SelectionRequest,
        mode: RenderMode = RenderMode.TITLED,
        previous: str = "",
        prune: bool = False
    ) -> str:
        """Generate new sections and assemble them with previous content."""
        return assemble(self.generate(request, mode), previous, prune)
