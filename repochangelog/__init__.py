"""
repochangelog - Generate a changelog from git history.

Commits are grouped into sections bounded by release tags, newest first,
and any previous changelog content is kept after the new sections.

Quick Start:
    from repochangelog import ChangelogConfig, ChangelogService, SelectionRequest

    service = ChangelogService(ChangelogConfig())

    # Commits since the newest tag, plus the newest tag's section
    print(service.generate(SelectionRequest()))

    # Everything between two tags
    print(service.generate(SelectionRequest(start_tag="v0.9.0", final_tag="v1.0.0")))

Domain Objects:
    Tag, TagIndex - Release tags, newest first
    TagName, CommitRef - Range bounds
    All, UpTo, Between - Commit ranges to fetch
    Section, SectionBoundary, RenderMode - Changelog sections

Services:
    RangeSelector - Section boundaries for the requested bounds
    ChangelogService - Fetching, rendering and assembly
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    Tag,
    TagIndex,
    TagName,
    CommitRef,
    All,
    UpTo,
    Between,
    RenderMode,
    Section,
    SectionBoundary,
)

# Services
from .services import (
    build_tag_index,
    RangeSelector,
    SelectionRequest,
    ChangelogService,
    assemble,
)

# Configuration
from .config import ChangelogConfig, MergeFilter, load_config

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "Tag",
    "TagIndex",
    "TagName",
    "CommitRef",
    "All",
    "UpTo",
    "Between",
    "RenderMode",
    "Section",
    "SectionBoundary",
    # Services
    "build_tag_index",
    "RangeSelector",
    "SelectionRequest",
    "ChangelogService",
    "assemble",
    # Configuration
    "ChangelogConfig",
    "MergeFilter",
    "load_config",
]
