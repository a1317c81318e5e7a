"""
Service layer for repochangelog.

Contains the logic that orchestrates domain objects and infrastructure:
- build_tag_index: TagIndex from the decorated tag walk
- RangeSelector: Section boundaries for the requested bounds
- ChangelogService: Fetching, rendering and assembly

Services are the primary API for the CLI to use.
"""

from .tag_index import build_tag_index, load_tag_index, parse_decorated_log
from .range_selector import RangeSelector, SelectionRequest, SelectionPlan
from .changelog_service import ChangelogService, assemble

__all__ = [
    'build_tag_index',
    'load_tag_index',
    'parse_decorated_log',
    'RangeSelector',
    'SelectionRequest',
    'SelectionPlan',
    'ChangelogService',
    'assemble',
]
