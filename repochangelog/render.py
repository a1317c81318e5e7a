"""
Rendering functions for repochangelog output.

This module turns fetched sections into changelog text.
Sections are either a bare bullet list (plain mode) or a titled block:

    v1.0.0 / 2024-01-01
    ===================

      * Commit subject
"""

import re
from typing import Iterable, List, Optional

from .domain.section import RenderMode, Section

UNDERLINE_CHAR = "="

# "  * * subject" -> "  * subject"
_DOUBLE_BULLET = re.compile(r"^(\s*)\* \* ")


def normalize_line(line: str) -> str:
    """Collapse a leading double bullet into a single one."""
    return _DOUBLE_BULLET.sub(r"\1* ", line)


def format_title(title: str, date: Optional[str]) -> str:
    """Format a section header: ``title / date``."""
    return f"{title} / {date}" if date else title


def underline(text: str, char: str = UNDERLINE_CHAR) -> str:
    """An underline exactly as long as text."""
    return char * len(text)


def render_lines(lines: Iterable[str]) -> str:
    """Render commit lines as a bullet list."""
    return "\n".join(normalize_line(line) for line in lines)


def render_section(section: Section, mode: RenderMode = RenderMode.TITLED) -> str:
    """
    Render one section.

    Args:
        section: Section to render
        mode: PLAIN for a bare list, TITLED for header + underline + list

    Returns:
        Section text without a trailing newline
    """
    body = render_lines(section.lines)
    if mode is RenderMode.PLAIN or not section.title:
        return body

    header = format_title(section.title, section.date)
    parts: List[str] = [header, underline(header)]
    if body:
        parts.extend(["", body])
    return "\n".join(parts)


class SectionRenderer:
    """Renders sections in a fixed mode."""

    def __init__(self, mode: RenderMode = RenderMode.TITLED):
        self.mode = mode

    def render(self, section: Section) -> str:
        return render_section(section, self.mode)
