"""
Layout Reconstructor processor.

Rebuilds reading order from positioned fragments. The e-Aadhaar letter is
laid out in columns, so the raw span order interleaves unrelated fields;
grouping by baseline and sorting left to right restores lines such as
``DOB: 15/08/1995`` and ``2345 6789 0123``.
"""

from __future__ import annotations

import re
from typing import List, Sequence

from .base import BaseProcessor
from ..models import LinearizedPage, TextFragment

_DIGIT_GAP_RE = re.compile(r"(\d)[ \t]+(?=\d)")
_ID_GROUPS_RE = re.compile(r"(?<!\d)(\d{4})[ \t]*(\d{4})[ \t]*(\d{4})")


def group_lines(
    fragments: Sequence[TextFragment],
    line_threshold: float = 8.0
) -> List[List[TextFragment]]:
    """
    Group fragments into lines, top of page first.

    A fragment starts a new line when its ``y`` differs from the first
    fragment of the current line by more than ``line_threshold``.
    Each line is ordered left to right.
    """
    if not fragments:
        return []

    ordered = sorted(fragments, key=lambda f: (-f.y, f.x))

    lines: List[List[TextFragment]] = []
    current: List[TextFragment] = []
    line_y = ordered[0].y

    for fragment in ordered:
        if abs(fragment.y - line_y) > line_threshold:
            if current:
                lines.append(current)
            current = []
            line_y = fragment.y
        current.append(fragment)

    if current:
        lines.append(current)

    return [sorted(line, key=lambda f: f.x) for line in lines]


def normalize_digit_runs(text: str) -> str:
    """
    Tidy digit spacing.

    Collapses spaces between digits to one and rewrites ``dddd dddd dddd``
    with any same-line spacing to canonical single-space groups, since the
    ID number is often drawn as separate four-digit glyph runs.
    """
    text = _DIGIT_GAP_RE.sub(r"\1 ", text)
    return _ID_GROUPS_RE.sub(r"\1 \2 \3", text)


def render_lines(lines: Sequence[Sequence[TextFragment]]) -> str:
    """Join grouped lines into normalized text."""
    text = "\n".join(" ".join(f.text for f in line) for line in lines)
    return normalize_digit_runs(text)


def reconstruct_page(
    fragments: Sequence[TextFragment],
    line_threshold: float = 8.0
) -> str:
    """Reading-order text for one page."""
    return render_lines(group_lines(fragments, line_threshold))


class LayoutReconstructor(BaseProcessor):
    """
    Turn ``context.page_fragments`` into ``context.pages`` and the
    document-level ``context.text``.
    """

    name = "LayoutReconstructor"

    def process(self) -> bool:
        threshold = self.config.extraction.line_threshold
        pages: List[LinearizedPage] = []

        for index, fragments in enumerate(self.context.page_fragments):
            lines = group_lines(fragments, threshold)
            text = render_lines(lines)
            pages.append(LinearizedPage(
                page_number=index + 1,
                text=text,
                fragment_count=len(fragments),
                line_count=len(lines),
            ))
            self.log_debug(f"Page {index + 1} rebuilt", lines=len(lines), chars=len(text))

        self.context.pages = pages
        self.context.text = "\n".join(p.text for p in pages).strip()
        self.log_debug("Document text rebuilt", chars=len(self.context.text))
        return True
