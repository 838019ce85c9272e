"""
Positional text models.

Text fragments as read from PDF pages, and the per-page text rebuilt
from them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_DIGIT_RE = re.compile(r"\d")
_LATIN_RE = re.compile(r"[A-Za-z]")
_DEVANAGARI_RE = re.compile(r"[ऀ-ॿ]")


@dataclass(frozen=True)
class TextFragment:
    """
    A positioned run of text on a page.

    Coordinates are PDF user space: origin at the bottom-left corner,
    so a larger ``y`` is nearer the top of the page. ``y`` is the baseline.
    """

    text: str
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    page_number: int = 1

    @property
    def is_numeric(self) -> bool:
        """Contains at least one digit."""
        return bool(_DIGIT_RE.search(self.text))

    @property
    def has_latin_letters(self) -> bool:
        return bool(_LATIN_RE.search(self.text))

    @property
    def has_devanagari_letters(self) -> bool:
        return bool(_DEVANAGARI_RE.search(self.text))


@dataclass(frozen=True)
class LinearizedPage:
    """Reading-order text rebuilt for one page."""

    page_number: int
    text: str
    fragment_count: int = 0
    line_count: int = 0

    @property
    def char_count(self) -> int:
        return len(self.text)
