"""
Finders for date of birth, gender and name.

Each finder works on the reconstructed document text and returns None (or
``"Not specified"`` for gender) when nothing acceptable is found.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterator, List, Optional, Tuple

from ..models.identity import GENDER_FEMALE, GENDER_MALE, GENDER_NOT_SPECIFIED
from ..validators import (
    is_address_like,
    is_denylisted_word,
    is_plausible_name,
    parse_date,
)

DATE_TOKEN_RE = re.compile(r"(?<!\d)(\d{1,2}[/-]\d{1,2}[/-]\d{4})(?!\d)")

DOB_LABEL_RE = re.compile(
    r"(?:date\s*of\s*birth|\bdob\b|जन्म\s*तारीख|जन्म\s*तिथि|जन्म\s*दिनांक|जन्म)"
    r"\s*[:/\-]?\s*(\d{1,2}[/-]\d{1,2}[/-]\d{4})(?!\d)",
    re.IGNORECASE,
)

# Dates on the letter that are not the date of birth
_OTHER_DATE_LABEL_RE = re.compile(
    r"(?:issue|issued|download|print|generation|generated)\s*(?:date|on)?\s*[:\-]?\s*$",
    re.IGNORECASE,
)

GENDER_LABEL_RE = re.compile(
    r"(?:gender|लिंग)\s*[:/\-]?\s*(female|male|महिला|पुरुष)", re.IGNORECASE
)
FEMALE_RE = re.compile(r"\bfemale\b|महिला", re.IGNORECASE)
MALE_RE = re.compile(r"\bmale\b|पुरुष", re.IGNORECASE)
GENDER_WORD_RE = re.compile(r"\b(?:female|male)\b|महिला|पुरुष", re.IGNORECASE)

# A run of capitalised Latin words (Title case, all caps or single-letter
# initials) on one line
NAME_RUN_RE = re.compile(
    r"(?<![A-Za-z])[A-Z](?:[a-z]+|[A-Z]*)(?:[ \t]+[A-Z](?:[a-z]+|[A-Z]*))*(?![A-Za-z])"
)

# "K." in "Rahul K. Sharma"
_INITIAL_DOT_RE = re.compile(r"(?<![A-Za-z])([A-Z])\.(?=[ \t])")

TO_MARKER_RE = re.compile(r"(?<![A-Za-z])To(?![A-Za-z])[ \t]*[,:]?")

# Lines that end the addressee block
_ADDRESS_BLOCK_END_RE = re.compile(
    r"^\s*(?:C/O|S/O|D/O|W/O|Address|VTC|District|PIN|Mobile)\b", re.IGNORECASE
)

_LATIN_RE = re.compile(r"[A-Za-z]")


def normalize_gender(token: str) -> str:
    token = (token or "").strip().lower()
    if token in ("female", "महिला"):
        return GENDER_FEMALE
    if token in ("male", "पुरुष"):
        return GENDER_MALE
    return GENDER_NOT_SPECIFIED


# ---------------------------------------------------------------------------
# Date of birth
# ---------------------------------------------------------------------------

def find_labeled_dob(text: str, min_year: int = 1900, max_year: int = 2025) -> Optional[str]:
    """Date right after a ``Date of Birth``/``DOB`` label (English or Hindi)."""
    for match in DOB_LABEL_RE.finditer(text):
        parsed = parse_date(match.group(1), min_year, max_year)
        if parsed:
            return parsed
    return None


def find_dob_near_gender(
    text: str,
    span: int = 50,
    min_year: int = 1900,
    max_year: int = 2025
) -> Optional[str]:
    """Date within ``span`` characters after a gender keyword."""
    for gender in GENDER_WORD_RE.finditer(text):
        nearby = text[gender.end():gender.end() + span]
        for match in DATE_TOKEN_RE.finditer(nearby):
            parsed = parse_date(match.group(1), min_year, max_year)
            if parsed:
                return parsed
    return None


def find_first_valid_date(
    text: str,
    min_year: int = 1900,
    max_year: int = 2025,
    skip_other_dates: bool = True
) -> Optional[str]:
    """
    First date-shaped token passing the bounds.

    With ``skip_other_dates`` the issue/download/print dates printed on
    the letter are ignored.
    """
    for match in DATE_TOKEN_RE.finditer(text):
        if skip_other_dates:
            before = text[max(0, match.start() - 30):match.start()]
            if _OTHER_DATE_LABEL_RE.search(before):
                continue
        parsed = parse_date(match.group(1), min_year, max_year)
        if parsed:
            return parsed
    return None


def find_dob(
    text: str,
    span: int = 50,
    min_year: int = 1900,
    max_year: int = 2025
) -> Optional[str]:
    """Labeled date, then a date after the gender field, then any date."""
    return (
        find_labeled_dob(text, min_year, max_year)
        or find_dob_near_gender(text, span, min_year, max_year)
        or find_first_valid_date(text, min_year, max_year)
    )


# ---------------------------------------------------------------------------
# Gender
# ---------------------------------------------------------------------------

def find_gender(text: str) -> str:
    """
    Gender from an explicit label, else from any Female/Male token.

    Female is checked before Male. Returns ``"Not specified"`` when absent.
    """
    labeled = GENDER_LABEL_RE.search(text)
    if labeled:
        return normalize_gender(labeled.group(1))
    if FEMALE_RE.search(text):
        return GENDER_FEMALE
    if MALE_RE.search(text):
        return GENDER_MALE
    return GENDER_NOT_SPECIFIED


def find_first_gender_token(text: str) -> str:
    """Whichever gender token comes first in the text."""
    match = GENDER_WORD_RE.search(text)
    return normalize_gender(match.group(0)) if match else GENDER_NOT_SPECIFIED


# ---------------------------------------------------------------------------
# Name
# ---------------------------------------------------------------------------

def name_candidates(line: str) -> List[str]:
    """
    Plausible names in one line.

    Capitalised runs are split at denylisted words, so ``To RAHUL SHARMA
    Male`` still yields ``RAHUL SHARMA``. Initials are kept (``Rahul K.
    Sharma`` becomes ``Rahul K Sharma``) but a name needs at least one word
    longer than a letter.
    """
    found: List[str] = []
    line = _INITIAL_DOT_RE.sub(r"\1", line)
    for run in NAME_RUN_RE.finditer(line):
        segment: List[str] = []
        for word in run.group(0).split() + [""]:
            if word and not is_denylisted_word(word):
                segment.append(word)
                continue
            candidate = " ".join(segment)
            if (
                2 <= len(segment) <= 4
                and any(len(w) > 1 for w in segment)
                and is_plausible_name(candidate)
            ):
                found.append(candidate)
            segment = []
    return found


def iter_name_candidates(text: str) -> Iterator[Tuple[int, str]]:
    """Yield ``(line_index, name)`` for every candidate in document order."""
    for index, line in enumerate(text.splitlines()):
        for candidate in name_candidates(line):
            yield index, candidate


def find_name_after_to(text: str, max_lines: int = 4) -> Optional[str]:
    """
    Addressee name from the block introduced by ``To``.

    Looks at the rest of the ``To`` line and up to ``max_lines`` following
    lines, stopping at the C/O or address lines and skipping address-like
    and non-Latin lines (the Hindi rendering of the name).
    """
    for marker in TO_MARKER_RE.finditer(text):
        block = text[marker.end():].split("\n")[:max_lines + 1]
        for line in block:
            if _ADDRESS_BLOCK_END_RE.match(line):
                break
            if not _LATIN_RE.search(line) or is_address_like(line):
                continue
            candidates = name_candidates(line)
            if candidates:
                return candidates[0]
    return None


def find_most_frequent_name(text: str) -> Optional[str]:
    """Most repeated plausible name; ties go to the earliest."""
    counts: Counter = Counter()
    first_seen: dict[str, int] = {}
    for order, (_, candidate) in enumerate(iter_name_candidates(text)):
        counts[candidate] += 1
        first_seen.setdefault(candidate, order)
    if not counts:
        return None
    return min(counts, key=lambda name: (-counts[name], first_seen[name]))


def find_first_name(text: str) -> Optional[str]:
    for _, candidate in iter_name_candidates(text):
        return candidate
    return None
