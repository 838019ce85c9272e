"""
Field validators.

- Verhoeff check-digit algorithm (used by UIDAI for Aadhaar numbers)
- ID number structural rules
- Date of birth bounds
- Name plausibility (rejects address and institutional vocabulary)
"""

from __future__ import annotations

import re
from typing import Optional

from .exceptions import ValidationError

# Verhoeff multiplication table (dihedral group D5)
_VERHOEFF_D = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    (1, 2, 3, 4, 0, 6, 7, 8, 9, 5),
    (2, 3, 4, 0, 1, 7, 8, 9, 5, 6),
    (3, 4, 0, 1, 2, 8, 9, 5, 6, 7),
    (4, 0, 1, 2, 3, 9, 5, 6, 7, 8),
    (5, 9, 8, 7, 6, 0, 4, 3, 2, 1),
    (6, 5, 9, 8, 7, 1, 0, 4, 3, 2),
    (7, 6, 5, 9, 8, 2, 1, 0, 4, 3),
    (8, 7, 6, 5, 9, 3, 2, 1, 0, 4),
    (9, 8, 7, 6, 5, 4, 3, 2, 1, 0),
)

# Verhoeff permutation table
_VERHOEFF_P = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    (1, 5, 7, 6, 2, 8, 3, 0, 9, 4),
    (5, 8, 0, 3, 7, 9, 6, 1, 4, 2),
    (8, 9, 1, 6, 0, 4, 3, 5, 2, 7),
    (9, 4, 5, 3, 1, 2, 6, 8, 7, 0),
    (4, 2, 8, 6, 5, 7, 3, 9, 0, 1),
    (2, 7, 9, 3, 8, 0, 6, 4, 1, 5),
    (7, 0, 4, 6, 9, 1, 3, 2, 5, 8),
)

_VERHOEFF_INV = (0, 4, 3, 2, 1, 5, 6, 7, 8, 9)

ID_NUMBER_LENGTH = 12

_DATE_RE = re.compile(r"^\s*(\d{1,2})([/-])(\d{1,2})\2(\d{4})\s*$")

# Words that never appear in a cardholder name on the letter
NAME_DENYLIST = frozenset({
    # Issuer and document furniture
    "unique", "identification", "authority", "india", "government", "of", "the",
    "aadhaar", "aadhar", "uidai", "vid", "enrolment", "enrollment", "number", "no",
    "your", "to", "dob", "date", "birth", "year", "gender", "male", "female",
    "mobile", "phone", "email", "signature", "digitally", "signed", "valid",
    "unknown", "details", "issued", "issue", "download", "help", "www", "gov",
    "information", "card", "letter", "print", "generation", "verified", "yes",
    # Address components
    "address", "compound", "chawl", "road", "rd", "street", "lane", "near",
    "opp", "opposite", "behind", "mandir", "temple", "masjid", "church",
    "district", "dist", "state", "vtc", "po", "ps", "pin", "code", "floor",
    "wing", "chs", "flat", "plot", "building", "bldg", "society", "nagar",
    "colony", "sector", "phase", "area", "room", "house", "apartment", "tower",
    "west", "east", "north", "south", "city", "village", "taluka", "tehsil",
    "post", "office", "station", "main", "cross", "block", "ward",
    "maharashtra", "thane", "mumbai", "delhi",
})

# Substrings that make a whole line read as an address
ADDRESS_KEYWORDS = (
    "compound", "chawl", "road", "street", "lane", "plot", "flat", "building",
    "society", "nagar", "colony", "sector", "phase", "wing", "floor", "room",
    "house", "pin", "vtc", "district", "state", "near", "opp", "opposite",
)

_NAME_CHARS_RE = re.compile(r"^[A-Za-z\s]+$")


def _digits_of(value: str) -> list[int]:
    return [int(ch) for ch in value]


def verhoeff_checksum(digits: str) -> int:
    """
    Compute the Verhoeff checksum of a digit string (check digit included).

    A string carrying a correct check digit yields 0.
    """
    if not digits.isdigit():
        raise ValueError(f"Verhoeff input must be digits only: {digits!r}")
    c = 0
    for i, digit in enumerate(reversed(_digits_of(digits))):
        c = _VERHOEFF_D[c][_VERHOEFF_P[i % 8][digit]]
    return c


def verhoeff_check_digit(digits: str) -> str:
    """Return the check digit to append to ``digits``."""
    if not digits.isdigit():
        raise ValueError(f"Verhoeff input must be digits only: {digits!r}")
    c = 0
    for i, digit in enumerate(reversed(_digits_of(digits))):
        c = _VERHOEFF_D[c][_VERHOEFF_P[(i + 1) % 8][digit]]
    return str(_VERHOEFF_INV[c])


def is_verhoeff_valid(digits: str) -> bool:
    """True if ``digits`` ends with a correct Verhoeff check digit."""
    return bool(digits) and digits.isdigit() and verhoeff_checksum(digits) == 0


def id_structure_error(value: str) -> Optional[str]:
    """
    Return the first structural rule ``value`` breaks, or None.

    Rules: exactly 12 digits, not all zero, not a single repeated digit,
    first digit not 0 or 1.
    """
    if len(value) != ID_NUMBER_LENGTH or not value.isdigit():
        return "must be exactly 12 digits"
    if set(value) == {"0"}:
        return "must not be all zeros"
    if len(set(value)) == 1:
        return "must not repeat a single digit"
    if value[0] in ("0", "1"):
        return "must not start with 0 or 1"
    return None


def is_structurally_valid_id(value: str) -> bool:
    return id_structure_error(value) is None


def is_valid_id_number(value: str) -> bool:
    """Structural rules plus Verhoeff checksum."""
    return is_structurally_valid_id(value) and is_verhoeff_valid(value)


def validate_id_number(value: str) -> str:
    """
    Validate an ID number, returning it unchanged.

    Raises:
        ValidationError: naming the rule that failed
    """
    problem = id_structure_error(value)
    if problem:
        raise ValidationError(
            f"ID number {problem}",
            field_name="id_number",
            field_value=mask_id_number(value),
            expected="12 digits, first digit 2-9",
        )
    if not is_verhoeff_valid(value):
        raise ValidationError(
            "ID number failed checksum validation",
            field_name="id_number",
            field_value=mask_id_number(value),
            expected="valid Verhoeff check digit",
        )
    return value


def mask_id_number(value: str) -> str:
    """Mask all but the last four digits: ``XXXX XXXX 9012``."""
    digits = re.sub(r"\D", "", value or "")
    if len(digits) < 4:
        return "X" * len(digits)
    masked = "X" * (len(digits) - 4) + digits[-4:]
    return " ".join(masked[i:i + 4] for i in range(0, len(masked), 4))


def parse_date(text: str, min_year: int = 1900, max_year: int = 2025) -> Optional[str]:
    """
    Parse ``D/M/YYYY`` or ``D-M-YYYY`` and return ``DD/MM/YYYY``.

    Returns None when the text is not date-shaped or fails the bounds
    (day 1-31, month 1-12, year within [min_year, max_year]).
    """
    match = _DATE_RE.match(text or "")
    if not match:
        return None
    day, month, year = int(match.group(1)), int(match.group(3)), int(match.group(4))
    if not (1 <= day <= 31 and 1 <= month <= 12 and min_year <= year <= max_year):
        return None
    return f"{day:02d}/{month:02d}/{year}"


def validate_date(text: str, min_year: int = 1900, max_year: int = 2025) -> str:
    """Return the normalized date or raise ValidationError."""
    parsed = parse_date(text, min_year, max_year)
    if parsed is None:
        raise ValidationError(
            "Date of birth is not a valid date",
            field_name="date_of_birth",
            field_value=text,
            expected=f"DD/MM/YYYY with year {min_year}-{max_year}",
        )
    return parsed


def is_denylisted_word(word: str) -> bool:
    return word.lower() in NAME_DENYLIST


def is_plausible_name(name: str) -> bool:
    """
    Check that ``name`` looks like a personal name.

    4-50 characters, letters and spaces only, 2-4 words, and none of the
    words from the address/institutional denylist.
    """
    name = (name or "").strip()
    if not (4 <= len(name) <= 50):
        return False
    if not _NAME_CHARS_RE.match(name):
        return False
    words = name.split()
    if not (2 <= len(words) <= 4):
        return False
    return not any(is_denylisted_word(word) for word in words)


def validate_name(name: str) -> str:
    if not is_plausible_name(name):
        raise ValidationError(
            "Name is not plausible",
            field_name="name",
            field_value=name,
            expected="2-4 alphabetic words without address vocabulary",
        )
    return name.strip()


def is_address_like(text: str) -> bool:
    """True if any word of ``text`` is an address keyword."""
    words = re.findall(r"[a-z]+", (text or "").lower())
    return any(word in ADDRESS_KEYWORDS for word in words)
