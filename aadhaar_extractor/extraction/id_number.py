"""
ID number candidate scanning and scoring.

The letter prints the 12-digit Aadhaar number several times (header, address
block, footer) and, close to it, a 16-digit VID, a 10-digit mobile number and
an enrolment number. Every 12-digit run is collected as a candidate, checked
with the validators, and scored from the label text around each occurrence.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..logger import get_logger
from ..validators import is_valid_id_number, mask_id_number

logger = get_logger(__name__)

# Groups may be spaced but never span lines
ID_CANDIDATE_RE = re.compile(r"(?<!\d)(\d{4})[ \t]*(\d{4})[ \t]*(\d{4})")

# Applied to lowercased text
_AADHAAR_LABEL_RE = re.compile(
    r"(?:aadhaa?r|आधार)(?:\s*(?:no\.?|number|संख्या|क्रमांक))?"
)
_VID_LABEL = r"(?:\bvid\b|वीआईडी|व्हीआईडी)"
_PRECEDED_BY_VID_RE = re.compile(_VID_LABEL + r"\s*:?\s*$")
_FOLLOWED_BY_VID_RE = re.compile(r"^[^\d]{0,30}?" + _VID_LABEL)
_CONTINUES_DIGITS_RE = re.compile(r"^[ \t]*\d")
_PRECEDED_BY_MOBILE_RE = re.compile(
    r"(?:mobile|phone|मोबाइल)\s*(?:no\.?|number)?\s*:?\s*$"
)
_PRECEDED_BY_ENROLMENT_RE = re.compile(
    r"enrol(?:l)?ment\s*(?:no\.?|number|id)?\s*:?\s*$"
)
_PIN_CODE_RE = re.compile(r"pin\s*code|पिन\s*कोड")
_GENDER_RE = re.compile(r"\b(?:gender|male|female)\b|लिंग|पुरुष|महिला")
_ADDRESS_RE = re.compile(r"\baddress\b|पता")

STATE_NAMES = (
    "andhra pradesh", "arunachal pradesh", "assam", "bihar", "chhattisgarh",
    "goa", "gujarat", "haryana", "himachal pradesh", "jharkhand", "karnataka",
    "kerala", "madhya pradesh", "maharashtra", "manipur", "meghalaya",
    "mizoram", "nagaland", "odisha", "punjab", "rajasthan", "sikkim",
    "tamil nadu", "telangana", "tripura", "uttar pradesh", "uttarakhand",
    "west bengal", "delhi", "jammu and kashmir", "ladakh", "puducherry",
    "chandigarh",
)
_STATE_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(s) for s in STATE_NAMES) + r")\b|महाराष्ट्र|राज्य"
)

SIGNAL_AADHAAR_LABEL = "aadhaar_label"
SIGNAL_BEFORE_VID = "before_vid"
SIGNAL_AFTER_PIN_CODE = "after_pin_code"
SIGNAL_AFTER_GENDER = "after_gender"
SIGNAL_AFTER_STATE = "after_state"
SIGNAL_IN_ADDRESS = "in_address"
SIGNAL_RECURRING = "recurring"

SIGNAL_BONUS = {
    SIGNAL_AADHAAR_LABEL: 5,
    SIGNAL_BEFORE_VID: 3,
    SIGNAL_AFTER_PIN_CODE: 2,
    SIGNAL_AFTER_GENDER: 2,
}

# Signals that count as an explicit label for the strict tier
LABEL_SIGNALS = frozenset({SIGNAL_AADHAAR_LABEL, SIGNAL_BEFORE_VID})

REJECT_PART_OF_VID = "part_of_vid"
REJECT_LONGER_RUN = "part_of_longer_number"
REJECT_MOBILE = "mobile_number"
REJECT_ENROLMENT = "enrolment_number"


@dataclass
class OccurrenceContext:
    """Label evidence around one occurrence of a candidate."""
    position: int
    signals: Set[str] = field(default_factory=set)
    rejection: Optional[str] = None


@dataclass
class IdCandidate:
    """A distinct 12-digit run seen in the document."""
    digits: str
    positions: List[int] = field(default_factory=list)
    spans: List[Tuple[int, int]] = field(default_factory=list, repr=False)
    contexts: List[OccurrenceContext] = field(default_factory=list)
    signals: Set[str] = field(default_factory=set)
    score: int = 0

    @property
    def occurrences(self) -> int:
        return len(self.positions)

    @property
    def first_position(self) -> int:
        return self.positions[0] if self.positions else -1

    @property
    def surviving_contexts(self) -> List[OccurrenceContext]:
        return [c for c in self.contexts if c.rejection is None]

    @property
    def is_eligible(self) -> bool:
        """Has at least one usable occurrence and one positive signal."""
        return bool(self.surviving_contexts) and bool(self.signals) and self.score > 0

    def rank_key(self) -> tuple:
        return (-self.score, self.first_position)

    def describe(self) -> str:
        signals = ",".join(sorted(self.signals)) or "-"
        return (
            f"{mask_id_number(self.digits)} x{self.occurrences} "
            f"score={self.score} signals={signals}"
        )


def find_id_candidates(text: str) -> Dict[str, IdCandidate]:
    """
    Collect every ``dddd dddd dddd`` run, keyed by its digits.

    Candidates keep document order of first appearance and the start
    position of each occurrence.
    """
    candidates: Dict[str, IdCandidate] = {}
    for match in ID_CANDIDATE_RE.finditer(text):
        digits = "".join(match.groups())
        candidate = candidates.setdefault(digits, IdCandidate(digits=digits))
        candidate.positions.append(match.start())
        candidate.spans.append(match.span())
    return candidates


def _has_near_label(before: str) -> bool:
    """An Aadhaar label in ``before`` with no other number after it."""
    labels = list(_AADHAAR_LABEL_RE.finditer(before))
    if not labels:
        return False
    gap = before[labels[-1].end():]
    return not re.search(r"\d", gap)


def analyze_occurrence(text: str, start: int, end: int, window: int) -> OccurrenceContext:
    """
    Inspect ``window`` characters on each side of one occurrence.

    Disqualifiers are checked first; a disqualified occurrence carries no
    positive signals.
    """
    lowered = text.lower()
    before = lowered[max(0, start - window):start]
    after = lowered[end:end + window]
    context = OccurrenceContext(position=start)

    if _PRECEDED_BY_VID_RE.search(before):
        context.rejection = REJECT_PART_OF_VID
    elif _CONTINUES_DIGITS_RE.match(after):
        context.rejection = REJECT_LONGER_RUN
    elif _PRECEDED_BY_MOBILE_RE.search(before):
        context.rejection = REJECT_MOBILE
    elif _PRECEDED_BY_ENROLMENT_RE.search(before):
        context.rejection = REJECT_ENROLMENT
    if context.rejection:
        return context

    if _has_near_label(before):
        context.signals.add(SIGNAL_AADHAAR_LABEL)
    if _FOLLOWED_BY_VID_RE.search(after):
        context.signals.add(SIGNAL_BEFORE_VID)
    if _PIN_CODE_RE.search(before):
        context.signals.add(SIGNAL_AFTER_PIN_CODE)
    if _GENDER_RE.search(before):
        context.signals.add(SIGNAL_AFTER_GENDER)
    if _STATE_RE.search(before):
        context.signals.add(SIGNAL_AFTER_STATE)
    if _ADDRESS_RE.search(before):
        context.signals.add(SIGNAL_IN_ADDRESS)
    return context


def score_candidates(text: str, window: int = 150) -> List[IdCandidate]:
    """
    Validate, analyze and score every candidate.

    Returns the checksum-valid candidates best first: highest score, then
    earliest first occurrence.
    """
    scored: List[IdCandidate] = []

    for digits, candidate in find_id_candidates(text).items():
        if not is_valid_id_number(digits):
            logger.debug(f"Rejected candidate {mask_id_number(digits)}: failed validation")
            continue

        for start, end in candidate.spans:
            candidate.contexts.append(analyze_occurrence(text, start, end, window))

        surviving = candidate.surviving_contexts
        if not surviving:
            reasons = sorted({c.rejection for c in candidate.contexts if c.rejection})
            logger.debug(f"Rejected candidate {mask_id_number(digits)}: {', '.join(reasons)}")
            continue

        for context in surviving:
            candidate.signals |= context.signals
        if len(surviving) >= 2:
            candidate.signals.add(SIGNAL_RECURRING)

        candidate.score = 1 + sum(
            bonus for signal, bonus in SIGNAL_BONUS.items() if signal in candidate.signals
        )
        scored.append(candidate)

    scored.sort(key=IdCandidate.rank_key)
    for candidate in scored:
        logger.debug(f"ID candidate {candidate.describe()}")
    return scored


def select_id_number(
    text: str,
    window: int = 150,
    required_signals: Optional[Iterable[str]] = None
) -> Optional[str]:
    """
    Pick the best-scoring eligible candidate.

    Args:
        text: Reconstructed document text
        window: Characters of context inspected around each occurrence
        required_signals: When given, only candidates carrying one of these
            signals are eligible

    Returns:
        12 digits without spaces, or None
    """
    required = set(required_signals) if required_signals is not None else None
    for candidate in score_candidates(text, window):
        if not candidate.is_eligible:
            continue
        if required is not None and not (candidate.signals & required):
            continue
        return candidate.digits
    return None


def first_valid_id_run(text: str) -> Optional[str]:
    """
    First valid 12-digit run, ignoring any surrounding labels.

    Runs that continue into further digits on the same line (the leading
    part of a 16-digit VID) are skipped.
    """
    for match in ID_CANDIDATE_RE.finditer(text):
        if _CONTINUES_DIGITS_RE.match(text[match.end():]):
            continue
        digits = "".join(match.groups())
        if is_valid_id_number(digits):
            return digits
    return None
