"""
Field extraction from reconstructed e-Aadhaar text.
"""

from .id_number import (
    IdCandidate,
    find_id_candidates,
    score_candidates,
    select_id_number,
    first_valid_id_run,
)
from .fields import (
    find_dob,
    find_gender,
    find_labeled_dob,
    find_name_after_to,
    find_most_frequent_name,
    name_candidates,
)
from .strategies import (
    ExtractionStrategy,
    LabeledPatternStrategy,
    ContextualPatternStrategy,
    FallbackPatternStrategy,
    default_strategies,
    run_strategies,
    extract_fields_from_text,
)

__all__ = [
    "IdCandidate",
    "find_id_candidates",
    "score_candidates",
    "select_id_number",
    "first_valid_id_run",
    "find_dob",
    "find_gender",
    "find_labeled_dob",
    "find_name_after_to",
    "find_most_frequent_name",
    "name_candidates",
    "ExtractionStrategy",
    "LabeledPatternStrategy",
    "ContextualPatternStrategy",
    "FallbackPatternStrategy",
    "default_strategies",
    "run_strategies",
    "extract_fields_from_text",
]
