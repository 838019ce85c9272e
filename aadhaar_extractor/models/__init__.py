"""
Data models for the Aadhaar document extractor.

Plain, immutable value records: positioned text fragments, reconstructed
pages, per-strategy field sets and the final identity.
"""

from .identity import (
    ExtractedIdentity,
    FieldSet,
    GENDER_MALE,
    GENDER_FEMALE,
    GENDER_NOT_SPECIFIED,
    MANDATORY_FIELDS,
)
from .fragment import TextFragment, LinearizedPage
from .result import ExtractionResult

__all__ = [
    # Identity models
    "ExtractedIdentity",
    "FieldSet",
    "GENDER_MALE",
    "GENDER_FEMALE",
    "GENDER_NOT_SPECIFIED",
    "MANDATORY_FIELDS",

    # Positional text
    "TextFragment",
    "LinearizedPage",

    # Results
    "ExtractionResult",
]
