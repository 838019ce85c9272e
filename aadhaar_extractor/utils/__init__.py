"""
Utility functions for the Aadhaar document extractor.
"""

from .file_utils import (
    is_pdf_upload,
    iter_pdfs,
    collect_pdfs,
)

from .timing import Timer

__all__ = [
    # File utilities
    "is_pdf_upload",
    "iter_pdfs",
    "collect_pdfs",

    # Timing utilities
    "Timer",
]
