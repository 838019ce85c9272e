"""
Aadhaar document extractor.

Reads a text-bearing e-Aadhaar PDF and returns the cardholder's name, date
of birth, 12-digit Aadhaar number and gender.

Usage:
    from aadhaar_extractor import DocumentOrchestrator
    result = DocumentOrchestrator().process(pdf_bytes, filename="aadhaar.pdf")
    if result.success:
        print(result.data.name, result.data.masked_id_number)
"""

from .orchestrator import DocumentOrchestrator, PipelineState, extract_identity
from .extraction.strategies import extract_fields_from_text
from .models import ExtractedIdentity, ExtractionResult

__version__ = "0.1.0"

__all__ = [
    "DocumentOrchestrator",
    "PipelineState",
    "extract_identity",
    "extract_fields_from_text",
    "ExtractedIdentity",
    "ExtractionResult",
]
