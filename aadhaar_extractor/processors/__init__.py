"""
Document processors module.

Pipeline stages for e-Aadhaar extraction:
- PDFTextExtractor: Open the PDF and collect positioned text fragments
- LayoutReconstructor: Rebuild reading-order text from the fragments
- FieldExtractor: Run extraction strategies and build the identity
"""

from .base import BaseProcessor, ProcessingContext
from .pdf_extractor import PDFTextExtractor, configure_engine, open_document
from .layout_reconstructor import (
    LayoutReconstructor,
    group_lines,
    normalize_digit_runs,
    reconstruct_page,
    render_lines,
)
from .field_extractor import FieldExtractor

__all__ = [
    "BaseProcessor",
    "ProcessingContext",
    "PDFTextExtractor",
    "configure_engine",
    "open_document",
    "LayoutReconstructor",
    "group_lines",
    "normalize_digit_runs",
    "reconstruct_page",
    "render_lines",
    "FieldExtractor",
]
