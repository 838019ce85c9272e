"""
PDF Text Extractor processor.

Opens a PDF from memory with PyMuPDF and collects every positioned text
span on every page.
"""

from __future__ import annotations

from typing import List, Optional

import fitz  # PyMuPDF

from .base import BaseProcessor
from ..exceptions import DocumentOpenError, EmptyDocumentError, PasswordRequiredError
from ..models import TextFragment

_engine_configured = False


def configure_engine() -> None:
    """
    One-time, process-wide MuPDF setup.

    MuPDF prints repair warnings for damaged files to stderr; errors are
    raised as exceptions anyway, so the printing is turned off. Safe to call
    repeatedly.
    """
    global _engine_configured
    if _engine_configured:
        return
    fitz.TOOLS.mupdf_display_errors(False)
    _engine_configured = True


def open_document(data: bytes, password: Optional[str] = None) -> fitz.Document:
    """
    Open PDF bytes for text access.

    Raises:
        DocumentOpenError: bytes are not a readable PDF, or the password is wrong
        PasswordRequiredError: the PDF is encrypted and no password was given
    """
    configure_engine()

    if not data:
        raise DocumentOpenError("Unable to extract text from PDF: the file is empty.", reason="empty")

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        raise DocumentOpenError(
            "Unable to extract text from PDF: the file could not be opened as a PDF.",
            reason=str(e),
        ) from e

    if doc.needs_pass:
        if not password:
            doc.close()
            raise PasswordRequiredError()
        if not doc.authenticate(password):
            doc.close()
            raise DocumentOpenError(
                "Could not process PDF with or without password. Please check the file.",
                reason="incorrect password",
            )

    if doc.page_count == 0:
        doc.close()
        raise DocumentOpenError("Unable to extract text from PDF: the document has no pages.")

    return doc


def page_fragments(page: fitz.Page, page_number: int) -> List[TextFragment]:
    """
    Positioned text spans of one page.

    PyMuPDF measures ``y`` downwards from the top edge; fragments are stored
    in PDF user space (upwards from the bottom edge) using the span baseline.
    """
    page_height = page.rect.height
    fragments: List[TextFragment] = []

    for block in page.get_text("dict").get("blocks", []):
        if block.get("type") != 0:  # image block
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                text = span.get("text", "").strip()
                if not text:
                    continue
                x0, y0, x1, y1 = span["bbox"]
                origin_x, origin_y = span.get("origin", (x0, y1))
                fragments.append(TextFragment(
                    text=text,
                    x=float(origin_x),
                    y=float(page_height - origin_y),
                    width=float(x1 - x0),
                    height=float(y1 - y0),
                    page_number=page_number,
                ))

    return fragments


class PDFTextExtractor(BaseProcessor):
    """
    Extract positioned text fragments from the document bytes.

    Fills ``context.page_fragments`` (one list per page, pages in order),
    ``context.page_count`` and ``context.char_count``.
    """

    name = "PDFTextExtractor"

    def process(self) -> bool:
        doc = open_document(self.context.data, self.context.password)

        try:
            self.context.page_count = doc.page_count
            self.log_debug(
                "PDF opened",
                pages=doc.page_count,
                encrypted=bool(doc.is_encrypted),
            )

            all_pages: List[List[TextFragment]] = []
            for page_index in range(doc.page_count):
                page_number = page_index + 1
                fragments = page_fragments(doc.load_page(page_index), page_number)
                all_pages.append(fragments)

                self.log_debug(
                    f"Page {page_number}/{doc.page_count}",
                    fragments=len(fragments),
                    numeric=sum(1 for f in fragments if f.is_numeric),
                    latin=sum(1 for f in fragments if f.has_latin_letters),
                    devanagari=sum(1 for f in fragments if f.has_devanagari_letters),
                )
        finally:
            doc.close()

        char_count = sum(len(f.text) for page in all_pages for f in page)
        self.context.page_fragments = all_pages
        self.context.char_count = char_count

        min_chars = self.config.extraction.min_text_chars
        if char_count < min_chars:
            raise EmptyDocumentError(char_count=char_count, min_chars=min_chars)

        self.log_debug("Text extracted", chars=char_count)
        return True

