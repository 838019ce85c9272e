"""
File and upload helpers.

Upload acceptance rules and PDF discovery for the command line.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Optional

PDF_EXTENSION = ".pdf"

# Browsers often report PDFs as a generic binary stream
ACCEPTED_GENERIC_MEDIA_TYPES = {"application/octet-stream"}


def is_pdf_upload(filename: Optional[str] = None, media_type: Optional[str] = None) -> bool:
    """
    Decide whether an upload should be treated as a PDF.

    Accepted when the media type mentions ``pdf`` or is a generic binary
    stream, or when the filename ends with ``.pdf``. With neither hint
    given the bytes are accepted and left to the PDF parser to judge.
    """
    if not filename and not media_type:
        return True

    media = (media_type or "").strip().lower()
    if "pdf" in media or media in ACCEPTED_GENERIC_MEDIA_TYPES:
        return True

    return bool(filename) and filename.strip().lower().endswith(PDF_EXTENSION)


def iter_pdfs(input_dir: Path) -> Iterator[Path]:
    """
    Iterate over PDF files in a directory (sorted, non-recursive).

    Args:
        input_dir: Directory to search
    """
    input_dir = Path(input_dir)
    if not input_dir.is_dir():
        return
    for path in sorted(input_dir.iterdir()):
        if path.is_file() and path.suffix.lower() == PDF_EXTENSION:
            yield path


def collect_pdfs(inputs: Iterable[Path]) -> list[Path]:
    """Expand a mix of files and directories into a list of PDF paths."""
    found: list[Path] = []
    for item in inputs:
        item = Path(item)
        if item.is_dir():
            found.extend(iter_pdfs(item))
        else:
            found.append(item)
    return found
