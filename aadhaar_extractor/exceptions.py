"""
Custom exceptions for the Aadhaar document extractor.

All application-specific exceptions inherit from AadhaarExtractionError.
"""

from __future__ import annotations

from typing import Optional, Any, List


class AadhaarExtractionError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details (for debugging)
        recoverable: Whether the error can potentially be recovered from
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(AadhaarExtractionError):
    """
    Invalid or missing configuration.

    Examples:
        - Non-positive context window
        - Birth year range inverted
    """

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else None
        super().__init__(message, details=details, recoverable=False)


class UnsupportedFormatError(AadhaarExtractionError):
    """The upload is not a PDF document."""

    def __init__(
        self,
        message: str = "Only PDF Aadhaar files are supported.",
        filename: Optional[str] = None,
        media_type: Optional[str] = None
    ):
        details = {}
        if filename:
            details["filename"] = filename
        if media_type:
            details["media_type"] = media_type
        super().__init__(message, details=details, recoverable=False)


class DocumentOpenError(AadhaarExtractionError):
    """
    The PDF structure could not be opened for text access.

    Examples:
        - Corrupted or truncated PDF
        - Arbitrary non-PDF bytes
        - Encrypted PDF with a wrong password
    """

    def __init__(
        self,
        message: str,
        page_number: Optional[int] = None,
        reason: Optional[str] = None
    ):
        details = {}
        if page_number is not None:
            details["page_number"] = page_number
        if reason:
            details["reason"] = reason
        super().__init__(message, details=details, recoverable=False)


class PasswordRequiredError(DocumentOpenError):
    """Encrypted PDF opened without a password. Recoverable by one retry."""

    def __init__(self, message: str = "PDF is password protected."):
        super().__init__(message)
        self.recoverable = True


class EmptyDocumentError(AadhaarExtractionError):
    """The document opened but yielded (almost) no text."""

    def __init__(
        self,
        message: str = "Unable to extract text from PDF. Please ensure it's a valid UIDAI e-Aadhaar PDF.",
        char_count: int = 0,
        min_chars: Optional[int] = None
    ):
        details: dict[str, Any] = {"char_count": char_count}
        if min_chars is not None:
            details["min_chars"] = min_chars
        super().__init__(message, details=details, recoverable=False)


class IncompleteExtractionError(AadhaarExtractionError):
    """
    A strategy could not produce every mandatory field.

    Recovered locally by trying the next strategy; escalated only when the
    last strategy also fails.
    """

    def __init__(
        self,
        message: str = "Could not extract data from document. Please try a different file.",
        missing_fields: Optional[List[str]] = None,
        strategy: Optional[str] = None
    ):
        details: dict[str, Any] = {}
        if missing_fields:
            details["missing_fields"] = list(missing_fields)
        if strategy:
            details["strategy"] = strategy
        super().__init__(message, details=details, recoverable=True)
        self.missing_fields = list(missing_fields or [])


class ValidationError(AadhaarExtractionError):
    """
    Data validation failed.

    Examples:
        - ID number fails the Verhoeff checksum
        - Date of birth out of range
        - Name contains address vocabulary
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        expected: Optional[str] = None
    ):
        details = {}
        if field_name:
            details["field_name"] = field_name
        if field_value is not None:
            details["field_value"] = str(field_value)[:100]
        if expected:
            details["expected"] = expected
        super().__init__(message, details=details, recoverable=True)


# Generic processing error
ProcessingError = AadhaarExtractionError
