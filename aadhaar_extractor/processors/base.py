"""
Base processor class and processing context.

Provides common functionality for all pipeline stages including
logging, timing, error capture, and configuration access.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Any, List

from ..config import Config
from ..logger import get_logger
from ..models import TextFragment, LinearizedPage, FieldSet, ExtractedIdentity
from ..utils.timing import Timer


@dataclass
class ProcessingContext:
    """
    State of one document passing through the pipeline.

    Created fresh for every document and discarded afterwards; nothing in
    it is shared between documents.
    """

    config: Config

    # Input
    data: bytes = b""
    filename: Optional[str] = None
    media_type: Optional[str] = None
    password: Optional[str] = None

    # PDF text extraction
    page_count: int = 0
    page_fragments: List[List[TextFragment]] = field(default_factory=list)
    char_count: int = 0

    # Layout reconstruction
    pages: List[LinearizedPage] = field(default_factory=list)
    text: str = ""

    # Field extraction
    fields: Optional[FieldSet] = None
    identity: Optional[ExtractedIdentity] = None
    strategy: Optional[str] = None

    # Last error captured by a processor run
    error: Optional[Exception] = None

    # Per-stage timings
    timer: Timer = field(default_factory=Timer)

    @property
    def label(self) -> str:
        """Short document label for log lines."""
        return self.filename or f"<{len(self.data)} bytes>"


class BaseProcessor(ABC):
    """
    Abstract base class for all pipeline stages.

    Provides:
    - Consistent logging
    - Timing instrumentation
    - Error capture into the context
    - Configuration access
    """

    # Processor name for logging (override in subclass)
    name: str = "BaseProcessor"

    def __init__(self, context: ProcessingContext):
        self.context = context
        self.config = context.config
        self.logger = get_logger(self.name)
        self._timer = Timer()

    @property
    def debug_mode(self) -> bool:
        """Check if debug mode is enabled."""
        return self.config.debug

    def log_debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message (only in debug mode)."""
        if self.debug_mode:
            extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
            self.logger.debug(f"{message} {extra}".strip())

    def log_error(self, message: str, error: Optional[Exception] = None) -> None:
        """Log error message."""
        if error:
            self.logger.error(f"{message}: {error}", exc_info=self.debug_mode)
        else:
            self.logger.error(message)

    @abstractmethod
    def process(self) -> bool:
        """
        Execute the processor's main task.

        Returns:
            True if processing succeeded, False otherwise
        """
        pass

    def validate(self) -> bool:
        """
        Validate that processor can run.

        Override in subclass to check prerequisites.
        """
        return True

    def run(self) -> bool:
        """
        Run processor with timing and error handling.

        Exceptions are logged and stored on ``context.error``; the caller
        decides what a failure means.

        Returns:
            True if processing succeeded
        """
        self.log_debug(f"Starting {self.name}", document=self.context.label)
        self._timer = Timer()
        self.context.error = None
        self.context.timer.start(self.name)

        try:
            if not self.validate():
                self.log_error("Validation failed")
                return False

            result = self.process()

            elapsed = self._timer.elapsed
            self.log_debug(f"Completed {self.name}", duration=f"{elapsed:.3f}s")

            return result

        except Exception as e:
            elapsed = self._timer.elapsed
            self.context.error = e
            if getattr(e, "recoverable", False):
                self.log_debug(f"{type(e).__name__} after {elapsed:.3f}s: {e}")
            else:
                self.log_error(f"Failed after {elapsed:.3f}s", error=e)
            return False

        finally:
            self.context.timer.stop(self.name)
