"""
Document orchestrator.

Drives one document through the pipeline:

    Idle -> Opening -> (PasswordPrompt <-> Opening) -> TextExtracted
         -> Reconstructed -> PrimaryExtraction -> Done
                                  | incomplete
                                  v
                             FallbackExtraction -> Done | Failed

Every fatal condition becomes a failed ``ExtractionResult``; nothing
raises past ``process``.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Any

from .config import Config, get_config
from .exceptions import (
    AadhaarExtractionError,
    DocumentOpenError,
    IncompleteExtractionError,
    PasswordRequiredError,
    ProcessingError,
    UnsupportedFormatError,
)
from .extraction.strategies import ExtractionStrategy, default_strategies
from .logger import get_logger, log_timing
from .models import ExtractionResult
from .processors import (
    FieldExtractor,
    LayoutReconstructor,
    PDFTextExtractor,
    ProcessingContext,
    configure_engine,
)
from .utils.file_utils import is_pdf_upload
from .utils.timing import Timer

# Returns the password typed by the user, or None if they cancel
PasswordProvider = Callable[[], Optional[str]]


class PipelineState(str, Enum):
    IDLE = "Idle"
    OPENING = "Opening"
    PASSWORD_PROMPT = "PasswordPrompt"
    TEXT_EXTRACTED = "TextExtracted"
    RECONSTRUCTED = "Reconstructed"
    PRIMARY_EXTRACTION = "PrimaryExtraction"
    FALLBACK_EXTRACTION = "FallbackExtraction"
    DONE = "Done"
    FAILED = "Failed"


class DocumentOrchestrator:
    """
    Turn document bytes into an ``ExtractionResult``.

    One instance can process any number of documents; each call builds its
    own ``ProcessingContext`` so calls never share state.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        strategies: Optional[Sequence[ExtractionStrategy]] = None
    ):
        self.config = config or get_config()
        self.config.extraction.validate()
        self.logger = get_logger("DocumentOrchestrator")
        self.strategies: List[ExtractionStrategy] = list(
            strategies if strategies is not None else default_strategies(self.config.extraction)
        )
        configure_engine()

    @property
    def primary_strategies(self) -> List[ExtractionStrategy]:
        return [s for s in self.strategies if s.primary]

    @property
    def fallback_strategies(self) -> List[ExtractionStrategy]:
        return [s for s in self.strategies if not s.primary]

    def process(
        self,
        data: bytes,
        filename: Optional[str] = None,
        media_type: Optional[str] = None,
        password: Optional[str] = None,
        password_provider: Optional[PasswordProvider] = None
    ) -> ExtractionResult:
        """
        Extract the identity from one document.

        Args:
            data: Raw document bytes
            filename: Upload filename, used for the format check and logs
            media_type: Declared media type of the upload
            password: Password to try first for encrypted PDFs
            password_provider: Asked once if the PDF turns out to be encrypted
                and no working password was supplied

        Returns:
            Successful result with the identity, or a failure with a
            human-readable reason
        """
        timer = Timer()
        states: List[str] = [PipelineState.IDLE.value]
        context = ProcessingContext(
            config=self.config,
            data=data or b"",
            filename=filename,
            media_type=media_type,
            password=password,
        )

        def enter(state: PipelineState) -> None:
            states.append(state.value)
            self.logger.debug(f"{context.label}: -> {state.value}")

        try:
            if not is_pdf_upload(filename, media_type):
                raise UnsupportedFormatError(filename=filename, media_type=media_type)

            self._open(context, enter, password_provider)
            enter(PipelineState.TEXT_EXTRACTED)

            if not LayoutReconstructor(context).run():
                raise context.error or ProcessingError("Layout reconstruction failed")
            enter(PipelineState.RECONSTRUCTED)

            self._extract(context, enter)
            enter(PipelineState.DONE)

        except AadhaarExtractionError as e:
            enter(PipelineState.FAILED)
            self.logger.warning(f"{context.label}: {type(e).__name__}: {e}")
            return ExtractionResult.failure(
                e.message,
                error_type=type(e).__name__,
                page_count=context.page_count,
                states=states,
                timing_sec=timer.elapsed,
            )
        except Exception as e:
            enter(PipelineState.FAILED)
            self.logger.error(f"{context.label}: unexpected error: {e}", exc_info=self.config.debug)
            return ExtractionResult.failure(
                f"Failed to process Aadhaar PDF: {e}",
                error_type=type(e).__name__,
                page_count=context.page_count,
                states=states,
                timing_sec=timer.elapsed,
            )

        identity = context.identity
        self.logger.info(
            f"{context.label}: extracted {identity.masked_id_number} "
            f"via {context.strategy} ({context.page_count} page(s))"
        )
        log_timing(self.logger, f"{context.label}: total", timer.elapsed)
        self.logger.debug(f"{context.label}: stage timings {context.timer.to_dict()}")

        return ExtractionResult.ok(
            identity,
            strategy=context.strategy,
            page_count=context.page_count,
            states=states,
            timing_sec=timer.elapsed,
        )

    def _open(
        self,
        context: ProcessingContext,
        enter: Callable[[PipelineState], None],
        password_provider: Optional[PasswordProvider]
    ) -> None:
        """Open and read the PDF, asking for a password at most once."""
        enter(PipelineState.OPENING)
        if PDFTextExtractor(context).run():
            return

        error = context.error
        if isinstance(error, PasswordRequiredError) and password_provider is not None:
            enter(PipelineState.PASSWORD_PROMPT)
            supplied = password_provider()
            if not supplied:
                raise DocumentOpenError(
                    "PDF is password protected and no password was provided.",
                    reason="password prompt cancelled",
                )
            context.password = supplied

            enter(PipelineState.OPENING)
            if PDFTextExtractor(context).run():
                return
            error = context.error

        raise error or DocumentOpenError("Unable to extract text from PDF.")

    def _extract(
        self,
        context: ProcessingContext,
        enter: Callable[[PipelineState], None]
    ) -> None:
        """Primary tiers first, then the fallback tiers if any are configured."""
        enter(PipelineState.PRIMARY_EXTRACTION)
        primary = self.primary_strategies
        if primary and self._run_tiers(context, primary):
            return

        fallback = self.fallback_strategies
        if not fallback:
            raise context.error or IncompleteExtractionError()

        self.logger.info(f"{context.label}: primary extraction incomplete, trying fallback")
        enter(PipelineState.FALLBACK_EXTRACTION)
        if not self._run_tiers(context, fallback):
            raise context.error or IncompleteExtractionError()

    @staticmethod
    def _run_tiers(context: ProcessingContext, strategies: Sequence[ExtractionStrategy]) -> bool:
        if FieldExtractor(context, strategies).run():
            return True
        if context.error is not None and not isinstance(context.error, IncompleteExtractionError):
            raise context.error
        return False

    def process_file(
        self,
        path: Path,
        password: Optional[str] = None,
        password_provider: Optional[PasswordProvider] = None
    ) -> ExtractionResult:
        """Read ``path`` and process it. Read errors become a failed result."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            self.logger.warning(f"Could not read {path}: {e}")
            return ExtractionResult.failure(
                f"Could not read file: {path.name}",
                error_type=type(e).__name__,
                states=[PipelineState.IDLE.value, PipelineState.FAILED.value],
            )
        return self.process(
            data,
            filename=path.name,
            password=password,
            password_provider=password_provider,
        )


def extract_identity(
    data: bytes,
    filename: Optional[str] = None,
    media_type: Optional[str] = None,
    password: Optional[str] = None,
    password_provider: Optional[PasswordProvider] = None,
    config: Optional[Config] = None
) -> dict[str, Any]:
    """
    Convenience function returning the result as a plain dict.

    ``{"success": True, "data": {...}}`` or ``{"success": False, "error": "..."}``
    """
    orchestrator = DocumentOrchestrator(config=config)
    result = orchestrator.process(
        data,
        filename=filename,
        media_type=media_type,
        password=password,
        password_provider=password_provider,
    )
    return result.to_dict()
