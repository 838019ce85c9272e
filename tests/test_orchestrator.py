import pytest

from aadhaar_extractor import DocumentOrchestrator, PipelineState, extract_identity
from aadhaar_extractor.config import Config, ExtractionConfig
from aadhaar_extractor.exceptions import ConfigurationError, DocumentOpenError, PasswordRequiredError
from aadhaar_extractor.logger import get_logger
from aadhaar_extractor.processors import PDFTextExtractor, ProcessingContext, open_document

from conftest import make_pdf, spaced

PASSWORD = "RAHU1995"


class RecordingProvider:
    def __init__(self, answer):
        self.answer = answer
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.answer


@pytest.fixture
def orchestrator(config):
    return DocumentOrchestrator(config=config)


def test_letter_pdf_is_extracted(orchestrator, letter_lines, aadhaar_id):
    result = orchestrator.process(make_pdf(letter_lines), filename="aadhaar.pdf")

    assert result.success, result.error
    assert result.data.to_dict() == {
        "name": "RAHUL SHARMA",
        "dob": "15/08/1995",
        "aadhar": aadhaar_id,
        "gender": "Male",
    }
    assert result.strategy == "labeled"
    assert result.page_count == 1
    assert result.states == [
        "Idle", "Opening", "TextExtracted", "Reconstructed", "PrimaryExtraction", "Done",
    ]


def test_result_dict_shape(letter_lines, aadhaar_id):
    payload = extract_identity(make_pdf(letter_lines), filename="aadhaar.pdf")
    assert payload["success"] is True
    assert payload["data"]["aadhar"] == aadhaar_id
    assert "error" not in payload


@pytest.mark.parametrize("data", [b"", b"this is not a pdf at all", b"%PDF-1.4\n%%EOF"])
def test_unreadable_bytes_fail_cleanly(orchestrator, data):
    result = orchestrator.process(data)

    assert not result.success
    assert "Unable to extract text" in result.error
    assert result.data is None
    assert result.states[-1] == PipelineState.FAILED.value


def test_pdf_without_text_is_empty(orchestrator):
    result = orchestrator.process(make_pdf([]), filename="scan.pdf")

    assert not result.success
    assert result.error_type == "EmptyDocumentError"
    assert "Unable to extract text" in result.error


def test_non_pdf_upload_is_refused(orchestrator, letter_lines):
    result = orchestrator.process(make_pdf(letter_lines), filename="card.png", media_type="image/png")

    assert not result.success
    assert result.error_type == "UnsupportedFormatError"
    assert result.error == "Only PDF Aadhaar files are supported."


@pytest.mark.parametrize("filename,media_type", [
    ("aadhaar.PDF", None),
    ("upload", "application/pdf"),
    ("blob", "application/octet-stream"),
    (None, None),
])
def test_pdf_uploads_are_accepted(orchestrator, letter_lines, filename, media_type):
    result = orchestrator.process(make_pdf(letter_lines), filename=filename, media_type=media_type)
    assert result.success, result.error


def test_incomplete_document(orchestrator):
    result = orchestrator.process(make_pdf(["Unique Identification Authority of India"]))

    assert not result.success
    assert result.error_type == "IncompleteExtractionError"
    assert result.error == "Could not extract data from document. Please try a different file."
    assert PipelineState.FALLBACK_EXTRACTION.value in result.states


def test_fallback_tier_runs_after_primary(orchestrator, aadhaar_id):
    data = make_pdf(["Priya Verma", spaced(aadhaar_id), "03/04/1990"])
    result = orchestrator.process(data)

    assert result.success, result.error
    assert result.strategy == "fallback"
    assert result.data.gender == "Not specified"
    assert result.states[-3:] == ["PrimaryExtraction", "FallbackExtraction", "Done"]


def test_fallback_tier_can_be_disabled(aadhaar_id):
    config = Config(extraction=ExtractionConfig(fallback_enabled=False))
    data = make_pdf(["Priya Verma", spaced(aadhaar_id), "03/04/1990"])

    result = DocumentOrchestrator(config=config).process(data)

    assert not result.success
    assert result.error_type == "IncompleteExtractionError"
    assert PipelineState.FALLBACK_EXTRACTION.value not in result.states


# ---------------------------------------------------------------------------
# Password protected PDFs
# ---------------------------------------------------------------------------

def test_open_document_password_errors(letter_lines):
    data = make_pdf(letter_lines, password=PASSWORD)

    with pytest.raises(PasswordRequiredError):
        open_document(data)
    with pytest.raises(DocumentOpenError) as exc:
        open_document(data, password="WRONG000")
    assert not isinstance(exc.value, PasswordRequiredError)

    doc = open_document(data, password=PASSWORD)
    assert doc.page_count == 1
    doc.close()


def test_encrypted_pdf_with_password(orchestrator, letter_lines):
    result = orchestrator.process(make_pdf(letter_lines, password=PASSWORD), password=PASSWORD)

    assert result.success, result.error
    assert PipelineState.PASSWORD_PROMPT.value not in result.states


def test_encrypted_pdf_prompts_once(orchestrator, letter_lines):
    provider = RecordingProvider(PASSWORD)
    result = orchestrator.process(make_pdf(letter_lines, password=PASSWORD), password_provider=provider)

    assert result.success, result.error
    assert provider.calls == 1
    assert result.states[:4] == ["Idle", "Opening", "PasswordPrompt", "Opening"]


def test_cancelled_prompt(orchestrator, letter_lines):
    provider = RecordingProvider(None)
    result = orchestrator.process(make_pdf(letter_lines, password=PASSWORD), password_provider=provider)

    assert not result.success
    assert provider.calls == 1
    assert "password" in result.error.lower()


def test_wrong_password_from_prompt_is_not_retried(orchestrator, letter_lines):
    provider = RecordingProvider("WRONG000")
    result = orchestrator.process(make_pdf(letter_lines, password=PASSWORD), password_provider=provider)

    assert not result.success
    assert provider.calls == 1
    assert result.error == "Could not process PDF with or without password. Please check the file."


def test_wrong_upfront_password_does_not_prompt(orchestrator, letter_lines):
    provider = RecordingProvider(PASSWORD)
    result = orchestrator.process(
        make_pdf(letter_lines, password=PASSWORD),
        password="WRONG000",
        password_provider=provider,
    )

    assert not result.success
    assert provider.calls == 0


def test_encrypted_pdf_without_provider(orchestrator, letter_lines):
    result = orchestrator.process(make_pdf(letter_lines, password=PASSWORD))

    assert not result.success
    assert result.error_type == "PasswordRequiredError"


# ---------------------------------------------------------------------------
# Processors, files and configuration
# ---------------------------------------------------------------------------

def test_processor_failure_is_captured(config):
    context = ProcessingContext(config=config, data=b"garbage")

    assert PDFTextExtractor(context).run() is False
    assert isinstance(context.error, DocumentOpenError)
    assert context.page_fragments == []


def test_process_file(orchestrator, tmp_path, letter_lines):
    path = tmp_path / "aadhaar.pdf"
    path.write_bytes(make_pdf(letter_lines))

    assert orchestrator.process_file(path).success

    missing = orchestrator.process_file(tmp_path / "missing.pdf")
    assert not missing.success
    assert missing.error == "Could not read file: missing.pdf"


def test_orchestrator_is_reusable(orchestrator, letter_lines):
    first = orchestrator.process(b"")
    second = orchestrator.process(make_pdf(letter_lines))
    assert not first.success
    assert second.success


def test_config_from_environment(monkeypatch):
    monkeypatch.setenv("CONTEXT_WINDOW", "200")
    monkeypatch.setenv("LINE_THRESHOLD", "5.5")
    monkeypatch.setenv("MIN_BIRTH_YEAR", "not-a-number")
    monkeypatch.setenv("FALLBACK_ENABLED", "false")

    config = Config()

    assert config.extraction.context_window == 200
    assert config.extraction.line_threshold == 5.5
    assert config.extraction.min_birth_year == 1900
    assert config.extraction.fallback_enabled is False
    assert [s.name for s in DocumentOrchestrator(config=config).strategies] == ["labeled", "contextual"]


@pytest.mark.parametrize("key,value", [
    ("CONTEXT_WINDOW", "0"),
    ("LINE_THRESHOLD", "-1"),
    ("LINE_THRESHOLD", "0"),
    ("NAME_SEARCH_LINES", "0"),
    ("MIN_BIRTH_YEAR", "2030"),
])
def test_invalid_config_is_rejected(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    config = Config()

    with pytest.raises(ConfigurationError):
        config.extraction.validate()
    with pytest.raises(ConfigurationError):
        DocumentOrchestrator(config=config)


def test_bad_environment_leaves_explicit_config_usable(monkeypatch, letter_lines):
    monkeypatch.setenv("CONTEXT_WINDOW", "0")

    assert get_logger("tests.fresh_logger") is not None
    with pytest.raises(ConfigurationError):
        DocumentOrchestrator()

    config = Config(extraction=ExtractionConfig(context_window=150))
    assert DocumentOrchestrator(config=config).process(make_pdf(letter_lines)).success


def test_ids_never_logged_in_full(orchestrator, letter_lines, aadhaar_id, caplog):
    orchestrator.logger.addHandler(caplog.handler)
    try:
        result = orchestrator.process(make_pdf(letter_lines), filename="aadhaar.pdf")
    finally:
        orchestrator.logger.removeHandler(caplog.handler)

    assert result.success
    assert "XXXX XXXX " + aadhaar_id[-4:] in caplog.text
    assert aadhaar_id not in repr(result.data)
    assert aadhaar_id not in caplog.text
