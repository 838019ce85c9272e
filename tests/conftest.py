import sys
import os

import fitz  # PyMuPDF
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from aadhaar_extractor.config import Config, reset_config
from aadhaar_extractor.validators import verhoeff_check_digit

ENV_KEYS = (
    "DEBUG", "LOG_TO_FILE", "CONTEXT_WINDOW", "LINE_THRESHOLD", "MIN_TEXT_CHARS",
    "DOB_CONTEXT_CHARS", "NAME_SEARCH_LINES", "MIN_BIRTH_YEAR", "MAX_BIRTH_YEAR",
    "FALLBACK_ENABLED",
)


def make_id(prefix):
    """Append the Verhoeff check digit to an 11-digit prefix."""
    return prefix + verhoeff_check_digit(prefix)


def spaced(number):
    return " ".join(number[i:i + 4] for i in range(0, len(number), 4))


def make_pdf(lines, password=None, columns=None):
    """
    Build a one-page PDF in memory.

    ``lines`` are drawn top to bottom, 18pt apart. ``columns`` is a list of
    ``(x, y, text)`` drawn as separate spans.
    """
    doc = fitz.open()
    page = doc.new_page()
    y = 72
    for line in lines:
        page.insert_text((72, y), line, fontsize=11)
        y += 18
    for x, col_y, text in columns or []:
        page.insert_text((x, col_y), text, fontsize=11)

    if password:
        data = doc.tobytes(
            encryption=fitz.PDF_ENCRYPT_AES_256,
            user_pw=password,
            owner_pw=password + "-owner",
        )
    else:
        data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def aadhaar_id():
    return make_id("23456789012")


@pytest.fixture
def letter_lines(aadhaar_id):
    return [
        "Unique Identification Authority of India",
        "Enrolment No: 1234/56789/01234",
        "To",
        "RAHUL SHARMA",
        "C/O: Suresh Sharma",
        "ABC Chawl Road",
        "Thane Maharashtra PIN Code: 400601",
        "Mobile: 9876543210",
        "DOB: 15/08/1995",
        "MALE",
        f"{spaced(aadhaar_id)} VID : 9123 4567 8901 2345",
        "Your Aadhaar No. :",
        spaced(aadhaar_id),
    ]
