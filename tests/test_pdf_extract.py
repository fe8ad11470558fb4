# -*- coding: utf-8 -*-
"""Tests for PDF extraction functionality."""
import typing as t
from pathlib import Path

import pytest

from services.shared.errors import InvalidInputError
from syllabus_extractor import parse_syllabus_pdf, parse_syllabus_text, pdf_utils
from syllabus_extractor.pdf_utils import extract_pdf_pages, extract_pdf_pages_from_content, extract_pdf_text

PDF_BYTES = b"%PDF-1.7 fake body"


def test_pages_from_content_skip_empty_pages(fake_pdfplumber) -> None:
    fake_pdfplumber(["  Page one  ", None, "", "Page three"])
    assert extract_pdf_pages_from_content(PDF_BYTES) == ["Page one", "Page three"]


def test_non_pdf_content_is_rejected(fake_pdfplumber) -> None:
    fake_pdfplumber(["never read"])
    with pytest.raises(InvalidInputError, match="Only PDF files are allowed"):
        extract_pdf_pages_from_content(b"PK\x03\x04 a zip file")


def test_oversized_content_is_rejected(monkeypatch: pytest.MonkeyPatch, fake_pdfplumber) -> None:
    fake_pdfplumber(["never read"])
    monkeypatch.setattr(pdf_utils, "MAX_PDF_BYTES", 8)
    with pytest.raises(InvalidInputError, match="limit"):
        extract_pdf_pages_from_content(PDF_BYTES)


def test_extract_pdf_text_from_local_file(tmp_path: Path, fake_pdfplumber) -> None:
    """Test extracting text from a local PDF file."""
    fake_pdfplumber(["17-603 Communications", "Grading"])
    pdf_path = tmp_path / "syllabus.pdf"
    pdf_path.write_bytes(PDF_BYTES)

    text = extract_pdf_text(str(pdf_path))

    assert text == "17-603 Communications\n\nGrading"


def test_missing_local_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        extract_pdf_pages(str(tmp_path / "missing.pdf"))


class FakeResponse:
    """Streaming stand-in for requests.Response."""

    def __init__(self, body: bytes, content_length: t.Optional[str] = None) -> None:
        self.headers = {} if content_length is None else {"Content-Length": content_length}
        self._body = body
        self.chunks_read = 0
        self.closed = False

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info: t.Any) -> None:
        self.closed = True

    def raise_for_status(self) -> None:
        return None

    def iter_content(self, chunk_size: int) -> t.Iterator[bytes]:
        for start in range(0, len(self._body), chunk_size):
            self.chunks_read += 1
            yield self._body[start:start + chunk_size]


@pytest.fixture
def fake_get(monkeypatch: pytest.MonkeyPatch) -> t.Callable[[FakeResponse], list[tuple[str, float, bool]]]:
    def install(response: FakeResponse) -> list[tuple[str, float, bool]]:
        calls: list[tuple[str, float, bool]] = []

        def get(url: str, timeout: float, stream: bool = False) -> FakeResponse:
            calls.append((url, timeout, stream))
            return response

        monkeypatch.setattr(pdf_utils.requests, "get", get)
        return calls

    return install


def test_url_is_downloaded(fake_get, fake_pdfplumber) -> None:
    fake_pdfplumber(["Remote syllabus"])
    response = FakeResponse(PDF_BYTES)
    calls = fake_get(response)

    assert extract_pdf_pages("https://example.edu/cs101.pdf") == ["Remote syllabus"]
    assert calls == [("https://example.edu/cs101.pdf", pdf_utils.PDF_DOWNLOAD_TIMEOUT, True)]
    assert response.closed


def test_url_with_large_content_length_is_not_read(monkeypatch: pytest.MonkeyPatch, fake_get) -> None:
    monkeypatch.setattr(pdf_utils, "MAX_PDF_BYTES", 8)
    response = FakeResponse(PDF_BYTES, content_length="5000000000")
    fake_get(response)

    with pytest.raises(InvalidInputError, match="5000000000 bytes"):
        extract_pdf_pages("https://example.edu/huge.pdf")
    assert response.chunks_read == 0
    assert response.closed


def test_url_download_stops_at_limit(monkeypatch: pytest.MonkeyPatch, fake_get) -> None:
    monkeypatch.setattr(pdf_utils, "MAX_PDF_BYTES", 10)
    monkeypatch.setattr(pdf_utils, "DOWNLOAD_CHUNK_BYTES", 4)
    response = FakeResponse(b"%PDF" + b"x" * 100)
    fake_get(response)

    with pytest.raises(InvalidInputError, match="limit is 10 bytes"):
        extract_pdf_pages("https://example.edu/unlabelled.pdf")
    assert response.chunks_read == 3


def test_oversized_local_file_is_not_read(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(pdf_utils, "MAX_PDF_BYTES", 8)
    pdf_path = tmp_path / "big.pdf"
    pdf_path.write_bytes(PDF_BYTES)

    def fail_read(self: Path) -> bytes:
        raise AssertionError("oversized file was read")

    monkeypatch.setattr(Path, "read_bytes", fail_read)

    with pytest.raises(InvalidInputError, match=f"{len(PDF_BYTES)} bytes"):
        extract_pdf_pages(str(pdf_path))


def test_parse_syllabus_pdf_from_bytes(fake_pdfplumber, sample_syllabus: str) -> None:
    first_half, second_half = sample_syllabus.split("Grading\n")
    fake_pdfplumber([first_half, "Grading\n" + second_half])

    extraction = parse_syllabus_pdf(PDF_BYTES)

    assert [e.category for e in extraction.grade_breakdown] == ["Homework", "Midterm Exam", "Final Project"]
    assert len(extraction.assignments) == 6


def test_parse_syllabus_pdf_rejects_other_types() -> None:
    with pytest.raises(InvalidInputError):
        parse_syllabus_pdf(42)  # type: ignore[arg-type]


def test_parse_syllabus_text_preview() -> None:
    text = "Quiz 1 (5%)\n" + "x" * 2000
    extraction = parse_syllabus_text(text)
    assert len(extraction.raw_text_preview) == 1000
    assert extraction.raw_text_preview.startswith("Quiz 1")
