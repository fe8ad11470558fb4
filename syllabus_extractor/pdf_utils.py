# -*- coding: utf-8 -*-
import io
import logging
from pathlib import Path

import pdfplumber
import requests

from services.shared.config import MAX_PDF_BYTES, PDF_DOWNLOAD_TIMEOUT
from services.shared.errors import InvalidInputError

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"
DOWNLOAD_CHUNK_BYTES = 64 * 1024


def _is_url(path_or_url: str) -> bool:
    return path_or_url.startswith('http://') or path_or_url.startswith('https://')


def _too_large(size: int) -> InvalidInputError:
    return InvalidInputError(f"PDF is {size} bytes; the limit is {MAX_PDF_BYTES} bytes")


def _download_pdf(url: str) -> bytes:
    """Streams a remote PDF, giving up as soon as it passes MAX_PDF_BYTES."""
    with requests.get(url, timeout=PDF_DOWNLOAD_TIMEOUT, stream=True) as response:
        response.raise_for_status()
        declared = response.headers.get("Content-Length")
        if declared and declared.isdigit() and int(declared) > MAX_PDF_BYTES:
            raise _too_large(int(declared))

        content = bytearray()
        for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_BYTES):
            content.extend(chunk)
            if len(content) > MAX_PDF_BYTES:
                raise _too_large(len(content))
        return bytes(content)


def _load_pdf_bytes(path_or_url: str) -> bytes:
    """
    Loads a PDF from a local path or a URL and returns its raw bytes.
    Oversized files are rejected before they are read in full.
    :param path_or_url: A local file path or a URL to a PDF file.
    :return: The PDF content.
    """
    if _is_url(path_or_url):
        return _download_pdf(path_or_url)

    path = Path(path_or_url)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    size = path.stat().st_size
    if size > MAX_PDF_BYTES:
        raise _too_large(size)
    return path.read_bytes()


def extract_pdf_pages_from_content(content: bytes) -> list[str]:
    """
    Extracts text per page from in-memory PDF bytes (e.g. an upload).
    Pages without a text layer are skipped; there is no OCR.
    :param content: Raw PDF bytes.
    :return: The non-empty text of each page.
    """
    if len(content) > MAX_PDF_BYTES:
        raise _too_large(len(content))
    if not content.startswith(PDF_MAGIC):
        raise InvalidInputError("Only PDF files are allowed")

    pages: list[str] = []
    with pdfplumber.open(io.BytesIO(content)) as pdf:
        for page in pdf.pages:
            text = page.extract_text()
            if text:
                pages.append(text.strip())
    logger.debug("Extracted text from %d PDF page(s)", len(pages))
    return pages


def extract_pdf_pages(path_or_url: str) -> list[str]:
    """
    Extracts text from a local or remote PDF.
    :param path_or_url: A local file path or a URL to a PDF file.
    :return: The text contents of each page
    """
    return extract_pdf_pages_from_content(_load_pdf_bytes(path_or_url))


def extract_pdf_text(path_or_url: str) -> str:
    """Extracts the whole PDF as one string, pages separated by blank lines."""
    return "\n\n".join(extract_pdf_pages(path_or_url))
