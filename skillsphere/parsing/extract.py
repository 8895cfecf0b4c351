"""Plain-text extraction from uploaded resumes.

PDF support depends on which extraction library the environment ships. Each
library gets one adapter behind the ``TextExtractor`` interface and the
adapter is chosen once per process by probing what is importable.
"""
from __future__ import annotations

import importlib.util
import logging
from functools import lru_cache
from io import BytesIO
from typing import Protocol

from .models import ExtractedDocument

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF-"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")
IMAGE_MAGICS = (
    b"\x89PNG\r\n\x1a\n",
    b"\xff\xd8\xff",
    b"GIF87a",
    b"GIF89a",
)
OLE_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

PDF_MEDIA_TYPES = {"application/pdf", "application/x-pdf"}
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
UNSUPPORTED_MEDIA_PREFIXES = ("image/", "audio/", "video/")
UNSUPPORTED_MEDIA_TYPES = {
    "application/zip",
    "application/x-zip-compressed",
    "application/msword",
    "application/vnd.ms-powerpoint",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


class ExtractionUnavailable(RuntimeError):
    """No library able to read this document type is installed."""


class DocumentExtractionError(ValueError):
    """The document could not be read, or held no text."""


class UnsupportedDocumentType(ValueError):
    pass


class TextExtractor(Protocol):
    name: str

    def extract(self, content: bytes) -> str: ...


class PypdfExtractor:
    """pypdf: open a reader session, then pull text page by page."""

    name = "pypdf"
    module = "pypdf"

    def extract(self, content: bytes) -> str:
        from pypdf import PdfReader

        reader = PdfReader(BytesIO(content))
        parts: list[str] = []
        for page in reader.pages:
            page_text = (page.extract_text() or "").strip()
            if page_text:
                parts.append(page_text)
        return "\n".join(parts)


class PdfminerExtractor:
    """pdfminer.six: one call over the whole stream."""

    name = "pdfminer"
    module = "pdfminer"

    def extract(self, content: bytes) -> str:
        from pdfminer.high_level import extract_text

        return extract_text(BytesIO(content)) or ""


class DocxExtractor:
    name = "python-docx"
    module = "docx"

    def extract(self, content: bytes) -> str:
        from docx import Document

        document = Document(BytesIO(content))
        paragraphs = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
        return "\n".join(paragraphs)


class PlainTextExtractor:
    name = "utf-8"

    def extract(self, content: bytes) -> str:
        return content.decode("utf-8", errors="replace")


PDF_EXTRACTORS: tuple[type, ...] = (PypdfExtractor, PdfminerExtractor)


def _module_available(module: str) -> bool:
    try:
        return importlib.util.find_spec(module) is not None
    except (ImportError, ValueError):
        return False


@lru_cache(maxsize=1)
def select_pdf_extractor() -> TextExtractor:
    for adapter in PDF_EXTRACTORS:
        if _module_available(adapter.module):
            logger.info("pdf_extractor_selected name=%s", adapter.name)
            return adapter()
    raise ExtractionUnavailable("PDF text extraction is not available on this server.")


@lru_cache(maxsize=1)
def select_docx_extractor() -> TextExtractor:
    if _module_available(DocxExtractor.module):
        return DocxExtractor()
    raise ExtractionUnavailable("DOCX text extraction is not available on this server.")


def _extension(filename: str | None) -> str:
    name = (filename or "").strip().lower()
    return name.rsplit(".", 1)[-1] if "." in name else ""


def detect_source_type(content: bytes, media_type: str | None, filename: str | None = None) -> str:
    """Classify an upload as ``pdf``, ``docx`` or ``txt``.

    Raises ``UnsupportedDocumentType`` for binary formats we do not read.
    """
    mime = (media_type or "").split(";", 1)[0].strip().lower()
    ext = _extension(filename)
    head = content[:16]

    if mime in PDF_MEDIA_TYPES or ext == "pdf" or head.startswith(PDF_MAGIC):
        return "pdf"
    if mime == DOCX_MEDIA_TYPE or ext == "docx":
        return "docx"
    if mime in UNSUPPORTED_MEDIA_TYPES or mime.startswith(UNSUPPORTED_MEDIA_PREFIXES):
        raise UnsupportedDocumentType(f"Unsupported file type '{mime}'. Upload a PDF, DOCX or plain text file.")
    if head.startswith(ZIP_MAGICS) or head.startswith(IMAGE_MAGICS) or head.startswith(OLE_MAGIC):
        raise UnsupportedDocumentType("Unsupported binary file. Upload a PDF, DOCX or plain text file.")
    return "txt"


def _run(extractor: TextExtractor, content: bytes, source_type: str) -> str:
    try:
        text = extractor.extract(content)
    except Exception as exc:  # noqa: BLE001 - library errors vary by version
        raise DocumentExtractionError(f"Could not read the {source_type.upper()} file: {exc}") from exc
    if not (text or "").strip():
        raise DocumentExtractionError(f"No extractable text found in the {source_type.upper()} file.")
    return text


def extract_document(content: bytes, media_type: str | None, filename: str | None = None) -> ExtractedDocument:
    source_type = detect_source_type(content, media_type, filename)
    if source_type == "pdf":
        extractor = select_pdf_extractor()
        text = _run(extractor, content, source_type)
    elif source_type == "docx":
        extractor = select_docx_extractor()
        text = _run(extractor, content, source_type)
    else:
        extractor = PlainTextExtractor()
        text = extractor.extract(content)
    return ExtractedDocument(source_type=source_type, text=text, extractor=extractor.name)


def extract_document_text(content: bytes, media_type: str | None, filename: str | None = None) -> str:
    return extract_document(content, media_type, filename).text
