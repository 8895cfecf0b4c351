import unittest
from io import BytesIO
from types import SimpleNamespace
from unittest.mock import patch

from docx import Document

from skillsphere.parsing.extract import (
    DOCX_MEDIA_TYPE,
    DocumentExtractionError,
    ExtractionUnavailable,
    PdfminerExtractor,
    PypdfExtractor,
    UnsupportedDocumentType,
    detect_source_type,
    extract_document,
    extract_document_text,
    select_pdf_extractor,
)


def _docx_bytes(*paragraphs: str) -> bytes:
    document = Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


class DetectSourceTypeTests(unittest.TestCase):
    def test_pdf_by_media_type(self):
        self.assertEqual(detect_source_type(b"anything", "application/pdf"), "pdf")

    def test_pdf_by_magic_bytes(self):
        self.assertEqual(detect_source_type(b"%PDF-1.7\n...", "application/octet-stream"), "pdf")

    def test_pdf_by_extension(self):
        self.assertEqual(detect_source_type(b"...", None, "Resume.PDF"), "pdf")

    def test_docx_by_extension(self):
        self.assertEqual(detect_source_type(b"PK\x03\x04", None, "cv.docx"), "docx")

    def test_plain_text_default(self):
        self.assertEqual(detect_source_type(b"Jane Doe", "text/plain", "cv.txt"), "txt")
        self.assertEqual(detect_source_type(b"Jane Doe", None), "txt")

    def test_images_rejected(self):
        with self.assertRaises(UnsupportedDocumentType):
            detect_source_type(b"\x89PNG\r\n\x1a\n\x00\x00", "image/png", "photo.png")
        with self.assertRaises(UnsupportedDocumentType):
            detect_source_type(b"\xff\xd8\xff\xe0\x00\x10JFIF", None, "scan")

    def test_legacy_word_rejected(self):
        with self.assertRaises(UnsupportedDocumentType):
            detect_source_type(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1", "application/msword", "cv.doc")


class ExtractDocumentTests(unittest.TestCase):
    def test_plain_text_returned_unchanged(self):
        text = "Jane Doe\nSkills: Python, SQL\n  Experience: 3 years\n"
        document = extract_document(text.encode("utf-8"), "text/plain", "cv.txt")
        self.assertEqual(document.source_type, "txt")
        self.assertEqual(document.text, text)
        self.assertEqual(document.extractor, "utf-8")
        self.assertEqual(document.characters, len(text.strip()))

    def test_invalid_utf8_is_replaced(self):
        self.assertEqual(extract_document_text(b"caf\xe9 resume", "text/plain"), "caf\ufffd resume")

    def test_docx_paragraphs_joined(self):
        content = _docx_bytes("Jane Doe", "", "Data Analyst", "SQL, Tableau, Python")
        document = extract_document(content, DOCX_MEDIA_TYPE, "cv.docx")
        self.assertEqual(document.source_type, "docx")
        self.assertEqual(document.text, "Jane Doe\nData Analyst\nSQL, Tableau, Python")
        self.assertEqual(document.extractor, "python-docx")

    def test_corrupt_pdf_raises_extraction_error(self):
        with self.assertRaises(DocumentExtractionError):
            extract_document(b"%PDF-1.4\nthis is not really a pdf", "application/pdf", "cv.pdf")

    def test_whitespace_only_pdf_text_is_an_error(self):
        blank = SimpleNamespace(name="stub", extract=lambda content: "  \n\t")
        with patch("skillsphere.parsing.extract.select_pdf_extractor", return_value=blank):
            with self.assertRaises(DocumentExtractionError) as ctx:
                extract_document(b"%PDF-1.4", "application/pdf")
        self.assertIn("No extractable text", str(ctx.exception))

    def test_library_failure_is_wrapped(self):
        def explode(content):
            raise KeyError("/Root")

        broken = SimpleNamespace(name="stub", extract=explode)
        with patch("skillsphere.parsing.extract.select_pdf_extractor", return_value=broken):
            with self.assertRaises(DocumentExtractionError):
                extract_document(b"%PDF-1.4", "application/pdf")

    def test_pdf_text_from_selected_extractor(self):
        stub = SimpleNamespace(name="stub", extract=lambda content: "Page one\nPage two")
        with patch("skillsphere.parsing.extract.select_pdf_extractor", return_value=stub):
            document = extract_document(b"%PDF-1.4", "application/pdf")
        self.assertEqual(document.text, "Page one\nPage two")
        self.assertEqual(document.extractor, "stub")


class SelectPdfExtractorTests(unittest.TestCase):
    def setUp(self):
        select_pdf_extractor.cache_clear()

    def tearDown(self):
        select_pdf_extractor.cache_clear()

    def test_session_form_preferred(self):
        with patch("skillsphere.parsing.extract._module_available", return_value=True):
            self.assertIsInstance(select_pdf_extractor(), PypdfExtractor)

    def test_function_form_used_when_session_form_missing(self):
        with patch("skillsphere.parsing.extract._module_available", side_effect=lambda name: name == "pdfminer"):
            self.assertIsInstance(select_pdf_extractor(), PdfminerExtractor)

    def test_nothing_installed(self):
        with patch("skillsphere.parsing.extract._module_available", return_value=False):
            with self.assertRaises(ExtractionUnavailable):
                select_pdf_extractor()

    def test_selection_runs_once(self):
        with patch("skillsphere.parsing.extract._module_available", return_value=True) as available:
            first = select_pdf_extractor()
            second = select_pdf_extractor()
        self.assertIs(first, second)
        self.assertEqual(available.call_count, 1)


if __name__ == "__main__":
    unittest.main()
