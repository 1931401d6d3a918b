import base64
import sys
import unittest
from pathlib import Path
from unittest.mock import AsyncMock

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_review.ai.types import InlineMedia, PlainText  # noqa: E402
from resume_review.core.errors import (  # noqa: E402
    EmptyInput,
    ExtractionError,
    FileTooLarge,
    InsufficientContent,
    UnsupportedType,
)
from resume_review.services.input_normalizer import (  # noqa: E402
    MAX_FILE_SIZE_BYTES,
    SHORT_TEXT_FILE_WARNING,
    FileInput,
    InputNormalizer,
    TextInput,
)

LONG_TEXT = "Jane Doe, Senior Backend Engineer. Built Python services used by 1.2M people."


def _file(content: bytes, mime_type: str, file_name: str, size_bytes: int | None = None) -> FileInput:
    return FileInput(
        content=content,
        mime_type=mime_type,
        size_bytes=len(content) if size_bytes is None else size_bytes,
        file_name=file_name,
    )


class InputNormalizerTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.pdf_extractor = AsyncMock(return_value=LONG_TEXT)
        self.normalizer = InputNormalizer(pdf_extractor=self.pdf_extractor)

    async def test_pasted_text_is_returned_as_is(self):
        result = await self.normalizer.normalize(TextInput(LONG_TEXT))
        self.assertEqual(result.payload, PlainText(LONG_TEXT))
        self.assertEqual(result.source, "text")
        self.assertEqual(result.warnings, [])

    async def test_short_pasted_text_has_no_length_minimum(self):
        text = "Jane Doe - Python developer, 5 years exp."
        self.assertLess(len(text), 50)
        result = await self.normalizer.normalize(TextInput(text))
        self.assertEqual(result.payload, PlainText(text))

    async def test_blank_pasted_text_fails_with_empty_input(self):
        for text in ("", "   ", "\n\t  \n"):
            with self.assertRaises(EmptyInput):
                await self.normalizer.normalize(TextInput(text))

    async def test_oversized_file_fails_before_type_dispatch(self):
        size = MAX_FILE_SIZE_BYTES + 1
        with self.assertRaises(FileTooLarge) as ctx:
            await self.normalizer.normalize(_file(b"", "application/x-msdownload", "setup.exe", size_bytes=size))
        self.assertAlmostEqual(ctx.exception.size_mb, size / (1024 * 1024))
        self.assertIn("Maximum allowed size is 5MB", str(ctx.exception))
        self.pdf_extractor.assert_not_awaited()

    async def test_file_at_exact_limit_is_accepted(self):
        content = b"x" * 60
        result = await self.normalizer.normalize(
            _file(content, "text/plain", "resume.txt", size_bytes=MAX_FILE_SIZE_BYTES)
        )
        self.assertEqual(result.source, "text_file")

    async def test_pdf_text_is_returned_as_plain_text(self):
        result = await self.normalizer.normalize(_file(b"%PDF-1.4 ...", "application/pdf", "cv.pdf"))
        self.assertEqual(result.payload, PlainText(LONG_TEXT))
        self.assertEqual(result.source, "pdf")
        self.pdf_extractor.assert_awaited_once_with(b"%PDF-1.4 ...")

    async def test_short_pdf_text_fails_with_insufficient_content(self):
        self.pdf_extractor.return_value = "   Jane Doe   "
        with self.assertRaises(InsufficientContent) as ctx:
            await self.normalizer.normalize(_file(b"%PDF-1.4", "application/pdf", "cv.pdf"))
        self.assertIn("image upload", str(ctx.exception))
        self.assertIn("copy-pasting", str(ctx.exception))

    async def test_pdf_extraction_failure_propagates(self):
        self.pdf_extractor.side_effect = ExtractionError()
        with self.assertRaises(ExtractionError):
            await self.normalizer.normalize(_file(b"%PDF-1.4", "application/pdf", "cv.pdf"))

    async def test_image_is_base64_encoded_without_length_check(self):
        content = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
        result = await self.normalizer.normalize(_file(content, "image/png", "cv.png"))
        self.assertIsInstance(result.payload, InlineMedia)
        self.assertEqual(result.payload.mime_type, "image/png")
        self.assertEqual(base64.b64decode(result.payload.data), content)
        self.assertEqual(result.source, "image")

    async def test_jpeg_and_webp_are_supported(self):
        for mime in ("image/jpeg", "image/webp"):
            result = await self.normalizer.normalize(_file(b"abc", mime, "cv.img"))
            self.assertEqual(result.payload.mime_type, mime)

    async def test_short_text_file_is_accepted_with_warning(self):
        result = await self.normalizer.normalize(_file(b"Jane Doe\nPython", "text/plain", "cv.txt"))
        self.assertEqual(result.payload, PlainText("Jane Doe\nPython"))
        self.assertEqual(result.warnings, [SHORT_TEXT_FILE_WARNING])

    async def test_text_file_without_warning_when_long_enough(self):
        result = await self.normalizer.normalize(_file(LONG_TEXT.encode("utf-8"), "text/plain", "cv.txt"))
        self.assertEqual(result.payload, PlainText(LONG_TEXT))
        self.assertEqual(result.warnings, [])

    async def test_text_file_with_utf8_bom_and_charset_parameter(self):
        content = b"\xef\xbb\xbf" + LONG_TEXT.encode("utf-8")
        result = await self.normalizer.normalize(_file(content, "text/plain; charset=utf-8", "cv.txt"))
        self.assertEqual(result.payload, PlainText(LONG_TEXT))

    async def test_latin1_text_file_falls_back_to_latin1(self):
        text = "José Muñoz, Senior Engineer at Café Corp, Zürich. Python and SQL"
        content = text.encode("latin-1")
        self.assertEqual(len(content) % 2, 0)
        result = await self.normalizer.normalize(_file(content, "text/plain", "cv.txt"))
        self.assertEqual(result.payload, PlainText(text))

    async def test_utf16_text_file_with_bom(self):
        content = LONG_TEXT.encode("utf-16")
        result = await self.normalizer.normalize(_file(content, "text/plain", "cv.txt"))
        self.assertEqual(result.payload, PlainText(LONG_TEXT))

    async def test_unsupported_type_reports_uppercased_extension(self):
        with self.assertRaises(UnsupportedType) as ctx:
            await self.normalizer.normalize(
                _file(b"PK\x03\x04", "application/vnd.openxmlformats-officedocument.wordprocessingml.document", "cv.docx")
            )
        self.assertEqual(ctx.exception.extension, "DOCX")
        self.assertIn("Unsupported file type: DOCX", str(ctx.exception))

    async def test_unsupported_type_without_extension_reports_unknown(self):
        with self.assertRaises(UnsupportedType) as ctx:
            await self.normalizer.normalize(_file(b"\x00\x01", "application/zip", "resume"))
        self.assertEqual(ctx.exception.extension, "Unknown")

    async def test_generic_mime_type_falls_back_to_filename(self):
        result = await self.normalizer.normalize(_file(b"%PDF-1.7", "application/octet-stream", "cv.pdf"))
        self.assertEqual(result.source, "pdf")

    async def test_generic_mime_type_falls_back_to_signature(self):
        content = b"\xff\xd8\xff\xe0" + b"\x00" * 8
        result = await self.normalizer.normalize(_file(content, "", "scan"))
        self.assertEqual(result.payload.mime_type, "image/jpeg")


if __name__ == "__main__":
    unittest.main()
