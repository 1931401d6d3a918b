from __future__ import annotations

import base64
import codecs
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Union

from resume_review.ai.types import InlineMedia, NormalizedPayload, PlainText
from resume_review.core.errors import (
    MAX_FILE_SIZE_MB,
    EmptyInput,
    FileTooLarge,
    InsufficientContent,
    UnsupportedType,
)
from resume_review.schemas.session import InputSource
from resume_review.services.file_security import (
    IMAGE_MIME_TYPES,
    PDF_MIME_TYPES,
    TEXT_MIME_TYPES,
    extension_label,
    resolve_mime_type,
)
from resume_review.services.pdf_extractor import extract_text_from_pdf

logger = logging.getLogger(__name__)

MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024
MIN_CONTENT_CHARS = 50

SHORT_TEXT_FILE_WARNING = "The uploaded text file seems too short to be a complete resume."

PdfExtractor = Callable[[bytes], Awaitable[str]]


@dataclass(frozen=True)
class TextInput:
    text: str


@dataclass(frozen=True)
class FileInput:
    content: bytes
    mime_type: str
    size_bytes: int
    file_name: str


RawInput = Union[TextInput, FileInput]


@dataclass(frozen=True)
class NormalizedInput:
    payload: NormalizedPayload
    source: InputSource
    warnings: list[str] = field(default_factory=list)


def _decode_text(content: bytes) -> str:
    for bom, encoding in ((codecs.BOM_UTF8, "utf-8-sig"), (codecs.BOM_UTF16_LE, "utf-16"), (codecs.BOM_UTF16_BE, "utf-16")):
        if content.startswith(bom):
            return content.decode(encoding)
    # UTF-16 only behind a BOM
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError:
        return content.decode("latin-1")


class InputNormalizer:
    def __init__(self, pdf_extractor: PdfExtractor = extract_text_from_pdf):
        self._pdf_extractor = pdf_extractor

    async def normalize(self, artifact: RawInput) -> NormalizedInput:
        if isinstance(artifact, TextInput):
            return self._normalize_text(artifact)
        return await self._normalize_file(artifact)

    def _normalize_text(self, artifact: TextInput) -> NormalizedInput:
        if not artifact.text.strip():
            raise EmptyInput()
        return NormalizedInput(payload=PlainText(artifact.text), source="text")

    async def _normalize_file(self, artifact: FileInput) -> NormalizedInput:
        if artifact.size_bytes > MAX_FILE_SIZE_BYTES:
            raise FileTooLarge(artifact.size_bytes / (1024 * 1024))

        mime = resolve_mime_type(artifact.mime_type, artifact.file_name, artifact.content)

        if mime in PDF_MIME_TYPES:
            text = await self._pdf_extractor(artifact.content)
            if len(text.strip()) < MIN_CONTENT_CHARS:
                raise InsufficientContent()
            return NormalizedInput(payload=PlainText(text), source="pdf")

        if mime in IMAGE_MIME_TYPES:
            encoded = base64.b64encode(artifact.content).decode("ascii")
            return NormalizedInput(payload=InlineMedia(data=encoded, mime_type=mime), source="image")

        if mime in TEXT_MIME_TYPES:
            text = _decode_text(artifact.content)
            warnings: list[str] = []
            if len(text.strip()) < MIN_CONTENT_CHARS:
                logger.info("short_text_file file=%s chars=%s", artifact.file_name, len(text.strip()))
                warnings.append(SHORT_TEXT_FILE_WARNING)
            return NormalizedInput(payload=PlainText(text), source="text_file", warnings=warnings)

        raise UnsupportedType(extension_label(artifact.file_name))
