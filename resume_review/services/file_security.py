from __future__ import annotations

import mimetypes

PDF_MIME_TYPES = frozenset({"application/pdf"})
IMAGE_MIME_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})
TEXT_MIME_TYPES = frozenset({"text/plain"})

GENERIC_MIME_TYPES = frozenset({"", "application/octet-stream", "binary/octet-stream"})

EXTENSION_MIME_HINTS = {
    "pdf": "application/pdf",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
    "txt": "text/plain",
}

PDF_MAGIC = b"%PDF-"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
JPEG_MAGIC = b"\xff\xd8\xff"
WEBP_RIFF_MAGIC = b"RIFF"
WEBP_WEBP_MAGIC = b"WEBP"


def _clean_mime(value: str | None) -> str:
    if not value:
        return ""
    return value.split(";")[0].strip().lower()


def extension_from_filename(filename: str | None) -> str:
    name = (filename or "").strip()
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].strip().lower()


def extension_label(filename: str | None) -> str:
    """Upper-cased suffix for user messages, ``Unknown`` when the name has none."""
    return extension_from_filename(filename).upper() or "Unknown"


def sniff_mime_type(content: bytes) -> str:
    if content.startswith(PDF_MAGIC):
        return "application/pdf"
    if content.startswith(PNG_MAGIC):
        return "image/png"
    if content.startswith(JPEG_MAGIC):
        return "image/jpeg"
    if len(content) >= 12 and content.startswith(WEBP_RIFF_MAGIC) and content[8:12] == WEBP_WEBP_MAGIC:
        return "image/webp"
    return ""


def resolve_mime_type(declared: str | None, filename: str | None, content: bytes) -> str:
    """Declared type first; generic or missing types fall back to the name, then the bytes."""
    mime = _clean_mime(declared)
    if mime not in GENERIC_MIME_TYPES:
        return mime

    ext = extension_from_filename(filename)
    guessed = EXTENSION_MIME_HINTS.get(ext) or _clean_mime(mimetypes.guess_type(f"file.{ext}")[0] if ext else "")
    if guessed:
        return guessed

    return sniff_mime_type(content) or mime
