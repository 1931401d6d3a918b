from __future__ import annotations

import asyncio
import logging
from io import BytesIO

from pypdf import PageObject, PdfReader

from resume_review.core.errors import ExtractionError

logger = logging.getLogger(__name__)


def _open_reader(content: bytes) -> PdfReader:
    reader = PdfReader(BytesIO(content))
    if reader.is_encrypted and not reader.decrypt(""):
        raise ExtractionError(code="pdf_encrypted")
    return reader


def _extract_page_text(page: PageObject) -> str:
    items: list[str] = []

    def visitor(text, _cm, _tm, _font_dict, _font_size) -> None:
        chunk = (text or "").strip()
        if chunk:
            items.append(chunk)

    page.extract_text(visitor_text=visitor)
    return " ".join(items)


async def extract_text_from_pdf(content: bytes) -> str:
    """Return the document text, one line per page.

    Pages are extracted strictly in order; each page runs on a worker thread.
    """
    try:
        reader = await asyncio.to_thread(_open_reader, content)
        page_texts: list[str] = []
        for page in reader.pages:
            page_texts.append(await asyncio.to_thread(_extract_page_text, page))
    except ExtractionError:
        raise
    except Exception as exc:
        logger.warning("pdf_extraction_failed size=%s: %s", len(content), exc)
        raise ExtractionError() from exc

    return "\n".join(page_texts).strip()
