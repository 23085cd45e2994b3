"""Plain-text extraction for uploaded lesson documents."""

from __future__ import annotations

import io
import logging
import mimetypes
from typing import Final

import docx
import fitz
from fastapi.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

TEXT_PLAIN: Final[str] = "text/plain"
PDF: Final[str] = "application/pdf"
DOCX: Final[str] = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)
SUPPORTED_CONTENT_TYPES: Final[frozenset[str]] = frozenset({TEXT_PLAIN, PDF, DOCX})


class DocumentExtractionError(RuntimeError):
    """Raised when a document cannot be read as text."""


def resolve_content_type(content_type: str | None, filename: str | None) -> str:
    """Fall back to the filename when the client sent no usable content type."""

    if content_type and content_type != "application/octet-stream":
        # Drop parameters such as "; charset=utf-8".
        return content_type.split(";", 1)[0].strip().lower()
    if filename:
        guessed_type, _ = mimetypes.guess_type(filename)
        if guessed_type:
            return guessed_type
    return content_type or "application/octet-stream"


def _extract_pdf(data: bytes) -> str:
    try:
        with fitz.open(stream=data, filetype="pdf") as pdf:
            pages = [page.get_text("text") for page in pdf]
    except Exception as exc:
        raise DocumentExtractionError(f"Failed to parse PDF: {exc}") from exc
    return "\n".join(page.strip() for page in pages if page.strip())


def _extract_docx(data: bytes) -> str:
    try:
        document = docx.Document(io.BytesIO(data))
    except Exception as exc:
        raise DocumentExtractionError(f"Failed to parse DOCX: {exc}") from exc
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


async def extract_text(data: bytes, content_type: str) -> str:
    """Return the document's text; parsing runs in the threadpool."""

    if content_type == TEXT_PLAIN:
        return data.decode("utf-8", errors="replace")
    if content_type == PDF:
        text = await run_in_threadpool(_extract_pdf, data)
    elif content_type == DOCX:
        text = await run_in_threadpool(_extract_docx, data)
    else:
        raise DocumentExtractionError("Unsupported file type")

    logger.info("Extracted %d characters from %s upload", len(text), content_type)
    return text.strip()


__all__ = [
    "DocumentExtractionError",
    "SUPPORTED_CONTENT_TYPES",
    "extract_text",
    "resolve_content_type",
]
