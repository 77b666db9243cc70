"""Text extraction helpers for uploaded resume files."""

from __future__ import annotations

from io import BytesIO
from typing import List

import docx
from flask import current_app
from pypdf import PdfReader

MAX_STORED_TEXT_LENGTH = 20_000

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TXT_MIME_TYPE = "text/plain"


def make_text_excerpt(text: str, limit: int = 1200) -> str:
    """Normalize raw text and clamp it to a preview-friendly length."""
    if not text:
        return ""
    cleaned = " ".join(text.split())
    return cleaned[:limit]


def extract_pdf_text(raw_bytes: bytes) -> str:
    """Extract text from a PDF file while guarding against parser errors."""
    try:
        pages = list(PdfReader(BytesIO(raw_bytes)).pages)
    except Exception:
        current_app.logger.warning("Unable to initialize PdfReader for uploaded file", exc_info=True)
        return ""

    collected: List[str] = []
    for page in pages:
        try:
            page_text = page.extract_text() or ""
        except Exception:
            current_app.logger.warning("Failed to extract text from a PDF page", exc_info=True)
            page_text = ""

        if page_text:
            collected.append(page_text)

    combined = "\n".join(collected).strip()
    return combined[:MAX_STORED_TEXT_LENGTH]


def extract_docx_text(raw_bytes: bytes) -> str:
    """Extract paragraph text from a Word document."""
    try:
        document = docx.Document(BytesIO(raw_bytes))
    except Exception:
        current_app.logger.warning("Unable to open uploaded DOCX file", exc_info=True)
        return ""

    paragraphs = [paragraph.text for paragraph in document.paragraphs if paragraph.text.strip()]
    return "\n".join(paragraphs).strip()[:MAX_STORED_TEXT_LENGTH]


def extract_text_from_upload(raw_bytes: bytes, filename: str, mimetype: str) -> str:
    """Best-effort plain text for an uploaded resume; empty when nothing is readable."""
    lowered = (filename or "").lower()
    mime = (mimetype or "").lower()

    if mime == PDF_MIME_TYPE or lowered.endswith(".pdf"):
        return extract_pdf_text(raw_bytes)

    if mime == DOCX_MIME_TYPE or lowered.endswith(".docx"):
        return extract_docx_text(raw_bytes)

    if mime == TXT_MIME_TYPE or lowered.endswith(".txt"):
        return raw_bytes.decode("utf-8", errors="ignore").strip()[:MAX_STORED_TEXT_LENGTH]

    return ""
