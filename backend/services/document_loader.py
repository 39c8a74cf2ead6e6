"""Accepted upload types and preparation of document bytes for Gemini."""

import io

from docx import Document

PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT = "text/plain"

ACCEPTED_MIME_TYPES = frozenset({PDF, DOCX, TEXT})


def normalize_mime_type(mime_type: str | None) -> str:
    """Drop parameters such as ``; charset=utf-8`` and lowercase."""
    if not mime_type:
        return ""
    return mime_type.split(";", 1)[0].strip().lower()


def is_supported(mime_type: str | None) -> bool:
    return normalize_mime_type(mime_type) in ACCEPTED_MIME_TYPES


def extract_text_docx(docx_bytes: bytes) -> str:
    """Extract all text from a DOCX file, paragraphs then table cells."""
    doc = Document(io.BytesIO(docx_bytes))
    lines = [p.text for p in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            lines.append(" | ".join(cell.text.strip() for cell in row.cells))
    return "\n".join(line for line in lines if line.strip()).strip()


def prepare_inline_document(content: bytes, mime_type: str) -> tuple[bytes, str]:
    """Return the bytes and MIME type to send inline to Gemini.

    Gemini reads PDF and plain text directly; DOCX is sent as its text.
    """
    mime = normalize_mime_type(mime_type)
    if mime == DOCX:
        return extract_text_docx(content).encode("utf-8"), TEXT
    return content, mime
