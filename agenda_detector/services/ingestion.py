"""Turning uploads and JSON payloads into ingested documents."""

import io
import logging
from datetime import date
from typing import Any, List

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from agenda_detector.exceptions import UnexpectedFormat
from agenda_detector.schemas.subject import IngestedDocument

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = (".txt", ".md", ".text")


def parse_document_payload(payload: Any, subject_name: str) -> List[IngestedDocument]:
    """
    Validate a list of document records for a subject.

    Missing ids are generated and missing statuses default to 'indexed'. The
    subject field always names the owning subject.

    Args:
        payload: Decoded JSON value
        subject_name: Name of the owning subject

    Returns:
        Validated documents, in payload order

    Raises:
        UnexpectedFormat: If payload is not a list
        pydantic.ValidationError: If an item is not document-shaped
    """
    if not isinstance(payload, list):
        raise UnexpectedFormat(
            f"Document payload must be an array, got {type(payload).__name__}."
        )

    documents = []
    for item in payload:
        if not isinstance(item, dict):
            raise UnexpectedFormat("Every document entry must be an object.")
        documents.append(IngestedDocument.model_validate({**item, "subject": subject_name}))

    return documents


def extract_text_from_pdf(data: bytes) -> str:
    """
    Extract text from every page of a PDF.

    Raises:
        ValueError: If the PDF cannot be read or holds no text
    """
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except PdfReadError as e:
        raise ValueError(f"Failed to parse PDF: {e}") from e

    text = "\n\n".join(p for p in pages if p.strip())
    if not text:
        raise ValueError("No text could be extracted from PDF")

    logger.info(f"Extracted {len(text)} characters from {len(pages)} pages")
    return text


def document_from_upload(
    filename: str,
    data: bytes,
    subject_name: str,
    doc_type: str = "other",
) -> IngestedDocument:
    """
    Build a document from an uploaded file.

    Args:
        filename: Original filename, used as the source
        data: File content
        subject_name: Name of the owning subject
        doc_type: DocumentType to tag the document with

    Returns:
        An indexed document dated today

    Raises:
        ValueError: On unsupported, undecodable or empty files
    """
    filename_lower = filename.lower()

    if filename_lower.endswith(".pdf"):
        content = extract_text_from_pdf(data)
    elif filename_lower.endswith(TEXT_EXTENSIONS):
        try:
            content = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValueError("File must be UTF-8 encoded text") from e
    else:
        raise ValueError(f"Unsupported file type: {filename}. Only PDF and text files are supported.")

    if not content.strip():
        raise ValueError(f"File {filename} contains no text")

    return IngestedDocument(
        subject=subject_name,
        type=doc_type,
        source=filename,
        date=date.today().isoformat(),
        content=content,
        status="indexed",
    )
