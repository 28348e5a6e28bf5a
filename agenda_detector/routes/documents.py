"""Document ingestion routes."""

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, File, Form, HTTPException, UploadFile
from pydantic import ValidationError

from agenda_detector.agents.document_search import DocumentSearchAgent
from agenda_detector.dependencies import get_llm_client, get_store
from agenda_detector.exceptions import (
    LLMError,
    MalformedResponse,
    NotConfigured,
    SubjectNotFound,
    UnexpectedFormat,
)
from agenda_detector.schemas.api import DocumentsAdded
from agenda_detector.schemas.subject import DocumentType, IngestedDocument, Subject
from agenda_detector.services.ingestion import document_from_upload, parse_document_payload
from agenda_detector.services.llm_client import LLMClient
from agenda_detector.services.session_store import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/subjects/{subject_id}/documents", tags=["documents"])


def _get_subject(store: SessionStore, subject_id: str) -> Subject:
    try:
        return store.get_subject(subject_id)
    except SubjectNotFound:
        raise HTTPException(status_code=404, detail="Subject not found")


def _added(subject_id: str, documents: List[IngestedDocument]) -> DocumentsAdded:
    return DocumentsAdded(
        subject_id=subject_id,
        added=len(documents),
        document_ids=[d.id for d in documents],
    )


@router.get("", response_model=List[IngestedDocument])
async def list_documents(
    subject_id: str,
    store: SessionStore = Depends(get_store),
):
    """List a subject's documents in ingestion order."""
    return _get_subject(store, subject_id).ingested_data


@router.post("", response_model=DocumentsAdded, status_code=201)
async def add_documents(
    subject_id: str,
    payload: Any = Body(...),
    store: SessionStore = Depends(get_store),
):
    """Add an array of document records to a subject."""
    subject = _get_subject(store, subject_id)

    try:
        documents = parse_document_payload(payload, subject.name)
    except UnexpectedFormat as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    store.add_documents(subject_id, documents)
    return _added(subject_id, documents)


@router.post("/upload", response_model=DocumentsAdded, status_code=201)
async def upload_documents(
    subject_id: str,
    files: List[UploadFile] = File(...),
    doc_type: Optional[DocumentType] = Form(None),
    store: SessionStore = Depends(get_store),
):
    """
    Upload PDF or text files as documents.

    Files are processed in order; the first unreadable file rejects the whole
    batch.
    """
    subject = _get_subject(store, subject_id)

    documents = []
    for file in files:
        data = await file.read()
        filename = file.filename or "upload"
        try:
            documents.append(
                document_from_upload(filename, data, subject.name, doc_type=doc_type or "other")
            )
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        logger.info(f"Read {filename} for subject {subject_id}")

    store.add_documents(subject_id, documents)
    return _added(subject_id, documents)


@router.post("/search", response_model=DocumentsAdded, status_code=201)
async def search_documents(
    subject_id: str,
    store: SessionStore = Depends(get_store),
    llm_client: LLMClient = Depends(get_llm_client),
):
    """Run the automated search agent and add whatever it finds."""
    subject = _get_subject(store, subject_id)

    try:
        documents = await DocumentSearchAgent(llm_client).execute(subject.name)
    except NotConfigured as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (UnexpectedFormat, MalformedResponse, LLMError) as e:
        logger.error(f"Automated search for {subject.name} failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    store.add_documents(subject_id, documents)
    return _added(subject_id, documents)
