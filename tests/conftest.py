"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from agenda_detector.main import create_app
from agenda_detector.schemas.subject import IngestedDocument, Subject
from agenda_detector.services.session_store import SessionStore
from helpers import FakeLLMClient


@pytest.fixture
def fake_llm():
    """Scripted LLM client with no replies queued."""
    return FakeLLMClient()


@pytest.fixture
def make_document():
    """Factory for documents belonging to 'Politician X'."""

    def _make(doc_id: str, doc_type: str = "speech", subject: str = "Politician X") -> IngestedDocument:
        return IngestedDocument(
            id=doc_id,
            subject=subject,
            type=doc_type,
            source=f"{doc_id}.txt",
            date="2024-01-01",
            content=f"Content of {doc_id}",
        )

    return _make


@pytest.fixture
def subject(make_document):
    """Subject with a mix of document types."""
    return Subject(
        id="subj-01",
        name="Politician X",
        ingested_data=[
            make_document("doc-1", "speech"),
            make_document("doc-2", "donation"),
            make_document("doc-3", "article"),
        ],
    )


@pytest.fixture
def store():
    """Store seeded with the default subject."""
    return SessionStore(default_subject_name="Politician X")


@pytest.fixture
def client(fake_llm, store):
    """Test client over an app wired to the fake LLM and a fresh store."""
    app = create_app(llm_client=fake_llm, store=store)
    with TestClient(app) as test_client:
        yield test_client
