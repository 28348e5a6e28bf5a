"""FastAPI application entry point."""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agenda_detector import __version__
from agenda_detector.config import settings
from agenda_detector.orchestrator import AnalysisOrchestrator
from agenda_detector.routes import documents, reports, subjects
from agenda_detector.routes import settings as settings_routes
from agenda_detector.services.llm_client import LLMClient
from agenda_detector.services.session_store import SessionStore

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def create_app(llm_client: Optional[LLMClient] = None, store: Optional[SessionStore] = None) -> FastAPI:
    """Build the application with its own session state."""
    app = FastAPI(
        title="Agenda Detector",
        description="LLM-backed statement analysis: framing, contradictions, motives and a synthesized report",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(settings_routes.router)
    app.include_router(subjects.router)
    app.include_router(documents.router)
    app.include_router(reports.router)

    # Application-owned state
    app.state.llm_client = llm_client or LLMClient()
    app.state.store = store or SessionStore(default_subject_name=settings.DEFAULT_SUBJECT_NAME)
    app.state.orchestrator = AnalysisOrchestrator(app.state.llm_client)

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/")
    def root():
        """Root endpoint."""
        return {
            "name": "Agenda Detector",
            "version": __version__,
            "status": "running",
            "llm_model": app.state.llm_client.settings.model,
        }

    logger.info("Application created")
    return app


app = create_app()


def main():
    """Entry point for running the server."""
    import uvicorn

    uvicorn.run("agenda_detector.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
