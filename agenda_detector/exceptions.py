"""Error taxonomy for the analysis service."""

from typing import Optional


class AgendaDetectorError(Exception):
    """Base class for all service errors."""


class LLMError(AgendaDetectorError):
    """Failure talking to the text-generation endpoint."""


class NotConfigured(LLMError):
    """Endpoint or model is missing."""

    def __init__(self, message: str = "LLM service not configured. Set an endpoint and model in settings."):
        super().__init__(message)


class LLMConnectionError(LLMError):
    """The endpoint could not be reached."""

    def __init__(self, endpoint: str, reason: str = ""):
        self.endpoint = endpoint
        message = (
            f"Could not connect to the LLM endpoint at {endpoint}. "
            "Please ensure the server is running and the endpoint is correct."
        )
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class EndpointError(LLMError):
    """The endpoint answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"LLM API error ({status_code}): {body}")


class ProtocolError(LLMError):
    """The endpoint answered, but not in the expected shape."""


class MalformedResponse(AgendaDetectorError):
    """Model output could not be decoded into the expected structure."""

    def __init__(self, message: str, raw_text: str):
        self.raw_text = raw_text
        super().__init__(message)


class UnexpectedFormat(AgendaDetectorError):
    """An ingestion payload did not parse to an array."""


class AnalysisError(AgendaDetectorError):
    """Single consolidated failure raised by the orchestrator."""

    def __init__(self, message: str, stage: Optional[str] = None):
        self.stage = stage
        super().__init__(message)


class SubjectNotFound(AgendaDetectorError):
    """No subject with the given id."""


class ReportNotFound(AgendaDetectorError):
    """No report with the given id."""


class DuplicateSubject(AgendaDetectorError):
    """A subject with the same name already exists."""
