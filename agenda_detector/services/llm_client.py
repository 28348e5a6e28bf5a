"""Client for an Ollama-style text-generation endpoint."""

import hashlib
import json
import logging
from typing import Any, Dict, Optional

import httpx

from agenda_detector.config import settings
from agenda_detector.exceptions import (
    EndpointError,
    LLMConnectionError,
    NotConfigured,
    ProtocolError,
)
from agenda_detector.schemas.api import LLMSettings

logger = logging.getLogger(__name__)


class LLMClient:
    """Client for a single configurable generate endpoint.

    Every call is one non-streamed POST. Failures are mapped onto the service
    error taxonomy and never retried.
    """

    def __init__(
        self,
        llm_settings: Optional[LLMSettings] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the LLM client."""
        self.settings = llm_settings or LLMSettings(
            endpoint=settings.LLM_ENDPOINT,
            model=settings.LLM_MODEL,
        )
        self.timeout = timeout if timeout is not None else settings.LLM_TIMEOUT
        self._transport = transport

    def configure(self, llm_settings: LLMSettings) -> None:
        """Replace the endpoint and model used by subsequent calls."""
        self.settings = llm_settings
        logger.info(f"LLM configured: endpoint={llm_settings.endpoint}, model={llm_settings.model}")

    def _hash_text(self, text: str) -> str:
        """Hash text using SHA256."""
        return hashlib.sha256(text.encode()).hexdigest()

    def _build_payload(self, prompt: str, expect_json: bool) -> Dict[str, Any]:
        """Build the request body."""
        payload = {
            "model": self.settings.model,
            "prompt": prompt,
            "stream": False,
        }
        if expect_json:
            payload["format"] = "json"
        return payload

    async def generate(self, prompt: str, expect_json: bool = False) -> str:
        """
        Send a prompt and return the generated text.

        Args:
            prompt: Non-empty prompt text
            expect_json: Ask the endpoint for JSON mode

        Returns:
            Trimmed text from the response's ``response`` field

        Raises:
            NotConfigured: If endpoint or model is empty
            LLMConnectionError: If the endpoint is unreachable
            EndpointError: On a non-2xx status
            ProtocolError: If the body lacks a string ``response`` field
        """
        endpoint = self.settings.endpoint
        if not endpoint or not self.settings.model:
            raise NotConfigured()
        if not prompt:
            raise ValueError("Prompt must not be empty")

        payload = self._build_payload(prompt, expect_json)

        # Log request hash
        request_hash = self._hash_text(json.dumps(payload, sort_keys=True))
        logger.info(f"LLM request to {self.settings.model}, hash: {request_hash[:16]}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(endpoint, json=payload)
        except httpx.TransportError as e:
            logger.error(f"LLM endpoint {endpoint} unreachable: {e}")
            raise LLMConnectionError(endpoint, str(e)) from e

        if not response.is_success:
            logger.warning(f"LLM endpoint returned {response.status_code}")
            raise EndpointError(response.status_code, response.text)

        try:
            result = response.json()
        except ValueError as e:
            raise ProtocolError("LLM endpoint returned a non-JSON body.") from e

        content = result.get("response") if isinstance(result, dict) else None
        if not isinstance(content, str):
            raise ProtocolError("Unexpected response structure from LLM API: missing 'response' text.")

        # Log response hash
        response_hash = self._hash_text(content)
        logger.info(f"LLM response hash: {response_hash[:16]}")

        return content.strip()
