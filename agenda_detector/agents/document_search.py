"""Automated document search agent."""

import logging
from typing import List

from pydantic import ValidationError

from agenda_detector.agents.base import BaseAgent
from agenda_detector.exceptions import MalformedResponse, UnexpectedFormat
from agenda_detector.schemas.subject import IngestedDocument
from agenda_detector.services.ingestion import parse_document_payload
from agenda_detector.services.parsing import parse_llm_json

logger = logging.getLogger(__name__)


class DocumentSearchAgent(BaseAgent):
    """Agent that asks the model for public records about a subject."""

    def build_prompt(self, subject_name: str) -> str:
        """Build the automated search prompt."""
        return f"""You are a research agent. Find 3-5 recent, real-world public records, news articles, or official statements related to the political figure "{subject_name}".
For each item, provide a source URL, a publication date, a summary of the content, and classify its type.

Valid types are: 'article', 'speech', 'vote', 'donation', 'leak', 'tweet', 'other'.

Return ONLY a JSON array with this exact format:
[{{"subject": "{subject_name}", "type": "...", "source": "URL", "date": "YYYY-MM-DD", "content": "summary of the document"}}]
"""

    async def execute(self, subject_name: str) -> List[IngestedDocument]:
        """
        Search for documents about a subject.

        Results are not deduplicated against documents already ingested.

        Raises:
            UnexpectedFormat: If the reply is not an array
            MalformedResponse: If the reply is not JSON or an item is invalid
        """
        response = await self.llm.generate(self.build_prompt(subject_name), expect_json=True)
        results = parse_llm_json(response)

        if not isinstance(results, list):
            raise UnexpectedFormat("Automated search returned data in an unexpected format.")

        # Ids and statuses are always assigned locally
        results = [
            {k: v for k, v in item.items() if k not in ("id", "status")} if isinstance(item, dict) else item
            for item in results
        ]

        try:
            documents = parse_document_payload(results, subject_name)
        except ValidationError as e:
            raise MalformedResponse(
                f"Automated search returned {e.error_count()} invalid document field(s).",
                raw_text=response,
            ) from e

        logger.info(f"Automated search found {len(documents)} documents for {subject_name}")
        return documents
