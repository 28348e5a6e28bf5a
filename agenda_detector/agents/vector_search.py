"""Simulated local vector search agent."""

import logging
from typing import List

from agenda_detector.agents.base import BaseAgent
from agenda_detector.schemas.evidence import VectorSearchList, VectorSearchResult

logger = logging.getLogger(__name__)


class VectorSearchAgent(BaseAgent):
    """Agent that asks the model for document chunks matching a query."""

    RESULT_COUNT = 2

    def build_prompt(self, query: str) -> str:
        """Build the vector search prompt."""
        return f"""Generate {self.RESULT_COUNT} plausible document chunks that would be retrieved from a local vector database for the query: "{query}".
The documents could be past statements, voting records, or news articles. Keep them concise.

Return ONLY a JSON object with this exact format:
{{"results": [{{"source": "e.g. Voting Record 2023", "content": "..."}}]}}
"""

    async def execute(self, query: str) -> List[VectorSearchResult]:
        """Run one similarity query."""
        output = await self._ask(self.build_prompt(query), VectorSearchList, list_key="results")
        return output.results
