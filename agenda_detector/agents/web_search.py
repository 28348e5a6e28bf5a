"""Simulated web search agent."""

import logging
from typing import List

from agenda_detector.agents.base import BaseAgent
from agenda_detector.schemas.evidence import WebSearchList, WebSearchResult

logger = logging.getLogger(__name__)


class WebSearchAgent(BaseAgent):
    """Agent that asks the model for search-engine style results."""

    RESULT_COUNT = 3

    def build_prompt(self, query: str) -> str:
        """Build the web search prompt."""
        return f"""Generate {self.RESULT_COUNT} plausible web search results for the query: "{query}".
The results should look like real search engine snippets.

Return ONLY a JSON object with this exact format:
{{"results": [{{"title": "...", "url": "...", "snippet": "..."}}]}}
"""

    async def execute(self, query: str) -> List[WebSearchResult]:
        """Run one search query."""
        output = await self._ask(self.build_prompt(query), WebSearchList, list_key="results")
        return output.results
