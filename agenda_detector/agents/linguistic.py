"""Linguistic analysis agent."""

import logging

from agenda_detector.agents.base import BaseAgent
from agenda_detector.schemas.evidence import LinguisticAnalysis

logger = logging.getLogger(__name__)


class LinguisticAgent(BaseAgent):
    """Agent for euphemism, framing and plausibility analysis."""

    def build_prompt(self, statement: str) -> str:
        """Build the linguistic analysis prompt. No historical data is used."""
        return f"""You are acting as a specialized local language model. Perform a linguistic analysis of the provided text.
Analyze it for euphemisms, framing, emotional language and overall plausibility. Be objective.

Text: "{statement}"

Return ONLY a JSON object with this exact format:
{{"euphemisms": ["..."], "framing": "...", "plausibility": "brief assessment of the statement's plausibility on its own", "emotional_language": ["..."]}}
"""

    async def execute(self, statement: str) -> LinguisticAnalysis:
        """Analyze a statement on its own."""
        return await self._ask(self.build_prompt(statement), LinguisticAnalysis)
