"""Motive and financial analysis agent."""

import logging
from typing import List

from agenda_detector.agents.base import UNTRUSTED_DATA_NOTICE, BaseAgent, to_json
from agenda_detector.config import settings
from agenda_detector.schemas.evidence import Motive, MotiveList
from agenda_detector.schemas.subject import IngestedDocument, Subject

logger = logging.getLogger(__name__)

FINANCIAL_TYPES = ("donation", "article")


class MotiveAgent(BaseAgent):
    """Agent for flagging financial motives and conflicts of interest."""

    def select_history(self, documents: List[IngestedDocument]) -> List[IngestedDocument]:
        """Donations and articles only, then the first HISTORY_LIMIT, in original order."""
        financial = [d for d in documents if d.type in FINANCIAL_TYPES]
        return financial[: settings.HISTORY_LIMIT]

    def build_prompt(self, subject: Subject, statement: str) -> str:
        """Build the motive prompt."""
        history = self.select_history(subject.ingested_data)

        return f"""You are acting as a reasoning agent. You are analyzing a new statement from '{subject.name}'.
Identify potential financial motives or conflicts of interest by checking their historical data, especially donations and financially-related articles.

{UNTRUSTED_DATA_NOTICE}

New Statement: "{statement}"

Historical Data for {subject.name} (filtered for donations/finance):
```json
{to_json(history)}
```

Find up to {settings.MAX_FINDINGS} potential motives or conflicts. For each, explain the connection and cite the source.
If none are found, return an empty list.

Return ONLY a JSON object with this exact format:
{{"motives": [{{"source_document": {{"id": "...", "source": "...", "date": "...", "type": "donation or article"}}, "potential_motive": "...", "explanation": "..."}}]}}
"""

    async def execute(self, subject: Subject, statement: str) -> List[Motive]:
        """Return up to MAX_FINDINGS motives; empty when none are found."""
        output = await self._ask(
            self.build_prompt(subject, statement),
            MotiveList,
            list_key="motives",
        )
        logger.info(f"Found {len(output.motives)} potential motives for {subject.name}")
        return output.motives
