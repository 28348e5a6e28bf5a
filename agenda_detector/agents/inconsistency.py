"""Inconsistency check agent."""

import logging
from typing import List

from agenda_detector.agents.base import UNTRUSTED_DATA_NOTICE, BaseAgent, to_json
from agenda_detector.config import settings
from agenda_detector.schemas.evidence import Contradiction, ContradictionList
from agenda_detector.schemas.subject import IngestedDocument, Subject

logger = logging.getLogger(__name__)


class InconsistencyAgent(BaseAgent):
    """Agent for finding contradictions against a subject's history."""

    def select_history(self, documents: List[IngestedDocument]) -> List[IngestedDocument]:
        """First HISTORY_LIMIT documents, unfiltered."""
        return documents[: settings.HISTORY_LIMIT]

    def build_prompt(self, subject: Subject, statement: str) -> str:
        """Build the inconsistency prompt."""
        history = self.select_history(subject.ingested_data)

        return f"""You are acting as a reasoning agent. You are analyzing a new statement from '{subject.name}'.
Find contradictions by comparing the new statement against their historical data from the local document store.

{UNTRUSTED_DATA_NOTICE}

New Statement: "{statement}"

Historical Data for {subject.name}:
```json
{to_json(history)}
```

Find up to {settings.MAX_FINDINGS} direct contradictions. For each, explain why it is a contradiction and cite the source document.
If no contradictions are found, return an empty list.

Return ONLY a JSON object with this exact format:
{{"contradictions": [{{"source_document": {{"id": "...", "source": "...", "date": "..."}}, "contradictory_statement": "...", "explanation": "..."}}]}}
"""

    async def execute(self, subject: Subject, statement: str) -> List[Contradiction]:
        """Return up to MAX_FINDINGS contradictions; empty when none are found."""
        output = await self._ask(
            self.build_prompt(subject, statement),
            ContradictionList,
            list_key="contradictions",
        )
        logger.info(f"Found {len(output.contradictions)} contradictions for {subject.name}")
        return output.contradictions
