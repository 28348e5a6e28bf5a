"""Shared test doubles and canned model replies."""

import json
from typing import List, Union

from agenda_detector.schemas.api import LLMSettings
from agenda_detector.services.llm_client import LLMClient


class FakeLLMClient(LLMClient):
    """LLM client that replays scripted replies and records prompts."""

    def __init__(self, replies: List[Union[str, dict, list, Exception]] = None):
        super().__init__(LLMSettings(endpoint="http://llm.test/api/generate", model="test-model"))
        self.replies = list(replies or [])
        self.calls = []

    def queue(self, *replies):
        self.replies.extend(replies)

    async def generate(self, prompt: str, expect_json: bool = False) -> str:
        self.calls.append({"prompt": prompt, "expect_json": expect_json})
        if not self.replies:
            raise AssertionError("No scripted LLM reply left")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, (dict, list)):
            return json.dumps(reply)
        return reply


LINGUISTIC_REPLY = {
    "euphemisms": ["revenue enhancement"],
    "framing": "Presents a tax increase as a technical adjustment.",
    "plausibility": "Plausible but vague.",
}

CONTRADICTION_REPLY = {
    "contradictions": [
        {
            "source_document": {"id": "doc-1", "source": "speech.txt", "date": "2023-05-01"},
            "contradictory_statement": "I will never raise taxes.",
            "explanation": "The new statement endorses a tax increase.",
        }
    ]
}

MOTIVE_REPLY = {
    "motives": [
        {
            "source_document": {"id": "doc-2", "source": "fec.gov/filing", "date": "2023-01-10", "type": "donation"},
            "potential_motive": "Donor benefits from the policy.",
            "explanation": "Largest donor owns affected firms.",
        }
    ]
}

REPORT_MARKDOWN = "## Summary\nShort.\n\n## Detailed Findings\nSome.\n\n## Potential Agenda\nNone clear."
