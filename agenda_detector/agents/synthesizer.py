"""Report synthesizer agent."""

import logging

from agenda_detector.agents.base import BaseAgent, to_json
from agenda_detector.schemas.evidence import Evidence

logger = logging.getLogger(__name__)

REPORT_HEADINGS = ("## Summary", "## Detailed Findings", "## Potential Agenda")


class ReportSynthesizer(BaseAgent):
    """Agent for writing the final Markdown report."""

    def build_prompt(self, subject_name: str, statement: str, evidence: Evidence) -> str:
        """Build the synthesis prompt with every evidence section embedded."""
        sections = [
            ("Linguistic Analysis", evidence.linguistic_analysis),
            ("Inconsistency Checks", evidence.inconsistency_checks),
            ("Motive Analysis", evidence.motive_checks),
            ("Web Search Results", evidence.web_searches),
            ("Historical Documents (from Vector Search)", evidence.vector_searches),
        ]
        evidence_str = "\n".join(
            f"*{title}:*\n```json\n{to_json(value)}\n```" for title, value in sections
        )

        return f"""You are the lead analyst. Synthesize the collected evidence into a final report in Markdown format.
Identify any conflicts, financial incentives, or hidden agendas. Be neutral and cite the evidence.

**Subject:**
{subject_name}

**Analyzed Statement:**
"{statement}"

**Collected Evidence:**
{evidence_str}

**Your Task:**
Write a comprehensive, objective report based ONLY on the provided information.
Structure it with headings: {", ".join(REPORT_HEADINGS)}.
"""

    async def execute(self, subject_name: str, statement: str, evidence: Evidence) -> str:
        """Return the raw Markdown text."""
        prompt = self.build_prompt(subject_name, statement, evidence)
        report = await self.llm.generate(prompt, expect_json=False)
        logger.info(f"Synthesized report for {subject_name} ({len(report)} chars)")
        return report
