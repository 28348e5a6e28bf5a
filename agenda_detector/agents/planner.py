"""Planner agent for the plan-driven pipeline."""

import logging
from typing import List

from agenda_detector.agents.base import BaseAgent
from agenda_detector.schemas.evidence import AnalysisPlan, PlanStep

logger = logging.getLogger(__name__)


def order_plan_steps(steps: List[PlanStep]) -> List[PlanStep]:
    """
    Move every linguistic_analysis step to the front.

    Stable partition: relative order inside both groups is preserved.

    Args:
        steps: Plan steps as returned by the model

    Returns:
        Reordered copy of the steps
    """
    linguistic = [s for s in steps if s.tool == "linguistic_analysis"]
    others = [s for s in steps if s.tool != "linguistic_analysis"]
    return linguistic + others


class PlannerAgent(BaseAgent):
    """Agent for decomposing a statement into tool steps."""

    def build_prompt(self, statement: str) -> str:
        """Build the planning prompt."""
        return f"""You are an investigative analyst. Deconstruct the following statement into verifiable claims.
Create a step-by-step plan to analyze its agenda. Your plan must identify which tools to use: [web_search, local_vector_search, linguistic_analysis].
For 'linguistic_analysis', the query should be the full statement. For other tools, create a concise search query.

Statement: "{statement}"

Return ONLY a JSON object with this exact format:
{{"steps": [{{"tool": "web_search | local_vector_search | linguistic_analysis", "query": "..."}}]}}
"""

    async def execute(self, statement: str) -> AnalysisPlan:
        """Generate a plan in the order the model returned it."""
        plan = await self._ask(self.build_prompt(statement), AnalysisPlan, list_key="steps")
        logger.info(f"Plan has {len(plan.steps)} steps")
        return plan
