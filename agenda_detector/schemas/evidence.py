"""Evidence and plan schemas produced by the agents."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict


class AgentOutput(BaseModel):
    """Base for decoded model output. Unknown keys are dropped, missing ones fail."""

    model_config = ConfigDict(extra="ignore")


# Linguistic Agent
class LinguisticAnalysis(AgentOutput):
    """Framing analysis of a single statement."""

    euphemisms: List[str]
    framing: str
    plausibility: Optional[str] = None
    emotional_language: List[str] = []


# Cross-check Agents
class SourceCitation(AgentOutput):
    """Weak reference to an ingested document (by id and source string)."""

    id: str
    source: str
    date: str
    type: Optional[str] = None


class MotiveCitation(SourceCitation):
    """Citation restricted to financial document types."""

    type: Optional[Literal["donation", "article"]] = None


class Contradiction(AgentOutput):
    """A past record that contradicts the new statement."""

    source_document: SourceCitation
    contradictory_statement: str
    explanation: str


class Motive(AgentOutput):
    """A potential financial motive or conflict of interest."""

    source_document: MotiveCitation
    potential_motive: str
    explanation: str


class ContradictionList(AgentOutput):
    """Output from InconsistencyAgent."""

    contradictions: List[Contradiction]


class MotiveList(AgentOutput):
    """Output from MotiveAgent."""

    motives: List[Motive]


# Search Agents
class WebSearchResult(AgentOutput):
    """Search engine style snippet."""

    title: str
    url: str
    snippet: str


class VectorSearchResult(AgentOutput):
    """Document chunk as returned by a similarity search."""

    source: str
    content: str


class WebSearchList(AgentOutput):
    """Output from WebSearchAgent."""

    results: List[WebSearchResult]


class VectorSearchList(AgentOutput):
    """Output from VectorSearchAgent."""

    results: List[VectorSearchResult]


# Planner Agent
Tool = Literal["linguistic_analysis", "web_search", "local_vector_search"]


class PlanStep(AgentOutput):
    """One tool invocation in an analysis plan."""

    tool: Tool
    query: str


class AnalysisPlan(AgentOutput):
    """Output from PlannerAgent."""

    steps: List[PlanStep]


# Orchestrator
class Evidence(BaseModel):
    """Everything the collectors produced for one report."""

    linguistic_analysis: Optional[LinguisticAnalysis] = None
    inconsistency_checks: List[Contradiction] = []
    motive_checks: List[Motive] = []
    web_searches: List[WebSearchResult] = []
    vector_searches: List[VectorSearchResult] = []


class AnalysisResult(BaseModel):
    """Return value of a successful analysis run."""

    markdown_report: str
    evidence: Evidence
