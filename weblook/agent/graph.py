"""
LangGraph pipeline: decompose question → research (web agent) → synthesize answer.

Strictly sequential, one pass, no loops. Any stage failure aborts the run; there
is no partial-answer fallback. The research agent is acquired and released
inside the research node, so it never outlives that node.
"""

import logging
from dataclasses import dataclass, field
from typing import TypedDict

from langgraph.graph import END, StateGraph

from weblook.core.errors import UsageError
from weblook.schemas.research import ResearchReport
from weblook.services.decomposer import decompose_question
from weblook.services.research import AgentFactory, log_report, open_research_agent
from weblook.services.synthesizer import synthesize_answer
from weblook.services.web_agent import WebAgent

logger = logging.getLogger(__name__)


class PipelineState(TypedDict):
    question: str
    queries: list[str]
    context: str
    report: ResearchReport
    answer: str


@dataclass
class PipelineResult:
    """What one run produced: the answer plus the queries and report behind it."""

    answer: str
    queries: list[str] = field(default_factory=list)
    report: ResearchReport = field(default_factory=ResearchReport)


async def _decompose_node(state: PipelineState) -> dict:
    """Node 1: question -> search queries (LLM, JSON mode)."""
    logger.info("--- [STEP 1/3] DECOMPOSING QUESTION ---")
    logger.info('Analyzing the question: "%s"', state["question"])
    queries = await decompose_question(state["question"])
    logger.info("Generated search queries: %s", ", ".join(queries))
    return {"queries": queries}


def _make_research_node(agent_factory: AgentFactory):
    async def _research_node(state: PipelineState) -> dict:
        """Node 2: queries -> aggregated context. Agent is always closed on exit."""
        logger.info("--- [STEP 2/3] DEPLOYING AUTONOMOUS WEB AGENT ---")
        async with open_research_agent(agent_factory) as agent:
            result = await agent.investigate(state["queries"])
        log_report(result.report)
        return {"context": result.context, "report": result.report}

    return _research_node


async def _synthesize_node(state: PipelineState) -> dict:
    """Node 3: question + context -> final answer (LLM, plain text)."""
    logger.info("--- [STEP 3/3] SYNTHESIZING FINAL ANSWER ---")
    answer = await synthesize_answer(state["question"], state.get("context") or "")
    logger.info("Final answer generated.")
    return {"answer": answer}


def build_graph(agent_factory: AgentFactory = WebAgent):
    """
    Build and compile the pipeline graph.
    decompose_question → research → synthesize_answer → END.
    """
    graph = StateGraph(PipelineState)

    graph.add_node("decompose_question", _decompose_node)
    graph.add_node("research", _make_research_node(agent_factory))
    graph.add_node("synthesize_answer", _synthesize_node)

    graph.set_entry_point("decompose_question")
    graph.add_edge("decompose_question", "research")
    graph.add_edge("research", "synthesize_answer")
    graph.add_edge("synthesize_answer", END)

    return graph.compile()


async def run_pipeline(question: str, agent_factory: AgentFactory | None = None) -> PipelineResult:
    """
    Run one question through the pipeline. Raises UsageError on an empty question
    (before any service is contacted) and lets every stage failure propagate.
    """
    q = (question or "").strip()
    if not q:
        raise UsageError("question is required")
    logger.info("[run_pipeline] START question=%r", q)
    initial: PipelineState = {
        "question": q,
        "queries": [],
        "context": "",
        "report": ResearchReport(),
        "answer": "",
    }
    graph = build_graph(agent_factory or WebAgent)
    final = await graph.ainvoke(initial)
    result = PipelineResult(
        answer=final.get("answer") or "",
        queries=list(final.get("queries") or []),
        report=final.get("report") or ResearchReport(),
    )
    logger.info(
        "[run_pipeline] END queries=%d visited=%d answer_len=%d",
        len(result.queries), result.report.total_visited, len(result.answer),
    )
    return result
