"""
Research collaborator contract and scoped acquisition.

Responsibility: Define the launch/investigate/close lifecycle the pipeline depends on,
and guarantee close() runs exactly once per acquisition, whatever happens inside.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Callable, Protocol

from weblook.core.errors import RetrievalError, WeblookError
from weblook.schemas.research import ResearchReport

logger = logging.getLogger(__name__)


@dataclass
class ResearchResult:
    """Aggregated context text (possibly empty) plus the visit report."""

    context: str = ""
    report: ResearchReport = field(default_factory=ResearchReport)


class ResearchAgent(Protocol):
    async def launch(self) -> None: ...

    async def investigate(self, queries: list[str]) -> ResearchResult: ...

    async def close(self) -> None: ...


AgentFactory = Callable[[], ResearchAgent]


@asynccontextmanager
async def open_research_agent(factory: AgentFactory) -> AsyncIterator[ResearchAgent]:
    """
    Create and launch a research agent; always close it on exit.
    Failures from the agent that are not already pipeline errors surface as RetrievalError.
    """
    agent = factory()
    try:
        try:
            await agent.launch()
        except WeblookError:
            raise
        except Exception as e:
            raise RetrievalError(f"Research agent failed to launch: {e}") from e
        logger.info("[research:open_research_agent] agent launched: %s", type(agent).__name__)
        try:
            yield agent
        except WeblookError:
            raise
        except Exception as e:
            raise RetrievalError(f"Research agent failed: {e}") from e
    finally:
        await agent.close()
        logger.info("[research:open_research_agent] agent closed")


def log_report(report: ResearchReport) -> None:
    logger.info("--- Agent Work Report ---")
    logger.info("- Total unique sites visited: %d", report.total_visited)
    logger.info("- Successfully extracted content from: %d sources", report.successful)
    logger.info("- Failed to extract from: %d sources", report.failed)
