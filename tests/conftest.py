"""Shared test doubles. Nothing here touches the network."""

import pytest

from weblook.schemas.research import ResearchReport
from weblook.services.research import ResearchResult


class FakeResearchAgent:
    """In-memory research agent that records its lifecycle calls."""

    def __init__(
        self,
        context: str = "",
        report: ResearchReport | None = None,
        fail_on: str | None = None,
    ) -> None:
        self.context = context
        self.report = report or ResearchReport(total_visited=3, successful=2, failed=1)
        self.fail_on = fail_on
        self.launch_calls = 0
        self.close_calls = 0
        self.investigated: list[list[str]] = []

    async def launch(self) -> None:
        self.launch_calls += 1
        if self.fail_on == "launch":
            raise RuntimeError("browser failed to start")

    async def investigate(self, queries: list[str]) -> ResearchResult:
        self.investigated.append(list(queries))
        if self.fail_on == "investigate":
            raise RuntimeError("navigation timeout")
        return ResearchResult(context=self.context, report=self.report)

    async def close(self) -> None:
        self.close_calls += 1


@pytest.fixture
def fake_agent():
    """Return the FakeResearchAgent class so tests can build one per scenario."""
    return FakeResearchAgent
