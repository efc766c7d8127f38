"""Schemas for the ask endpoint."""

from pydantic import BaseModel, Field

from weblook.schemas.research import ResearchReport


class AskRequest(BaseModel):
    """Request body for POST /ask."""

    question: str = Field(..., min_length=1, description="Natural-language question to research and answer.")


class AskResponse(BaseModel):
    """Response for POST /ask."""

    answer: str = Field(..., description="Final answer, or the fixed fallback message when no context was found.")
    queries: list[str] = Field(default_factory=list, description="Search queries the question was decomposed into.")
    report: ResearchReport = Field(default_factory=ResearchReport, description="Web agent visit accounting.")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "answer": "The capital of France is Paris.",
                    "queries": [
                        "What is the capital of France?",
                        "France capital city history",
                        "Facts about Paris France",
                    ],
                    "report": {"total_visited": 6, "successful": 4, "failed": 2},
                }
            ]
        }
    }
