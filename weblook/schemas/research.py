"""Schemas for the research collaborator's work report."""

from pydantic import BaseModel, Field


class ResearchReport(BaseModel):
    """Visit accounting for one investigation. Observational only; nothing downstream reads it."""

    total_visited: int = Field(0, ge=0, description="Unique sites the agent tried to read.")
    successful: int = Field(0, ge=0, description="Sites content was extracted from.")
    failed: int = Field(0, ge=0, description="Sites that could not be fetched or had no usable text.")
