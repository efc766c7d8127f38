"""
API handlers: call the pipeline and map pipeline errors to HTTP.

Responsibility: Bridge HTTP types and the pipeline. Lives in the API layer so
services and the graph stay free of FastAPI/HTTP types.
"""

import logging

from fastapi import HTTPException

from weblook.agent.graph import run_pipeline
from weblook.core.errors import (
    DecompositionError,
    LLMError,
    RetrievalError,
    SynthesisError,
    UsageError,
)
from weblook.schemas.ask import AskResponse

logger = logging.getLogger(__name__)


async def handle_ask(question: str) -> AskResponse:
    """
    Run the pipeline for one question. 400 on empty input, 502 when decomposition
    or retrieval failed, 503 when the LLM service could not be reached.
    """
    try:
        result = await run_pipeline(question)
    except UsageError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    except (DecompositionError, RetrievalError) as e:
        logger.error("[api:handle_ask] %s: %s", type(e).__name__, e.message)
        raise HTTPException(status_code=502, detail=e.message) from e
    except (LLMError, SynthesisError) as e:
        logger.error("[api:handle_ask] %s: %s", type(e).__name__, e.message)
        raise HTTPException(status_code=503, detail=e.message) from e
    return AskResponse(answer=result.answer, queries=result.queries, report=result.report)
