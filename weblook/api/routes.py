"""
API route aggregator: register endpoints and delegate to handlers. No pipeline logic here.
"""

import logging

from fastapi import APIRouter

from weblook.api.handlers import handle_ask
from weblook.schemas.ask import AskRequest, AskResponse

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "WeblookAI backend running"}


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Ask ---

@router.post(
    "/ask",
    response_model=AskResponse,
    tags=["ask"],
    summary="Research a question on the web and answer it",
    description="Decompose → web research → synthesize. 400/422 on empty input, 502 on decomposition or retrieval failure, 503 when the LLM service is unreachable.",
)
async def post_ask(body: AskRequest) -> AskResponse:
    logger.info("[api:post_ask] IN  question=%r", body.question)
    response = await handle_ask(body.question)
    logger.info("[api:post_ask] OUT queries=%d answer_len=%d", len(response.queries), len(response.answer))
    return response
