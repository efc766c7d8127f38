"""
Answer synthesis: final answer grounded only in the retrieved context.

An empty context never reaches the LLM; the fixed NO_CONTEXT_ANSWER is returned instead.
"""

import logging

from weblook.agent.llm import run_llm
from weblook.agent.prompts import build_synthesize_prompt
from weblook.core.errors import LLMError, SynthesisError

logger = logging.getLogger(__name__)

NO_CONTEXT_ANSWER = (
    "I couldn't find enough information online to answer your question. "
    "The web agent was unable to extract relevant content from the visited sites."
)


async def synthesize_answer(question: str, context: str | None) -> str:
    """Answer the question from context only. The LLM text is returned unmodified."""
    if not context or not context.strip():
        logger.info("[synthesizer:synthesize_answer] empty context; skipping LLM")
        return NO_CONTEXT_ANSWER
    logger.info(
        "[synthesizer:synthesize_answer] IN  question=%r context_len=%d", question, len(context)
    )
    prompt = build_synthesize_prompt(question, context)
    try:
        answer = await run_llm(prompt)
    except LLMError as e:
        raise SynthesisError(e.message) from e
    logger.info("[synthesizer:synthesize_answer] OUT answer_len=%d", len(answer))
    return answer
