"""
Question decomposition: one user question -> 3-4 plain natural-language search queries.

Responsibility: Prompt the LLM in JSON mode, parse {"queries": [...]} strictly,
and bound the result. No retry here; the invoker already retried transport failures.
"""

import json
import logging
import re
from typing import Any

from weblook.agent.llm import run_llm
from weblook.agent.prompts import build_decompose_prompt
from weblook.core.config import DECOMPOSE_MAX_QUERIES, DECOMPOSE_MIN_QUERIES
from weblook.core.errors import DecompositionError, LLMError

logger = logging.getLogger(__name__)

# A single fenced block around the whole reply, optionally tagged "json".
_FENCE_RE = re.compile(r"^\s*```(?:json)?[ \t]*\n?(.*?)\n?```\s*$", re.DOTALL | re.IGNORECASE)

_OPERATOR_RE = re.compile(
    r"\b(?:site|filetype|inurl|intitle|intext|allintitle|allinurl|allintext):\S*",
    re.IGNORECASE,
)


def strip_code_fence(text: str) -> str:
    """Remove one surrounding ```json ... ``` fence. Anything else is returned unchanged."""
    match = _FENCE_RE.match(text or "")
    if match:
        return match.group(1).strip()
    return (text or "").strip()


def parse_queries(raw: str) -> list[Any]:
    """Strict JSON parse of the model reply. Raises DecompositionError on any shape mismatch."""
    cleaned = strip_code_fence(raw)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise DecompositionError(f"Model did not return valid JSON: {e.msg}") from e
    if not isinstance(data, dict):
        raise DecompositionError("Model JSON is not an object with a 'queries' key.")
    queries = data.get("queries")
    if not isinstance(queries, list):
        raise DecompositionError("Model JSON lacks a 'queries' array.")
    return queries


def normalize_queries(
    items: list[Any],
    min_queries: int = DECOMPOSE_MIN_QUERIES,
    max_queries: int = DECOMPOSE_MAX_QUERIES,
) -> list[str]:
    """
    Keep non-empty strings, drop search operators, collapse whitespace, dedupe
    case-insensitively, then clamp to max_queries. Fewer than min_queries is an error.
    """
    out: list[str] = []
    seen: set[str] = set()
    for item in items:
        if not isinstance(item, str):
            continue
        q = " ".join(_OPERATOR_RE.sub(" ", item).split())
        if not q or q.lower() in seen:
            continue
        seen.add(q.lower())
        out.append(q)
    if len(out) > max_queries:
        logger.info("[decomposer:normalize] clamping %d queries to %d", len(out), max_queries)
        out = out[:max_queries]
    if len(out) < min_queries:
        raise DecompositionError(
            f"Model returned {len(out)} usable search queries; at least {min_queries} are required."
        )
    return out


async def decompose_question(question: str) -> list[str]:
    """Turn the user question into a bounded list of distinct search queries."""
    logger.info("[decomposer:decompose_question] IN  question=%r", question)
    prompt = build_decompose_prompt(question)
    try:
        raw = await run_llm(prompt, json_mode=True)
    except LLMError as e:
        raise DecompositionError(e.message) from e
    logger.debug("[decomposer:decompose_question] llm_raw=%r", raw)
    queries = normalize_queries(parse_queries(raw))
    logger.info("[decomposer:decompose_question] OUT queries=%s", queries)
    return queries
