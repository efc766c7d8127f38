"""
LLM invoker: one prompt in, generated text out, against the local Ollama chat API.

Each attempt is a single POST. Failed attempts (non-2xx status, transport error,
malformed body) are retried up to max_attempts with a fixed delay between them.
When the budget is exhausted, LLMError is raised and nothing partial is returned.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

import httpx
import tenacity

from weblook.core.config import (
    LLM_API_TIMEOUT,
    LLM_MAX_ATTEMPTS,
    LLM_MODEL_NAME,
    LLM_RETRY_DELAY,
    SERVICE_URL,
)
from weblook.core.errors import LLMError

logger = logging.getLogger(__name__)


class LLMResponseError(Exception):
    """A single attempt got an unusable response (bad status or malformed body)."""


@dataclass(frozen=True)
class RetryConfig:
    """Retry budget for the invoker. Tests pass retry_delay=0."""

    max_attempts: int = LLM_MAX_ATTEMPTS
    retry_delay: float = LLM_RETRY_DELAY


@dataclass
class OllamaClient:
    """Async client for the Ollama /api/chat endpoint with bounded fixed-delay retry."""

    model: str = LLM_MODEL_NAME
    url: str = SERVICE_URL
    retry: RetryConfig = field(default_factory=RetryConfig)
    timeout: float = LLM_API_TIMEOUT
    transport: httpx.AsyncBaseTransport | None = None
    sleep: Callable[[float], Awaitable[Any]] | None = None

    def build_payload(self, prompt: str, json_mode: bool = False) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "stream": False,
        }
        if json_mode:
            payload["format"] = "json"
        return payload

    async def invoke(self, prompt: str, json_mode: bool = False) -> str:
        """
        Send the prompt and return message.content from the first successful attempt.
        Raises LLMError carrying the attempt count when every attempt fails.
        """
        if not prompt or not prompt.strip():
            raise ValueError("prompt must be non-empty")
        payload = self.build_payload(prompt, json_mode)
        logger.info(
            "[llm:invoke] IN  prompt_len=%d json_mode=%s model=%s", len(prompt), json_mode, self.model
        )
        logger.debug("[llm:invoke] prompt_sample=%r", prompt[:500])

        retryer = tenacity.AsyncRetrying(
            stop=tenacity.stop_after_attempt(self.retry.max_attempts),
            wait=tenacity.wait_fixed(self.retry.retry_delay),
            retry=tenacity.retry_if_exception_type((httpx.HTTPError, LLMResponseError)),
            after=self._log_failed_attempt,
            sleep=self.sleep or asyncio.sleep,
        )
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                content = await retryer(self._attempt, client, payload)
        except tenacity.RetryError as e:
            last = e.last_attempt.exception()
            raise LLMError(self.retry.max_attempts, reason=str(last)) from last
        logger.info("[llm:invoke] OUT response_len=%d", len(content))
        logger.debug("[llm:invoke] OUT response_full=%r", content)
        return content

    async def _attempt(self, client: httpx.AsyncClient, payload: dict[str, Any]) -> str:
        try:
            response = await client.post(self.url, json=payload)
        except (httpx.InvalidURL, ValueError) as e:
            raise LLMResponseError(f"LLM API request could not be built for {self.url!r}: {e}") from e
        if not response.is_success:
            raise LLMResponseError(f"LLM API request failed with status {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise LLMResponseError(f"LLM API returned non-JSON body: {e}") from e
        message = data.get("message") if isinstance(data, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise LLMResponseError("LLM API response is missing message.content")
        return content

    def _log_failed_attempt(self, retry_state: tenacity.RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        attempt = retry_state.attempt_number
        total = self.retry.max_attempts
        logger.error("[LLM Attempt %d/%d] Error: %s", attempt, total, exc)
        if attempt < total:
            logger.info("Retrying in %.1f seconds...", self.retry.retry_delay)


async def run_llm(prompt: str, json_mode: bool = False) -> str:
    """Invoke the configured LLM. Used by the decomposer and synthesizer."""
    return await OllamaClient().invoke(prompt, json_mode=json_mode)
