"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


# LLM service (local Ollama chat endpoint)
LLM_MODEL_NAME: str = os.getenv("LLM_MODEL_NAME", "llama3:8b").strip() or "llama3:8b"
SERVICE_URL: str = (
    os.getenv("SERVICE_URL", "http://127.0.0.1:11434/api/chat").strip()
    or "http://127.0.0.1:11434/api/chat"
)

# LLM retry policy: fixed delay, no backoff growth
LLM_MAX_ATTEMPTS: int = _int_env("LLM_MAX_ATTEMPTS", 3)
LLM_RETRY_DELAY: float = _float_env("LLM_RETRY_DELAY", 3.0)

# API timeouts (seconds)
LLM_API_TIMEOUT: float = _float_env("LLM_API_TIMEOUT", 120.0)
AGENT_FETCH_TIMEOUT: float = _float_env("AGENT_FETCH_TIMEOUT", 15.0)

# Question decomposition bounds
DECOMPOSE_MIN_QUERIES: int = _int_env("DECOMPOSE_MIN_QUERIES", 3)
DECOMPOSE_MAX_QUERIES: int = _int_env("DECOMPOSE_MAX_QUERIES", 4)

# Web agent (tuning these affects context size and quality)
AGENT_RESULTS_PER_QUERY: int = _int_env("AGENT_RESULTS_PER_QUERY", 3)
AGENT_MAX_CONCURRENCY: int = _int_env("AGENT_MAX_CONCURRENCY", 4)
AGENT_MIN_CONTENT_CHARS: int = _int_env("AGENT_MIN_CONTENT_CHARS", 200)
AGENT_MAX_CHARS_PER_SOURCE: int = _int_env("AGENT_MAX_CHARS_PER_SOURCE", 4000)
AGENT_MAX_CONTEXT_CHARS: int = _int_env("AGENT_MAX_CONTEXT_CHARS", 24000)
AGENT_USER_AGENT: str = (
    os.getenv("AGENT_USER_AGENT", "").strip()
    or "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) WeblookAI/4.0"
)

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
