"""
Pipeline errors.

Every fatal condition in a run is one of these. Only the LLM invoker retries;
everything else propagates to the single top-level handler (CLI or API).
"""


class WeblookError(Exception):
    """Base class for all pipeline errors. Carries a user-facing message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UsageError(WeblookError):
    """Raised when the question is empty. Reported to the caller; no service is contacted."""


class LLMError(WeblookError):
    """Raised when the LLM service did not succeed within the retry budget."""

    def __init__(self, attempts: int, reason: str = "") -> None:
        self.attempts = attempts
        self.reason = reason
        super().__init__(f"Failed to communicate with the LLM service after {attempts} attempts.")


class DecompositionError(WeblookError):
    """Raised when the model output is not valid JSON or lacks a usable 'queries' list."""


class RetrievalError(WeblookError):
    """Raised when the research collaborator fails to launch or investigate."""


class SynthesisError(WeblookError):
    """Raised when the final answer could not be generated."""
