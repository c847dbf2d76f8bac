"""LLM Base Classes and Shared Code"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass


SYSTEM_PROMPT = """You are a Git commit message expert. You analyze repository changes and write concise, professional commit messages that follow software development best practices.

Formats:
- Conventional (default): 'type(scope): description'
  Types: feat, fix, docs, style, refactor, perf, test, chore, ci, build, revert
  Example: 'feat(auth): add JWT token validation'
- Simple: a direct description without prefixes, e.g. 'Add JWT token validation'
- Detailed: a summary line, a blank line, then a short explanation

First line rules:
- Keep it under 50 characters (strict limit: 72)
- Use imperative mood ("add" not "added" or "adds")
- No period at the end

Choosing a type:
- New files, functions or endpoints usually mean 'feat'
- Bug fixes and error handling mean 'fix'
- Restructuring without behavior change means 'refactor'
- Test, documentation and config files usually mean 'test', 'docs' and 'chore' or 'ci'
- When changes are mixed, pick the most significant one
- Mark breaking changes with '!' after the type or a 'BREAKING CHANGE:' footer

Respond with ONLY the commit message. No explanations, no code blocks, no commentary. It must be usable as-is with 'git commit -m'."""

# Seconds. Hosted APIs answer quickly; local models on CPU need longer.
DEFAULT_TIMEOUT = 120
TIMEOUT_ENV_VAR = "GAIT_TIMEOUT"


def resolve_timeout(configured: float | None, default: float = DEFAULT_TIMEOUT) -> float:
    """Request timeout in seconds.

    Precedence: GAIT_TIMEOUT environment variable > configured value > default.
    """
    env_value = os.environ.get(TIMEOUT_ENV_VAR)
    if env_value:
        try:
            return float(env_value)
        except ValueError:
            raise LLMError(f"Invalid {TIMEOUT_ENV_VAR} value: {env_value!r} (expected seconds)")
    if configured:
        return float(configured)
    return float(default)


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail.

    ``provider`` names the backend that failed, for display.
    """

    def __init__(self, message: str, provider: str = ""):
        super().__init__(message)
        self.provider = provider


class LLMAuthError(LLMError):
    """Authentication failed (401/403 or rejected API key)."""


class LLMRateLimitError(LLMError):
    """Rate limited or out of quota (429)."""


class LLMResponseError(LLMError):
    """Unexpected response format from the provider."""


class LLMClient(ABC):
    """Abstract base for LLM clients. One request per generate() call."""

    @abstractmethod
    def generate(self, prompt: str) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    def close(self) -> None:
        """Release connections held by the client. Nothing to do by default."""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
