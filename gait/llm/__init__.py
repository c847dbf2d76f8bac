"""LLM Client Package"""

from gait.config import Provider, OpenAIProvider, OllamaProvider, ClaudeProvider
from gait.llm.base import (
    LLMClient,
    LLMResponse,
    LLMError,
    LLMAuthError,
    LLMRateLimitError,
    LLMResponseError,
    SYSTEM_PROMPT,
    DEFAULT_TIMEOUT,
    resolve_timeout,
)
from gait.llm.claude import ClaudeClient
from gait.llm.ollama import OllamaClient
from gait.llm.openai import OpenAIClient


def get_client(provider: Provider | None, timeout: float | None = None) -> LLMClient:
    """Build the client for a configured provider record."""
    if provider is None:
        raise LLMError(
            "No LLM provider configured.\n\n"
            "Option 1 - Use Ollama (free, local):\n"
            "  1. Install: https://ollama.ai\n"
            "  2. Start: ollama serve\n"
            "  3. Add: gait config add-provider --name local --type OLLAMA --model llama3.2:3b\n\n"
            "Option 2 - Use OpenAI:\n"
            "  gait config add-provider --name openai --type OPENAI --model gpt-4o-mini --api-key sk-..."
        )

    if isinstance(provider, OpenAIProvider):
        return OpenAIClient(api_key=provider.api_key, model=provider.model, base_url=provider.url, timeout=timeout)
    if isinstance(provider, OllamaProvider):
        return OllamaClient(model=provider.model, host=provider.url, timeout=timeout)
    if isinstance(provider, ClaudeProvider):
        return ClaudeClient(api_key=provider.api_key, model=provider.model, timeout=timeout)

    raise LLMError(f"Unknown provider type: {type(provider).__name__}")


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "LLMAuthError",
    "LLMRateLimitError",
    "LLMResponseError",
    "ClaudeClient",
    "OllamaClient",
    "OpenAIClient",
    "get_client",
    "SYSTEM_PROMPT",
    "DEFAULT_TIMEOUT",
    "resolve_timeout",
]
