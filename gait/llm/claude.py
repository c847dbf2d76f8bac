"""Claude (Anthropic) LLM Client"""

import logging
import os

from gait.llm.base import (
    LLMClient,
    LLMResponse,
    LLMError,
    LLMAuthError,
    LLMRateLimitError,
    LLMResponseError,
    SYSTEM_PROMPT,
    resolve_timeout,
)

logger = logging.getLogger(__name__)


class ClaudeClient(LLMClient):
    """Claude API client. Needs an API key from the provider record or ANTHROPIC_API_KEY."""

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    MAX_TOKENS = 1000
    TEMPERATURE = 0.4

    def __init__(self, api_key: str | None = None, model: str | None = None, timeout: float | None = None):
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.model = model or self.DEFAULT_MODEL
        self.timeout = resolve_timeout(timeout)

        if not self.api_key:
            raise LLMAuthError(
                "No API key found. Add one with 'gait config add-provider' or set:\n"
                "  export ANTHROPIC_API_KEY='your-key-here'",
                provider=self.name,
            )

        try:
            from anthropic import Anthropic
        except ImportError:
            raise LLMError(
                "Anthropic SDK not installed. Run:\n"
                "  pip install anthropic",
                provider=self.name,
            )
        self._client = Anthropic(api_key=self.api_key, timeout=self.timeout, max_retries=0)

    @property
    def name(self) -> str:
        return f"Claude ({self.model})"

    def generate(self, prompt: str) -> LLMResponse:
        from anthropic import APIError, APITimeoutError, AuthenticationError, RateLimitError

        logger.debug("messages.create model=%s prompt_chars=%d", self.model, len(prompt))
        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.MAX_TOKENS,
                temperature=self.TEMPERATURE,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}]
            )
        except AuthenticationError:
            raise LLMAuthError("Invalid API key. Check your ANTHROPIC_API_KEY.", provider=self.name)
        except RateLimitError as e:
            raise LLMRateLimitError(f"Rate limit exceeded: {e.message}", provider=self.name)
        except APITimeoutError:
            raise LLMError(f"Request timed out after {self.timeout:g}s", provider=self.name)
        except APIError as e:
            raise LLMError(f"Claude API error: {e.message}", provider=self.name)

        content = next((block.text for block in response.content if block.type == "text"), None)
        if content is None:
            raise LLMResponseError("Claude returned no text content", provider=self.name)

        return LLMResponse(
            content=content.strip(),
            model=self.model,
            tokens_used=response.usage.input_tokens + response.usage.output_tokens
        )

    def close(self) -> None:
        self._client.close()
