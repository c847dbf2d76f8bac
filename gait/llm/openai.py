"""OpenAI (and OpenAI-compatible) LLM Client

Talks to the chat completions endpoint over httpx. Reads the API key from
the provider record or OPENAI_API_KEY, the base URL from OPENAI_BASE_URL.
"""

import logging
import os

import httpx

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

_AUTH_ERROR_STATUS_CODES = {401, 403}


class OpenAIClient(LLMClient):
    """OpenAI chat completions client. Requires an API key."""

    DEFAULT_MODEL = "gpt-4o-mini"
    DEFAULT_BASE_URL = "https://api.openai.com/v1"
    MAX_TOKENS = 1000
    TEMPERATURE = 0.4

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self.model = model or self.DEFAULT_MODEL
        self.base_url = (
            base_url or os.environ.get("OPENAI_BASE_URL") or self.DEFAULT_BASE_URL
        ).rstrip("/")
        self.timeout = resolve_timeout(timeout)

        if not self.api_key:
            raise LLMAuthError(
                "No API key found. Add one with 'gait config add-provider' or set:\n"
                "  export OPENAI_API_KEY='your-key-here'",
                provider=self.name,
            )

        self._client = httpx.Client(
            timeout=self.timeout,
            transport=transport,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.api_key}",
            },
        )

    @property
    def name(self) -> str:
        return f"OpenAI ({self.model})"

    def _post(self, payload: dict) -> httpx.Response:
        try:
            return self._client.post(f"{self.base_url}/chat/completions", json=payload)
        except httpx.TimeoutException:
            raise LLMError(
                f"Request timed out after {self.timeout:g}s. Increase it with GAIT_TIMEOUT=<seconds>",
                provider=self.name,
            )
        except httpx.HTTPError as e:
            raise LLMError(f"OpenAI request failed: {e}", provider=self.name)

    def generate(self, prompt: str) -> LLMResponse:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.TEMPERATURE,
            "max_tokens": self.MAX_TOKENS,
        }
        logger.debug("POST %s/chat/completions model=%s prompt_chars=%d", self.base_url, self.model, len(prompt))

        response = self._post(payload)

        if response.status_code in _AUTH_ERROR_STATUS_CODES:
            raise LLMAuthError(
                f"Invalid API key (HTTP {response.status_code}). Check your OpenAI API key.",
                provider=self.name,
            )
        if response.status_code == 429:
            raise LLMRateLimitError(
                f"Rate limit or quota exceeded (HTTP 429): {response.text}",
                provider=self.name,
            )
        if response.is_error:
            raise LLMError(f"OpenAI API error ({response.status_code}): {response.text}", provider=self.name)

        try:
            data = response.json()
            content = data["choices"][0]["message"].get("content") or ""
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise LLMResponseError(f"Unexpected response format from OpenAI: {e}", provider=self.name)

        usage = data.get("usage") or {}
        return LLMResponse(
            content=content.strip(),
            model=data.get("model", self.model),
            tokens_used=usage.get("total_tokens", 0),
        )

    def close(self) -> None:
        self._client.close()
