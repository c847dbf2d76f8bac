"""Ollama LLM Client for Local Models"""

import http.client
import json
import logging
import socket
import urllib.error
import urllib.request

from gait.llm.base import LLMClient, LLMResponse, LLMError, LLMResponseError, SYSTEM_PROMPT, resolve_timeout

logger = logging.getLogger(__name__)


class OllamaClient(LLMClient):
    """Ollama client for local models. Requires: ollama serve"""

    DEFAULT_MODEL = "llama3.2:3b"
    DEFAULT_HOST = "http://localhost:11434"
    DEFAULT_TIMEOUT = 300  # 5 minutes for CPU inference

    def __init__(self, model: str | None = None, host: str | None = None, timeout: float | None = None):
        self.model = model or self.DEFAULT_MODEL
        self.host = (host or self.DEFAULT_HOST).rstrip('/')
        self.timeout = resolve_timeout(timeout, default=self.DEFAULT_TIMEOUT)

    @property
    def name(self) -> str:
        return f"Ollama ({self.model})"

    def _timeout_error(self) -> LLMError:
        return LLMError(
            f"Request timed out after {self.timeout:g}s. Try:\n"
            f"  - Pre-load the model: ollama run {self.model}\n"
            f"  - Increase timeout: export GAIT_TIMEOUT=600",
            provider=self.name,
        )

    def _call_api(self, prompt: str) -> dict:
        """Make a single non-streaming API call to Ollama."""
        url = f"{self.host}/api/generate"
        payload = {
            "model": self.model,
            "prompt": prompt,
            "system": SYSTEM_PROMPT,
            "stream": False,
            "keep_alive": "10m",
            "options": {
                "temperature": 0.4,
                "num_predict": 1000,
            }
        }

        data = json.dumps(payload).encode('utf-8')
        req = urllib.request.Request(url, data=data, headers={"Content-Type": "application/json"})

        with urllib.request.urlopen(req, timeout=self.timeout) as response:
            return json.loads(response.read().decode('utf-8'))

    def generate(self, prompt: str) -> LLMResponse:
        logger.debug("POST %s/api/generate model=%s prompt_chars=%d", self.host, self.model, len(prompt))
        try:
            result = self._call_api(prompt)
        except urllib.error.HTTPError as e:
            if e.code == 404:
                raise LLMError(f"Model '{self.model}' not found. Run: ollama pull {self.model}", provider=self.name)
            raise LLMError(f"Ollama error ({e.code}): {e.reason}", provider=self.name)
        except urllib.error.URLError as e:
            if isinstance(e.reason, (socket.timeout, TimeoutError)):
                raise self._timeout_error()
            if "Connection refused" in str(e):
                raise LLMError(f"Ollama not running at {self.host}. Start with: ollama serve", provider=self.name)
            raise LLMError(f"Ollama request failed: {e}", provider=self.name)
        except (socket.timeout, TimeoutError):
            raise self._timeout_error()
        except json.JSONDecodeError:
            raise LLMResponseError("Invalid response from Ollama. Try a different model or simpler change.", provider=self.name)
        except http.client.HTTPException as e:
            raise LLMError(f"Incomplete response from Ollama: {e}. The model may have run out of memory.", provider=self.name)
        except OSError as e:
            raise LLMError(f"Connection to Ollama lost: {e}. Check that 'ollama serve' is still running.", provider=self.name)

        if not isinstance(result, dict) or "response" not in result:
            raise LLMResponseError(f"Unexpected response format from Ollama: {result!r}", provider=self.name)

        return LLMResponse(
            content=result["response"].strip(),
            model=self.model,
            tokens_used=result.get("eval_count", 0),
        )
