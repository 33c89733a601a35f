"""Client for OpenAI-compatible chat completion APIs."""

import logging

from reqanalyst.config import settings
from reqanalyst.services.shared import HTTPClient, HTTPClientError

logger = logging.getLogger(__name__)


class LLMClientError(Exception):
    """Raised when the model API call fails or returns nothing usable."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class LLMClient(HTTPClient):
    """Minimal chat-completions client."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4-turbo",
        timeout: float = 60.0,
    ):
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            headers={"Authorization": f"Bearer {api_key}"},
        )
        self.api_key = api_key
        self.model = model

    @classmethod
    def from_settings(cls) -> "LLMClient":
        return cls(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            model=settings.openai_model,
            timeout=settings.llm_timeout_seconds,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def chat(self, system_prompt: str, user_prompt: str, temperature: float = 0.7) -> str:
        """Run a single system+user exchange and return the reply text."""
        body = {
            "model": self.model,
            "temperature": temperature,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        try:
            data = self.post_json("/chat/completions", json=body)
        except HTTPClientError as e:
            raise LLMClientError(str(e), status_code=e.status_code) from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMClientError("Malformed completion response") from e

        if not content or not content.strip():
            raise LLMClientError("Empty completion")
        return content
