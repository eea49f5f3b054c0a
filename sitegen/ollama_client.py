# sitegen/ollama_client.py
import logging
from typing import Any, Dict, Optional

import httpx

from .config import Settings
from .errors import BackendError

logger = logging.getLogger(__name__)


class OllamaClient:
    """Single-shot, non-streaming client for Ollama's `/api/generate`."""

    def __init__(
        self,
        base_url: str,
        model: str,
        temperature: float,
        http_client: httpx.Client,
    ):
        self.url = f"{base_url.rstrip('/')}/api/generate"
        self.model = model
        self.temperature = temperature
        self.http_client = http_client

    @classmethod
    def from_settings(cls, settings: Settings, http_client: httpx.Client) -> "OllamaClient":
        return cls(
            base_url=settings.ollama_base_url,
            model=settings.model,
            temperature=settings.temperature,
            http_client=http_client,
        )

    def build_body(self, prompt: str, system: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "system": system,
            "prompt": prompt,
            "format": "json",
            "stream": False,
            "options": {"temperature": self.temperature},
        }

    def generate(self, prompt: str, system: str) -> str:
        """Sends one generation request and returns the model's raw text."""
        logger.info("Sending request to Ollama with model: %s", self.model)
        try:
            response = self.http_client.post(self.url, json=self.build_body(prompt, system))
        except httpx.HTTPError as e:
            raise BackendError(f"Ollama request failed: {e}")

        if not response.is_success:
            raise BackendError(
                f"Ollama API error: {response.status_code} {response.reason_phrase} - {response.text}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise BackendError(f"Ollama returned a non-JSON body: {e}", status_code=response.status_code)

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str) or not text:
            raise BackendError('Ollama response is missing the "response" field.')

        logger.info("Received response from Ollama")
        return text
