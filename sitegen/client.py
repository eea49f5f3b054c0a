# sitegen/client.py
import logging
import os
from typing import Any, Dict, Optional

import httpx
from dotenv import load_dotenv

from .errors import RelayRequestError

logger = logging.getLogger(__name__)

FALLBACK_ERROR_MESSAGE = "API request failed"


class RelayClient:
    """
    Caller-side helper for the relay's generation endpoints.

    Non-success responses raise `RelayRequestError` with the server's `error`
    message; transport errors are logged and re-raised untouched. Nothing is
    retried.
    """

    def __init__(self, base_url: str, http_client: Optional[httpx.Client] = None):
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.Client(timeout=None)

    @classmethod
    def from_env(cls) -> "RelayClient":
        load_dotenv()
        base_url = os.getenv("RELAY_SERVER_URL")
        if not base_url:
            raise ValueError("RELAY_SERVER_URL is not set")
        return cls(base_url)

    def close(self) -> None:
        if self._owns_client:
            self.http_client.close()

    def __enter__(self) -> "RelayClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _send_request(self, endpoint: str, body: Dict[str, Any]) -> Any:
        try:
            response = self.http_client.post(f"{self.base_url}/{endpoint}", json=body)
            if not response.is_success:
                raise RelayRequestError(_error_message(response), status_code=response.status_code)
            return response.json()
        except (httpx.HTTPError, RelayRequestError, ValueError) as e:
            logger.error("Error in %s: %s", endpoint, e)
            raise

    def generate_code(self, prompt: str) -> Any:
        return self._send_request("generate", {"prompt": prompt})

    def follow_up(self, prompt: str, code: Any) -> Any:
        return self._send_request("followup", {"prompt": prompt, "code": code})

    def retry_with_json(self, original_prompt: str, bad_json: str) -> Any:
        return self._send_request("retry", {"originalPrompt": original_prompt, "badJson": bad_json})


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return FALLBACK_ERROR_MESSAGE
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return FALLBACK_ERROR_MESSAGE
