# sitegen/conftest.py
import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from .config import Settings


class OllamaStub:
    """Records generate calls and answers each with `handler(body)`."""

    def __init__(self, handler: Callable[[Dict[str, Any]], httpx.Response]):
        self.handler = handler
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.calls.append({"url": str(request.url), "body": body})
        return self.handler(body)


def ollama_reply(text: Any) -> Callable[[Dict[str, Any]], httpx.Response]:
    return lambda body: httpx.Response(200, json={"model": body["model"], "response": text, "done": True})


@pytest.fixture
def settings() -> Settings:
    return Settings(ollama_base_url="http://ollama.test", model="test-model", temperature=0.2)


@pytest.fixture
def make_http_client():
    clients = []

    def _make(stub: OllamaStub) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(stub))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()
