# sitegen/test_main.py
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from .conftest import OllamaStub, ollama_reply
from .main import create_app

GOOD_BUNDLE = {"html": "<h1>Hi</h1>", "css": "h1{color:red}", "js": "console.log(1)"}


@pytest.fixture
def relay(settings, make_http_client):
    def _relay(handler):
        stub = OllamaStub(handler)
        client = TestClient(create_app(settings, http_client=make_http_client(stub)))
        return client, stub

    return _relay


def test_generate_returns_bundle(relay):
    client, stub = relay(ollama_reply("Here you go:\n" + json.dumps(GOOD_BUNDLE)))
    response = client.post("/generate", json={"prompt": "a hello page"})

    assert response.status_code == 200
    assert response.json() == GOOD_BUNDLE
    assert stub.calls[0]["body"]["prompt"] == "a hello page"


@pytest.mark.parametrize("body", [{}, {"prompt": ""}, {"prompt": "   \n\t"}, {"prompt": None}])
def test_generate_requires_prompt(relay, body):
    client, stub = relay(ollama_reply(json.dumps(GOOD_BUNDLE)))
    response = client.post("/generate", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "prompt is required"}
    assert stub.calls == []


def test_non_json_body_is_a_400(relay):
    client, _ = relay(ollama_reply(json.dumps(GOOD_BUNDLE)))
    response = client.post("/generate", content="prompt=hi", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert "error" in response.json()


def test_wrong_field_type_is_a_400(relay):
    client, _ = relay(ollama_reply(json.dumps(GOOD_BUNDLE)))
    response = client.post("/retry", json={"originalPrompt": "x", "badJson": {"not": "a string"}})

    assert response.status_code == 400
    assert response.json()["error"].startswith("badJson")


@pytest.mark.parametrize(
    "path, body",
    [
        ("/followup", {"prompt": "add a footer"}),
        ("/followup", {"code": {"html": "x", "css": "", "js": ""}}),
        ("/followup", {"prompt": "", "code": {"html": "x"}}),
        ("/retry", {"originalPrompt": "a page"}),
        ("/retry", {"badJson": "{oops"}),
        ("/retry", {"originalPrompt": "a page", "badJson": ""}),
    ],
)
def test_followup_and_retry_require_both_fields(relay, path, body):
    client, stub = relay(ollama_reply(json.dumps(GOOD_BUNDLE)))
    response = client.post(path, json=body)

    assert response.status_code == 400
    assert "error" in response.json()
    assert stub.calls == []


def test_followup_forwards_composite_prompt(relay):
    client, stub = relay(ollama_reply(json.dumps(GOOD_BUNDLE)))
    response = client.post(
        "/followup",
        json={"prompt": "add a footer", "code": {"html": "<h1>x</h1>", "css": "", "js": ""}},
    )

    assert response.status_code == 200
    assert response.json() == GOOD_BUNDLE
    sent = stub.calls[0]["body"]
    assert sent["prompt"] == (
        "The user wants to modify the existing application. "
        'Current Code: {"html":"<h1>x</h1>","css":"","js":""}. '
        'User\'s Change Request: "add a footer". '
        "Generate the complete, updated code."
    )
    assert sent["format"] == "json"
    assert sent["stream"] is False


def test_retry_forwards_snippet_and_original_prompt(relay):
    client, stub = relay(ollama_reply(json.dumps(GOOD_BUNDLE)))
    response = client.post("/retry", json={"originalPrompt": "a blog", "badJson": "{" + "y" * 300})

    assert response.status_code == 200
    sent = stub.calls[0]["body"]["prompt"]
    assert ('"{' + "y" * 199 + '..."') in sent
    assert 'The original request was: "a blog"' in sent


def test_backend_failure_is_a_generation_error(relay):
    client, _ = relay(lambda body: httpx.Response(503, text="loading model"))
    response = client.post("/generate", json={"prompt": "a hello page"})

    assert response.status_code == 200
    assert response.json() == {
        "error": "Failed to generate a valid and complete application.",
        "errorType": "GENERATION_ERROR",
        "rawResponse": "",
    }


def test_unparsable_output_is_a_generation_error_with_raw_snippet(relay):
    raw = "Sorry, I can only describe it: " + "z" * 2000
    client, _ = relay(ollama_reply(raw))
    response = client.post("/generate", json={"prompt": "a hello page"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["errorType"] == "GENERATION_ERROR"
    assert payload["rawResponse"] == raw[:1000]


def test_empty_field_is_a_generation_error(relay):
    raw = 'Sure! ```json\n{"html":"<p>hi</p>","css":"p{color:red}","js":""}\n```'
    client, _ = relay(ollama_reply(raw))
    response = client.post("/generate", json={"prompt": "a hello page"})

    assert response.status_code == 200
    assert response.json()["errorType"] == "GENERATION_ERROR"
    assert response.json()["rawResponse"] == raw


def test_oversized_body_is_rejected(settings, make_http_client):
    stub = OllamaStub(ollama_reply(json.dumps(GOOD_BUNDLE)))
    small = settings.model_copy(update={"max_body_bytes": 64})
    client = TestClient(create_app(small, http_client=make_http_client(stub)))
    response = client.post("/generate", json={"prompt": "p" * 200})

    assert response.status_code == 413
    assert "error" in response.json()
    assert stub.calls == []


def test_health(relay):
    client, _ = relay(ollama_reply(json.dumps(GOOD_BUNDLE)))
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "model": "test-model"}


def test_deeply_nested_output_keeps_raw_snippet(relay):
    raw = '{"a":' + "[" * 100000 + "]" * 100000 + "}"
    client, _ = relay(ollama_reply(raw))
    response = client.post("/generate", json={"prompt": "a hello page"})

    assert response.status_code == 200
    assert response.json()["errorType"] == "GENERATION_ERROR"
    assert response.json()["rawResponse"] == raw[:1000]


@pytest.mark.parametrize("code", [False, 0, 0.0])
def test_followup_rejects_falsy_code(relay, code):
    client, stub = relay(ollama_reply(json.dumps(GOOD_BUNDLE)))
    response = client.post("/followup", json={"prompt": "add a footer", "code": code})

    assert response.status_code == 400
    assert response.json() == {"error": "A prompt and code are required."}
    assert stub.calls == []
