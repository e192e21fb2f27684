from __future__ import annotations

import json

import httpx
import pytest

from openai_api import APIError, Embedding, ErrorKind, ModelReference
from openai_api.config.defaults import OPENAI_EMBEDDINGS_URL

from .utils import error_body

EMBED_RESPONSE = {
    "object": "list",
    "data": [{"object": "embedding", "index": 0, "embedding": [0.1, -0.2, 0.3]}],
    "model": "text-embedding-ada-002",
    "usage": {"prompt_tokens": 2, "total_tokens": 2},
}


def _capture(seen):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append({"url": str(request.url), "payload": json.loads(request.read())})
        return httpx.Response(200, json=EMBED_RESPONSE)

    return handler


def test_embed_injects_model_identifier(mock_http):
    seen = []
    mock_http.install(_capture(seen))
    params = {"input": "hello", "model": "caller-choice"}
    result = Embedding(ModelReference(name="ada", api_key="k", model="text-embedding-3-small")).embed(params)

    assert result == EMBED_RESPONSE
    assert seen[0]["payload"] == {"input": "hello", "model": "text-embedding-3-small"}
    assert seen[0]["url"] == OPENAI_EMBEDDINGS_URL
    # caller's mapping untouched
    assert params["model"] == "caller-choice"
    assert mock_http.purposes == ["embedding"]


def test_embed_without_identifier_keeps_caller_model(mock_http):
    seen = []
    mock_http.install(_capture(seen))
    url = "https://example-resource.openai.azure.com/openai/deployments/ada/embeddings?api-version=2024-02-01"
    Embedding(ModelReference(name="azure-ada", api_key="k", api_url=url)).embed({"input": ["a", "b"]})
    assert seen[0]["payload"] == {"input": ["a", "b"]}
    assert seen[0]["url"] == url


def test_embed_classifies_errors(mock_http):
    mock_http.install(lambda request: httpx.Response(401, json=error_body("invalid_api_key")))
    with pytest.raises(APIError) as info:
        Embedding(ModelReference(name="ada", api_key="bad")).embed({"input": "x"})
    assert info.value.kind is ErrorKind.AUTHENTICATION


def test_embed_logs_events(mock_http, log_events):
    mock_http.install(lambda request: httpx.Response(200, json=EMBED_RESPONSE))
    Embedding(ModelReference(name="ada", api_key="k")).embed({"input": "x"})
    assert [e["event"] for e in log_events.events] == ["embedding.start", "embedding.end"]
