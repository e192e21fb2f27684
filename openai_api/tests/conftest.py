"""Pytest configuration for the client test suite.

Provides:
- ``mock_http``: routes every pooled ``httpx`` client used by the chat and
  embedding clients through an ``httpx.MockTransport`` handler.
- ``log_events``: collects the structured events emitted under the
  ``openai_api`` logger as parsed dictionaries.
- ``load_fixture``/``load_jsonl``: read files from ``tests/fixtures``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List

import httpx
import pytest

from openai_api.base.http import close_all_clients
from openai_api.base.logging import BASE_LOGGER_NAME, get_logger

FIXTURES = Path(__file__).parent / "fixtures"

Handler = Callable[[httpx.Request], httpx.Response]


class _MockHTTP:
    """Installs a mock transport and records the pool purposes requested."""

    def __init__(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self._monkeypatch = monkeypatch
        self.purposes: List[str] = []
        self.clients: List[httpx.Client] = []

    def install(self, handler: Handler) -> None:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        self.clients.append(client)

        def _get_client(base_url, purpose):
            self.purposes.append(purpose)
            return client

        self._monkeypatch.setattr("openai_api.openai.helpers.get_httpx_client", _get_client)
        self._monkeypatch.setattr("openai_api.openai.completion.get_httpx_client", _get_client)

    def close(self) -> None:
        for client in self.clients:
            client.close()


@pytest.fixture()
def mock_http(monkeypatch: pytest.MonkeyPatch) -> Iterator[_MockHTTP]:
    mock = _MockHTTP(monkeypatch)
    yield mock
    mock.close()
    close_all_clients()


class _EventCollector(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            return
        if isinstance(payload, dict):
            payload["level"] = record.levelname
            self.events.append(payload)

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("event") == event]


@pytest.fixture()
def log_events() -> Iterator[_EventCollector]:
    """Capture structured events from the package logger hierarchy."""
    get_logger()
    base_logger = logging.getLogger(BASE_LOGGER_NAME)
    collector = _EventCollector()
    base_logger.addHandler(collector)
    try:
        yield collector
    finally:
        base_logger.removeHandler(collector)


@pytest.fixture()
def load_fixture() -> Callable[[str], Any]:
    def _load(name: str) -> Any:
        return json.loads((FIXTURES / name).read_text(encoding="utf-8"))

    return _load


@pytest.fixture()
def load_jsonl() -> Callable[[str], List[Dict[str, Any]]]:
    def _load(name: str) -> List[Dict[str, Any]]:
        lines = (FIXTURES / name).read_text(encoding="utf-8").splitlines()
        return [json.loads(line) for line in lines if line.strip()]

    return _load
