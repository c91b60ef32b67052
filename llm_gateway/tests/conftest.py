"""Pytest configuration for the gateway test suite.

Every test runs with a clean provider environment: no credentials, no
external config file and no proxy variables leak in from the host. Wire-level
tests talk to ``httpx.MockTransport`` through an injected client.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Iterator, List

import httpx
import pytest

from llm_gateway.base.http import close_all_clients
from llm_gateway.config import DEFAULTS, reset_config_cache
from llm_gateway.config.env import ENV_FIELDS, env_var_name


@pytest.fixture(autouse=True)
def clean_provider_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove provider settings from the environment for the duration of a test."""

    for name in list(DEFAULTS) + ["local", "groq-eu", "custom"]:
        for field_name in ENV_FIELDS:
            monkeypatch.delenv(env_var_name(name, field_name), raising=False)
    for var in ("PROVIDERS_CONFIG_FILE", "HTTPS_PROXY", "ALL_PROXY", "LLM_GATEWAY_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture(scope="session", autouse=True)
def close_pooled_clients() -> Iterator[None]:
    yield
    close_all_clients()


class RecordedRequests:
    """Requests seen by a mock transport, with their decoded JSON bodies."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []

    def append(self, request: httpx.Request) -> None:
        self.requests.append(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)

    def __len__(self) -> int:
        return len(self.requests)


@pytest.fixture()
def recorded() -> RecordedRequests:
    return RecordedRequests()


@pytest.fixture()
def mock_client(recorded: RecordedRequests) -> Iterator[Callable[..., httpx.Client]]:
    """Build an ``httpx.Client`` answering every request with ``handler``.

    ``handler(request)`` returns an ``httpx.Response``; each request is
    recorded first.
    """

    clients: List[httpx.Client] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        def _recording(request: httpx.Request) -> httpx.Response:
            recorded.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(_recording))
        clients.append(client)
        return client

    yield _make
    for c in clients:
        c.close()


def sse_body(*payloads: Any) -> bytes:
    """Encode payloads as server-sent events (strings are sent verbatim)."""
    chunks = []
    for p in payloads:
        data = p if isinstance(p, str) else json.dumps(p)
        chunks.append(f"data: {data}\n\n")
    return "".join(chunks).encode("utf-8")


def ndjson_body(*payloads: Any) -> bytes:
    return "".join(json.dumps(p) + "\n" for p in payloads).encode("utf-8")


@pytest.fixture()
def sse() -> Callable[..., bytes]:
    return sse_body


@pytest.fixture()
def ndjson() -> Callable[..., bytes]:
    return ndjson_body
