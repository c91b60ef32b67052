"""Qianwen (DashScope) adapter against a mock generation endpoint."""
from __future__ import annotations

import httpx
import pytest

from llm_gateway.base.errors import MalformedInput, MissingCredential, UpstreamError
from llm_gateway.base.models import (
    ContentPart,
    FunctionCall,
    FunctionDeclaration,
    FunctionResult,
    PlainText,
    SendData,
)
from llm_gateway.base.streaming import ReplySink
from llm_gateway.config import ClientConfig
from llm_gateway.config.defaults import QIANWEN_API_URL
from llm_gateway.qianwen import QianwenAdapter


def _adapter(client: httpx.Client, **cfg) -> QianwenAdapter:
    return QianwenAdapter(ClientConfig(type="qianwen", **cfg), client=client)


def _turbo(adapter: QianwenAdapter):
    return next(m for m in adapter.list_models() if m.name == "qwen-turbo")


def test_catalogue_uses_qianwen_factors():
    adapter = _adapter(None)
    models = adapter.list_models()
    assert [m.name for m in models] == ["qwen-max", "qwen-max-longcontext", "qwen-plus", "qwen-turbo"]
    assert all(m.tokens_count_factors == (4, 14) for m in models)
    assert models[1].max_input_tokens == 28000


def test_unary_body_headers_and_reply(mock_client, recorded):
    reply = {"output": {"text": "Ni hao"}, "usage": {"input_tokens": 5, "output_tokens": 2}, "request_id": "req-1"}
    adapter = _adapter(mock_client(lambda r: httpx.Response(200, json=reply)), api_key="sk-dash")
    messages = [
        PlainText(role="system", content="Be kind."),
        PlainText(role="user", content="Hello"),
        FunctionCall(role="assistant", name="lookup", arguments={"q": "x"}),
        FunctionResult(role="function", name="lookup", content="found"),
    ]
    functions = [FunctionDeclaration(name="lookup", description="Search")]

    out = adapter.send_once(_turbo(adapter), SendData(messages=messages, temperature=0.3, functions=functions))

    assert out.text == "Ni hao"
    assert out.response_id == "req-1"
    assert (out.input_tokens, out.output_tokens) == (5, 2)

    request = recorded.last
    assert str(request.url) == QIANWEN_API_URL
    assert request.headers["Authorization"] == "Bearer sk-dash"
    assert "X-DashScope-SSE" not in request.headers
    body = recorded.last_json()
    assert body["model"] == "qwen-turbo"
    assert body["parameters"] == {"temperature": 0.3}
    assert body["input"]["messages"] == [
        {"role": "system", "content": "Be kind."},
        {"role": "user", "content": "Hello"},
        {"role": "assistant", "content": 'Function call: lookup with arguments: {"q": "x"}'},
        {"role": "function", "content": "found"},
    ]
    assert body["functions"] == [
        {"name": "lookup", "description": "Search", "parameters": {"type": "object", "properties": {}}}
    ]


def test_error_envelope_in_body(mock_client):
    envelope = {"code": "InvalidApiKey", "message": "Invalid API-key provided.", "request_id": "r"}
    adapter = _adapter(mock_client(lambda r: httpx.Response(200, json=envelope)), api_key="bad")
    with pytest.raises(UpstreamError) as ei:
        adapter.send_once(_turbo(adapter), SendData(messages=[PlainText(role="user", content="Hi")]))
    assert ei.value.upstream_code == "InvalidApiKey"
    assert ei.value.message == "InvalidApiKey: Invalid API-key provided."


def test_error_envelope_on_status(mock_client):
    envelope = {"code": "Throttling", "message": "Requests throttled"}
    adapter = _adapter(mock_client(lambda r: httpx.Response(429, json=envelope)), api_key="k")
    with pytest.raises(UpstreamError) as ei:
        adapter.send_once(_turbo(adapter), SendData(messages=[PlainText(role="user", content="Hi")]))
    assert ei.value.status == 429


def test_images_are_rejected(mock_client, recorded):
    adapter = _adapter(mock_client(lambda r: httpx.Response(200, json={})), api_key="k")
    content = [ContentPart.of_text("look"), ContentPart.of_image("data:image/png;base64,AAAA")]
    with pytest.raises(MalformedInput):
        adapter.send_once(_turbo(adapter), SendData(messages=[PlainText(role="user", content=content)]))
    assert len(recorded) == 0


def test_missing_key(mock_client):
    adapter = _adapter(mock_client(lambda r: httpx.Response(200, json={})))
    with pytest.raises(MissingCredential):
        adapter.send_once(_turbo(adapter), SendData(messages=[PlainText(role="user", content="Hi")]))


def test_streaming_incremental_output(mock_client, recorded, sse):
    body = sse(
        {"output": {"text": "Ni", "finish_reason": "null"}, "request_id": "r"},
        {"output": {"text": " hao", "finish_reason": "null"}, "request_id": "r"},
        {"output": {"text": "", "finish_reason": "stop"}, "usage": {"output_tokens": 2}},
    )
    adapter = _adapter(mock_client(lambda r: httpx.Response(200, content=body)), api_key="k")
    sink = ReplySink()

    adapter.send_streaming(_turbo(adapter), SendData(messages=[PlainText(role="user", content="Hi")]), sink)

    assert recorded.last.headers["X-DashScope-SSE"] == "enable"
    assert recorded.last_json()["parameters"] == {"incremental_output": True}
    assert sink.take() == ("Ni hao", [])


def test_streaming_error_event(mock_client, sse):
    body = sse(
        {"output": {"text": "Ni"}},
        {"code": "DataInspectionFailed", "message": "Output data may contain inappropriate content."},
    )
    adapter = _adapter(mock_client(lambda r: httpx.Response(200, content=body)), api_key="k")
    sink = ReplySink()
    with pytest.raises(UpstreamError, match="DataInspectionFailed"):
        adapter.send_streaming(_turbo(adapter), SendData(messages=[PlainText(role="user", content="Hi")]), sink)
    assert sink.text == "Ni"
