"""Claude adapter: Messages API body rules, parsing and event streams."""
from __future__ import annotations

import httpx
import pytest

from llm_gateway.anthropic import ClaudeAdapter
from llm_gateway.anthropic.helpers import build_messages_body, parse_messages_response
from llm_gateway.base.errors import InvalidResponse, MalformedInput, MalformedToolArguments, UpstreamError
from llm_gateway.base.models import (
    ContentPart,
    FunctionCall,
    FunctionDeclaration,
    FunctionResult,
    Model,
    PlainText,
    SendData,
)
from llm_gateway.base.streaming import ReplySink
from llm_gateway.config import ClientConfig

MODEL = Model(provider="claude", name="claude-3-haiku-20240307", max_output_tokens=1024)


def _adapter(client: httpx.Client, **cfg) -> ClaudeAdapter:
    return ClaudeAdapter(ClientConfig(type="claude", **cfg), client=client)


def test_hello_scenario(mock_client, recorded):
    reply = {"content": [{"type": "text", "text": "Hello"}], "usage": {"input_tokens": 3, "output_tokens": 1}}
    adapter = _adapter(mock_client(lambda r: httpx.Response(200, json=reply)), api_key="sk-ant")

    out = adapter.send_once(MODEL, SendData(messages=[PlainText(role="user", content="Hi")], stream=False))

    assert out.text == "Hello"
    assert out.tool_calls == ()
    assert out.input_tokens == 3
    assert out.output_tokens == 1

    request = recorded.last
    assert str(request.url) == "https://api.anthropic.com/v1/messages"
    assert request.headers["anthropic-version"] == "2023-06-01"
    assert request.headers["anthropic-beta"] == "tools-2024-05-16"
    assert request.headers["x-api-key"] == "sk-ant"
    assert recorded.last_json() == {
        "model": "claude-3-haiku-20240307",
        "messages": [{"role": "user", "content": "Hi"}],
        "max_tokens": 1024,
    }


def test_no_api_key_header_without_key(mock_client, recorded):
    reply = {"content": [{"type": "text", "text": "ok"}]}
    adapter = _adapter(mock_client(lambda r: httpx.Response(200, json=reply)))
    adapter.send_once(MODEL, SendData(messages=[PlainText(role="user", content="Hi")]))
    assert "x-api-key" not in recorded.last.headers


def test_empty_content_is_invalid_response(mock_client):
    adapter = _adapter(mock_client(lambda r: httpx.Response(200, json={"content": []})), api_key="k")
    with pytest.raises(InvalidResponse):
        adapter.send_once(MODEL, SendData(messages=[PlainText(role="user", content="Hi")]))


def test_network_images_rejected_before_sending(mock_client, recorded):
    adapter = _adapter(mock_client(lambda r: httpx.Response(200, json={})), api_key="k")
    content = [
        ContentPart.of_text("compare"),
        ContentPart.of_image("https://img.example/a.png"),
        ContentPart.of_image("data:image/png;base64,iVBORw0KGgo="),
        ContentPart.of_image("http://img.example/b.jpg"),
    ]
    request = SendData(messages=[PlainText(role="user", content=content)])

    with pytest.raises(MalformedInput) as ei:
        adapter.send_once(MODEL, request)

    assert ei.value.urls == ("https://img.example/a.png", "http://img.example/b.jpg")
    assert "https://img.example/a.png" in ei.value.message
    assert len(recorded) == 0


def test_inline_images_become_base64_blocks():
    content = [ContentPart.of_text("what"), ContentPart.of_image("data:image/jpeg;base64,/9j/4AAQ")]
    body = build_messages_body(SendData(messages=[PlainText(role="user", content=content)]), MODEL, provider="claude")
    assert body["messages"][0]["content"] == [
        {"type": "text", "text": "what"},
        {"type": "image", "source": {"type": "base64", "media_type": "image/jpeg", "data": "/9j/4AAQ"}},
    ]


def test_system_text_round_trip():
    request = SendData(
        messages=[
            PlainText(role="system", content="You are terse."),
            PlainText(role="user", content="Repeat your instructions."),
        ]
    )
    body = build_messages_body(request, MODEL, provider="claude")
    assert body["system"] == "You are terse."
    assert all(m["role"] != "system" for m in body["messages"])

    echoed = {"content": [{"type": "text", "text": body["system"]}]}
    assert parse_messages_response(echoed, provider="claude", model=MODEL).text == "You are terse."


def test_tools_sampling_and_default_max_tokens():
    request = SendData(
        messages=[PlainText(role="user", content="Hi")],
        temperature=0.5,
        top_p=0.9,
        functions=[FunctionDeclaration(name="lookup", description="Find", parameters={"type": "object"})],
    )
    body = build_messages_body(request, Model(provider="claude", name="custom"), provider="claude")
    assert body["max_tokens"] == 4096
    assert body["temperature"] == 0.5
    assert body["top_p"] == 0.9
    assert body["tools"] == [{"name": "lookup", "description": "Find", "input_schema": {"type": "object"}}]


def test_function_result_becomes_tool_use_and_tool_result_pair():
    messages = [
        PlainText(role="user", content="Weather in Oslo?"),
        FunctionCall(role="assistant", name="weather", arguments={"city": "Oslo"}, id="toolu_1"),
        FunctionResult(role="function", name="weather", content="12C", id="toolu_1", arguments={"city": "Oslo"}),
    ]
    body = build_messages_body(SendData(messages=messages), MODEL, provider="claude")
    assert body["messages"][1:] == [
        {
            "role": "assistant",
            "content": [{"type": "tool_use", "id": "toolu_1", "name": "weather", "input": {"city": "Oslo"}}],
        },
        {
            "role": "user",
            "content": [{"type": "tool_result", "tool_use_id": "toolu_1", "content": "12C"}],
        },
    ]


def test_unary_tool_use_blocks(mock_client):
    reply = {
        "id": "msg_1",
        "content": [
            {"type": "text", "text": "Let me look."},
            {"type": "tool_use", "id": "toolu_1", "name": "weather", "input": {"city": "Oslo"}},
        ],
    }
    adapter = _adapter(mock_client(lambda r: httpx.Response(200, json=reply)), api_key="k")
    out = adapter.send_once(MODEL, SendData(messages=[PlainText(role="user", content="Hi")]))
    assert out.text == "Let me look."
    assert out.response_id == "msg_1"
    assert [(c.id, c.name, c.arguments) for c in out.tool_calls] == [("toolu_1", "weather", {"city": "Oslo"})]


def test_error_envelope_on_status(mock_client):
    envelope = {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}}
    adapter = _adapter(mock_client(lambda r: httpx.Response(529, json=envelope)), api_key="k")
    with pytest.raises(UpstreamError) as ei:
        adapter.send_once(MODEL, SendData(messages=[PlainText(role="user", content="Hi")]))
    assert ei.value.upstream_code == "overloaded_error"
    assert ei.value.message == "Overloaded"
    assert ei.value.status == 529


def test_streaming_tool_use_reconstruction(mock_client, sse):
    body = sse(
        {"type": "message_start", "message": {"id": "msg_1"}},
        {"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}},
        {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "Sure."}},
        {"type": "content_block_stop", "index": 0},
        {"type": "ping"},
        {"type": "content_block_start", "index": 1, "content_block": {"type": "tool_use", "id": "1", "name": "f", "input": {}}},
        {"type": "content_block_delta", "index": 1, "delta": {"type": "input_json_delta", "partial_json": '{"a":'}},
        {"type": "content_block_delta", "index": 1, "delta": {"type": "input_json_delta", "partial_json": "1}"}},
        {"type": "content_block_stop", "index": 1},
        {"type": "message_delta", "delta": {"stop_reason": "tool_use"}},
        {"type": "message_stop"},
    )
    adapter = _adapter(mock_client(lambda r: httpx.Response(200, content=body)), api_key="k")
    events = []
    sink = ReplySink(events.append)

    adapter.send_streaming(MODEL, SendData(messages=[PlainText(role="user", content="Hi")]), sink)

    assert [e.kind for e in events] == ["text", "tool_call", "done"]
    text, calls = sink.take()
    assert text == "Sure."
    assert len(calls) == 1
    assert (calls[0].name, calls[0].id, calls[0].arguments) == ("f", "1", {"a": 1})


def test_streaming_bad_partial_json(mock_client, sse):
    body = sse(
        {"type": "content_block_start", "index": 0, "content_block": {"type": "tool_use", "id": "1", "name": "f"}},
        {"type": "content_block_delta", "index": 0, "delta": {"partial_json": "{broken"}},
        {"type": "content_block_stop", "index": 0},
    )
    adapter = _adapter(mock_client(lambda r: httpx.Response(200, content=body)), api_key="k")
    sink = ReplySink()
    with pytest.raises(MalformedToolArguments):
        adapter.send_streaming(MODEL, SendData(messages=[PlainText(role="user", content="Hi")]), sink)
    assert sink.tool_calls == []


def test_streaming_error_event(mock_client, sse):
    body = sse(
        {"type": "content_block_delta", "index": 0, "delta": {"text": "Hel"}},
        {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}},
    )
    adapter = _adapter(mock_client(lambda r: httpx.Response(200, content=body)), api_key="k")
    sink = ReplySink()
    with pytest.raises(UpstreamError) as ei:
        adapter.send_streaming(MODEL, SendData(messages=[PlainText(role="user", content="Hi")]), sink)
    assert ei.value.upstream_code == "overloaded_error"
    assert sink.text == "Hel"


def test_stream_closed_early_still_flushes_open_tool_call(mock_client, sse):
    head = sse(
        {"type": "content_block_start", "index": 0, "content_block": {"type": "tool_use", "id": "t1", "name": "f"}},
        {"type": "content_block_delta", "index": 0, "delta": {"type": "input_json_delta", "partial_json": '{"a":1}'}},
    )

    def body():
        yield head
        raise httpx.StreamClosed()

    adapter = _adapter(mock_client(lambda r: httpx.Response(200, content=body())), api_key="k")
    sink = ReplySink()

    adapter.send_streaming(MODEL, SendData(messages=[PlainText(role="user", content="Hi")]), sink)

    assert sink.done
    assert [(c.name, c.id, c.arguments) for c in sink.tool_calls] == [("f", "t1", {"a": 1})]
