"""Gateway facade: resolution, capability fallback, token budget and dispatch."""
from __future__ import annotations

import threading

import httpx
import pytest

from llm_gateway import Gateway
from llm_gateway.base.errors import CapabilityUnavailable, InputTooLong, UnknownModel
from llm_gateway.base.models import ContentPart, PlainText, SendData
from llm_gateway.base.streaming import ReplyChannel, ReplySink
from llm_gateway.config import ClientConfig


class WordCounter:
    def count(self, text: str) -> int:
        return len(text.split())


def _completion(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": "answer"}}]})


def _gateway(client: httpx.Client, **kwargs) -> Gateway:
    configs = [
        ClientConfig(type="openai", api_key="sk-test"),
        ClientConfig.model_validate(
            {"type": "ollama", "name": "local", "models": [{"name": "tiny", "max_input_tokens": 12}]}
        ),
    ]
    return Gateway(configs, client=client, **kwargs)


def test_send_once_by_model_id(mock_client, recorded):
    gateway = _gateway(mock_client(_completion))
    out = gateway.send_once("openai:gpt-3.5-turbo", SendData(messages=[PlainText(role="user", content="Hi")]))
    assert out.text == "answer"
    assert recorded.last_json()["model"] == "gpt-3.5-turbo"


def test_vision_request_switches_to_capable_model(mock_client, recorded):
    gateway = _gateway(mock_client(_completion))
    content = [ContentPart.of_text("what is it"), ContentPart.of_image("https://img.example/x.png")]
    gateway.send_once("gpt-3.5-turbo", SendData(messages=[PlainText(role="user", content=content)]))
    assert recorded.last_json()["model"] == "gpt-4-vision-preview"


def test_vision_request_without_capable_model_in_provider(mock_client, recorded):
    gateway = _gateway(mock_client(_completion))
    content = [ContentPart.of_image("data:image/png;base64,AAAA")]
    with pytest.raises(CapabilityUnavailable):
        gateway.send_once("local:tiny", SendData(messages=[PlainText(role="user", content=content)]))
    assert len(recorded) == 0


def test_token_budget_checked_before_sending(mock_client, recorded):
    gateway = _gateway(mock_client(_completion), token_counter=WordCounter())
    request = SendData(messages=[PlainText(role="user", content="one two three four five")])
    with pytest.raises(InputTooLong) as ei:
        gateway.send_once("local:tiny", request)
    assert ei.value.tokens == 5 + 5 + 2
    assert len(recorded) == 0


def test_unknown_model(mock_client):
    with pytest.raises(UnknownModel):
        _gateway(mock_client(_completion)).send_once("gpt-9", SendData(messages=[PlainText(role="user", content="x")]))


def test_list_models_and_resolve(mock_client):
    gateway = _gateway(mock_client(_completion))
    ids = [m.id for m in gateway.list_models()]
    assert ids[-1] == "local:tiny"
    assert gateway.resolve("tiny").provider == "local"


def test_streaming_through_a_channel(mock_client, sse):
    body = sse(
        {"choices": [{"delta": {"content": "an"}}]},
        {"choices": [{"delta": {"content": "swer"}, "finish_reason": "stop"}]},
        "[DONE]",
    )
    gateway = _gateway(mock_client(lambda r: httpx.Response(200, content=body)))
    channel = ReplyChannel()
    sink = ReplySink(channel.send)
    request = SendData(messages=[PlainText(role="user", content="Hi")])

    worker = threading.Thread(target=gateway.send_streaming, args=("openai:gpt-3.5-turbo", request, sink))
    worker.start()
    pieces = [e.text for e in channel if e.kind == "text"]
    worker.join(timeout=5)

    assert pieces == ["an", "swer"]
    assert sink.take() == ("answer", [])
