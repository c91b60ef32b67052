"""Unit tests for the neutral message model and its JSON boundary.

Covers:
- Ordered-attempt decoding of untagged payloads (plain text is the default)
- Tagged decoding of ``to_dict`` output
- System message extraction and conversation assembly
- Inline vs network image detection
"""
from __future__ import annotations

import pytest

from llm_gateway.base.dto import decode_functions, decode_message, decode_messages, encode_messages
from llm_gateway.base.errors import MalformedInput
from llm_gateway.base.models import (
    ContentPart,
    FunctionCall,
    FunctionResult,
    PlainText,
    build_messages,
    extract_system_message,
)


def test_untagged_plain_text_is_default():
    msg = decode_message({"role": "user", "content": "hello"})
    assert isinstance(msg, PlainText)
    assert msg.content == "hello"


def test_untagged_content_with_name_is_function_result():
    msg = decode_message({"role": "function", "name": "get_weather", "content": "sunny"})
    assert isinstance(msg, FunctionResult)
    assert msg.name == "get_weather"
    assert msg.content == "sunny"


def test_untagged_null_name_stays_plain_text():
    msg = decode_message({"role": "assistant", "name": None, "content": "ok"})
    assert isinstance(msg, PlainText)


def test_untagged_function_call_payload():
    msg = decode_message(
        {
            "role": "assistant",
            "id": "call_1",
            "function_call": {"name": "lookup", "arguments": {"q": "x"}},
        }
    )
    assert isinstance(msg, FunctionCall)
    assert msg.id == "call_1"
    assert msg.arguments == {"q": "x"}
    assert msg.arguments_json() == '{"q": "x"}'


def test_structured_content_parts_decode():
    msg = decode_message(
        {
            "role": "user",
            "content": [
                {"type": "text", "text": "what is this"},
                {"type": "image_url", "image_url": {"url": "data:image/png;base64,AAAA"}},
            ],
        }
    )
    assert isinstance(msg, PlainText)
    assert msg.is_structured()
    assert [p.type for p in msg.content] == ["text", "image_url"]
    assert msg.text_or_joined() == "what is this"


def test_tagged_payloads_follow_kind():
    original = [
        PlainText(role="system", content="be brief"),
        FunctionCall(role="assistant", name="f", arguments={"a": 1}, id="1"),
        FunctionResult(role="function", name="f", content="2", id="1", arguments={"a": 1}),
    ]
    decoded = decode_messages(encode_messages(original))
    assert decoded == original


def test_invalid_payload_raises_malformed_input():
    with pytest.raises(MalformedInput):
        decode_message({"role": "wizard", "content": "hi"})


def test_decode_functions_defaults_parameters():
    (decl,) = decode_functions([{"name": "noop"}])
    assert decl.name == "noop"
    assert decl.parameters == {"type": "object", "properties": {}}


def test_extract_system_message_joins_and_keeps_order():
    messages = [
        PlainText(role="system", content="one"),
        PlainText(role="user", content="hi"),
        PlainText(role="system", content="two"),
        PlainText(role="assistant", content="hello"),
    ]
    system, rest = extract_system_message(messages)
    assert system == "one\n\ntwo"
    assert [m.content for m in rest] == ["hi", "hello"]


def test_extract_system_message_absent():
    system, rest = extract_system_message([PlainText(role="user", content="hi")])
    assert system is None
    assert len(rest) == 1


def test_build_messages_history_first():
    history = [PlainText(role="user", content="a"), PlainText(role="assistant", content="b")]
    messages = build_messages("c", history)
    assert [m.content for m in messages] == ["a", "b", "c"]
    assert messages[-1].role == "user"


def test_build_messages_rejects_empty_input():
    with pytest.raises(MalformedInput):
        build_messages("", [])


def test_inline_image_detection():
    inline = ContentPart.of_image("data:image/jpeg;base64,/9j/4AAQ")
    assert inline.inline_image() == ("image/jpeg", "/9j/4AAQ")
    assert ContentPart.of_image("https://example.com/cat.png").inline_image() is None
    assert ContentPart.of_image("data:image/png,notbase64").inline_image() is None
