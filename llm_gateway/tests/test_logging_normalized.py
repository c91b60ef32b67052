"""Focused tests for llm_gateway.base.logging.

Covers:
- _parse_level string parsing
- _coerce_tokens stability
- normalized_log_event emits required keys and keeps context fields
- JsonFormatter flattens structured messages and keeps extras
"""
from __future__ import annotations

import json
import logging

from llm_gateway.base.log_support import JsonFormatter, LogContext
from llm_gateway.base.logging import (
    BASE_LOGGER_NAME,
    REQUIRED_NORMALIZED_KEYS,
    _coerce_tokens,  # type: ignore[attr-defined]
    _parse_level,  # type: ignore[attr-defined]
    get_logger,
    log_event,
    normalized_log_event,
)


class _ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - exercised via tests
        self.messages.append(record.getMessage())


def _capture(name: str) -> tuple[logging.Logger, _ListHandler]:
    logger = get_logger(name, json_mode=False)
    handler = _ListHandler()
    logger.handlers[:] = [handler]
    logger.propagate = False
    return logger, handler


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO
    assert _parse_level("debug") == logging.DEBUG
    assert _parse_level("WARNING") == logging.WARNING
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR


def test_get_logger_prefixes_child_names():
    logger = get_logger("providers.openai")
    assert logger.name == f"{BASE_LOGGER_NAME}.providers.openai"
    assert get_logger(BASE_LOGGER_NAME).name == BASE_LOGGER_NAME


def test_normalized_log_event_emits_required_keys():
    logger, handler = _capture("tests.logging.normalized")
    ctx = LogContext(provider="p", model="m")
    normalized_log_event(
        logger,
        "stream.end",
        ctx,
        phase="finalize",
        attempt=None,
        error_code="timeout",
        emitted=3,
        tokens={"input": 10, "output": 5},
        frames=7,
    )

    payload = json.loads(handler.messages[-1])
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in payload
    assert payload["event"] == "stream.end"
    assert payload["provider"] == "p" and payload["model"] == "m"
    assert payload["tokens"] == {"input": 10, "output": 5}
    assert payload["frames"] == 7


def test_normalized_log_event_omits_error_code_when_none():
    logger, handler = _capture("tests.logging.noerror")
    normalized_log_event(logger, "chat.start", None, phase="start", phase_alias=None)
    payload = json.loads(handler.messages[-1])
    assert "error_code" not in payload
    assert payload["attempt"] is None
    assert "phase_alias" not in payload


def test_extra_fields_never_overwrite_normalized_values():
    logger, handler = _capture("tests.logging.overwrite")
    normalized_log_event(logger, "chat.end", None, phase="finalize", emitted=True, **{"emitted_extra": 1})
    payload = json.loads(handler.messages[-1])
    assert payload["emitted"] is True
    assert payload["emitted_extra"] == 1


def test_log_event_drops_none_fields():
    logger, handler = _capture("tests.logging.plain")
    log_event(logger, "x", LogContext(provider="p"), a=None, b=1)
    payload = json.loads(handler.messages[-1])
    assert payload == {"event": "x", "provider": "p", "b": 1}


def test_coerce_tokens_mapping_and_other():
    assert _coerce_tokens(None) is None
    assert _coerce_tokens({"input": 1}) == {"input": 1}
    assert _coerce_tokens(5) == {"value": "5"}


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("llm_gateway.test", logging.INFO, __file__, 1, msg, None, None)
    record.__dict__.update(extra)
    return record


def test_json_formatter_flattens_structured_messages():
    line = json.loads(JsonFormatter().format(_record('{"event": "chat.end", "phase": "finalize"}')))
    assert line["event"] == "chat.end"
    assert line["phase"] == "finalize"
    assert line["level"] == "INFO"
    assert line["logger"] == "llm_gateway.test"
    assert "msg" not in line
    assert line["ts"].endswith("Z")


def test_json_formatter_plain_text_and_extras():
    line = json.loads(JsonFormatter().format(_record("hello {not json", request_id="r-1")))
    assert line["msg"] == "hello {not json"
    assert line["request_id"] == "r-1"
    assert "lineno" not in line


def test_log_context_for_call_merges_extra():
    ctx = LogContext.for_call("openai", "gpt-4", stream=True)
    ctx.extra["attempt_id"] = "a1"
    assert ctx.to_dict() == {"provider": "openai", "model": "gpt-4", "stream": True, "attempt_id": "a1"}
