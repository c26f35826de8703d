"""Tests for the chat-completions client and conversation memory."""

from __future__ import annotations

from typing import Any

import pytest
import requests

from study_assist.llm import ChatClient, ConversationMemory, GenerationError


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._body = body
        self.text = text

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self) -> Any:
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class FakeSession:
    def __init__(self, *responses: Any) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _completion(content: str) -> FakeResponse:
    return FakeResponse(body={"choices": [{"message": {"role": "assistant", "content": content}}]})


def test_generate_posts_chat_completion() -> None:
    session = FakeSession(_completion("  你好！ "))
    client = ChatClient(
        api_key="secret",
        base_url="https://llm.example/v1/",
        system_prompt="be brief",
        temperature=0.2,
        max_tokens=64,
        timeout_seconds=5.0,
        session=session,
    )

    assert client.generate("hi") == "你好！"

    call = session.calls[0]
    assert call["url"] == "https://llm.example/v1/chat/completions"
    assert call["headers"]["Authorization"] == "Bearer secret"
    assert call["timeout"] == 5.0
    assert call["json"] == {
        "model": "deepseek-chat",
        "messages": [
            {"role": "system", "content": "be brief"},
            {"role": "user", "content": "hi"},
        ],
        "temperature": 0.2,
        "max_tokens": 64,
    }


def test_generate_replays_memory_on_later_calls() -> None:
    session = FakeSession(_completion("first"), _completion("second"))
    memory = ConversationMemory(max_turns=5)
    client = ChatClient(api_key="k", system_prompt=None, memory=memory, session=session)

    client.generate("q1")
    client.generate("q2")

    assert session.calls[1]["json"]["messages"] == [
        {"role": "user", "content": "q1"},
        {"role": "assistant", "content": "first"},
        {"role": "user", "content": "q2"},
    ]
    assert len(memory) == 2


def test_missing_api_key_raises_before_any_request(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)
    session = FakeSession()
    client = ChatClient(session=session)
    with pytest.raises(GenerationError, match="DEEPSEEK_API_KEY"):
        client.generate("hi")
    assert session.calls == []


def test_api_key_read_from_configured_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MY_LLM_KEY", "from-env")
    client = ChatClient(api_key_env="MY_LLM_KEY", session=FakeSession())
    assert client.api_key == "from-env"


def test_http_error_status_is_reported() -> None:
    session = FakeSession(FakeResponse(status_code=500, text="overloaded"))
    client = ChatClient(api_key="k", session=session)
    with pytest.raises(GenerationError, match="status 500: overloaded"):
        client.generate("hi")


def test_transport_error_is_wrapped() -> None:
    session = FakeSession(requests.ConnectionError("refused"))
    client = ChatClient(api_key="k", session=session)
    with pytest.raises(GenerationError, match="request failed"):
        client.generate("hi")


def test_invalid_json_and_empty_content_are_errors() -> None:
    client = ChatClient(api_key="k", session=FakeSession(FakeResponse(body=ValueError("bad"))))
    with pytest.raises(GenerationError, match="invalid JSON"):
        client.generate("hi")

    client = ChatClient(api_key="k", session=FakeSession(FakeResponse(body={"choices": []})))
    with pytest.raises(GenerationError, match="empty response"):
        client.generate("hi")


def test_failed_call_does_not_touch_memory() -> None:
    memory = ConversationMemory()
    client = ChatClient(
        api_key="k",
        memory=memory,
        session=FakeSession(FakeResponse(status_code=503, text="")),
    )
    with pytest.raises(GenerationError):
        client.generate("hi")
    assert len(memory) == 0


def test_memory_keeps_most_recent_turns() -> None:
    memory = ConversationMemory(max_turns=1)
    memory.record("a", "1")
    memory.record("b", "2")
    assert memory.messages() == [
        {"role": "user", "content": "b"},
        {"role": "assistant", "content": "2"},
    ]
    memory.clear()
    assert len(memory) == 0


def test_memory_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError, match="max_turns"):
        ConversationMemory(max_turns=0)
