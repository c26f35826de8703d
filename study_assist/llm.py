"""Chat-completions client used as the workflow's text generator."""

from __future__ import annotations

import os
from collections import deque
from typing import Any, Protocol

import requests

from study_assist.logging import get_logger
from study_assist.prompts import STUDY_ASSISTANT_INSTRUCTIONS

log = get_logger("llm")

DEFAULT_MODEL = "deepseek-chat"
DEFAULT_BASE_URL = "https://api.deepseek.com"
DEFAULT_API_KEY_ENV = "DEEPSEEK_API_KEY"


class GenerationError(RuntimeError):
    """Raised when the text generator cannot produce a reply."""


class TextGenerator(Protocol):
    """Anything that turns a prompt into generated text."""

    def generate(self, prompt: str) -> str:
        """Return generated text for ``prompt``."""


class ConversationMemory:
    """Bounded in-process history of user/assistant turns."""

    def __init__(self, max_turns: int = 10) -> None:
        if max_turns <= 0:
            raise ValueError("max_turns must be > 0")
        self._turns: deque[tuple[str, str]] = deque(maxlen=max_turns)

    def messages(self) -> list[dict[str, str]]:
        output: list[dict[str, str]] = []
        for prompt, reply in self._turns:
            output.append({"role": "user", "content": prompt})
            output.append({"role": "assistant", "content": reply})
        return output

    def record(self, prompt: str, reply: str) -> None:
        self._turns.append((prompt, reply))

    def clear(self) -> None:
        self._turns.clear()

    def __len__(self) -> int:
        return len(self._turns)


class ChatClient:
    """OpenAI-compatible ``/chat/completions`` client.

    One request per ``generate`` call; no retries. Any transport, HTTP or
    payload problem surfaces as ``GenerationError``.
    """

    def __init__(
        self,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        api_key: str | None = None,
        api_key_env: str = DEFAULT_API_KEY_ENV,
        system_prompt: str | None = STUDY_ASSISTANT_INSTRUCTIONS,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout_seconds: float | None = 60.0,
        memory: ConversationMemory | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key if api_key is not None else os.getenv(api_key_env)
        self.api_key_env = api_key_env
        self.system_prompt = system_prompt
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout_seconds = timeout_seconds
        self.memory = memory
        self._session = session or requests.Session()

    def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise GenerationError(f"No API key configured; set {self.api_key_env}.")

        endpoint = f"{self.base_url}/chat/completions"
        payload = self._build_payload(prompt)
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        log.debug("POST %s model=%s prompt_chars=%d", endpoint, self.model, len(prompt))

        try:
            response = self._session.post(
                endpoint,
                json=payload,
                headers=headers,
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as exc:
            detail = (exc.response.text if exc.response is not None else "").strip()
            status = exc.response.status_code if exc.response is not None else "?"
            raise GenerationError(
                f"Chat completion failed with status {status}: {detail or exc}"
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise GenerationError(f"Chat completion request failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise GenerationError("Chat completion returned invalid JSON") from exc

        content = _extract_content(body)
        if not content:
            raise GenerationError("Chat completion returned an empty response")
        reply = content.strip()
        log.debug("received %d chars", len(reply))

        if self.memory is not None:
            self.memory.record(prompt, reply)
        return reply

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        messages: list[dict[str, str]] = []
        if self.system_prompt:
            messages.append({"role": "system", "content": self.system_prompt})
        if self.memory is not None:
            messages.extend(self.memory.messages())
        messages.append({"role": "user", "content": prompt})

        payload: dict[str, Any] = {"model": self.model, "messages": messages}
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        if self.max_tokens is not None:
            payload["max_tokens"] = self.max_tokens
        return payload


def _extract_content(payload: Any) -> str:
    if not isinstance(payload, dict):
        return ""
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if isinstance(message, dict):
        content = message.get("content")
        if isinstance(content, str):
            return content
    text = first.get("text")
    if isinstance(text, str):
        return text
    return ""
