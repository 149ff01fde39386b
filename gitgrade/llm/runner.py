"""Client for OpenAI-compatible ``/chat/completions`` endpoints.

The roadmap writer is the only caller. Transport is injectable so tests and
embedders can swap the HTTP call for anything that maps an ``LLMRequest`` to
reply text; every transport failure surfaces as ``RuntimeError``.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..config import LLMConfig
from ..logging import get_logger

logger = get_logger("llm")

_AUTO = object()


def _env(*keys: str) -> Optional[str]:
    return next((os.environ[key] for key in keys if os.environ.get(key)), None)


@dataclass
class LLMRequest:
    """One chat request as the transport sees it."""

    prompt: str
    system: Optional[str]
    model: str
    temperature: Optional[float]
    max_tokens: Optional[int]
    base_url: Optional[str]
    api_key: Optional[str]
    request_timeout: Optional[float]

    def messages(self) -> List[Dict[str, str]]:
        chat = [{"role": "system", "content": self.system}] if self.system else []
        chat.append({"role": "user", "content": self.prompt})
        return chat

    def body(self) -> bytes:
        payload: Dict[str, Any] = {"model": self.model, "messages": self.messages()}
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        if self.max_tokens is not None:
            payload["max_tokens"] = self.max_tokens
        return json.dumps(payload).encode("utf-8")

    def headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers


def post_chat_completion(request: LLMRequest) -> str:
    """POST ``request`` to ``{base_url}/chat/completions`` and return the reply text."""
    if not request.base_url:
        raise RuntimeError("No LLM base_url configured")

    http_request = Request(
        f"{request.base_url}/chat/completions",
        data=request.body(),
        headers=request.headers(),
        method="POST",
    )
    logger.debug("POST %s (model=%s)", http_request.full_url, request.model)
    try:
        with urlopen(http_request, timeout=request.request_timeout or 30.0) as response:
            raw = response.read()
    except HTTPError as exc:
        detail = exc.read().decode("utf-8", errors="ignore").strip()
        raise RuntimeError(f"LLM request failed with status {exc.code}: {detail or exc.reason}") from exc
    except URLError as exc:
        raise RuntimeError(f"LLM request failed: {exc.reason}") from exc
    except TimeoutError as exc:
        raise RuntimeError("LLM request timed out") from exc

    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise RuntimeError("LLM endpoint returned invalid JSON") from exc

    text = _reply_text(payload).strip()
    if not text:
        raise RuntimeError("LLM endpoint returned an empty response")
    return text


def _reply_text(payload: Any) -> str:
    # Chat shape first, then the legacy completions ``text`` field.
    try:
        choice = payload["choices"][0]
    except (KeyError, IndexError, TypeError):
        return ""
    if not isinstance(choice, dict):
        return ""
    message = choice.get("message")
    if isinstance(message, dict) and isinstance(message.get("content"), str):
        return message["content"]
    text = choice.get("text")
    return text if isinstance(text, str) else ""


class LLMRunner:
    """Sends prompts to the configured model and returns its reply."""

    DEFAULT_MODEL = "ai/smollm2:360M-Q4_K_M"
    DEFAULT_BASE_URL = "http://localhost:12434/engines/v1"
    ENV_MODEL_KEYS = ("GITGRADE_LLM_MODEL", "OPENAI_MODEL")
    ENV_BASE_URL_KEYS = ("GITGRADE_LLM_BASE_URL", "OPENAI_BASE_URL")
    ENV_API_KEY_KEYS = ("GITGRADE_LLM_API_KEY", "OPENAI_API_KEY")

    def __init__(
        self,
        model: str | None = None,
        *,
        base_url: str | None | object = _AUTO,
        temperature: Optional[float] = 0.2,
        max_tokens: Optional[int] = None,
        api_key: str | None | object = _AUTO,
        request_timeout: Optional[float] = 30.0,
        runner: Callable[[LLMRequest], str] | None = None,
    ) -> None:
        self.model = model or _env(*self.ENV_MODEL_KEYS) or self.DEFAULT_MODEL
        if base_url is _AUTO:
            base_url = _env(*self.ENV_BASE_URL_KEYS) or self.DEFAULT_BASE_URL
        self.base_url: Optional[str] = str(base_url).rstrip("/") if base_url is not None else None
        if api_key is _AUTO:
            api_key = _env(*self.ENV_API_KEY_KEYS)
        self.api_key: Optional[str] = api_key  # type: ignore[assignment]
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.request_timeout = request_timeout
        self._transport = runner or post_chat_completion

    @classmethod
    def from_config(cls, config: LLMConfig | None) -> "LLMRunner":
        """Build a runner from the ``llm`` table; unset keys keep env/defaults."""
        if config is None:
            return cls()
        overrides = {
            "base_url": config.base_url or None,
            "api_key": config.api_key or None,
            "temperature": config.temperature,
            "max_tokens": config.max_tokens,
            "request_timeout": config.request_timeout,
        }
        kwargs = {key: value for key, value in overrides.items() if value is not None}
        return cls(config.model, **kwargs)  # type: ignore[arg-type]

    def run(self, prompt: str, *, system: str | None = None) -> str:
        return self._transport(
            LLMRequest(
                prompt=prompt,
                system=system,
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                base_url=self.base_url,
                api_key=self.api_key,
                request_timeout=self.request_timeout,
            )
        )


__all__ = ["LLMRequest", "LLMRunner", "post_chat_completion"]
