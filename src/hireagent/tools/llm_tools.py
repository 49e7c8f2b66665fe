from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence

import httpx
from langsmith import traceable
from pydantic import BaseModel

from hireagent.config import Settings
from hireagent.core.errors import ProviderError


log = logging.getLogger("hireagent.llm")


class ChatMessage(BaseModel):
    role: str  # system | user | assistant
    content: str


class ChatProvider(Protocol):
    """Anything that turns a chat transcript into one completion string."""

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float = 0.2,
        max_tokens: int = 800,
        json_mode: bool = False,
    ) -> str:
        ...


class _HttpProvider:
    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None) -> None:
        self.s = settings
        self._client = client

    async def _post(self, url: str, *, json: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        try:
            if self._client is not None:
                r = await self._client.post(url, json=json, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.s.AGENT_TIMEOUT_SECONDS) as client:
                    r = await client.post(url, json=json, headers=headers)
        except httpx.HTTPError as e:
            raise ProviderError(f"transport error: {e.__class__.__name__}: {e}") from e

        if r.status_code >= 400:
            raise ProviderError(f"provider returned HTTP {r.status_code}", status_code=r.status_code)
        try:
            body = r.json()
        except ValueError as e:
            raise ProviderError("provider returned a non-JSON body") from e
        if not isinstance(body, dict):
            raise ProviderError("provider returned an unexpected body shape")
        return body


class OpenAIChatClient(_HttpProvider):
    """Description: Minimal OpenAI chat-completions REST client (no SDK dependency).
    Input: chat messages
    Output: assistant message content
    """

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None, model: Optional[str] = None) -> None:
        super().__init__(settings, client)
        self.model = model or settings.OPENAI_MODEL

    @traceable(name="openai.complete")
    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float = 0.2,
        max_tokens: int = 800,
        json_mode: bool = False,
    ) -> str:
        if not self.s.OPENAI_API_KEY:
            raise ProviderError("OPENAI_API_KEY is not configured")
        url = f"{self.s.OPENAI_BASE_URL.rstrip('/')}/chat/completions"
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [m.model_dump() for m in messages],
            "temperature": temperature,
            "max_tokens": int(max_tokens),
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}
        headers = {"Authorization": f"Bearer {self.s.OPENAI_API_KEY}"}

        j = await self._post(url, json=payload, headers=headers)
        try:
            content = j["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError("malformed chat-completions body") from e
        return str(content or "").strip()


class GeminiClient(_HttpProvider):
    """Description: Minimal Gemini REST client (no SDK dependency).
    Input: chat messages; the system message becomes systemInstruction
    Output: first candidate text
    """

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None, model: Optional[str] = None) -> None:
        super().__init__(settings, client)
        self.model = model or settings.GEMINI_MODEL

    @traceable(name="gemini.complete")
    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float = 0.2,
        max_tokens: int = 800,
        json_mode: bool = False,
    ) -> str:
        if not self.s.GEMINI_API_KEY:
            raise ProviderError("GEMINI_API_KEY is not configured")
        url = f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent?key={self.s.GEMINI_API_KEY}"

        system = "\n\n".join(m.content for m in messages if m.role == "system")
        contents: List[Dict[str, Any]] = [
            {"role": "model" if m.role == "assistant" else "user", "parts": [{"text": m.content}]}
            for m in messages
            if m.role != "system"
        ]
        generation: Dict[str, Any] = {"temperature": temperature, "maxOutputTokens": int(max_tokens)}
        if json_mode:
            generation["responseMimeType"] = "application/json"
        payload: Dict[str, Any] = {"contents": contents, "generationConfig": generation}
        if system:
            payload["systemInstruction"] = {"parts": [{"text": system}]}

        j = await self._post(url, json=payload)
        try:
            parts = j["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError("malformed generateContent body") from e
        return "".join(str(p.get("text") or "") for p in parts if isinstance(p, dict)).strip()


def build_provider(settings: Settings, client: Optional[httpx.AsyncClient] = None) -> ChatProvider:
    """Pick the configured scoring provider."""
    if settings.SCORING_PROVIDER == "gemini":
        log.debug("Scoring provider: gemini model=%s", settings.GEMINI_MODEL)
        return GeminiClient(settings, client)
    log.debug("Scoring provider: openai model=%s", settings.OPENAI_MODEL)
    return OpenAIChatClient(settings, client)
