"""Provider adapters implementing TextGenerationCapability.

Each adapter turns one ``generate`` call into a single-shot request with
no tools and no streaming, and maps the SDK response into a ``Generation``.
Exceptions are left to propagate; the orchestrator isolates them per
capability.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import anthropic
import httpx
from openai import AsyncOpenAI

from chorus.llm.base import Generation
from chorus.llm.models import friendly, model_for, resolve

if TYPE_CHECKING:
    from chorus.config import Settings
    from chorus.llm.base import TextGenerationCapability

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN_ESTIMATE = 4


def estimate_tokens(text: str) -> int:
    """Rough token estimate for backends that report no usage."""
    return max(1, -(-len(text) // CHARS_PER_TOKEN_ESTIMATE))


def _chat_turns(context: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Keep only user/assistant turns with string content."""
    turns: list[dict[str, str]] = []
    for turn in context:
        role = turn.get("role")
        content = turn.get("content")
        if role in ("user", "assistant") and isinstance(content, str) and content:
            turns.append({"role": role, "content": content})
    return turns


class _Capability:
    """Shared attributes for the concrete adapters."""

    def __init__(
        self,
        name: str,
        api_key: str,
        model: str,
        *,
        timeout: float = 30.0,
        confidence: float = 0.75,
        max_tokens: int = 2000,
    ) -> None:
        self._name = name
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._confidence = confidence
        self._max_tokens = max_tokens

    @property
    def name(self) -> str:
        return self._name

    @property
    def model(self) -> str:
        return self._model

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def confidence(self) -> float:
        return self._confidence

    @property
    def available(self) -> bool:
        return bool(self._api_key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, model={self._model!r})"


class AnthropicCapability(_Capability):
    """Claude via the Anthropic Messages API."""

    def __init__(self, api_key: str, model: str, **kwargs: Any) -> None:
        super().__init__("anthropic", api_key, model, **kwargs)
        self._client: anthropic.AsyncAnthropic | None = None

    def _get_client(self) -> anthropic.AsyncAnthropic:
        """Lazily initialize the Anthropic client."""
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(api_key=self._api_key)
        return self._client

    async def generate(
        self,
        prompt: str,
        context: list[dict[str, Any]],
        *,
        system: str = "",
        model: str | None = None,
        temperature: float = 0.4,
    ) -> Generation:
        client = self._get_client()
        kwargs: dict[str, Any] = {
            "model": resolve(model) if model else self._model,
            "max_tokens": self._max_tokens,
            "temperature": temperature,
            "messages": [*_chat_turns(context), {"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system
        response = await client.messages.create(**kwargs)
        text = "".join(block.text for block in response.content if block.type == "text")
        tokens = response.usage.input_tokens + response.usage.output_tokens
        return Generation(text=text, tokens=tokens, model=kwargs["model"])


class OpenAICapability(_Capability):
    """GPT models via the OpenAI Chat Completions API."""

    def __init__(self, api_key: str, model: str, **kwargs: Any) -> None:
        super().__init__("openai", api_key, model, **kwargs)
        self._client: AsyncOpenAI | None = None

    def _get_client(self) -> AsyncOpenAI:
        """Lazily initialize the OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def generate(
        self,
        prompt: str,
        context: list[dict[str, Any]],
        *,
        system: str = "",
        model: str | None = None,
        temperature: float = 0.4,
    ) -> Generation:
        client = self._get_client()
        messages: list[dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.extend(_chat_turns(context))
        messages.append({"role": "user", "content": prompt})

        model_id = resolve(model) if model else self._model
        response = await client.chat.completions.create(
            model=model_id,
            messages=messages,
            temperature=temperature,
            max_tokens=self._max_tokens,
            presence_penalty=0.1,
            frequency_penalty=0.1,
        )
        text = response.choices[0].message.content or ""
        tokens = response.usage.total_tokens if response.usage else estimate_tokens(text)
        return Generation(text=text, tokens=tokens, model=model_id)


class GeminiCapability(_Capability):
    """Gemini via the Generative Language REST API."""

    def __init__(self, api_key: str, model: str, *, base_url: str, **kwargs: Any) -> None:
        super().__init__("google", api_key, model, **kwargs)
        self._base_url = base_url.rstrip("/")

    async def generate(
        self,
        prompt: str,
        context: list[dict[str, Any]],
        *,
        system: str = "",
        model: str | None = None,
        temperature: float = 0.4,
    ) -> Generation:
        model_id = resolve(model) if model else self._model
        contents = [
            {
                "role": "model" if turn["role"] == "assistant" else "user",
                "parts": [{"text": turn["content"]}],
            }
            for turn in _chat_turns(context)
        ]
        contents.append({"role": "user", "parts": [{"text": prompt}]})

        payload: dict[str, Any] = {
            "contents": contents,
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": self._max_tokens,
            },
        }
        if system:
            payload["systemInstruction"] = {"parts": [{"text": system}]}

        headers = {"x-goog-api-key": self._api_key, "Content-Type": "application/json"}
        url = f"{self._base_url}/{model_id}:generateContent"

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            resp = await client.post(url, headers=headers, json=payload)
        resp.raise_for_status()
        data = resp.json()

        parts = data["candidates"][0]["content"]["parts"]
        text = "".join(part.get("text", "") for part in parts)
        usage = data.get("usageMetadata") or {}
        tokens = usage.get("totalTokenCount") or estimate_tokens(text)
        return Generation(text=text, tokens=tokens, model=model_id)


def build_capabilities(config: Settings) -> list[TextGenerationCapability]:
    """Instantiate one adapter per enabled provider, in PROVIDERS order."""
    common = {
        "timeout": config.capability_timeout_seconds,
        "confidence": config.capability_confidence,
        "max_tokens": config.max_output_tokens,
    }
    capabilities: list[TextGenerationCapability] = []
    for name in config.get_enabled_providers():
        if name == "openai":
            capabilities.append(
                OpenAICapability(
                    config.openai_api_key, model_for(name, config.openai_model), **common
                )
            )
        elif name == "anthropic":
            capabilities.append(
                AnthropicCapability(
                    config.anthropic_api_key, model_for(name, config.anthropic_model), **common
                )
            )
        elif name == "google":
            capabilities.append(
                GeminiCapability(
                    config.google_ai_api_key,
                    model_for(name, config.gemini_model),
                    base_url=config.gemini_api_url,
                    **common,
                )
            )

    logger.info(
        "Capabilities: %s",
        ", ".join(f"{c.name}={friendly(c.model)}" for c in capabilities) or "none",
    )
    return capabilities
