"""Shared test fixtures."""

import asyncio
from typing import Any

import pytest

from chorus.llm.base import Generation
from chorus.synthesis.models import CandidateResponse


class FakeCapability:
    """In-memory TextGenerationCapability that records every call."""

    def __init__(
        self,
        name: str,
        text: str = "answer",
        *,
        tokens: int = 10,
        model: str = "gpt-4o",
        delay: float = 0.0,
        error: Exception | None = None,
        available: bool = True,
        timeout: float = 1.0,
        confidence: float = 0.75,
    ) -> None:
        self._name = name
        self._text = text
        self._tokens = tokens
        self._model = model
        self._delay = delay
        self._error = error
        self._available = available
        self._timeout = timeout
        self._confidence = confidence
        self.calls: list[dict[str, Any]] = []

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
        return self._available

    async def generate(
        self,
        prompt: str,
        context: list[dict[str, Any]],
        *,
        system: str = "",
        model: str | None = None,
        temperature: float = 0.4,
    ) -> Generation:
        self.calls.append(
            {
                "prompt": prompt,
                "context": list(context),
                "system": system,
                "temperature": temperature,
            }
        )
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return Generation(text=self._text, tokens=self._tokens, model=self._model)


@pytest.fixture
def make_capability():
    """Factory for FakeCapability instances."""
    return FakeCapability


@pytest.fixture
def make_candidate():
    """Factory for CandidateResponse records."""

    def _make(
        source: str,
        text: str,
        *,
        tokens: int = 10,
        confidence: float = 0.75,
        model: str = "gpt-4o",
    ) -> CandidateResponse:
        return CandidateResponse(
            source=source,
            text=text,
            tokens=tokens,
            latency_ms=5.0,
            confidence=confidence,
            model=model,
        )

    return _make
