"""TextGenerationCapability protocol: the interface for all generation backends."""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass
class Generation:
    """Raw output of one backend call."""

    text: str
    tokens: int
    model: str


@runtime_checkable
class TextGenerationCapability(Protocol):
    """Protocol that every generation backend must satisfy."""

    @property
    def name(self) -> str:
        """Unique source tag (e.g. 'openai', 'anthropic')."""
        ...

    @property
    def model(self) -> str:
        """Model id sent to the backend by default."""
        ...

    @property
    def timeout(self) -> float:
        """Seconds before a call to this backend is abandoned."""
        ...

    @property
    def confidence(self) -> float:
        """Confidence assigned to every answer from this backend."""
        ...

    @property
    def available(self) -> bool:
        """False when the backend cannot be called (e.g. missing credentials)."""
        ...

    async def generate(
        self,
        prompt: str,
        context: list[dict[str, Any]],
        *,
        system: str = "",
        model: str | None = None,
        temperature: float = 0.4,
    ) -> Generation:
        """Produce text for *prompt* given prior *context* turns."""
        ...
