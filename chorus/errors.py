"""Pipeline error taxonomy.

Every error surfaced to a caller of ``Engine.handle`` is a ``ChorusError``
carrying a stable ``reason`` code. Single-capability failures are not
errors: they are recorded as ``CapabilityFailure`` metadata and only
surface through ``AllCapabilitiesFailedError`` when nothing succeeded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chorus.orchestrator import CapabilityFailure


class ChorusError(Exception):
    """Base class for request-level failures."""

    reason = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"reason": self.reason, "message": self.message}


class ConfigurationError(ChorusError):
    """No usable text-generation capability is configured."""

    reason = "configuration"


class InvalidInputError(ChorusError):
    """The query was empty or too long."""

    reason = "invalid_input"


class AllCapabilitiesFailedError(ChorusError):
    """Every configured capability failed or timed out."""

    reason = "all_capabilities_failed"

    def __init__(self, message: str, failures: list[CapabilityFailure]) -> None:
        super().__init__(message)
        self.failures = failures

    def to_dict(self) -> dict[str, str]:
        data = super().to_dict()
        data["failures"] = ", ".join(f"{f.source}:{f.reason}" for f in self.failures)
        return data


class KnowledgeNotFoundError(ChorusError):
    """A knowledge entry id does not exist."""

    reason = "knowledge_not_found"


class InvalidKnowledgeError(ChorusError):
    """A knowledge entry is missing its title or body."""

    reason = "invalid_knowledge"
