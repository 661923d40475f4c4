"""Model name resolution for the configured providers."""

import logging

logger = logging.getLogger(__name__)

MODEL_MAP: dict[str, str] = {
    "haiku": "claude-haiku-4-5-20251001",
    "sonnet": "claude-sonnet-4-5-20250929",
    "opus": "claude-opus-4-1-20250805",
    "gpt-4o": "gpt-4o",
    "gpt-4o-mini": "gpt-4o-mini",
    "gpt-4-turbo": "gpt-4-turbo",
    "gemini-pro": "gemini-1.5-pro",
    "gemini-flash": "gemini-2.0-flash",
}

# Reverse lookup: full model string → friendly name
FRIENDLY_NAMES: dict[str, str] = {v: k for k, v in MODEL_MAP.items() if k != v}

DEFAULT_MODELS: dict[str, str] = {
    "openai": MODEL_MAP["gpt-4o"],
    "anthropic": MODEL_MAP["sonnet"],
    "google": MODEL_MAP["gemini-pro"],
}


def resolve(name_or_id: str) -> str:
    """Resolve a friendly name to a full model ID. Unknown ids pass through."""
    return MODEL_MAP.get(name_or_id, name_or_id)


def friendly(model_id: str) -> str:
    """Return the friendly name for a model ID, or the ID itself."""
    return FRIENDLY_NAMES.get(model_id, model_id)


def model_for(provider: str, configured: str | None = None) -> str:
    """Pick the model for *provider*, preferring the configured value."""
    if configured:
        return resolve(configured)
    model = DEFAULT_MODELS.get(provider)
    if model is None:
        logger.warning("No default model for provider %s", provider)
        return ""
    return model
