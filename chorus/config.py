"""Application settings loaded from environment variables."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_file() -> str | None:
    if os.getenv("PYTEST_CURRENT_TEST"):
        return None
    return ".env"


class Settings(BaseSettings):
    """Chorus configuration. All values come from environment variables."""

    # Providers: a provider is enabled when its API key is set
    openai_api_key: str = Field(default="")
    openai_model: str = Field(default="gpt-4o")
    anthropic_api_key: str = Field(default="")
    anthropic_model: str = Field(default="sonnet")
    google_ai_api_key: str = Field(default="")
    gemini_model: str = Field(default="gemini-1.5-pro")
    gemini_api_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/models"
    )

    # Comma-separated provider order; also the tie-break order during synthesis
    providers: str = Field(default="openai,anthropic,google")

    # Fan-out
    capability_timeout_seconds: float = Field(default=30.0)
    capability_confidence: float = Field(default=0.75)
    max_output_tokens: int = Field(default=2000)

    # Input limits
    max_query_chars: int = Field(default=8000)

    # Conversation memory
    memory_max_turns: int = Field(default=40)
    memory_recall_limit: int = Field(default=5)

    # Knowledge index
    knowledge_max_results: int = Field(default=5)
    seed_knowledge: bool = Field(default=True)

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=_env_file(), env_file_encoding="utf-8")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        if os.getenv("PYTEST_CURRENT_TEST"):
            return (init_settings,)
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

    def get_provider_order(self) -> list[str]:
        """Parse PROVIDERS into an ordered list of provider names."""
        if not self.providers.strip():
            return []
        return [name.strip().lower() for name in self.providers.split(",") if name.strip()]

    def get_enabled_providers(self) -> list[str]:
        """Providers from PROVIDERS that also have an API key configured."""
        keys = {
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
            "google": self.google_ai_api_key,
        }
        return [name for name in self.get_provider_order() if keys.get(name)]


settings = Settings()
