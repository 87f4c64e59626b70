from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AgentModelSettings(BaseSettings):
    """Settings for an individual agent's model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="allow"
    )

    model_name: Optional[str] = None
    api_key: Optional[str] = None
    base_url: Optional[str] = None


class RoutingReasonerSettings(AgentModelSettings):
    """Settings for the reasoning model that picks a candidate on every step."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
        env_prefix="ROUTING_REASONER_",
    )


class Settings(BaseSettings):
    """Application settings managed by pydantic-settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="allow"
    )

    # LLM Gateway settings (OpenAI-compatible API) - defaults for all models
    llm_api_key: Optional[str] = None
    llm_base_url: str = "http://0.0.0.0:8000/v1"

    # Default model settings
    default_temperature: float = 0.5

    # Router behaviour
    router_debug: bool = False
    history_limit: int = 10
    args_preview_length: int = 100

    # Reasoning model settings (loaded from env with ROUTING_REASONER_ prefix)
    routing_reasoner: RoutingReasonerSettings = RoutingReasonerSettings()

    def get_agent_api_key(self, agent_settings: AgentModelSettings) -> str | None:
        """Get API key for an agent, falling back to default if not set."""
        return agent_settings.api_key or self.llm_api_key

    def get_agent_base_url(self, agent_settings: AgentModelSettings) -> str:
        """Get base URL for an agent, falling back to default if not set."""
        return agent_settings.base_url or self.llm_base_url


# Singleton instance
settings = Settings()
