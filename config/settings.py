"""Pydantic Settings for Stoink configuration."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Discord
    discord_token: str
    chat_channel_id: int = 0
    send_greeting: bool = True

    # Ollama
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "mistral"
    ollama_timeout: float = Field(default=120.0, description="Seconds before a chat request is abandoned")
    chat_temperature: float = 0.0
    chat_max_tokens: int = Field(default=200, description="Output cap passed to Ollama as num_predict")

    # SQLite
    database_path: str = "watchlist.db"

    # Operational
    log_level: str = "INFO"
    idle_timeout_minutes: int = Field(default=10, description="Shut down after this long without channel traffic")


settings = Settings()  # type: ignore[call-arg]
