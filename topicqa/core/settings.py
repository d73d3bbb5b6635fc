from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Reference data. The file name doubles as configuration: {topic}.{language}.txt
    data_file_path: str = Field(
        default="arepas_reina_pepiada.spanish.txt",
        validation_alias=AliasChoices("DATA_FILE_PATH", "data_file_path"),
        description="Path to the reference text file injected into answer prompts.",
    )

    # Inference backend (Ollama)
    ollama_base_url: str = Field(
        default="http://localhost:11434/",
        validation_alias=AliasChoices("OLLAMA_BASE_URL", "ollama_base_url"),
        description="Base URL of the Ollama server.",
    )
    ollama_model: str = Field(
        default="deepseek-r1:8b",
        validation_alias=AliasChoices("OLLAMA_MODEL", "ollama_model"),
        description="Model identifier passed to /api/generate.",
    )
    ollama_timeout_seconds: float = Field(
        default=120.0,
        ge=1.0,
        validation_alias=AliasChoices("OLLAMA_TIMEOUT_SECONDS", "ollama_timeout_seconds"),
        description="Timeout for a single generation request (seconds).",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
