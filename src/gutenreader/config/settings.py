"""Pydantic settings for Gutenreader configuration."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gutenreader.exceptions import ConfigError


def get_config_dir() -> Path:
    """Get the configuration directory, creating it if needed."""
    config_dir = Path.home() / ".gutenreader"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.yaml"


def _load_yaml_config() -> dict[str, Any]:
    """Load configuration from YAML file if it exists.

    Returns:
        Dictionary of configuration values, or empty dict if file doesn't exist.

    Raises:
        ConfigError: If the file holds something other than a mapping.
    """
    config_path = get_config_path()
    if not config_path.exists():
        return {}

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError):
        # Silently ignore malformed or unreadable config
        return {}

    if not isinstance(data, dict):
        raise ConfigError(
            f"Invalid config file: {config_path}",
            details=f"Expected a mapping at the top level, got {type(data).__name__}",
        )
    return data


class CatalogSettings(BaseModel):
    """Settings for the Gutendex catalog."""

    base_url: str = "https://gutendex.com/books/"
    timeout: float = 30.0


class ReaderSettings(BaseModel):
    """Settings for the reader view."""

    default_chapter_chars: int = 10_000
    synopsis_excerpt_chars: int = 5_000


class CacheSettings(BaseModel):
    """Settings for the downloaded-book cache."""

    enabled: bool = True
    directory: Path = Field(default_factory=lambda: Path.home() / ".cache" / "gutenreader")


class LLMSettings(BaseModel):
    """Settings for LLM integration."""

    default_model: str = "gemini/gemini-2.5-flash"
    temperature: float = 0.7
    max_tokens: int = 1024


class Settings(BaseSettings):
    """Main settings model for Gutenreader."""

    model_config = SettingsConfigDict(
        env_prefix="GUTENREADER_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    reader: ReaderSettings = Field(default_factory=ReaderSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)

    # API keys (can be set via environment variables or config file)
    api_key: str | None = None
    gemini_api_key: str | None = None
    anthropic_api_key: str | None = None
    openai_api_key: str | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # YAML values arrive as init kwargs; environment must still win
        return env_settings, init_settings, dotenv_settings, file_secret_settings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded from (in order of priority, highest first):
    1. Environment variables (GUTENREADER_* prefix)
    2. YAML config file (~/.gutenreader/config.yaml)
    3. Default values
    """
    yaml_config = _load_yaml_config()
    return Settings(**yaml_config)
