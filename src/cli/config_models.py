"""Pydantic configuration models for moodlog."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

VALID_LLM_PROVIDERS = {"local", "auto", "claude", "openai", "groq", "together", "huggingface", "cohere"}
VALID_STORE_BACKENDS = {"sqlite", "markdown"}


class LLMConfig(BaseModel):
    """Mood-scoring LLM configuration. "local" = keyword heuristic only."""

    provider: str = "local"
    model: Optional[str] = None  # None = use provider default
    api_key: Optional[str] = None
    max_tokens: int = 200
    timeout: float = 15.0

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        if v not in VALID_LLM_PROVIDERS:
            raise ValueError(f"Invalid LLM provider: {v}. Must be one of {VALID_LLM_PROVIDERS}")
        return v


class StorageConfig(BaseModel):
    """Entry store selection."""

    backend: str = "sqlite"
    ready_timeout: float = 10.0

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        if v not in VALID_STORE_BACKENDS:
            raise ValueError(f"Invalid storage backend: {v}. Must be one of {VALID_STORE_BACKENDS}")
        return v


class PathsConfig(BaseModel):
    """File paths configuration."""

    data_dir: Path = Path("~/moodlog")
    entries_db: Optional[Path] = None
    users_db: Optional[Path] = None
    markdown_dir: Optional[Path] = None
    session_file: Optional[Path] = None
    log_file: Optional[Path] = None

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ and derive unset paths from data_dir."""
        self.data_dir = self.data_dir.expanduser()
        self.entries_db = (self.entries_db or self.data_dir / "entries.db").expanduser()
        self.users_db = (self.users_db or self.data_dir / "users.db").expanduser()
        self.markdown_dir = (self.markdown_dir or self.data_dir / "journal").expanduser()
        self.session_file = (self.session_file or self.data_dir / "session.json").expanduser()
        if self.log_file:
            self.log_file = self.log_file.expanduser()
        return self


class RetryConfig(BaseModel):
    """Retry/backoff configuration for remote scoring."""

    max_attempts: int = Field(default=2, ge=1, le=10)
    min_wait: float = 1.0
    max_wait: float = 8.0


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    json_mode: bool = Field(default=False, alias="json")

    model_config = {"populate_by_name": True}

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class StatsConfig(BaseModel):
    """Statistics display defaults."""

    months_back: int = Field(default=12, ge=1, le=120)


class MoodlogConfig(BaseModel):
    """Main configuration model."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    stats: StatsConfig = Field(default_factory=StatsConfig)

    @model_validator(mode="after")
    def expand_env_vars(self):
        """Expand ${VAR} patterns in API keys."""
        if self.llm.api_key:
            key = self.llm.api_key
            if key.startswith("${") and key.endswith("}"):
                env_var = key[2:-1]
                self.llm.api_key = os.getenv(env_var, "") or None
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "MoodlogConfig":
        """Create config from dict."""
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        """Convert to plain dict (logging.json keeps its YAML name)."""
        return self.model_dump(mode="python", by_alias=True)
