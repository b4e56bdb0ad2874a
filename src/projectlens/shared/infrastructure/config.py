"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (PROJECTLENS_*) and .env file.
"""

from typing import List

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="PROJECTLENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="projectlens-core", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/production)")
    log_level: str = Field(default="INFO", description="Logging level")

    # Logging / Privacy
    log_redaction_enabled: bool = Field(default=True, description="Redact home directories in logs")

    # Worker pool
    concurrency_limit: int = Field(default=8, ge=1, description="Maximum concurrent per-file workers")
    item_timeout: float = Field(default=30.0, gt=0, description="Per-file work timeout in seconds")

    # Content sampling
    max_sample_file_size: int = Field(
        default=1_048_576,
        description="Files larger than this (bytes) are recorded but never sampled",
    )
    shallow_sample_bytes: int = Field(default=8_192, ge=0, description="Sample size per file (shallow)")
    deep_sample_bytes: int = Field(default=32_768, ge=0, description="Sample size per file (deep)")

    # Pattern analysis
    shallow_sample_files: int = Field(default=50, ge=0, description="Files analyzed for patterns (shallow)")
    deep_sample_files: int = Field(default=100, ge=0, description="Files analyzed for patterns (deep)")

    # Dependency analysis
    shallow_max_files_to_parse: int = Field(default=500, ge=0, description="Dependency parse cap (shallow)")
    deep_max_files_to_parse: int = Field(default=2_000, ge=0, description="Dependency parse cap (deep)")

    # Traversal
    default_ignore_patterns: List[str] = Field(
        default_factory=lambda: [".git/", "node_modules/"],
        description="Ignore patterns applied before caller patterns",
    )

    # Heuristics overrides (YAML)
    heuristics_file: str | None = Field(default=None, description="YAML file overriding heuristic weights")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env.lower() == "production"

    @model_validator(mode="after")
    def _validate_sample_limits(self) -> "Settings":
        """Fail fast: deep mode must never scan less than shallow mode."""
        if self.deep_sample_bytes < self.shallow_sample_bytes:
            raise ValueError("deep_sample_bytes must be >= shallow_sample_bytes")
        if self.deep_sample_files < self.shallow_sample_files:
            raise ValueError("deep_sample_files must be >= shallow_sample_files")
        if self.deep_max_files_to_parse < self.shallow_max_files_to_parse:
            raise ValueError("deep_max_files_to_parse must be >= shallow_max_files_to_parse")
        return self


# Global settings instance
settings = Settings()
