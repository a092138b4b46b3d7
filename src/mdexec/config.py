"""Configuration management for mdexec."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging_utils import configure_logging


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MDEXEC_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Input
    file_name: str = Field(default="README.md", description="Markdown file to parse")
    max_depth: int = Field(default=1, ge=0, description="Sub-directory levels searched when recursive")

    # Execution
    shell: str = Field(default="/bin/sh", description="POSIX shell used to run generated scripts")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: Literal["text", "rich"] = Field(default="text", description="Log format")


def get_settings() -> Settings:
    """Get application settings and configure logging from them."""

    settings = Settings()
    configure_logging(settings.log_level, profile=settings.log_format)
    return settings
