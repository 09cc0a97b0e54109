"""
SassWatch Configuration Module.

Centralizes all configuration settings using Pydantic Settings.
Requires Python 3.11+.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file into os.environ at module import time
# This ensures nested BaseSettings classes can read the values
load_dotenv()


class FailurePolicy(str, Enum):
    """What to do when a single source file fails to compile."""

    FAIL_FAST = "fail_fast"
    CONTINUE = "continue"


class BuildSettings(BaseSettings):
    """Source tree and batch build settings."""

    model_config = SettingsConfigDict(env_prefix="BUILD_")

    root_dir: Path = Field(default=Path("."), description="Directory holding styles/ and scripts/")
    scripts_enabled: bool = Field(default=True, description="Compile .js6 sources as well")
    failure_policy: FailurePolicy = Field(default=FailurePolicy.FAIL_FAST)


class ScriptSettings(BaseSettings):
    """External script compiler settings."""

    model_config = SettingsConfigDict(env_prefix="SCRIPT_")

    compiler_command: str = Field(default="traceur", description="Executable invoked for .js6 files")
    install_hint: str = Field(default="npm install -g traceur")

    @field_validator("compiler_command")
    @classmethod
    def validate_command(cls, v: str) -> str:
        """Reject an empty compiler command."""
        if not v.strip():
            raise ValueError("compiler_command must not be empty")
        return v.strip()


class WatcherSettings(BaseSettings):
    """File watcher configuration settings."""

    model_config = SettingsConfigDict(env_prefix="WATCHER_")

    debounce_delay_ms: int = Field(default=0, ge=0, le=5000, description="0 disables debouncing")
    failure_policy: FailurePolicy = Field(default=FailurePolicy.FAIL_FAST)


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO")
    format: str = Field(default="console")  # "json" or "console"


class Settings(BaseSettings):
    """Main application settings aggregating all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="SassWatch")
    app_version: str = Field(default="0.1.0")

    # Sub-settings
    build: BuildSettings = Field(default_factory=BuildSettings)
    script: ScriptSettings = Field(default_factory=ScriptSettings)
    watcher: WatcherSettings = Field(default_factory=WatcherSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns singleton instance of Settings for performance.
    """
    return Settings()
