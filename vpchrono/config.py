"""
Application configuration loaded from environment variables.
Uses pydantic-settings so every value can be overridden via a .env file.

Settings are built on first call to `get_settings`, not at import, so an
invalid value surfaces as a ValidationError the CLI can report cleanly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    # ── AWS ──────────────────────────────────────────────────────────────────
    # Region used when none is given on the command line
    aws_region: str = "us-east-1"
    # Named profile from ~/.aws/config; leave blank to skip the profile source
    aws_profile: str = ""
    # Leave blank to use the default credential chain (IAM role, env vars, …)
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_session_token: str = ""

    # ── Logging ──────────────────────────────────────────────────────────────
    # Logs go to stderr; results go to stdout
    log_level: LogLevel = "WARNING"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    # ── Helpers ───────────────────────────────────────────────────────────────
    def has_static_keys(self) -> bool:
        """True when both halves of an access key pair are configured."""
        return bool(self.aws_access_key_id and self.aws_secret_access_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide Settings instance, loading it on first use."""
    return Settings()
