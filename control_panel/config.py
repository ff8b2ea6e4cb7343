"""Configuration management for the control panel."""

from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from security.config import DEFAULT_SECRET, SecurityConfig
from watcher.config import WatcherConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application
    app_name: str = "GSW Control Panel"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Security (empty string disables the web UI and the protected API)
    secret: str = DEFAULT_SECRET

    # Debug logging and pretty-printed JSON
    dbg: bool = False

    # Paths
    public_path: Path = Path("./public")
    watcher_config_path: Path = Path("./config/default.config.json")

    @field_validator("dbg", mode="before")
    @classmethod
    def parse_dbg(cls, value: Any) -> bool:
        """Treat DBG as a number: any non-zero value enables debug."""
        if isinstance(value, bool):
            return value
        try:
            number = float(str(value).strip() or 0)
        except ValueError:
            return False
        # NaN is falsy
        return number == number and number != 0

    @property
    def security(self) -> SecurityConfig:
        """Get the security configuration for token validation."""
        return SecurityConfig(secret=self.secret)

    @property
    def watcher(self) -> WatcherConfig:
        """Get the watcher configuration."""
        return WatcherConfig(config_path=self.watcher_config_path)


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings instance (read once)."""
    return Settings()
