"""Configuration management for the watcher.

Loads configuration from environment variables with validation and defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class WatcherConfig:
    """Configuration for the watcher process."""

    config_path: Path = Path("./config/default.config.json")

    @classmethod
    def from_env(cls) -> "WatcherConfig":
        """Load configuration from environment variables.

        Returns:
            WatcherConfig: Configuration instance with values from environment.
        """
        return cls(
            config_path=Path(os.getenv("WATCHER_CONFIG_PATH", "./config/default.config.json")),
        )

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If configuration values are invalid.
        """
        if self.config_path.exists() and not self.config_path.is_file():
            raise ValueError(f"Watcher config path is not a file: {self.config_path}")
        if self.config_path.suffix != ".json":
            raise ValueError(f"Watcher config must be a .json file: {self.config_path}")
