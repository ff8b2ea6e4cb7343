"""Persisted game server configuration.

The store is the single source of truth for the watcher's configuration: a
JSON array of opaque server records kept in one file. Nothing is cached; every
read and write goes to disk.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, List

logger = logging.getLogger(__name__)


class ConfigStoreError(Exception):
    """Raised when the persisted configuration cannot be read or written."""


class ConfigStore:
    """File-backed store for the watcher configuration list."""

    def __init__(self, path: Path):
        """Initialize the store.

        Args:
            path: Location of the JSON configuration file.
        """
        self.path = Path(path)

    async def read_config(self) -> List[Any]:
        """Read the full configuration list.

        Returns:
            list: Configuration records, or an empty list if nothing is stored yet.

        Raises:
            ConfigStoreError: If the file is unreadable or not a JSON array.
        """
        return await asyncio.to_thread(self._read)

    async def update_config(self, entries: List[Any]) -> None:
        """Replace the stored configuration list.

        Args:
            entries: New configuration records.

        Raises:
            ConfigStoreError: If the entries are not a list or cannot be written.
        """
        if not isinstance(entries, list):
            raise ConfigStoreError("Configuration must be a JSON array")
        await asyncio.to_thread(self._write, entries)
        logger.info(f"Configuration saved: {len(entries)} entries -> {self.path}")

    def _read(self) -> List[Any]:
        if not self.path.exists():
            logger.debug(f"Config file does not exist yet: {self.path}")
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigStoreError(f"Invalid JSON in {self.path}: {e}") from e
        except OSError as e:
            raise ConfigStoreError(f"Failed to read {self.path}: {e}") from e

        if not isinstance(data, list):
            raise ConfigStoreError(f"Config root must be a JSON array: {self.path}")
        return data

    def _write(self, entries: List[Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(entries, f, indent=2, ensure_ascii=False)
                os.replace(tmp_path, self.path)
            except BaseException:
                os.unlink(tmp_path)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise ConfigStoreError(f"Failed to write {self.path}: {e}") from e
