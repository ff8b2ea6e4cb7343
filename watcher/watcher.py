"""Watcher lifecycle and scoped state.

The watcher owns the persisted game server configuration and keeps one cache
per notification scope (server query results, Discord/Telegram/Slack message
state). The control panel drives it through four operations: ``start``,
``restart(scope)``, ``read_config`` and ``update_config``.
"""

import asyncio
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from watcher.config import WatcherConfig
from watcher.config_store import ConfigStore

logger = logging.getLogger(__name__)


class FlushScope(str, Enum):
    """Subsets of watcher state that can be flushed independently."""

    SERVERS = "servers"
    DISCORD = "discord"
    TELEGRAM = "telegram"
    SLACK = "slack"

    @classmethod
    def values(cls) -> List[str]:
        return [scope.value for scope in cls]


class Watcher:
    """Game server watcher.

    Features:
    - Loads server configuration from the config store on start
    - Per-scope caches that can be flushed without a full restart
    - Full restart reloads configuration and drops every cache
    - Restarts are serialized so a flush never overlaps a reload

    The server query and notifier loops run outside the control panel. They
    keep their state through ``remember``/``recall``, which is exactly what a
    scoped ``restart`` drops.
    """

    def __init__(self, config: Optional[WatcherConfig] = None, store: Optional[ConfigStore] = None):
        """Initialize the watcher.

        Args:
            config: Watcher configuration (loaded from env if not provided).
            store: Config store (built from ``config.config_path`` if not provided).
        """
        if config is None:
            config = WatcherConfig.from_env()

        self.config = config
        self.store = store or ConfigStore(config.config_path)

        self.servers: List[Any] = []
        self.running = False
        self.started_at: Optional[datetime] = None
        self.restart_count = 0

        self._cache: Dict[FlushScope, Dict[str, Any]] = {scope: {} for scope in FlushScope}
        self._restart_lock = asyncio.Lock()

    async def start(self) -> None:
        """Load configuration and begin watching."""
        self.servers = await self.store.read_config()
        self.running = True
        self.started_at = datetime.now(timezone.utc)
        logger.info(f"Watcher started with {len(self.servers)} server(s)")

    async def stop(self) -> None:
        """Stop watching and drop every cache."""
        for scope in FlushScope:
            self._cache[scope].clear()
        self.running = False
        logger.info("Watcher stopped")

    async def restart(self, scope: Optional[Union[FlushScope, str]] = None) -> None:
        """Restart the watcher or flush one scope.

        Args:
            scope: Scope to flush. ``None`` performs a full restart, which
                reloads configuration from the store.

        Raises:
            ValueError: If ``scope`` is not a known flush scope.
        """
        target = FlushScope(scope) if scope is not None else None

        async with self._restart_lock:
            if target is None:
                logger.info("Restarting watcher...")
                await self.stop()
                await self.start()
                self.restart_count += 1
            else:
                dropped = len(self._cache[target])
                self._cache[target].clear()
                logger.info(f"Flushed {target.value} data ({dropped} cached entries)")

    async def read_config(self) -> List[Any]:
        """Read the persisted configuration list."""
        return await self.store.read_config()

    async def update_config(self, entries: List[Any]) -> None:
        """Replace the persisted configuration list.

        The running watcher keeps its current servers until the next restart.
        """
        await self.store.update_config(entries)

    def remember(self, scope: Union[FlushScope, str], key: str, value: Any) -> None:
        """Cache a value under a scope."""
        self._cache[FlushScope(scope)][key] = value

    def recall(self, scope: Union[FlushScope, str], key: str, default: Any = None) -> Any:
        """Return a cached value, or ``default`` if absent."""
        return self._cache[FlushScope(scope)].get(key, default)
