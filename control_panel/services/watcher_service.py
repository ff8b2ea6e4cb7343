"""Watcher control service logic."""

import asyncio
import logging
from typing import Any, List, Optional, Protocol

logger = logging.getLogger(__name__)


class WatcherControl(Protocol):
    """Operations the control panel needs from a watcher."""

    async def start(self) -> None: ...

    async def restart(self, scope: Optional[str] = None) -> None: ...

    async def read_config(self) -> List[Any]: ...

    async def update_config(self, entries: List[Any]) -> None: ...


class WatcherService:
    """Proxy for reading/replacing watcher config and restarting the watcher.

    Every call round-trips to the watcher; errors propagate to the caller.
    """

    def __init__(self, watcher: WatcherControl):
        """Initialize watcher service.

        Args:
            watcher: Watcher to control.
        """
        self.watcher = watcher
        self._apply_lock = asyncio.Lock()

    async def read_config(self) -> List[Any]:
        """Get the current configuration list from the watcher's store."""
        return await self.watcher.read_config()

    async def apply_config(self, entries: List[Any]) -> None:
        """Replace the configuration and restart the watcher.

        The write and the restart run as one unit: a second caller waits until
        the first restart has completed before writing its own configuration.

        Args:
            entries: New configuration list.
        """
        async with self._apply_lock:
            await self.watcher.update_config(entries)
            logger.info(f"Configuration updated ({len(entries)} entries), restarting watcher")
            await self.watcher.restart()

    async def flush(self, scope: str) -> None:
        """Flush one scope of watcher state.

        Args:
            scope: Flush scope (servers, discord, telegram, slack).
        """
        await self.watcher.restart(scope)
        logger.info(f"Flushed watcher scope: {scope}")
