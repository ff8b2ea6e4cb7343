"""Game server watcher.

Owns the persisted server configuration and the per-scope caches that the
control panel can flush.
"""

from watcher.config import WatcherConfig
from watcher.config_store import ConfigStore, ConfigStoreError
from watcher.watcher import FlushScope, Watcher

__version__ = "1.0.0"
__all__ = ["ConfigStore", "ConfigStoreError", "FlushScope", "Watcher", "WatcherConfig"]
