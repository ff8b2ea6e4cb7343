"""GSW control panel.

FastAPI service that fronts the game server watcher: feature/version metadata,
configuration read/replace, scoped cache flushes and the supported game list,
all gated by self-certifying bearer tokens.
"""

__version__ = "1.0.0"
