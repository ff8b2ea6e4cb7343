"""Catalog of game types and query protocols supported by the watcher."""

from game_catalog.catalog import Game, GameCatalog, get_catalog, load_catalog

__all__ = ["Game", "GameCatalog", "get_catalog", "load_catalog"]
