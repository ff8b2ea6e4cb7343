"""Supported game types and query protocols.

The catalog ships as package data (``data/games.json``) and is loaded once.
"""

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

PROTOCOL_PREFIX = "protocol-"


@dataclass(frozen=True)
class Game:
    """A queryable game type."""

    type: str
    name: str
    release_year: int
    protocol: str = ""

    @property
    def title(self) -> str:
        return f"{self.name} ({self.release_year})"


@dataclass(frozen=True)
class GameCatalog:
    """Game types and protocols supported by the server query library."""

    version: str
    games: Dict[str, Game] = field(default_factory=dict)
    protocols: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: dict) -> "GameCatalog":
        """Build a catalog from its JSON representation.

        Args:
            raw: Parsed catalog document.

        Returns:
            GameCatalog: Parsed catalog.

        Raises:
            ValueError: If the document is malformed.
        """
        if not isinstance(raw, dict):
            raise ValueError("Catalog root must be an object")

        games_raw = raw.get("games", {})
        protocols = raw.get("protocols", [])
        if not isinstance(games_raw, dict):
            raise ValueError("Catalog games must be an object")
        if not isinstance(protocols, list) or not all(isinstance(p, str) for p in protocols):
            raise ValueError("Catalog protocols must be a list of strings")

        games: Dict[str, Game] = {}
        for game_type, entry in games_raw.items():
            try:
                games[game_type] = Game(
                    type=game_type,
                    name=str(entry["name"]),
                    release_year=int(entry["release_year"]),
                    protocol=str(entry.get("protocol", "")),
                )
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"Invalid catalog entry '{game_type}': {e}") from e

        return cls(version=str(raw.get("version") or "0"), games=games, protocols=list(protocols))

    def select_options(self) -> dict:
        """Render the catalog as a JSON-schema style select list.

        Game types come first, titled ``"<name> (<release_year>)"``, followed by
        protocols as ``"protocol-<id>"`` used both as value and title.

        Returns:
            dict: ``{"enum": [...], "options": {"enum_titles": [...]}}``
        """
        protocol_ids = [f"{PROTOCOL_PREFIX}{protocol}" for protocol in self.protocols]
        game_types = list(self.games)
        game_titles = [game.title for game in self.games.values()]

        return {
            "enum": game_types + protocol_ids,
            "options": {"enum_titles": game_titles + protocol_ids},
        }


def load_catalog(path: Optional[Path] = None) -> GameCatalog:
    """Load a catalog from ``path`` or from the bundled data file."""
    if path is None:
        text = resources.files("game_catalog").joinpath("data/games.json").read_text("utf-8")
    else:
        text = Path(path).read_text("utf-8")

    catalog = GameCatalog.from_dict(json.loads(text))
    logger.debug(
        f"Loaded game catalog v{catalog.version}: "
        f"{len(catalog.games)} games, {len(catalog.protocols)} protocols"
    )
    return catalog


@lru_cache
def get_catalog() -> GameCatalog:
    """Get the bundled catalog (loaded once)."""
    return load_catalog()
