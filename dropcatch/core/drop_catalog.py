"""
Drop Catalog
============

Provides convenient access to drop type definitions loaded from config.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from dropcatch.core.config_loader import DropTypeConfig, GameConfig, get_config


class DropType(str, Enum):
    """The four kinds of falling drop."""
    GOOD = "good"
    BAD = "bad"
    COIN = "coin"
    DANGER = "danger"


@dataclass
class DropKind:
    """
    Runtime representation of a drop type.

    Wraps DropTypeConfig with its enum member and a stable numeric id
    (the type's position in the config table, used in snapshots).
    """
    id: int
    type: DropType
    config: DropTypeConfig

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def points(self) -> int:
        return self.config.points

    @property
    def color(self) -> Tuple[int, int, int]:
        return self.config.color

    @property
    def is_penalty(self) -> bool:
        """True if catching this drop costs points."""
        return self.points < 0

    def __repr__(self) -> str:
        return f"DropKind({self.id}: {self.name} {self.points:+d})"


class DropCatalog:
    """
    Collection of all drop types.

    Indexable by numeric id, DropType or type name.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize catalog from game config.

        Args:
            config: GameConfig instance. If None, loads from default location.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._kinds: List[DropKind] = []
        self._by_type: Dict[DropType, DropKind] = {}

        for i, type_config in enumerate(config.drops.types):
            try:
                drop_type = DropType(type_config.name)
            except ValueError:
                raise ValueError(f"Unknown drop type in config: '{type_config.name}'") from None
            kind = DropKind(id=i, type=drop_type, config=type_config)
            self._kinds.append(kind)
            self._by_type[drop_type] = kind

        missing = [t.value for t in DropType if t not in self._by_type]
        if missing:
            raise ValueError(f"Config is missing drop types: {missing}")

    def __len__(self) -> int:
        return len(self._kinds)

    def __iter__(self) -> Iterator[DropKind]:
        return iter(self._kinds)

    def __getitem__(self, key) -> DropKind:
        if isinstance(key, int):
            return self._kinds[key]
        return self._by_type[DropType(key)]

    def points_for(self, drop_type: DropType) -> int:
        """Score delta applied when a drop of this type is caught."""
        return self[drop_type].points

    def score_table(self) -> Dict[DropType, int]:
        """The full type -> points mapping."""
        return {kind.type: kind.points for kind in self._kinds}


# Cached catalog instance
_catalog: Optional[DropCatalog] = None
_catalog_config: Optional[GameConfig] = None


def get_catalog(config: Optional[GameConfig] = None) -> DropCatalog:
    """
    Get the drop catalog, creating if necessary.

    Args:
        config: GameConfig to use. If different from cached, creates new catalog.

    Returns:
        DropCatalog instance.
    """
    global _catalog, _catalog_config

    if config is None:
        config = get_config()

    if _catalog is None or _catalog_config is not config:
        _catalog = DropCatalog(config)
        _catalog_config = config

    return _catalog
