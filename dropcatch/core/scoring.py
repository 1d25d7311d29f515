"""
Scoring System
==============

Applies the per-type score deltas from the drop catalog.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Optional

from dropcatch.core.config_loader import GameConfig, get_config
from dropcatch.core.drop_catalog import DropCatalog, DropType, get_catalog


@dataclass
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    drop_type: DropType
    score_after: int
    drop_uid: int = 0

    def __repr__(self) -> str:
        return f"ScoreEvent({self.drop_type.value} {self.points:+d} -> {self.score_after})"


class ScoreTracker:
    """Tracks the session score and per-type catch counts."""

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._catalog: DropCatalog = get_catalog(config)
        self._score: int = 0
        self._caught: Counter = Counter()
        self._missed: int = 0

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def catches(self) -> int:
        """Total number of drops caught."""
        return sum(self._caught.values())

    @property
    def caught_by_type(self) -> Dict[DropType, int]:
        return {t: self._caught.get(t, 0) for t in DropType}

    @property
    def missed(self) -> int:
        """Drops that reached the bottom uncaught."""
        return self._missed

    def get_points(self, drop_type: DropType) -> int:
        """Score delta for catching one drop of this type."""
        return self._catalog.points_for(drop_type)

    def apply_catch(self, drop_type: DropType, drop_uid: int = 0) -> ScoreEvent:
        """
        Apply the score delta for a caught drop and return the event.

        Args:
            drop_type: Type of the caught drop.
            drop_uid: Id of the caught drop, recorded on the event.
        """
        points = self.get_points(drop_type)
        self._score += points
        self._caught[drop_type] += 1
        return ScoreEvent(
            points=points,
            drop_type=drop_type,
            score_after=self._score,
            drop_uid=drop_uid
        )

    def record_miss(self) -> None:
        self._missed += 1

    def reset(self) -> None:
        """Reset score and counters to zero."""
        self._score = 0
        self._caught.clear()
        self._missed = 0
